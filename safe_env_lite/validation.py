"""Environment variable validation and type casting."""

import re
import math
import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Union

from ._types import (
    MISSING, EnumField, EnvSource, EnvValidationError, FieldSchema,
    NormalizedField, PrimitiveField, Problem, SchemaDict
)
from .core import ResolvedEnv, read_raw

logger = logging.getLogger(__name__)

# Python types accepted in place of the string tags
_TYPE_TAGS = {str: "string", int: "number", float: "number", bool: "boolean"}

_TRUTHY = frozenset(("1", "true", "yes", "on"))
_FALSY = frozenset(("0", "false", "no", "off"))

_DECIMAL_PATTERN = re.compile(
    r"[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
)
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_PREFIXED_PATTERN = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")

# Characters JavaScript Number() trims: WhiteSpace and LineTerminator
_NUMBER_WHITESPACE = (
    "\t\n\v\f\r \xa0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def _type_tag(declared: Any) -> Any:
    if isinstance(declared, type):
        return _TYPE_TAGS.get(declared, declared)
    return declared


def _enum_value(value: Any) -> str:
    """Stringify an enum entry the way the schema author would write it in an env file."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


class _Invalid:
    """Coercion failure carrying the rejected raw value."""

    __slots__ = ("message", "raw")

    def __init__(self, message: str, raw: str):
        self.message = message
        self.raw = raw


def normalize_field(field_schema: FieldSchema) -> NormalizedField:
    """
    Convert a field declaration into its canonical form.

    Never raises: entries that make no sense surface later as coercion or
    presence problems.

    Args:
        field_schema: Type tag, list of allowed strings or long-form descriptor

    Returns:
        EnumField or PrimitiveField
    """
    if isinstance(field_schema, (list, tuple)):
        # Enum shorthand: ["development", "production"]
        return EnumField(values=tuple(_enum_value(value) for value in field_schema))

    if isinstance(field_schema, Mapping):
        # Long form: {"type": "number", "default": 3000}
        return PrimitiveField(
            type=_type_tag(field_schema.get("type")),
            required=field_schema.get("required") is True,
            default=field_schema.get("default", MISSING),
            nullable=field_schema.get("nullable") is True,
        )

    # Shorthand: "number" or int
    return PrimitiveField(type=_type_tag(field_schema))


def _parse_number(raw: str) -> Optional[Union[int, float]]:
    """
    Parse a numeric string.

    Accepts what a JavaScript ``Number()`` call accepts: surrounding
    whitespace, blank strings (zero), decimal and exponent notation,
    ``Infinity`` and unsigned hex/octal/binary literals.

    Returns:
        The parsed number, or None if ``raw`` is not numeric
    """
    text = raw.strip(_NUMBER_WHITESPACE)
    if not text:
        return 0

    if _PREFIXED_PATTERN.fullmatch(text):
        return int(text, 0)

    if not _DECIMAL_PATTERN.fullmatch(text):
        return None

    if _INTEGER_PATTERN.fullmatch(text):
        return int(text)

    if text.lstrip("+-") == "Infinity":
        return float("-inf") if text.startswith("-") else float("inf")

    return float(text)


def _coerce_value(raw: Optional[str], field: PrimitiveField) -> Any:
    """
    Coerce a raw string to the field's type.

    Args:
        raw: Raw value, or None when the variable is absent
        field: Normalized primitive field

    Returns:
        The coerced value, the default (or None) for an absent variable, or an
        _Invalid marker when the raw value cannot be converted
    """
    if raw is None:
        return None if not field.has_default else field.default

    if field.type == "string":
        if field.nullable and raw == "null":
            return None
        return raw

    if field.type == "number":
        number = _parse_number(raw)
        if number is None:
            return _Invalid("is not a valid number", raw)
        return number

    if field.type == "boolean":
        lowered = raw.lower()
        if lowered in _TRUTHY:
            return True
        if lowered in _FALSY:
            return False
        return _Invalid("is not a valid boolean", raw)

    # Unknown type tags pass the raw string through
    return raw


def _check_enum(key: str, raw: Optional[str], field: EnumField, problems: List[Problem]) -> Any:
    if raw is None:
        allowed = ", ".join(f'"{value}"' for value in field.values)
        problems.append(Problem(key, f"is missing (enum: allowed {allowed})"))
        return MISSING

    if raw not in field.values:
        problems.append(Problem(key, f"must be one of: {', '.join(field.values)}", raw))
        return MISSING

    return raw


def _check_primitive(key: str, raw: Optional[str], field: PrimitiveField, problems: List[Problem]) -> Any:
    coerced = _coerce_value(raw, field)
    if isinstance(coerced, _Invalid):
        problems.append(Problem(key, coerced.message, coerced.raw))
        return MISSING

    provided = raw is not None or field.has_default or field.nullable
    if not provided and field.required:
        problems.append(Problem(key, "is required but missing"))
        return MISSING

    return coerced


def create_env(schema: SchemaDict, source: Optional[EnvSource] = None) -> ResolvedEnv:
    """
    Validate environment variables against a schema.

    Every field is checked before anything is raised, so a single failure
    reports every misconfigured variable at once.

    Args:
        schema: Mapping of variable name to field declaration
        source: Mapping or callable supplying raw values (defaults to os.environ)

    Returns:
        Read-only mapping of every declared variable to its resolved value

    Raises:
        EnvValidationError: If any variable fails validation

    Example:
        >>> env = create_env({
        ...     "PORT": {"type": "number", "default": 3000},
        ...     "NODE_ENV": ["development", "test", "production"],
        ... }, {"NODE_ENV": "test"})
        >>> env.PORT, env.NODE_ENV
        (3000, 'test')
    """
    problems: List[Problem] = []
    result: Dict[str, Any] = {}

    for key, field_schema in schema.items():
        field = normalize_field(field_schema)
        raw = read_raw(source, key)
        logger.debug(f"Checking {key} ({type(field).__name__}, present={raw is not None})")

        if isinstance(field, EnumField):
            value = _check_enum(key, raw, field, problems)
        else:
            value = _check_primitive(key, raw, field, problems)

        if value is not MISSING:
            result[key] = value

    if problems:
        logger.warning(f"Environment validation failed with {len(problems)} problem(s)")
        raise EnvValidationError(problems)

    logger.info(f"Successfully validated {len(result)} environment variables")
    return ResolvedEnv(result)


validate_env = create_env
