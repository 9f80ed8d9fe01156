"""Type definitions and custom exceptions for safe-env-lite."""

from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple, Union
from typing_extensions import Literal, TypedDict

# Type aliases
PrimitiveType = Literal["string", "number", "boolean"]
PrimitiveValue = Union[str, int, float, bool, None]
EnvSource = Union[Mapping[str, str], Callable[[str], Optional[str]]]


class LongDef(TypedDict, total=False):
    """Long-form field descriptor."""

    type: Union[PrimitiveType, type]
    required: bool
    default: PrimitiveValue
    nullable: bool
    description: str


ShortDef = Union[PrimitiveType, type, Sequence[str]]
FieldSchema = Union[ShortDef, LongDef]
SchemaDict = Dict[str, FieldSchema]


class _Missing:
    """Marker for a long-form descriptor without a ``default`` key."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


# Normalized fields
class EnumField(NamedTuple):
    """Field restricted to a fixed set of string values."""

    values: Tuple[str, ...]
    required: bool = True


class PrimitiveField(NamedTuple):
    """Field coerced to a string, number or boolean."""

    type: Any
    required: bool = True
    default: Any = MISSING
    nullable: bool = False

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING


NormalizedField = Union[EnumField, PrimitiveField]


class Problem(NamedTuple):
    """A single field that failed validation."""

    key: str
    message: str
    value: Optional[str] = None

    def __str__(self) -> str:
        value_part = f' (value: "{self.value}")' if self.value is not None else ""
        return f"- {self.key}: {self.message}{value_part}"


# Custom exceptions
class EnvLiteError(Exception):
    """Base exception for all safe-env-lite errors."""
    pass


class SchemaError(EnvLiteError):
    """Raised when a schema file cannot be loaded or has the wrong shape."""
    pass


class EnvValidationError(EnvLiteError):
    """Raised when one or more environment variables fail validation."""

    HEADER = "Invalid environment configuration:"

    def __init__(self, problems: List[Problem]):
        self.problems = list(problems)
        lines = [self.HEADER] + [str(problem) for problem in self.problems]
        super().__init__("\n".join(lines))

    @property
    def errors(self) -> Dict[str, str]:
        """Problem messages keyed by variable name."""
        return {problem.key: problem.message for problem in self.problems}

    def __str__(self) -> str:
        return self.args[0]
