"""
Safe Environment Lite

Declare the environment variables a program expects once, validate and
type-cast them at startup, and get back a read-only configuration object or
a single error listing every misconfigured variable.
"""

__version__ = "0.1.0"

from .core import ResolvedEnv
from .validation import create_env, validate_env, normalize_field
from .schema_loader import load_schema
from ._types import (
    EnumField, PrimitiveField, Problem,
    EnvLiteError, EnvValidationError, SchemaError
)

__all__ = [
    "create_env",
    "validate_env",
    "normalize_field",
    "load_schema",
    "ResolvedEnv",
    "EnumField",
    "PrimitiveField",
    "Problem",
    "EnvLiteError",
    "EnvValidationError",
    "SchemaError",
]
