"""Schema loading from YAML and JSON files."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from ._types import SchemaDict, SchemaError

logger = logging.getLogger(__name__)

_LONG_FORM_FIELDS = {"type", "required", "default", "nullable", "description"}


def load_schema(path: Union[str, Path]) -> SchemaDict:
    """
    Load a schema from a YAML or JSON file.

    Args:
        path: Path to the schema file

    Returns:
        Schema dictionary ready to pass to create_env

    Raises:
        SchemaError: If the schema cannot be loaded or parsed
    """
    path = Path(path)

    if not path.exists():
        raise SchemaError(f"Schema file not found: {path}")

    logger.debug(f"Loading schema from: {path}")

    if path.suffix.lower() in ('.yml', '.yaml'):
        schema = _load_yaml_schema(path)
    elif path.suffix.lower() == '.json':
        schema = _load_json_schema(path)
    else:
        raise SchemaError(f"Unsupported schema file format: {path.suffix}")

    return _check_schema_dict(schema, str(path))


def _load_yaml_schema(path: Path) -> Any:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SchemaError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise SchemaError(f"Error reading YAML file {path}: {e}") from e


def _load_json_schema(path: Path) -> Any:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise SchemaError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise SchemaError(f"Error reading JSON file {path}: {e}") from e


def _check_schema_dict(schema: Any, source: str) -> SchemaDict:
    """
    Check that a parsed schema file has the shape create_env expects.

    Only the file structure is checked here; field semantics (unknown type
    tags, missing values) are reported by validation itself.

    Args:
        schema: Parsed file contents
        source: Source file path for error messages

    Returns:
        The schema dictionary

    Raises:
        SchemaError: If the schema has the wrong shape
    """
    if not isinstance(schema, dict):
        raise SchemaError(f"Schema must be a dictionary, got {type(schema).__name__} in {source}")

    checked: Dict[str, Any] = {}

    for key, value in schema.items():
        if not isinstance(key, str):
            raise SchemaError(f"Schema keys must be strings, got {type(key).__name__} for key '{key}' in {source}")

        if isinstance(value, str):
            # Shorthand primitive
            checked[key] = value

        elif isinstance(value, list):
            # Shorthand enum
            if not value:
                raise SchemaError(f"Schema field '{key}' enum values cannot be empty in {source}")
            if not all(isinstance(item, str) for item in value):
                raise SchemaError(f"Schema field '{key}' enum values must be strings in {source}")
            checked[key] = value

        elif isinstance(value, dict):
            # Long form
            if 'type' not in value:
                raise SchemaError(f"Schema field '{key}' missing 'type' in {source}")
            if not isinstance(value['type'], str):
                raise SchemaError(f"Schema field '{key}' type must be a string in {source}")

            for field in value:
                if field not in _LONG_FORM_FIELDS:
                    logger.warning(f"Unknown schema field '{field}' for '{key}' in {source}")

            for bool_field in ('required', 'nullable'):
                if bool_field in value and not isinstance(value[bool_field], bool):
                    raise SchemaError(f"Schema field '{key}' {bool_field} must be boolean in {source}")

            if 'default' in value and not isinstance(value['default'], (str, int, float, bool, type(None))):
                raise SchemaError(f"Schema field '{key}' default must be a string, number, boolean or null in {source}")

            if 'description' in value and not isinstance(value['description'], str):
                raise SchemaError(f"Schema field '{key}' description must be a string in {source}")

            checked[key] = value

        else:
            raise SchemaError(f"Invalid schema value for '{key}' in {source}: {type(value).__name__}")

    logger.info(f"Successfully loaded schema with {len(checked)} fields from {source}")
    return checked
