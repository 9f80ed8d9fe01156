"""Command-line interface for safe-env-lite."""

import argparse
import json
import logging
import sys
from typing import Any, Mapping

from rich.console import Console
from rich.table import Table

from .validation import create_env, normalize_field
from .schema_loader import load_schema
from ._types import EnumField, EnvValidationError, SchemaError

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, quiet: bool = False):
    """Setup logging configuration."""
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def _display(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def print_table(data: Mapping[str, Any], title: str = "Environment Variables"):
    """Print data in a table format."""
    console = Console()
    table = Table(title=title)
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    for key in data:
        table.add_row(key, _display(data[key]))

    console.print(table)


def print_json(data: Mapping[str, Any]):
    """Print data in JSON format."""
    print(json.dumps({key: data[key] for key in data}, indent=2, default=str))


def print_env(data: Mapping[str, Any]):
    """Print data in environment file format."""
    for key in data:
        value = data[key]
        if value is None:
            print(f"{key}=")
            continue
        value = _display(value)
        if '"' in value or '\n' in value:
            value = f"'{value}'"
        else:
            value = f'"{value}"'
        print(f"{key}={value}")


def cmd_validate(args):
    """Handle the validate subcommand."""
    try:
        schema = load_schema(args.schema)
        env = create_env(schema)

        print("✓ Environment validation passed")
        print(f"  Validated {len(env)} variables against schema")

        if args.format == "table":
            print_table(env, "Validated Environment Variables")
        elif args.format == "json":
            print_json(env)
        else:  # env format
            print_env(env)

        return 0

    except EnvValidationError as e:
        print(f"✗ {e.HEADER}")
        for problem in e.problems:
            print(f"  {problem}")
        return 2
    except SchemaError as e:
        print(f"✗ Schema error: {e}")
        return 4


def cmd_describe(args):
    """Handle the describe subcommand."""
    try:
        schema = load_schema(args.schema)
    except SchemaError as e:
        print(f"✗ Schema error: {e}")
        return 4

    table = Table(title=f"Schema: {args.schema}")
    table.add_column("Variable", style="cyan", no_wrap=True)
    table.add_column("Type")
    table.add_column("Required")
    table.add_column("Default")
    table.add_column("Description", style="dim")

    for key, field_schema in schema.items():
        field = normalize_field(field_schema)
        description = field_schema.get("description", "") if isinstance(field_schema, dict) else ""

        if isinstance(field, EnumField):
            type_label = " | ".join(field.values)
            default = ""
        else:
            type_label = str(field.type)
            if field.nullable:
                type_label += " (nullable)"
            default = _display(field.default) if field.has_default else ""

        table.add_row(key, type_label, "yes" if field.required else "no", default, description)

    Console().print(table)
    return 0


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="safe-env",
        description="Validate and type-cast environment variables against a schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  safe-env validate --schema schema.yaml --format table
  safe-env describe --schema schema.json
        """
    )

    # Global options
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress all output except errors"
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Validate command
    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate the current environment against a schema"
    )
    validate_parser.add_argument(
        "--schema", "-s",
        required=True,
        help="Schema file (YAML or JSON)"
    )
    validate_parser.add_argument(
        "--format",
        choices=["table", "json", "env"],
        default="table",
        help="Output format (default: table)"
    )

    # Describe command
    describe_parser = subparsers.add_parser(
        "describe",
        help="List the variables a schema declares"
    )
    describe_parser.add_argument(
        "--schema", "-s",
        required=True,
        help="Schema file (YAML or JSON)"
    )

    args = parser.parse_args(argv)

    setup_logging(args.verbose, args.quiet)

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == "validate":
            return cmd_validate(args)
        elif args.command == "describe":
            return cmd_describe(args)
        else:
            print(f"Unknown command: {args.command}")
            return 1
    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        print(f"✗ Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
