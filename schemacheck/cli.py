# File: schemacheck/cli.py
"""
SchemaCheck - Command-Line Interface
=====================================

Thin wrapper around the validation engine, built with the standard-library
``argparse`` module.

Usage examples::

    # Validate a schema document
    python -m schemacheck --schema blog.json

    # MySQL limits identifiers to 64 characters
    python -m schemacheck -s blog.yaml --max-identifier-length 64

    # Full error tree as JSON
    python -m schemacheck -s blog.json --format json

Exit codes:
    0 — schema is valid
    1 — validation errors
    4 — input/argument error
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, NoReturn, Optional, Sequence

# ---------------------------------------------------------------------------
# Logger (configured in _setup_logging)
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemacheck")


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_VALIDATION_ERROR: int = 1
EXIT_INPUT_ERROR: int = 4


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(verbosity: int) -> None:
    """
    Configure the root schemacheck logger based on verbosity level.

    Args:
        verbosity: 0 = WARNING, 1 = INFO, 2+ = DEBUG.
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler: logging.StreamHandler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    fmt: str = "%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s"
    datefmt: str = "%H:%M:%S"
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root_logger: logging.Logger = logging.getLogger("schemacheck")
    root_logger.setLevel(level)

    # Remove existing handlers to prevent duplication
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    from schemacheck import __version__

    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="schemacheck",
        description=(
            "SchemaCheck — validate a relational schema document.\n\n"
            "Reports every naming, uniqueness and duplicate-association "
            "problem in a JSON or YAML schema."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  %(prog)s -s schema.json\n"
            "  %(prog)s -s schema.yaml --format json\n"
            "  %(prog)s -s schema.yaml --max-identifier-length 64\n"
        ),
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"SchemaCheck v{__version__}",
    )
    parser.add_argument(
        "-s", "--schema",
        type=str,
        required=True,
        metavar="PATH",
        help="Path to the schema document (JSON or YAML).",
    )

    config_group = parser.add_argument_group("configuration overrides")
    config_group.add_argument(
        "--max-identifier-length",
        type=int,
        default=None,
        metavar="N",
        help="Longest accepted identifier (default: 63, the PostgreSQL limit).",
    )

    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="'text' prints a flat report, 'json' the full error tree.",
    )

    verbosity_group = parser.add_argument_group("verbosity")
    verbosity_group.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG).",
    )

    return parser


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------


def run(argv: Optional[Sequence[str]] = None) -> int:
    """
    Parse arguments, validate the schema and print the result.

    Returns the exit code instead of exiting, for embedding and tests.
    """
    from pydantic import ValidationError

    from schemacheck.errors import is_empty
    from schemacheck.loader import SchemaLoadError, load_schema
    from schemacheck.models import ValidationConfig
    from schemacheck.report import collect_issues
    from schemacheck.validators import validate_schema

    parser: argparse.ArgumentParser = _build_parser()
    args: argparse.Namespace = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        config: ValidationConfig = (
            ValidationConfig(max_identifier_length=args.max_identifier_length)
            if args.max_identifier_length is not None
            else ValidationConfig()
        )
    except ValidationError as exc:
        logger.error("Invalid configuration: %s", exc)
        return EXIT_INPUT_ERROR

    schema_path: Path = Path(args.schema).resolve()
    try:
        schema = load_schema(schema_path)
    except SchemaLoadError as exc:
        logger.error("Failed to load schema: %s", exc)
        return EXIT_INPUT_ERROR

    errors = validate_schema(schema, config)

    if args.format == "json":
        print(
            json.dumps(
                errors.model_dump(mode="json", by_alias=True, exclude_none=True),
                indent=2,
            )
        )
    else:
        print(collect_issues(schema, errors, config).format_report())

    return EXIT_SUCCESS if is_empty(errors) else EXIT_VALIDATION_ERROR


def cli_main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """
    Main CLI entry point.

    Can be called from ``__main__.py`` or directly for testing.
    """
    sys.exit(run(argv))


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "run",
    "cli_main",
    "EXIT_SUCCESS",
    "EXIT_VALIDATION_ERROR",
    "EXIT_INPUT_ERROR",
]

logger.debug("schemacheck.cli loaded.")
