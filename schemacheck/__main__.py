# File: schemacheck/__main__.py
"""
SchemaCheck — Module entry point.

Allows running the validator directly via::

    python -m schemacheck --schema schema.json

This module simply delegates to the CLI entry point defined in ``schemacheck.cli``.
"""

from __future__ import annotations


def main() -> None:
    """Delegate to the CLI main function."""
    from schemacheck.cli import cli_main
    cli_main()


if __name__ == "__main__":
    main()
