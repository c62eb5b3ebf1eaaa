# File: schemacheck/loader.py
"""
SchemaCheck - Schema Document Loading
======================================
Reads a schema document (JSON or YAML) from disk and parses it into a
``SchemaInfo``.  Used by the command line; library callers usually build
``SchemaInfo`` values directly.

All failures surface as ``SchemaLoadError`` so callers have a single
exception to handle for "this input is unusable".
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml
from pydantic import ValidationError

from schemacheck.models import SchemaInfo

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemacheck.loader")


class SchemaLoadError(ValueError):
    """The schema document is missing, unreadable or has the wrong shape."""


def _load_json_file(path: Path) -> Dict[str, Any]:
    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SchemaLoadError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SchemaLoadError(
            f"Expected a JSON object at top level, got {type(data).__name__}."
        )
    return data


def _load_yaml_file(path: Path) -> Dict[str, Any]:
    try:
        data: Any = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise SchemaLoadError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SchemaLoadError(
            f"Expected a YAML mapping at top level, got {type(data).__name__}."
        )
    return data


def load_schema_file(path: Path) -> Dict[str, Any]:
    """
    Load a schema document, dispatching on the file extension.

    Unknown extensions are tried as JSON first, then YAML.

    Raises:
        SchemaLoadError: If the file doesn't exist or can't be parsed.
    """
    if not path.exists():
        raise SchemaLoadError(f"Schema file not found: {path}")
    if not path.is_file():
        raise SchemaLoadError(f"Schema path is not a file: {path}")

    suffix: str = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _load_yaml_file(path)
    if suffix == ".json":
        return _load_json_file(path)

    logger.info("Unknown extension '%s' — trying JSON then YAML.", suffix)
    try:
        return _load_json_file(path)
    except SchemaLoadError:
        return _load_yaml_file(path)


def parse_schema(raw: Dict[str, Any]) -> SchemaInfo:
    """
    Parse a raw document into a ``SchemaInfo``.

    Accepts either the schema object itself or ``{"schema": {...}}``.

    Raises:
        SchemaLoadError: If the document does not have the schema shape.
    """
    data: Any = raw.get("schema", raw)
    if not isinstance(data, dict):
        raise SchemaLoadError("'schema' must be a mapping.")
    try:
        schema: SchemaInfo = SchemaInfo.model_validate(data)
    except ValidationError as exc:
        raise SchemaLoadError(f"Schema document has the wrong shape:\n{exc}") from exc

    logger.debug("Parsed %r", schema)
    return schema


def load_schema(path: Path) -> SchemaInfo:
    """``load_schema_file`` followed by ``parse_schema``."""
    return parse_schema(load_schema_file(path))


__all__: List[str] = [
    "SchemaLoadError",
    "load_schema_file",
    "parse_schema",
    "load_schema",
]
