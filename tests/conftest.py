"""
tests/conftest.py
Shared fixtures for the schemacheck test suite.

The reference document ``schema_example.yaml`` (repository root) is loaded
once per session; every test gets its own deep copy to mutate.
"""

from __future__ import annotations

import copy
import json
import pathlib
from typing import Any, Dict

import pytest
import yaml

from schemacheck.models import SchemaInfo


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

ROOT_DIR: pathlib.Path = pathlib.Path(__file__).resolve().parent.parent
SCHEMA_EXAMPLE_PATH: pathlib.Path = ROOT_DIR / "schema_example.yaml"


# ---------------------------------------------------------------------------
# Raw schema data fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def raw_schema_dict() -> Dict[str, Any]:
    """Load the reference schema_example.yaml once per session and return as dict."""
    assert SCHEMA_EXAMPLE_PATH.exists(), (
        f"Reference schema not found at {SCHEMA_EXAMPLE_PATH}. "
        "Make sure schema_example.yaml is in the project root."
    )
    with open(SCHEMA_EXAMPLE_PATH, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    assert isinstance(data, dict), "Top-level YAML must be a mapping."
    return data


@pytest.fixture()
def schema_dict(raw_schema_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Return a deep copy so each test can mutate freely."""
    return copy.deepcopy(raw_schema_dict)


@pytest.fixture()
def schema(schema_dict: Dict[str, Any]) -> SchemaInfo:
    """The reference schema parsed into models."""
    return SchemaInfo.model_validate(schema_dict)


@pytest.fixture()
def schema_yaml_path(schema_dict: Dict[str, Any], tmp_path: pathlib.Path) -> pathlib.Path:
    """Write the schema dict to a temporary YAML file and return its path."""
    path = tmp_path / "schema.yaml"
    with open(path, "w", encoding="utf-8") as fh:
        yaml.dump(schema_dict, fh, default_flow_style=False, allow_unicode=True)
    return path


@pytest.fixture()
def schema_json_path(schema_dict: Dict[str, Any], tmp_path: pathlib.Path) -> pathlib.Path:
    """Write the schema dict to a temporary JSON file and return its path."""
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(schema_dict, indent=2), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Invalid schema fixtures (for negative testing)
# ---------------------------------------------------------------------------


@pytest.fixture()
def schema_duplicate_model_dict(schema_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Reference schema plus an 'Posts' model clashing with 'Post'."""
    schema_dict["models"].append(
        {
            "id": "model-posts",
            "name": "Posts",
            "fields": [],
            "associations": [],
        }
    )
    return schema_dict


@pytest.fixture()
def schema_bad_names_dict() -> Dict[str, Any]:
    """One model whose names break every rule once."""
    return {
        "id": "schema-bad",
        "name": "Bad",
        "models": [
            {
                "id": "model-1",
                "name": "1Thing",
                "fields": [
                    {"id": "field-1", "name": ""},
                    {"id": "field-2", "name": "has space"},
                    {"id": "field-3", "name": "Email"},
                    {"id": "field-4", "name": "email"},
                ],
                "associations": [],
            }
        ],
    }


@pytest.fixture()
def schema_bad_names_json_path(
    schema_bad_names_dict: Dict[str, Any], tmp_path: pathlib.Path
) -> pathlib.Path:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps(schema_bad_names_dict), encoding="utf-8")
    return path
