"""
tests/test_loader.py
Unit tests for schemacheck.loader.
"""

from __future__ import annotations

import pathlib
from typing import Any, Dict

import pytest

from schemacheck.loader import SchemaLoadError, load_schema, load_schema_file, parse_schema
from schemacheck.models import SchemaInfo


class TestLoadSchemaFile:
    def test_yaml(self, schema_yaml_path: pathlib.Path, schema_dict: Dict[str, Any]) -> None:
        assert load_schema_file(schema_yaml_path) == schema_dict

    def test_json(self, schema_json_path: pathlib.Path, schema_dict: Dict[str, Any]) -> None:
        assert load_schema_file(schema_json_path) == schema_dict

    def test_unknown_extension_falls_back_to_yaml(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "schema.txt"
        path.write_text("name: Blog\nmodels: []\n", encoding="utf-8")
        assert load_schema_file(path) == {"name": "Blog", "models": []}

    def test_missing_file(self, tmp_path: pathlib.Path) -> None:
        with pytest.raises(SchemaLoadError, match="not found"):
            load_schema_file(tmp_path / "nope.yaml")

    def test_directory(self, tmp_path: pathlib.Path) -> None:
        with pytest.raises(SchemaLoadError, match="not a file"):
            load_schema_file(tmp_path)

    def test_invalid_json(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SchemaLoadError, match="Invalid JSON"):
            load_schema_file(path)

    def test_top_level_list(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(SchemaLoadError, match="mapping"):
            load_schema_file(path)


class TestParseSchema:
    def test_bare_document(self, schema_dict: Dict[str, Any]) -> None:
        assert parse_schema(schema_dict).name == "Blog"

    def test_wrapped_document(self, schema_dict: Dict[str, Any]) -> None:
        assert parse_schema({"schema": schema_dict}) == SchemaInfo.model_validate(schema_dict)

    def test_wrapped_non_mapping(self) -> None:
        with pytest.raises(SchemaLoadError):
            parse_schema({"schema": ["not", "a", "mapping"]})

    def test_wrong_shape(self) -> None:
        with pytest.raises(SchemaLoadError, match="wrong shape"):
            parse_schema({"name": "Blog", "models": "nope"})

    def test_is_a_value_error(self) -> None:
        assert issubclass(SchemaLoadError, ValueError)


def test_load_schema(schema_yaml_path: pathlib.Path) -> None:
    schema = load_schema(schema_yaml_path)
    assert [m.name for m in schema.models] == ["User", "Post", "Tag"]
