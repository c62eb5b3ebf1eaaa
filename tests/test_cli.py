"""
tests/test_cli.py
Tests for the command-line interface (schemacheck.cli).

``run`` returns the exit code, so most tests call it directly and inspect
stdout with ``capsys``.
"""

from __future__ import annotations

import json
import pathlib

import pytest

from schemacheck import __version__
from schemacheck.cli import (
    EXIT_INPUT_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    cli_main,
    run,
)


class TestRun:
    def test_valid_schema(self, schema_yaml_path: pathlib.Path, capsys) -> None:
        assert run(["--schema", str(schema_yaml_path)]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "Schema 'Blog': 0 error(s)." in out

    def test_valid_schema_json_input(self, schema_json_path: pathlib.Path) -> None:
        assert run(["-s", str(schema_json_path)]) == EXIT_SUCCESS

    def test_bad_names_text(self, schema_bad_names_json_path: pathlib.Path, capsys) -> None:
        assert run(["-s", str(schema_bad_names_json_path)]) == EXIT_VALIDATION_ERROR
        out = capsys.readouterr().out
        assert "5 error(s)" in out
        assert "1Thing.name: Name cannot begin with a number. [NameStartsWithNumber]" in out

    def test_bad_names_json(self, schema_bad_names_json_path: pathlib.Path, capsys) -> None:
        code = run(["-s", str(schema_bad_names_json_path), "--format", "json"])
        assert code == EXIT_VALIDATION_ERROR
        tree = json.loads(capsys.readouterr().out)
        model = tree["models"]["model-1"]
        assert model["name"] == "NameStartsWithNumber"
        assert model["fields"]["field-1"]["name"] == "NameRequired"
        assert model["fields"]["field-3"]["name"] == "NameNotUnique"
        assert "name" not in tree

    def test_max_identifier_length(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "long.json"
        path.write_text(json.dumps({"name": "Blog", "models": [{"name": "x" * 64}]}))
        assert run(["-s", str(path)]) == EXIT_VALIDATION_ERROR
        assert run(["-s", str(path), "--max-identifier-length", "64"]) == EXIT_SUCCESS

    def test_invalid_max_identifier_length(self, schema_yaml_path: pathlib.Path) -> None:
        code = run(["-s", str(schema_yaml_path), "--max-identifier-length", "0"])
        assert code == EXIT_INPUT_ERROR

    def test_missing_file(self, tmp_path: pathlib.Path) -> None:
        assert run(["-s", str(tmp_path / "missing.yaml")]) == EXIT_INPUT_ERROR

    def test_wrong_shape(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "shape.json"
        path.write_text(json.dumps({"name": "Blog", "models": [{"fields": "nope"}]}))
        assert run(["-s", str(path)]) == EXIT_INPUT_ERROR


class TestArgumentParsing:
    def test_schema_is_required(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            run([])
        assert exc_info.value.code == 2

    def test_version(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            run(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


def test_cli_main_exits_with_run_code(schema_yaml_path: pathlib.Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli_main(["-s", str(schema_yaml_path)])
    assert exc_info.value.code == EXIT_SUCCESS
