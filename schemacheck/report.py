# File: schemacheck/report.py
"""
SchemaCheck - Flat Validation Report
=====================================
Flattens a ``SchemaErrors`` tree into a list of ``ValidationIssue`` entries
with human-readable paths (``Order.fields.email.name``) for command-line
output and logs.  The tree itself stays the source of truth; this module
only reads it.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional

from schemacheck.errors import ErrorKind, ModelErrors, SchemaErrors
from schemacheck.models import (
    DEFAULT_CONFIG,
    AssociationInfo,
    ModelInfo,
    SchemaInfo,
    ValidationConfig,
)

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemacheck.report")


class ValidationIssue:
    """One reported error, located by a dotted path (no Pydantic overhead)."""

    __slots__ = ("path", "kind", "message")

    def __init__(self, path: str, kind: ErrorKind, message: str) -> None:
        self.path: str = path
        self.kind: ErrorKind = kind
        self.message: str = message

    def __repr__(self) -> str:
        return f"{self.path}: [{self.kind.value}] {self.message}"

    def __str__(self) -> str:
        return self.__repr__()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "kind": self.kind.value,
            "message": self.message,
        }


class ValidationReport:
    """Ordered collection of ``ValidationIssue`` for one schema."""

    __slots__ = ("schema_name", "_items")

    def __init__(self, schema_name: str = "") -> None:
        self.schema_name: str = schema_name
        self._items: List[ValidationIssue] = []

    def add(self, issue: ValidationIssue) -> None:
        self._items.append(issue)

    @property
    def issues(self) -> List[ValidationIssue]:
        return list(self._items)

    @property
    def has_errors(self) -> bool:
        return bool(self._items)

    @property
    def error_count(self) -> int:
        return len(self._items)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    def summary(self) -> str:
        return f"Schema {self.schema_name!r}: {self.error_count} error(s)."

    def __repr__(self) -> str:
        return f"<ValidationReport {self.summary()}>"

    def __bool__(self) -> bool:
        """Truthy when there are NO errors (i.e. valid)."""
        return self.is_valid

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ValidationIssue]:
        return iter(self._items)

    def format_report(self) -> str:
        """Human-readable multi-line report."""
        lines: List[str] = [self.summary()]
        if self._items:
            lines.append("")
        for item in self._items:
            lines.append(f"  ✗ {item.path}: {item.message} [{item.kind.value}]")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema": self.schema_name,
            "valid": self.is_valid,
            "errors": [i.to_dict() for i in self._items],
        }


def _label(name: Optional[str], entity_id: str) -> str:
    return name if name and name.strip() else f"<{entity_id}>"


def _association_label(association: AssociationInfo, model_by_id: Dict[str, ModelInfo]) -> str:
    if association.alias and association.alias.strip():
        return association.alias
    target: Optional[ModelInfo] = model_by_id.get(association.target_model_id)
    target_name: str = target.name if target is not None else association.target_model_id
    return f"{association.kind.value.lower()}({target_name})"


def collect_issues(
    schema: SchemaInfo,
    errors: SchemaErrors,
    config: Optional[ValidationConfig] = None,
) -> ValidationReport:
    """
    Walk ``errors`` alongside ``schema`` and list every reported error.

    Models, fields and associations are visited in document order; entries
    of ``errors`` whose id is not in ``schema`` are ignored.
    """
    cfg: ValidationConfig = config if config is not None else DEFAULT_CONFIG
    report: ValidationReport = ValidationReport(schema.name)
    model_by_id: Dict[str, ModelInfo] = schema.model_by_id()

    def add(path: str, kind: Optional[ErrorKind]) -> None:
        if kind is not None:
            report.add(
                ValidationIssue(path, kind, kind.format_message(cfg.max_identifier_length))
            )

    add("name", errors.name)

    for model in schema.models:
        model_errors: Optional[ModelErrors] = errors.models.get(model.id)
        if model_errors is None:
            continue
        model_path: str = _label(model.name, model.id)
        add(f"{model_path}.name", model_errors.name)
        add(f"{model_path}.tableName", model_errors.table_name)

        for field in model.fields:
            field_errors = model_errors.fields.get(field.id)
            if field_errors is not None:
                add(f"{model_path}.fields.{_label(field.name, field.id)}.name", field_errors.name)

        for association in model.associations:
            association_errors = model_errors.associations.get(association.id)
            if association_errors is None:
                continue
            prefix: str = (
                f"{model_path}.associations."
                f"{_association_label(association, model_by_id)}"
            )
            add(f"{prefix}.alias", association_errors.alias)
            add(f"{prefix}.foreignKey", association_errors.foreign_key)
            add(f"{prefix}.targetForeignKey", association_errors.target_foreign_key)
            add(f"{prefix}.throughTable", association_errors.through_table)

    logger.debug("collect_issues: %s", report.summary())
    return report


__all__: List[str] = [
    "ValidationIssue",
    "ValidationReport",
    "collect_issues",
]
