# File: schemacheck/__init__.py
"""
SchemaCheck — Relational Schema Validation Engine
==================================================

Validates a schema document authored in a visual model editor (models,
fields, associations) and returns a structured error tree describing every
naming, uniqueness and duplicate-association problem.

Architecture overview::

    ┌──────────────┐     ┌────────────────┐     ┌──────────────┐
    │  CLI / Entry │────▶│  validators    │────▶│    errors    │
    │   (cli.py)   │     │ (error tree)   │     │(SchemaErrors)│
    └──────────────┘     └───────┬────────┘     └──────────────┘
                                 │
                    ┌────────────┼─────────────┐
                    ▼            ▼             ▼
             ┌──────────┐ ┌─────────────┐ ┌──────────┐
             │  rules   │ │associations │ │ filters  │
             │  (.py)   │ │   (.py)     │ │  (.py)   │
             └──────────┘ └─────────────┘ └──────────┘

Usage::

    # As a library
    from schemacheck import SchemaInfo, validate_schema, no_schema_errors
    errors = validate_schema(SchemaInfo.model_validate(document))
    if no_schema_errors(errors):
        save(document)

    # From the command line
    python -m schemacheck --schema schema.json

Public API:
    - validate_schema    — Error tree for a whole schema
    - validate_model / validate_field / validate_association
    - is_empty           — Deep "no errors" predicate
    - associations_are_same — Duplicate association test
    - InputFilter        — check / fix grammars for editor inputs
"""

from __future__ import annotations

__version__: str = "1.0.0"
__license__: str = "MIT"

from schemacheck.models import (
    MAX_IDENTIFIER_LENGTH,
    AssociationInfo,
    AssociationKind,
    DataType,
    DataTypeType,
    FieldInfo,
    ManyToMany,
    ManyToOne,
    ModelInfo,
    OneToMany,
    OneToOne,
    SchemaInfo,
    ThroughKind,
    ThroughModel,
    ThroughTable,
    ValidationConfig,
)
from schemacheck.errors import (
    AssociationErrors,
    ErrorKind,
    FieldErrors,
    ModelErrors,
    SchemaErrors,
    has_schema_errors,
    is_empty,
    no_model_errors,
    no_schema_errors,
)
from schemacheck.filters import INPUT_FILTERS, MODEL_INFO, InputFilter, limited_integer
from schemacheck.rules import NameConstraints, validate_name
from schemacheck.associations import associations_are_same, find_duplicate_association
from schemacheck.validators import (
    validate_association,
    validate_field,
    validate_model,
    validate_schema,
)
from schemacheck.report import ValidationIssue, ValidationReport, collect_issues

# ---------------------------------------------------------------------------
# Public API surface
# ---------------------------------------------------------------------------

__all__: list[str] = [
    # Version info
    "__version__",
    "__license__",
    # Models
    "MAX_IDENTIFIER_LENGTH",
    "AssociationInfo",
    "AssociationKind",
    "DataType",
    "DataTypeType",
    "FieldInfo",
    "ManyToMany",
    "ManyToOne",
    "ModelInfo",
    "OneToMany",
    "OneToOne",
    "SchemaInfo",
    "ThroughKind",
    "ThroughModel",
    "ThroughTable",
    "ValidationConfig",
    # Errors
    "AssociationErrors",
    "ErrorKind",
    "FieldErrors",
    "ModelErrors",
    "SchemaErrors",
    "has_schema_errors",
    "is_empty",
    "no_model_errors",
    "no_schema_errors",
    # Filters
    "INPUT_FILTERS",
    "MODEL_INFO",
    "InputFilter",
    "limited_integer",
    # Rules
    "NameConstraints",
    "validate_name",
    "associations_are_same",
    "find_duplicate_association",
    # Validation
    "validate_association",
    "validate_field",
    "validate_model",
    "validate_schema",
    # Reporting
    "ValidationIssue",
    "ValidationReport",
    "collect_issues",
]
