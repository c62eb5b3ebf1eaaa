# File: schemacheck/errors.py
"""
SchemaCheck - Error Tree
=========================
Typed records holding the outcome of a validation pass.

The tree mirrors the schema: ``SchemaErrors`` -> ``ModelErrors`` (keyed by
model id) -> ``FieldErrors`` / ``AssociationErrors`` (keyed by field and
association id).  Each leaf is an ``Optional[ErrorKind]``; ``None`` means
the input is valid.  Errors are data, never exceptions.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from schemacheck.models import MAX_IDENTIFIER_LENGTH

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemacheck.errors")


# ---------------------------------------------------------------------------
# Error kinds
# ---------------------------------------------------------------------------


class ErrorKind(str, Enum):
    """Every problem the engine can report about a name."""

    NAME_REQUIRED = "NameRequired"
    NAME_STARTS_WITH_NUMBER = "NameStartsWithNumber"
    NAME_TOO_LONG = "NameTooLong"
    NAME_HAS_SPECIAL_CHAR = "NameHasSpecialChar"
    NAME_NOT_UNIQUE = "NameNotUnique"

    @property
    def message(self) -> str:
        """Human-readable message for the default identifier limit."""
        return self.format_message()

    def format_message(self, max_identifier_length: int = MAX_IDENTIFIER_LENGTH) -> str:
        if self is ErrorKind.NAME_TOO_LONG:
            return _MESSAGES[self].format(max_length=max_identifier_length)
        return _MESSAGES[self]

    def __str__(self) -> str:
        return self.value


_MESSAGES: Dict[ErrorKind, str] = {
    ErrorKind.NAME_REQUIRED: "Name is required.",
    ErrorKind.NAME_STARTS_WITH_NUMBER: "Name cannot begin with a number.",
    ErrorKind.NAME_TOO_LONG: "Name can't be more than {max_length} characters.",
    ErrorKind.NAME_HAS_SPECIAL_CHAR: "Name can only contain letters, numbers or underscores.",
    ErrorKind.NAME_NOT_UNIQUE: "Name already taken.",
}


# ---------------------------------------------------------------------------
# Error records
# ---------------------------------------------------------------------------

_ERRORS_CONFIG: ConfigDict = ConfigDict(
    populate_by_name=True,
    frozen=True,
    extra="forbid",
)


class FieldErrors(BaseModel):
    model_config = _ERRORS_CONFIG

    name: Optional[ErrorKind] = None

    def is_empty(self) -> bool:
        return is_empty(self)


class AssociationErrors(BaseModel):
    model_config = _ERRORS_CONFIG

    alias: Optional[ErrorKind] = None
    foreign_key: Optional[ErrorKind] = Field(default=None, alias="foreignKey")
    target_foreign_key: Optional[ErrorKind] = Field(default=None, alias="targetForeignKey")
    through_table: Optional[ErrorKind] = Field(default=None, alias="throughTable")

    def is_empty(self) -> bool:
        return is_empty(self)


class ModelErrors(BaseModel):
    """
    Errors for one model and everything it owns.

    ``table_name`` is reserved: table names are not validated, so it is
    always ``None``.
    """

    model_config = _ERRORS_CONFIG

    name: Optional[ErrorKind] = None
    table_name: Optional[ErrorKind] = Field(default=None, alias="tableName")
    fields: Dict[str, FieldErrors] = Field(default_factory=dict)
    associations: Dict[str, AssociationErrors] = Field(default_factory=dict)

    def is_empty(self) -> bool:
        return is_empty(self)


class SchemaErrors(BaseModel):
    model_config = _ERRORS_CONFIG

    name: Optional[ErrorKind] = None
    models: Dict[str, ModelErrors] = Field(default_factory=dict)

    def is_empty(self) -> bool:
        return is_empty(self)


EMPTY_MODEL_ERRORS: ModelErrors = ModelErrors()
EMPTY_SCHEMA_ERRORS: SchemaErrors = SchemaErrors()


# ---------------------------------------------------------------------------
# Emptiness predicates
# ---------------------------------------------------------------------------


def is_empty(errors: Any) -> bool:
    """
    Deep emptiness test over an error tree (or any part of it).

    ``None`` and empty containers are empty; any ``ErrorKind`` (or other
    non-container value) is not.  Walks every record, mapping and sequence.
    """
    if errors is None:
        return True
    if isinstance(errors, str) and not isinstance(errors, ErrorKind):
        return errors == ""
    if isinstance(errors, BaseModel):
        return all(is_empty(getattr(errors, name)) for name in type(errors).model_fields)
    if isinstance(errors, dict):
        return all(is_empty(v) for v in errors.values())
    if isinstance(errors, (list, tuple, set, frozenset)):
        return all(is_empty(v) for v in errors)
    return False


def no_schema_errors(errors: SchemaErrors) -> bool:
    """True when the schema can be saved."""
    return is_empty(errors)


def has_schema_errors(errors: SchemaErrors) -> bool:
    return not no_schema_errors(errors)


def no_model_errors(errors: ModelErrors) -> bool:
    return is_empty(errors)


__all__: List[str] = [
    "ErrorKind",
    "FieldErrors",
    "AssociationErrors",
    "ModelErrors",
    "SchemaErrors",
    "EMPTY_MODEL_ERRORS",
    "EMPTY_SCHEMA_ERRORS",
    "is_empty",
    "no_schema_errors",
    "has_schema_errors",
    "no_model_errors",
]
