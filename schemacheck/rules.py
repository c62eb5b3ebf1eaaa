# File: schemacheck/rules.py
"""
SchemaCheck - Name Rules
=========================
The shared check chain every name in a schema goes through.

``validate_name`` runs the checks of a chain in order and stops at the first
failure, so a name never reports more than one error.  The default chain is::

    required -> starts_with_number -> too_long -> special_char -> not_unique

Uniqueness is entity-specific and therefore passed in as a callable; it is
only evaluated when every cheaper check has passed.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence

from schemacheck.errors import ErrorKind
from schemacheck.filters import MODEL_INFO
from schemacheck.models import MAX_IDENTIFIER_LENGTH, FieldInfo, ModelInfo, SchemaInfo
from schemacheck.utils import (
    name_empty,
    name_longer_than,
    name_starts_with_number,
    names_eq,
    names_eq_singular,
)

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemacheck.rules")

# ---------------------------------------------------------------------------
# Check names and chains
# ---------------------------------------------------------------------------

REQUIRED: str = "required"
STARTS_WITH_NUMBER: str = "starts_with_number"
TOO_LONG: str = "too_long"
SPECIAL_CHAR: str = "special_char"
NOT_UNIQUE: str = "not_unique"

DEFAULT_CHAIN: Sequence[str] = (REQUIRED, STARTS_WITH_NUMBER, TOO_LONG, SPECIAL_CHAR, NOT_UNIQUE)

# Through-table names check their length before anything else.
THROUGH_TABLE_CHAIN: Sequence[str] = (TOO_LONG, REQUIRED, STARTS_WITH_NUMBER, SPECIAL_CHAR)

DuplicatePredicate = Callable[[], bool]


class NameConstraints:
    """
    What a particular name is held to.

    Attributes:
        required: Empty / whitespace-only names are an error.
        max_length: Longest accepted name.
        check_characters: Apply the identifier grammar.
        is_duplicate: Zero-argument uniqueness predicate, or ``None``.
        chain: Order in which the checks run.
    """

    __slots__ = ("required", "max_length", "check_characters", "is_duplicate", "chain")

    def __init__(
        self,
        required: bool = False,
        max_length: int = MAX_IDENTIFIER_LENGTH,
        check_characters: bool = True,
        is_duplicate: Optional[DuplicatePredicate] = None,
        chain: Sequence[str] = DEFAULT_CHAIN,
    ) -> None:
        self.required: bool = required
        self.max_length: int = max_length
        self.check_characters: bool = check_characters
        self.is_duplicate: Optional[DuplicatePredicate] = is_duplicate
        self.chain: Sequence[str] = chain

    def __repr__(self) -> str:
        return (
            f"<NameConstraints required={self.required} "
            f"max_length={self.max_length} chain={'/'.join(self.chain)}>"
        )


# ---------------------------------------------------------------------------
# Individual checks: each returns the error it detects, or None
# ---------------------------------------------------------------------------


def _check_required(value: Optional[str], constraints: NameConstraints) -> Optional[ErrorKind]:
    if constraints.required and name_empty(value):
        return ErrorKind.NAME_REQUIRED
    return None


def _check_starts_with_number(
    value: Optional[str], constraints: NameConstraints
) -> Optional[ErrorKind]:
    if name_starts_with_number(value):
        return ErrorKind.NAME_STARTS_WITH_NUMBER
    return None


def _check_too_long(value: Optional[str], constraints: NameConstraints) -> Optional[ErrorKind]:
    if name_longer_than(value, constraints.max_length):
        return ErrorKind.NAME_TOO_LONG
    return None


def _check_special_char(
    value: Optional[str], constraints: NameConstraints
) -> Optional[ErrorKind]:
    if constraints.check_characters and value and not MODEL_INFO.check(value):
        return ErrorKind.NAME_HAS_SPECIAL_CHAR
    return None


def _check_not_unique(value: Optional[str], constraints: NameConstraints) -> Optional[ErrorKind]:
    if constraints.is_duplicate is not None and constraints.is_duplicate():
        return ErrorKind.NAME_NOT_UNIQUE
    return None


_CHECKS: Dict[str, Callable[[Optional[str], NameConstraints], Optional[ErrorKind]]] = {
    REQUIRED: _check_required,
    STARTS_WITH_NUMBER: _check_starts_with_number,
    TOO_LONG: _check_too_long,
    SPECIAL_CHAR: _check_special_char,
    NOT_UNIQUE: _check_not_unique,
}


def validate_name(value: Optional[str], constraints: NameConstraints) -> Optional[ErrorKind]:
    """
    Run ``constraints.chain`` over ``value``; return the first error found.

    ``None`` is treated like an empty string.

        >>> validate_name("2cool", NameConstraints(required=True))
        <ErrorKind.NAME_STARTS_WITH_NUMBER: 'NameStartsWithNumber'>
    """
    for check_name in constraints.chain:
        error: Optional[ErrorKind] = _CHECKS[check_name](value, constraints)
        if error is not None:
            return error
    return None


# ---------------------------------------------------------------------------
# Uniqueness predicates
# ---------------------------------------------------------------------------


def find_duplicate_model(model: ModelInfo, schema: SchemaInfo) -> Optional[ModelInfo]:
    """
    Another model whose name matches ``model``'s once both are singularised
    and lower-cased ("Order" clashes with "orders").  O(M).
    """
    for other in schema.models:
        if other.id != model.id and names_eq_singular(other.name, model.name):
            return other
    return None


def find_duplicate_field(field: FieldInfo, model: ModelInfo) -> Optional[FieldInfo]:
    """Another field of ``model`` with the same name, ignoring case.  O(F)."""
    for other in model.fields:
        if other.id != field.id and names_eq(other.name, field.name):
            return other
    return None


__all__: List[str] = [
    "REQUIRED",
    "STARTS_WITH_NUMBER",
    "TOO_LONG",
    "SPECIAL_CHAR",
    "NOT_UNIQUE",
    "DEFAULT_CHAIN",
    "THROUGH_TABLE_CHAIN",
    "NameConstraints",
    "validate_name",
    "find_duplicate_model",
    "find_duplicate_field",
]
