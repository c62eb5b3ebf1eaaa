# File: schemacheck/validators.py
"""
SchemaCheck - Schema Validators
================================
A **pure-function validation pipeline** turning a ``SchemaInfo`` into a
``SchemaErrors`` tree of the same shape.

Pydantic only guarantees the document is well-formed.  This module adds the
naming and cross-entity rules: identifier grammar, length limits, model and
field name uniqueness, and duplicate associations.

The pass is single, synchronous and linear in the number of models, fields
and associations: the id -> model lookup and the name indexes used for
uniqueness (names and association equivalence) are built once per
``validate_schema`` call and handed down.
Nothing here mutates its input or raises for bad content.

Usage::

    from schemacheck.validators import validate_schema
    errors = validate_schema(schema)
    if errors.is_empty():
        save(schema)
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Optional, Set

from schemacheck.associations import AssociationIndex, find_duplicate_association
from schemacheck.errors import (
    AssociationErrors,
    ErrorKind,
    FieldErrors,
    ModelErrors,
    SchemaErrors,
    is_empty,
)
from schemacheck.models import (
    DEFAULT_CONFIG,
    AssociationInfo,
    FieldInfo,
    ManyToMany,
    ModelInfo,
    SchemaInfo,
    ThroughTable,
    ValidationConfig,
)
from schemacheck.rules import (
    REQUIRED,
    STARTS_WITH_NUMBER,
    THROUGH_TABLE_CHAIN,
    TOO_LONG,
    NameConstraints,
    find_duplicate_field,
    find_duplicate_model,
    validate_name,
)
from schemacheck.utils import to_singular

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemacheck.validators")

# Schema names are display names: no grammar, no uniqueness.
_SCHEMA_NAME_CHAIN = (REQUIRED, STARTS_WITH_NUMBER, TOO_LONG)


# ---------------------------------------------------------------------------
# Name index: order-independent uniqueness in O(n)
# ---------------------------------------------------------------------------


class _NameIndex:
    """Maps a normalised name to the ids of the entities carrying it."""

    __slots__ = ("_ids",)

    def __init__(self, entries: Iterable, normalise: Callable[[str], str]) -> None:
        self._ids: Dict[str, Set[str]] = defaultdict(set)
        for entry in entries:
            self._ids[normalise(entry.name or "")].add(entry.id)

    def has_other(self, key: str, own_id: str) -> bool:
        ids: Set[str] = self._ids.get(key, set())
        return len(ids) > 1 or (len(ids) == 1 and own_id not in ids)


def _model_key(name: str) -> str:
    return to_singular(name).lower()


def _field_key(name: str) -> str:
    return name.lower()


def _resolve_config(config: Optional[ValidationConfig]) -> ValidationConfig:
    return config if config is not None else DEFAULT_CONFIG


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------


def validate_schema(
    schema: SchemaInfo, config: Optional[ValidationConfig] = None
) -> SchemaErrors:
    """
    **Master validation entry point.**

    Validates the schema name and every model (with its fields and
    associations).  The result is keyed by model id.

    Complexity: O(M + F + A).
    """
    cfg: ValidationConfig = _resolve_config(config)
    model_by_id: Dict[str, ModelInfo] = schema.model_by_id()
    model_names: _NameIndex = _NameIndex(schema.models, _model_key)

    models: Dict[str, ModelErrors] = {}
    for model in schema.models:
        models[model.id] = _validate_model(model, schema, cfg, model_by_id, model_names)

    errors: SchemaErrors = SchemaErrors(
        name=validate_schema_name(schema, cfg),
        models=models,
    )

    logger.info(
        "Validated schema %r: %d models, %d fields, %d associations — %s.",
        schema.name,
        len(schema.models),
        schema.total_fields,
        schema.total_associations,
        "valid" if is_empty(errors) else "has errors",
    )
    return errors


def validate_schema_name(
    schema: SchemaInfo, config: Optional[ValidationConfig] = None
) -> Optional[ErrorKind]:
    cfg: ValidationConfig = _resolve_config(config)
    return validate_name(
        schema.name,
        NameConstraints(
            required=True,
            max_length=cfg.max_identifier_length,
            check_characters=False,
            chain=_SCHEMA_NAME_CHAIN,
        ),
    )


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------


def validate_model(
    model: ModelInfo,
    schema: SchemaInfo,
    config: Optional[ValidationConfig] = None,
    model_by_id: Optional[Dict[str, ModelInfo]] = None,
) -> ModelErrors:
    """
    Validate one model against the schema it belongs to.

    ``model_by_id`` may be passed when validating many models of the same
    schema; otherwise it is built here.
    """
    cfg: ValidationConfig = _resolve_config(config)
    if model_by_id is None:
        model_by_id = schema.model_by_id()
    return _validate_model(model, schema, cfg, model_by_id, None)


def _validate_model(
    model: ModelInfo,
    schema: SchemaInfo,
    config: ValidationConfig,
    model_by_id: Dict[str, ModelInfo],
    model_names: Optional[_NameIndex],
) -> ModelErrors:
    def is_duplicate() -> bool:
        if model_names is not None:
            return model_names.has_other(_model_key(model.name), model.id)
        return find_duplicate_model(model, schema) is not None

    name_error: Optional[ErrorKind] = validate_name(
        model.name,
        NameConstraints(
            required=True,
            max_length=config.max_identifier_length,
            is_duplicate=is_duplicate,
        ),
    )

    field_names: _NameIndex = _NameIndex(model.fields, _field_key)
    fields: Dict[str, FieldErrors] = {
        f.id: _validate_field(f, model, config, field_names) for f in model.fields
    }
    association_index: AssociationIndex = AssociationIndex(model.associations, model_by_id)
    associations: Dict[str, AssociationErrors] = {
        a.id: _validate_association(a, model, config, model_by_id, association_index)
        for a in model.associations
    }

    logger.debug(
        "Model %r: name=%s, %d fields, %d associations.",
        model.name,
        name_error,
        len(fields),
        len(associations),
    )
    return ModelErrors(
        name=name_error,
        table_name=validate_table_name(model),
        fields=fields,
        associations=associations,
    )


def validate_table_name(model: ModelInfo) -> Optional[ErrorKind]:
    """Table names are accepted as-is; reserved for a future rule."""
    return None


# ---------------------------------------------------------------------------
# Field
# ---------------------------------------------------------------------------


def validate_field(
    field: FieldInfo,
    model: ModelInfo,
    config: Optional[ValidationConfig] = None,
) -> FieldErrors:
    """Field names are required and unique within the model, ignoring case."""
    return _validate_field(field, model, _resolve_config(config), None)


def _validate_field(
    field: FieldInfo,
    model: ModelInfo,
    config: ValidationConfig,
    field_names: Optional[_NameIndex],
) -> FieldErrors:
    def is_duplicate() -> bool:
        if field_names is not None:
            return field_names.has_other(_field_key(field.name), field.id)
        return find_duplicate_field(field, model) is not None

    return FieldErrors(
        name=validate_name(
            field.name,
            NameConstraints(
                required=True,
                max_length=config.max_identifier_length,
                is_duplicate=is_duplicate,
            ),
        )
    )


# ---------------------------------------------------------------------------
# Association
# ---------------------------------------------------------------------------


def validate_association(
    association: AssociationInfo,
    model: ModelInfo,
    schema: SchemaInfo,
    config: Optional[ValidationConfig] = None,
    model_by_id: Optional[Dict[str, ModelInfo]] = None,
) -> AssociationErrors:
    """
    Validate the alias, foreign keys and join table of one association.

    - ``alias``: optional; duplicates are detected by association
      equivalence, not by comparing aliases.
    - ``foreign_key``: optional; grammar and length only.
    - ``target_foreign_key``: many-to-many only.
    - ``through_table``: many-to-many through a table only; required, and
      its length is checked first.

    Outside ``validate_schema`` the duplicate check scans the model's
    associations (O(A)).
    """
    if model_by_id is None:
        model_by_id = schema.model_by_id()
    return _validate_association(
        association, model, _resolve_config(config), model_by_id, None
    )


def _validate_association(
    association: AssociationInfo,
    model: ModelInfo,
    config: ValidationConfig,
    model_by_id: Dict[str, ModelInfo],
    association_index: Optional[AssociationIndex],
) -> AssociationErrors:
    max_length: int = config.max_identifier_length

    def alias_is_duplicate() -> bool:
        if association_index is not None:
            return association_index.has_duplicate(association)
        return find_duplicate_association(association, model, model_by_id) is not None

    alias_error: Optional[ErrorKind] = validate_name(
        association.alias,
        NameConstraints(
            max_length=max_length,
            is_duplicate=alias_is_duplicate,
        ),
    )
    foreign_key_error: Optional[ErrorKind] = validate_name(
        association.foreign_key, NameConstraints(max_length=max_length)
    )

    target_foreign_key_error: Optional[ErrorKind] = None
    through_table_error: Optional[ErrorKind] = None
    association_type = association.type
    if isinstance(association_type, ManyToMany):
        target_foreign_key_error = validate_name(
            association_type.target_fk, NameConstraints(max_length=max_length)
        )
        through = association_type.through
        if isinstance(through, ThroughTable):
            through_table_error = validate_name(
                through.table,
                NameConstraints(
                    required=True,
                    max_length=max_length,
                    chain=THROUGH_TABLE_CHAIN,
                ),
            )

    return AssociationErrors(
        alias=alias_error,
        foreign_key=foreign_key_error,
        target_foreign_key=target_foreign_key_error,
        through_table=through_table_error,
    )


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "validate_schema",
    "validate_schema_name",
    "validate_model",
    "validate_table_name",
    "validate_field",
    "validate_association",
]

logger.debug("schemacheck.validators loaded — %d public symbols.", len(__all__))
