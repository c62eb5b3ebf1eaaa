# File: schemacheck/associations.py
"""
SchemaCheck - Association Equivalence
======================================
Decides whether two associations declared on the same model describe the
same relationship, in which case both report a non-unique alias.

Two associations are the same when all of the following hold:

- they connect the same ordered (source, target) pair of models;
- they have the same kind (one-to-one, one-to-many, many-to-one,
  many-to-many);
- for many-to-many, they are joined through the same table (name compared
  case-insensitively) or the same join model.

Targets are resolved through an id -> model lookup built once per
validation pass.  An association whose target no longer exists is never a
duplicate of anything.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Set, Tuple

from schemacheck.models import (
    AssociationInfo,
    AssociationKind,
    ManyToMany,
    ModelInfo,
    Through,
    ThroughModel,
    ThroughTable,
)
from schemacheck.utils import names_eq

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemacheck.associations")


def throughs_are_same(through_a: Through, through_b: Through) -> bool:
    """Same join table name (ignoring case) or same join model id."""
    if isinstance(through_a, ThroughTable) and isinstance(through_b, ThroughTable):
        return names_eq(through_a.table, through_b.table)
    if isinstance(through_a, ThroughModel) and isinstance(through_b, ThroughModel):
        return through_a.model_id == through_b.model_id
    return False


def associations_are_same(
    association_a: AssociationInfo,
    target_name_a: Optional[str],
    association_b: AssociationInfo,
    target_name_b: Optional[str],
) -> bool:
    """
    Whether ``association_a`` and ``association_b`` are duplicates.

    ``target_name_a`` / ``target_name_b`` are the names of the resolved
    target models; pass ``None`` when a target could not be resolved, which
    makes the pair unequal.  Never raises.
    """
    if target_name_a is None or target_name_b is None:
        return False

    if association_a.source_model_id != association_b.source_model_id:
        return False
    if association_a.target_model_id != association_b.target_model_id:
        return False

    type_a = association_a.type
    type_b = association_b.type
    if type_a.kind != type_b.kind:
        return False

    if isinstance(type_a, ManyToMany) and isinstance(type_b, ManyToMany):
        return throughs_are_same(type_a.through, type_b.through)
    return True


def find_duplicate_association(
    association: AssociationInfo,
    model: ModelInfo,
    model_by_id: Dict[str, ModelInfo],
) -> Optional[AssociationInfo]:
    """
    Another association of ``model`` that is the same as ``association``.

    O(A) per call using the prebuilt ``model_by_id`` lookup.
    """
    target: Optional[ModelInfo] = model_by_id.get(association.target_model_id)
    if target is None:
        logger.debug(
            "Association %s targets unknown model %s; skipping duplicate scan.",
            association.id,
            association.target_model_id,
        )
        return None

    for other in model.associations:
        if other.id == association.id:
            continue
        other_target: Optional[ModelInfo] = model_by_id.get(other.target_model_id)
        if other_target is None:
            continue
        if associations_are_same(association, target.name, other, other_target.name):
            return other
    return None


# ---------------------------------------------------------------------------
# Equivalence keys: duplicate detection for a whole model in O(A)
# ---------------------------------------------------------------------------

ThroughKey = Tuple[str, str]
AssociationKey = Tuple[str, str, AssociationKind, Optional[ThroughKey]]


def association_key(association: AssociationInfo) -> AssociationKey:
    """
    Hashable key shared by exactly the associations ``associations_are_same``
    considers equal (once both targets are resolved).

    Join tables are keyed by their lower-cased name, join models by id.
    """
    through_key: Optional[ThroughKey] = None
    association_type = association.type
    if isinstance(association_type, ManyToMany):
        through = association_type.through
        if isinstance(through, ThroughTable):
            through_key = ("table", through.table.lower())
        else:
            through_key = ("model", through.model_id)
    return (
        association.source_model_id,
        association.target_model_id,
        association.kind,
        through_key,
    )


class AssociationIndex:
    """
    A model's associations grouped by ``association_key``.

    Associations whose target is not in ``model_by_id`` are left out, so
    they never count as a duplicate of anything.
    """

    __slots__ = ("_ids",)

    def __init__(
        self,
        associations: Iterable[AssociationInfo],
        model_by_id: Dict[str, ModelInfo],
    ) -> None:
        self._ids: Dict[AssociationKey, Set[str]] = defaultdict(set)
        for association in associations:
            if association.target_model_id in model_by_id:
                self._ids[association_key(association)].add(association.id)

    def has_duplicate(self, association: AssociationInfo) -> bool:
        ids: Set[str] = self._ids.get(association_key(association), set())
        return len(ids) > 1 or (len(ids) == 1 and association.id not in ids)


__all__: List[str] = [
    "throughs_are_same",
    "associations_are_same",
    "find_duplicate_association",
    "association_key",
    "AssociationIndex",
]
