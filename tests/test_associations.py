"""
tests/test_associations.py
Unit tests for schemacheck.associations.

Tests cover:
- Same / different kind, endpoints and join
- Unresolved targets never match and never raise
- find_duplicate_association over a model's associations
"""

from __future__ import annotations

from typing import Dict, List, Optional

from schemacheck.associations import (
    AssociationIndex,
    association_key,
    associations_are_same,
    find_duplicate_association,
    throughs_are_same,
)
from schemacheck.models import (
    AssociationInfo,
    ManyToMany,
    ManyToOne,
    ModelInfo,
    OneToMany,
    ThroughModel,
    ThroughTable,
)


def _m2m(assoc_id: str, table: str = "post_tags", target: str = "model-tag") -> AssociationInfo:
    return AssociationInfo(
        id=assoc_id,
        source_model_id="model-post",
        target_model_id=target,
        type=ManyToMany(through=ThroughTable(table=table)),
    )


def _simple(assoc_id: str, kind, target: str = "model-user") -> AssociationInfo:
    return AssociationInfo(
        id=assoc_id,
        source_model_id="model-post",
        target_model_id=target,
        type=kind(),
    )


def _post(associations: List[AssociationInfo]) -> ModelInfo:
    return ModelInfo(id="model-post", name="Post", associations=associations)


def _lookup(*models: ModelInfo) -> Dict[str, ModelInfo]:
    return {m.id: m for m in models}


USER: ModelInfo = ModelInfo(id="model-user", name="User")
TAG: ModelInfo = ModelInfo(id="model-tag", name="Tag")


class TestThroughsAreSame:
    def test_tables_compare_case_insensitively(self) -> None:
        assert throughs_are_same(ThroughTable(table="post_tags"), ThroughTable(table="POST_TAGS"))

    def test_different_tables(self) -> None:
        assert not throughs_are_same(ThroughTable(table="post_tags"), ThroughTable(table="tagging"))

    def test_models_compare_by_id(self) -> None:
        assert throughs_are_same(ThroughModel(model_id="m1"), ThroughModel(model_id="m1"))
        assert not throughs_are_same(ThroughModel(model_id="m1"), ThroughModel(model_id="m2"))

    def test_table_never_matches_model(self) -> None:
        assert not throughs_are_same(ThroughTable(table="m1"), ThroughModel(model_id="m1"))


class TestAssociationsAreSame:
    def test_same_many_to_many_through_table(self) -> None:
        assert associations_are_same(_m2m("a"), "Tag", _m2m("b", table="Post_Tags"), "Tag")

    def test_different_through_table(self) -> None:
        assert not associations_are_same(_m2m("a"), "Tag", _m2m("b", table="tagging"), "Tag")

    def test_same_simple_kind(self) -> None:
        assert associations_are_same(
            _simple("a", ManyToOne), "User", _simple("b", ManyToOne), "User"
        )

    def test_different_kind(self) -> None:
        assert not associations_are_same(
            _simple("a", ManyToOne), "User", _simple("b", OneToMany), "User"
        )

    def test_different_target(self) -> None:
        assert not associations_are_same(
            _simple("a", ManyToOne), "User", _simple("b", ManyToOne, target="model-tag"), "Tag"
        )

    def test_different_source(self) -> None:
        other = AssociationInfo(
            id="b",
            source_model_id="model-tag",
            target_model_id="model-user",
            type=ManyToOne(),
        )
        assert not associations_are_same(_simple("a", ManyToOne), "User", other, "User")

    def test_unresolved_target_is_never_same(self) -> None:
        assert not associations_are_same(_m2m("a"), None, _m2m("b"), "Tag")
        assert not associations_are_same(_m2m("a"), "Tag", _m2m("b"), None)

    def test_through_model(self) -> None:
        a = AssociationInfo(
            id="a",
            source_model_id="model-post",
            target_model_id="model-tag",
            type=ManyToMany(through=ThroughModel(model_id="model-tagging")),
        )
        b = a.model_copy(update={"id": "b"})
        assert associations_are_same(a, "Tag", b, "Tag")
        assert not associations_are_same(a, "Tag", _m2m("c"), "Tag")


class TestFindDuplicateAssociation:
    def test_finds_duplicate(self) -> None:
        post = _post([_m2m("a"), _m2m("b")])
        duplicate: Optional[AssociationInfo] = find_duplicate_association(
            post.associations[0], post, _lookup(post, TAG)
        )
        assert duplicate is not None and duplicate.id == "b"

    def test_no_duplicate_after_rename(self) -> None:
        post = _post([_m2m("a"), _m2m("b", table="tagging")])
        lookup = _lookup(post, TAG)
        assert find_duplicate_association(post.associations[0], post, lookup) is None
        assert find_duplicate_association(post.associations[1], post, lookup) is None

    def test_unresolved_target_does_not_raise(self) -> None:
        post = _post([_m2m("a", target="gone"), _m2m("b", target="gone")])
        assert find_duplicate_association(post.associations[0], post, _lookup(post)) is None

    def test_other_with_unresolved_target_is_skipped(self) -> None:
        post = _post([_simple("a", ManyToOne), _simple("b", ManyToOne, target="gone")])
        assert find_duplicate_association(post.associations[0], post, _lookup(post, USER)) is None

    def test_single_association(self) -> None:
        post = _post([_simple("a", ManyToOne)])
        assert find_duplicate_association(post.associations[0], post, _lookup(post, USER)) is None


class TestAssociationIndex:
    def test_key_ignores_table_case(self) -> None:
        assert association_key(_m2m("a")) == association_key(_m2m("b", table="POST_TAGS"))

    def test_key_separates_table_from_model(self) -> None:
        through_model = AssociationInfo(
            id="b",
            source_model_id="model-post",
            target_model_id="model-tag",
            type=ManyToMany(through=ThroughModel(model_id="post_tags")),
        )
        assert association_key(_m2m("a")) != association_key(through_model)

    def test_agrees_with_pairwise_scan(self) -> None:
        post = _post(
            [
                _m2m("a"),
                _m2m("b", table="Post_Tags"),
                _m2m("c", table="tagging"),
                _simple("d", ManyToOne),
                _simple("e", OneToMany),
                _simple("f", ManyToOne, target="gone"),
                _simple("g", ManyToOne, target="gone"),
            ]
        )
        lookup = _lookup(post, TAG, USER)
        index = AssociationIndex(post.associations, lookup)
        for association in post.associations:
            expected = find_duplicate_association(association, post, lookup) is not None
            assert index.has_duplicate(association) is expected, association.id
        assert index.has_duplicate(post.associations[0])
        assert not index.has_duplicate(post.associations[5])
