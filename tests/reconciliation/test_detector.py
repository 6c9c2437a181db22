"""Tests for delta detection."""
import pytest

from reconciliation.detector import CorrespondenceDelta, Operation, compute_delta
from reference.entity import EntityReference, MemoryEntity


def _node(entity_id=1, original=None, **fields):
    entity = MemoryEntity(entity_type="node", bundle="article", id=entity_id, fields=fields)
    entity.original = original
    return entity


def _ids(references):
    return [reference.target_id for reference in references]


class TestNewEntity:
    """Entities without a snapshot link every current reference."""

    def test_all_references_linked(self):
        delta = compute_delta(_node(field_a=[2, 3]), "field_a")
        assert _ids(delta.to_link) == [2, 3]
        assert delta.to_unlink == []

    def test_empty_field(self):
        delta = compute_delta(_node(field_a=[]), "field_a")
        assert not delta

    def test_duplicate_targets_collapse(self):
        delta = compute_delta(_node(field_a=[2, "2", 3]), "field_a")
        assert _ids(delta.to_link) == [2, 3]


class TestUpdatedEntity:
    """Entities with a snapshot are compared by target id."""

    def test_added_reference(self):
        entity = _node(field_a=[2, 3], original=_node(field_a=[2]))
        delta = compute_delta(entity, "field_a")
        assert _ids(delta.to_link) == [3]
        assert delta.to_unlink == []

    def test_removed_reference(self):
        entity = _node(field_a=[2], original=_node(field_a=[2, 3]))
        delta = compute_delta(entity, "field_a")
        assert delta.to_link == []
        assert _ids(delta.to_unlink) == [3]

    def test_replaced_reference(self):
        entity = _node(field_a=[4], original=_node(field_a=[3]))
        delta = compute_delta(entity, "field_a")
        assert _ids(delta.to_link) == [4]
        assert _ids(delta.to_unlink) == [3]

    def test_unchanged_produces_nothing(self):
        entity = _node(field_a=[2, 3], original=_node(field_a=[3, 2]))
        assert not compute_delta(entity, "field_a")

    def test_compared_by_id_not_object(self):
        entity = _node(field_a=[EntityReference("2")], original=_node(field_a=[EntityReference(2)]))
        assert not compute_delta(entity, "field_a")

    def test_snapshot_without_field_links_everything(self):
        entity = _node(field_a=[2], original=_node())
        assert _ids(compute_delta(entity, "field_a").to_link) == [2]

    def test_bootstrap_ignores_snapshot(self):
        entity = _node(field_a=[2, 3], original=_node(field_a=[2, 3]))
        delta = compute_delta(entity, "field_a", bootstrap=True)
        assert _ids(delta.to_link) == [2, 3]


class TestMissingField:

    def test_entity_without_field_is_empty(self):
        delta = compute_delta(_node(field_b=[2]), "field_a")
        assert delta.to_link == [] and delta.to_unlink == []


class TestCorrespondenceDelta:

    def test_items_links_first(self):
        delta = CorrespondenceDelta(to_link=[EntityReference(1)], to_unlink=[EntityReference(2)])
        assert list(delta.items()) == [
            (Operation.LINK, EntityReference(1)),
            (Operation.UNLINK, EntityReference(2)),
        ]

    @pytest.mark.parametrize("delta,expected", [
        (CorrespondenceDelta(), False),
        (CorrespondenceDelta(to_link=[EntityReference(1)]), True),
        (CorrespondenceDelta(to_unlink=[EntityReference(1)]), True),
    ])
    def test_truthiness(self, delta, expected):
        assert bool(delta) is expected
