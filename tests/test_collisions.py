"""Tests for output name collision handling."""

import pytest

from slicer_profile_converter.collisions import OutputStore, resolve_collision
from slicer_profile_converter.models import CollisionPolicy

EXISTING = {"a": "1", "b": "2"}
NEW = {"b": "3", "c": "4"}


@pytest.mark.parametrize("policy", list(CollisionPolicy))
def test_first_insertion_stores_new(policy):
    assert resolve_collision("x", NEW, {}, policy) == NEW


def test_skip_keeps_existing():
    assert resolve_collision("x", NEW, {"x": EXISTING}, CollisionPolicy.SKIP) == EXISTING


def test_overwrite_replaces():
    assert resolve_collision("x", NEW, {"x": EXISTING}, CollisionPolicy.OVERWRITE) == NEW


def test_merge_is_shallow_and_new_wins():
    merged = resolve_collision("x", NEW, {"x": EXISTING}, CollisionPolicy.MERGE)
    assert merged == {"a": "1", "b": "3", "c": "4"}
    assert EXISTING == {"a": "1", "b": "2"}


def test_default_policy_is_skip():
    assert resolve_collision("x", NEW, {"x": EXISTING}) == EXISTING


def test_empty_existing_profile_still_counts():
    assert resolve_collision("x", NEW, {"x": {}}, CollisionPolicy.SKIP) == {}


class TestOutputStore:
    def test_put_applies_policy(self):
        store = OutputStore(CollisionPolicy.MERGE)
        store.put("x", EXISTING)
        stored = store.put("x", NEW)
        assert stored == {"a": "1", "b": "3", "c": "4"}
        assert store.get("x") == stored

    def test_container_protocol(self):
        store = OutputStore()
        store.put("b", {})
        store.put("a", {})
        assert "a" in store
        assert "z" not in store
        assert len(store) == 2
        assert list(store) == ["b", "a"]
        assert store.to_dict() == {"b": {}, "a": {}}
