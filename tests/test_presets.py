from __future__ import annotations

import pytest

from param_engine.core.presets import PresetStore
from param_engine.exceptions import DefaultPresetConflictError, DuplicatePresetError, PresetUpdateError
from param_engine.schema import ParameterPreset


def _preset(preset_id: str, *, default: bool = False, tags: tuple[str, ...] = ()) -> ParameterPreset:
    return ParameterPreset(
        id=preset_id,
        name=preset_id.title(),
        provider="acme",
        parameters={"mode": "fast"},
        tags=frozenset(tags),
        is_default=default,
    )


@pytest.fixture
def store() -> PresetStore:
    return PresetStore()


@pytest.mark.parametrize("order", [("plain", "main"), ("main", "plain")])
def test_get_default_independent_of_order(store, order):
    presets = {"plain": _preset("plain"), "main": _preset("main", default=True)}
    for preset_id in order:
        store.add(presets[preset_id])

    default = store.get_default("acme")
    assert default is not None
    assert default.id == "main"


def test_second_default_is_rejected(store):
    store.add(_preset("first", default=True))
    with pytest.raises(DefaultPresetConflictError) as exc:
        store.add(_preset("second", default=True))

    assert exc.value.existing_id == "first"
    assert [p.id for p in store.list_by_provider("acme")] == ["first"]


def test_duplicate_id_is_rejected(store):
    store.add(_preset("one"))
    with pytest.raises(DuplicatePresetError):
        store.add(_preset("one"))


def test_lookup_by_id_and_tag(store):
    store.add(_preset("creative", tags=("creative", "writing")))
    store.add(_preset("precise", tags=("precise",)))

    assert store.get_by_id("acme", "precise").id == "precise"
    assert store.get_by_id("acme", "missing") is None
    assert store.get_by_id("other", "precise") is None
    assert [p.id for p in store.list_by_tag("acme", "writing")] == ["creative"]
    assert store.list_by_provider("other") == []
    assert store.get_default("other") is None


def test_update_applies_partial_changes(store):
    store.add(_preset("one"))

    assert store.update("acme", "one", name="Renamed", tags=["new"]) is True
    updated = store.get_by_id("acme", "one")
    assert updated.name == "Renamed"
    assert updated.tags == frozenset({"new"})
    assert updated.parameters == {"mode": "fast"}


def test_update_missing_returns_false(store):
    assert store.update("acme", "nope", name="x") is False
    store.add(_preset("one"))
    assert store.update("acme", "nope", name="x") is False


def test_update_cannot_change_identity(store):
    store.add(_preset("one"))
    with pytest.raises(PresetUpdateError):
        store.update("acme", "one", id="two")


def test_update_cannot_create_second_default(store):
    store.add(_preset("main", default=True))
    store.add(_preset("other"))

    with pytest.raises(DefaultPresetConflictError):
        store.update("acme", "other", is_default=True)
    assert store.get_by_id("acme", "other").is_default is False
    # Re-flagging the current default is fine
    assert store.update("acme", "main", is_default=True) is True


def test_remove(store):
    store.add(_preset("one"))
    assert store.remove("acme", "one") is True
    assert store.remove("acme", "one") is False
    assert store.list_by_provider("acme") == []


def test_create_custom_and_stats(store):
    store.add(_preset("main", default=True))
    custom = store.create_custom("acme", "Mine", "my settings", {"n": 2}, tags=["me"], created_by="alice")

    assert custom.id.startswith("custom_")
    assert custom.is_default is False
    assert custom.created_by == "alice"
    assert store.get_by_id("acme", custom.id) == custom

    other = store.create_custom("acme", "Mine", "again", {})
    assert other.id != custom.id

    stats = store.stats()["acme"]
    assert (stats.total, stats.default, stats.custom) == (3, 1, 2)


def test_returned_presets_do_not_alias_stored_state(store):
    original = _preset("main", default=True, tags=("t",))
    store.add(original)

    original.parameters["mode"] = "changed-after-add"
    store.list_by_provider("acme")[0].parameters["mode"] = "listed"
    store.get_by_id("acme", "main").parameters["mode"] = "by-id"
    store.get_default("acme").parameters["mode"] = "default"
    store.list_by_tag("acme", "t")[0].parameters["mode"] = "tagged"

    assert store.get_by_id("acme", "main").parameters == {"mode": "fast"}


def test_update_does_not_keep_caller_dict(store):
    store.add(_preset("one"))
    parameters = {"mode": "slow"}
    store.update("acme", "one", parameters=parameters)

    parameters["mode"] = "mutated"
    assert store.get_by_id("acme", "one").parameters == {"mode": "slow"}
