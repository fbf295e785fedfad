"""Tests for the visualization state diff model."""

import pytest

from vizsteps.errors import ConfigurationError
from vizsteps.schemas import VizState


def test_fresh_state_only_flags_the_container() -> None:
    assert VizState().changed_paths() == ["container"]


def test_set_records_previous_value() -> None:
    state = VizState()
    state.set("type", "network")
    assert state.type.value == "network"
    assert state.type.previous == "tree_map"
    assert state.type.changed


def test_set_nested_setting() -> None:
    state = VizState()
    state.set("time.solo", [2020])
    assert state.time.solo.value == [2020]
    assert state.changed_paths() == ["container", "time.solo"]
    assert not state.time.changed


def test_set_plain_attribute_flags_its_owner() -> None:
    state = VizState()
    state.set("id.nesting", ["region", "country"])
    assert state.id.nesting == ["region", "country"]
    assert state.id.changed


def test_set_unknown_path_raises() -> None:
    state = VizState()
    with pytest.raises(ConfigurationError, match="Unknown setting: colour"):
        state.set("colour", "red")
    with pytest.raises(ConfigurationError):
        state.set("time.solo.extra", 1)


def test_reset_changed_clears_nested_flags() -> None:
    state = VizState()
    state.set("type", "network")
    state.set("time.mute", [2019])

    state.reset_changed()

    assert state.changed_paths() == []
    assert state.type.previous == "tree_map"


def test_load_url_stages_a_load() -> None:
    state = VizState()
    state.data.loaded = True
    state.load_url("data", "trade.csv")
    assert state.data.url == "trade.csv"
    assert not state.data.loaded
    assert state.data.changed


def test_load_url_rejects_unknown_channel() -> None:
    with pytest.raises(ConfigurationError):
        VizState().load_url("tooltips", "x.csv")


def test_app_descriptor_follows_type() -> None:
    state = VizState()
    assert state.app_descriptor().name == "tree_map"
    state.set("type", "pie_chart")
    assert state.app_descriptor() is None


def test_id_levels_default_to_id_key() -> None:
    state = VizState()
    assert state.id.levels() == []
    state.set("id", "country")
    assert state.id.levels() == ["country"]
    state.set("id.nesting", ["region", "country"])
    assert state.id.levels() == ["region", "country"]
