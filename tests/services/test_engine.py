"""End-to-end tests for the draw engine."""

import asyncio
import threading
from dataclasses import replace
from pathlib import Path
from unittest.mock import patch

import pytest

import vizsteps.infrastructure.config_manager as config_manager_module
import vizsteps.services.data as data_module
from vizsteps.core.constants import StepNames as S
from vizsteps.schemas import VizState
from vizsteps.services.collaborators import DEFAULT_COLLABORATORS
from vizsteps.services.engine import DrawEngine
from vizsteps.services.scene import Surface

from ..factories import create_network_state, create_state, create_trade_frame

CONFIGS = Path(__file__).resolve().parents[2] / "configs"
DATA_RULES = (S.DATA_REINDEX, S.ATTRS_REINDEX, S.EDGE_PARSE, S.NODE_PARSE, S.DATA_FORMAT)


def test_full_draw_renders_tree_map(state) -> None:
    state.set("color", "growth")
    state.set("title", "Exports")
    engine = DrawEngine(state)

    report = engine.draw_sync()

    assert report.succeeded
    assert S.COLOR_SCALE in report.executed
    assert state.changed_paths() == []
    assert isinstance(state.container.value, Surface)

    group = state.g.apps["tree_map"]
    assert group.attrs["opacity"] == 1
    assert {shape.id for shape in group.children} == {"France", "Germany", "Japan"}
    assert all(shape.attrs["fill"].startswith("#") for shape in group.children)
    assert state.color.value_scale is not None
    assert state.height.viz < state.height.value


def test_time_selection_restricts_drawn_data(state) -> None:
    state.set("time.solo", [2020])
    DrawEngine(state).draw_sync()

    france = state.data.viz.set_index("country").loc["France", "exports"]
    assert france == 488.0
    pool_france = state.data.pool.set_index("country").loc["France", "exports"]
    assert pool_france == 570.0 + 488.0


def test_second_draw_only_redoes_what_changed(state) -> None:
    engine = DrawEngine(state)
    engine.draw_sync()

    state.set("time.solo", [2019])
    report = engine.draw_sync()

    assert report.succeeded
    for name in (S.SURFACE_INIT, S.GROUP_CREATE, S.DATA_REINDEX, S.DATA_FORMAT):
        assert name not in report.executed
    assert S.DRAW_SHAPES in report.executed


def test_lightweight_redraw_keeps_shapes(state) -> None:
    engine = DrawEngine(state)
    engine.draw_sync()
    shapes_before = list(state.g.apps["tree_map"].children)

    state.draw.update = False
    report = engine.draw_sync()

    assert report.succeeded
    assert S.DRAW_SHAPES not in report.executed
    assert state.g.apps["tree_map"].children == shapes_before


def test_network_draw() -> None:
    state = create_network_state()
    report = DrawEngine(state).draw_sync()

    assert report.succeeded
    assert S.APP_SETUP in report.executed
    assert state.edges.linked
    assert state.nodes.positions
    group = state.g.apps["network"]
    assert sum(1 for shape in group.children if shape.tag == "circle") == 4
    assert sum(1 for shape in group.children if shape.tag == "line") == 3


def test_load_from_file(tmp_path, state_factory) -> None:
    path = tmp_path / "trade.csv"
    create_trade_frame().to_csv(path, index=False)
    state = state_factory()
    state.data.value = None
    state.load_url("data", str(path))

    report = DrawEngine(state).draw_sync()

    assert report.executed[0] == "load_data"
    assert report.succeeded
    assert state.data.loaded
    assert state.data.keys["exports"] == "number"


def test_failed_load_keeps_changed_flags(tmp_path, state) -> None:
    state.load_url("data", str(tmp_path / "missing.csv"))
    report = DrawEngine(state).draw_sync()

    assert report.failed == "load_data"
    assert "missing.csv" in report.error
    assert "data" in state.changed_paths()
    assert not state.data.loaded


def test_newer_draw_supersedes_older_one(state) -> None:
    """Completions of a superseded draw's load are discarded."""
    pending = []

    def slow_load(state, channel, done) -> None:
        pending.append(done)

    state.load_url("data", "remote.csv")
    engine = DrawEngine(state, replace(DEFAULT_COLLABORATORS, load=slow_load))

    async def scenario():
        first = asyncio.create_task(engine.draw())
        while len(pending) < 1:
            await asyncio.sleep(0)
        second = asyncio.create_task(engine.draw())
        while len(pending) < 2:
            await asyncio.sleep(0)
        pending[1]()
        second_report = await second
        pending[0]()
        first_report = await first
        return first_report, second_report

    first_report, second_report = asyncio.run(scenario())

    assert second_report.succeeded
    assert second_report.generation == 2
    assert first_report.stale
    assert first_report.executed == []


def test_configuration_problems_do_not_stop_drawing(state) -> None:
    state.set("color", "nonexistent")
    report = DrawEngine(state).draw_sync()

    assert report.succeeded
    assert "nonexistent" in state.error.value
    assert S.DRAW_SHAPES in report.executed


def test_type_switch_removes_old_tooltips(state) -> None:
    from vizsteps.services.tooltip import Tooltip

    engine = DrawEngine(state)
    engine.draw_sync()
    state.tooltips.create("tree_map", Tooltip(id="France"))

    state.set("type", "network")
    state.set("id", "country")
    engine.draw_sync()

    assert state.tooltips.bound("tree_map") == []


def _names(plan) -> list[str]:
    return [step.name for step in plan]


def _configured_state(filename: str) -> VizState:
    state = VizState()
    with patch.object(config_manager_module, "CONFIG_DIR", CONFIGS):
        config = config_manager_module.load_config(filename)
        config_manager_module.apply_config(state, config)
    return state


def test_network_from_files_parses_on_first_draw() -> None:
    state = _configured_state("network.json")
    engine = DrawEngine(state)

    first = _names(engine.plan())
    assert first[:2] == ["load_data", "load_edges"]
    assert S.EDGE_PARSE in first and S.NODE_PARSE in first

    report = engine.draw_sync()

    assert report.succeeded
    group = state.g.apps["network"]
    assert sum(1 for shape in group.children if shape.tag == "circle") == 5
    assert sum(1 for shape in group.children if shape.tag == "line") == 5

    second = _names(engine.plan())
    for name in DATA_RULES + ("load_data", "load_edges"):
        assert name not in second


@pytest.mark.parametrize(
    "make_state",
    [create_state, lambda: create_network_state(with_setup=True)],
    ids=["tree_map", "network"],
)
def test_redraw_after_successful_draw_skips_data_rules(make_state) -> None:
    state = make_state()
    engine = DrawEngine(state)
    assert engine.draw_sync().succeeded

    second = _names(engine.plan())
    for name in DATA_RULES:
        assert name not in second
    assert S.DRAW_SHAPES in second


def test_id_change_refetches_regrouped_data(state_factory) -> None:
    state = state_factory()
    state.set("id.nesting", [])
    state.set("depth", 0)
    engine = DrawEngine(state)
    engine.draw_sync()
    assert sorted(state.data.viz["country"]) == ["France", "Germany", "Japan"]

    state.set("id", "region")
    report = engine.draw_sync()

    assert S.DATA_FORMAT in report.executed
    assert sorted(state.data.viz["region"]) == ["Asia", "Europe"]
    assert len(state.data.pool) == 2


def test_superseded_load_does_not_overwrite_newer_data(state) -> None:
    old_frame = create_trade_frame().assign(country="Old")
    new_frame = create_trade_frame()
    old_started = threading.Event()
    release_old = threading.Event()

    def read_source(url):
        if url == "old.csv":
            old_started.set()
            release_old.wait(timeout=5)
            return old_frame
        return new_frame

    engine = DrawEngine(state)
    state.load_url("data", "old.csv")

    async def scenario():
        first = asyncio.create_task(engine.draw())
        while not old_started.is_set():
            await asyncio.sleep(0.01)
        state.load_url("data", "new.csv")
        second_report = await engine.draw()
        release_old.set()
        first_report = await first
        return first_report, second_report

    with patch.object(data_module, "read_source", read_source):
        first_report, second_report = asyncio.run(scenario())

    assert first_report.stale
    assert second_report.succeeded
    assert state.data.url == "new.csv"
    assert state.data.loaded
    assert "Old" not in state.data.value["country"].tolist()
    assert "Old" not in state.data.viz["country"].tolist()


def test_unexpected_reader_error_aborts_instead_of_hanging(state) -> None:
    def read_source(url):
        raise KeyError("parser exploded")

    state.load_url("data", "odd.csv")
    with patch.object(data_module, "read_source", read_source):
        report = DrawEngine(state).draw_sync()

    assert report.failed == "load_data"
    assert "parser exploded" in report.error
