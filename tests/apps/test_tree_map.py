"""Tests for the tree map app type."""

import numpy as np
import pytest

from vizsteps.apps.tree_map import draw, slice_layout
from vizsteps.services.data import fetch_render_data, group_data


def test_slice_layout_splits_long_side() -> None:
    boxes = slice_layout(np.array([3.0, 1.0]), 400.0, 100.0)
    assert boxes == [(0.0, 0.0, 300.0, 100.0), (300.0, 0.0, 100.0, 100.0)]


def test_slice_layout_tall_box() -> None:
    boxes = slice_layout(np.array([1.0, 1.0]), 100.0, 400.0)
    assert boxes[1] == (0.0, 200.0, 100.0, 200.0)


def test_slice_layout_nothing_to_draw() -> None:
    assert slice_layout(np.zeros(3), 100.0, 100.0) == []


def test_draw_orders_by_size(state) -> None:
    group_data(state)
    state.data.viz = fetch_render_data(state)
    state.width.viz, state.height.viz = 500.0, 100.0

    nodes = draw(state)["nodes"]

    assert [node["id"] for node in nodes] == ["Germany", "Japan", "France"]
    assert sum(node["width"] for node in nodes) == pytest.approx(500.0)


def test_draw_without_data(state) -> None:
    state.data.viz = None
    assert draw(state) == {"nodes": []}
