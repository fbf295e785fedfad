"""Test data factories for generating valid state objects."""

from typing import Any

import pandas as pd

from vizsteps.core.registry import AppType
from vizsteps.schemas import VizState


def create_trade_frame() -> pd.DataFrame:
    """Small dataset with a two-level hierarchy and two years."""
    return pd.DataFrame(
        {
            "region": ["Europe", "Europe", "Europe", "Europe", "Asia", "Asia"],
            "country": ["France", "France", "Germany", "Germany", "Japan", "Japan"],
            "year": [2019, 2020, 2019, 2020, 2019, 2020],
            "exports": [570.0, 488.0, 1489.0, 1380.0, 706.0, 641.0],
            "growth": [1.2, -14.4, -1.3, -7.3, -4.4, -9.2],
        }
    )


def create_edges() -> list[dict[str, Any]]:
    return [
        {"source": "ATL", "target": "LAX"},
        {"source": "ATL", "target": "ORD"},
        {"source": "ORD", "target": "DEN"},
    ]


def create_state(app_type: str = "tree_map", **kwargs: Any) -> VizState:
    """A tree map over the trade data, as after a fresh ``apply_config``."""
    state = VizState(**kwargs)
    state.set("type", app_type)
    state.set("id", "country")
    state.set("id.nesting", ["region", "country"])
    state.set("depth", 1)
    state.set("time", "year")
    state.set("size", "exports")
    state.set("data", create_trade_frame())
    return state


def create_network_state(with_setup: bool = True) -> VizState:
    """A network over three airports; optionally with a setup-free type."""
    state = VizState()
    if not with_setup:
        state.types.register(AppType(name="network", requirements=["nodes", "edges"]))
    state.set("type", "network")
    state.set("id", "airport")
    state.set(
        "data",
        pd.DataFrame({"airport": ["ATL", "LAX", "ORD", "DEN"], "traffic": [4, 3, 2, 1]}),
    )
    state.set("edges", create_edges())
    return state


def run_steps(state: VizState, plan, names=None) -> None:
    """Run the (named) synchronous steps of a plan in order, honoring checks."""
    for step in plan:
        if names is not None and step.name not in names:
            continue
        if step.check is not None and not step.check(state):
            continue
        step.action.run(state)
