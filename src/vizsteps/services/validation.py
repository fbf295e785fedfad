"""Configuration consistency checks run before layout and drawing."""

import logging
from typing import Callable

from vizsteps.core.color_key import resolve_color_key
from vizsteps.core.constants import REQUIRES_DATA, REQUIRES_EDGES, REQUIRES_NODES
from vizsteps.errors import ConfigurationError

logger = logging.getLogger(__name__)


def find_problems(state) -> list[str]:
    """Human-readable list of everything wrong with the current settings."""
    problems = []
    descriptor = state.app_descriptor()
    if descriptor is None:
        problems.append(f"Unknown visualization type: {state.type.value!r}")

    if not state.id.value:
        problems.append("No id key has been set")

    needs_data = descriptor is None or descriptor.requires(REQUIRES_DATA)
    if needs_data and state.data.value is None:
        problems.append("No data available")

    if descriptor is not None:
        if descriptor.requires(REQUIRES_EDGES) and state.edges.value is None:
            problems.append(f"{descriptor.name} requires edges")
        if (
            descriptor.requires(REQUIRES_NODES)
            and state.nodes.value is None
            and state.edges.value is None
        ):
            problems.append(f"{descriptor.name} requires nodes")

    color_key = resolve_color_key(state)
    if color_key and state.data.keys is not None:
        in_attrs = state.attrs.keys is not None and color_key in state.attrs.keys
        if color_key not in state.data.keys and not in_attrs:
            problems.append(f"Color key {color_key!r} not found in data or attrs")

    return problems


def check_configuration(state, on_done: Callable[..., None]) -> None:
    """Record problems in ``state.error`` and report them through ``on_done``.

    Reporting never stops the draw; layout and drawing steps still run.
    """
    problems = find_problems(state)
    state.error.value = problems[0] if problems else None
    if problems:
        on_done(
            ConfigurationError("; ".join(problems), details={"problems": problems})
        )
    else:
        on_done(None)
