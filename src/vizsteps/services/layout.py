"""Layout pass: margins, titles, UI widgets, history and viewport size.

A full pass rebuilds the drawer, timeline and legend; a lightweight pass
only measures what is already on the surface.
"""

import logging

from vizsteps.core.color_key import resolve_color_key
from vizsteps.schemas.defaults import (
    DRAWER_ROW_HEIGHT,
    LEGEND_HEIGHT,
    SUB_TITLE_HEIGHT,
    TIMELINE_HEIGHT,
    TITLE_HEIGHT,
)
from vizsteps.schemas.state import HistoryEntry
from vizsteps.services.data import to_frame
from vizsteps.services.scene import Node

logger = logging.getLogger(__name__)

LEGEND_MAX_KEYS = 10


def process_margin(state) -> None:
    """Reset margins and usable extents before widgets claim space."""
    state.margin.process()
    state.height.viz = state.height.value
    state.width.viz = state.width.value


def draw_titles(state) -> None:
    group = state.g.titles
    if group is None:
        return
    group.clear()
    if state.title.value:
        group.append(Node("text", id="title", text=state.title.value, height=TITLE_HEIGHT))
        state.margin.top += TITLE_HEIGHT
        if state.title.sub:
            group.append(
                Node("text", id="sub", text=state.title.sub, height=SUB_TITLE_HEIGHT)
            )
            state.margin.top += SUB_TITLE_HEIGHT


def draw_drawer(state) -> None:
    """Control panel below the visualization, one row per UI control."""
    group = state.g.drawer
    if group is None:
        return
    group.clear()
    controls = state.ui.value or []
    height = len(controls) * DRAWER_ROW_HEIGHT
    group.append(Node("div", id="drawer", height=height, controls=list(controls)))
    state.margin.bottom += height


def draw_timeline(state) -> None:
    group = state.g.timeline
    if group is None:
        return
    group.clear()
    times = state.data.time_values
    if state.timeline.value and len(times) > 1:
        group.append(
            Node("g", id="timeline", y=0.0, height=TIMELINE_HEIGHT, ticks=list(times))
        )
        state.margin.bottom += TIMELINE_HEIGHT


def draw_legend(state) -> None:
    group = state.g.legend
    if group is None:
        return
    group.clear()
    if not (state.legend.value and state.color.value):
        return

    scale = state.color.value_scale
    if scale is not None:
        stops = [(value, scale(value)) for value in scale.domain]
        group.append(Node("g", id="legend", y=0.0, height=LEGEND_HEIGHT, stops=stops))
    else:
        key = resolve_color_key(state)
        frame = to_frame(state.data.viz)
        if frame is None or key not in frame.columns:
            return
        keys = frame[key].dropna().unique().tolist()[:LEGEND_MAX_KEYS]
        group.append(Node("g", id="legend", y=0.0, height=LEGEND_HEIGHT, keys=keys))
    state.margin.bottom += LEGEND_HEIGHT


def _extent(group: Node | None, enabled: bool) -> float:
    """Bottom edge (height + y) of what a widget group currently holds."""
    if group is None or not enabled:
        return 0.0
    return max(
        (child.height() + float(child.attrs.get("y", 0.0)) for child in group.children),
        default=0.0,
    )


def measure_widgets(state) -> None:
    """Fold already-drawn drawer, timeline and legend into the bottom margin."""
    drawer = _extent(state.g.drawer, True)
    timeline = _extent(state.g.timeline, bool(state.timeline.value))
    legend = _extent(state.g.legend, bool(state.legend.value))
    state.margin.bottom += drawer + timeline + legend


def update_history(state) -> None:
    """Record the current browsing state when it differs from the last one."""
    entry = HistoryEntry(
        type=state.type.value,
        depth=state.depth.value,
        id=state.id.value,
        focus=state.focus.value,
    )
    states = state.history.states
    if not states or states[-1] != entry:
        states.append(entry)


def update_layout(state) -> None:
    process_margin(state)
    draw_titles(state)

    if state.draw.update:
        draw_drawer(state)
        draw_timeline(state)
        draw_legend(state)
    else:
        measure_widgets(state)

    update_history(state)
    state.height.viz -= state.margin.top + state.margin.bottom
    state.width.viz -= state.margin.left + state.margin.right
    logger.debug(f"Viewport is {state.width.viz:.0f}x{state.height.viz:.0f}")
