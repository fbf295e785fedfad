"""Focus handling: the focus tooltip and the focus highlight on shapes."""

import logging

from vizsteps.schemas.defaults import UNFOCUSED_OPACITY
from vizsteps.services.data import to_frame
from vizsteps.services.tooltip import Tooltip

logger = logging.getLogger(__name__)


def _active_key(state) -> str | None:
    levels = state.id.levels()
    if not levels:
        return None
    return levels[min(max(state.depth.value, 0), len(levels) - 1)]


def reconcile_focus(state) -> None:
    """Bind a tooltip to the focused item, or drop a focus that no longer exists."""
    focus = state.focus.value
    if focus is None:
        return

    key = _active_key(state)
    frame = to_frame(state.data.viz)
    if frame is None or key not in frame.columns:
        matches = None
    else:
        matches = frame[frame[key] == focus]

    if matches is None or matches.empty:
        logger.debug(f"Focus {focus!r} is not in the current data; clearing it")
        state.focus.value = None
        return

    state.tooltips.create(
        state.type.value, Tooltip(id=focus, content=matches.iloc[0].to_dict())
    )


def finalize_focus(state) -> None:
    """Dim every shape except the focused one."""
    group = state.g.apps.get(state.type.value)
    if group is None:
        return
    focus = state.focus.value
    for shape in group.children:
        if focus is None or shape.id == focus:
            shape.queue("opacity", 1)
        else:
            shape.queue("opacity", UNFOCUSED_OPACITY)
