"""Redraw planner.

``build_plan`` inspects the changed flags on a ``VizState`` and returns the
ordered steps needed to bring the drawn visualization back in line with the
current data, layout and settings. The order is a dependency order: loads
before parsing, parsing before grouping, grouping before fetching, fetching
before the color scale, all data and layout work before drawing, drawing
before finalization.

Building a plan has no side effects. Steps mutate the state only when an
executor runs them.
"""

import logging
from typing import Any, Callable

from vizsteps.core.color_key import resolve_color_key
from vizsteps.core.constants import (
    KEY_NUMBER,
    REQUIRES_EDGES,
    REQUIRES_NODES,
    URL_CHANNELS,
    StepNames,
)
from vizsteps.schemas.locale import string_format
from vizsteps.schemas.steps import Step, sequence, single
from vizsteps.services.collaborators import DEFAULT_COLLABORATORS, Collaborators

logger = logging.getLogger(__name__)


# =============================================================================
# Step bodies and guards
# =============================================================================


def determine_color_type(state) -> None:
    """Classify the color encoding from the data and attrs key indexes."""
    color = state.color
    if color.changed and color.value:
        color.value_scale = None
        key = resolve_color_key(state)
        if state.data.keys is not None and key in state.data.keys:
            color.type = state.data.keys[key]
        elif state.attrs.keys is not None and key in state.attrs.keys:
            color.type = state.attrs.keys[key]
        else:
            color.type = None
    elif not color.value:
        if state.data.keys is not None:
            color.type = state.data.keys.get(state.id.value)
        else:
            color.type = False


def needs_color_scale(state) -> bool:
    """Whether the numeric color scale must be recomputed right now."""
    color = state.color.value
    if not color or state.color.type != KEY_NUMBER:
        return False
    if color in state.id.nesting or color == state.id.value:
        return False
    if state.data.value is None:
        return False
    time = state.time
    return bool(
        state.color.changed
        or state.data.changed
        or state.depth.changed
        or (time.fixed.value and (time.solo.changed or time.mute.changed))
    )


def reset_tooltips(state) -> None:
    app_type = state.type.value
    previous = state.type.previous
    if previous and previous != app_type:
        state.tooltips.remove(previous)
    state.tooltips.remove(app_type)


def _loader(c: Collaborators, channel: str) -> Callable[[Any, Callable[..., None]], None]:
    def load(state, done) -> None:
        c.load(state, channel, done)

    return load


def _reindex_data(c: Collaborators) -> Callable[[Any], None]:
    def reindex(state) -> None:
        state.data.cache = {}
        state.nodes.restricted = None
        state.edges.restricted = None
        c.index_keys(state, "data")

    return reindex


def _reindex_attrs(c: Collaborators) -> Callable[[Any], None]:
    def reindex(state) -> None:
        c.index_keys(state, "attrs")

    return reindex


def _fetch(c: Collaborators) -> Callable[[Any], None]:
    def fetch(state) -> None:
        state.data.pool = c.fetch_render_data(state)
        if not state.time.fixed.value:
            state.data.viz = state.data.pool
        else:
            state.data.viz = c.fetch_render_data(state, c.time_selection(state))

    return fetch


def _validate(c: Collaborators) -> Callable[[Any], None]:
    def report(error: Exception | None = None) -> None:
        if error is not None:
            logger.warning(f"Configuration problem: {error}")

    def check(state) -> None:
        c.validate(state, report)

    return check


# =============================================================================
# Planner
# =============================================================================


def build_plan(state, collaborators: Collaborators | None = None) -> list[Step]:
    """Ordered steps for the next redraw of ``state``."""
    c = collaborators or DEFAULT_COLLABORATORS
    steps: list[Step] = []
    app_type = state.type.value
    locale = state.locale
    messages = locale.message

    # --- Remote loads ---
    for channel in URL_CHANNELS:
        setting = getattr(state, channel)
        if setting.url and not setting.loaded:
            steps.append(
                Step(
                    name=StepNames.load(channel),
                    action=single(_loader(c, channel)),
                    message=messages.loading,
                    wait=True,
                )
            )

    if state.draw.update:
        descriptor = state.app_descriptor()
        app_message = string_format(messages.initializing, locale.app_name(app_type))
        data_message = messages.data

        if descriptor is not None and descriptor.setup is not None:
            steps.append(
                Step(
                    name=StepNames.APP_SETUP,
                    action=single(descriptor.setup),
                    message=app_message,
                )
            )

        if state.container.changed:
            steps.append(
                Step(
                    name=StepNames.SURFACE_INIT,
                    action=single(c.create_root_groups),
                    message=app_message,
                )
            )

        if descriptor is not None and app_type not in state.g.apps:
            steps.append(
                Step(
                    name=StepNames.GROUP_CREATE,
                    action=single(c.create_app_group),
                    message=app_message,
                )
            )

        if state.data.changed:
            steps.append(
                Step(
                    name=StepNames.DATA_REINDEX,
                    action=single(_reindex_data(c)),
                    message=data_message,
                )
            )

        if state.attrs.changed:
            steps.append(
                Step(
                    name=StepNames.ATTRS_REINDEX,
                    action=single(_reindex_attrs(c)),
                    message=data_message,
                )
            )

        steps.append(
            Step(
                name=StepNames.COLOR_TYPE,
                action=single(determine_color_type),
                message=data_message,
            )
        )

        has_edges = state.edges.value is not None or bool(state.edges.url)
        if descriptor is not None and has_edges:
            if descriptor.requires(REQUIRES_EDGES) and (
                not state.edges.linked or state.edges.changed
            ):
                steps.append(
                    Step(
                        name=StepNames.EDGE_PARSE,
                        action=single(c.parse_edges),
                        message=data_message,
                    )
                )
            if descriptor.requires(REQUIRES_NODES) and (
                not state.nodes.positions or state.nodes.changed
            ):
                steps.append(
                    Step(
                        name=StepNames.NODE_PARSE,
                        action=single(c.parse_nodes),
                        message=data_message,
                    )
                )

        if state.data.changed or state.time.changed or state.id.changed:
            steps.append(
                Step(
                    name=StepNames.DATA_FORMAT,
                    action=single(c.group_data),
                    message=data_message,
                )
            )

        steps.append(
            Step(
                name=StepNames.DATA_FETCH,
                action=single(_fetch(c)),
                message=data_message,
            )
        )

        steps.append(
            Step(
                name=StepNames.COLOR_SCALE,
                action=single(c.compute_color_scale),
                message=data_message,
                check=needs_color_scale,
            )
        )

    # --- UI ---
    steps.append(
        Step(
            name=StepNames.TOOLTIP_RESET,
            action=single(reset_tooltips),
            message=messages.ui,
        )
    )
    steps.append(
        Step(
            name=StepNames.VALIDATION,
            action=single(_validate(c)),
            message=messages.ui,
        )
    )
    steps.append(
        Step(
            name=StepNames.LAYOUT,
            action=single(c.update_layout),
            message=messages.ui,
        )
    )
    steps.append(
        Step(
            name=StepNames.FOCUS_TOOLTIP,
            action=single(c.reconcile_focus),
            message=messages.ui,
        )
    )

    # --- Drawing ---
    steps.append(
        Step(
            name=StepNames.SURFACE_COMMIT,
            action=single(c.commit_surface),
            message=messages.draw,
        )
    )
    if state.draw.update and state.app_descriptor() is not None:
        steps.append(
            Step(
                name=StepNames.DRAW_SHAPES,
                action=sequence(c.draw_type, c.draw_shapes),
                message=messages.draw,
            )
        )
    steps.append(
        Step(
            name=StepNames.FINALIZE,
            action=sequence(c.finalize_focus, c.finish),
            message=messages.draw,
        )
    )

    logger.debug(
        f"Planned {len(steps)} step(s) for {app_type}: {[step.name for step in steps]}"
    )
    return steps
