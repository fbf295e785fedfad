"""Drawing collaborators: app draw routine, shapes and the finishing pass."""

import logging
from typing import Any

from vizsteps.core.color_key import resolve_color_key
from vizsteps.services.color import category_color
from vizsteps.services.scene import Node, commit_surface

logger = logging.getLogger(__name__)


def run_app_type(state) -> None:
    """Ask the active app type for the shapes it wants drawn."""
    descriptor = state.app_descriptor()
    if descriptor is None or descriptor.draw is None:
        state.returned = {"nodes": [], "edges": []}
        return
    state.returned = descriptor.draw(state)


def shape_color(state, shape: dict[str, Any]) -> str:
    key = resolve_color_key(state)
    data = shape.get("data", {})
    if key and key in data:
        if state.color.value_scale is not None:
            return state.color.value_scale(data[key])
        return category_color(data[key])
    return category_color(shape.get("id"))


def draw_shapes(state) -> None:
    """Replace the app group's children with the returned shapes."""
    group = state.g.apps.get(state.type.value)
    if group is None:
        logger.warning(f"No drawing group for {state.type.value}")
        return
    returned = state.returned or {}
    group.clear()

    for edge in returned.get("edges", []):
        group.append(
            Node(
                "line",
                id=f"{edge['source']}_{edge['target']}",
                x1=edge["x1"],
                y1=edge["y1"],
                x2=edge["x2"],
                y2=edge["y2"],
            )
        )

    for shape in returned.get("nodes", []):
        geometry = {k: v for k, v in shape.items() if k not in ("id", "shape", "data")}
        group.append(
            Node(
                shape.get("shape", "rect"),
                id=shape["id"],
                fill=shape_color(state, shape),
                **geometry,
            )
        )

    logger.info(f"Drew {len(group.children)} shape(s) for {state.type.value}")


def finish(state) -> None:
    """Fade in the active app group, hide the others, and commit."""
    for app_type, group in state.g.apps.items():
        group.queue("opacity", 1 if app_type == state.type.value else 0)
    commit_surface(state)
