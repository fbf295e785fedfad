"""Retained-mode drawing surface.

The surface is a tree of ``Node`` objects. Attribute changes made through
``Node.queue`` are held until ``Surface.commit`` applies them, so a whole
redraw lands on the surface at once.
"""

import logging
from typing import Any, Iterator

logger = logging.getLogger(__name__)

# Root groups in paint order.
ROOT_GROUPS = ("titles", "app", "timeline", "legend", "drawer")


class Node:
    """A drawable element (group, shape, widget) on the surface."""

    def __init__(self, tag: str, id: str | None = None, **attrs: Any) -> None:
        self.tag = tag
        self.id = id
        self.attrs: dict[str, Any] = dict(attrs)
        self.children: list["Node"] = []
        self.parent: "Node | None" = None
        self.pending: dict[str, Any] = {}

    def append(self, child: "Node") -> "Node":
        if child.parent is not None:
            child.parent.children.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    def remove(self) -> None:
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None

    def clear(self) -> None:
        for child in list(self.children):
            child.remove()

    def select(self, id: str) -> "Node | None":
        """First descendant with the given id (depth first)."""
        for node in self.walk():
            if node is not self and node.id == id:
                return node
        return None

    def walk(self) -> Iterator["Node"]:
        yield self
        for child in self.children:
            yield from child.walk()

    def attr(self, name: str, value: Any) -> "Node":
        """Set an attribute immediately."""
        self.attrs[name] = value
        self.pending.pop(name, None)
        return self

    def queue(self, name: str, value: Any) -> "Node":
        """Stage an attribute change until the next commit."""
        self.pending[name] = value
        return self

    def height(self) -> float:
        return float(self.attrs.get("height", 0.0))

    def __repr__(self) -> str:
        return f"Node({self.tag!r}, id={self.id!r}, children={len(self.children)})"


class Surface(Node):
    """Root of a drawing surface."""

    def __init__(self, width: float = 0.0, height: float = 0.0) -> None:
        super().__init__("svg", id="root", width=width, height=height)
        self.commits = 0

    def commit(self) -> int:
        """Apply every queued attribute change; returns the number applied."""
        applied = 0
        for node in self.walk():
            if node.pending:
                node.attrs.update(node.pending)
                applied += len(node.pending)
                node.pending = {}
        self.commits += 1
        return applied


def create_root_groups(state) -> None:
    """(Re)create the root group hierarchy on the container surface.

    App groups created on a previous surface are moved onto the new app
    group so that they stay tracked.
    """
    surface = state.container.value
    if surface is None:
        surface = Surface(state.width.value, state.height.value)
        state.container.value = surface
    surface.clear()
    surface.attr("width", state.width.value).attr("height", state.height.value)

    groups = {name: surface.append(Node("g", id=name)) for name in ROOT_GROUPS}
    state.g.root = surface
    state.g.titles = groups["titles"]
    state.g.app = groups["app"]
    state.g.timeline = groups["timeline"]
    state.g.legend = groups["legend"]
    state.g.drawer = groups["drawer"]

    for group in state.g.apps.values():
        state.g.app.append(group)
    logger.debug(f"Root groups created on surface ({len(state.g.apps)} app groups kept)")


def create_app_group(state) -> None:
    """Create and track the drawing group of the active app type."""
    app_type = state.type.value
    if state.g.app is None:
        create_root_groups(state)
    group = Node("g", id=app_type, opacity=0)
    state.g.app.append(group)
    state.g.apps[app_type] = group


def commit_surface(state) -> None:
    surface = state.container.value
    if surface is None:
        logger.warning("No surface to commit")
        return
    applied = surface.commit()
    logger.debug(f"Committed {applied} attribute changes to the surface")
