"""Network app type: nodes at their parsed positions joined by edges."""

from typing import Any

from vizsteps.core.constants import REQUIRES_EDGES, REQUIRES_NODES
from vizsteps.core.registry import AppType
from vizsteps.services.data import to_frame, to_records

NODE_RADIUS = 6.0


def setup(state) -> None:
    """Networks only draw the first level of the id hierarchy."""
    if state.depth.value != 0:
        state.depth.value = 0


def draw(state) -> dict[str, Any]:
    key = state.id.value or "id"
    width, height = state.width.viz, state.height.viz

    rows: dict[Any, dict[str, Any]] = {}
    frame = to_frame(state.data.viz)
    if frame is not None and key in frame.columns:
        rows = {row[key]: row for row in frame.to_dict("records")}

    positions = {}
    nodes = []
    for node in to_records(state.nodes.value):
        node_id = node.get(key)
        x, y = node["x"] * width, node["y"] * height
        positions[node_id] = (x, y)
        nodes.append(
            {
                "id": node_id,
                "shape": "circle",
                "cx": x,
                "cy": y,
                "r": NODE_RADIUS,
                "data": rows.get(node_id, {}),
            }
        )

    edges = []
    for edge in to_records(state.edges.value):
        if edge["source"] in positions and edge["target"] in positions:
            (x1, y1), (x2, y2) = positions[edge["source"]], positions[edge["target"]]
            edges.append(
                {
                    "source": edge["source"],
                    "target": edge["target"],
                    "x1": x1,
                    "y1": y1,
                    "x2": x2,
                    "y2": y2,
                }
            )

    return {"nodes": nodes, "edges": edges}


NETWORK = AppType(
    name="network",
    requirements=[REQUIRES_NODES, REQUIRES_EDGES],
    setup=setup,
    draw=draw,
)
