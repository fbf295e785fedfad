"""Edge and node parsing for network-like app types."""

import logging
from typing import Any

import numpy as np

from vizsteps.services.data import to_records

logger = logging.getLogger(__name__)


def _node_key(state) -> str:
    return state.id.value or "id"


def parse_edges(state) -> None:
    """Normalize raw edges into ``{"source", "target", ...}`` records.

    Edges whose endpoints are missing, or unknown when a node list exists,
    are dropped.
    """
    source, target = state.edges.source, state.edges.target
    key = _node_key(state)
    known = None
    if state.nodes.value is not None:
        known = {node.get(key) for node in to_records(state.nodes.value)}

    edges = []
    dropped = 0
    for record in to_records(state.edges.value):
        a, b = record.get(source), record.get(target)
        if a is None or b is None or (known is not None and (a not in known or b not in known)):
            dropped += 1
            continue
        extra = {k: v for k, v in record.items() if k not in (source, target)}
        edges.append({"source": a, "target": b, **extra})

    if dropped:
        logger.warning(f"Dropped {dropped} edge(s) with missing endpoints")
    state.edges.value = edges
    state.edges.source, state.edges.target = "source", "target"
    state.edges.linked = True


def _missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and np.isnan(value))


def _circle_layout(count: int) -> np.ndarray:
    angles = np.linspace(0.0, 2.0 * np.pi, count, endpoint=False)
    return np.column_stack((0.5 + 0.5 * np.cos(angles), 0.5 + 0.5 * np.sin(angles)))


def parse_nodes(state) -> None:
    """Derive node records (with normalized x/y positions) for drawing."""
    key = _node_key(state)
    nodes: list[dict[str, Any]] = to_records(state.nodes.value)
    if not nodes:
        seen: dict[Any, None] = {}
        for edge in to_records(state.edges.value):
            seen.setdefault(edge.get(state.edges.source), None)
            seen.setdefault(edge.get(state.edges.target), None)
        nodes = [{key: node_id} for node_id in seen if node_id is not None]

    if nodes and any(_missing(node.get("x")) or _missing(node.get("y")) for node in nodes):
        for node, (x, y) in zip(nodes, _circle_layout(len(nodes))):
            node["x"], node["y"] = float(x), float(y)

    state.nodes.value = nodes
    state.nodes.positions = True
    logger.debug(f"Parsed {len(nodes)} node(s)")
