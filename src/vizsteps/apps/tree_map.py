"""Tree map app type: slice-and-dice rectangles sized by the size key."""

from typing import Any

import numpy as np

from vizsteps.core.constants import REQUIRES_DATA
from vizsteps.core.registry import AppType
from vizsteps.services.data import to_frame


def slice_layout(
    sizes: np.ndarray, width: float, height: float
) -> list[tuple[float, float, float, float]]:
    """Split the box into strips proportional to ``sizes`` along its long side."""
    total = sizes.sum()
    if total <= 0:
        return []
    offsets = np.concatenate(([0.0], np.cumsum(sizes / total)))
    horizontal = width >= height
    boxes = []
    for start, end in zip(offsets[:-1], offsets[1:]):
        if horizontal:
            boxes.append((start * width, 0.0, (end - start) * width, height))
        else:
            boxes.append((0.0, start * height, width, (end - start) * height))
    return boxes


def draw(state) -> dict[str, Any]:
    frame = to_frame(state.data.viz)
    levels = state.id.levels()
    if frame is None or frame.empty or not levels:
        return {"nodes": []}

    key = levels[min(max(state.depth.value, 0), len(levels) - 1)]
    if key not in frame.columns:
        return {"nodes": []}

    size_key = state.size.value
    if size_key and size_key in frame.columns:
        sizes = frame[size_key].fillna(0).clip(lower=0).to_numpy(dtype=float)
    else:
        sizes = np.ones(len(frame))

    order = np.argsort(-sizes, kind="stable")
    records = frame.to_dict("records")
    boxes = slice_layout(sizes[order], state.width.viz, state.height.viz)
    nodes = []
    for index, (x, y, w, h) in zip(order, boxes):
        record = records[index]
        nodes.append(
            {"id": record[key], "x": x, "y": y, "width": w, "height": h, "data": record}
        )
    return {"nodes": nodes}


TREE_MAP = AppType(name="tree_map", requirements=REQUIRES_DATA, draw=draw)
