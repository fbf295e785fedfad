"""Color scales for the color encoding.

Numeric encodings get a diverging ``ColorScale`` over (min, median, max) of
the pool dataset; other encodings use a categorical palette.
"""

import logging
import zlib
from typing import Any, Sequence

import matplotlib
import numpy as np
import pandas as pd
from matplotlib.colors import LinearSegmentedColormap, Normalize, TwoSlopeNorm, to_hex

from vizsteps.core.color_key import resolve_color_key
from vizsteps.schemas.defaults import (
    DEFAULT_CATEGORY_PALETTE,
    DEFAULT_COLOR_RANGE,
    DEFAULT_MISSING_COLOR,
)
from vizsteps.services.data import to_frame

logger = logging.getLogger(__name__)


class ColorScale:
    """Maps numbers in ``domain`` onto a colormap built from ``colors``."""

    def __init__(
        self,
        domain: Sequence[float],
        colors: Sequence[str] = DEFAULT_COLOR_RANGE,
    ) -> None:
        self.domain = tuple(float(d) for d in domain)
        self.colors = tuple(colors)
        self._cmap = LinearSegmentedColormap.from_list("value_scale", list(self.colors))
        low, mid, high = self.domain
        if low < mid < high:
            self._norm = TwoSlopeNorm(vcenter=mid, vmin=low, vmax=high)
        else:
            self._norm = Normalize(vmin=low, vmax=high)

    def __call__(self, value: Any) -> str:
        if value is None or pd.isna(value):
            return DEFAULT_MISSING_COLOR
        position = float(np.clip(self._norm(float(value)), 0.0, 1.0))
        return to_hex(self._cmap(position))

    def __repr__(self) -> str:
        return f"ColorScale(domain={self.domain})"


def category_color(value: Any) -> str:
    """Stable palette color for a categorical value."""
    if value is None:
        return DEFAULT_MISSING_COLOR
    cmap = matplotlib.colormaps[DEFAULT_CATEGORY_PALETTE]
    index = zlib.crc32(str(value).encode("utf-8")) % cmap.N
    return to_hex(cmap(index))


def compute_color_scale(state) -> None:
    """Populate ``state.color.value_scale`` from the pool dataset."""
    key = resolve_color_key(state)
    frame = to_frame(state.data.pool)
    if frame is None or key not in frame.columns:
        logger.warning(f"Color key {key!r} not found in pool data; no value scale")
        state.color.value_scale = None
        return

    values = pd.to_numeric(frame[key], errors="coerce").dropna().to_numpy()
    if values.size == 0:
        state.color.value_scale = None
        return

    domain = (np.min(values), np.median(values), np.max(values))
    state.color.value_scale = ColorScale(domain)
    logger.debug(f"Computed color scale for {key}: {state.color.value_scale.domain}")
