"""Tooltips bound to app types.

Each visualization instance owns one registry (``VizState.tooltips``).
"""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class Tooltip(BaseModel):
    id: Any
    content: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class TooltipRegistry:
    """Live tooltips, grouped by the app type that owns them."""

    def __init__(self) -> None:
        self._bound: dict[str, list[Tooltip]] = {}

    def create(self, owner: str, tooltip: Tooltip) -> None:
        self._bound.setdefault(owner, []).append(tooltip)

    def remove(self, owner: str | None) -> int:
        """Remove every tooltip bound to ``owner``; returns how many went."""
        removed = self._bound.pop(owner, [])
        if removed:
            logger.debug(f"Removed {len(removed)} tooltip(s) bound to {owner}")
        return len(removed)

    def bound(self, owner: str | None) -> list[Tooltip]:
        return list(self._bound.get(owner, []))

    def __len__(self) -> int:
        return sum(len(tips) for tips in self._bound.values())

