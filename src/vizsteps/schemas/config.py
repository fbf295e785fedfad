"""Configuration schema for a visualization, as stored in JSON files."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from vizsteps.schemas.defaults import (
    DEFAULT_APP_TYPE,
    DEFAULT_HEIGHT,
    DEFAULT_LOCALE,
    DEFAULT_WIDTH,
)


class SourceConfig(BaseModel):
    """Where each data channel comes from (path or URL)."""

    data: str | None = None
    attrs: str | None = None
    coords: str | None = None
    nodes: str | None = None
    edges: str | None = None

    model_config = ConfigDict(frozen=True)


class TimeConfig(BaseModel):
    key: str | None = Field(None, description="Column holding the time value")
    fixed: bool = Field(True, description="Restrict drawn data to the time selection")
    solo: list[Any] = Field(default_factory=list, description="Only show these times")
    mute: list[Any] = Field(default_factory=list, description="Hide these times")

    model_config = ConfigDict(frozen=True)


class VizConfig(BaseModel):
    """Root configuration for one visualization."""

    name: str = "Visualization"
    type: str = DEFAULT_APP_TYPE
    id: str | None = Field(None, description="Key identifying each datum")
    nesting: list[str] = Field(
        default_factory=list, description="Id hierarchy, outermost first"
    )
    depth: int = Field(0, ge=0, description="Active level of the id hierarchy")
    color: str | dict[str, str] | None = Field(
        None, description="Color key, or a mapping of id key -> color key"
    )
    size: str | None = Field(None, description="Numeric key sizing shapes")
    focus: Any = None
    time: TimeConfig = Field(default_factory=TimeConfig)
    sources: SourceConfig = Field(default_factory=SourceConfig)

    width: float = Field(DEFAULT_WIDTH, gt=0)
    height: float = Field(DEFAULT_HEIGHT, gt=0)
    title: str | None = None
    sub_title: str | None = None
    legend: bool = True
    timeline: bool = True
    ui: list[str] = Field(default_factory=list, description="Drawer controls")
    locale: str = DEFAULT_LOCALE
    dev: bool = False

    model_config = ConfigDict(frozen=True)
