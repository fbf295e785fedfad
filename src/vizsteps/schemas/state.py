"""Visualization state - the shared diff model read by the planner.

Every user-facing setting is a ``Setting`` record holding its current value,
a ``changed`` flag relative to the last successful draw, and the value it had
before the last assignment. Groups of related data (channels, color, time)
subclass ``Setting`` and add the derived fields their collaborators fill in.

A single ``VizState`` is created per visualization instance and passed by
reference to the planner and to every collaborator.
"""

from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field

from vizsteps.core.constants import URL_CHANNELS
from vizsteps.core.registry import AppType, AppTypeRegistry
from vizsteps.errors import ConfigurationError
from vizsteps.schemas.defaults import (
    DEFAULT_APP_TYPE,
    DEFAULT_HEIGHT,
    DEFAULT_MARGIN_BOTTOM,
    DEFAULT_MARGIN_LEFT,
    DEFAULT_MARGIN_RIGHT,
    DEFAULT_MARGIN_TOP,
    DEFAULT_WIDTH,
)
from vizsteps.schemas.locale import Locale


class Setting(BaseModel):
    """A single setting with change tracking."""

    value: Any = None
    changed: bool = False
    previous: Any = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def assign(self, value: Any) -> None:
        """Set a new value, remembering the old one and raising ``changed``."""
        self.previous = self.value
        self.value = value
        self.changed = True


class TypeSetting(Setting):
    value: str | None = DEFAULT_APP_TYPE


class DrawSetting(BaseModel):
    """Draw-pass switches; not change-tracked."""

    update: bool = True


class ChannelSetting(Setting):
    """A data-bearing channel that may be loaded from a url."""

    url: str | None = None
    loaded: bool = False
    keys: dict[str, str] | None = None


class DataSetting(ChannelSetting):
    cache: dict[str, Any] = Field(default_factory=dict)
    nested: dict[int, Any] | None = None
    time_values: list[Any] = Field(default_factory=list)
    pool: Any = None
    viz: Any = None


class NodesSetting(ChannelSetting):
    positions: bool = False
    restricted: Any = None


class EdgesSetting(ChannelSetting):
    source: str = "source"
    target: str = "target"
    linked: bool = False
    restricted: Any = None


class ColorSetting(Setting):
    """Color encoding; ``type`` and ``value_scale`` are derived."""

    type: str | bool | None = None
    value_scale: Any = None


class IdSetting(Setting):
    nesting: list[str] = Field(default_factory=list)

    def levels(self) -> list[str]:
        """Grouping hierarchy, defaulting to the id key alone."""
        if self.nesting:
            return list(self.nesting)
        return [self.value] if self.value else []


class TimeSetting(Setting):
    fixed: Setting = Field(default_factory=lambda: Setting(value=True))
    solo: Setting = Field(default_factory=lambda: Setting(value=[]))
    mute: Setting = Field(default_factory=lambda: Setting(value=[]))


class DepthSetting(Setting):
    value: int = 0


class DimensionSetting(Setting):
    """Surface size; ``viz`` is the usable extent after margins."""

    value: float = 0.0
    viz: float = 0.0


class TitleSetting(Setting):
    sub: str | None = None


class Margin(BaseModel):
    """Layout accumulator, reset from ``base`` at the start of every layout."""

    top: float = DEFAULT_MARGIN_TOP
    right: float = DEFAULT_MARGIN_RIGHT
    bottom: float = DEFAULT_MARGIN_BOTTOM
    left: float = DEFAULT_MARGIN_LEFT
    base: dict[str, float] = Field(
        default_factory=lambda: {
            "top": DEFAULT_MARGIN_TOP,
            "right": DEFAULT_MARGIN_RIGHT,
            "bottom": DEFAULT_MARGIN_BOTTOM,
            "left": DEFAULT_MARGIN_LEFT,
        }
    )

    def process(self) -> None:
        for side, amount in self.base.items():
            setattr(self, side, amount)


class Groups(BaseModel):
    """Drawing group handles on the surface."""

    root: Any = None
    app: Any = None
    titles: Any = None
    timeline: Any = None
    legend: Any = None
    drawer: Any = None
    apps: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(arbitrary_types_allowed=True)


class FormatSetting(BaseModel):
    locale: Setting = Field(default_factory=lambda: Setting(value=Locale()))


class HistoryEntry(BaseModel):
    """One browsing-history state (what the user was looking at)."""

    type: str | None
    depth: int
    id: str | None
    focus: Any = None

    model_config = ConfigDict(frozen=True)


class HistorySetting(BaseModel):
    states: list[HistoryEntry] = Field(default_factory=list)


def _default_types() -> AppTypeRegistry:
    from vizsteps.apps import default_registry

    return default_registry()


def _new_tooltips() -> Any:
    from vizsteps.services.tooltip import TooltipRegistry

    return TooltipRegistry()


class VizState(BaseModel):
    """The complete mutable state of one visualization instance."""

    type: TypeSetting = Field(default_factory=TypeSetting)
    draw: DrawSetting = Field(default_factory=DrawSetting)
    container: Setting = Field(default_factory=lambda: Setting(changed=True))

    data: DataSetting = Field(default_factory=DataSetting)
    attrs: ChannelSetting = Field(default_factory=ChannelSetting)
    coords: ChannelSetting = Field(default_factory=ChannelSetting)
    nodes: NodesSetting = Field(default_factory=NodesSetting)
    edges: EdgesSetting = Field(default_factory=EdgesSetting)

    color: ColorSetting = Field(default_factory=ColorSetting)
    id: IdSetting = Field(default_factory=IdSetting)
    time: TimeSetting = Field(default_factory=TimeSetting)
    depth: DepthSetting = Field(default_factory=DepthSetting)
    focus: Setting = Field(default_factory=Setting)
    size: Setting = Field(default_factory=Setting)

    g: Groups = Field(default_factory=Groups)
    margin: Margin = Field(default_factory=Margin)
    height: DimensionSetting = Field(
        default_factory=lambda: DimensionSetting(value=DEFAULT_HEIGHT)
    )
    width: DimensionSetting = Field(
        default_factory=lambda: DimensionSetting(value=DEFAULT_WIDTH)
    )
    title: TitleSetting = Field(default_factory=TitleSetting)
    legend: Setting = Field(default_factory=lambda: Setting(value=True))
    timeline: Setting = Field(default_factory=lambda: Setting(value=True))
    ui: Setting = Field(default_factory=lambda: Setting(value=[]))
    format: FormatSetting = Field(default_factory=FormatSetting)
    history: HistorySetting = Field(default_factory=HistorySetting)
    error: Setting = Field(default_factory=Setting)
    dev: Setting = Field(default_factory=lambda: Setting(value=False))

    types: AppTypeRegistry = Field(default_factory=_default_types)
    tooltips: Any = Field(default_factory=_new_tooltips)
    returned: dict[str, Any] | None = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    # --- Access helpers ---

    @property
    def locale(self) -> Locale:
        return self.format.locale.value

    def app_descriptor(self) -> AppType | None:
        """Descriptor of the active app type, or None if unregistered."""
        return self.types.get(self.type.value)

    def channel(self, name: str) -> ChannelSetting:
        if name not in URL_CHANNELS:
            raise ConfigurationError(f"Unknown data channel: {name}")
        return getattr(self, name)

    # --- Mutation helpers ---

    def set(self, path: str, value: Any) -> None:
        """Assign a setting by dotted path, e.g. ``"color"`` or ``"time.fixed"``.

        Assigning a ``Setting`` updates its value and raises ``changed``.
        Assigning a plain attribute of a ``Setting`` (``"id.nesting"``) raises
        the owner's ``changed`` flag. Other attributes are set as-is.
        """
        owner: Any = self
        parts = path.split(".")
        for part in parts[:-1]:
            owner = self._child(owner, part, path)
        leaf = parts[-1]
        target = self._child(owner, leaf, path)

        if isinstance(target, Setting):
            target.assign(value)
        else:
            setattr(owner, leaf, value)
            if isinstance(owner, Setting):
                owner.changed = True

    def load_url(self, channel: str, url: str) -> None:
        """Stage a channel to be loaded from ``url`` on the next draw."""
        setting = self.channel(channel)
        setting.url = url
        setting.loaded = False
        setting.changed = True

    def reset_changed(self) -> None:
        """Clear every ``changed`` flag after a successful draw."""
        for setting in self._iter_settings(self):
            setting.changed = False

    def changed_paths(self) -> list[str]:
        """Dotted paths of all settings currently flagged as changed."""
        return [
            path
            for path, setting in self._walk(self, "")
            if setting.changed
        ]

    # --- Internals ---

    @staticmethod
    def _child(owner: Any, name: str, path: str) -> Any:
        if not isinstance(owner, BaseModel) or name not in type(owner).model_fields:
            raise ConfigurationError(f"Unknown setting: {path}")
        return getattr(owner, name)

    @classmethod
    def _walk(cls, model: BaseModel, prefix: str) -> Iterator[tuple[str, Setting]]:
        for name in type(model).model_fields:
            value = getattr(model, name)
            path = f"{prefix}{name}"
            if isinstance(value, Setting):
                yield path, value
            if isinstance(value, BaseModel):
                yield from cls._walk(value, f"{path}.")

    @classmethod
    def _iter_settings(cls, model: BaseModel) -> Iterator[Setting]:
        for _, setting in cls._walk(model, ""):
            yield setting
