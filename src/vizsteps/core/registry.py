"""App type registry.

Maps a visualization type id to its descriptor: an optional one-time setup
routine, the data shapes it requires, and the routine that turns the fetched
data into drawable shapes.
"""

import logging
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


class AppType(BaseModel):
    """Descriptor for one visualization type."""

    name: str
    requirements: list[str] = Field(default_factory=list)
    setup: Callable[[Any], None] | None = None
    draw: Callable[[Any], dict[str, Any]] | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("requirements", mode="before")
    @classmethod
    def _wrap_single_requirement(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    def requires(self, shape: str) -> bool:
        return shape in self.requirements


class AppTypeRegistry(BaseModel):
    """Registered app types, keyed by id."""

    types: dict[str, AppType] = Field(default_factory=dict)

    def register(self, app_type: AppType) -> None:
        if app_type.name in self.types:
            logger.debug(f"Replacing app type registration: {app_type.name}")
        self.types[app_type.name] = app_type

    def get(self, name: str | None) -> AppType | None:
        if name is None:
            return None
        return self.types.get(name)

    def names(self) -> list[str]:
        return list(self.types)

    def __contains__(self, name: object) -> bool:
        return name in self.types
