"""Centralized error definitions for the redraw pipeline."""

from __future__ import annotations

from typing import Any, Mapping


class VizError(Exception):
    """Base exception that carries structured metadata for logging."""

    default_code = "UNKNOWN"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: Mapping[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code or self.default_code
        self.details = dict(details) if details else {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "error_code": self.code,
            "error_message": self.message,
        }
        if self.details:
            payload["details"] = self.details
        return payload


class ConfigurationError(VizError):
    """Raised (or reported) when the visualization settings are inconsistent."""

    default_code = "CONFIG_ERROR"


class DataLoadError(VizError):
    """Reported when a remote or file data source cannot be read."""

    default_code = "DATA_LOAD_ERROR"


class StepFailedError(VizError):
    """Wraps an exception raised by a synchronous step action."""

    default_code = "STEP_FAILED"
