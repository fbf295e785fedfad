"""Schemas package.

- state.py: VizState and its change-tracked settings
- steps.py: Step, actions and execution reports
- config.py: VizConfig file schema
- locale.py: localization bundles
"""

from .config import SourceConfig, TimeConfig, VizConfig
from .locale import LOCALES, Locale, Messages
from .state import HistoryEntry, Setting, VizState
from .steps import (
    ExecutionReport,
    SequenceAction,
    SingleAction,
    Step,
    sequence,
    single,
)

__all__ = [
    "SourceConfig",
    "TimeConfig",
    "VizConfig",
    "LOCALES",
    "Locale",
    "Messages",
    "HistoryEntry",
    "Setting",
    "VizState",
    "ExecutionReport",
    "SequenceAction",
    "SingleAction",
    "Step",
    "sequence",
    "single",
]
