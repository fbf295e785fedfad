"""Data collaborators: loading, key analysis, grouping and fetching.

Channel values may be given as pandas DataFrames or as lists of records;
``to_frame`` normalizes both.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Callable

import pandas as pd

from vizsteps.core.constants import KEY_BOOLEAN, KEY_NUMBER, KEY_OBJECT, KEY_STRING
from vizsteps.errors import DataLoadError

logger = logging.getLogger(__name__)

# Channels kept as DataFrames after loading; the others become record lists.
FRAME_CHANNELS = ("data", "attrs")


def to_frame(value: Any) -> pd.DataFrame | None:
    if value is None:
        return None
    if isinstance(value, pd.DataFrame):
        return value
    return pd.DataFrame(value)


def to_records(value: Any) -> list[dict[str, Any]]:
    if value is None:
        return []
    if isinstance(value, pd.DataFrame):
        return value.to_dict("records")
    return [dict(record) for record in value]


# =============================================================================
# Loading
# =============================================================================


def read_source(url: str) -> pd.DataFrame:
    """Read a csv, tsv or json source from a path or URL."""
    suffix = Path(url.split("?")[0]).suffix.lower()
    if suffix == ".json":
        return pd.read_json(url)
    if suffix == ".tsv":
        return pd.read_csv(url, sep="\t")
    return pd.read_csv(url)


def load_channel(state, channel: str, done: Callable[..., None]) -> None:
    """Load ``state.<channel>`` from its url and signal ``done``.

    Reading happens on a worker thread when an event loop is running;
    ``done`` is called with ``None`` on success or a ``DataLoadError``.
    A read that finishes after the channel was re-pointed at another url
    leaves the state untouched.
    """
    setting = state.channel(channel)
    url = setting.url

    def read_and_finish() -> None:
        logger.info(f"Loading {channel} from {url}")
        try:
            frame = read_source(url)
            value = frame if channel in FRAME_CHANNELS else to_records(frame)
        except Exception as e:
            logger.error(f"Could not load {channel} from {url}: {e}")
            done(
                DataLoadError(
                    f"Could not load {channel} from {url}: {e}",
                    details={"channel": channel, "url": url},
                )
            )
            return
        if setting.url != url:
            logger.info(f"Discarding {channel} from {url}; now staged from {setting.url}")
            done(None)
            return
        setting.value = value
        setting.loaded = True
        setting.changed = True
        logger.info(f"Loaded {len(frame)} rows into {channel}")
        done(None)

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        read_and_finish()
        return
    loop.run_in_executor(None, read_and_finish)


# =============================================================================
# Key analysis
# =============================================================================


def key_type(column: pd.Series) -> str:
    if pd.api.types.is_bool_dtype(column):
        return KEY_BOOLEAN
    if pd.api.types.is_numeric_dtype(column):
        return KEY_NUMBER
    values = column.dropna()
    if len(values) and values.map(lambda v: isinstance(v, str)).all():
        return KEY_STRING
    return KEY_OBJECT


def index_keys(state, channel: str) -> None:
    """Populate ``state.<channel>.keys`` with a key -> type index."""
    setting = state.channel(channel)
    frame = to_frame(setting.value)
    if frame is None:
        setting.keys = {}
        return
    setting.keys = {str(name): key_type(frame[name]) for name in frame.columns}
    logger.debug(f"Indexed {len(setting.keys)} keys for {channel}")


# =============================================================================
# Grouping and fetching
# =============================================================================


def _aggregate(frame: pd.DataFrame, by: list[str]) -> pd.DataFrame:
    agg = {}
    for name in frame.columns:
        if name in by:
            continue
        agg[name] = "sum" if pd.api.types.is_numeric_dtype(frame[name]) else "first"
    if not agg:
        return frame[by].drop_duplicates().reset_index(drop=True)
    return frame.groupby(by, as_index=False, sort=True).agg(agg)


def group_data(state) -> None:
    """Nest the dataset by time and id hierarchy, one frame per depth.

    Fetched frames cached under the previous grouping are dropped.
    """
    state.data.cache = {}
    frame = to_frame(state.data.value)
    if frame is None:
        state.data.nested = None
        state.data.time_values = []
        return

    time_key = state.time.value
    has_time = bool(time_key) and time_key in frame.columns
    state.data.time_values = (
        sorted(frame[time_key].dropna().unique().tolist()) if has_time else []
    )

    levels = [level for level in state.id.levels() if level in frame.columns]
    if not levels:
        state.data.nested = {0: frame}
        return

    nested = {}
    for depth in range(len(levels)):
        by = levels[: depth + 1] + ([time_key] if has_time else [])
        nested[depth] = _aggregate(frame, by)
    state.data.nested = nested
    logger.debug(
        f"Grouped data into {len(nested)} level(s), {len(state.data.time_values)} time value(s)"
    )


def active_time_selection(state) -> list[Any]:
    """Time values currently shown: the solo selection, else all but muted."""
    times = state.data.time_values
    solo = state.time.solo.value or []
    mute = state.time.mute.value or []
    if solo:
        return [t for t in times if t in solo]
    return [t for t in times if t not in mute]


def fetch_render_data(state, selection: list[Any] | None = None) -> pd.DataFrame:
    """Frame at the active depth, aggregated over time.

    ``selection`` None means all time; otherwise only rows whose time value
    is in the selection are kept. Results are cached in ``state.data.cache``.
    """
    nested = state.data.nested
    if not nested:
        frame = to_frame(state.data.value)
        return frame if frame is not None else pd.DataFrame()

    depth = min(max(state.depth.value, 0), max(nested))
    cache_key = f"{depth}:{'all' if selection is None else sorted(selection, key=str)}"
    if cache_key in state.data.cache:
        return state.data.cache[cache_key]

    frame = nested[depth]
    time_key = state.time.value
    if time_key and time_key in frame.columns:
        if selection is not None:
            frame = frame[frame[time_key].isin(selection)]
        levels = [level for level in state.id.levels() if level in frame.columns]
        by = levels[: depth + 1]
        if by:
            frame = _aggregate(frame.drop(columns=[time_key]), by)

    frame = frame.reset_index(drop=True)
    state.data.cache[cache_key] = frame
    return frame
