"""Resolution of the active color encoding to a concrete data key."""

from typing import Any


def resolve_color_key(state) -> Any:
    """Data key the color encoding points at for the active id.

    A mapping encoding (``{"country": "gdp", "region": "pop"}``) is looked up
    by the active id; when the id has no entry, the first declared key wins.
    """
    key = state.color.value
    if isinstance(key, dict):
        if not key:
            return None
        if state.id.value in key:
            return key[state.id.value]
        return key[next(iter(key))]
    return key
