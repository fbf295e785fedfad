"""Built-in app types."""

from vizsteps.apps.network import NETWORK
from vizsteps.apps.tree_map import TREE_MAP
from vizsteps.core.registry import AppTypeRegistry


def default_registry() -> AppTypeRegistry:
    """A registry holding every built-in app type."""
    registry = AppTypeRegistry()
    for app_type in (NETWORK, TREE_MAP):
        registry.register(app_type)
    return registry


__all__ = ["NETWORK", "TREE_MAP", "default_registry"]
