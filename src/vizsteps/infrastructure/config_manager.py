"""Visualization Config Module.

Handles listing, loading, and saving of visualization configurations and
applying them to a live state. Enforces the strictly typed VizConfig schema.
"""

import json
import logging
from pathlib import Path
from typing import List

from ..errors import ConfigurationError
from ..schemas import VizConfig, VizState
from ..schemas.locale import LOCALES

CONFIG_DIR = Path.cwd() / "configs"

logger = logging.getLogger(__name__)


def list_configs() -> List[str]:
    """List all available config files in the configs directory.

    Returns:
        List of filenames (e.g., ['network.json', 'trade.json']).
    """
    if not CONFIG_DIR.exists():
        return []
    return sorted(f.name for f in CONFIG_DIR.glob("*.json"))


def load_config(filename: str) -> VizConfig:
    """Load and validate a config from a JSON file.

    Args:
        filename: Name of the file (e.g. 'network.json'), or a path.

    Returns:
        Validated VizConfig object.

    Raises:
        FileNotFoundError: If file doesn't exist.
        ValidationError: If JSON doesn't match schema.
    """
    file_path = Path(filename)
    if not file_path.is_absolute() and not file_path.exists():
        file_path = CONFIG_DIR / filename
    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    return VizConfig(**data)


def save_config(config: VizConfig, filename: str) -> None:
    """Save a config to a JSON file.

    Args:
        config: The VizConfig object to save.
        filename: Target filename.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    file_path = CONFIG_DIR / filename

    with open(file_path, "w", encoding="utf-8") as f:
        f.write(config.model_dump_json(indent=2))


def apply_config(state: VizState, config: VizConfig) -> None:
    """Apply a VizConfig to the state, raising changed flags as it goes.

    Relative source paths are resolved against the configs directory.
    """
    if config.locale not in LOCALES:
        raise ConfigurationError(
            f"Unknown locale: {config.locale}", details={"known": sorted(LOCALES)}
        )

    state.set("type", config.type)
    state.set("id", config.id)
    state.set("id.nesting", list(config.nesting))
    state.set("depth", config.depth)
    state.set("color", config.color)
    state.set("size", config.size)
    state.set("focus", config.focus)
    state.set("time", config.time.key)
    state.set("time.fixed", config.time.fixed)
    state.set("time.solo", list(config.time.solo))
    state.set("time.mute", list(config.time.mute))
    state.set("width", config.width)
    state.set("height", config.height)
    state.set("title", config.title)
    state.set("title.sub", config.sub_title)
    state.set("legend", config.legend)
    state.set("timeline", config.timeline)
    state.set("ui", list(config.ui))
    state.set("format.locale", LOCALES[config.locale])
    state.set("dev", config.dev)

    for channel, source in config.sources.model_dump().items():
        if source is None:
            continue
        if "://" not in source and not Path(source).is_absolute():
            source = str(CONFIG_DIR / source)
        state.load_url(channel, source)

    logger.info(f"Applied config {config.name!r} ({config.type})")
