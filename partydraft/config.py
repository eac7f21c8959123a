"""Event configuration management."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from .constants import TEAM_HEX
from .schemas import EventConfig
from .utils import load_json

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / 'data' / 'event_config.json'


@lru_cache(maxsize=4)
def get_config(path: Optional[Path] = None) -> EventConfig:
    """
    Load event configuration from data/event_config.json (or ``path``).

    Configuration is cached per path after first load.

    Returns:
        EventConfig object with validated settings

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the config file has invalid structure

    Example:
        from partydraft.config import get_config
        config = get_config()
        print(f"Teams tonight: {', '.join(config.team_colors)}")
    """
    return load_json(path or DEFAULT_CONFIG_PATH, schema=EventConfig)


def get_event_name(path: Optional[Path] = None) -> str:
    """Get the event's display name."""
    return get_config(path).event_name


def get_team_colors(path: Optional[Path] = None) -> list[str]:
    """Get the ordered team colours for this event."""
    return list(get_config(path).team_colors)


def get_team_hex(path: Optional[Path] = None) -> dict[str, str]:
    """Get hex colours per team, falling back to the built-in palette."""
    config = get_config(path)
    return {color: config.team_hex.get(color, TEAM_HEX[color]) for color in config.team_colors}


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime.
    """
    get_config.cache_clear()
