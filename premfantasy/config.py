"""League configuration management."""

import logging
import os
from functools import lru_cache
from pathlib import Path

from .schemas import LeagueConfig
from .utils import load_json

CONFIG_ENV_VAR = 'PREMFANTASY_CONFIG'
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / 'data' / 'league_config.json'

logger = logging.getLogger('premfantasy.config')


@lru_cache(maxsize=1)
def get_config() -> LeagueConfig:
    """
    Load league configuration.

    Reads the file named by $PREMFANTASY_CONFIG, else data/league_config.json.
    Configuration is cached after first load; a missing file yields defaults.

    Returns:
        LeagueConfig object with validated settings

    Raises:
        ValueError: If config file has invalid structure

    Example:
        from premfantasy.config import get_config
        config = get_config()
        print(f"Current season: {config.season}")
    """
    config_path = Path(os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH)
    try:
        return load_json(config_path, schema=LeagueConfig)
    except FileNotFoundError:
        logger.debug(f'No config at {config_path}, using defaults')
        return LeagueConfig()


def get_current_season() -> int:
    """Get the current season from config."""
    return get_config().season


def get_data_dir() -> Path:
    """Get the directory holding persisted state."""
    return Path(get_config().data_dir)


def get_max_gameweek() -> int:
    """Get the number of gameweeks in a season."""
    return get_config().max_gameweek


def get_history_limit() -> int:
    """Get how many head-to-head matches the history keeps."""
    return get_config().h2h_history_limit


def get_log_dir() -> Path:
    return Path(get_config().log_dir)


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file (or $PREMFANTASY_CONFIG) changes during
    runtime and you need to reload it.
    """
    get_config.cache_clear()
