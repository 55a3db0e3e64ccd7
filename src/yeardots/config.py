"""Configuration management for yeardots."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .core.markers import MARKER_LIMIT
from .journal import DEBOUNCE_SECONDS

logger = logging.getLogger(__name__)

YEARDOTS_HOME = Path(os.environ.get("YEARDOTS_HOME", Path.home() / ".yeardots"))
CONFIG_FILE = YEARDOTS_HOME / "config" / "yeardots.conf"
DATA_DIR = YEARDOTS_HOME / "data"


@dataclass
class Config:
    """yeardots configuration."""

    timezone: str = ""
    journal_dir: str = ""
    cache_dir: str = ""
    debounce_seconds: float = DEBOUNCE_SECONDS
    marker_limit: int = MARKER_LIMIT


def journal_path(config: Config) -> Path:
    """Resolve journal directory from config."""
    if config.journal_dir:
        return Path(config.journal_dir).expanduser()
    return DATA_DIR / "journal"


def cache_path(config: Config) -> Path:
    """Resolve marker cache directory from config."""
    if config.cache_dir:
        return Path(config.cache_dir).expanduser()
    return DATA_DIR / "cache"


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from yeardots.conf file."""
    config = Config()
    config_file = config_file or CONFIG_FILE

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "timezone":
                config.timezone = value
            case "journal_dir":
                config.journal_dir = value
            case "cache_dir":
                config.cache_dir = value
            case "debounce_seconds":
                try:
                    seconds = float(value)
                except ValueError:
                    logger.warning(f"Invalid DEBOUNCE_SECONDS: {value!r}")
                    continue
                if seconds < 0:
                    logger.warning(f"DEBOUNCE_SECONDS must not be negative: {value!r}")
                    continue
                config.debounce_seconds = seconds
            case "marker_limit":
                try:
                    limit = int(value)
                except ValueError:
                    logger.warning(f"Invalid MARKER_LIMIT: {value!r}")
                    continue
                if limit < 1:
                    logger.warning(f"MARKER_LIMIT must be at least 1: {value!r}")
                    continue
                config.marker_limit = limit
            case _:
                logger.debug(f"Unknown config key: {key}")

    return config


def _unquote(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value
