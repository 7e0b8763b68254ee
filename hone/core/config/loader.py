"""
Configuration loader — reads config.yml into a HoneConfig.

The file is optional.  Lookup order:

    explicit path  >  HONE_CONFIG  >  $XDG_CONFIG_HOME/hone/config.yml

``HONE_CACHE_DIR`` overrides ``cache_root`` after the file is read.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from hone.core.models.config import HoneConfig

logger = logging.getLogger(__name__)

CONFIG_FILE = "config.yml"


class ConfigError(Exception):
    """Raised when the configuration file is invalid or unreadable."""


def default_config_path() -> Path:
    """Return the per-user config path, honouring XDG_CONFIG_HOME."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "hone" / CONFIG_FILE


def find_config_file(path: Path | None = None) -> Path | None:
    """Resolve which config file to read, or None when there is none.

    An explicitly requested file (argument or ``HONE_CONFIG``) is returned
    even if it does not exist so that ``load_config`` can complain about it.
    """
    if path is not None:
        return path

    env_path = os.environ.get("HONE_CONFIG")
    if env_path:
        return Path(env_path)

    candidate = default_config_path()
    return candidate if candidate.is_file() else None


def load_config(path: Path | None = None) -> HoneConfig:
    """Load and validate the configuration.

    Args:
        path: Explicit path to config.yml. If None, searches the defaults.

    Returns:
        Validated HoneConfig model.

    Raises:
        ConfigError: If an explicit file is missing or any file is invalid.
    """
    config_path = find_config_file(path)

    data: dict = {}
    if config_path is not None:
        data = _read_yaml(config_path)

    cache_override = os.environ.get("HONE_CACHE_DIR")
    if cache_override:
        data["cache_root"] = cache_override

    try:
        config = HoneConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    config.cache_root = config.cache_root.expanduser()
    logger.debug("Using cache root %s", config.cache_root)
    return config


def _read_yaml(path: Path) -> dict:
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Allow everything to sit under a top-level "hone" key
    if "hone" in data and isinstance(data["hone"], dict):
        data = data["hone"]

    return dict(data)
