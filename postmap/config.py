"""YAML configuration for map defaults."""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import InvalidInputError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "postmap.yaml"

DEFAULT_CONFIG: Dict[str, Any] = {
    "map_defaults": {
        "width": 120,
        "height": 60,
        "min_width": 10,
        "min_height": 5,
        "max_width": 200,
        "max_height": 100,
        "batch_size": 1000,
        "max_workers": 4,
        "padding_fraction": 0.01,
        "uk_padding_fraction": 0.05,
        "density_radius": 1,
        "color": False,
        "csv_path": "geonames-postal-code.csv",
        "preload": False,
    }
}


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """Load configuration from YAML file.

    Values found in the file override the built-in defaults key by key; a
    missing file yields the defaults.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    config_file = Path(config_path)
    if not config_file.exists():
        logger.debug("Config file %s not found, using defaults", config_path)
        return config

    with open(config_file, 'r') as f:
        try:
            loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise InvalidInputError(f"Invalid config file {config_path}: {e}") from e

    if not isinstance(loaded, dict):
        raise InvalidInputError(f"Config file {config_path} must contain a mapping")

    overrides = loaded.get("map_defaults") or {}
    if not isinstance(overrides, dict):
        raise InvalidInputError(f"'map_defaults' in {config_path} must be a mapping")
    for key, value in overrides.items():
        if key in config["map_defaults"]:
            config["map_defaults"][key] = _checked_value(key, value, config_path)
        else:
            logger.warning("Ignoring unknown map_defaults key '%s' in %s", key, config_path)
    return config


def _checked_value(key: str, value: Any, config_path: str) -> Any:
    """Return ``value`` if it has the type of the default for ``key``.

    Integers are accepted where a float is expected and converted.
    """
    default = DEFAULT_CONFIG["map_defaults"][key]
    expected = type(default)
    if expected is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    # bool is a subclass of int, so "width: true" needs its own check
    if isinstance(value, expected) and isinstance(value, bool) == isinstance(default, bool):
        return value
    raise InvalidInputError(
        f"'map_defaults.{key}' in {config_path} must be of type {expected.__name__}, got {value!r}"
    )


def map_settings(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """The ``map_defaults`` section of ``config`` (defaults when not given)."""
    if config is None:
        config = DEFAULT_CONFIG
    return dict(config.get("map_defaults", DEFAULT_CONFIG["map_defaults"]))
