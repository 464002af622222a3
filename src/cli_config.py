"""Configuration file loading and runtime tunable overrides.

Settings come from, in order of precedence: CLI flags, the YAML config
file, then the defaults in ``Constants``.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)

_TUNABLES = {
    "request_timeout": ("REQUEST_TIMEOUT", "REQUEST_TIMEOUT"),
    "max_workers": ("MAX_WORKERS", "MAX_WORKERS"),
    "retry_max": (None, "HTTP_RETRY_MAX"),
    "cache_ttl": (None, "HTTP_CACHE_TTL_SEC"),
}


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to YAML config file.

    Returns:
        The ``pinup`` section if present, else the whole mapping; {} when the
        file is missing or unreadable.
    """
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        logger.warning("Config file not found: %s", config_path)
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to load config: %s", e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level is not a mapping", config_path)
        return {}
    section = data.get(Constants.CONFIG_SECTION, data)
    return section if isinstance(section, dict) else {}


def apply_config(config: Dict[str, Any], args) -> None:
    """Merge config values into ``args`` and ``Constants``.

    CLI flags win over config values. Registry order from the config is
    used only when no --registry flag was given. Invalid values are logged
    and ignored.
    """
    if not getattr(args, "REGISTRIES", None):
        registries = config.get("registries")
        if isinstance(registries, list) and all(isinstance(name, str) for name in registries):
            args.REGISTRIES = registries
        elif registries is not None:
            logger.warning("Ignoring config 'registries': expected a list of names")

    for key, (arg_name, constant_name) in _TUNABLES.items():
        cli_value = getattr(args, arg_name, None) if arg_name else None
        value = cli_value if cli_value is not None else config.get(key)
        if value is None:
            continue
        try:
            number = int(value)
        except (TypeError, ValueError):
            logger.warning("Ignoring config '%s': not an integer (%r)", key, value)
            continue
        if number <= 0:
            logger.warning("Ignoring config '%s': must be positive (%r)", key, value)
            continue
        setattr(Constants, constant_name, number)
