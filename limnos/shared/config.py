# limnos/shared/config.py

"""Centralized configuration loaded from config.yaml + environment variables."""

import os
from functools import lru_cache
from typing import Any, Dict

from limnos.shared.paths import CONFIG_PATH
from limnos.shared.utils.config_loader import load_config


@lru_cache(maxsize=1)
def get_config() -> Dict[str, Any]:
    """Load and return the global LIMNOS configuration."""
    if CONFIG_PATH.exists():
        cfg = load_config(str(CONFIG_PATH))
    else:
        cfg = {}

    # Override with environment variables where applicable
    if os.getenv("LIMNOS_LOG_LEVEL"):
        cfg.setdefault("logging", {})["level"] = os.getenv("LIMNOS_LOG_LEVEL")
    if os.getenv("LIMNOS_BASELINE_YEAR"):
        cfg.setdefault("engine", {})["baseline_year"] = int(os.getenv("LIMNOS_BASELINE_YEAR"))

    return cfg


def get_engine_config() -> Dict[str, Any]:
    return get_config().get("engine", {})


def get_logging_config() -> Dict[str, Any]:
    return get_config().get("logging", {"level": "INFO", "structured": False})
