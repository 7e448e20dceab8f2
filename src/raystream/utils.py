"""Logging setup and JSON configuration loading."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def load_config(path: str) -> Dict[str, Any]:
    """Read a JSON configuration file into a dictionary.

    Expected sections (all optional):
      - "simulation": overrides for SimulationConfig fields
      - "logging": {"level": ..., "format": ...}
    """
    with open(path, encoding="utf-8") as fh:
        config = json.load(fh)
    if not isinstance(config, dict):
        msg = f"Config root must be a JSON object: {path}"
        raise ValueError(msg)
    return config


def setup_logging(config: Dict[str, Any] | None = None, level: str | None = None) -> None:
    """Configure the root logger with a single console handler.

    An explicit ``level`` wins over the config's ``logging.level``.
    """
    log_config = (config or {}).get("logging", {})
    if not isinstance(log_config, dict):
        msg = "The logging section must be a JSON object"
        raise ValueError(msg)
    log_level = str(level or log_config.get("level", "INFO")).upper()
    log_format = log_config.get("format", DEFAULT_LOG_FORMAT)

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplication
    if logger.hasHandlers():
        logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(log_format))
    logger.addHandler(console_handler)
