"""Utility helpers for configuration, logging and app readiness."""

from .config import HarnessConfig, env_flag, env_int, get_logger, load_config
from .logging_utils import configure_json_logging
from .readiness import app_is_reachable, fetch_root

__all__ = [
    "HarnessConfig",
    "app_is_reachable",
    "configure_json_logging",
    "env_flag",
    "env_int",
    "fetch_root",
    "get_logger",
    "load_config",
]
