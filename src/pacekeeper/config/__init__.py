"""Application configuration helpers."""

from __future__ import annotations

from .errors import ConfigurationError
from .logging import configure_logging, get_log_level
from .loop import LoopConfig, get_loop_config

__all__ = [
    "ConfigurationError",
    "LoopConfig",
    "configure_logging",
    "get_log_level",
    "get_loop_config",
]
