"""Core module — config, logging."""

from src.core.config import (
    HandlerConfig,
    LoggingConfig,
    PriorityPolicy,
    Settings,
    load_settings,
)
from src.core.logging import setup_logging

__all__ = [
    "HandlerConfig",
    "LoggingConfig",
    "PriorityPolicy",
    "Settings",
    "load_settings",
    "setup_logging",
]
