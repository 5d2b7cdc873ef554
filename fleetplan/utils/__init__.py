"""
Configuration utilities for the scheduling engine.
"""

from .config import (
    SchedulingPolicy,
    AppConfig,
    SchedulingContext,
    load_config,
)

__all__ = [
    "SchedulingPolicy",
    "AppConfig",
    "SchedulingContext",
    "load_config",
]
