"""
Valkey connectivity for cross-process scheduling locks.
"""

from .config import ValkeyConfig, ValkeyConnectionError
from .client import ValkeyClient

__all__ = [
    "ValkeyConfig",
    "ValkeyConnectionError",
    "ValkeyClient",
]
