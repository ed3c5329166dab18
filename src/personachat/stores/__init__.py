"""Data stores behind the façade."""

from .base import ChatStore
from .demo import DemoStore
from .live import LiveStore

__all__ = [
    "ChatStore",
    "DemoStore",
    "LiveStore",
]
