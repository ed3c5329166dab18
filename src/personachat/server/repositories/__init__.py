"""Repository layer for data access."""

from .base import BaseRepository
from .session_repository import ChatSessionRepository
from .message_repository import ChatMessageRepository

__all__ = [
    "BaseRepository",
    "ChatSessionRepository",
    "ChatMessageRepository",
]
