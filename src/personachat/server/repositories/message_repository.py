"""Chat message repository."""

from datetime import datetime

from .base import BaseRepository
from ..database import ChatMessage


class ChatMessageRepository(BaseRepository[ChatMessage]):
    """Repository for ChatMessage operations."""

    async def add_message(
        self,
        session_id: str,
        user_id: str,
        character_id: str,
        message: str,
        sender: str,
        created_at: datetime,
    ) -> ChatMessage:
        return await self.create(
            session_id=session_id,
            user_id=user_id,
            character_id=character_id,
            message=message,
            sender=sender,
            created_at=created_at,
        )
