"""Chat session repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import select

from .base import BaseRepository
from ..database import ChatSession
from ...utils.time import utcnow


class ChatSessionRepository(BaseRepository[ChatSession]):
    """Repository for ChatSession operations."""

    async def get_latest(self, user_id: str, character_id: str) -> Optional[ChatSession]:
        """Most recently updated session for the pair, if any."""
        result = await self.session.execute(
            select(ChatSession)
            .where(
                ChatSession.user_id == user_id,
                ChatSession.character_id == character_id,
            )
            .order_by(ChatSession.updated_at.desc(), ChatSession.created_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def touch(self, chat_session: ChatSession, timestamp: Optional[datetime] = None) -> None:
        """Mark the session as updated now (or at ``timestamp``)."""
        chat_session.updated_at = timestamp or utcnow()
        await self.session.flush()
