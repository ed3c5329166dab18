"""In-memory demo store seeded with the character catalog."""

import random
from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4

from loguru import logger

from ..replies import DEFAULT_CHARACTER_NAME, canned_reply
from ..schemas import (
    Character,
    ChatMessage,
    ChatSession,
    DataMode,
    Profile,
    SendResult,
    Sender,
)
from .base import ChatStore
from .seed import DEMO_CHARACTERS, DEMO_CHAT_MESSAGES, DEMO_CHAT_SESSIONS, DEMO_PROFILE


def _recency(session: ChatSession) -> datetime:
    return session.updated_at or session.created_at


class DemoStore(ChatStore):
    """
    Process-local stand-in for the remote backend.

    Messages are keyed by session id; the session list is the single source
    of truth for which conversation a message belongs to. Nothing survives a
    restart.

    Args:
        rng: Random source for canned replies (inject a seeded one in tests)
        characters, sessions, messages: Seed data, defaults to the demo catalog
    """

    mode = DataMode.DEMO

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        characters: Optional[List[Character]] = None,
        sessions: Optional[List[ChatSession]] = None,
        messages: Optional[List[ChatMessage]] = None,
        profiles: Optional[List[Profile]] = None,
    ):
        self.rng = rng or random.Random()
        self._characters = [c.model_copy(deep=True) for c in (characters if characters is not None else DEMO_CHARACTERS)]
        self._sessions = [s.model_copy(deep=True) for s in (sessions if sessions is not None else DEMO_CHAT_SESSIONS)]
        self._messages = [m.model_copy(deep=True) for m in (messages if messages is not None else DEMO_CHAT_MESSAGES)]
        self._profiles = [p.model_copy(deep=True) for p in (profiles if profiles is not None else [DEMO_PROFILE])]

    # Characters

    async def list_characters(self) -> List[Character]:
        return [c.model_copy() for c in self._characters if c.is_public]

    async def get_character(self, character_id: str) -> Optional[Character]:
        character = self._find_character(character_id)
        return character.model_copy() if character else None

    def _find_character(self, character_id: str) -> Optional[Character]:
        return next((c for c in self._characters if c.id == character_id), None)

    # Sessions

    async def list_sessions(self, user_id: str) -> List[ChatSession]:
        owned = [s for s in self._sessions if s.user_id == user_id]
        return [s.model_copy() for s in sorted(owned, key=_recency, reverse=True)]

    def get_session(self, session_id: str) -> Optional[ChatSession]:
        session = self._find_session(session_id)
        return session.model_copy() if session else None

    def _find_session(self, session_id: str) -> Optional[ChatSession]:
        return next((s for s in self._sessions if s.id == session_id), None)

    def _latest_session(self, user_id: str, character_id: str) -> Optional[ChatSession]:
        """Most recently updated session for the pair, if any."""
        candidates = [
            s for s in self._sessions
            if s.user_id == user_id and s.character_id == character_id
        ]
        if not candidates:
            return None
        return max(candidates, key=lambda s: (_recency(s), s.created_at))

    def create_session(self, user_id: str, character_id: str, title: str) -> ChatSession:
        return self._create_session(user_id, character_id, title).model_copy()

    def _create_session(self, user_id: str, character_id: str, title: str) -> ChatSession:
        now = datetime.now(timezone.utc)
        session = ChatSession(
            id=f"session-{uuid4().hex}",
            user_id=user_id,
            character_id=character_id,
            title=title,
            created_at=now,
            updated_at=now,
        )
        self._sessions.append(session)
        return session

    # Messages

    def get_session_messages(self, session_id: str) -> List[ChatMessage]:
        """Messages of one session, oldest first. Unknown session gives []."""
        if self._find_session(session_id) is None:
            return []
        ordered = sorted(
            (m for m in self._messages if m.session_id == session_id),
            key=lambda m: m.created_at,
        )
        return [m.model_copy() for m in ordered]

    async def list_messages(self, user_id: str, character_id: str) -> List[ChatMessage]:
        session = self._latest_session(user_id, character_id)
        if session is None:
            return []
        return self.get_session_messages(session.id)

    def append_message(
        self,
        user_id: str,
        character_id: str,
        text: str,
        sender: Sender,
    ) -> ChatMessage:
        """Append a message to the pair's latest session, creating one if needed."""
        session = self._resolve_session(user_id, character_id)
        return self._append(session, text, sender).model_copy()

    def _append(self, session: ChatSession, text: str, sender: Sender) -> ChatMessage:
        user_id, character_id = session.user_id, session.character_id
        now = datetime.now(timezone.utc)
        message = ChatMessage(
            id=f"msg-{uuid4().hex}",
            session_id=session.id,
            user_id=user_id,
            character_id=character_id,
            message=text,
            sender=sender,
            created_at=now,
        )
        self._messages.append(message)
        session.updated_at = now
        return message

    def _resolve_session(self, user_id: str, character_id: str) -> ChatSession:
        session = self._latest_session(user_id, character_id)
        if session is not None:
            return session
        character = self._find_character(character_id)
        name = character.name if character else DEFAULT_CHARACTER_NAME
        return self._create_session(user_id, character_id, f"Chat with {name}")

    def generate_reply(self, character_id: str, user_text: str) -> str:
        """Canned reply for the character; ``user_text`` does not influence it."""
        character = self._find_character(character_id)
        return canned_reply(character.name if character else None, self.rng)

    async def send_message(
        self,
        user_id: str,
        character_id: str,
        text: str,
    ) -> Optional[SendResult]:
        if self._find_character(character_id) is None:
            logger.warning(f"Demo send to unknown character {character_id}")
            return None

        session = self._resolve_session(user_id, character_id)
        user_message = self._append(session, text, Sender.USER)
        reply = self.generate_reply(character_id, text)
        ai_message = self._append(session, reply, Sender.CHARACTER)
        return SendResult(user_message=user_message.model_copy(), ai_message=ai_message.model_copy())

    # Profiles

    async def get_profile(self, user_id: str) -> Optional[Profile]:
        profile = next((p for p in self._profiles if p.user_id == user_id), None)
        return profile.model_copy() if profile else None
