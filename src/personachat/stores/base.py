"""Capability interface shared by the demo and live stores."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..schemas import Character, ChatMessage, ChatSession, DataMode, Profile, SendResult


class ChatStore(ABC):
    """
    Data source for characters, sessions and messages.

    Implementations never raise past this boundary: not-found and transport
    failures come back as ``None`` or an empty list.
    """

    mode: DataMode

    @abstractmethod
    async def list_characters(self) -> List[Character]:
        """Characters visible to every user."""

    @abstractmethod
    async def get_character(self, character_id: str) -> Optional[Character]:
        """Single visible character, or None."""

    @abstractmethod
    async def list_sessions(self, user_id: str) -> List[ChatSession]:
        """Sessions owned by ``user_id``, most recently updated first."""

    @abstractmethod
    async def list_messages(self, user_id: str, character_id: str) -> List[ChatMessage]:
        """Messages of the pair's most recently updated session, oldest first."""

    @abstractmethod
    async def send_message(
        self,
        user_id: str,
        character_id: str,
        text: str,
    ) -> Optional[SendResult]:
        """Record ``text`` and the character's reply. None means not sent."""

    @abstractmethod
    async def get_profile(self, user_id: str) -> Optional[Profile]:
        """Profile of ``user_id``, or None."""

    async def aclose(self) -> None:
        """Release any held resources."""

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()
