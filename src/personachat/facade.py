"""Data façade: the one entry point the presentation layer calls."""

from typing import List, Optional

from .config import Settings
from .schemas import Character, ChatMessage, ChatSession, DataMode, Profile, SendResult
from .stores import ChatStore, DemoStore, LiveStore


class DataService:
    """
    Routes every logical operation to the store chosen at construction.

    Performs no logic of its own. A ``None`` from ``send_message`` means the
    message was not sent; callers restore their input rather than showing a
    half-finished exchange.
    """

    def __init__(self, store: ChatStore):
        self.store = store

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        mode: DataMode,
        access_token: Optional[str] = None,
    ) -> "DataService":
        """Build a service over a fresh demo store or a live store for ``settings``."""
        if mode == DataMode.DEMO:
            return cls(DemoStore())
        return cls(
            LiveStore(
                base_url=settings.BACKEND_URL,
                anon_key=settings.ANON_KEY,
                access_token=access_token,
                timeout=settings.HTTP_TIMEOUT,
            )
        )

    @property
    def mode(self) -> DataMode:
        return self.store.mode

    @property
    def is_demo(self) -> bool:
        return self.mode == DataMode.DEMO

    async def list_characters(self) -> List[Character]:
        return await self.store.list_characters()

    async def get_character(self, character_id: str) -> Optional[Character]:
        return await self.store.get_character(character_id)

    async def list_sessions(self, user_id: str) -> List[ChatSession]:
        return await self.store.list_sessions(user_id)

    async def list_messages(self, user_id: str, character_id: str) -> List[ChatMessage]:
        return await self.store.list_messages(user_id, character_id)

    async def send_message(self, user_id: str, character_id: str, text: str) -> Optional[SendResult]:
        return await self.store.send_message(user_id, character_id, text)

    async def get_profile(self, user_id: str) -> Optional[Profile]:
        return await self.store.get_profile(user_id)

    async def aclose(self) -> None:
        await self.store.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()
