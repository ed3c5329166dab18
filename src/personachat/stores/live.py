"""Live store: remote table API plus the server-side chat function."""

from typing import Any, Dict, List, Optional
from uuid import uuid4

import httpx
from loguru import logger

from ..schemas import (
    Character,
    ChatMessage,
    ChatSession,
    DataMode,
    Profile,
    SendResult,
    Sender,
)
from ..utils.time import utcnow
from .base import ChatStore

REST_PREFIX = "/rest/v1"
CHAT_FUNCTION_PATH = "/functions/v1/ai-chat"
SESSION_LIST_LIMIT = 10


def character_from_row(row: Dict[str, Any]) -> Character:
    """Map a `characters` row onto the client-facing Character shape."""
    return Character(
        id=row["id"],
        name=row["name"],
        description=row.get("description") or "",
        personality=row.get("personality") or "",
        avatar_url=row.get("avatar_url"),
        created_by=row["owner_id"],
        is_public=row["is_active"],
        created_at=row["created_at"],
        updated_at=row.get("updated_at"),
    )


class LiveStore(ChatStore):
    """
    Remote-backed store.

    Every public method swallows transport and query errors, logs them and
    returns an empty result, so callers only ever see data or nothing.

    Args:
        base_url: Backend root serving /rest/v1 and /functions/v1
        anon_key: Public API key sent as ``apikey``
        access_token: Signed-in user's token; the anon key is used when absent
        timeout: Per round trip timeout in seconds
        client: Pre-built client (tests, shared pools). Not closed by the store.
    """

    mode = DataMode.LIVE

    def __init__(
        self,
        base_url: str,
        anon_key: Optional[str] = None,
        access_token: Optional[str] = None,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        headers = {"Content-Type": "application/json"}
        if anon_key:
            headers["apikey"] = anon_key
        bearer = access_token or anon_key
        if bearer:
            headers["Authorization"] = f"Bearer {bearer}"

        # Sent per request so an injected client is left untouched
        self.headers = headers

        if client is None:
            self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout)
            self._owns_client = True
        else:
            self._client = client
            self._owns_client = False

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _select(self, table: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        """GET rows from the table API. Raises on transport or HTTP errors."""
        response = await self._client.get(
            f"{REST_PREFIX}/{table}", params=params, headers=self.headers
        )
        response.raise_for_status()
        rows = response.json()
        if not isinstance(rows, list):
            raise ValueError(f"Expected a list of rows from {table}, got {type(rows).__name__}")
        return rows

    # Characters

    async def list_characters(self) -> List[Character]:
        try:
            rows = await self._select(
                "characters",
                {"select": "*", "is_active": "eq.true", "order": "created_at.desc"},
            )
            return [character_from_row(row) for row in rows]
        except Exception as e:
            logger.error(f"Error fetching characters: {e}")
            return []

    async def get_character(self, character_id: str) -> Optional[Character]:
        try:
            rows = await self._select(
                "characters",
                {"select": "*", "id": f"eq.{character_id}", "is_active": "eq.true", "limit": 1},
            )
            if not rows:
                return None
            return character_from_row(rows[0])
        except Exception as e:
            logger.error(f"Error fetching character {character_id}: {e}")
            return None

    # Sessions

    async def list_sessions(self, user_id: str) -> List[ChatSession]:
        try:
            rows = await self._select(
                "chat_sessions",
                {
                    "select": "*",
                    "user_id": f"eq.{user_id}",
                    "order": "updated_at.desc",
                    "limit": SESSION_LIST_LIMIT,
                },
            )
            return [ChatSession.model_validate(row) for row in rows]
        except Exception as e:
            logger.error(f"Error fetching chat sessions: {e}")
            return []

    # Messages

    async def list_messages(self, user_id: str, character_id: str) -> List[ChatMessage]:
        try:
            sessions = await self._select(
                "chat_sessions",
                {
                    "select": "id",
                    "user_id": f"eq.{user_id}",
                    "character_id": f"eq.{character_id}",
                    "order": "updated_at.desc,created_at.desc",
                    "limit": 1,
                },
            )
            if not sessions:
                return []

            session_id = sessions[0]["id"]
            rows = await self._select(
                "chat_messages",
                {"select": "*", "session_id": f"eq.{session_id}", "order": "created_at.asc"},
            )
            return [ChatMessage.model_validate(row) for row in rows]
        except Exception as e:
            logger.error(f"Error fetching chat messages: {e}")
            return []

    async def send_message(
        self,
        user_id: str,
        character_id: str,
        text: str,
    ) -> Optional[SendResult]:
        try:
            response = await self._client.post(
                CHAT_FUNCTION_PATH,
                json={"userId": user_id, "characterId": character_id, "message": text},
                headers=self.headers,
            )
            response.raise_for_status()
            payload = response.json()
            data = payload.get("data") if isinstance(payload, dict) else None
            if not data:
                raise ValueError("Invalid response from AI chat function")

            ai_message = ChatMessage.model_validate(data["message"])
            user_message = ChatMessage(
                id=f"user-{uuid4().hex}",
                session_id=data.get("session_id"),
                user_id=user_id,
                character_id=character_id,
                message=text,
                sender=Sender.USER,
                created_at=utcnow(),
            )
            return SendResult(user_message=user_message, ai_message=ai_message)
        except Exception as e:
            logger.error(f"Error sending message: {e}")
            return None

    # Profiles

    async def get_profile(self, user_id: str) -> Optional[Profile]:
        try:
            rows = await self._select("profiles", {"select": "*", "user_id": f"eq.{user_id}", "limit": 1})
            return Profile.model_validate(rows[0]) if rows else None
        except Exception as e:
            logger.error(f"Error loading profile: {e}")
            return None
