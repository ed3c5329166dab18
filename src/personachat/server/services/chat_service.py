"""Chat service: turns one user message into a persisted exchange.

Flow:
1. Validate the request
2. Look up the character
3. Generate a reply (completion provider, or canned text when unavailable)
4. Find or create the user's session with the character
5. Store the user message and the reply in one transaction
"""

import random
from datetime import timedelta
from typing import Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import (
    CharacterNotFoundError,
    ChatHandlerError,
    CompletionError,
    MessagePersistError,
    MissingParametersError,
    SessionCreateError,
    SessionLookupError,
)
from ...replies import canned_reply
from ...schemas import ChatMessage as ChatMessageSchema
from ...schemas import ChatReplyData, ChatRequest, Sender
from ...utils.time import utcnow
from ..completion import CompletionClient, build_system_prompt
from ..database import Character, ChatMessage, ChatSession
from ..repositories import BaseRepository, ChatMessageRepository, ChatSessionRepository


class ChatService:
    """Business logic of the AI chat handler."""

    def __init__(
        self,
        session: AsyncSession,
        completion: Optional[CompletionClient] = None,
        rng: Optional[random.Random] = None,
    ):
        self.session = session
        self.completion = completion
        self.rng = rng or random.Random()
        self.character_repo = BaseRepository(Character, session)
        self.session_repo = ChatSessionRepository(ChatSession, session)
        self.message_repo = ChatMessageRepository(ChatMessage, session)

    @staticmethod
    def validate(request: ChatRequest) -> tuple[str, str, str]:
        """Return (message, character_id, user_id) or raise MissingParametersError."""
        fields = {
            "message": request.message,
            "characterId": request.character_id,
            "userId": request.user_id,
        }
        missing = [name for name, value in fields.items() if not value]
        if missing:
            raise MissingParametersError(missing)
        return request.message, request.character_id, request.user_id

    async def generate_reply(self, character: Character, user_text: str) -> str:
        """Provider reply, or a canned one keyed by character name.

        Never raises: provider trouble is a degraded mode, not a failure.
        """
        if self.completion is None:
            return canned_reply(character.name, self.rng)

        system_prompt = build_system_prompt(character.name, character.personality, character.description)
        try:
            return await self.completion.complete(system_prompt, user_text)
        except CompletionError as e:
            logger.warning(f"AI API error, falling back to canned response: {e}")
            return canned_reply(character.name, self.rng)

    async def resolve_session(self, user_id: str, character: Character) -> ChatSession:
        """Most recent session for the pair, created on first contact."""
        try:
            chat_session = await self.session_repo.get_latest(user_id, character.id)
        except SQLAlchemyError as e:
            raise SessionLookupError(str(e)) from e

        if chat_session is not None:
            return chat_session

        try:
            chat_session = await self.session_repo.create(
                user_id=user_id,
                character_id=character.id,
                title=f"Chat with {character.name}",
            )
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise SessionCreateError(str(e)) from e

        logger.info(f"Created chat session {chat_session.id} for user={user_id}, character={character.id}")
        return chat_session

    async def store_exchange(
        self,
        chat_session: ChatSession,
        user_text: str,
        reply: str,
    ) -> ChatMessage:
        """Persist the user message and the reply together. Returns the reply row."""
        sent_at = utcnow()
        # Reply sorts strictly after the message it answers
        replied_at = max(utcnow(), sent_at + timedelta(microseconds=1))
        sender = Sender.USER

        try:
            await self.message_repo.add_message(
                session_id=chat_session.id,
                user_id=chat_session.user_id,
                character_id=chat_session.character_id,
                message=user_text,
                sender=Sender.USER.value,
                created_at=sent_at,
            )
            sender = Sender.CHARACTER
            ai_message = await self.message_repo.add_message(
                session_id=chat_session.id,
                user_id=chat_session.user_id,
                character_id=chat_session.character_id,
                message=reply,
                sender=Sender.CHARACTER.value,
                created_at=replied_at,
            )
            await self.session_repo.touch(chat_session, replied_at)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise MessagePersistError(sender.value, str(e)) from e

        return ai_message

    async def handle(self, request: ChatRequest) -> ChatReplyData:
        """Run the whole exchange for one request."""
        user_text, character_id, user_id = self.validate(request)

        try:
            character = await self.character_repo.get(character_id)
        except SQLAlchemyError as e:
            raise ChatHandlerError("Failed to fetch character data", context={"reason": str(e)}) from e
        if character is None:
            raise CharacterNotFoundError(character_id)

        reply = await self.generate_reply(character, user_text)
        chat_session = await self.resolve_session(user_id, character)
        session_id = chat_session.id
        ai_message = await self.store_exchange(chat_session, user_text, reply)

        logger.info(
            f"Chat message processed: user={user_id}, character={character_id}, "
            f"session={session_id}, response_id={ai_message.id}"
        )

        return ChatReplyData(
            response=reply,
            message=ChatMessageSchema.model_validate(ai_message),
            session_id=session_id,
            character_name=character.name,
        )
