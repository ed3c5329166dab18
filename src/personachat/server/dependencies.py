"""Dependency injection for FastAPI endpoints."""

from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from .completion import CompletionClient
from .database import get_session
from .services import ChatService


def get_completion_client(request: Request) -> Optional[CompletionClient]:
    """Configured completion client, None in canned-only mode."""
    return request.app.state.completion


async def get_chat_service(
    request: Request,
    session: AsyncSession = Depends(get_session),
    completion: Optional[CompletionClient] = Depends(get_completion_client),
) -> ChatService:
    """Get ChatService instance."""
    return ChatService(session, completion=completion, rng=request.app.state.rng)
