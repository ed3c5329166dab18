"""Pydantic models for entities and the chat handler's wire format."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Sender(str, Enum):
    """Author of a chat message."""
    USER = "user"
    CHARACTER = "character"


class DataMode(str, Enum):
    """Backend the data façade talks to."""
    DEMO = "demo"
    LIVE = "live"


# ============================================================================
# Entities
# ============================================================================

class Profile(BaseModel):
    """User profile, created on registration."""
    user_id: str
    email: str
    full_name: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class Character(BaseModel):
    """AI persona as seen by clients."""
    id: str
    name: str
    description: str = ""
    personality: str = ""
    avatar_url: Optional[str] = None
    created_by: str
    is_public: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


class ChatSession(BaseModel):
    """One conversation thread between a user and a character."""
    id: str
    user_id: str
    character_id: str
    title: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ChatMessage(BaseModel):
    """A single message in a session."""
    id: str
    session_id: Optional[str] = None
    user_id: str
    character_id: str
    message: str
    sender: Sender
    created_at: datetime

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)


class SendResult(BaseModel):
    """Both halves of a successful exchange."""
    user_message: ChatMessage
    ai_message: ChatMessage


# ============================================================================
# Chat Handler Wire Format
# ============================================================================

class ChatRequest(BaseModel):
    """Body of POST /functions/v1/ai-chat. Fields are validated by the service."""
    message: Optional[str] = None
    character_id: Optional[str] = Field(None, alias="characterId")
    user_id: Optional[str] = Field(None, alias="userId")

    model_config = ConfigDict(populate_by_name=True)


class ChatReplyData(BaseModel):
    """Payload of a successful chat handler call."""
    response: str
    message: ChatMessage
    session_id: str
    character_name: str


class ChatReplyResponse(BaseModel):
    data: ChatReplyData


class ErrorBody(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    error: ErrorBody


class HealthResponse(BaseModel):
    """Schema for health check response."""
    status: str = "ok"
    version: str = "0.1.0"
    completion_provider: str = "canned"
