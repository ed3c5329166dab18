"""
Domain-specific exception hierarchy for Persona Chat.

All custom exceptions inherit from PersonaChatException. Exceptions raised by
the chat handler carry the HTTP status and the wire error code they are
rendered with.
"""

from typing import Any

CHAT_AI_FAILED = "CHAT_AI_FAILED"


class PersonaChatException(Exception):
    """
    Base exception for all Persona Chat errors.

    Attributes:
        message: Human-readable error message
        context: Additional context for debugging
        status_code: HTTP status used when the error reaches a client
        code: Machine-readable error code used in the error envelope
    """

    status_code: int = 500
    code: str = CHAT_AI_FAILED

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# ============================================================================
# Chat Handler Exceptions
# ============================================================================

class ChatHandlerError(PersonaChatException):
    """Base class for failures of the chat handler."""
    pass


class MissingParametersError(ChatHandlerError):
    """Request body lacks one of the mandatory fields."""

    status_code = 400

    def __init__(self, missing: list[str]):
        super().__init__(
            "Missing required parameters: message, characterId, userId",
            context={"missing": ",".join(missing)}
        )
        self.missing = missing


class CharacterNotFoundError(ChatHandlerError):
    """Character does not exist in the backing store."""

    def __init__(self, character_id: str):
        super().__init__(
            "Character not found",
            context={"character_id": character_id}
        )
        self.character_id = character_id


class SessionLookupError(ChatHandlerError):
    """Could not query the existing sessions for a user/character pair."""

    def __init__(self, reason: str):
        super().__init__("Failed to fetch chat session", context={"reason": reason})


class SessionCreateError(ChatHandlerError):
    """Could not create a new session."""

    def __init__(self, reason: str):
        super().__init__("Failed to create chat session", context={"reason": reason})


class MessagePersistError(ChatHandlerError):
    """User message or reply could not be stored."""

    def __init__(self, sender: str, reason: str):
        super().__init__(
            f"Failed to store {sender} message",
            context={"reason": reason}
        )
        self.sender = sender


# ============================================================================
# Completion Provider Exceptions
# ============================================================================

class CompletionError(PersonaChatException):
    """Completion provider unreachable, erroring or returning garbage.

    Never surfaced to clients: the handler falls back to canned replies.
    """

    def __init__(self, url: str, reason: str, status_code: int | None = None):
        super().__init__(
            f"Completion request to {url} failed: {reason}",
            context={"url": url, "status_code": status_code}
        )
        self.url = url
        self.provider_status = status_code


class UnknownTableError(PersonaChatException):
    """Table API request for a table that is not exposed."""

    status_code = 404
    code = "TABLE_NOT_FOUND"

    def __init__(self, table: str):
        super().__init__(f"Unknown table '{table}'", context={"table": table})
        self.table = table


class InvalidQueryError(PersonaChatException):
    """Table API request with a malformed filter, order or limit."""

    status_code = 400
    code = "INVALID_QUERY"

    def __init__(self, reason: str):
        super().__init__(f"Invalid query: {reason}")
