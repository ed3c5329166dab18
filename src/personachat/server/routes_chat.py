"""AI chat function: POST /functions/v1/ai-chat."""

from fastapi import APIRouter, Depends, Request, Response

from ..schemas import ChatReplyResponse, ChatRequest, ErrorResponse
from .auth import require_api_key
from .dependencies import get_chat_service
from .services import ChatService

router = APIRouter(prefix="/functions/v1", tags=["functions"])


@router.options("/ai-chat", include_in_schema=False)
async def ai_chat_preflight():
    """Pre-flight: 200 with an empty body."""
    return Response(status_code=200)


@router.post(
    "/ai-chat",
    response_model=ChatReplyResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    dependencies=[Depends(require_api_key)],
)
async def ai_chat(
    request: Request,
    chat_service: ChatService = Depends(get_chat_service),
):
    """
    Generate and persist a character reply.

    Body: ``{message, characterId, userId}``. Fields that are absent, empty or
    not strings count as missing.
    """
    try:
        body = await request.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    chat_request = ChatRequest.model_validate(
        {key: value for key, value in body.items() if isinstance(value, str)}
    )
    data = await chat_service.handle(chat_request)
    return ChatReplyResponse(data=data)
