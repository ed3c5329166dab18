"""Persona Chat server.

Serves the AI chat function (POST /functions/v1/ai-chat) and the read-only
table API (GET /rest/v1/<table>) that the live store talks to.
"""

from __future__ import annotations

import random
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from .. import __version__
from ..config import Settings, get_settings
from ..core.exceptions import PersonaChatException
from ..schemas import HealthResponse
from .completion import CompletionClient
from .database import create_engine, create_session_maker, init_db
from .routes_chat import router as chat_router
from .routes_rest import router as rest_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    await init_db(app.state.engine)
    logger.info("Persona Chat server started")
    yield
    await app.state.engine.dispose()
    logger.info("Persona Chat server shutting down")


async def persona_chat_exception_handler(request: Request, exc: PersonaChatException) -> JSONResponse:
    """Render domain errors as ``{error: {code, message}}``."""
    if exc.status_code >= 500:
        logger.error(f"Chat AI error: {exc}")
    else:
        logger.warning(f"Rejected request to {request.url.path}: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": exc.code, "message": exc.message}},
    )


def create_app(
    settings: Optional[Settings] = None,
    completion_transport: Optional[httpx.AsyncBaseTransport] = None,
    rng: Optional[random.Random] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration, read from the environment when omitted
        completion_transport: httpx transport for the completion provider (tests)
        rng: Random source for canned replies
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Persona Chat API",
        description="AI character chat function and table API",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = create_engine(settings.DATABASE_URL)
    app.state.session_maker = create_session_maker(app.state.engine)
    app.state.completion = CompletionClient.from_settings(settings, transport=completion_transport)
    app.state.rng = rng or random.Random()

    if app.state.completion is None:
        logger.info("No completion API key configured, replies will be canned")

    # CORS: any origin, no credentials
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["POST", "GET", "OPTIONS", "PUT", "DELETE", "PATCH"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
        max_age=86400,
    )

    app.add_exception_handler(PersonaChatException, persona_chat_exception_handler)

    app.include_router(chat_router)
    app.include_router(rest_router)

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(
            version=__version__,
            completion_provider="deepseek" if app.state.completion else "canned",
        )

    return app


def run(settings: Optional[Settings] = None):
    """Run the server."""
    import uvicorn

    settings = settings or get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.API_HOST,
        port=settings.API_PORT,
    )
