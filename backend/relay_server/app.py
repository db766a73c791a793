import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from openai import AsyncOpenAI
from relay_server.config import Settings
from relay_server.errors import register_exception_handlers
from relay_server.helpers.upstream import build_client, check_upstream_connection
from relay_server.logger import setup_logging
from relay_server.routers import relay

logger = logging.getLogger(__name__)


def create_app(settings: Settings, client: AsyncOpenAI | None = None) -> FastAPI:
    """
    Build the relay application.

    Settings and the provider client are fixed here and shared by every
    request; pass `client` to route upstream calls somewhere else (tests).
    """
    setup_logging(settings.log_level)
    owns_client = client is None
    if client is None:
        client = build_client(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.check_upstream_on_startup:
            await check_upstream_connection(client)
        yield
        if owns_client:
            await client.close()

    app = FastAPI(title="Chat Relay", lifespan=lifespan)
    app.state.settings = settings
    app.state.openai_client = client

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(relay.router)

    logger.info(
        "Relay configured: chat=%s vision=%s stt=%s tts=%s",
        settings.chat_model,
        settings.vision_model,
        settings.stt_model,
        settings.tts_model,
    )
    return app
