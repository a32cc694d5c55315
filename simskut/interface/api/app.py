"""FastAPI application."""

import logging
from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from simskut.config import Settings
from simskut.domain.service import ChangeFeed
from simskut.interface.api.routes import (
    admin,
    auth,
    friendships,
    gallery,
    health,
    hooks,
    invites,
    notifications,
    posts,
    profiles,
    push,
    ws,
)
from simskut.interface.error import register_error_handlers
from simskut.util.di.container import create_container, setup_di
from simskut.util.observability import (
    instrument_fastapi,
    instrument_httpx,
)
from simskut.util.tasks import BackgroundDispatcher

logger = logging.getLogger(__name__)


def _lifespan(container: AsyncContainer):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        change_feed = await container.get(ChangeFeed)
        await change_feed.start()
        logger.info("Change feed started")
        try:
            yield
        finally:
            # Let in-flight mention fan-outs finish before the pool goes away
            dispatcher = await container.get(BackgroundDispatcher)
            await dispatcher.drain()
            await change_feed.stop()
            await container.close()
            logger.info("Application shut down")

    return lifespan


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use; defaults to the production container
    """
    settings = Settings()

    # Instrument httpx for outbound HTTP requests
    # (Logfire must be configured before instrumentation)
    instrument_httpx()

    if container is None:
        # Settings are loaded from environment automatically
        container = create_container()

    app_instance = FastAPI(
        title="SimsKut API",
        description="Backend API for SimsKut - an invite-only social network for Sims players",
        version="0.1.0",
        lifespan=_lifespan(container),
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    # Safari is stricter with CORS - need explicit configuration
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,  # Frontend (simskut.app)
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "User-Agent",
            "DNT",
            "Cache-Control",
            "X-Requested-With",
            "X-Webhook-Secret",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_di(app_instance, container)
    register_error_handlers(app_instance)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(invites.router)
    app_instance.include_router(admin.router)
    app_instance.include_router(profiles.router)
    app_instance.include_router(posts.router)
    app_instance.include_router(notifications.router)
    app_instance.include_router(friendships.router)
    app_instance.include_router(push.router)
    app_instance.include_router(hooks.router)
    app_instance.include_router(gallery.router)
    app_instance.include_router(ws.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
