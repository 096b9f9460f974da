"""
Application factory - builds the FastAPI app with middleware and routes.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from screenshot_relay import __version__
from screenshot_relay.config import Settings, get_settings
from screenshot_relay.infra.storage import ObjectStore
from screenshot_relay.modules.health.router import router as health_router
from screenshot_relay.modules.screenshot.router import router as screenshot_router
from screenshot_relay.shared.errors import RelayError
from screenshot_relay.shared.ids import generate_request_id
from screenshot_relay.shared.logging import (
    clear_request_context,
    get_logger,
    set_request_context,
    setup_logging,
)
from screenshot_relay.shared.types import RequestContext

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan - startup and shutdown."""
    settings: Settings = app.state.settings

    setup_logging(settings.log_level)
    logger.info("Starting Screenshot Relay...")
    logger.info(f"Storage backend: {settings.storage_backend} (bucket: {settings.screenshots_bucket})")
    if not settings.account_id or not settings.api_token:
        logger.warning("ACCOUNT_ID or API_TOKEN is not set; rendering requests will fail")

    yield

    logger.info("Screenshot Relay stopped")


def build_app(
    settings: Settings | None = None,
    object_store: ObjectStore | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Optional settings override (useful for testing)
        object_store: Optional object store; created from settings on first use otherwise

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="Screenshot Relay",
        description="Render HTML to images and save them to object storage",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.object_store = object_store

    # Request context middleware
    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next: Any) -> Response:
        """Attach request context for logging and tracing."""
        ctx = RequestContext(
            request_id=request.headers.get("X-Request-ID") or generate_request_id(),
        )
        set_request_context(ctx)

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = ctx.request_id
            return response
        finally:
            clear_request_context()

    @app.exception_handler(RelayError)
    async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
        """Errors escaping a route (e.g. misconfigured storage) as JSON envelopes."""
        logger.error(f"{exc.code}: {exc.message}")

        return JSONResponse(
            status_code=exc.http_status,
            content={"success": False, "error": exc.message},
        )

    app.include_router(health_router)
    app.include_router(screenshot_router)

    return app
