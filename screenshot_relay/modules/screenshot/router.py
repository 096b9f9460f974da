"""Screenshot module routes."""

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool

from screenshot_relay.infra.storage import create_object_store
from screenshot_relay.shared.cors import PREFLIGHT_HEADERS
from screenshot_relay.shared.errors import ConfigurationError, RelayError
from screenshot_relay.shared.logging import get_logger

from .schemas import ScreenshotErrorResponse, ScreenshotSuccessResponse
from .service import RelayConfig, RelayResult, RelaySuccess, ScreenshotRelay

logger = get_logger(__name__)
router = APIRouter(prefix="/api", tags=["screenshot"])


def get_relay(request: Request) -> ScreenshotRelay:
    """Build a relay from the app's settings; the object store is created once."""
    state = request.app.state
    if getattr(state, "object_store", None) is None:
        try:
            state.object_store = create_object_store(state.settings)
        except RelayError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Failed to create object store: {e}") from e
    return ScreenshotRelay(RelayConfig.from_settings(state.settings, state.object_store))


def to_response(result: RelayResult) -> Response:
    """Map a relay result onto the HTTP response the caller sees."""
    if isinstance(result, RelaySuccess):
        body = ScreenshotSuccessResponse(
            message=result.message,
            filename=result.filename,
            size=result.size,
        )
        return JSONResponse(content=body.model_dump())

    if result.kind == "fault":
        body = ScreenshotErrorResponse(error=result.error)
        return JSONResponse(content=body.model_dump(), status_code=result.status_code)

    return PlainTextResponse(content=result.error, status_code=result.status_code)


@router.post(
    "/screenshot",
    response_model=ScreenshotSuccessResponse,
    responses={
        400: {"description": "Missing or invalid HTML", "content": {"text/plain": {}}},
        500: {"model": ScreenshotErrorResponse, "description": "Unexpected failure"},
    },
)
async def create_screenshot(
    request: Request,
    relay: ScreenshotRelay = Depends(get_relay),
) -> Response:
    """
    Render HTML to an image and save it to the screenshots bucket.

    Rendering service failures are returned with the upstream status code.
    """
    body = await request.body()
    result = await run_in_threadpool(relay.handle, body)
    return to_response(result)


@router.options("/screenshot")
async def screenshot_preflight() -> Response:
    """Answer CORS preflight requests for any origin, method and header."""
    return Response(status_code=200, headers=PREFLIGHT_HEADERS)
