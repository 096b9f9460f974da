"""Health module routes."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from screenshot_relay.shared.cors import ALLOW_ANY_ORIGIN

router = APIRouter(tags=["health"])

GREETING = "Hello World!"


def _greeting() -> PlainTextResponse:
    return PlainTextResponse(content=GREETING, status_code=200, headers=ALLOW_ANY_ORIGIN)


@router.get("/", response_class=PlainTextResponse)
async def root() -> PlainTextResponse:
    return _greeting()


@router.api_route(
    "/api/test",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    response_class=PlainTextResponse,
)
async def test_greeting() -> PlainTextResponse:
    """Greeting served for any method."""
    return _greeting()
