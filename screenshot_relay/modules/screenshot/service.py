"""
Screenshot relay service.

Parses the render request, calls the rendering service, stores the image
and reports the outcome as a RelaySuccess or RelayFailure. Internal steps
raise typed errors; handle() is the only place they become results.
"""

import json
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Literal

from screenshot_relay.config import Settings
from screenshot_relay.config.settings import DEFAULT_RENDER_API_URL
from screenshot_relay.infra.storage import ObjectStore
from screenshot_relay.shared.errors import (
    InvalidRenderRequestError,
    RelayError,
    RenderServiceError,
)
from screenshot_relay.shared.logging import get_logger
from screenshot_relay.shared.time import unix_millis, utcnow_iso

from .client import RenderClient
from .schemas import RenderRequest, is_truthy_json

logger = get_logger(__name__)


DEFAULT_SCREENSHOT_OPTIONS: dict[str, Any] = {
    "omitBackground": False,
    "fullPage": True,
    "type": "png",
}

# Written for every object regardless of the requested image type
STORED_CONTENT_TYPE = "image/png"
SOURCE_TAG = "browser-rendering-api"

FILENAME_PREFIX = "screenshot-"
FILENAME_EXTENSION = ".png"

SUCCESS_MESSAGE = "Screenshot generated and saved to storage"
MISSING_HTML_MESSAGE = "Missing HTML content in request body"
INVALID_JSON_MESSAGE = "Invalid JSON in request body"
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"


# =============================================================================
# CONFIG & RESULTS
# =============================================================================

@dataclass(frozen=True)
class RelayConfig:
    """Everything the relay needs from its environment."""
    account_id: str
    api_token: str
    bucket: ObjectStore
    render_api_url: str = DEFAULT_RENDER_API_URL
    render_timeout: float | None = None

    @classmethod
    def from_settings(cls, settings: Settings, bucket: ObjectStore) -> "RelayConfig":
        return cls(
            account_id=settings.account_id,
            api_token=settings.api_token,
            bucket=bucket,
            render_api_url=settings.render_api_url,
            render_timeout=settings.render_timeout,
        )

    @property
    def render_url(self) -> str:
        return self.render_api_url.format(account_id=self.account_id)


@dataclass(frozen=True)
class RelaySuccess:
    filename: str
    size: int
    message: str = SUCCESS_MESSAGE
    success: Literal[True] = field(default=True, init=False)


FailureKind = Literal["invalid_request", "upstream", "fault"]


@dataclass(frozen=True)
class RelayFailure:
    kind: FailureKind
    status_code: int
    error: str
    success: Literal[False] = field(default=False, init=False)


RelayResult = RelaySuccess | RelayFailure


# =============================================================================
# SERVICE
# =============================================================================

class ScreenshotRelay:
    """Bridge one render request to the rendering service and the object store."""

    def __init__(
        self,
        config: RelayConfig,
        client: RenderClient | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.config = config
        self.client = client or RenderClient(
            api_url=config.render_url,
            api_token=config.api_token,
            timeout=config.render_timeout,
        )
        self.clock = clock

    def parse_request(self, body: bytes) -> RenderRequest:
        """Decode and validate the request body."""
        try:
            data = json.loads(body)
        except ValueError as e:
            raise InvalidRenderRequestError(INVALID_JSON_MESSAGE) from e

        if not isinstance(data, dict) or not is_truthy_json(data.get("html")):
            raise InvalidRenderRequestError(MISSING_HTML_MESSAGE)

        return RenderRequest.model_validate(data)

    def resolve_filename(self, filename: str | None) -> str:
        """Caller's filename, else ``screenshot-<unix-millis>.png``."""
        if filename:
            return filename
        return f"{FILENAME_PREFIX}{unix_millis(self.clock)}{FILENAME_EXTENSION}"

    @staticmethod
    def effective_options(request: RenderRequest) -> Any:
        """Caller's options exactly as sent, or the defaults. Never a merge of both."""
        if not is_truthy_json(request.screenshot_options):
            return dict(DEFAULT_SCREENSHOT_OPTIONS)
        return request.screenshot_options

    def _relay(self, body: bytes) -> RelaySuccess:
        request = self.parse_request(body)
        key = self.resolve_filename(request.filename)

        logger.info(f"Rendering screenshot for {key}")
        image = self.client.screenshot(request.html, self.effective_options(request))

        stored = self.config.bucket.put(
            key,
            image,
            content_type=STORED_CONTENT_TYPE,
            metadata={"createdAt": utcnow_iso(), "source": SOURCE_TAG},
        )
        logger.info(f"Saved screenshot {stored.key}: {stored.size} bytes")

        return RelaySuccess(filename=stored.key, size=len(image))

    def handle(self, body: bytes) -> RelayResult:
        """Run one request end to end. Never raises."""
        try:
            return self._relay(body)
        except InvalidRenderRequestError as e:
            logger.info(f"Rejected screenshot request: {e.message}")
            return RelayFailure(kind="invalid_request", status_code=e.http_status, error=e.message)
        except RenderServiceError as e:
            logger.warning(f"Rendering service returned {e.status_code}: {e.upstream_text}")
            return RelayFailure(kind="upstream", status_code=e.status_code, error=e.message)
        except RelayError as e:
            logger.exception(f"Screenshot relay failed: {e.message}")
            return RelayFailure(kind="fault", status_code=500, error=e.message or UNKNOWN_ERROR_MESSAGE)
        except Exception as e:
            logger.exception(f"Unexpected error in screenshot relay: {e}")
            return RelayFailure(kind="fault", status_code=500, error=str(e) or UNKNOWN_ERROR_MESSAGE)
