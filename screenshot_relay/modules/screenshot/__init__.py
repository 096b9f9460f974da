"""Screenshot module - HTML to image via the rendering service, saved to object storage."""

from .router import router
from .schemas import RenderRequest
from .service import RelayConfig, RelayFailure, RelaySuccess, ScreenshotRelay

__all__ = [
    "router",
    "RenderRequest",
    "RelayConfig",
    "RelayFailure",
    "RelaySuccess",
    "ScreenshotRelay",
]
