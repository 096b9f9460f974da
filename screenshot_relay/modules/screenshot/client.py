"""
Rendering service client.

Posts HTML to the browser-rendering screenshot endpoint and returns the raw
image bytes. Errors are raised, never retried.
"""

from typing import Any

import requests

from screenshot_relay.shared.errors import RenderServiceError, RenderTransportError
from screenshot_relay.shared.logging import get_logger

logger = get_logger(__name__)


class RenderClient:
    """
    Client for the screenshot endpoint of the rendering service.

    Usage:
        client = RenderClient(api_url=config.render_url, api_token=config.api_token)
        png = client.screenshot("<h1>hi</h1>", {"fullPage": True, "type": "png"})
    """

    def __init__(
        self,
        api_url: str,
        api_token: str,
        timeout: float | None = None,
    ):
        self.api_url = api_url
        self.api_token = api_token
        self.timeout = timeout

    def _get_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_token}",
            "Content-Type": "application/json",
        }

    def screenshot(self, html: Any, screenshot_options: Any) -> bytes:
        """
        Render ``html`` and return the image bytes.

        Raises:
            RenderServiceError: the service answered with a non-2xx status
            RenderTransportError: the service could not be reached
        """
        payload = {"html": html, "screenshotOptions": screenshot_options}

        try:
            response = requests.request(
                method="POST",
                url=self.api_url,
                headers=self._get_headers(),
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Rendering service request failed: {e}")
            raise RenderTransportError(f"Request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            error_text = response.text
            raise RenderServiceError(
                f"Failed to generate screenshot: {error_text}",
                status_code=response.status_code,
                upstream_text=error_text,
            )

        return response.content
