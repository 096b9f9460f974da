"""
Error hierarchy for the screenshot relay.

Every error carries a machine-readable code and the HTTP status it maps to.
"""

from typing import Any


class RelayError(Exception):
    """Base class for all relay errors."""

    code = "RELAY_ERROR"
    http_status = 500

    def __init__(
        self,
        message: str,
        *,
        http_status: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if http_status is not None:
            self.http_status = http_status
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class InvalidRenderRequestError(RelayError):
    """Request body is not valid JSON or lacks the html field."""

    code = "INVALID_REQUEST"
    http_status = 400


class RenderServiceError(RelayError):
    """Rendering service answered with a non-success status."""

    code = "RENDER_FAILED"
    http_status = 502

    def __init__(self, message: str, status_code: int, upstream_text: str = "") -> None:
        super().__init__(
            message,
            http_status=status_code,
            details={"upstream_status": status_code},
        )
        self.status_code = status_code
        self.upstream_text = upstream_text


class RenderTransportError(RelayError):
    """Rendering service could not be reached."""

    code = "RENDER_UNREACHABLE"
    http_status = 502


class StorageWriteError(RelayError):
    """Object store rejected or failed the write."""

    code = "STORAGE_ERROR"
    http_status = 500

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message, details={"key": key} if key else None)
        self.key = key


class ConfigurationError(RelayError):
    """Required configuration is missing or invalid."""

    code = "CONFIGURATION_ERROR"
    http_status = 500
