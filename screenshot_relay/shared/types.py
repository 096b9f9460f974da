"""Shared types."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RequestContext:
    """Per-request context used for logging and tracing."""
    request_id: str
