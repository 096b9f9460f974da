"""Health module - static greeting."""

from .router import router

__all__ = ["router"]
