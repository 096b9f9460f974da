"""Object storage protocol and shared types."""

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class StoredObject:
    """Result of a successful write."""
    key: str
    size: int
    content_type: str
    metadata: dict[str, str] = field(default_factory=dict)


@runtime_checkable
class ObjectStore(Protocol):
    """Key/value blob store. Only writes are needed."""

    def put(
        self,
        key: str,
        data: bytes,
        *,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> StoredObject:
        """Write ``data`` under ``key``, replacing any existing object."""
        ...
