"""
Filesystem-backed object store.

Objects live at ``<root>/<key>``; content type and custom metadata are kept
in a ``<key>.meta.json`` sidecar next to the object.
"""

import json
import os
import tempfile
from pathlib import Path

from screenshot_relay.shared.errors import StorageWriteError
from screenshot_relay.shared.logging import get_logger

from .protocols import StoredObject

logger = get_logger(__name__)

META_SUFFIX = ".meta.json"


class LocalObjectStore:
    """Object store writing to a local directory."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root).resolve()

    def _path_for(self, key: str) -> Path:
        """Resolve ``key`` under the root, rejecting keys that escape it."""
        candidate = key.replace("\\", "/").strip()
        if not candidate or candidate.startswith("/"):
            raise StorageWriteError(f"Invalid object key: {key!r}", key=key)

        segments = candidate.split("/")
        if any(seg in {"", ".", ".."} for seg in segments):
            raise StorageWriteError(f"Invalid object key: {key!r}", key=key)

        if candidate.endswith(META_SUFFIX):
            raise StorageWriteError(f"Object keys may not end with {META_SUFFIX}: {key!r}", key=key)

        return self.root.joinpath(*segments)

    def _atomic_write(self, path: Path, content: bytes) -> None:
        """Write to a temp file in the same directory, then rename over ``path``."""
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".tmp_{path.name}_")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def put(
        self,
        key: str,
        data: bytes,
        *,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> StoredObject:
        path = self._path_for(key)
        meta = dict(metadata or {})
        sidecar = {"contentType": content_type, "customMetadata": meta}

        try:
            self._atomic_write(path, data)
            self._atomic_write(
                path.with_name(path.name + META_SUFFIX),
                json.dumps(sidecar, indent=2, sort_keys=True).encode("utf-8"),
            )
        except OSError as e:
            raise StorageWriteError(f"Failed to write {key}: {e}", key=key) from e

        logger.debug(f"Stored {len(data)} bytes at {path}")
        return StoredObject(key=key, size=len(data), content_type=content_type, metadata=meta)

