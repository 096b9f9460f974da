"""Shared fixtures for screenshot relay tests."""

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from screenshot_relay.app import build_app
from screenshot_relay.config import Settings, init_settings, reset_settings
from screenshot_relay.infra.storage import StoredObject

RENDER_REQUEST_TARGET = "screenshot_relay.modules.screenshot.client.requests.request"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 56


class RecordingStore:
    """Object store that keeps writes in memory for assertions."""

    def __init__(self, fail_with: Exception | None = None) -> None:
        self.puts: list[dict] = []
        self.objects: dict[str, bytes] = {}
        self.fail_with = fail_with

    def put(
        self,
        key: str,
        data: bytes,
        *,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> StoredObject:
        if self.fail_with is not None:
            raise self.fail_with
        self.puts.append({
            "key": key,
            "data": data,
            "content_type": content_type,
            "metadata": dict(metadata or {}),
        })
        self.objects[key] = data
        return StoredObject(key=key, size=len(data), content_type=content_type, metadata=metadata or {})


def make_render_response(
    status_code: int = 200,
    content: bytes = PNG_BYTES,
    text: str = "",
) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    response.text = text
    return response


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture
def settings(temp_dir: Path) -> Iterator[Settings]:
    reset_settings()
    s = Settings(
        account_id="acct-123",
        api_token="secret-token",
        storage_backend="local",
        local_storage_path=temp_dir / "bucket",
        _env_file=None,
    )
    init_settings(s)
    yield s
    reset_settings()


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def client(settings: Settings, store: RecordingStore) -> TestClient:
    app = build_app(settings, object_store=store)
    return TestClient(app)


@pytest.fixture
def render_api() -> Iterator[MagicMock]:
    """Patch the outbound rendering call; returns PNG bytes by default."""
    with patch(RENDER_REQUEST_TARGET, return_value=make_render_response()) as mock_request:
        yield mock_request
