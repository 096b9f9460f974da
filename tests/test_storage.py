"""
Tests for object storage backends.
"""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from screenshot_relay.config import Settings
from screenshot_relay.infra.storage import (
    LocalObjectStore,
    ObjectStore,
    S3ObjectStore,
    create_object_store,
)
from screenshot_relay.shared.errors import ConfigurationError, StorageWriteError


class TestLocalObjectStore:
    """Filesystem store."""

    def test_put_writes_bytes_and_sidecar(self, temp_dir: Path) -> None:
        store = LocalObjectStore(temp_dir)

        stored = store.put(
            "shot.png",
            b"abc",
            content_type="image/png",
            metadata={"source": "browser-rendering-api"},
        )

        assert stored.key == "shot.png"
        assert stored.size == 3
        assert (temp_dir / "shot.png").read_bytes() == b"abc"
        sidecar = json.loads((temp_dir / "shot.png.meta.json").read_text())
        assert sidecar == {
            "contentType": "image/png",
            "customMetadata": {"source": "browser-rendering-api"},
        }

    def test_put_overwrites(self, temp_dir: Path) -> None:
        store = LocalObjectStore(temp_dir)
        store.put("a.png", b"first", content_type="image/png")
        store.put("a.png", b"second", content_type="image/png")

        assert (temp_dir / "a.png").read_bytes() == b"second"

    def test_nested_keys_create_directories(self, temp_dir: Path) -> None:
        store = LocalObjectStore(temp_dir / "bucket")
        store.put("2024/06/a.png", b"x", content_type="image/png")

        assert (temp_dir / "bucket" / "2024" / "06" / "a.png").exists()

    def test_no_temp_files_left_behind(self, temp_dir: Path) -> None:
        store = LocalObjectStore(temp_dir)
        store.put("a.png", b"x", content_type="image/png")

        leftovers = [p.name for p in temp_dir.iterdir() if p.name.startswith(".tmp_")]
        assert leftovers == []

    @pytest.mark.parametrize("key", ["", "/etc/passwd", "../up.png", "a/../../b.png", "a//b.png", "./a.png", "other.png.meta.json"])
    def test_rejects_unsafe_keys(self, temp_dir: Path, key: str) -> None:
        store = LocalObjectStore(temp_dir)
        with pytest.raises(StorageWriteError):
            store.put(key, b"x", content_type="image/png")

    def test_os_error_is_wrapped(self, temp_dir: Path) -> None:
        store = LocalObjectStore(temp_dir)
        with patch("screenshot_relay.infra.storage.local_store.os.replace", side_effect=OSError("read-only")):
            with pytest.raises(StorageWriteError, match="read-only"):
                store.put("a.png", b"x", content_type="image/png")

        assert not (temp_dir / "a.png").exists()

    def test_satisfies_protocol(self, temp_dir: Path) -> None:
        assert isinstance(LocalObjectStore(temp_dir), ObjectStore)


class TestS3ObjectStore:
    """S3-compatible store with a mocked boto3 client."""

    def test_put_object_call(self) -> None:
        client = MagicMock()
        store = S3ObjectStore(client, "screenshots")

        stored = store.put(
            "shot.png",
            b"img",
            content_type="image/png",
            metadata={"createdAt": "2024-01-01T00:00:00.000Z", "source": "browser-rendering-api"},
        )

        client.put_object.assert_called_once_with(
            Bucket="screenshots",
            Key="shot.png",
            Body=b"img",
            ContentType="image/png",
            Metadata={"createdAt": "2024-01-01T00:00:00.000Z", "source": "browser-rendering-api"},
        )
        assert stored.size == 3

    def test_client_error_is_wrapped(self) -> None:
        client = MagicMock()
        client.put_object.side_effect = ClientError(
            {"Error": {"Code": "NoSuchBucket", "Message": "missing"}}, "PutObject"
        )
        store = S3ObjectStore(client, "screenshots")

        with pytest.raises(StorageWriteError, match="NoSuchBucket") as exc:
            store.put("a.png", b"x", content_type="image/png")
        assert exc.value.key == "a.png"

    def test_connection_error_is_wrapped(self) -> None:
        client = MagicMock()
        client.put_object.side_effect = EndpointConnectionError(endpoint_url="https://r2.test")
        store = S3ObjectStore(client, "screenshots")

        with pytest.raises(StorageWriteError):
            store.put("a.png", b"x", content_type="image/png")

    def test_from_credentials_builds_client(self) -> None:
        with patch("screenshot_relay.infra.storage.s3_store.boto3.session.Session") as session_cls:
            store = S3ObjectStore.from_credentials(
                bucket="shots",
                endpoint_url="https://acct.r2.cloudflarestorage.com",
                access_key_id="AK",
                secret_access_key="SK",
            )

        session_cls.assert_called_once_with(aws_access_key_id="AK", aws_secret_access_key="SK")
        client_call = session_cls.return_value.client.call_args
        assert client_call.args == ("s3",)
        assert client_call.kwargs["endpoint_url"] == "https://acct.r2.cloudflarestorage.com"
        config = client_call.kwargs["config"]
        assert config.region_name == "auto"
        assert config.retries["max_attempts"] == 1
        assert store.bucket == "shots"


class TestCreateObjectStore:
    def test_local_backend(self, temp_dir: Path) -> None:
        settings = Settings(storage_backend="local", local_storage_path=temp_dir, _env_file=None)
        store = create_object_store(settings)

        assert isinstance(store, LocalObjectStore)
        assert store.root == temp_dir.resolve()

    def test_s3_backend_uses_r2_endpoint(self) -> None:
        settings = Settings(
            storage_backend="s3",
            account_id="acct",
            screenshots_bucket="shots",
            s3_endpoint_url=None,
            _env_file=None,
        )
        with patch.object(S3ObjectStore, "from_credentials") as factory:
            create_object_store(settings)

        assert factory.call_args.kwargs["endpoint_url"] == "https://acct.r2.cloudflarestorage.com"
        assert factory.call_args.kwargs["bucket"] == "shots"

    def test_s3_backend_without_endpoint(self) -> None:
        settings = Settings(storage_backend="s3", account_id="", s3_endpoint_url=None, _env_file=None)
        with pytest.raises(ConfigurationError):
            create_object_store(settings)

    def test_misconfigured_store_surfaces_as_json_error(self, render_api) -> None:
        from fastapi.testclient import TestClient

        from screenshot_relay.app import build_app

        settings = Settings(storage_backend="s3", account_id="", s3_endpoint_url=None, _env_file=None)
        client = TestClient(build_app(settings))

        resp = client.post("/api/screenshot", json={"html": "<p>x</p>"})

        assert resp.status_code == 500
        assert resp.json() == {
            "success": False,
            "error": "S3 storage needs S3_ENDPOINT_URL or ACCOUNT_ID to locate the bucket",
        }
        render_api.assert_not_called()

    def test_store_construction_failure_surfaces_as_json_error(self, settings, render_api) -> None:
        from fastapi.testclient import TestClient

        from screenshot_relay.app import build_app

        client = TestClient(build_app(settings))
        with patch(
            "screenshot_relay.modules.screenshot.router.create_object_store",
            side_effect=ValueError("Invalid endpoint: not a url"),
        ):
            resp = client.post("/api/screenshot", json={"html": "<p>x</p>"})

        assert resp.status_code == 500
        assert resp.headers["content-type"].startswith("application/json")
        assert resp.json() == {
            "success": False,
            "error": "Failed to create object store: Invalid endpoint: not a url",
        }
        render_api.assert_not_called()
