"""S3-compatible object store (Cloudflare R2, AWS S3, MinIO)."""

from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from screenshot_relay.shared.errors import StorageWriteError
from screenshot_relay.shared.logging import get_logger

from .protocols import StoredObject

logger = get_logger(__name__)


class S3ObjectStore:
    """Write objects to a single bucket through the S3 API."""

    def __init__(self, client: Any, bucket: str) -> None:
        self._client = client
        self.bucket = bucket

    @classmethod
    def from_credentials(
        cls,
        bucket: str,
        endpoint_url: str,
        region: str = "auto",
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
    ) -> "S3ObjectStore":
        """Create a boto3 client for ``endpoint_url``. Writes are attempted once."""
        session = boto3.session.Session(
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
        )
        config = Config(
            region_name=region,
            signature_version="s3v4",
            retries={"max_attempts": 1, "mode": "standard"},
        )
        client = session.client("s3", endpoint_url=endpoint_url, config=config)
        return cls(client, bucket)

    def put(
        self,
        key: str,
        data: bytes,
        *,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> StoredObject:
        meta = dict(metadata or {})
        try:
            self._client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
                Metadata=meta,
            )
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            raise StorageWriteError(
                f"Failed to write {self.bucket}/{key}: {error_code}", key=key
            ) from e
        except BotoCoreError as e:
            raise StorageWriteError(f"Failed to write {self.bucket}/{key}: {e}", key=key) from e

        logger.debug(f"Stored {len(data)} bytes at s3://{self.bucket}/{key}")
        return StoredObject(key=key, size=len(data), content_type=content_type, metadata=meta)
