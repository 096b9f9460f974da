"""Object storage backends."""

from screenshot_relay.config import Settings
from screenshot_relay.shared.errors import ConfigurationError

from .local_store import LocalObjectStore
from .protocols import ObjectStore, StoredObject
from .s3_store import S3ObjectStore

__all__ = [
    "LocalObjectStore",
    "ObjectStore",
    "S3ObjectStore",
    "StoredObject",
    "create_object_store",
]


def create_object_store(settings: Settings) -> ObjectStore:
    """Build the object store selected by ``settings.storage_backend``."""
    if settings.storage_backend == "local":
        return LocalObjectStore(settings.local_storage_path)

    endpoint_url = settings.get_s3_endpoint_url()
    if not endpoint_url:
        raise ConfigurationError(
            "S3 storage needs S3_ENDPOINT_URL or ACCOUNT_ID to locate the bucket"
        )
    return S3ObjectStore.from_credentials(
        bucket=settings.screenshots_bucket,
        endpoint_url=endpoint_url,
        region=settings.s3_region,
        access_key_id=settings.s3_access_key_id,
        secret_access_key=settings.s3_secret_access_key,
    )
