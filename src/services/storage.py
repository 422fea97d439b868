"""Object storage for record images (S3 and an in-memory test double)."""

import logging
import re
import secrets
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from src.config import Settings
from src.services.errors import StoreFailure

logger = logging.getLogger(__name__)

KEY_PATTERN = re.compile(r"[0-9a-f]{32}")


def generate_key() -> str:
    """Generate a fresh opaque blob key (128 bits, hex encoded)."""
    return secrets.token_hex(16)


def is_generated_key(key: str) -> bool:
    """True if ``key`` has the shape of a key from ``generate_key``."""
    return KEY_PATTERN.fullmatch(key) is not None


def public_url(bucket: str, region: str, key: str, base_url: str | None = None) -> str:
    """Build the public URL for a key.

    Defaults to the virtual-hosted S3 form. ``base_url`` replaces the prefix for
    S3-compatible providers served from another host.
    """
    if base_url:
        return f"{base_url.rstrip('/')}/{key}"
    return f"https://{bucket}.s3.{region}.amazonaws.com/{key}"


@dataclass(frozen=True)
class StoredObject:
    """A key in the bucket and when it was last written."""

    key: str
    last_modified: datetime


class BlobStore(Protocol):
    """Operations the attachment service needs from object storage."""

    def put(self, key: str, content: bytes, content_type: str) -> None: ...

    def delete(self, key: str) -> None: ...

    def url_for(self, key: str) -> str: ...

    def list_objects(self) -> list[StoredObject]: ...

    def close(self) -> None: ...


@dataclass
class InMemoryBlobStore:
    """Test double for storage interactions."""

    bucket: str = "test-bucket"
    region: str = "us-east-1"
    objects: dict[str, tuple[bytes, str]] = field(default_factory=dict)
    modified: dict[str, datetime] = field(default_factory=dict)

    def put(self, key: str, content: bytes, content_type: str) -> None:
        self.objects[key] = (content, content_type)
        self.modified[key] = datetime.now(UTC)

    def delete(self, key: str) -> None:
        self.objects.pop(key, None)
        self.modified.pop(key, None)

    def url_for(self, key: str) -> str:
        return public_url(self.bucket, self.region, key)

    def list_objects(self) -> list[StoredObject]:
        now = datetime.now(UTC)
        return [StoredObject(key, self.modified.get(key, now)) for key in self.objects]

    def get(self, key: str) -> bytes:
        if key not in self.objects:
            raise KeyError(key)
        return self.objects[key][0]

    def close(self) -> None:
        pass


class S3BlobStore:
    """Blob store backed by an S3 (or S3-compatible) bucket."""

    def __init__(
        self,
        bucket: str,
        region: str,
        endpoint_url: str | None = None,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        public_base_url: str | None = None,
    ):
        self.bucket = bucket
        self.region = region
        self.public_base_url = public_base_url
        self._client = boto3.client(
            "s3",
            endpoint_url=endpoint_url,
            region_name=region,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            config=Config(s3={"addressing_style": "virtual"}, signature_version="s3v4"),
        )

    def put(self, key: str, content: bytes, content_type: str) -> None:
        try:
            self._client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=content,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to upload {key} to {self.bucket}: {e}")
            raise StoreFailure("Failed to upload image") from e
        logger.info(f"Uploaded {key} to {self.bucket} ({len(content)} bytes)")

    def delete(self, key: str) -> None:
        try:
            self._client.delete_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to delete {key} from {self.bucket}: {e}")
            raise StoreFailure("Failed to delete image") from e

    def url_for(self, key: str) -> str:
        return public_url(self.bucket, self.region, key, self.public_base_url)

    def list_objects(self) -> list[StoredObject]:
        objects = []
        try:
            paginator = self._client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self.bucket):
                objects.extend(
                    StoredObject(obj["Key"], obj["LastModified"])
                    for obj in page.get("Contents", [])
                )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to list objects in {self.bucket}: {e}")
            raise StoreFailure("Failed to list images") from e
        return objects

    def close(self) -> None:
        self._client.close()


def create_blob_store(settings: Settings) -> BlobStore:
    """Build the blob store configured for this process."""
    if settings.use_in_memory_storage or not settings.s3_bucket:
        logger.warning("S3 bucket not configured, using in-memory image storage")
        return InMemoryBlobStore(region=settings.s3_region)
    return S3BlobStore(
        bucket=settings.s3_bucket,
        region=settings.s3_region,
        endpoint_url=settings.s3_endpoint_url,
        access_key_id=settings.aws_access_key_id,
        secret_access_key=settings.aws_secret_access_key,
        public_base_url=settings.s3_public_base_url,
    )
