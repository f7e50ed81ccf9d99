"""Time-limited access URLs for stored images."""

import posixpath
import uuid
from typing import NamedTuple

from aws_lambda_powertools import Logger

from imagetransform.core.infrastructure.aws.s3_image_storage import S3StorageGateway
from imagetransform.core.repositories.storage_repository import StorageGateway
from imagetransform.core.utils.constants import (
    DOWNLOAD_URL_TTL_SECONDS,
    ORIGINAL_KEY_PREFIX,
    UPLOAD_URL_TTL_SECONDS,
)

logger = Logger(utc=True)


class AccessUrl(NamedTuple):
    url: str
    expires_in: int


class AccessUrlIssuer:
    """Issues presigned URLs with a fixed lifetime policy.

    Upload URLs live for 15 minutes, download URLs for one hour. Upload
    URLs carry no object metadata; ownership of an uploaded object is
    established when its metadata is registered.
    """

    def __init__(self, storage: StorageGateway | None = None) -> None:
        self._storage: StorageGateway = storage or S3StorageGateway()

    @staticmethod
    def build_upload_key(owner_id: str, filename: str) -> str:
        """Return a unique storage key under the owner's prefix."""
        name = posixpath.basename(filename.replace("\\", "/")) or "image"
        return f"{ORIGINAL_KEY_PREFIX}/{owner_id}/{uuid.uuid4()}_{name}"

    def issue_upload(self, key: str, content_type: str) -> AccessUrl:
        url = self._storage.presign_upload(key, content_type, UPLOAD_URL_TTL_SECONDS)
        logger.info(
            "Issued upload URL",
            extra={"key": key, "content_type": content_type, "expires_in": UPLOAD_URL_TTL_SECONDS},
        )
        return AccessUrl(url=url, expires_in=UPLOAD_URL_TTL_SECONDS)

    def issue_download(self, key: str) -> AccessUrl:
        url = self._storage.presign_download(key, DOWNLOAD_URL_TTL_SECONDS)
        logger.info("Issued download URL", extra={"key": key, "expires_in": DOWNLOAD_URL_TTL_SECONDS})
        return AccessUrl(url=url, expires_in=DOWNLOAD_URL_TTL_SECONDS)
