"""S3-backed implementation of StorageGateway."""

import os

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from imagetransform.core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from imagetransform.core.models.errors import StorageFailureError
from imagetransform.core.repositories.storage_repository import StorageGateway
from imagetransform.core.utils.constants import (
    ENV_APP_RUNTIME,
    ERROR_CODE_BLOB_DELETE_FAILED,
    ERROR_CODE_BLOB_DOWNLOAD_FAILED,
    ERROR_CODE_BLOB_NOT_FOUND,
    ERROR_CODE_BLOB_UPLOAD_FAILED,
    ERROR_CODE_PRESIGNED_URL_FAILED,
    LOCALHOST_URL,
    LOCALSTACK_URL,
)

logger = Logger(utc=True)

IS_LOCALSTACK = os.getenv(ENV_APP_RUNTIME) == "localstack"

_MISSING_KEY_CODES = frozenset({"NoSuchKey", "404", "NotFound"})


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


class S3StorageGateway(StorageGateway):
    """Blob storage backed by Amazon S3.

    All boto3 errors are caught and translated into StorageFailureError
    with stable error codes. No retries are attempted here beyond the
    boto3 client's own retry configuration.
    """

    def __init__(self, adapter: S3AdapterProtocol | None = None) -> None:
        """Create storage using the provided S3 adapter."""
        self._s3: S3AdapterProtocol = adapter or S3Adapter()

    def get(self, key: str) -> bytes:
        logger.debug("Downloading blob", extra={"key": key})

        try:
            response = self._s3.get_object(key=key)
            body: bytes = response["Body"].read()
        except ClientError as exc:
            logger.error("S3 download failed", extra={"key": key, "code": _error_code(exc)})
            if _error_code(exc) in _MISSING_KEY_CODES:
                raise StorageFailureError(
                    message="Image data not found",
                    error_code=ERROR_CODE_BLOB_NOT_FOUND,
                    details={"key": key},
                ) from exc
            raise StorageFailureError(
                message="Unable to download image at this time",
                error_code=ERROR_CODE_BLOB_DOWNLOAD_FAILED,
                details={"key": key},
            ) from exc
        except BotoCoreError as exc:
            logger.exception("Unexpected error downloading blob")
            raise StorageFailureError(
                message="Unable to download image at this time",
                error_code=ERROR_CODE_BLOB_DOWNLOAD_FAILED,
                details={"key": key},
            ) from exc

        logger.info("Blob downloaded", extra={"key": key, "size": len(body)})
        return body

    def put(self, key: str, data: bytes, content_type: str) -> str:
        logger.debug(
            "Uploading blob",
            extra={"key": key, "size": len(data), "content_type": content_type},
        )

        try:
            self._s3.put_object(key=key, body=data, content_type=content_type)
        except (ClientError, BotoCoreError) as exc:
            logger.exception("S3 upload failed", extra={"key": key})
            raise StorageFailureError(
                message="Unable to upload image at this time",
                error_code=ERROR_CODE_BLOB_UPLOAD_FAILED,
                details={"key": key},
            ) from exc

        logger.info("Blob uploaded", extra={"key": key})
        return self._s3.object_url(key=key)

    def delete(self, key: str) -> None:
        logger.debug("Deleting blob", extra={"key": key})

        try:
            self._s3.delete_object(key=key)
        except (ClientError, BotoCoreError) as exc:
            logger.exception("S3 deletion failed", extra={"key": key})
            raise StorageFailureError(
                message="Unable to delete image at this time",
                error_code=ERROR_CODE_BLOB_DELETE_FAILED,
                details={"key": key},
            ) from exc

        logger.info("Blob deleted", extra={"key": key})

    def presign_upload(self, key: str, content_type: str, ttl: int) -> str:
        # No object metadata in the signed request: clients would have to
        # replay it exactly or the signature check fails.
        return self._presign("put_object", {"Key": key, "ContentType": content_type}, key, ttl)

    def presign_download(self, key: str, ttl: int) -> str:
        return self._presign("get_object", {"Key": key}, key, ttl)

    def _presign(self, method: str, params: dict[str, str], key: str, ttl: int) -> str:
        logger.debug(
            "Generating pre-signed S3 URL",
            extra={"key": key, "method": method, "expires_in": ttl},
        )

        try:
            url = self._s3.generate_presigned_url(method=method, params=params, expires_in=ttl)
        except (ClientError, BotoCoreError) as exc:
            logger.exception("Failed to generate pre-signed URL", extra={"key": key})
            raise StorageFailureError(
                message="Unable to generate image access URL",
                error_code=ERROR_CODE_PRESIGNED_URL_FAILED,
                details={"key": key},
            ) from exc

        if IS_LOCALSTACK:
            # Internal LocalStack hostname is not reachable from the host machine.
            url = url.replace(LOCALSTACK_URL, LOCALHOST_URL, 1)

        return url
