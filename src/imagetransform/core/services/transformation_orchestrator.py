"""Business logic for producing and managing derived images.

This module composes blob storage, the transformation engine and the
metadata repository. It owns the ownership check for transformations, the
naming policy for derived files and the cascade policy applied when an
original image is deleted.
"""

import os
import uuid
from typing import Any

from aws_lambda_powertools import Logger

from imagetransform.core.imaging.engine import TransformationEngine
from imagetransform.core.imaging.naming import build_transformed_filename, build_transformed_key
from imagetransform.core.infrastructure.aws.dynamodb_metadata import DynamoDBArtifactRepository
from imagetransform.core.infrastructure.aws.s3_image_storage import S3StorageGateway
from imagetransform.core.models.errors import (
    AccessDeniedError,
    DecodeError,
    EncodeError,
    InvalidOptionsError,
    RepositoryFailureError,
    StorageFailureError,
    TransformationFailedError,
)
from imagetransform.core.models.image import Image, TransformedImage
from imagetransform.core.models.transformation import TransformationOptions
from imagetransform.core.repositories.metadata_repository import ArtifactRepository
from imagetransform.core.repositories.storage_repository import StorageGateway
from imagetransform.core.services.access_guard import AccessGuard
from imagetransform.core.utils.constants import (
    ENV_CASCADE_DELETE_TRANSFORMATIONS,
    TRANSFORMED_IMAGE_ID_PREFIX,
)
from imagetransform.core.utils.mime import format_for_content_type
from imagetransform.core.utils.time import utc_now_iso

logger = Logger(utc=True)

_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def cascade_delete_enabled() -> bool:
    """Read the cascade policy from the environment (enabled unless switched off)."""
    value = os.getenv(ENV_CASCADE_DELETE_TRANSFORMATIONS, "true")
    return value.strip().lower() not in _FALSE_VALUES


class TransformationOrchestrator:
    """Application service responsible for derived images.

    This service orchestrates:
    - Ownership and option checks before any I/O
    - Reading the source blob and running the engine
    - Writing the derived blob, then recording it (write-then-record)
    - Listing and deleting derived images, including cascade on parent delete
    """

    def __init__(
        self,
        storage: StorageGateway | None = None,
        repository: ArtifactRepository | None = None,
        engine: TransformationEngine | None = None,
        *,
        cascade_delete: bool | None = None,
    ) -> None:
        """Initialize with infrastructure dependencies, defaulting to AWS."""
        self.storage: StorageGateway = storage or S3StorageGateway()
        self.repository: ArtifactRepository = repository or DynamoDBArtifactRepository()
        self.engine = engine or TransformationEngine()
        self.guard = AccessGuard(self.repository)
        self.cascade_delete = cascade_delete_enabled() if cascade_delete is None else cascade_delete

    @staticmethod
    def generate_transformed_image_id() -> str:
        """Generate a unique derived image identifier."""
        return f"{TRANSFORMED_IMAGE_ID_PREFIX}{uuid.uuid4().hex}"

    def transform(
        self,
        image: Image,
        options: TransformationOptions | dict[str, Any] | None,
        requester: str,
    ) -> TransformedImage:
        """Produce, store and record one derived image.

        The flow is:
        1. Check ownership and parse options (no I/O on failure)
        2. Read the source blob
        3. Apply the transformation
        4. Write the derived blob
        5. Record the derived image

        Args:
            image: The source image record
            options: Raw or parsed transformation request
            requester: Identity of the caller

        Returns:
            The recorded derived image

        Raises:
            AccessDeniedError: If the requester does not own the image
            InvalidOptionsError: If the options are malformed
            TransformationFailedError: If any pipeline step fails
        """
        if requester != image.owner_id:
            logger.warning(
                "Transformation requested by non-owner",
                extra={"image_id": image.image_id, "requester": requester},
            )
            raise AccessDeniedError(
                message="You do not have access to this image",
                details={"image_id": image.image_id},
            )

        parsed = TransformationOptions.parse(options)
        applied_options = parsed.to_json()

        logger.debug(
            "Starting transformation",
            extra={"image_id": image.image_id, "options": applied_options},
        )

        # Step 1: Read the source
        try:
            source = self.storage.get(image.storage_key)
        except StorageFailureError as exc:
            logger.exception("Failed to read source image", extra={"image_id": image.image_id})
            raise TransformationFailedError(
                message="Unable to read the source image",
                cause=exc,
                details={"image_id": image.image_id},
            ) from exc

        # Step 2: Transform
        try:
            data, content_type = self.engine.apply(
                source, parsed, source_content_type=image.content_type
            )
        except (DecodeError, InvalidOptionsError, EncodeError) as exc:
            logger.warning(
                "Image transformation failed",
                extra={"image_id": image.image_id, "error_code": exc.error_code},
            )
            raise TransformationFailedError(
                message=f"Image transformation failed: {exc.message}",
                cause=exc,
                details={"image_id": image.image_id},
            ) from exc

        filename = build_transformed_filename(
            image.original_name,
            parsed,
            format_for_content_type(content_type),
            source_content_type=image.content_type,
        )
        key = build_transformed_key(image.owner_id, filename)

        # Step 3: Write the derived blob
        try:
            url = self.storage.put(key, data, content_type)
        except StorageFailureError as exc:
            logger.exception("Failed to store transformed image", extra={"image_id": image.image_id})
            raise TransformationFailedError(
                message="Unable to store the transformed image",
                cause=exc,
                details={"image_id": image.image_id},
            ) from exc

        record = TransformedImage(
            transformed_image_id=self.generate_transformed_image_id(),
            parent_image_id=image.image_id,
            owner_id=image.owner_id,
            storage_key=key,
            filename=filename,
            url=url,
            content_type=content_type,
            file_size=len(data),
            applied_options=applied_options,
            created_at=utc_now_iso(),
        )

        # Step 4: Record it. A failure here leaves an unreferenced blob behind.
        try:
            self.repository.save_transformed_image(record)
        except RepositoryFailureError as exc:
            logger.exception(
                "Failed to record transformed image, blob left orphaned",
                extra={"image_id": image.image_id, "orphaned_key": key},
            )
            raise TransformationFailedError(
                message="Unable to save the transformed image",
                cause=exc,
                details={"image_id": image.image_id},
            ) from exc

        logger.info(
            "Image transformed successfully",
            extra={
                "image_id": image.image_id,
                "transformed_image_id": record.transformed_image_id,
                "content_type": content_type,
                "file_size": record.file_size,
            },
        )
        return record

    def list_transformations(self, image_id: str, requester: str) -> list[TransformedImage] | None:
        """List the derived images of an original, or None if not visible to the requester."""
        image = self.guard.owned_image(image_id, requester)
        if image is None:
            return None
        return self.repository.find_transformed_by_parent(image.image_id)

    def list_owner_transformations(self, owner_id: str) -> list[TransformedImage]:
        """List every derived image belonging to a user, newest first."""
        return self.repository.find_transformed_by_owner(owner_id)

    def delete_transformed_image(
        self, transformed_image_id: str, requester: str
    ) -> TransformedImage | None:
        """Delete one derived image (blob first, then metadata).

        Returns:
            The deleted record, or None if it is not visible to the requester
        """
        record = self.guard.owned_transformed_image(transformed_image_id, requester)
        if record is None:
            return None

        self.storage.delete(record.storage_key)
        self.repository.delete_transformed_image(record.transformed_image_id)

        logger.info(
            "Transformed image deleted",
            extra={"transformed_image_id": transformed_image_id},
        )
        return record

    def purge_transformations(self, image: Image) -> int:
        """Delete every derived image of an original.

        Blob deletion failures are logged and do not stop the metadata removal.

        Returns:
            Number of derived records removed
        """
        records = self.repository.find_transformed_by_parent(image.image_id)

        for record in records:
            try:
                self.storage.delete(record.storage_key)
            except StorageFailureError:
                logger.warning(
                    "Failed to delete transformed image blob",
                    extra={
                        "transformed_image_id": record.transformed_image_id,
                        "key": record.storage_key,
                    },
                )
            self.repository.delete_transformed_image(record.transformed_image_id)

        logger.info(
            "Transformations purged",
            extra={"image_id": image.image_id, "count": len(records)},
        )
        return len(records)
