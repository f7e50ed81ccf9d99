"""Business logic for original images.

This module coordinates storage and metadata persistence for uploads,
registration of directly uploaded objects, listing and deletion, while
translating failures into domain-specific errors.
"""

import uuid

from aws_lambda_powertools import Logger

from imagetransform.core.infrastructure.aws.dynamodb_metadata import DynamoDBArtifactRepository
from imagetransform.core.infrastructure.aws.s3_image_storage import S3StorageGateway
from imagetransform.core.models.errors import (
    AccessDeniedError,
    RepositoryFailureError,
    StorageFailureError,
    ValidationError,
)
from imagetransform.core.models.image import Image
from imagetransform.core.repositories.metadata_repository import ArtifactRepository
from imagetransform.core.repositories.storage_repository import StorageGateway
from imagetransform.core.services.transformation_orchestrator import TransformationOrchestrator
from imagetransform.core.utils.constants import (
    ALLOWED_MIME_TYPES,
    DEFAULT_PAGE,
    DEFAULT_PAGE_LIMIT,
    ERROR_CODE_UNSUPPORTED_MIME_TYPE,
    IMAGE_ID_PREFIX,
    MIME_TYPE_EXTENSION_MAP,
    ORIGINAL_KEY_PREFIX,
)
from imagetransform.core.utils.mime import detect_mime_type
from imagetransform.core.utils.pagination import PagePagination
from imagetransform.core.utils.time import utc_now_iso

logger = Logger(utc=True)


class ImageService:
    """Application service responsible for original images.

    This service orchestrates:
    - Uploading image content and persisting its record
    - Registering objects uploaded through a presigned URL
    - Listing a requester's images
    - Deleting images, cascading to derived images when enabled
    """

    def __init__(
        self,
        storage: StorageGateway | None = None,
        repository: ArtifactRepository | None = None,
        orchestrator: TransformationOrchestrator | None = None,
    ) -> None:
        """Initialize the service with required infrastructure dependencies."""
        self.storage: StorageGateway = storage or S3StorageGateway()
        self.repository: ArtifactRepository = repository or DynamoDBArtifactRepository()
        self.orchestrator = orchestrator or TransformationOrchestrator(
            storage=self.storage, repository=self.repository
        )

    @staticmethod
    def generate_image_id() -> str:
        """Generate a unique image identifier."""
        return f"{IMAGE_ID_PREFIX}{uuid.uuid4().hex}"

    @staticmethod
    def owner_prefix(owner_id: str) -> str:
        return f"{ORIGINAL_KEY_PREFIX}/{owner_id}/"

    def upload_image(self, *, owner_id: str, original_name: str, file_data: bytes) -> Image:
        """Store an image and persist its record.

        The upload flow is:
        1. Detect and validate MIME type
        2. Upload image to object storage
        3. Persist the image record
        4. Roll back storage if persistence fails

        Raises:
            ValidationError: If the file type is not supported
            StorageFailureError: If storage upload fails
            RepositoryFailureError: If the record cannot be saved
        """
        logger.debug("Starting image upload", extra={"owner_id": owner_id})

        # Step 1: Detect and validate MIME type
        try:
            mime_type = detect_mime_type(file_data)
        except ValueError as exc:
            logger.warning("Unsupported file type uploaded", extra={"owner_id": owner_id})
            raise ValidationError(
                message="Unsupported image type",
                error_code=ERROR_CODE_UNSUPPORTED_MIME_TYPE,
            ) from exc

        # Step 2: Upload image to storage
        image_id = self.generate_image_id()
        extension = MIME_TYPE_EXTENSION_MAP[mime_type][0]
        storage_key = f"{self.owner_prefix(owner_id)}{image_id}.{extension}"

        self.storage.put(storage_key, file_data, mime_type)

        image = Image(
            image_id=image_id,
            owner_id=owner_id,
            storage_key=storage_key,
            original_name=original_name,
            content_type=mime_type,
            file_size=len(file_data),
            created_at=utc_now_iso(),
        )

        # Step 3: Persist the record (rollback storage on failure)
        try:
            self.repository.save_image(image)
        except RepositoryFailureError:
            logger.exception("Failed to persist image record", extra={"image_id": image_id})

            # Best-effort cleanup to avoid orphaned storage objects
            try:
                self.storage.delete(storage_key)
            except StorageFailureError:
                logger.warning(
                    "Failed to clean up uploaded image after metadata failure",
                    extra={"key": storage_key},
                )
            raise

        logger.info("Image uploaded successfully", extra={"image_id": image_id, "owner_id": owner_id})
        return image

    def register_image(
        self,
        *,
        owner_id: str,
        storage_key: str,
        original_name: str,
        content_type: str,
        file_size: int,
    ) -> Image:
        """Record an image the client uploaded directly through a presigned URL.

        Raises:
            AccessDeniedError: If the key is outside the requester's prefix
            ValidationError: If the content type is not supported
            RepositoryFailureError: If the record cannot be saved
        """
        if not storage_key.startswith(self.owner_prefix(owner_id)):
            logger.warning(
                "Registration of a key outside the requester's prefix",
                extra={"owner_id": owner_id, "key": storage_key},
            )
            raise AccessDeniedError(message="You do not have access to this storage key")

        if content_type.lower() not in ALLOWED_MIME_TYPES:
            raise ValidationError(
                message="Unsupported image type",
                error_code=ERROR_CODE_UNSUPPORTED_MIME_TYPE,
                details={"content_type": content_type},
            )

        image = Image(
            image_id=self.generate_image_id(),
            owner_id=owner_id,
            storage_key=storage_key,
            original_name=original_name,
            content_type=content_type.lower(),
            file_size=file_size,
            created_at=utc_now_iso(),
        )
        self.repository.save_image(image)

        logger.info("Image registered", extra={"image_id": image.image_id, "owner_id": owner_id})
        return image

    def get_image(self, image_id: str, requester: str) -> Image | None:
        """Fetch one image, or None if it is absent or not owned by the requester."""
        return self.orchestrator.guard.owned_image(image_id, requester)

    def list_images(self, owner_id: str) -> list[Image]:
        """List the requester's images, newest first."""
        return self.repository.find_images_by_owner(owner_id)

    def list_images_page(
        self, owner_id: str, page: int = DEFAULT_PAGE, limit: int = DEFAULT_PAGE_LIMIT
    ) -> tuple[list[Image], int, bool]:
        """List one page of the requester's images, newest first.

        Returns:
            Tuple of (images, total_count, has_more)
        """
        return PagePagination.paginate(self.list_images(owner_id), page=page, limit=limit)

    def delete_image(self, image_id: str, requester: str) -> Image | None:
        """Delete an image, its derived images (when cascade is on) and its record.

        Returns:
            The deleted record, or None if it is not visible to the requester
        """
        image = self.orchestrator.guard.owned_image(image_id, requester)
        if image is None:
            return None

        if self.orchestrator.cascade_delete:
            self.orchestrator.purge_transformations(image)

        self.storage.delete(image.storage_key)
        self.repository.delete_image(image.image_id)

        logger.info("Image deleted successfully", extra={"image_id": image_id})
        return image
