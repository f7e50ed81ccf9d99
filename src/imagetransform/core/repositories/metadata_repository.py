"""Abstract contract for image and derived-image metadata persistence."""

from abc import ABC, abstractmethod

from imagetransform.core.models.image import Image, TransformedImage


class ArtifactRepository(ABC):
    """Contract for storing and retrieving image records.

    Implementations could be DynamoDB, PostgreSQL, in-memory, etc.
    Records are immutable; the only mutation is deletion. Implementations
    never cascade: removing derived records is the caller's decision.
    All failures are raised as RepositoryFailureError.
    """

    @abstractmethod
    def get_image(self, image_id: str) -> Image | None:
        """Fetch an original image record, or None if absent."""

    @abstractmethod
    def save_image(self, image: Image) -> None:
        """Insert an original image record.

        Raises:
            RepositoryFailureError: If the id already exists or the write fails
        """

    @abstractmethod
    def delete_image(self, image_id: str) -> None:
        """Delete an original image record."""

    @abstractmethod
    def find_images_by_owner(self, owner_id: str) -> list[Image]:
        """List an owner's original images, newest first."""

    @abstractmethod
    def get_transformed_image(self, transformed_image_id: str) -> TransformedImage | None:
        """Fetch a derived image record, or None if absent."""

    @abstractmethod
    def save_transformed_image(self, transformed_image: TransformedImage) -> None:
        """Insert a derived image record as a single atomic write.

        Raises:
            RepositoryFailureError: If the id already exists or the write fails
        """

    @abstractmethod
    def delete_transformed_image(self, transformed_image_id: str) -> None:
        """Delete a derived image record."""

    @abstractmethod
    def find_transformed_by_owner(self, owner_id: str) -> list[TransformedImage]:
        """List an owner's derived images, newest first."""

    @abstractmethod
    def find_transformed_by_parent(self, parent_image_id: str) -> list[TransformedImage]:
        """List the derived images of one original, newest first."""
