"""In-process implementation of ArtifactRepository.

Used for local runs and tests. Records are kept in dictionaries keyed by id
and guarded by a single lock, so one instance can be shared across threads.
"""

from threading import Lock

from imagetransform.core.models.errors import RepositoryFailureError
from imagetransform.core.models.image import Image, TransformedImage
from imagetransform.core.repositories.metadata_repository import ArtifactRepository
from imagetransform.core.utils.constants import ERROR_CODE_METADATA_CONFLICT


class InMemoryArtifactRepository(ArtifactRepository):
    """Dictionary-backed metadata storage."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._images: dict[str, Image] = {}
        self._transformed: dict[str, TransformedImage] = {}

    def get_image(self, image_id: str) -> Image | None:
        with self._lock:
            return self._images.get(image_id)

    def save_image(self, image: Image) -> None:
        with self._lock:
            if image.image_id in self._images:
                raise RepositoryFailureError(
                    message="This record already exists",
                    error_code=ERROR_CODE_METADATA_CONFLICT,
                    details={"image_id": image.image_id},
                )
            self._images[image.image_id] = image

    def delete_image(self, image_id: str) -> None:
        with self._lock:
            self._images.pop(image_id, None)

    def find_images_by_owner(self, owner_id: str) -> list[Image]:
        with self._lock:
            images = [image for image in self._images.values() if image.owner_id == owner_id]
        return sorted(images, key=lambda image: image.created_at, reverse=True)

    def get_transformed_image(self, transformed_image_id: str) -> TransformedImage | None:
        with self._lock:
            return self._transformed.get(transformed_image_id)

    def save_transformed_image(self, transformed_image: TransformedImage) -> None:
        with self._lock:
            if transformed_image.transformed_image_id in self._transformed:
                raise RepositoryFailureError(
                    message="This record already exists",
                    error_code=ERROR_CODE_METADATA_CONFLICT,
                    details={"transformed_image_id": transformed_image.transformed_image_id},
                )
            self._transformed[transformed_image.transformed_image_id] = transformed_image

    def delete_transformed_image(self, transformed_image_id: str) -> None:
        with self._lock:
            self._transformed.pop(transformed_image_id, None)

    def find_transformed_by_owner(self, owner_id: str) -> list[TransformedImage]:
        with self._lock:
            records = [r for r in self._transformed.values() if r.owner_id == owner_id]
        return sorted(records, key=lambda record: record.created_at, reverse=True)

    def find_transformed_by_parent(self, parent_image_id: str) -> list[TransformedImage]:
        with self._lock:
            records = [r for r in self._transformed.values() if r.parent_image_id == parent_image_id]
        return sorted(records, key=lambda record: record.created_at, reverse=True)
