"""Owner-scoped lookups of image records."""

from aws_lambda_powertools import Logger

from imagetransform.core.models.image import Image, TransformedImage
from imagetransform.core.repositories.metadata_repository import ArtifactRepository

logger = Logger(utc=True)


class AccessGuard:
    """Resolves records only for their owner.

    A record that does not exist and a record owned by someone else are
    reported the same way (None), so callers cannot reveal which ids exist.
    """

    def __init__(self, repository: ArtifactRepository) -> None:
        self._repository = repository

    def owned_image(self, image_id: str, requester: str) -> Image | None:
        image = self._repository.get_image(image_id)
        if image is None or image.owner_id != requester:
            logger.info(
                "Image not visible to requester",
                extra={"image_id": image_id, "requester": requester},
            )
            return None
        return image

    def owned_transformed_image(
        self, transformed_image_id: str, requester: str
    ) -> TransformedImage | None:
        record = self._repository.get_transformed_image(transformed_image_id)
        if record is None or record.owner_id != requester:
            logger.info(
                "Transformed image not visible to requester",
                extra={"transformed_image_id": transformed_image_id, "requester": requester},
            )
            return None
        return record
