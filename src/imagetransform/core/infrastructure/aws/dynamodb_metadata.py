"""DynamoDB-backed implementation of ArtifactRepository.

Two tables are used:
- images, partition key `image_id`, GSI `owner-created-index` (owner_id, created_at)
- transformed images, partition key `transformed_image_id`, GSIs
  `owner-created-index` (owner_id, created_at) and
  `parent-created-index` (parent_image_id, created_at)
"""

from decimal import Decimal
from typing import Any, TypeVar

from aws_lambda_powertools import Logger
from boto3.dynamodb.conditions import Key
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from imagetransform.core.infrastructure.adapters.dynamodb_adapter import (
    DynamoDBAdapter,
    DynamoDBAdapterProtocol,
)
from imagetransform.core.models.errors import RepositoryFailureError
from imagetransform.core.models.image import Image, TransformedImage
from imagetransform.core.repositories.metadata_repository import ArtifactRepository
from imagetransform.core.utils.constants import (
    ENV_IMAGE_METADATA_TABLE_NAME,
    ENV_TRANSFORMED_IMAGE_TABLE_NAME,
    ERROR_CODE_METADATA_CONFLICT,
    ERROR_CODE_METADATA_CREATE_FAILED,
    ERROR_CODE_METADATA_DELETE_FAILED,
    ERROR_CODE_METADATA_FETCH_FAILED,
    ERROR_CODE_METADATA_INVALID_FORMAT,
    ERROR_CODE_METADATA_LIST_FAILED,
    OWNER_CREATED_INDEX,
    PARENT_CREATED_INDEX,
)

RecordT = TypeVar("RecordT", bound=BaseModel)

logger = Logger(utc=True)


def _from_item(model: type[RecordT], item: dict[str, Any]) -> RecordT:
    """Build a record from a DynamoDB item (numbers come back as Decimal)."""
    cleaned = {
        name: int(value) if isinstance(value, Decimal) else value
        for name, value in item.items()
    }

    try:
        return model.model_validate(cleaned)
    except PydanticValidationError as exc:
        raise RepositoryFailureError(
            message="Invalid image metadata format",
            error_code=ERROR_CODE_METADATA_INVALID_FORMAT,
            details={"record": model.__name__},
        ) from exc


class DynamoDBArtifactRepository(ArtifactRepository):
    """DynamoDB-backed metadata storage with error handling.

    All boto3 errors are caught and translated into
    RepositoryFailureError with stable error codes.
    """

    def __init__(
        self,
        images_adapter: DynamoDBAdapterProtocol | None = None,
        transformed_adapter: DynamoDBAdapterProtocol | None = None,
    ) -> None:
        """Initialize with one DynamoDB adapter per table."""
        self._images: DynamoDBAdapterProtocol = images_adapter or DynamoDBAdapter(
            ENV_IMAGE_METADATA_TABLE_NAME
        )
        self._transformed: DynamoDBAdapterProtocol = transformed_adapter or DynamoDBAdapter(
            ENV_TRANSFORMED_IMAGE_TABLE_NAME
        )

    # ------------------------------------------------------------------
    # Original images
    # ------------------------------------------------------------------

    def get_image(self, image_id: str) -> Image | None:
        item = self._get(self._images, {"image_id": image_id})
        return _from_item(Image, item) if item is not None else None

    def save_image(self, image: Image) -> None:
        self._put(self._images, image.model_dump(), "image_id", image.image_id)

    def delete_image(self, image_id: str) -> None:
        self._delete(self._images, {"image_id": image_id})

    def find_images_by_owner(self, owner_id: str) -> list[Image]:
        items = self._query_all(
            self._images,
            index_name=OWNER_CREATED_INDEX,
            key_condition=Key("owner_id").eq(owner_id),
            context={"owner_id": owner_id},
        )
        return [_from_item(Image, item) for item in items]

    # ------------------------------------------------------------------
    # Transformed images
    # ------------------------------------------------------------------

    def get_transformed_image(self, transformed_image_id: str) -> TransformedImage | None:
        item = self._get(self._transformed, {"transformed_image_id": transformed_image_id})
        return _from_item(TransformedImage, item) if item is not None else None

    def save_transformed_image(self, transformed_image: TransformedImage) -> None:
        self._put(
            self._transformed,
            transformed_image.model_dump(),
            "transformed_image_id",
            transformed_image.transformed_image_id,
        )

    def delete_transformed_image(self, transformed_image_id: str) -> None:
        self._delete(self._transformed, {"transformed_image_id": transformed_image_id})

    def find_transformed_by_owner(self, owner_id: str) -> list[TransformedImage]:
        items = self._query_all(
            self._transformed,
            index_name=OWNER_CREATED_INDEX,
            key_condition=Key("owner_id").eq(owner_id),
            context={"owner_id": owner_id},
        )
        return [_from_item(TransformedImage, item) for item in items]

    def find_transformed_by_parent(self, parent_image_id: str) -> list[TransformedImage]:
        items = self._query_all(
            self._transformed,
            index_name=PARENT_CREATED_INDEX,
            key_condition=Key("parent_image_id").eq(parent_image_id),
            context={"parent_image_id": parent_image_id},
        )
        return [_from_item(TransformedImage, item) for item in items]

    # ------------------------------------------------------------------
    # Table operations
    # ------------------------------------------------------------------

    @staticmethod
    def _put(
        adapter: DynamoDBAdapterProtocol,
        item: dict[str, Any],
        key_name: str,
        key_value: str,
    ) -> None:
        logger.debug("Creating metadata", extra={key_name: key_value})

        try:
            adapter.put_item(
                item=item,
                condition_expression=f"attribute_not_exists({key_name})",
            )
        except ClientError as exc:
            logger.error("DynamoDB put_item failed", extra={key_name: key_value})

            if exc.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                raise RepositoryFailureError(
                    message="This record already exists",
                    error_code=ERROR_CODE_METADATA_CONFLICT,
                    details={key_name: key_value},
                ) from exc

            raise RepositoryFailureError(
                message="Unable to save image metadata at this time",
                error_code=ERROR_CODE_METADATA_CREATE_FAILED,
                details={key_name: key_value},
            ) from exc
        except BotoCoreError as exc:
            logger.exception("Unexpected error creating metadata")
            raise RepositoryFailureError(
                message="Unable to save image metadata at this time",
                error_code=ERROR_CODE_METADATA_CREATE_FAILED,
                details={key_name: key_value},
            ) from exc

        logger.info("Metadata created", extra={key_name: key_value})

    @staticmethod
    def _get(adapter: DynamoDBAdapterProtocol, key: dict[str, str]) -> dict[str, Any] | None:
        logger.debug("Fetching metadata", extra=key)

        try:
            response = adapter.get_item(key=key)
        except (ClientError, BotoCoreError) as exc:
            logger.exception("DynamoDB get_item failed", extra=key)
            raise RepositoryFailureError(
                message="Unable to retrieve image metadata",
                error_code=ERROR_CODE_METADATA_FETCH_FAILED,
                details=key,
            ) from exc

        item = response.get("Item")
        if item is not None and not isinstance(item, dict):
            raise RepositoryFailureError(
                message="Invalid image metadata format",
                error_code=ERROR_CODE_METADATA_INVALID_FORMAT,
                details=key,
            )

        return item

    @staticmethod
    def _delete(adapter: DynamoDBAdapterProtocol, key: dict[str, str]) -> None:
        logger.debug("Removing metadata", extra=key)

        try:
            adapter.delete_item(key=key)
        except (ClientError, BotoCoreError) as exc:
            logger.exception("DynamoDB delete_item failed", extra=key)
            raise RepositoryFailureError(
                message="Unable to delete image metadata",
                error_code=ERROR_CODE_METADATA_DELETE_FAILED,
                details=key,
            ) from exc

        logger.info("Metadata removed", extra=key)

    @staticmethod
    def _query_all(
        adapter: DynamoDBAdapterProtocol,
        *,
        index_name: str,
        key_condition: Any,
        context: dict[str, str],
    ) -> list[dict[str, Any]]:
        """Query an index newest first, following pagination to the end."""
        query_kwargs: dict[str, Any] = {
            "IndexName": index_name,
            "KeyConditionExpression": key_condition,
            "ScanIndexForward": False,
        }

        items: list[dict[str, Any]] = []

        try:
            while True:
                response = adapter.query(**query_kwargs)
                page_items = response.get("Items", [])

                if not isinstance(page_items, list):
                    raise RepositoryFailureError(
                        message="Invalid query response from DynamoDB",
                        error_code=ERROR_CODE_METADATA_LIST_FAILED,
                        details=context,
                    )

                items.extend(page_items)

                last_evaluated_key = response.get("LastEvaluatedKey")
                if not last_evaluated_key:
                    break
                query_kwargs["ExclusiveStartKey"] = last_evaluated_key

        except (ClientError, BotoCoreError) as exc:
            logger.exception("DynamoDB query failed", extra={"index": index_name, **context})
            raise RepositoryFailureError(
                message="Unable to list image metadata",
                error_code=ERROR_CODE_METADATA_LIST_FAILED,
                details=context,
            ) from exc

        logger.debug("Metadata listed", extra={"index": index_name, "count": len(items), **context})
        return items
