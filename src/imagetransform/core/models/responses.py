"""Response bodies shared by the HTTP handlers.

Field names are serialized in camelCase (`model_dump(by_alias=True)`).
"""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from imagetransform.core.models.image import Image, TransformedImage


class ApiModel(BaseModel):
    """Base for request and response bodies; accepts both camelCase and snake_case input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class ImageResponse(ApiModel):
    """Public view of an original image."""

    image_id: str = Field(..., description="Unique image ID")
    original_name: str = Field(..., description="Original file name")
    storage_key: str = Field(..., description="Object key of the image")
    content_type: str = Field(..., description="MIME type")
    file_size: int = Field(..., description="Size in bytes")
    created_at: str = Field(..., description="Creation timestamp")

    @classmethod
    def from_record(cls, image: Image) -> "ImageResponse":
        return cls(
            image_id=image.image_id,
            original_name=image.original_name,
            storage_key=image.storage_key,
            content_type=image.content_type,
            file_size=image.file_size,
            created_at=image.created_at,
        )


class TransformedImageResponse(ApiModel):
    """Public view of a derived image."""

    transformed_image_id: str = Field(..., description="Unique derived image ID")
    original_image_id: str = Field(..., description="ID of the source image")
    filename: str = Field(..., description="Generated file name")
    url: str = Field(..., description="Object URL of the derived image")
    content_type: str = Field(..., description="MIME type")
    file_size: int = Field(..., description="Size in bytes")
    transformations: dict[str, Any] = Field(..., description="Applied transformation request")
    created_at: str = Field(..., description="Creation timestamp")

    @classmethod
    def from_record(cls, record: TransformedImage) -> "TransformedImageResponse":
        return cls(
            transformed_image_id=record.transformed_image_id,
            original_image_id=record.parent_image_id,
            filename=record.filename,
            url=record.url,
            content_type=record.content_type,
            file_size=record.file_size,
            transformations=json.loads(record.applied_options),
            created_at=record.created_at,
        )


class AccessUrlResponse(ApiModel):
    """A presigned download URL."""

    download_url: str = Field(..., description="Presigned GET URL")
    expires_in: int = Field(..., description="Lifetime of the URL in seconds")
