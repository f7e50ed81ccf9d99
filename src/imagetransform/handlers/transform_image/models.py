"""Pydantic models for the transform request path and response."""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from imagetransform.core.models.image import TransformedImage
from imagetransform.core.models.responses import ApiModel


class TransformImageRequest(BaseModel):
    """Validation model for the transform path parameters.

    The body is validated separately by TransformImageBody.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    image_id: str = Field(..., min_length=1, description="Image ID to transform")


class TransformImageBody(BaseModel):
    """Envelope of the transform request body.

    The nested options are parsed into TransformationOptions by the orchestrator.
    """

    model_config = ConfigDict(extra="forbid")

    transformations: dict[str, Any] = Field(..., description="Requested operations")


class TransformImageResponse(ApiModel):
    """Response model for a created derived image."""

    original_image_id: str
    transformed_image_id: str
    transformed_url: str
    transformed_filename: str
    content_type: str
    file_size: int
    transformations: dict[str, Any]

    @classmethod
    def from_record(cls, record: TransformedImage) -> "TransformImageResponse":
        return cls(
            original_image_id=record.parent_image_id,
            transformed_image_id=record.transformed_image_id,
            transformed_url=record.url,
            transformed_filename=record.filename,
            content_type=record.content_type,
            file_size=record.file_size,
            transformations=json.loads(record.applied_options),
        )
