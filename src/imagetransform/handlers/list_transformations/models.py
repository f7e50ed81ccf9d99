"""Pydantic models for listing the derived images of an original."""

from pydantic import BaseModel, ConfigDict, Field

from imagetransform.core.models.responses import ApiModel, TransformedImageResponse


class ListTransformationsRequest(BaseModel):
    """Validation model for list transformations request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    image_id: str = Field(..., min_length=1, description="Original image ID")


class ListTransformationsResponse(ApiModel):
    """Response model for listing derived images."""

    image_id: str = Field(..., description="Original image ID")
    transformations: list[TransformedImageResponse] = Field(..., description="Derived images, newest first")
    total_count: int = Field(..., description="Number of derived images returned")
