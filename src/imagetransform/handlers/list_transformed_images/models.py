"""Pydantic models for listing every derived image of the requester."""

from pydantic import Field

from imagetransform.core.models.responses import ApiModel, TransformedImageResponse


class ListTransformedImagesResponse(ApiModel):
    """Response model for listing the requester's derived images."""

    transformations: list[TransformedImageResponse] = Field(..., description="Derived images, newest first")
    total_count: int = Field(..., description="Number of derived images returned")
