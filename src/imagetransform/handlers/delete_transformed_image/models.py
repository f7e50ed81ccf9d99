"""Pydantic models for delete transformed image request/response."""

from pydantic import BaseModel, ConfigDict, Field

from imagetransform.core.models.responses import ApiModel


class DeleteTransformedImageRequest(BaseModel):
    """Validation model for delete transformed image request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    transformed_image_id: str = Field(..., min_length=1, description="Derived image ID to delete")


class DeleteTransformedImageResponse(ApiModel):
    """Response model for successful derived image deletion."""

    transformed_image_id: str = Field(..., description="Deleted derived image ID")
    original_image_id: str = Field(..., description="ID of the source image")
    message: str = Field(..., description="Success message")
    deleted_at: str = Field(..., description="Deletion timestamp")
