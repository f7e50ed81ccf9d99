"""Pydantic models for derived image download URL request."""

from pydantic import BaseModel, ConfigDict, Field


class TransformedDownloadUrlRequest(BaseModel):
    """Validation model for transformed image download URL request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    transformed_image_id: str = Field(..., min_length=1, description="Derived image ID to download")
