"""Pydantic models for presigned upload URL request/response."""

from pydantic import Field, field_validator

from imagetransform.core.models.responses import ApiModel
from imagetransform.core.utils.constants import ALLOWED_MIME_TYPES


class UploadUrlRequest(ApiModel):
    """Validation model for an upload URL request."""

    filename: str = Field(..., min_length=1, max_length=255, description="Name of the file to upload")
    content_type: str = Field(..., description="MIME type the client will upload")

    @field_validator("content_type")
    @classmethod
    def validate_content_type(cls, value: str) -> str:
        content_type = value.lower()
        if content_type not in ALLOWED_MIME_TYPES:
            raise ValueError(
                f"Unsupported content type '{value}'. "
                f"Allowed types: {', '.join(sorted(ALLOWED_MIME_TYPES))}"
            )
        return content_type


class UploadUrlResponse(ApiModel):
    """Response model for an issued upload URL."""

    upload_url: str = Field(..., description="Presigned PUT URL")
    storage_key: str = Field(..., description="Key to register once the upload completes")
    expires_in: int = Field(..., description="Lifetime of the URL in seconds")
