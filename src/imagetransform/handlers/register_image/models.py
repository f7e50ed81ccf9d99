"""Pydantic models for registering a directly uploaded image."""

from pydantic import Field, StrictInt

from imagetransform.core.models.responses import ApiModel
from imagetransform.core.utils.constants import MAX_FILE_SIZE


class RegisterImageRequest(ApiModel):
    """Validation model for the save-metadata request."""

    storage_key: str = Field(..., min_length=1, description="Key returned with the upload URL")
    original_name: str = Field(..., min_length=1, max_length=255, description="Original file name")
    content_type: str = Field(..., min_length=1, description="MIME type of the uploaded file")
    file_size: StrictInt = Field(..., gt=0, le=MAX_FILE_SIZE, description="Uploaded size in bytes")
