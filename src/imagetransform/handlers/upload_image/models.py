"""Pydantic models for image upload request/response."""

import base64
import binascii
from pathlib import Path

from aws_lambda_powertools import Logger
from pydantic import Field, field_validator

from imagetransform.core.models.responses import ApiModel, ImageResponse
from imagetransform.core.utils.constants import MAX_FILE_SIZE, MIME_TYPE_EXTENSION_MAP

logger = Logger(utc=True)

ALLOWED_EXTENSIONS = frozenset(ext for exts in MIME_TYPE_EXTENSION_MAP.values() for ext in exts)


class ImageUploadRequest(ApiModel):
    """Validation model for image upload request."""

    file: str = Field(..., description="Base64 encoded image file")
    image_name: str = Field(..., min_length=1, max_length=255, description="Image filename")

    @field_validator("image_name")
    @classmethod
    def validate_image_name(cls, value: str) -> str:
        suffix = Path(value).suffix.lower().lstrip(".")

        if not suffix:
            raise ValueError("Image name must have an extension")

        if suffix not in ALLOWED_EXTENSIONS:
            raise ValueError(
                f"Invalid image extension '{suffix}'. "
                f"Allowed extensions: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
            )

        return value

    @field_validator("file")
    @classmethod
    def validate_file(cls, value: str) -> str:
        """
        Validate base64 file:
        - must decode correctly
        - must have non-zero size
        - must not exceed MAX_FILE_SIZE
        """
        if not value:
            raise ValueError("file must not be empty")

        try:
            file_data = base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as e:
            logger.error(f"File validation error: Invalid base64 - {e}")
            raise ValueError("Invalid base64 encoded file") from e

        if not file_data:
            raise ValueError("Decoded file is empty")

        if len(file_data) > MAX_FILE_SIZE:
            logger.error("File size validation error: File size exceeds limit")
            raise ValueError(f"File size exceeds {MAX_FILE_SIZE // (1024 * 1024)}MB limit")

        return value

    @property
    def file_data(self) -> bytes:
        return base64.b64decode(self.file)


class ImageUploadResponse(ImageResponse):
    """Response model for successful image upload."""

    message: str = Field(..., description="Success message")
