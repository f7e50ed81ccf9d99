"""Pydantic models for list images request and response."""

from pydantic import BaseModel, Field

from imagetransform.core.models.pagination import PaginationInfo
from imagetransform.core.models.responses import ApiModel, ImageResponse
from imagetransform.core.utils.constants import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT


class ListImagesRequest(BaseModel):
    """Validation model for list images query parameters."""

    page: int = Field(DEFAULT_PAGE, ge=0, description="Zero-based page number")
    limit: int = Field(
        DEFAULT_PAGE_LIMIT,
        ge=0,
        le=MAX_PAGE_LIMIT,
        description="Page size; 0 returns every image",
    )


class ListImagesResponse(ApiModel):
    """Response model for listing images."""

    images: list[ImageResponse] = Field(..., description="Images on this page, newest first")
    total_count: int = Field(..., description="Number of images owned by the requester")
    returned_count: int = Field(..., description="Number of images on this page")
    pagination: PaginationInfo = Field(..., description="Pagination metadata")
