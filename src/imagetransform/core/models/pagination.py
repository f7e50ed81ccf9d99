"""Pagination model."""

from pydantic import Field, StrictBool, StrictInt

from imagetransform.core.models.responses import ApiModel


class PaginationInfo(ApiModel):
    """Pagination metadata for list responses."""

    page: StrictInt = Field(..., description="Zero-based page number")
    limit: StrictInt = Field(..., description="Page size, 0 when unpaginated")
    total_pages: StrictInt = Field(..., description="Number of pages for this page size")
    has_more: StrictBool = Field(..., description="Whether more items are available after this page")
    next_page: StrictInt | None = Field(
        None,
        description="Page to request next, if available",
    )
