"""
Page-based pagination utilities.
"""

from collections.abc import Sequence
from typing import TypeVar

from imagetransform.core.models.pagination import PaginationInfo
from imagetransform.core.utils.constants import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT

T = TypeVar("T")


class PagePagination:
    """
    Page-based pagination helper.

    Pages are numbered from 0. A limit of 0 disables pagination and the
    whole list is returned as a single page.
    """

    @staticmethod
    def paginate(
        items: Sequence[T],
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_PAGE_LIMIT,
    ) -> tuple[list[T], int, bool]:
        """
        Slice one page out of a list of items.

        Args:
            items: Full, already ordered list of items
            page: Zero-based page number
            limit: Page size, or 0 for everything

        Returns:
            A tuple containing:
            - page_items: Items on the requested page
            - total_count: Number of items before pagination
            - has_more: True if items exist after this page

        Example:
            paginate([1, 2, 3, 4, 5], page=1, limit=2)

            → ([3, 4], 5, True)
        """
        total_count = len(items)
        if limit <= 0:
            return list(items), total_count, False

        offset = page * limit
        return list(items[offset : offset + limit]), total_count, offset + limit < total_count

    @staticmethod
    def get_page_info(page: int, limit: int, total_count: int) -> PaginationInfo:
        """
        Build pagination metadata for a list response.

        Notes:
            - total_pages is rounded up
            - with limit 0 every item is on page 0
        """
        if limit > 0:
            total_pages = (total_count + limit - 1) // limit
            has_more = (page + 1) * limit < total_count
        else:
            total_pages = 1 if total_count else 0
            has_more = False

        return PaginationInfo(
            page=page,
            limit=limit,
            total_pages=total_pages,
            has_more=has_more,
            next_page=page + 1 if has_more else None,
        )
