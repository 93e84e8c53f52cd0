"""Home-page pagination."""

import logging
from typing import NamedTuple, Optional

from blog.errors import PageOutOfRange

logger = logging.getLogger(__name__)


class PagePlan(NamedTuple):
    page: int
    max_page: int
    offset: int
    limit: int
    prev_url: Optional[str]
    next_url: Optional[str]


def page_url(page: int) -> str:
    return "/" if page == 1 else f"/page/{page}"


def max_page(count: int, per_page: int) -> int:
    """Number of pages needed for *count* entries, ``ceil(count / per_page)``."""
    if per_page < 1:
        raise ValueError("per_page must be at least 1")
    return (count + per_page - 1) // per_page


def plan_page(count: int, per_page: int, page: int, allow_empty: bool = False) -> PagePlan:
    """Plan page *page* of a listing of *count* entries.

    Raises:
        PageOutOfRange: *page* is outside ``[1, max_page]``.  With
            *allow_empty*, page 1 of an empty listing is still planned so the
            site root can render without redirecting to itself.
    """
    last = max_page(count, per_page)
    empty_root = allow_empty and page == 1 and last == 0
    if not empty_root and (page < 1 or page > last):
        logger.info("Page out of range", extra={"page": page, "max_page": last})
        raise PageOutOfRange(page, last)

    return PagePlan(
        page=page,
        max_page=max(last, 1),
        offset=(page - 1) * per_page,
        limit=per_page,
        prev_url=page_url(page - 1) if page > 1 else None,
        next_url=page_url(page + 1) if page < last else None,
    )
