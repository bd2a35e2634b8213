"""Cursor pagination draining for provider search endpoints.

Upstream search endpoints return one page at a time as
``{"results": [...], "nextId": "..."}``. ``drain_pages`` walks the cursor
until the upstream runs out of pages or a result cap is reached.

A failing page ends the walk: the items gathered so far are returned and
the failure is logged at warning level. Callers that need all-or-nothing
semantics call the single-page operation themselves.

Usage:
    from src.infrastructure.providers.pagination import drain_pages

    payouts = await drain_pages(
        lambda limit, next_id: provider.search_payout_requests(
            filter, limit=limit, next_id=next_id
        ),
        max_items=500,
    )
"""

from collections.abc import Awaitable, Callable
from typing import Any

import structlog

from src.core.constants import PAGINATION_MAX_ITEMS_DEFAULT, PAGINATION_PAGE_SIZE_DEFAULT
from src.core.result import Failure, Result
from src.domain.errors import ProviderError

logger = structlog.get_logger(__name__)

type PageFetcher = Callable[[int, str | None], Awaitable[Result[Any, ProviderError]]]


async def drain_pages(
    fetch_page: PageFetcher,
    page_size: int = PAGINATION_PAGE_SIZE_DEFAULT,
    max_items: int = PAGINATION_MAX_ITEMS_DEFAULT,
) -> list[Any]:
    """Fetch pages until the cursor ends, the cap is hit, or a page fails.

    Args:
        fetch_page: Called as ``fetch_page(limit, next_id)``; the first call
            passes ``next_id=None``.
        page_size: Page size requested on every call.
        max_items: Upper bound on the returned list length.

    Returns:
        list: Concatenated page results, never longer than max_items.

    Raises:
        ValueError: If page_size or max_items is not positive.

    Note:
        Only a returned Failure ends the walk with partial results. Provider
        clients report upstream and transport errors that way, so an
        exception raised by fetch_page is a bug and propagates unchanged.
    """
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    if max_items <= 0:
        raise ValueError("max_items must be positive")

    items: list[Any] = []
    next_id: str | None = None
    pages = 0

    while True:
        result = await fetch_page(page_size, next_id)
        pages += 1

        if isinstance(result, Failure):
            logger.warning(
                "pagination_page_failed",
                page=pages,
                collected=len(items),
                error_code=result.error.code.value,
                error=result.error.message,
            )
            break

        page = result.value if isinstance(result.value, dict) else {}
        items.extend(page.get("results") or [])
        next_id = page.get("nextId") or None

        if next_id is None or len(items) >= max_items:
            break

    logger.debug("pagination_drained", pages=pages, collected=len(items))
    return items[:max_items]
