from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, List, Mapping

from social_authorize.exceptions import PaginationLimitExceeded
from social_authorize.models import FeedPage


logger = logging.getLogger(__name__)

DEFAULT_MAX_PAGES = 1000

FetchPage = Callable[[str], Awaitable[Dict[str, Any]]]


async def collect_entries(
    fetch_page: FetchPage,
    first_page_url: str,
    *,
    max_pages: int = DEFAULT_MAX_PAGES,
) -> List[Mapping[str, Any]]:
    """Follow ``rel="next"`` links from ``first_page_url`` until none remain.

    Entries are returned in page order, then in provider order within each
    page, without deduplication. Raises ``PaginationLimitExceeded`` when a
    next link is still present after ``max_pages`` fetches.
    """
    results: List[Mapping[str, Any]] = []
    url: str | None = first_page_url
    pages = 0
    while url is not None:
        if pages >= max_pages:
            raise PaginationLimitExceeded(max_pages, url)
        page = FeedPage.from_json(await fetch_page(url))
        pages += 1
        results.extend(page.entries)
        logger.debug("feed page %d: %d entries", pages, len(page.entries))
        url = page.next_page_url
    return results
