from __future__ import annotations

import logging
from typing import Protocol

from atlassian_proxy.services.types import Record, ResultPage, SearchQuery, UpstreamError

logger = logging.getLogger(__name__)


class PageFetcher(Protocol):
    def __call__(self, query_text: str, page_size: int, offset: int) -> ResultPage: ...


def fetch_all_pages(query: SearchQuery, fetch_page: PageFetcher) -> list[Record]:
    """Collect up to ``query.max_pages`` pages; an empty or short page ends the run."""
    collected: list[Record] = []
    offset = 0
    pages_fetched = 0

    for _ in range(query.max_pages):
        try:
            page = fetch_page(query.query_text, query.page_size, offset)
        except UpstreamError:
            logger.warning(
                "Aborting search %r at offset %d after %d page(s)",
                query.query_text,
                offset,
                pages_fetched,
            )
            raise

        pages_fetched += 1
        logger.debug(
            "Fetched %d item(s) for %r at offset %d",
            len(page.items),
            query.query_text,
            offset,
        )
        if not page.items:
            break

        collected.extend(page.items)
        offset += query.page_size

        if len(page.items) < query.page_size:
            break

    logger.info(
        "Search %r returned %d item(s) over %d page(s)",
        query.query_text,
        len(collected),
        pages_fetched,
    )
    return collected
