"""Cursor pagination shared by every paginated source"""

import asyncio
from typing import Any, Awaitable, Callable, List, NamedTuple, Optional
from loguru import logger


class Page(NamedTuple):
    """One page of results and the cursor for the next one"""
    items: List[Any]
    next_cursor: Optional[str] = None


PageFetcher = Callable[[Optional[str]], Awaitable[Page]]


async def walk_pages(
    fetch_page: PageFetcher,
    max_pages: int,
    delay: float = 0.0,
    label: str = "source",
) -> List[Any]:
    """
    Follow cursors until exhausted or ``max_pages`` pages have been fetched.

    A failing page ends the walk; items from earlier pages are returned.

    Args:
        fetch_page: coroutine taking the cursor (None for the first page)
        max_pages: hard cap on requests for this walk
        delay: pause between consecutive pages
        label: name used in log messages
    """
    items: List[Any] = []
    cursor: Optional[str] = None
    pages = 0
    max_pages = max(1, max_pages)

    while True:
        try:
            page = await fetch_page(cursor)
        except Exception as e:
            logger.error(f"Error fetching page {pages + 1} of {label}: {e}")
            break

        items.extend(page.items)
        pages += 1
        cursor = page.next_cursor

        if not cursor:
            break
        if pages >= max_pages:
            logger.warning(f"Stopped {label} at page cap ({max_pages}) with more pages available")
            break

        await asyncio.sleep(delay)

    logger.debug(f"Fetched {len(items)} items from {label} in {pages} page(s)")
    return items
