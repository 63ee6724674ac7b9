"""Page-until-exhausted traversal for Drive list endpoints."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Iterator, Optional, Sequence, TypeVar

from gdriveapi.errors import InvalidArgumentError, OperationCancelledError

T = TypeVar("T")

FetchPage = Callable[[str, int, Optional[str]], tuple[Sequence[T], Optional[str]]]

logger = logging.getLogger(__name__)


def iter_items(
    fetch_page: FetchPage[T],
    query: str,
    page_size: int,
    *,
    cancel: Optional[threading.Event] = None,
) -> Iterator[T]:
    """
    Lazily yield every item of a paged listing, in server order.

    `page_size` is validated eagerly: an invalid value raises before
    `fetch_page` is ever called. Each call starts a fresh traversal.

    Args:
        fetch_page: `(query, page_size, page_token) -> (items, next_page_token)`.
        query: Drive query string, passed through unchanged.
        page_size: Items per page (>= 1).
        cancel: Optional event checked before each page request.
    """
    if not isinstance(page_size, int) or isinstance(page_size, bool) or page_size < 1:
        raise InvalidArgumentError(
            "page_size cannot be smaller than 1",
            details={"page_size": page_size},
        )
    return _traverse(fetch_page, query, page_size, cancel)


def list_all(
    fetch_page: FetchPage[T],
    query: str,
    page_size: int,
    *,
    cancel: Optional[threading.Event] = None,
) -> list[T]:
    """Collect all pages into one list. Any fetch error discards partial results."""
    return list(iter_items(fetch_page, query, page_size, cancel=cancel))


def _traverse(
    fetch_page: FetchPage[T],
    query: str,
    page_size: int,
    cancel: Optional[threading.Event],
) -> Iterator[T]:
    page_token: Optional[str] = None
    pages = 0

    while True:
        if cancel is not None and cancel.is_set():
            raise OperationCancelledError("Listing was cancelled")

        items, page_token = fetch_page(query, page_size, page_token)
        pages += 1
        logger.debug("Fetched page %d (%d items) for q=%s", pages, len(items), query)
        yield from items

        if not page_token:
            break
