"""
Lazy container for limit/offset paginated collections.

A Paged instance fetches pages on demand through a caller-supplied
fetcher and accumulates the items. Page fetches on one instance are
serialized, so concurrent callers never request the same offset twice.
"""

import logging
import threading
from typing import Callable, Generic, Iterator, List, Optional, TypeVar

from .exceptions import SpotifyPaginationError
from .models import Page

logger = logging.getLogger(__name__)

T = TypeVar("T")

PageFetcher = Callable[[int, int], Page[T]]
"""Performs one remote call for ``(limit, offset)`` and returns the page."""


class Paged(Generic[T]):
    """
    Incrementally-growing view of a server-side collection.

    States:
        Unstarted: nothing fetched, total unknown.
        Partial: at least one page fetched, ``next_offset < total``.
        Exhausted: ``next_offset == total``; terminal.

    A failed fetch leaves the instance exactly as it was, so the same
    call can be repeated safely.

    Example:
        playlists = connection.fetch_user_playlists()
        first_page = playlists.fetch_next()
        everything = playlists.fetch_all()
    """

    def __init__(self, page_size: int, fetcher: PageFetcher):
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self._page_size = page_size
        self._fetcher = fetcher
        self._items: List[T] = []
        self._total: Optional[int] = None
        self._next_offset = 0
        # Reentrant so fetch_all can hold it across fetch_next calls.
        self._lock = threading.RLock()

    @classmethod
    def create(cls, page_size: int, fetcher: PageFetcher) -> "Paged[T]":
        """Create an unstarted container. No request is made."""
        return cls(page_size, fetcher)

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def total(self) -> Optional[int]:
        """Remote item count, or None before the first fetch."""
        with self._lock:
            return self._total

    @property
    def next_offset(self) -> int:
        with self._lock:
            return self._next_offset

    def is_exhausted(self) -> bool:
        with self._lock:
            return self._is_exhausted()

    def items(self) -> List[T]:
        """Snapshot of everything fetched so far."""
        with self._lock:
            return list(self._items)

    def fetch_next(self) -> List[T]:
        """
        Fetch the next page.

        Returns:
            Only the newly fetched items.

        Raises:
            SpotifyPaginationError: If the collection is already exhausted,
                or the remote returned an inconsistent page.
        """
        with self._lock:
            return self._fetch_page()

    def fetch_all(self) -> List[T]:
        """
        Fetch every remaining page.

        Returns:
            The full accumulated collection. On an exhausted instance this
            makes no request.
        """
        with self._lock:
            while not self._is_exhausted():
                self._fetch_page()
            return list(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items())

    def __repr__(self) -> str:
        return (
            f"Paged(page_size={self._page_size}, fetched={self._next_offset}, "
            f"total={self._total})"
        )

    # =========================================================================
    # Internal
    # =========================================================================

    def _is_exhausted(self) -> bool:
        return self._total is not None and self._next_offset >= self._total

    def _fetch_page(self) -> List[T]:
        if self._is_exhausted():
            raise SpotifyPaginationError(
                f"Collection exhausted: all {self._total} items already fetched"
            )

        offset = self._next_offset
        page = self._fetcher(self._page_size, offset)
        items = list(page.items)
        total = page.total

        if len(items) > self._page_size:
            raise SpotifyPaginationError(
                f"Page at offset {offset} has {len(items)} items, "
                f"more than the limit {self._page_size}"
            )

        new_offset = offset + len(items)
        if new_offset > total:
            raise SpotifyPaginationError(
                f"Page at offset {offset} ends at {new_offset}, "
                f"past the reported total {total}"
            )

        if self._total is not None and total != self._total:
            logger.warning(
                f"Collection total changed from {self._total} to {total} while paging"
            )

        if not items and new_offset < total:
            # No progress is possible; stop at what the remote actually served.
            logger.warning(
                f"Empty page at offset {offset} before reported total {total}, "
                "treating collection as exhausted"
            )
            total = new_offset

        self._items.extend(items)
        self._next_offset = new_offset
        self._total = total

        logger.debug(
            f"Fetched {len(items)} items at offset {offset} ({new_offset}/{total})"
        )
        return items
