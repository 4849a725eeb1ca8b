"""
Bulk request batching.

Splits an oversized ID list into near-equal chunks no larger than the
remote per-request cap, and runs one request per chunk concurrently.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def partition_sizes(n: int, cap: int) -> List[int]:
    """
    Compute chunk sizes for ``n`` items with at most ``cap`` per chunk.

    Uses the fewest chunks possible, ``ceil(n / cap)``, and spreads the
    items evenly over them: every size is ``floor(n / k)`` or
    ``ceil(n / k)``, larger chunks first. 250 items at cap 100 gives
    ``[84, 83, 83]`` rather than ``[100, 100, 50]``.

    Raises:
        ValueError: If ``n`` is negative or ``cap`` is not positive.
    """
    if cap <= 0:
        raise ValueError("cap must be positive")
    if n < 0:
        raise ValueError("n cannot be negative")
    if n == 0:
        return []

    chunk_count = -(-n // cap)
    base, extra = divmod(n, chunk_count)
    return [base + 1 if i < extra else base for i in range(chunk_count)]


def chunked(items: Sequence[T], cap: int) -> List[List[T]]:
    """Split ``items`` into contiguous chunks sized by ``partition_sizes``."""
    chunks = []
    start = 0
    for size in partition_sizes(len(items), cap):
        chunks.append(list(items[start:start + size]))
        start += size
    return chunks


def run_concurrently(
    chunks: Sequence[T],
    fetch_chunk: Callable[[T], R],
) -> List[R]:
    """
    Run ``fetch_chunk`` on every chunk concurrently.

    Every chunk gets its own thread, so all requests are in flight at
    once. Results come back in chunk order, not completion order. The
    first failure (in chunk order) is raised and nothing is returned.
    """
    if not chunks:
        return []
    if len(chunks) == 1:
        return [fetch_chunk(chunks[0])]

    with ThreadPoolExecutor(max_workers=len(chunks)) as executor:
        futures = [executor.submit(fetch_chunk, chunk) for chunk in chunks]
        return [future.result() for future in futures]
