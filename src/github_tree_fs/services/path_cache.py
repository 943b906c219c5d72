"""Per-path memoization with single-flight population.

Both the metadata cache and the commit-history cache live for as long as the
facade that owns them: one facade is bound to one fixed repository snapshot,
so entries are written once and never invalidated.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Generic, TypeVar

from github_tree_fs.domain.value_objects import normalize_path

logger = logging.getLogger(__name__)

V = TypeVar("V")


class PathCache(Generic[V]):
    """Fill-once-per-key cache keyed by normalized path.

    Concurrent lookups for the same missing key share one in-flight fetch.
    A fetch that raises is not stored, so the next lookup retries it.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._values: dict[str, V] = {}
        self._pending: dict[str, asyncio.Task[V]] = {}

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and normalize_path(path) in self._values

    def __len__(self) -> int:
        return len(self._values)

    async def get_or_fetch(self, path: str, fetch: Callable[[str], Awaitable[V]]) -> V:
        """Return the cached value for *path*, calling ``fetch(path)`` on a miss."""
        key = normalize_path(path)

        if key in self._values:
            return self._values[key]

        task = self._pending.get(key)
        if task is None:
            task = asyncio.ensure_future(self._populate(key, fetch))
            self._pending[key] = task
        # A cancelled waiter must not cancel the fetch other waiters share.
        return await asyncio.shield(task)

    async def _populate(self, key: str, fetch: Callable[[str], Awaitable[V]]) -> V:
        try:
            value = await fetch(key)
        finally:
            self._pending.pop(key, None)
        self._values[key] = value
        logger.debug("%s cache filled for '%s' (%d entries)", self._name, key, len(self._values))
        return value
