"""Directory timestamp aggregation.

GitHub has no notion of a directory modification time. A directory's
timestamp is synthesized as the newest *creation* time (oldest commit) among
the files anywhere below it. Nested directories never contribute on their own.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Awaitable, Callable

from github_tree_fs.domain.entities import EntryType, RawTreeEntry, TreeEntry
from github_tree_fs.services.metadata_normalizer import entry_type
from github_tree_fs.services.tree_filter import filter_tree

logger = logging.getLogger(__name__)

EPOCH = 0


class DirectoryTimestampAggregator:
    """Compute directory timestamps from per-file creation times.

    Parameters
    ----------
    created_timestamp:
        Coroutine returning a file's creation time as epoch seconds. It is
        expected to be backed by the commit-history cache, so a file shared
        by several directories is fetched once.
    max_concurrency:
        Upper bound on simultaneous per-file lookups.
    """

    def __init__(
        self,
        created_timestamp: Callable[[str], Awaitable[int]],
        max_concurrency: int = 10,
    ) -> None:
        self._created_timestamp = created_timestamp
        self._sem = asyncio.Semaphore(max_concurrency)

    async def aggregate(
        self, entries: Sequence[RawTreeEntry | TreeEntry], path: str
    ) -> int:
        """Return the max creation timestamp of the files under *path*, or ``0``."""
        files = [entry.path for entry in filter_tree(entries, path, recursive=True) if entry_type(entry) is EntryType.FILE]
        if not files:
            logger.debug("No files under '%s' — using epoch", path)
            return EPOCH

        timestamps = await asyncio.gather(*(self.file_timestamp(file_path) for file_path in files))
        return max(timestamps, default=EPOCH)

    async def file_timestamp(self, path: str) -> int:
        """Creation time of a single file, bounded by the concurrency limit."""
        async with self._sem:
            return await self._created_timestamp(path)
