"""Repository tree facade — the read-only filesystem view of one snapshot.

This is the single entry point for the business logic. It depends only on
the two ports (:class:`RepositoryGateway` and :class:`MimeTypeDetector`) and
the pure service modules. The interface layer injects concrete adapters at
runtime.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import replace

from github_tree_fs.domain.entities import (
    CommitHistory,
    DirectoryHint,
    DirectoryMetadata,
    EntryType,
    Links,
    MetadataResult,
    RawTreeEntry,
    TreeEntry,
    TreeListing,
)
from github_tree_fs.domain.exceptions import PathNotFoundError
from github_tree_fs.domain.ports.mime_detector import MimeTypeDetector
from github_tree_fs.domain.ports.repository_gateway import RepositoryGateway
from github_tree_fs.domain.value_objects import RepositoryRef, normalize_path
from github_tree_fs.services.directory_timestamp import DirectoryTimestampAggregator
from github_tree_fs.services.metadata_normalizer import normalize_entries, normalize_entry
from github_tree_fs.services.path_cache import PathCache
from github_tree_fs.services.tree_filter import filter_tree

logger = logging.getLogger(__name__)

MIME_TYPE_DIRECTORY = "directory"


class RepoTreeFacade:
    """Filesystem-like, read-only access to a repository at a fixed reference.

    Parameters
    ----------
    gateway:
        Adapter that talks to the hosting API.
    repository:
        The snapshot being read; used to build canonical links.
    mime_detector:
        Adapter that guesses MIME types from extensions and file bytes.
    max_concurrency:
        Maximum simultaneous commit-history lookups while aggregating
        timestamps.

    Metadata and commit histories are cached per normalized path for the
    lifetime of the instance.
    """

    def __init__(
        self,
        gateway: RepositoryGateway,
        repository: RepositoryRef,
        mime_detector: MimeTypeDetector,
        max_concurrency: int = 10,
    ) -> None:
        self._gateway = gateway
        self._repository = repository
        self._mime = mime_detector
        self._metadata: PathCache[MetadataResult] = PathCache("metadata")
        self._commits: PathCache[CommitHistory] = PathCache("commits")
        self._aggregator = DirectoryTimestampAggregator(
            self._created_epoch, max_concurrency=max_concurrency
        )

    @property
    def repository(self) -> RepositoryRef:
        return self._repository

    # ── Plain delegation ────────────────────────────────────────────────

    async def exists(self, path: str) -> bool:
        return await self._gateway.exists(normalize_path(path))

    async def get_file_contents(self, path: str) -> bytes:
        return await self._gateway.download(normalize_path(path))

    # ── Timestamps ──────────────────────────────────────────────────────

    async def get_commits(self, path: str) -> CommitHistory:
        return await self._commits.get_or_fetch(path, self._gateway.commits_for_path)

    async def get_created_timestamp(self, path: str) -> dict[str, int]:
        """Timestamp of the oldest commit touching *path*."""
        return {"timestamp": await self._created_epoch(path)}

    async def get_last_updated_timestamp(self, path: str) -> dict[str, int]:
        """Timestamp of the newest commit touching *path*."""
        history = await self.get_commits(path)
        return {"timestamp": int(history.last_updated.committer_date.timestamp())}

    async def _created_epoch(self, path: str) -> int:
        history = await self.get_commits(path)
        return int(history.created.committer_date.timestamp())

    # ── Metadata ────────────────────────────────────────────────────────

    async def get_metadata(self, path: str) -> MetadataResult:
        """Describe one path, or return ``False`` when it does not exist."""
        return await self._metadata.get_or_fetch(path, self._fetch_metadata)

    async def _fetch_metadata(self, path: str) -> MetadataResult:
        try:
            shown = await self._gateway.show_path(path)
        except PathNotFoundError:
            logger.debug("No such path '%s' in %s", path, self._repository.full_name)
            return False

        if isinstance(shown, DirectoryHint):
            return await self._directory_metadata(path)

        # File metadata carries no timestamp; history is only read for listings.
        return normalize_entry(shown.entry)

    async def _directory_metadata(self, path: str) -> DirectoryMetadata:
        listing = await self._list_tree()

        own = next(
            (entry for entry in listing.entries if normalize_path(entry.path) == path),
            None,
        )
        normalized = normalize_entry(own) if own else normalize_entry(RawTreeEntry(path=path, type="tree"))

        url = self._repository.contents_url(path)
        html_url = self._repository.html_url(path)

        return DirectoryMetadata(
            path=path,
            url=url,
            html_url=html_url,
            links=Links(api=url, html=html_url),
            name=normalized.name,
            visibility=normalized.visibility,
            mode=normalized.mode,
            sha=normalized.sha,
            timestamp=await self._aggregator.aggregate(listing.entries, path),
        )

    # ── Listings ────────────────────────────────────────────────────────

    async def get_directory_contents(self, path: str, recursive: bool) -> list[TreeEntry]:
        """List the entries under *path* with their timestamps filled in.

        The tree is always fetched recursively; depth is applied client-side.
        """
        path = normalize_path(path)
        listing = await self._list_tree()

        entries = normalize_entries(filter_tree(listing.entries, path, recursive))
        logger.info("Listing '%s' (recursive=%s): %d entries", path, recursive, len(entries))

        return list(
            await asyncio.gather(
                *(self._with_timestamp(entry, listing.entries) for entry in entries)
            )
        )

    async def _with_timestamp(
        self, entry: TreeEntry, tree: Sequence[RawTreeEntry]
    ) -> TreeEntry:
        if entry.type is EntryType.FILE:
            return replace(entry, timestamp=await self._aggregator.file_timestamp(entry.path))
        if entry.type is EntryType.DIRECTORY:
            return replace(entry, timestamp=await self._aggregator.aggregate(tree, entry.path))
        logger.warning("Entry '%s' has an unrecognized type; timestamp left unset", entry.path)
        return entry

    async def _list_tree(self) -> TreeListing:
        listing = await self._gateway.list_tree_recursive()
        if listing.truncated:
            logger.warning(
                "Tree listing for %s@%s was truncated by GitHub (%d entries); "
                "results are incomplete",
                self._repository.full_name,
                self._repository.reference,
                len(listing.entries),
            )
        return listing

    # ── MIME types ──────────────────────────────────────────────────────

    async def guess_mime_type(self, path: str) -> str:
        """GitHub does not report MIME types, so they are guessed."""
        path = normalize_path(path)

        metadata = await self.get_metadata(path)
        if metadata is False:
            raise PathNotFoundError(f"Not Found: {path}")
        if metadata.type is EntryType.DIRECTORY:
            return MIME_TYPE_DIRECTORY

        by_extension = self._mime.detect_by_extension(path)
        if by_extension:
            return by_extension

        return self._mime.detect_by_content(await self.get_file_contents(path))
