"""Port: repository gateway — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from github_tree_fs.domain.entities import CommitHistory, ShowPathResult, TreeListing


class RepositoryGateway(Protocol):
    """Abstract contract for reading one repository snapshot.

    All paths are already normalized (no surrounding slashes).
    """

    async def exists(self, path: str) -> bool:
        ...

    async def download(self, path: str) -> bytes:
        """Return the raw file bytes; raises ``PathNotFoundError`` when absent."""
        ...

    async def show_path(self, path: str) -> ShowPathResult:
        """Describe a single path as ``ShownFile`` or ``DirectoryHint``.

        Raises ``PathNotFoundError`` when the path does not exist.
        """
        ...

    async def list_tree_recursive(self) -> TreeListing:
        """Return the full flat tree at the configured reference."""
        ...

    async def commits_for_path(self, path: str) -> CommitHistory:
        """Return the commits touching *path*, newest first."""
        ...
