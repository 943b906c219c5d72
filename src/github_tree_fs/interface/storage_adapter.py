"""Storage adapter — a read-only filesystem-adapter shim over the facade.

Results use the usual adapter shapes (``{"contents": ...}``,
``{"mimetype": ...}``, metadata dicts); a missing path yields ``False``.
Mutating operations raise :class:`UnsupportedOperationError`.
"""

from __future__ import annotations

from typing import Any, Literal, NoReturn

from github_tree_fs.domain.entities import DirectoryMetadata, TreeEntry
from github_tree_fs.domain.exceptions import PathNotFoundError, UnsupportedOperationError
from github_tree_fs.interface.schemas import EntryResponse
from github_tree_fs.services.repo_tree import RepoTreeFacade

Metadata = dict[str, Any]


def _as_dict(entry: TreeEntry | DirectoryMetadata) -> Metadata:
    return EntryResponse.from_entity(entry).model_dump(by_alias=True, exclude_none=True)


class GithubStorageAdapter:
    def __init__(self, facade: RepoTreeFacade) -> None:
        self._facade = facade

    # ── Reads ───────────────────────────────────────────────────────────

    async def has(self, path: str) -> bool:
        return await self._facade.exists(path)

    async def read(self, path: str) -> dict[str, bytes] | Literal[False]:
        try:
            return {"contents": await self._facade.get_file_contents(path)}
        except PathNotFoundError:
            return False

    async def list_contents(self, path: str = "", recursive: bool = False) -> list[Metadata]:
        entries = await self._facade.get_directory_contents(path, recursive)
        return [_as_dict(entry) for entry in entries]

    async def get_metadata(self, path: str) -> Metadata | Literal[False]:
        metadata = await self._facade.get_metadata(path)
        if metadata is False:
            return False
        return _as_dict(metadata)

    async def get_size(self, path: str) -> Metadata | Literal[False]:
        return await self.get_metadata(path)

    async def get_mimetype(self, path: str) -> dict[str, str] | Literal[False]:
        try:
            return {"mimetype": await self._facade.guess_mime_type(path)}
        except PathNotFoundError:
            return False

    async def get_timestamp(self, path: str) -> dict[str, int]:
        return await self._facade.get_last_updated_timestamp(path)

    async def get_visibility(self, path: str) -> dict[str, str] | Literal[False]:
        metadata = await self._facade.get_metadata(path)
        if metadata is False:
            return False
        return {"path": metadata.path, "visibility": metadata.visibility.value}

    # ── Writes (not supported) ──────────────────────────────────────────

    def _unsupported(self, operation: str) -> NoReturn:
        raise UnsupportedOperationError(
            f"'{operation}' is not supported: {self._facade.repository.full_name} is read-only."
        )

    async def write(self, path: str, contents: bytes, config: Any = None) -> NoReturn:
        self._unsupported("write")

    async def write_stream(self, path: str, resource: Any, config: Any = None) -> NoReturn:
        self._unsupported("write_stream")

    async def update(self, path: str, contents: bytes, config: Any = None) -> NoReturn:
        self._unsupported("update")

    async def update_stream(self, path: str, resource: Any, config: Any = None) -> NoReturn:
        self._unsupported("update_stream")

    async def rename(self, path: str, new_path: str) -> NoReturn:
        self._unsupported("rename")

    async def copy(self, path: str, new_path: str) -> NoReturn:
        self._unsupported("copy")

    async def delete(self, path: str) -> NoReturn:
        self._unsupported("delete")

    async def delete_dir(self, dirname: str) -> NoReturn:
        self._unsupported("delete_dir")

    async def create_dir(self, dirname: str, config: Any = None) -> NoReturn:
        self._unsupported("create_dir")

    async def set_visibility(self, path: str, visibility: str) -> NoReturn:
        self._unsupported("set_visibility")
