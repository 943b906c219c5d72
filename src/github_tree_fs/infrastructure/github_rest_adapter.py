"""GitHub REST API adapter — implements the RepositoryGateway port."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

import httpx

from github_tree_fs.domain.entities import (
    CommitHistory,
    CommitRecord,
    DirectoryHint,
    RawTreeEntry,
    ShownFile,
    ShowPathResult,
    TreeListing,
)
from github_tree_fs.domain.exceptions import (
    AuthenticationError,
    GitHubRateLimitError,
    NoCommitHistoryError,
    PathNotFoundError,
    RepositoryAccessDeniedError,
    UpstreamRequestError,
)
from github_tree_fs.domain.value_objects import RepositoryRef

logger = logging.getLogger(__name__)

_USER_AGENT = "github-tree-fs/1.0"
_JSON_MEDIA_TYPE = "application/vnd.github.v3+json"
_RAW_MEDIA_TYPE = "application/vnd.github.raw"
_COMMITS_PER_PAGE = 100

# contents API "type" → git tree "type"
_CONTENT_TYPES: dict[str, str] = {
    "file": "blob",
    "dir": "tree",
}


def parse_github_date(value: str) -> datetime:
    """Parse an ISO-8601 GitHub timestamp such as ``2015-12-16T07:59:30Z``."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class GitHubRestAdapter:
    """Concrete RepositoryGateway backed by the GitHub v3 REST API.

    The token, if any, is attached once here; every request made through this
    adapter is authenticated the same way.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        repository: RepositoryRef,
        token: str | None = None,
    ) -> None:
        self._client = client
        self._repository = repository
        self._api_headers: dict[str, str] = {
            "Accept": _JSON_MEDIA_TYPE,
            "User-Agent": _USER_AGENT,
        }
        if token:
            self._api_headers["Authorization"] = f"Bearer {token}"

    @property
    def _repo_endpoint(self) -> str:
        return f"/repos/{self._repository.vendor}/{self._repository.package}"

    def _contents_endpoint(self, path: str) -> str:
        return f"{self._repo_endpoint}/contents/{quote(path)}"

    async def exists(self, path: str) -> bool:
        """GET /repos/{owner}/{repo}/contents/{path} → bool."""
        try:
            await self._api_get(self._contents_endpoint(path), params={"ref": self._repository.reference})
        except PathNotFoundError:
            return False
        return True

    async def download(self, path: str) -> bytes:
        """GET /repos/{owner}/{repo}/contents/{path} as raw bytes."""
        resp = await self._api_get(
            self._contents_endpoint(path),
            params={"ref": self._repository.reference},
            accept=_RAW_MEDIA_TYPE,
        )
        return resp.content

    async def show_path(self, path: str) -> ShowPathResult:
        """GET /repos/{owner}/{repo}/contents/{path} → ShownFile | DirectoryHint.

        GitHub answers with a list for directories and an object for
        everything else; this is the only place that shape is inspected.
        """
        resp = await self._api_get(
            self._contents_endpoint(path), params={"ref": self._repository.reference}
        )
        data = resp.json()

        if isinstance(data, list):
            return DirectoryHint(path=path)

        if not isinstance(data, dict):
            raise UpstreamRequestError(f"Unexpected contents payload for '{path}'.")

        raw_type = data.get("type")
        return ShownFile(
            entry=RawTreeEntry(
                path=data.get("path", path),
                type=_CONTENT_TYPES.get(raw_type, raw_type),
                mode=data.get("mode"),
                size=data.get("size"),
                sha=data.get("sha"),
                url=data.get("url"),
                html_url=data.get("html_url"),
                name=data.get("name"),
            )
        )

    async def list_tree_recursive(self) -> TreeListing:
        """GET /repos/{owner}/{repo}/git/trees/{ref}?recursive=1 → TreeListing."""
        resp = await self._api_get(
            f"{self._repo_endpoint}/git/trees/{self._repository.reference}",
            params={"recursive": "1"},
        )
        data = resp.json()

        return TreeListing(
            entries=[_tree_item(item) for item in data.get("tree", [])],
            truncated=bool(data.get("truncated", False)),
        )

    async def commits_for_path(self, path: str) -> CommitHistory:
        """GET /repos/{owner}/{repo}/commits?sha={branch}&path={path} → CommitHistory.

        Every page is followed so the last record really is the oldest commit.
        """
        records: list[CommitRecord] = []
        endpoint: str | None = f"{self._repo_endpoint}/commits"
        params: dict[str, str] | None = {
            "sha": self._repository.branch,
            "path": path,
            "per_page": str(_COMMITS_PER_PAGE),
        }

        while endpoint is not None:
            resp = await self._api_get(endpoint, params=params)
            records.extend(_commit_record(item) for item in resp.json())

            next_link = resp.links.get("next", {}).get("url")
            # the "next" link already carries every query parameter
            endpoint, params = next_link, None

        if not records:
            raise NoCommitHistoryError(f"No commits found for '{path}'.")

        logger.debug("Fetched %d commit(s) for %s", len(records), path)
        return CommitHistory(path=path, commits=tuple(records))

    async def _api_get(
        self,
        endpoint: str,
        params: dict[str, str] | None = None,
        accept: str | None = None,
    ) -> httpx.Response:
        """Perform a GitHub API GET request with error translation.

        *endpoint* is either relative to the API root or an absolute URL taken
        from a pagination link.
        """
        url = endpoint if endpoint.startswith("http") else f"{self._repository.api_url}{endpoint}"
        headers = self._api_headers if accept is None else {**self._api_headers, "Accept": accept}
        try:
            resp = await self._client.get(url, headers=headers, params=params)
        except httpx.HTTPError as exc:
            raise UpstreamRequestError(f"Network error fetching {url}: {exc}") from exc

        if resp.status_code == 200:
            return resp

        if resp.status_code == 404:
            raise PathNotFoundError(f"Not Found: {url}")

        if resp.status_code == 401:
            raise AuthenticationError("GitHub rejected the configured credentials.")

        if resp.status_code == 403:
            remaining = resp.headers.get("x-ratelimit-remaining", "")
            if remaining == "0":
                reset_raw = resp.headers.get("x-ratelimit-reset", "")
                try:
                    reset_str = datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
                        "%Y-%m-%d %H:%M:%S UTC"
                    )
                except (ValueError, OSError):
                    reset_str = reset_raw or "unknown"
                raise GitHubRateLimitError(
                    f"GitHub API rate limit exceeded. Resets at {reset_str}. "
                    "Set the GITHUB_TOKEN environment variable to increase the limit."
                )
            raise RepositoryAccessDeniedError(
                f"Access denied to {self._repository.full_name}. The repository may be private."
            )

        if resp.status_code == 429:
            raise GitHubRateLimitError("GitHub API rate limit exceeded (HTTP 429).")

        logger.warning("GitHub API returned HTTP %d for %s", resp.status_code, url)
        raise UpstreamRequestError(f"GitHub API returned HTTP {resp.status_code} for {url}")


def _tree_item(item: dict[str, Any]) -> RawTreeEntry:
    return RawTreeEntry(
        path=item["path"],
        type=item.get("type"),
        mode=item.get("mode"),
        size=item.get("size"),
        sha=item.get("sha"),
        url=item.get("url"),
    )


def _commit_record(item: dict[str, Any]) -> CommitRecord:
    return CommitRecord(
        sha=item.get("sha", ""),
        committer_date=parse_github_date(item["commit"]["committer"]["date"]),
    )
