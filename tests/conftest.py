# Test Fixtures
import asyncio
from collections import Counter
from datetime import datetime, timezone

import pytest

from github_tree_fs.domain.entities import (
    CommitHistory,
    CommitRecord,
    DirectoryHint,
    RawTreeEntry,
    ShownFile,
    TreeListing,
)
from github_tree_fs.domain.exceptions import NoCommitHistoryError, PathNotFoundError
from github_tree_fs.domain.value_objects import RepositoryRef
from github_tree_fs.infrastructure.mime_sniffer import MimeSniffer
from github_tree_fs.services.repo_tree import RepoTreeFacade


def at(epoch: int) -> datetime:
    return datetime.fromtimestamp(epoch, tz=timezone.utc)


class FakeGateway:
    """In-memory RepositoryGateway that counts every call per (operation, path)."""

    def __init__(self, tree, commits, shown, files=None, truncated=False):
        self.tree = tree
        self.commits = commits
        self.shown = shown
        self.files = files or {}
        self.truncated = truncated
        self.calls = Counter()
        self.failures = {}

    def _record(self, operation, path=None):
        self.calls[(operation, path)] += 1
        failure = self.failures.get((operation, path))
        if failure is not None:
            raise failure

    async def exists(self, path):
        self._record("exists", path)
        return path == "" or any(entry.path == path for entry in self.tree)

    async def download(self, path):
        self._record("download", path)
        if path not in self.files:
            raise PathNotFoundError(f"Not Found: {path}")
        return self.files[path]

    async def show_path(self, path):
        self._record("show_path", path)
        await asyncio.sleep(0)
        if path not in self.shown:
            raise PathNotFoundError(f"Not Found: {path}")
        return self.shown[path]

    async def list_tree_recursive(self):
        self._record("list_tree_recursive")
        return TreeListing(entries=list(self.tree), truncated=self.truncated)

    async def commits_for_path(self, path):
        self._record("commits_for_path", path)
        await asyncio.sleep(0)
        dates = self.commits.get(path)
        if not dates:
            raise NoCommitHistoryError(f"No commits found for '{path}'.")
        return CommitHistory(
            path=path,
            commits=tuple(CommitRecord(sha=f"{path}@{i}", committer_date=at(d)) for i, d in enumerate(dates)),
        )


@pytest.fixture
def raw_tree():
    return [
        RawTreeEntry(path="README", type="blob", mode="100755", size=58, sha="1ff3a296"),
        RawTreeEntry(path="a-directory", type="tree", mode="040000", sha="30b7e362"),
        RawTreeEntry(path="a-file.php", type="blob", mode="100644", size=117, sha="c6e6cd91"),
        RawTreeEntry(path="a-directory/another-file.js", type="blob", mode="100755", size=52, sha="f542363e"),
        RawTreeEntry(path="a-directory/readme.txt", type="blob", mode="100644", size=31, sha="27f8ec84"),
        RawTreeEntry(path="empty-directory", type="tree", mode="040000", sha="4b825dc6"),
    ]


@pytest.fixture
def commit_dates():
    # newest first, as GitHub returns them
    return {
        "README": [300, 100],
        "a-file.php": [120],
        "a-directory/another-file.js": [250, 150],
        "a-directory/readme.txt": [400, 200],
    }


@pytest.fixture
def shown():
    return {
        "": DirectoryHint(path=""),
        "README": ShownFile(
            entry=RawTreeEntry(path="README", type="blob", size=58, sha="1ff3a296", name="README")
        ),
        "a-directory": DirectoryHint(path="a-directory"),
        "empty-directory": DirectoryHint(path="empty-directory"),
    }


@pytest.fixture
def gateway(raw_tree, commit_dates, shown):
    return FakeGateway(
        tree=raw_tree,
        commits=commit_dates,
        shown=shown,
        files={"README": b"Read me first\n", "a-file.php": b"<?php echo 'hi';\n"},
    )


@pytest.fixture
def repository():
    return RepositoryRef(vendor="mockVendor", package="mockPackage", reference="mockReference")


@pytest.fixture
def facade(gateway, repository):
    return RepoTreeFacade(gateway=gateway, repository=repository, mime_detector=MimeSniffer())
