"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Literal, Union

from github_tree_fs.domain.exceptions import NoCommitHistoryError


class EntryType(str, Enum):
    """Normalized classification of a tree entry."""

    FILE = "file"
    DIRECTORY = "directory"
    UNKNOWN = "unknown"


class Visibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


@dataclass(frozen=True, slots=True)
class RawTreeEntry:
    """A single entry as returned by the GitHub tree or contents API."""

    path: str
    type: str | None  # "blob" or "tree"; anything else is unknown
    mode: str | None = None
    size: int | None = None
    sha: str | None = None
    url: str | None = None
    html_url: str | None = None
    name: str | None = None
    basename: str | None = None


@dataclass(frozen=True, slots=True)
class TreeEntry:
    """A normalized entry; every field is always present."""

    path: str
    name: str | None
    type: EntryType
    visibility: Visibility
    mode: str | None = None
    size: int | None = None
    sha: str | None = None
    url: str | None = None
    html_url: str | None = None
    contents: Literal[False] = False
    stream: Literal[False] = False
    timestamp: int | Literal[False] = False


@dataclass(frozen=True, slots=True)
class Links:
    """Serialized as GitHub's ``_links`` object (``self`` / ``html``)."""

    api: str
    html: str


@dataclass(frozen=True, slots=True)
class DirectoryMetadata:
    """Synthesized metadata for a path the contents API reports as a directory."""

    path: str
    url: str
    html_url: str
    links: Links
    name: str | None
    visibility: Visibility = Visibility.PUBLIC
    mode: str | None = None
    sha: str | None = None
    timestamp: int = 0
    contents: Literal[False] = False
    stream: Literal[False] = False
    type: EntryType = EntryType.DIRECTORY


MetadataResult = Union[TreeEntry, DirectoryMetadata, Literal[False]]


@dataclass(frozen=True, slots=True)
class TreeListing:
    """The flat result of a recursive tree call.

    ``truncated`` is set when GitHub capped the listing; no continuation is
    attempted.
    """

    entries: list[RawTreeEntry]
    truncated: bool = False


# ── Contents API result shapes ──────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ShownFile:
    """The contents API answered with a single object: the path is a file."""

    entry: RawTreeEntry


@dataclass(frozen=True, slots=True)
class DirectoryHint:
    """The contents API answered with a list: the path is a directory."""

    path: str


ShowPathResult = Union[ShownFile, DirectoryHint]


# ── Commit history ──────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class CommitRecord:
    sha: str
    committer_date: datetime


@dataclass(frozen=True, slots=True)
class CommitHistory:
    """Commits touching one path, newest first (GitHub's order)."""

    path: str
    commits: tuple[CommitRecord, ...] = field(default_factory=tuple)

    @property
    def last_updated(self) -> CommitRecord:
        if not self.commits:
            raise NoCommitHistoryError(f"No commits found for '{self.path}'.")
        return self.commits[0]

    @property
    def created(self) -> CommitRecord:
        if not self.commits:
            raise NoCommitHistoryError(f"No commits found for '{self.path}'.")
        return self.commits[-1]
