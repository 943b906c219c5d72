"""Tree filtering — select the entries below a path from a flat recursive tree.

Matching is segment aware: the target ``a`` is compared as the prefix
``a/``, so ``ab/c`` never matches it. A directory does not list itself; a
path naming a non-tree entry yields that entry.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from github_tree_fs.domain.entities import EntryType, RawTreeEntry, TreeEntry
from github_tree_fs.domain.value_objects import normalize_path
from github_tree_fs.services.metadata_normalizer import entry_type

E = TypeVar("E", RawTreeEntry, TreeEntry)


def is_under(entry_path: str, path: str, recursive: bool) -> bool:
    """Whether *entry_path* is a descendant (or direct child) of *path*."""
    if not path:
        return recursive or "/" not in entry_path

    prefix = f"{path}/"
    if not entry_path.startswith(prefix):
        return False
    return recursive or "/" not in entry_path[len(prefix):]


def filter_tree(entries: Sequence[E], path: str, recursive: bool) -> list[E]:
    """Return the entries under *path*, preserving their original order."""
    path = normalize_path(path)
    return [
        entry
        for entry in entries
        if is_under(entry.path, path, recursive)
        or (path and entry.path == path and entry_type(entry) is not EntryType.DIRECTORY)
    ]
