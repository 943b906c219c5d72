"""Metadata normalization — turn raw GitHub entries into uniform tree entries."""

from __future__ import annotations

from collections.abc import Sequence

from github_tree_fs.domain.entities import EntryType, RawTreeEntry, TreeEntry, Visibility

_RAW_TYPES: dict[str, EntryType] = {
    "blob": EntryType.FILE,
    "tree": EntryType.DIRECTORY,
}

# group-read | other-read
_READABLE_BITS = 0o044


def map_entry_type(raw_type: str | None) -> EntryType:
    """``blob`` → file, ``tree`` → directory; anything else is ``UNKNOWN``."""
    return _RAW_TYPES.get(raw_type or "", EntryType.UNKNOWN)


def entry_type(entry: RawTreeEntry | TreeEntry) -> EntryType:
    """Type of a raw or already-normalized entry."""
    if isinstance(entry, TreeEntry):
        return entry.type
    return map_entry_type(entry.type)


def guess_visibility(mode: str | None) -> Visibility:
    """Classify a git file mode such as ``"100644"`` by its read bits.

    Modes without permission bits (trees ``040000``, submodules ``160000``)
    say nothing about visibility and count as public.
    """
    if not mode:
        return Visibility.PUBLIC
    try:
        permissions = int(mode, 8) & 0o777
    except ValueError:
        return Visibility.PUBLIC
    if not permissions or permissions & _READABLE_BITS:
        return Visibility.PUBLIC
    return Visibility.PRIVATE


def entry_name(raw: RawTreeEntry) -> str | None:
    if raw.name:
        return raw.name
    if raw.basename:
        return raw.basename
    if raw.path is not None:
        return raw.path
    return None


def normalize_entry(raw: RawTreeEntry) -> TreeEntry:
    return TreeEntry(
        path=raw.path,
        name=entry_name(raw),
        type=map_entry_type(raw.type),
        visibility=guess_visibility(raw.mode),
        mode=raw.mode,
        size=raw.size,
        sha=raw.sha,
        url=raw.url,
        html_url=raw.html_url,
    )


def normalize_entries(raw: RawTreeEntry | Sequence[RawTreeEntry]) -> list[TreeEntry]:
    """Normalize one entry or many; a bare entry is treated as a one-item list."""
    if isinstance(raw, RawTreeEntry):
        raw = [raw]
    return [normalize_entry(entry) for entry in raw]
