"""Pydantic response DTOs for the API and storage-adapter boundaries."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from github_tree_fs.domain.entities import DirectoryMetadata, TreeEntry


class LinksResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    self_: str = Field(alias="self")
    html: str


class EntryResponse(BaseModel):
    """One file or directory, in the shape GitHub-aware consumers expect."""

    model_config = ConfigDict(populate_by_name=True)

    path: str
    name: str | None
    type: str
    visibility: str
    mode: str | None = None
    size: int | None = None
    sha: str | None = None
    url: str | None = None
    html_url: str | None = None
    links: LinksResponse | None = Field(default=None, alias="_links")
    contents: Literal[False] = False
    stream: Literal[False] = False
    timestamp: int | Literal[False] = False

    @classmethod
    def from_entity(cls, entry: TreeEntry | DirectoryMetadata) -> EntryResponse:
        links = None
        if isinstance(entry, DirectoryMetadata):
            links = LinksResponse(self_=entry.links.api, html=entry.links.html)
        return cls(
            path=entry.path,
            name=entry.name,
            type=entry.type.value,
            visibility=entry.visibility.value,
            mode=entry.mode,
            size=getattr(entry, "size", None),
            sha=entry.sha,
            url=entry.url,
            html_url=entry.html_url,
            links=links,
            timestamp=entry.timestamp,
        )


class ExistsResponse(BaseModel):
    path: str
    exists: bool


class TimestampResponse(BaseModel):
    path: str
    timestamp: int


class MimeTypeResponse(BaseModel):
    path: str
    mimetype: str


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
