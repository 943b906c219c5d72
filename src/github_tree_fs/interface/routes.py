"""API routes — thin controllers that delegate to the facade."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from github_tree_fs.domain.exceptions import PathNotFoundError
from github_tree_fs.interface.dependencies import get_facade
from github_tree_fs.interface.schemas import (
    EntryResponse,
    ExistsResponse,
    ErrorResponse,
    MimeTypeResponse,
    TimestampResponse,
)
from github_tree_fs.services.repo_tree import RepoTreeFacade

router = APIRouter()

_UPSTREAM_ERRORS = {
    403: {"model": ErrorResponse, "description": "Repository is private"},
    429: {"model": ErrorResponse, "description": "GitHub API rate limit exceeded"},
    502: {"model": ErrorResponse, "description": "GitHub API error"},
}


@router.get("/exists", response_model=ExistsResponse)
async def exists(
    path: str = Query(""),
    facade: RepoTreeFacade = Depends(get_facade),
) -> ExistsResponse:
    return ExistsResponse(path=path, exists=await facade.exists(path))


@router.get(
    "/contents",
    response_class=Response,
    responses={404: {"model": ErrorResponse, "description": "File not found"}, **_UPSTREAM_ERRORS},
)
async def contents(
    path: str = Query(...),
    facade: RepoTreeFacade = Depends(get_facade),
) -> Response:
    """Raw file bytes."""
    return Response(
        content=await facade.get_file_contents(path),
        media_type="application/octet-stream",
    )


@router.get(
    "/metadata",
    response_model=EntryResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    responses={404: {"model": ErrorResponse, "description": "Path not found"}, **_UPSTREAM_ERRORS},
)
async def metadata(
    path: str = Query(""),
    facade: RepoTreeFacade = Depends(get_facade),
) -> EntryResponse:
    result = await facade.get_metadata(path)
    if result is False:
        raise PathNotFoundError(f"Not Found: {path}")
    return EntryResponse.from_entity(result)


@router.get(
    "/listing",
    response_model=list[EntryResponse],
    response_model_by_alias=True,
    response_model_exclude_none=True,
    responses=_UPSTREAM_ERRORS,
)
async def listing(
    path: str = Query(""),
    recursive: bool = Query(False),
    facade: RepoTreeFacade = Depends(get_facade),
) -> list[EntryResponse]:
    entries = await facade.get_directory_contents(path, recursive)
    return [EntryResponse.from_entity(entry) for entry in entries]


@router.get(
    "/mimetype",
    response_model=MimeTypeResponse,
    responses={404: {"model": ErrorResponse, "description": "Path not found"}, **_UPSTREAM_ERRORS},
)
async def mimetype(
    path: str = Query(...),
    facade: RepoTreeFacade = Depends(get_facade),
) -> MimeTypeResponse:
    return MimeTypeResponse(path=path, mimetype=await facade.guess_mime_type(path))


@router.get(
    "/timestamp",
    response_model=TimestampResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Path not found"},
        409: {"model": ErrorResponse, "description": "Path has no commit history"},
        **_UPSTREAM_ERRORS,
    },
)
async def timestamp(
    path: str = Query(...),
    created: bool = Query(False, description="Oldest commit instead of newest"),
    facade: RepoTreeFacade = Depends(get_facade),
) -> TimestampResponse:
    if created:
        result = await facade.get_created_timestamp(path)
    else:
        result = await facade.get_last_updated_timestamp(path)
    return TimestampResponse(path=path, timestamp=result["timestamp"])
