"""Global exception handlers — translate domain errors to HTTP responses.

Every error leaves the API in the ``{"status": "error", "message": "..."}``
envelope. Domain errors are resolved to a status code through their class
hierarchy, so a new subclass inherits its parent's code.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from github_tree_fs.domain.exceptions import (
    GithubTreeFsError,
    GitHubRateLimitError,
    InvalidRepositoryNameError,
    NoCommitHistoryError,
    PathNotFoundError,
    RepositoryAccessDeniedError,
    UnsupportedOperationError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_EXCEPTION: dict[type[GithubTreeFsError], int] = {
    InvalidRepositoryNameError: 422,
    PathNotFoundError: 404,
    NoCommitHistoryError: 409,
    UnsupportedOperationError: 405,
    RepositoryAccessDeniedError: 403,
    GitHubRateLimitError: 429,
    UpstreamError: 502,
}


def status_for(exc: GithubTreeFsError) -> int:
    """Status code of the most specific mapped class in *exc*'s MRO."""
    for cls in type(exc).__mro__:
        if cls in _STATUS_BY_EXCEPTION:
            return _STATUS_BY_EXCEPTION[cls]
    return 500


def _error_json(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    @app.exception_handler(GithubTreeFsError)
    async def domain_handler(request: Request, exc: GithubTreeFsError) -> JSONResponse:
        status_code = status_for(exc)
        if status_code >= 500:
            logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc)
        else:
            logger.info("%s on %s: %s", type(exc).__name__, request.url.path, exc)
        return _error_json(status_code, str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = [
            f"{'.'.join(str(p) for p in err.get('loc', []))}: {err.get('msg', 'validation error')}"
            for err in exc.errors()
        ]
        return _error_json(422, "; ".join(messages))

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return _error_json(500, "An unexpected error occurred. Please try again later.")
