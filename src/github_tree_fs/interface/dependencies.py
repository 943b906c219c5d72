"""FastAPI dependency injection wiring.

One facade is built per application lifetime: its caches describe the
configured reference and are shared by every request.
"""

from __future__ import annotations

import logging

import httpx

from github_tree_fs.infrastructure.config import get_settings
from github_tree_fs.infrastructure.github_rest_adapter import GitHubRestAdapter
from github_tree_fs.infrastructure.mime_sniffer import MimeSniffer
from github_tree_fs.services.repo_tree import RepoTreeFacade

logger = logging.getLogger(__name__)

_http_client: httpx.AsyncClient | None = None
_facade: RepoTreeFacade | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client, _facade  # noqa: PLW0603

    settings = get_settings()
    repository = settings.repository_ref()
    token = settings.github_token.get_secret_value() if settings.github_token else None

    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout))
    _facade = RepoTreeFacade(
        gateway=GitHubRestAdapter(client=_http_client, repository=repository, token=token),
        repository=repository,
        mime_detector=MimeSniffer(),
        max_concurrency=settings.max_concurrent_requests,
    )
    logger.info("Serving %s@%s", repository.full_name, repository.reference)


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client, _facade  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None
    _facade = None


def get_facade() -> RepoTreeFacade:
    """Return the facade built at startup."""
    assert _facade is not None, "startup() was not called"
    return _facade
