"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import Depends, FastAPI

from github_tree_fs.interface.dependencies import get_facade, shutdown, startup
from github_tree_fs.interface.error_handlers import register_error_handlers
from github_tree_fs.interface.routes import router
from github_tree_fs.services.repo_tree import RepoTreeFacade


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage startup / shutdown of shared resources."""
    await startup()
    yield
    await shutdown()


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    app = FastAPI(
        title="GitHub Tree FS",
        version="1.0.0",
        description=(
            "Read-only, filesystem-like access to a GitHub repository at a "
            "fixed reference: existence checks, file contents, listings, "
            "metadata, timestamps and MIME types."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    app.include_router(router)

    @app.get("/health", include_in_schema=False)
    async def health(facade: RepoTreeFacade = Depends(get_facade)) -> dict[str, str]:
        repository = facade.repository
        return {"status": "ok", "repository": f"{repository.full_name}@{repository.reference}"}

    return app
