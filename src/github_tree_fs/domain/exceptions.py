"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class GithubTreeFsError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidRepositoryNameError(GithubTreeFsError, ValueError):
    """The repository name is not of the form ``vendor/package``."""


# ── Repository content ──────────────────────────────────────────────────────


class PathNotFoundError(GithubTreeFsError):
    """The path does not exist at the configured reference (404)."""


class NoCommitHistoryError(GithubTreeFsError):
    """The path has no commits, so no timestamp can be derived."""


class UnsupportedOperationError(GithubTreeFsError):
    """The repository is exposed read-only; mutations are not supported."""


# ── GitHub API errors ───────────────────────────────────────────────────────


class UpstreamError(GithubTreeFsError):
    """Any failure talking to GitHub other than a missing path."""


class AuthenticationError(UpstreamError):
    """GitHub rejected the configured credentials (401)."""


class RepositoryAccessDeniedError(UpstreamError):
    """Access to the repository was denied (403)."""


class GitHubRateLimitError(UpstreamError):
    """GitHub API rate limit exceeded (429 / 403 with rate-limit header)."""


class UpstreamRequestError(UpstreamError):
    """Transport failure or unexpected HTTP status from GitHub."""
