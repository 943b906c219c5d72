"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass

from github_tree_fs.domain.exceptions import InvalidRepositoryNameError

_REPOSITORY_RE = re.compile(r"^(?P<vendor>[A-Za-z0-9\-_.]+)/(?P<package>[A-Za-z0-9\-_.]+)$")

GITHUB_API_URL = "https://api.github.com"
GITHUB_URL = "https://github.com"


def normalize_path(path: str | None) -> str:
    """Strip surrounding slashes; ``"/a/b/"``, ``"a/b/"`` and ``"a/b"`` are one path."""
    return (path or "").strip("/")


@dataclass(frozen=True, slots=True)
class RepositoryRef:
    """One fixed snapshot of a hosted repository.

    Contents and tree reads use *reference*; commit history is listed from
    *branch*.
    """

    vendor: str
    package: str
    reference: str = "HEAD"
    branch: str = "master"
    api_url: str = GITHUB_API_URL
    web_url: str = GITHUB_URL

    @classmethod
    def from_string(cls, repository: str, **kwargs: str) -> RepositoryRef:
        """Parse and validate a ``vendor/package`` name."""
        match = _REPOSITORY_RE.match(repository.strip()) if isinstance(repository, str) else None
        if not match:
            raise InvalidRepositoryNameError(
                f"Given repository name {repository!r} should be in the format of "
                "'vendor/package'"
            )
        return cls(vendor=match["vendor"], package=match["package"], **kwargs)

    @property
    def full_name(self) -> str:
        return f"{self.vendor}/{self.package}"

    def contents_url(self, path: str) -> str:
        return (
            f"{self.api_url}/repos/{self.full_name}/contents/"
            f"{normalize_path(path)}?ref={self.reference}"
        )

    def html_url(self, path: str) -> str:
        return f"{self.web_url}/{self.full_name}/blob/{self.reference}/{normalize_path(path)}"
