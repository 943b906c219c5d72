"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from github_tree_fs.domain.value_objects import GITHUB_API_URL, GITHUB_URL, RepositoryRef


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    github_repository: str
    github_reference: str = "HEAD"
    github_branch: str = "master"
    github_token: SecretStr | None = None
    github_api_url: str = GITHUB_API_URL
    github_web_url: str = GITHUB_URL
    http_timeout: float = Field(default=30.0, gt=0)
    max_concurrent_requests: int = Field(default=10, ge=1, le=100)
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @field_validator("github_repository")
    @classmethod
    def _validate_repository(cls, v: str) -> str:
        # raises InvalidRepositoryNameError, a ValueError
        RepositoryRef.from_string(v)
        return v.strip()

    @field_validator("github_api_url", "github_web_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    def repository_ref(self) -> RepositoryRef:
        return RepositoryRef.from_string(
            self.github_repository,
            reference=self.github_reference,
            branch=self.github_branch,
            api_url=self.github_api_url,
            web_url=self.github_web_url,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()  # type: ignore[call-arg]
