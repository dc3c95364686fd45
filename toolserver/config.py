"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets (GITHUB_TOKEN, GITLAB_TOKEN) come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults provided for all non-secret settings: server works out-of-the-box without providers
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Server identity (initialize → serverInfo)
    server_name: str = "mcp-dev-tools-server"
    server_version: str = "1.0.0"

    # GitHub
    github_token: str = ""
    github_api_url: str = "https://api.github.com"
    github_user_agent: str = "MCP-GitHub-Server/1.0.0"

    # GitLab
    gitlab_token: str = ""
    gitlab_host: str = "https://gitlab.com"

    @field_validator("github_api_url", "gitlab_host", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Endpoints are joined with a leading slash."""
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    # REST clients
    http_timeout_seconds: float = 30.0
    http_max_retries: int = 3
    http_base_delay_ms: int = 500
    http_max_delay_ms: int = 10_000
    page_size: int = 30

    # Registry: list GitHub/GitLab tools even when their token is unset
    expose_unconfigured_providers: bool = True

    # API
    cors_origins: list[str] = ["*"]

    # stdio → HTTP proxy
    proxy_target_url: str = "http://localhost:8000/mcp"
    proxy_timeout_seconds: float = 60.0

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def github_configured(self) -> bool:
        return bool(self.github_token)

    @property
    def gitlab_configured(self) -> bool:
        return bool(self.gitlab_token)


@lru_cache
def get_settings() -> Settings:
    return Settings()
