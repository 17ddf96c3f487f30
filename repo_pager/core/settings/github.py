"""GitHub GraphQL API settings.

Environment variables use GITHUB_ prefix.
Example: GITHUB_TOKEN=ghp_..., GITHUB_PAGE_SIZE=50, GITHUB_DEMO_MODE=true
"""

from __future__ import annotations

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GitHubSettings(BaseSettings):
    """GitHub GraphQL client configuration.

    Attributes:
        graphql_url: GraphQL endpoint.
        token: Personal access or OAuth token sent as bearer credential.
        demo_mode: Serve fabricated repositories instead of calling the API.
        timeout: Per-request timeout in seconds.
        page_size: Repositories requested per page (GitHub caps ``first`` at 100).
        num_retries: Retries after the first attempt for transport failures.
        retry_initial_delay: Backoff before the first retry, in seconds.
        retry_max_delay: Upper bound on any single backoff, in seconds.
        retry_exponential_base: Growth factor between consecutive backoffs.
        demo_repository_count: Number of repositories in the demo page.
        user_agent: User-Agent header (GitHub rejects requests without one).
    """

    graphql_url: str = Field(
        default="https://api.github.com/graphql",
        description="GitHub GraphQL endpoint URL",
    )
    token: SecretStr | None = Field(
        default=None,
        description="Bearer token for the GraphQL API",
    )
    demo_mode: bool = Field(
        default=False,
        description="Serve synthetic data without network access",
    )
    timeout: float = Field(
        default=30.0, gt=0, le=300.0, description="Request timeout in seconds"
    )
    page_size: int = Field(
        default=100, ge=1, le=100, description="Repositories per page"
    )
    num_retries: int = Field(
        default=2, ge=0, le=10, description="Retries for transport failures"
    )
    retry_initial_delay: float = Field(
        default=1.0, ge=0.0, le=60.0, description="Initial backoff delay in seconds"
    )
    retry_max_delay: float = Field(
        default=10.0, ge=0.0, le=300.0, description="Maximum backoff delay in seconds"
    )
    retry_exponential_base: float = Field(
        default=2.0, ge=1.0, le=10.0, description="Backoff growth factor"
    )
    demo_repository_count: int = Field(
        default=50, ge=0, le=1000, description="Repositories in the demo page"
    )
    user_agent: str = Field(
        default="repo-pager/0.1.0", min_length=1, description="User-Agent header"
    )

    model_config = SettingsConfigDict(
        env_prefix="GITHUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    @field_validator("token", mode="before")
    @classmethod
    def blank_token_is_none(cls, v: object) -> object:
        """Treat an empty or whitespace-only token as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def has_token(self) -> bool:
        """Whether a non-empty token is configured."""
        return self.token is not None and bool(self.token.get_secret_value())
