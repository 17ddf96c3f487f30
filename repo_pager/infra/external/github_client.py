"""GitHub GraphQL API client.

Exposes the viewer, user, repository and paginated repository operations on
top of ``BaseGraphQLClient``. Every call fetches the current token from the
credential provider and goes through the retry policy.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import BaseModel

from repo_pager.core.exceptions import RepoPagerError
from repo_pager.core.pagination.engine import PaginationEngine, PaginationSession
from repo_pager.core.pagination.fetcher import PageFetcher
from repo_pager.core.schemas import Repository, User, ViewerInfo
from repo_pager.core.settings import GitHubSettings, get_github_settings
from repo_pager.infra.auth.credentials import (
    DEMO_AVATAR_URL,
    DEMO_USER_LOGIN,
    DEMO_USER_NAME,
    CredentialProvider,
    SettingsCredentialProvider,
)
from repo_pager.infra.demo import DemoRepositoryFactory
from repo_pager.infra.external.base_client import BaseGraphQLClient
from repo_pager.infra.external.queries import (
    REPOSITORY,
    USER,
    VIEWER_LOGIN,
    GraphQLOperation,
)
from repo_pager.utils.retry import RetryStrategy, run_with_retry

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class GitHubGraphQLClient(BaseGraphQLClient):
    """Client for the GitHub GraphQL API.

    Usage:
        async with GitHubGraphQLClient.from_settings() as client:
            viewer = await client.get_current_user_info()
            async for page in client.get_repositories(viewer.login):
                for repo in page.items:
                    print(repo.full_name, repo.stargazers.total_count)
    """

    def __init__(
        self,
        credentials: CredentialProvider,
        endpoint: str = "https://api.github.com/graphql",
        timeout: float = 30.0,
        num_retries: int = 2,
        strategy: RetryStrategy | None = None,
        page_size: int = 100,
        demo_repository_count: int = 50,
        user_agent: str = "repo-pager/0.1.0",
        **kwargs: Any,
    ) -> None:
        """Initialize GitHub client.

        Args:
            credentials: Token source, consulted before every request.
            endpoint: GraphQL endpoint URL.
            timeout: Request timeout in seconds.
            num_retries: Retries for transport failures (2 means 3 attempts).
            strategy: Backoff schedule between retries.
            page_size: Default repositories per page.
            demo_repository_count: Repositories served to the demo identity.
            user_agent: User-Agent header value.
            **kwargs: Passed to ``BaseGraphQLClient`` (e.g. ``client``).
        """
        super().__init__(endpoint=endpoint, timeout=timeout, user_agent=user_agent, **kwargs)
        self.credentials = credentials
        self.num_retries = num_retries
        self.strategy = strategy or RetryStrategy()
        self.fetcher = PageFetcher(
            executor=self,
            credentials=credentials,
            num_retries=num_retries,
            strategy=self.strategy,
        )
        self.engine = PaginationEngine(
            fetcher=self.fetcher,
            credentials=credentials,
            page_size=page_size,
            demo_factory=DemoRepositoryFactory(count=demo_repository_count),
        )

    @classmethod
    def from_settings(
        cls,
        settings: GitHubSettings | None = None,
        credentials: CredentialProvider | None = None,
        **kwargs: Any,
    ) -> GitHubGraphQLClient:
        """Build a client from ``GitHubSettings`` (environment by default)."""
        settings = settings or get_github_settings()
        return cls(
            credentials=credentials or SettingsCredentialProvider(settings),
            endpoint=settings.graphql_url,
            timeout=settings.timeout,
            num_retries=settings.num_retries,
            strategy=RetryStrategy(
                initial_delay=settings.retry_initial_delay,
                max_delay=settings.retry_max_delay,
                exponential_base=settings.retry_exponential_base,
            ),
            page_size=settings.page_size,
            demo_repository_count=settings.demo_repository_count,
            user_agent=settings.user_agent,
            **kwargs,
        )

    async def _request(self, operation: GraphQLOperation[ModelT], variables: dict[str, Any]) -> ModelT:
        token = await self.credentials.get_token()
        return await run_with_retry(
            lambda: self.execute(operation, variables, token),
            operation_name=operation.name,
            num_retries=self.num_retries,
            strategy=self.strategy,
        )

    async def get_current_user_info(self) -> ViewerInfo:
        """Get login, name and avatar of the authenticated user."""
        if self.credentials.is_demo_identity():
            return ViewerInfo(login=DEMO_USER_LOGIN, name=DEMO_USER_NAME, avatar_url=DEMO_AVATAR_URL)
        data = await self._request(VIEWER_LOGIN, {})
        return data.viewer

    async def get_user(self, username: str) -> User:
        """Get a user profile by login.

        Raises:
            RepoPagerError: If no such user exists.
        """
        data = await self._request(USER, {"login": username})
        if data.user is None:
            raise RepoPagerError(
                detail=f"User {username} not found",
                type="user-not-found",
                extra={"login": username},
            )
        return data.user

    async def get_repository(
        self,
        repository_owner: str,
        repository_name: str,
        issues_per_request: int = 100,
    ) -> Repository:
        """Get one repository with its most recent issues.

        Raises:
            RepoPagerError: If the repository does not exist or is not visible.
        """
        data = await self._request(
            REPOSITORY,
            {"owner": repository_owner, "name": repository_name, "issuesCount": issues_per_request},
        )
        if data.repository is None:
            raise RepoPagerError(
                detail=f"Repository {repository_owner}/{repository_name} not found",
                type="repository-not-found",
                extra={"owner": repository_owner, "name": repository_name},
            )
        return data.repository

    def get_repositories(self, repository_owner: str, page_size: int | None = None) -> PaginationSession:
        """Lazily page through an owner's repositories.

        Returns a fresh session; iterate it with ``async for``.
        """
        return self.engine.start(repository_owner, page_size)


__all__ = ["GitHubGraphQLClient"]
