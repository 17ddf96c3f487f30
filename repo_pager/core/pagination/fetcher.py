"""Single-page repository fetcher."""

from __future__ import annotations

import logging
from typing import Any, Protocol, TypeVar

from pydantic import BaseModel

from repo_pager.core.pagination.schemas import PageInfo, RepositoryPage
from repo_pager.infra.auth.credentials import CredentialProvider
from repo_pager.infra.external.outcome import GraphQLOutcome
from repo_pager.infra.external.queries import REPOSITORY_CONNECTION, GraphQLOperation
from repo_pager.utils.retry import DEFAULT_NUM_RETRIES, RetryStrategy, run_with_retry

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100


class RequestExecutor(Protocol):
    """Anything that can run one GraphQL operation and report its outcome."""

    async def execute(
        self,
        operation: GraphQLOperation[ModelT],
        variables: dict[str, Any],
        token: str,
    ) -> GraphQLOutcome[ModelT]: ...


class PageFetcher:
    """Fetch one page of an owner's repositories.

    Each call asks the credential provider for a fresh token, runs the
    repository connection query through the retry policy and unpacks the
    connection into a ``RepositoryPage``. Errors are not caught.
    """

    def __init__(
        self,
        executor: RequestExecutor,
        credentials: CredentialProvider,
        num_retries: int = DEFAULT_NUM_RETRIES,
        strategy: RetryStrategy | None = None,
    ) -> None:
        self.executor = executor
        self.credentials = credentials
        self.num_retries = num_retries
        self.strategy = strategy or RetryStrategy()

    @staticmethod
    def build_variables(owner: str, cursor: str | None, page_size: int) -> dict[str, Any]:
        """Variables for the repository connection query.

        A ``None`` cursor means "start of collection".
        """
        return {"login": owner, "first": page_size, "after": cursor}

    async def fetch_page(self, owner: str, cursor: str | None, page_size: int) -> RepositoryPage:
        """Fetch the page that follows ``cursor``.

        Args:
            owner: Login of the repository owner.
            cursor: End cursor of the previous page, or None for the first page.
            page_size: Repositories to request (1-100).

        Returns:
            The page's repositories and continuation metadata.

        Raises:
            ValueError: If ``page_size`` is out of range.
            AuthError: If no valid token is available.
            ApplicationError: If GitHub returned GraphQL errors.
            RetryError: If every attempt failed at the transport level.
        """
        if not MIN_PAGE_SIZE <= page_size <= MAX_PAGE_SIZE:
            raise ValueError(
                f"page_size must be between {MIN_PAGE_SIZE} and {MAX_PAGE_SIZE}, got {page_size}"
            )

        token = await self.credentials.get_token()
        variables = self.build_variables(owner, cursor, page_size)

        data = await run_with_retry(
            lambda: self.executor.execute(REPOSITORY_CONNECTION, variables, token),
            operation_name=REPOSITORY_CONNECTION.name,
            num_retries=self.num_retries,
            strategy=self.strategy,
        )

        if data.user is None:
            # GitHub answers null for an unknown login
            logger.info(f"No user named {owner}", extra={"owner": owner})
            return RepositoryPage(items=(), page_info=PageInfo(end_cursor=None, has_next_page=False))

        page = RepositoryPage.from_connection(data.user.repositories)
        logger.debug(
            f"Fetched {len(page.items)} repositories for {owner}",
            extra={
                "owner": owner,
                "count": len(page.items),
                "has_next_page": page.page_info.has_next_page,
            },
        )
        return page
