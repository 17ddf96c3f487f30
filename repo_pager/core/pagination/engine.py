"""Cursor-driven pagination over an owner's repositories.

A session is a lazy async iterator: each ``__anext__`` performs at most one
fetch (including its retries), and the next fetch does not start until the
consumer asks for the next page. Breaking out of ``async for`` after the
first page therefore costs exactly one request.

State machine::

    Active --fetch, has_next_page--> Active   (cursor := end_cursor)
    Active --fetch, no next page---> Exhausted (page still yielded)
    Active --fatal error-----------> Closed    (error raised once)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from repo_pager.core.exceptions import PaginationError
from repo_pager.core.pagination.fetcher import MAX_PAGE_SIZE, PageFetcher
from repo_pager.core.pagination.schemas import PageInfo, RepositoryPage
from repo_pager.core.schemas import Repository
from repo_pager.infra.auth.credentials import CredentialProvider
from repo_pager.infra.demo import DemoRepositoryFactory
from repo_pager.infra.logging.context import bind_log_context

logger = logging.getLogger(__name__)


@dataclass
class PaginationState:
    """Cursor state owned by exactly one session."""

    current_cursor: str | None = None
    is_exhausted: bool = False
    pages_fetched: int = 0
    seen_cursors: set[str] = field(default_factory=set)


class PaginationSession:
    """Async iterator over one owner's repository pages.

    Created by ``PaginationEngine.start``; never shared between owners or
    reused after exhaustion.
    """

    def __init__(
        self,
        owner: str,
        fetcher: PageFetcher,
        page_size: int,
        demo: DemoRepositoryFactory | None = None,
    ) -> None:
        self.owner = owner
        self.page_size = page_size
        self.state = PaginationState()
        self._fetcher = fetcher
        self._demo = demo
        self._closed = False

    @property
    def is_demo(self) -> bool:
        return self._demo is not None

    def __aiter__(self) -> PaginationSession:
        return self

    async def __anext__(self) -> RepositoryPage:
        if self._closed or self.state.is_exhausted:
            raise StopAsyncIteration

        if self._demo is not None:
            page = RepositoryPage(
                items=self._demo.build(),
                page_info=PageInfo(end_cursor=None, has_next_page=False),
            )
            self.state.is_exhausted = True
            self.state.pages_fetched += 1
            logger.info(
                f"Serving {len(page.items)} demo repositories",
                extra={"owner": self.owner, "count": len(page.items)},
            )
            return page

        try:
            with bind_log_context(owner=self.owner, page=self.state.pages_fetched + 1):
                page = await self._fetcher.fetch_page(
                    self.owner, self.state.current_cursor, self.page_size
                )
            self._check_cursor(page.page_info)
        except Exception:
            self._closed = True
            raise

        self._advance(page.page_info)
        return page

    def _check_cursor(self, page_info: PageInfo) -> None:
        if not page_info.has_next_page:
            return
        cursor = page_info.end_cursor
        if not cursor:
            raise PaginationError(
                detail=f"Page {self.state.pages_fetched + 1} reports more pages but no end cursor",
                owner=self.owner,
            )
        if cursor in self.state.seen_cursors or cursor == self.state.current_cursor:
            raise PaginationError(
                detail=f"End cursor repeated on page {self.state.pages_fetched + 1}",
                owner=self.owner,
                cursor=cursor,
            )

    def _advance(self, page_info: PageInfo) -> None:
        """Apply a completed fetch to the session state."""
        self.state.pages_fetched += 1
        if page_info.has_next_page:
            if self.state.current_cursor is not None:
                self.state.seen_cursors.add(self.state.current_cursor)
            self.state.current_cursor = page_info.end_cursor
        else:
            self.state.is_exhausted = True
            logger.debug(
                f"Pagination for {self.owner} finished after {self.state.pages_fetched} page(s)",
                extra={"owner": self.owner, "pages": self.state.pages_fetched},
            )

    async def aclose(self) -> None:
        """Stop the session; later iteration ends immediately."""
        self._closed = True


class PaginationEngine:
    """Produce repository pages for an owner, one fetch at a time.

    Example:
        ```python
        engine = PaginationEngine(fetcher, credentials, page_size=50)
        async for page in engine.start("octocat"):
            render(page.items)
        ```
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        credentials: CredentialProvider,
        page_size: int = MAX_PAGE_SIZE,
        demo_factory: DemoRepositoryFactory | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.credentials = credentials
        self.page_size = page_size
        self.demo_factory = demo_factory or DemoRepositoryFactory()

    def start(self, owner: str, page_size: int | None = None) -> PaginationSession:
        """Begin a new session for ``owner``.

        The demo identity is checked here; a demo session never reaches the
        fetcher.
        """
        demo = self.demo_factory if self.credentials.is_demo_identity() else None
        return PaginationSession(
            owner=owner,
            fetcher=self.fetcher,
            page_size=page_size if page_size is not None else self.page_size,
            demo=demo,
        )

    async def collect(self, owner: str, page_size: int | None = None) -> list[Repository]:
        """Drain a session into a single list."""
        repositories: list[Repository] = []
        async for page in self.start(owner, page_size):
            repositories.extend(page.items)
        return repositories
