"""Page and page metadata models for repository pagination.

Follows the GraphQL Relay connection shape GitHub uses: each fetch returns a
list of nodes plus a ``pageInfo`` object carrying the continuation cursor.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from repo_pager.core.schemas import Repository


class PageInfo(BaseModel):
    """Pagination metadata of a GraphQL Relay connection.

    Attributes:
        end_cursor: Cursor of the last item in this page. None at the end of an
            empty collection.
        has_next_page: Whether more items exist after this page.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    end_cursor: str | None = Field(default=None, description="Cursor of the last item")
    has_next_page: bool = Field(default=False, description="Whether more items exist")


class RepositoryConnection(BaseModel):
    """``repositories`` connection as returned by GitHub."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    nodes: tuple[Repository, ...] = ()
    page_info: PageInfo = Field(default_factory=PageInfo)
    total_count: int | None = None


class RepositoryPage(BaseModel):
    """One batch of repositories produced by a single fetch.

    Usage:
        async for page in engine.start("octocat"):
            for repo in page.items:
                print(repo.full_name)
            if not page.page_info.has_next_page:
                print("done")
    """

    model_config = ConfigDict(frozen=True)

    items: tuple[Repository, ...] = Field(default=(), description="Repositories in this page")
    page_info: PageInfo = Field(default_factory=PageInfo, description="Continuation metadata")

    @classmethod
    def from_connection(cls, connection: RepositoryConnection) -> RepositoryPage:
        """Build a page from a GraphQL connection object."""
        return cls(items=connection.nodes, page_info=connection.page_info)
