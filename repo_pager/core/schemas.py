"""GitHub GraphQL object models.

Field aliases follow the GraphQL schema (camelCase); Python code uses the
snake_case names. All models are frozen: a page handed to a consumer is never
mutated afterwards.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GitHubModel(BaseModel):
    """Base for models parsed from GraphQL payloads."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class RepositoryOwner(GitHubModel):
    """Owner of a repository."""

    login: str
    avatar_url: str | None = None


class Issue(GitHubModel):
    """Repository issue."""

    title: str
    body: str | None = None
    created_at: datetime | None = None
    closed_at: datetime | None = None
    state: str | None = None


class IssuesConnection(GitHubModel):
    """Issue count plus the first page of issue nodes."""

    total_count: int = 0
    nodes: tuple[Issue, ...] = ()


class StarGazers(GitHubModel):
    """Stargazer count."""

    total_count: int = 0


class Repository(GitHubModel):
    """A repository record as returned by the repository queries."""

    name: str
    description: str | None = None
    fork_count: int = 0
    owner: RepositoryOwner
    issues: IssuesConnection = Field(default_factory=IssuesConnection)
    url: str | None = None
    stargazers: StarGazers = Field(default_factory=StarGazers)
    is_fork: bool = False

    @property
    def full_name(self) -> str:
        """``owner/name`` form."""
        return f"{self.owner.login}/{self.name}"


class CountConnection(GitHubModel):
    """Connection queried only for its size."""

    total_count: int = 0


class User(GitHubModel):
    """GitHub user profile."""

    login: str
    name: str | None = None
    avatar_url: str | None = None
    company: str | None = None
    created_at: datetime | None = None
    followers: CountConnection = Field(default_factory=CountConnection)
    gists: CountConnection = Field(default_factory=CountConnection)
    repositories: CountConnection = Field(default_factory=CountConnection)


class ViewerInfo(GitHubModel):
    """Login, display name and avatar of the authenticated user."""

    login: str
    name: str | None = None
    avatar_url: str | None = None
