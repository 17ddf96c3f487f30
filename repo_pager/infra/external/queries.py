"""Fixed GraphQL operations consumed from the GitHub API.

Each operation pairs the query text with the pydantic model that validates
the ``data`` member of the response. The continuation cursor is passed as a
typed ``$after`` variable; a null value starts at the beginning of the
collection.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from repo_pager.core.pagination.schemas import RepositoryConnection
from repo_pager.core.schemas import Repository, User, ViewerInfo

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True, slots=True)
class GraphQLOperation(Generic[ModelT]):
    """A named query and the model for its ``data`` payload."""

    name: str
    query: str
    response_model: type[ModelT]


class _ResponseData(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class ViewerLoginData(_ResponseData):
    viewer: ViewerInfo


class UserData(_ResponseData):
    user: User | None = None


class RepositoryData(_ResponseData):
    repository: Repository | None = None


class _RepositoryOwnerNode(_ResponseData):
    repositories: RepositoryConnection


class RepositoryConnectionData(_ResponseData):
    user: _RepositoryOwnerNode | None = None


_REPOSITORY_FIELDS = """
    name
    description
    forkCount
    url
    isFork
    owner {
      login
      avatarUrl
    }
    stargazers {
      totalCount
    }
"""

VIEWER_LOGIN = GraphQLOperation(
    name="ViewerLogin",
    query="""
query ViewerLogin {
  viewer {
    login
    name
    avatarUrl
  }
}
""",
    response_model=ViewerLoginData,
)

USER = GraphQLOperation(
    name="User",
    query="""
query User($login: String!) {
  user(login: $login) {
    login
    name
    avatarUrl
    company
    createdAt
    followers {
      totalCount
    }
    gists {
      totalCount
    }
    repositories {
      totalCount
    }
  }
}
""",
    response_model=UserData,
)

REPOSITORY = GraphQLOperation(
    name="Repository",
    query=f"""
query Repository($owner: String!, $name: String!, $issuesCount: Int!) {{
  repository(owner: $owner, name: $name) {{{_REPOSITORY_FIELDS}
    issues(first: $issuesCount, orderBy: {{field: CREATED_AT, direction: DESC}}) {{
      totalCount
      nodes {{
        title
        body
        createdAt
        closedAt
        state
      }}
    }}
  }}
}}
""",
    response_model=RepositoryData,
)

REPOSITORY_CONNECTION = GraphQLOperation(
    name="RepositoryConnection",
    query=f"""
query RepositoryConnection($login: String!, $first: Int!, $after: String) {{
  user(login: $login) {{
    repositories(first: $first, after: $after, orderBy: {{field: NAME, direction: ASC}}) {{
      totalCount
      nodes {{{_REPOSITORY_FIELDS}
        issues(states: OPEN) {{
          totalCount
        }}
      }}
      pageInfo {{
        endCursor
        hasNextPage
      }}
    }}
  }}
}}
""",
    response_model=RepositoryConnectionData,
)

__all__ = [
    "REPOSITORY",
    "REPOSITORY_CONNECTION",
    "USER",
    "VIEWER_LOGIN",
    "GraphQLOperation",
    "RepositoryConnectionData",
    "RepositoryData",
    "UserData",
    "ViewerLoginData",
]
