"""Lazy, retrying pagination over a GitHub user's repositories."""

from repo_pager.core.exceptions import (
    ApplicationError,
    AuthError,
    PaginationError,
    RepoPagerError,
    RetryError,
    TransportError,
    TransportErrorKind,
)
from repo_pager.infra.external.github_client import GitHubGraphQLClient

__version__ = "0.1.0"

__all__ = [
    "ApplicationError",
    "AuthError",
    "GitHubGraphQLClient",
    "PaginationError",
    "RepoPagerError",
    "RetryError",
    "TransportError",
    "TransportErrorKind",
    "__version__",
]
