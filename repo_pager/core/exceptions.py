"""Custom exception classes for the GitHub GraphQL client."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence

    from repo_pager.infra.external.outcome import GraphQLErrorDetail


class RepoPagerError(Exception):
    """Base client exception.

    All custom exceptions should inherit from this class.

    Attributes:
        detail: Human-readable error message.
        type: Error type identifier.
        extra: Additional context-specific information about the error.

    Example:
            raise RepoPagerError(
            detail="Owner not found",
            type="owner-not-found",
            extra={"owner": "octocat"}
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "repo-pager-error",
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize client exception.

        Args:
            detail: Human-readable error message.
            type: Error type identifier.
            extra: Additional context about the error.
        """
        self.detail = detail
        self.type = type
        self.extra = extra or {}
        super().__init__(detail)


class TransportErrorKind(StrEnum):
    """Network or protocol level failure categories."""

    TIMEOUT = "timeout"
    CONNECTION = "connection"
    HTTP_STATUS = "http_status"
    DESERIALIZATION = "deserialization"


class TransportError(RepoPagerError):
    """Failure below the GraphQL layer (timeout, refused connection, bad body).

    Retryable up to the retry policy limit.

    Example:
            raise TransportError(
            kind=TransportErrorKind.HTTP_STATUS,
            detail="HTTP 502 from GraphQL endpoint",
            status_code=502,
        )
    """

    def __init__(
        self,
        kind: TransportErrorKind,
        detail: str,
        status_code: int | None = None,
        operation_name: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize transport error.

        Args:
            kind: Failure category.
            detail: Human-readable error message.
            status_code: HTTP status code, for ``http_status`` failures.
            operation_name: GraphQL operation that failed, when known.
            extra: Additional context about the error.
        """
        self.kind = kind
        self.status_code = status_code
        self.operation_name = operation_name
        merged = {"kind": str(kind)}
        if status_code is not None:
            merged["status_code"] = status_code
        if operation_name:
            merged["operation"] = operation_name
        merged.update(extra or {})
        super().__init__(detail=detail, type=f"transport-{kind}", extra=merged)


class RetryError(TransportError):
    """Exception raised when all retry attempts are exhausted."""

    def __init__(
        self,
        last_error: TransportError,
        attempts: int,
        operation_name: str,
    ) -> None:
        """Initialize retry error.

        Args:
            last_error: The final transport failure.
            attempts: Number of attempts made.
            operation_name: Operation the attempts belonged to.
        """
        self.last_error = last_error
        self.attempts = attempts
        super().__init__(
            kind=last_error.kind,
            detail=(
                f"{operation_name} failed after {attempts} attempts. "
                f"Last error: {last_error.detail}"
            ),
            status_code=last_error.status_code,
            operation_name=operation_name,
            extra={"attempts": attempts},
        )


class ApplicationError(RepoPagerError):
    """GraphQL errors returned by a normally completed request.

    Never retried. Carries every message of the batch.

    Example:
            raise ApplicationError(
            messages=["rate limited", "timeout in resolver"],
            operation_name="RepositoryConnection",
        )
    """

    def __init__(
        self,
        messages: Sequence[str],
        operation_name: str | None = None,
        errors: Sequence[GraphQLErrorDetail] | None = None,
    ) -> None:
        """Initialize application error.

        Args:
            messages: Every error message returned by the server.
            operation_name: GraphQL operation that failed, when known.
            errors: Structured error entries, when available.
        """
        self.messages = list(messages)
        self.errors = list(errors or [])
        self.operation_name = operation_name
        prefix = f"{operation_name}: " if operation_name else ""
        joined = "; ".join(self.messages) or "unknown GraphQL error"
        super().__init__(
            detail=f"{prefix}GraphQL returned {len(self.messages)} error(s): {joined}",
            type="graphql-errors",
            extra={"messages": self.messages, "operation": operation_name},
        )


class AuthError(RepoPagerError):
    """Missing or rejected bearer token.

    Kept apart from transport failures so callers can trigger re-authentication.
    """

    def __init__(
        self,
        detail: str = "GitHub token is missing or invalid",
        type: str = "unauthorized",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(detail=detail, type=type, extra=extra)


class PaginationError(RepoPagerError):
    """Server broke the cursor protocol (missing or repeated end cursor)."""

    def __init__(
        self,
        detail: str,
        owner: str,
        cursor: str | None = None,
    ) -> None:
        super().__init__(
            detail=detail,
            type="pagination-error",
            extra={"owner": owner, "cursor": cursor},
        )
