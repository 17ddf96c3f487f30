"""Result types for a single GraphQL request.

A request ends in exactly one of three ways:

- ``GraphQLData``: the server answered with a payload and no errors.
- ``GraphQLErrors``: the request completed but GraphQL reported errors.
- ``TransportFailure``: the request never produced a usable GraphQL response
  (timeout, connection failure, HTTP error status, undecodable body).

Keeping these apart lets the retry policy retry transport failures while
surfacing GraphQL errors immediately.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from repo_pager.core.exceptions import TransportError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class GraphQLErrorDetail:
    """One entry of a GraphQL ``errors`` array."""

    message: str
    type: str | None = None
    path: tuple[str | int, ...] = ()

    @classmethod
    def from_payload(cls, payload: Any) -> GraphQLErrorDetail:
        """Parse an error entry, tolerating non-object entries."""
        if not isinstance(payload, dict):
            return cls(message=str(payload))
        path = payload.get("path") or ()
        return cls(
            message=str(payload.get("message", "unknown error")),
            type=payload.get("type"),
            path=tuple(path) if isinstance(path, list) else (),
        )


@dataclass(frozen=True, slots=True)
class GraphQLData(Generic[T]):
    """Successful response payload."""

    data: T


@dataclass(frozen=True, slots=True)
class GraphQLErrors:
    """Application-level GraphQL errors."""

    errors: tuple[GraphQLErrorDetail, ...] = field(default_factory=tuple)

    @property
    def messages(self) -> list[str]:
        return [error.message for error in self.errors]


@dataclass(frozen=True, slots=True)
class TransportFailure:
    """Network or protocol level failure."""

    error: TransportError


GraphQLOutcome = GraphQLData[T] | GraphQLErrors | TransportFailure

__all__ = [
    "GraphQLData",
    "GraphQLErrorDetail",
    "GraphQLErrors",
    "GraphQLOutcome",
    "TransportFailure",
]
