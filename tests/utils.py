"""Test utilities and helper functions.

Builders for GraphQL payloads and outcomes, a scripted request executor and
an in-memory paginated repository collection.

Usage:
    from tests.utils import ScriptedExecutor, connection_outcome

    executor = ScriptedExecutor([connection_outcome(["a", "b"], end_cursor="c1", has_next_page=True)])
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from repo_pager.core.exceptions import TransportError, TransportErrorKind
from repo_pager.infra.external.outcome import (
    GraphQLData,
    GraphQLErrorDetail,
    GraphQLErrors,
    GraphQLOutcome,
    TransportFailure,
)
from repo_pager.infra.external.queries import GraphQLOperation, RepositoryConnectionData

# ============================================================================
# Payload builders
# ============================================================================


def repository_node(name: str, owner: str = "octocat", stars: int = 0) -> dict[str, Any]:
    """GraphQL ``Repository`` node as GitHub returns it."""
    return {
        "name": name,
        "description": f"{name} description",
        "forkCount": 1,
        "url": f"https://github.com/{owner}/{name}",
        "isFork": False,
        "owner": {"login": owner, "avatarUrl": f"https://avatars.example/{owner}"},
        "stargazers": {"totalCount": stars},
        "issues": {"totalCount": 2},
    }


def connection_payload(
    names: Sequence[str],
    end_cursor: str | None,
    has_next_page: bool,
    owner: str = "octocat",
) -> dict[str, Any]:
    """``data`` member of a RepositoryConnection response."""
    return {
        "user": {
            "repositories": {
                "totalCount": len(names),
                "nodes": [repository_node(name, owner) for name in names],
                "pageInfo": {"endCursor": end_cursor, "hasNextPage": has_next_page},
            }
        }
    }


def connection_outcome(
    names: Sequence[str],
    end_cursor: str | None = None,
    has_next_page: bool = False,
) -> GraphQLData[RepositoryConnectionData]:
    return GraphQLData(
        data=RepositoryConnectionData.model_validate(
            connection_payload(names, end_cursor, has_next_page)
        )
    )


def errors_outcome(*messages: str) -> GraphQLErrors:
    return GraphQLErrors(errors=tuple(GraphQLErrorDetail(message=m) for m in messages))


def transport_outcome(
    kind: TransportErrorKind = TransportErrorKind.TIMEOUT,
    detail: str = "timed out",
) -> TransportFailure:
    return TransportFailure(error=TransportError(kind=kind, detail=detail))


# ============================================================================
# Fakes
# ============================================================================


class ScriptedExecutor:
    """Request executor replaying a fixed list of outcomes.

    Entries may be outcomes, exceptions (raised), or callables taking the
    variables dict and returning an outcome.
    """

    def __init__(self, outcomes: Sequence[Any]) -> None:
        self.outcomes = list(outcomes)
        self.calls: list[tuple[str, dict[str, Any], str]] = []

    async def execute(
        self,
        operation: GraphQLOperation[Any],
        variables: dict[str, Any],
        token: str,
    ) -> GraphQLOutcome[Any]:
        self.calls.append((operation.name, dict(variables), token))
        if not self.outcomes:
            raise AssertionError(f"Unexpected extra call to {operation.name}")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        if callable(outcome):
            return outcome(variables)
        return outcome


class InMemoryRepositoryCollection:
    """Stable remote collection served in cursor-addressed slices.

    Cursors are opaque strings ``"cursor:<index>"`` pointing past the last
    item of the page they end.
    """

    def __init__(self, names: Sequence[str]) -> None:
        self.names = list(names)

    def __call__(self, variables: dict[str, Any]) -> GraphQLData[RepositoryConnectionData]:
        after = variables.get("after")
        start = int(after.split(":", 1)[1]) if after else 0
        end = start + variables["first"]
        chunk = self.names[start:end]
        has_next = end < len(self.names)
        return connection_outcome(chunk, end_cursor=f"cursor:{end}" if chunk else None, has_next_page=has_next)

    def executor(self, pages: int) -> ScriptedExecutor:
        """Executor answering ``pages`` requests from this collection."""
        return ScriptedExecutor([self] * pages)


class RotatingCredentials:
    """Credential provider handing out a new token on every call."""

    def __init__(self, demo: bool = False) -> None:
        self.calls = 0
        self.demo = demo

    async def get_token(self) -> str:
        self.calls += 1
        return f"token-{self.calls}"

    def is_demo_identity(self) -> bool:
        return self.demo


class RecordingSleep:
    """Replacement for ``asyncio.sleep`` that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
