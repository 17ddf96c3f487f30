"""Base GraphQL client for the GitHub API.

Provides a single-shot request executor with:
- Connection pooling
- Bearer token authentication per call
- Request/response logging
- Timeout configuration
- Classification of every failure into a GraphQL outcome

There is no retry logic here; see ``repo_pager.utils.retry``.
"""

from __future__ import annotations

import logging
import time
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from repo_pager.core.exceptions import AuthError, TransportError, TransportErrorKind
from repo_pager.infra.external.outcome import (
    GraphQLData,
    GraphQLErrorDetail,
    GraphQLErrors,
    GraphQLOutcome,
    TransportFailure,
)
from repo_pager.infra.external.queries import GraphQLOperation

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseGraphQLClient:
    """Base GraphQL client for the GitHub API.

    Executes one GraphQL operation per call and reports the result as a
    ``GraphQLOutcome`` instead of raising, so that callers can decide what to
    retry. Only a missing or rejected token raises (``AuthError``).

    Example:
        ```python
        async with BaseGraphQLClient("https://api.github.com/graphql") as client:
            outcome = await client.execute(VIEWER_LOGIN, {}, token)
            if isinstance(outcome, GraphQLData):
                print(outcome.data.viewer.login)
        ```
    """

    def __init__(
        self,
        endpoint: str,
        timeout: float = 30.0,
        user_agent: str = "repo-pager/0.1.0",
        headers: dict[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize GraphQL client.

        Args:
            endpoint: GraphQL endpoint URL.
            timeout: Request timeout in seconds.
            user_agent: User-Agent header value.
            headers: Default headers to include in all requests.
            client: Pre-built httpx client to borrow instead of creating one.
                A borrowed client is not closed by ``close()``.
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self.default_headers = {
            "User-Agent": user_agent,
            "Accept": "application/json",
            **(headers or {}),
        }
        self._owns_client = client is None

        # Create async client with connection pooling
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers=self.default_headers,
            limits=httpx.Limits(
                max_keepalive_connections=10,
                max_connections=20,
            ),
        )

    async def close(self) -> None:
        """Close the HTTP client and release connections."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> BaseGraphQLClient:
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager and close client."""
        await self.close()

    async def execute(
        self,
        operation: GraphQLOperation[ModelT],
        variables: dict[str, Any],
        token: str,
    ) -> GraphQLOutcome[ModelT]:
        """Execute one GraphQL operation.

        Args:
            operation: Operation to run.
            variables: Variables matching the operation's signature.
            token: Bearer token.

        Returns:
            ``GraphQLData`` with the validated payload, ``GraphQLErrors`` when the
            server reported errors, or ``TransportFailure`` for anything below the
            GraphQL layer.

        Raises:
            AuthError: If the token is empty or the server answers 401.
        """
        if not token:
            raise AuthError(
                detail=f"No token available for {operation.name}",
                extra={"operation": operation.name},
            )

        body = {
            "query": operation.query,
            "variables": variables,
            "operationName": operation.name,
        }
        headers = {**self.default_headers, "Authorization": f"bearer {token}"}

        logger.debug(
            f"GraphQL request {operation.name} to {self.endpoint}",
            extra={"operation": operation.name, "variables": variables},
        )

        start = time.perf_counter()
        try:
            response = await self.client.post(self.endpoint, json=body, headers=headers)
        except httpx.TimeoutException as e:
            return self._failure(operation, TransportErrorKind.TIMEOUT, f"Request timed out: {e}")
        except httpx.TransportError as e:
            return self._failure(
                operation, TransportErrorKind.CONNECTION, f"Connection failed: {e!r}"
            )
        except httpx.DecodingError as e:
            return self._failure(
                operation,
                TransportErrorKind.DESERIALIZATION,
                f"Response body could not be decoded: {e}",
            )
        except httpx.RequestError as e:
            # TooManyRedirects and other request failures outside TransportError
            return self._failure(operation, TransportErrorKind.CONNECTION, f"Request failed: {e!r}")

        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"GraphQL response {operation.name} from {self.endpoint}",
            extra={
                "operation": operation.name,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )

        if response.status_code == httpx.codes.UNAUTHORIZED:
            raise AuthError(
                detail=f"GitHub rejected the token for {operation.name}",
                extra={"operation": operation.name, "status_code": response.status_code},
            )
        if response.status_code >= 400:
            return self._failure(
                operation,
                TransportErrorKind.HTTP_STATUS,
                f"HTTP {response.status_code} from GraphQL endpoint",
                status_code=response.status_code,
            )

        return self._parse(operation, response)

    def _parse(
        self, operation: GraphQLOperation[ModelT], response: httpx.Response
    ) -> GraphQLOutcome[ModelT]:
        """Turn a 2xx response body into an outcome."""
        try:
            payload = response.json()
        except ValueError as e:
            return self._failure(
                operation, TransportErrorKind.DESERIALIZATION, f"Response is not JSON: {e}"
            )

        if not isinstance(payload, dict):
            return self._failure(
                operation,
                TransportErrorKind.DESERIALIZATION,
                f"Expected a JSON object, got {type(payload).__name__}",
            )

        # Errors win over a partial data payload
        errors = payload.get("errors")
        if errors:
            details = tuple(
                GraphQLErrorDetail.from_payload(entry)
                for entry in (errors if isinstance(errors, list) else [errors])
            )
            logger.warning(
                f"GraphQL errors in {operation.name}",
                extra={"operation": operation.name, "messages": [d.message for d in details]},
            )
            return GraphQLErrors(errors=details)

        data = payload.get("data")
        if data is None:
            return self._failure(
                operation, TransportErrorKind.DESERIALIZATION, "Response has neither data nor errors"
            )

        try:
            model = operation.response_model.model_validate(data)
        except ValidationError as e:
            return self._failure(
                operation,
                TransportErrorKind.DESERIALIZATION,
                f"Unexpected {operation.name} payload: {e.error_count()} validation error(s)",
            )
        return GraphQLData(data=model)

    def _failure(
        self,
        operation: GraphQLOperation[Any],
        kind: TransportErrorKind,
        detail: str,
        status_code: int | None = None,
    ) -> TransportFailure:
        logger.warning(
            f"Transport failure in {operation.name}: {detail}",
            extra={"operation": operation.name, "kind": str(kind), "status_code": status_code},
        )
        return TransportFailure(
            error=TransportError(
                kind=kind,
                detail=detail,
                status_code=status_code,
                operation_name=operation.name,
            )
        )
