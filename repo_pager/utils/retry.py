"""Retry and backoff for GraphQL operations.

Transport failures are retried with exponential backoff; GraphQL errors and
authentication failures are fatal on the first occurrence, because resending
the same query will not change the server's answer.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from repo_pager.core.exceptions import ApplicationError, RetryError
from repo_pager.infra.external.outcome import (
    GraphQLData,
    GraphQLErrors,
    GraphQLOutcome,
    TransportFailure,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_NUM_RETRIES = 2


class RetryStrategy:
    """Exponential backoff schedule."""

    def __init__(
        self,
        initial_delay: float = 1.0,
        max_delay: float = 10.0,
        exponential_base: float = 2.0,
    ) -> None:
        """Initialize retry strategy.

        Args:
            initial_delay: Delay in seconds before the first retry.
            max_delay: Maximum delay in seconds between retries.
            exponential_base: Base for exponential backoff calculation.
        """
        self.initial_delay = initial_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base

    def calculate_delay(self, attempt: int) -> float:
        """Calculate delay after the given failed attempt.

        No jitter is applied, so the delay never decreases as ``attempt`` grows.

        Args:
            attempt: Current attempt number (0-indexed).

        Returns:
            Delay in seconds.
        """
        # Exponential backoff: initial_delay * (exponential_base ^ attempt)
        return min(self.initial_delay * (self.exponential_base**attempt), self.max_delay)


@dataclass
class RetryContext:
    """Attempt bookkeeping for one ``run_with_retry`` call."""

    operation_name: str
    max_attempts: int
    attempts_made: int = 0

    @property
    def exhausted(self) -> bool:
        return self.attempts_made >= self.max_attempts


async def run_with_retry(
    op: Callable[[], Awaitable[GraphQLOutcome[T]]],
    *,
    operation_name: str,
    num_retries: int = DEFAULT_NUM_RETRIES,
    strategy: RetryStrategy | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Run a GraphQL request, retrying transport failures.

    Args:
        op: Zero-argument coroutine factory performing one request.
        operation_name: Name used in logs and in the raised error.
        num_retries: Retries after the first attempt (2 means up to 3 tries).
        strategy: Backoff schedule. Defaults to ``RetryStrategy()``.
        sleep: Awaitable sleep, replaceable in tests.

    Returns:
        The payload of the first ``GraphQLData`` outcome.

    Raises:
        ApplicationError: On the first ``GraphQLErrors`` outcome, with every message.
        RetryError: When every attempt ended in a transport failure.
        AuthError: Propagated unchanged from ``op``.

    Example:
        ```python
        viewer = await run_with_retry(
            lambda: client.execute(VIEWER_LOGIN, {}, token),
            operation_name="ViewerLogin",
        )
        ```
    """
    if num_retries < 0:
        raise ValueError("num_retries must be >= 0")

    strategy = strategy or RetryStrategy()
    context = RetryContext(operation_name=operation_name, max_attempts=num_retries + 1)

    while True:
        outcome = await op()
        context.attempts_made += 1

        if isinstance(outcome, GraphQLData):
            return outcome.data

        if isinstance(outcome, GraphQLErrors):
            raise ApplicationError(
                messages=outcome.messages,
                operation_name=operation_name,
                errors=outcome.errors,
            )

        if not isinstance(outcome, TransportFailure):
            raise TypeError(f"Unexpected outcome type: {type(outcome).__name__}")

        error = outcome.error
        if context.exhausted:
            logger.error(
                f"All retry attempts exhausted for {operation_name}",
                extra={
                    "operation": operation_name,
                    "attempts": context.attempts_made,
                    "last_exception": error.detail,
                },
            )
            raise RetryError(
                last_error=error,
                attempts=context.attempts_made,
                operation_name=operation_name,
            ) from error

        delay = strategy.calculate_delay(context.attempts_made - 1)
        logger.warning(
            f"Retrying {operation_name} after {delay:.2f}s "
            f"(attempt {context.attempts_made}/{context.max_attempts})",
            extra={
                "operation": operation_name,
                "attempt": context.attempts_made,
                "max_attempts": context.max_attempts,
                "delay": delay,
                "exception": error.detail,
            },
        )
        await sleep(delay)


__all__ = [
    "DEFAULT_NUM_RETRIES",
    "RetryContext",
    "RetryStrategy",
    "run_with_retry",
]
