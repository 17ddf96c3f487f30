"""Context management for structured logging.

Provides automatic context injection into log records using contextvars,
so fields such as the repository owner being paginated appear on every log
line emitted while that work is in progress.

This approach is:
- Async-safe: Works correctly across async/await boundaries
- Implicit: No need to modify existing logging calls
- Compatible: Works with standard Python logging
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

# Each async task gets its own copy automatically
_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


def set_log_context(**kwargs: Any) -> None:
    """Set logging context for current async task/thread.

    Args:
        **kwargs: Key-value pairs to add to logging context.

    Example:
        ```python
        set_log_context(owner="octocat")
        logger.info("Fetching page")  # Includes owner
        ```
    """
    current = _log_context.get().copy()
    current.update(kwargs)
    _log_context.set(current)


def get_log_context() -> dict[str, Any]:
    """Get current logging context.

    Returns:
        Dictionary of current context key-value pairs.
    """
    return _log_context.get().copy()


def clear_log_context() -> None:
    """Clear all logging context for current async task/thread."""
    _log_context.set({})


@contextmanager
def bind_log_context(**kwargs: Any) -> Iterator[None]:
    """Add context for the duration of a block, then restore the previous context.

    Example:
        ```python
        with bind_log_context(owner="octocat", page=2):
            await fetcher.fetch_page("octocat", cursor, 100)
        ```
    """
    current = _log_context.get().copy()
    current.update(kwargs)
    token = _log_context.set(current)
    try:
        yield
    finally:
        _log_context.reset(token)


class ContextInjectingFilter(logging.Filter):
    """Logging filter that automatically injects context into LogRecord.

    Applied to the root logger's handlers so every logger benefits.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject context into log record.

        Args:
            record: The log record to enhance with context.

        Returns:
            True (always allow the record to be logged).
        """
        for key, value in _log_context.get().items():
            # Don't overwrite existing attributes
            if not hasattr(record, key):
                setattr(record, key, value)

        return True
