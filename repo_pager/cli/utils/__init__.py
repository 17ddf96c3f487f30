"""CLI utilities for running async operations and formatting output."""

from repo_pager.cli.utils.async_runner import coro
from repo_pager.cli.utils.formatters import (
    error,
    header,
    info,
    repository_line,
    success,
)

__all__ = [
    "coro",
    "error",
    "header",
    "info",
    "repository_line",
    "success",
]
