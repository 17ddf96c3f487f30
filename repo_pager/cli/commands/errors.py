"""Map client exceptions to CLI exit codes."""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import TypeVar

import click

from repo_pager.cli.utils import error
from repo_pager.core.exceptions import AuthError, RepoPagerError

T = TypeVar("T")

EXIT_FAILURE = 1
EXIT_AUTH = 2


def handle_errors(f: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """Report client errors on stderr and exit non-zero.

    ``AuthError`` exits with 2 so scripts can prompt for a new token.
    """

    @wraps(f)
    async def wrapper(*args, **kwargs) -> T:
        try:
            return await f(*args, **kwargs)
        except AuthError as e:
            error(e.detail)
            raise click.exceptions.Exit(EXIT_AUTH) from e
        except RepoPagerError as e:
            error(e.detail)
            raise click.exceptions.Exit(EXIT_FAILURE) from e

    return wrapper
