"""Logging infrastructure.

Basic usage:
    from repo_pager.infra.logging import setup_logging, set_log_context
    import logging

    setup_logging()
    logger = logging.getLogger(__name__)

    set_log_context(owner="octocat")
    logger.info("Listing repositories")  # Automatically includes owner
"""

from repo_pager.infra.logging.config import configure_logging, setup_logging
from repo_pager.infra.logging.context import (
    ContextInjectingFilter,
    bind_log_context,
    clear_log_context,
    get_log_context,
    set_log_context,
)
from repo_pager.infra.logging.formatters import JSONFormatter

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "bind_log_context",
    "clear_log_context",
    "configure_logging",
    "get_log_context",
    "set_log_context",
    "setup_logging",
]
