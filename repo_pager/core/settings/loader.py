"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the process.

Usage:
    from repo_pager.core.settings.loader import get_github_settings

    settings = get_github_settings()  # First call: loads and validates
    settings = get_github_settings()  # Subsequent calls: returns cached instance

Testing:
    In tests, clear the cache to force reload:
    clear_all_caches()

    Or override with custom values:
    settings = GitHubSettings(token="test", page_size=10)
"""

from __future__ import annotations

from functools import lru_cache

from .github import GitHubSettings
from .logs import LoggingSettings


@lru_cache(maxsize=1)
def get_github_settings() -> GitHubSettings:
    """Get cached GitHub API settings.

    Returns:
        Validated and frozen GitHubSettings instance.
    """
    return GitHubSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings.

    Returns:
        Validated and frozen LoggingSettings instance.
    """
    return LoggingSettings()


def clear_all_caches() -> None:
    """Clear all settings caches.

    Useful for testing or when you need to force reload settings.
    """
    get_github_settings.cache_clear()
    get_logging_settings.cache_clear()
