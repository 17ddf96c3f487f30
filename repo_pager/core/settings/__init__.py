"""Pydantic Settings v2 configuration.

Import settings via cached loaders:
    from repo_pager.core.settings import get_github_settings

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file
"""

from __future__ import annotations

from .github import GitHubSettings
from .loader import clear_all_caches, get_github_settings, get_logging_settings
from .logs import LoggingSettings

__all__ = [
    "GitHubSettings",
    "LoggingSettings",
    "clear_all_caches",
    "get_github_settings",
    "get_logging_settings",
]
