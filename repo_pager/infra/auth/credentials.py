"""Bearer token providers.

The pagination engine asks its provider for a token at the start of every
fetch, so a provider may refresh or rotate the token between pages.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from repo_pager.core.exceptions import AuthError
from repo_pager.core.settings import GitHubSettings, get_github_settings

logger = logging.getLogger(__name__)

DEMO_USER_LOGIN = "GitTrendsDemo"
DEMO_USER_NAME = "Demo User"
DEMO_AVATAR_URL = "https://avatars.githubusercontent.com/u/0?v=4"


@runtime_checkable
class CredentialProvider(Protocol):
    """Source of bearer tokens and of the demo identity flag."""

    async def get_token(self) -> str:
        """Return the token to use for the next request."""
        ...

    def is_demo_identity(self) -> bool:
        """Whether the current identity is the offline demo user."""
        ...


class StaticCredentialProvider:
    """Provider holding a fixed token.

    Example:
        ```python
        credentials = StaticCredentialProvider("ghp_xxx")
        demo = StaticCredentialProvider(demo=True)
        ```
    """

    def __init__(self, token: str | None = None, demo: bool = False) -> None:
        self._token = token or ""
        self._demo = demo

    async def get_token(self) -> str:
        if not self._token:
            raise AuthError(detail="No GitHub token configured")
        return self._token

    def is_demo_identity(self) -> bool:
        return self._demo


class SettingsCredentialProvider:
    """Provider backed by ``GitHubSettings``.

    Re-reads settings on every call; with the default cached loader a token
    change takes effect after ``clear_all_caches()``.
    """

    def __init__(self, settings: GitHubSettings | None = None) -> None:
        self._settings = settings

    @property
    def settings(self) -> GitHubSettings:
        return self._settings or get_github_settings()

    async def get_token(self) -> str:
        settings = self.settings
        if not settings.has_token:
            raise AuthError(
                detail="GITHUB_TOKEN is not set",
                extra={"hint": "export GITHUB_TOKEN or enable GITHUB_DEMO_MODE"},
            )
        return settings.token.get_secret_value()  # type: ignore[union-attr]

    def is_demo_identity(self) -> bool:
        return self.settings.demo_mode
