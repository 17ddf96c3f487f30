"""Credential providers for the GitHub GraphQL API."""

from repo_pager.infra.auth.credentials import (
    DEMO_AVATAR_URL,
    DEMO_USER_LOGIN,
    DEMO_USER_NAME,
    CredentialProvider,
    SettingsCredentialProvider,
    StaticCredentialProvider,
)

__all__ = [
    "DEMO_AVATAR_URL",
    "DEMO_USER_LOGIN",
    "DEMO_USER_NAME",
    "CredentialProvider",
    "SettingsCredentialProvider",
    "StaticCredentialProvider",
]
