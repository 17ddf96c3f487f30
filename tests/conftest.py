"""Pytest configuration and shared fixtures.

Organization:
    - Environment Fixtures: isolate tests from the developer's GITHUB_/LOG_ env
    - Client Fixtures: credentials, fetchers and engines wired to fakes
    - HTTP Fixtures: httpx.MockTransport-backed clients
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from repo_pager.core.pagination.engine import PaginationEngine
from repo_pager.core.pagination.fetcher import PageFetcher
from repo_pager.core.settings import clear_all_caches
from repo_pager.infra.auth.credentials import StaticCredentialProvider
from repo_pager.infra.demo import DemoRepositoryFactory
from repo_pager.infra.logging import config as logging_config
from repo_pager.infra.logging.context import clear_log_context
from repo_pager.utils.retry import RetryStrategy

# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Run every test without ambient GITHUB_*/LOG_* variables or .env file."""
    for key in list(os.environ):
        if key.startswith(("GITHUB_", "LOG_")):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    clear_all_caches()
    clear_log_context()
    yield
    clear_all_caches()
    clear_log_context()


@pytest.fixture(autouse=True)
def restore_logging(monkeypatch):
    """Undo any dictConfig applied by a test (CLI runs configure logging)."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    monkeypatch.setattr(logging_config, "_LOGGING_INITIALIZED", False)
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


# ============================================================================
# Client Fixtures
# ============================================================================


@pytest.fixture
def no_backoff() -> RetryStrategy:
    """Retry strategy with zero delays."""
    return RetryStrategy(initial_delay=0.0, max_delay=0.0)


@pytest.fixture
def credentials() -> StaticCredentialProvider:
    return StaticCredentialProvider("test-token")


@pytest.fixture
def make_engine(credentials, no_backoff) -> Callable[..., PaginationEngine]:
    """Build a PaginationEngine around any executor.

    Example:
        def test_something(make_engine):
            engine = make_engine(ScriptedExecutor([...]), page_size=2)
    """

    def _make(
        executor: Any,
        page_size: int = 100,
        creds: Any = None,
        num_retries: int = 2,
        demo_count: int = 5,
    ) -> PaginationEngine:
        creds = creds or credentials
        fetcher = PageFetcher(
            executor=executor,
            credentials=creds,
            num_retries=num_retries,
            strategy=no_backoff,
        )
        return PaginationEngine(
            fetcher=fetcher,
            credentials=creds,
            page_size=page_size,
            demo_factory=DemoRepositoryFactory(count=demo_count, seed=7),
        )

    return _make


# ============================================================================
# HTTP Fixtures
# ============================================================================


class RecordingHandler:
    """MockTransport handler replaying canned responses and recording requests."""

    def __init__(self, responses: list[Any]) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response()
        return response

    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]


@pytest.fixture
def mock_http() -> Callable[[list[Any]], tuple[httpx.AsyncClient, RecordingHandler]]:
    """Create an httpx.AsyncClient whose responses come from a list.

    Entries are ``httpx.Response`` objects, exceptions to raise, or
    zero-argument callables building the response at request time.
    """

    def _make(responses: list[Any]) -> tuple[httpx.AsyncClient, RecordingHandler]:
        handler = RecordingHandler(responses)
        return httpx.AsyncClient(transport=httpx.MockTransport(handler)), handler

    return _make
