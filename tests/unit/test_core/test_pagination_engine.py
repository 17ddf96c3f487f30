"""Unit tests for the repository pagination engine."""
from __future__ import annotations

import asyncio

import pytest

from repo_pager.core.exceptions import (
    ApplicationError,
    AuthError,
    PaginationError,
    RetryError,
    TransportError,
)
from repo_pager.infra.auth.credentials import DEMO_USER_LOGIN, StaticCredentialProvider
from tests.utils import (
    InMemoryRepositoryCollection,
    RotatingCredentials,
    ScriptedExecutor,
    connection_outcome,
    errors_outcome,
    transport_outcome,
)

NAMES = [f"repo-{i:02d}" for i in range(23)]


@pytest.mark.unit
class TestPaginationToExhaustion:
    """Draining a session returns every repository exactly once."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page_size", [1, 2, 5, 22, 23, 24, 100])
    async def test_all_items_once_for_any_page_size(self, make_engine, page_size):
        """Test that draining a session returns every repository exactly once."""
        collection = InMemoryRepositoryCollection(NAMES)
        expected_pages = max(1, -(-len(NAMES) // page_size))
        executor = collection.executor(expected_pages)
        engine = make_engine(executor, page_size=page_size)

        pages = [page async for page in engine.start("octocat")]

        names = [repo.name for page in pages for repo in page.items]
        assert len(names) == sum(len(page.items) for page in pages)
        assert names == NAMES
        assert len(set(names)) == len(names)
        assert len(pages) == expected_pages
        assert len(executor.calls) == expected_pages

    @pytest.mark.asyncio
    async def test_cursor_chain_is_passed_forward(self, make_engine):
        """Test that each request carries the previous page's end cursor."""
        executor = ScriptedExecutor(
            [
                connection_outcome(["a"], end_cursor="c1", has_next_page=True),
                connection_outcome(["b"], end_cursor="c2", has_next_page=True),
                connection_outcome(["c"], end_cursor="c3", has_next_page=False),
            ]
        )
        engine = make_engine(executor, page_size=1)

        await engine.collect("octocat")

        assert [call[1]["after"] for call in executor.calls] == [None, "c1", "c2"]
        assert all(call[1]["login"] == "octocat" for call in executor.calls)
        assert all(call[1]["first"] == 1 for call in executor.calls)

    @pytest.mark.asyncio
    async def test_single_page_terminates_immediately(self, make_engine):
        """Test that a page without a next page ends the session."""
        executor = ScriptedExecutor([connection_outcome(["only"], end_cursor="c1", has_next_page=False)])
        engine = make_engine(executor)
        session = engine.start("octocat")

        pages = [page async for page in session]

        assert len(pages) == 1
        assert session.state.is_exhausted
        assert session.state.current_cursor is None
        assert len(executor.calls) == 1
        # Further iteration does not fetch again
        with pytest.raises(StopAsyncIteration):
            await session.__anext__()
        assert len(executor.calls) == 1

    @pytest.mark.asyncio
    async def test_last_page_has_no_next_page(self, make_engine):
        """Test that only the final page reports has_next_page=False."""
        executor = InMemoryRepositoryCollection(NAMES).executor(3)
        engine = make_engine(executor, page_size=10)

        pages = [page async for page in engine.start("octocat")]

        assert [p.page_info.has_next_page for p in pages] == [True, True, False]

    @pytest.mark.asyncio
    async def test_empty_collection_yields_one_empty_page(self, make_engine):
        """Test that an empty collection yields a single empty page."""
        executor = ScriptedExecutor([connection_outcome([], end_cursor=None, has_next_page=False)])
        engine = make_engine(executor)

        pages = [page async for page in engine.start("octocat")]

        assert len(pages) == 1
        assert pages[0].items == ()


@pytest.mark.unit
class TestLaziness:
    """Pages are fetched one at a time, on demand."""

    @pytest.mark.asyncio
    async def test_no_prefetch_before_consumer_asks(self, make_engine):
        """Test that no request is made until the consumer asks for a page."""
        executor = InMemoryRepositoryCollection(NAMES).executor(3)
        engine = make_engine(executor, page_size=10)
        session = engine.start("octocat")

        assert executor.calls == []
        first = await session.__anext__()
        assert len(first.items) == 10
        assert len(executor.calls) == 1

    @pytest.mark.asyncio
    async def test_consumer_can_stop_after_first_page(self, make_engine):
        """Test that breaking after the first page costs one request."""
        executor = InMemoryRepositoryCollection(NAMES).executor(3)
        engine = make_engine(executor, page_size=10)

        async for _page in engine.start("octocat"):
            break

        assert len(executor.calls) == 1

    @pytest.mark.asyncio
    async def test_closed_session_stops_without_fetching(self, make_engine):
        """Test that a closed session ends iteration without fetching."""
        executor = InMemoryRepositoryCollection(NAMES).executor(3)
        session = make_engine(executor, page_size=10).start("octocat")

        await session.__anext__()
        await session.aclose()

        assert [page async for page in session] == []
        assert len(executor.calls) == 1

    @pytest.mark.asyncio
    async def test_explicit_zero_page_size_is_rejected(self, make_engine):
        """Test that page_size=0 is passed through and rejected, not replaced by the default."""
        executor = InMemoryRepositoryCollection(NAMES).executor(1)
        session = make_engine(executor, page_size=10).start("octocat", page_size=0)

        assert session.page_size == 0
        with pytest.raises(ValueError, match="page_size"):
            await session.__anext__()
        assert executor.calls == []

    @pytest.mark.asyncio
    async def test_token_requested_for_every_page(self, make_engine):
        """Test that a fresh token is requested for every page."""
        creds = RotatingCredentials()
        executor = InMemoryRepositoryCollection(NAMES).executor(3)
        engine = make_engine(executor, page_size=10, creds=creds)

        await engine.collect("octocat")

        assert [call[2] for call in executor.calls] == ["token-1", "token-2", "token-3"]

    @pytest.mark.asyncio
    async def test_sessions_are_independent(self, make_engine):
        """Test that two sessions keep separate cursor state."""
        collection = InMemoryRepositoryCollection(NAMES)
        engine = make_engine(collection.executor(6), page_size=10)

        first = engine.start("octocat")
        second = engine.start("octocat")
        await first.__anext__()

        assert first.state.current_cursor == "cursor:10"
        assert second.state.current_cursor is None
        assert len((await second.__anext__()).items) == 10


@pytest.mark.unit
class TestRetriesInsideSession:
    """Transport failures are retried; other errors end the session."""

    @pytest.mark.asyncio
    async def test_transient_failure_is_invisible_to_consumer(self, make_engine):
        """Test that a retried transport failure is not seen by the consumer."""
        executor = ScriptedExecutor(
            [
                transport_outcome(),
                connection_outcome(["a", "b"], end_cursor="c1", has_next_page=False),
            ]
        )
        engine = make_engine(executor)

        pages = [page async for page in engine.start("octocat")]

        assert [repo.name for repo in pages[0].items] == ["a", "b"]
        assert len(executor.calls) == 2

    @pytest.mark.asyncio
    async def test_exhausted_retries_raise_one_transport_error_and_stop(self, make_engine):
        """Test that exhausted retries raise once and close the session."""
        executor = ScriptedExecutor(
            [
                connection_outcome(["a"], end_cursor="c1", has_next_page=True),
                transport_outcome(),
                transport_outcome(),
                transport_outcome(),
            ]
        )
        engine = make_engine(executor, num_retries=2)
        session = engine.start("octocat")
        received = []

        with pytest.raises(TransportError) as exc_info:
            async for page in session:
                received.append(page)

        assert isinstance(exc_info.value, RetryError)
        assert exc_info.value.attempts == 3
        assert exc_info.value.operation_name == "RepositoryConnection"
        assert len(received) == 1
        assert len(executor.calls) == 4
        # Failed fetch left the cursor untouched and closed the session
        assert session.state.current_cursor == "c1"
        assert session.state.pages_fetched == 1
        with pytest.raises(StopAsyncIteration):
            await session.__anext__()
        assert len(executor.calls) == 4

    @pytest.mark.asyncio
    async def test_graphql_errors_are_not_retried(self, make_engine):
        """Test that GraphQL errors surface on the first attempt."""
        executor = ScriptedExecutor([errors_outcome("rate limited")])
        engine = make_engine(executor)

        with pytest.raises(ApplicationError) as exc_info:
            await engine.collect("octocat")

        assert "rate limited" in exc_info.value.messages
        assert "rate limited" in str(exc_info.value)
        assert len(executor.calls) == 1

    @pytest.mark.asyncio
    async def test_missing_token_is_auth_error(self, make_engine):
        """Test that a missing token raises AuthError from the session."""
        executor = ScriptedExecutor([])
        engine = make_engine(executor, creds=StaticCredentialProvider(token=""))

        with pytest.raises(AuthError):
            await engine.collect("octocat")

        assert executor.calls == []


@pytest.mark.unit
class TestCursorSafety:
    """A misbehaving server cannot trap the session in a loop."""

    @pytest.mark.asyncio
    async def test_repeated_cursor_raises(self, make_engine):
        """Test that a repeated end cursor raises PaginationError."""
        executor = ScriptedExecutor(
            [
                connection_outcome(["a"], end_cursor="c1", has_next_page=True),
                connection_outcome(["b"], end_cursor="c1", has_next_page=True),
            ]
        )
        engine = make_engine(executor)

        with pytest.raises(PaginationError):
            await engine.collect("octocat")

    @pytest.mark.asyncio
    async def test_cursor_returning_to_earlier_value_raises(self, make_engine):
        """Test that an end cursor seen on an earlier page raises PaginationError."""
        executor = ScriptedExecutor(
            [
                connection_outcome(["a"], end_cursor="c1", has_next_page=True),
                connection_outcome(["b"], end_cursor="c2", has_next_page=True),
                connection_outcome(["c"], end_cursor="c1", has_next_page=True),
            ]
        )
        engine = make_engine(executor)

        with pytest.raises(PaginationError):
            await engine.collect("octocat")
        assert len(executor.calls) == 3

    @pytest.mark.asyncio
    async def test_next_page_without_cursor_raises(self, make_engine):
        """Test that has_next_page without an end cursor raises PaginationError."""
        executor = ScriptedExecutor([connection_outcome(["a"], end_cursor=None, has_next_page=True)])
        engine = make_engine(executor)
        session = engine.start("octocat")

        with pytest.raises(PaginationError):
            await session.__anext__()
        assert session.state.pages_fetched == 0


@pytest.mark.unit
class TestCancellation:
    """Cancellation leaves session state as it was before the fetch."""

    @pytest.mark.asyncio
    async def test_cancel_during_fetch_keeps_state(self, make_engine):
        """Test that cancelling during a fetch leaves session state unchanged."""
        started = asyncio.Event()
        release = asyncio.Event()

        class SlowExecutor:
            def __init__(self):
                self.calls = 0

            async def execute(self, operation, variables, token):
                self.calls += 1
                if self.calls == 1:
                    return connection_outcome(["a"], end_cursor="c1", has_next_page=True)
                started.set()
                await release.wait()
                return connection_outcome(["b"], end_cursor="c2", has_next_page=False)

        engine = make_engine(SlowExecutor())
        session = engine.start("octocat")
        await session.__anext__()

        task = asyncio.create_task(session.__anext__())
        await started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert session.state.current_cursor == "c1"
        assert session.state.pages_fetched == 1
        assert not session.state.is_exhausted

    @pytest.mark.asyncio
    async def test_cancel_during_backoff_keeps_state(self, credentials):
        """Test that cancelling during retry backoff leaves session state unchanged."""
        from repo_pager.core.pagination.engine import PaginationEngine
        from repo_pager.core.pagination.fetcher import PageFetcher
        from repo_pager.utils.retry import RetryStrategy

        executor = ScriptedExecutor(
            [
                connection_outcome(["a"], end_cursor="c1", has_next_page=True),
                transport_outcome(),
            ]
        )
        fetcher = PageFetcher(
            executor=executor,
            credentials=credentials,
            strategy=RetryStrategy(initial_delay=60.0, max_delay=60.0),
        )
        session = PaginationEngine(fetcher, credentials).start("octocat")
        await session.__anext__()

        task = asyncio.create_task(session.__anext__())
        while len(executor.calls) < 2:
            await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert session.state.current_cursor == "c1"
        assert session.state.pages_fetched == 1


@pytest.mark.unit
class TestDemoIdentity:
    """Demo sessions never reach the executor."""

    @pytest.mark.asyncio
    async def test_demo_produces_one_page_of_configured_count(self, make_engine):
        """Test that the demo identity gets one page of fabricated repositories."""
        executor = ScriptedExecutor([])
        engine = make_engine(executor, creds=StaticCredentialProvider(demo=True), demo_count=12)
        session = engine.start("anyone")

        pages = [page async for page in session]

        assert len(pages) == 1
        assert len(pages[0].items) == 12
        assert pages[0].page_info.has_next_page is False
        assert all(repo.owner.login == DEMO_USER_LOGIN for repo in pages[0].items)
        assert executor.calls == []
        assert session.is_demo
        assert session.state.is_exhausted

    @pytest.mark.asyncio
    async def test_demo_does_not_need_a_token(self, make_engine):
        """Test that the demo identity never asks for a token."""
        creds = RotatingCredentials(demo=True)
        engine = make_engine(ScriptedExecutor([]), creds=creds)

        repos = await engine.collect("anyone")

        assert len(repos) == 5
        assert creds.calls == 0
