"""Shared fixtures for DailyDose tests."""

from pathlib import Path

import pytest

from dailydose.quotes import FetchResult, QuoteCandidate, QuoteRepository, QuoteSource, QuoteStore


class StubSource(QuoteSource):
    """Quote source returning a fixed result and counting calls."""

    def __init__(self, result: FetchResult | None = None) -> None:
        self.result = result or FetchResult.failure("Network error: offline")
        self.calls = 0

    async def fetch_daily(self) -> FetchResult:
        self.calls += 1
        return self.result

    @classmethod
    def returning(cls, *pairs: tuple[str, str]) -> "StubSource":
        return cls(FetchResult.ok([QuoteCandidate(text=q, author=a) for q, a in pairs]))

    @classmethod
    def failing(cls, reason: str = "Network error: offline") -> "StubSource":
        return cls(FetchResult.failure(reason))


@pytest.fixture
def store(tmp_path: Path) -> QuoteStore:
    """Create a QuoteStore with a temporary database."""
    store = QuoteStore(tmp_path / "test_quotes.db")
    store.init_db()
    yield store
    store.close()


@pytest.fixture
def failing_source() -> StubSource:
    return StubSource.failing()


@pytest.fixture
def repository(store: QuoteStore, failing_source: StubSource) -> QuoteRepository:
    return QuoteRepository(store, failing_source)
