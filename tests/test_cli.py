"""Tests for CLI."""

from pathlib import Path

import pytest

from dailydose.cli import create_parser, run_cli
from dailydose.config import DailyDoseConfig
from dailydose.quotes import FetchResult, Quote, QuoteCandidate, QuoteStore, ZenQuotesSource


@pytest.fixture
def config(tmp_path: Path) -> DailyDoseConfig:
    return DailyDoseConfig(db_path=tmp_path / "quotes.db", log_dir=tmp_path / "logs")


@pytest.fixture
def offline(monkeypatch):
    """Make the remote source fail without touching the network."""

    async def fetch_daily(self) -> FetchResult:
        return FetchResult.failure("Network error: offline")

    monkeypatch.setattr(ZenQuotesSource, "fetch_daily", fetch_daily)


@pytest.fixture
def online(monkeypatch):
    async def fetch_daily(self) -> FetchResult:
        return FetchResult.ok([QuoteCandidate(text="Hi", author="Bob")])

    monkeypatch.setattr(ZenQuotesSource, "fetch_daily", fetch_daily)


def seed(config: DailyDoseConfig, *texts: str) -> list[Quote]:
    store = QuoteStore(config.db_path)
    store.init_db()
    for text in texts:
        store.insert_if_absent(Quote(text=text, author="Anon", date_fetched="2024-01-01"))
    quotes = [store.find_by_text(text) for text in texts]
    store.close()
    return quotes


def test_parser_commands():
    parser = create_parser()
    args = parser.parse_args(["favorite", "3"])
    assert args.command == "favorite"
    assert args.id == 3


def test_today_online(config: DailyDoseConfig, online, capsys):
    assert run_cli(["today"], config=config) == 0
    out = capsys.readouterr().out
    assert "Hi" in out
    assert "Bob" in out


def test_default_command_is_today(config: DailyDoseConfig, online, capsys):
    assert run_cli([], config=config) == 0
    assert "Hi" in capsys.readouterr().out


def test_today_offline_first_run_seeds(config: DailyDoseConfig, offline, capsys):
    assert run_cli(["today"], config=config) == 0
    assert run_cli(["history"], config=config) == 0
    assert "Total: 10 quote(s)" in capsys.readouterr().out


def test_today_offline_shows_advisory(config: DailyDoseConfig, offline, capsys):
    seed(config, "cached")
    assert run_cli(["today"], config=config) == 0
    out = capsys.readouterr().out
    assert "cached" in out
    assert "Showing offline quote" in out


def test_random_single_quote_fails(config: DailyDoseConfig, capsys):
    seed(config, "only")
    assert run_cli(["random"], config=config) == 1
    assert "No quotes available" in capsys.readouterr().err


def test_refresh_offline_picks_other(config: DailyDoseConfig, offline, capsys):
    seed(config, "first", "second")
    assert run_cli(["refresh"], config=config) == 0
    out = capsys.readouterr().out
    # The latest quote ("second") is treated as currently displayed.
    assert "first" in out
    assert "Showing random quote (offline)" in out


def test_history_empty(config: DailyDoseConfig, capsys):
    assert run_cli(["history"], config=config) == 0
    assert "No quotes found." in capsys.readouterr().out


def test_favorite_and_filter(config: DailyDoseConfig, capsys):
    quotes = seed(config, "one", "two")
    assert run_cli(["favorite", str(quotes[1].id)], config=config) == 0
    assert "added to favorites" in capsys.readouterr().out

    assert run_cli(["history", "--favorites"], config=config) == 0
    out = capsys.readouterr().out
    assert "two" in out
    assert "one" not in out
    assert "Total: 1 quote(s)" in out


def test_favorite_missing(config: DailyDoseConfig, capsys):
    assert run_cli(["favorite", "99"], config=config) == 1
    assert "not found" in capsys.readouterr().err


def test_delete(config: DailyDoseConfig, capsys):
    quotes = seed(config, "one")
    assert run_cli(["delete", str(quotes[0].id)], config=config) == 0
    assert run_cli(["delete", str(quotes[0].id)], config=config) == 1


def test_clear(config: DailyDoseConfig, capsys):
    seed(config, "one", "two")
    assert run_cli(["clear"], config=config) == 0
    assert "Deleted 2 quote(s)" in capsys.readouterr().out
