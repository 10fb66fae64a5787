"""Tests for configuration loading."""

from pathlib import Path

import pytest

from dailydose.config import DEFAULT_HOME, DailyDoseConfig, config_from_env


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "DAILYDOSE_DB_PATH",
        "DAILYDOSE_API_BASE_URL",
        "DAILYDOSE_HTTP_TIMEOUT",
        "DAILYDOSE_LOG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)


class TestDailyDoseConfig:
    def test_defaults(self):
        config = DailyDoseConfig()
        assert config.db_path == DEFAULT_HOME / "quotes.db"
        assert config.log_dir == DEFAULT_HOME / "logs"
        assert config.api_base_url == "https://zenquotes.io/api/"
        assert config.http_timeout == 10.0

    def test_base_url_gets_trailing_slash(self):
        config = DailyDoseConfig(api_base_url="https://q.test/api")
        assert config.api_base_url == "https://q.test/api/"

    def test_invalid_timeout(self):
        with pytest.raises(ValueError, match="http_timeout"):
            DailyDoseConfig(http_timeout=0)


class TestConfigFromEnv:
    def test_defaults_without_env(self):
        assert config_from_env() == DailyDoseConfig()

    def test_reads_env(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("DAILYDOSE_DB_PATH", str(tmp_path / "q.db"))
        monkeypatch.setenv("DAILYDOSE_API_BASE_URL", "https://q.test/api")
        monkeypatch.setenv("DAILYDOSE_HTTP_TIMEOUT", "2.5")
        monkeypatch.setenv("DAILYDOSE_LOG_DIR", str(tmp_path / "logs"))

        config = config_from_env()

        assert config.db_path == tmp_path / "q.db"
        assert config.api_base_url == "https://q.test/api/"
        assert config.http_timeout == 2.5
        assert config.log_dir == tmp_path / "logs"

    def test_invalid_timeout_falls_back(self, monkeypatch):
        monkeypatch.setenv("DAILYDOSE_HTTP_TIMEOUT", "soon")
        assert config_from_env().http_timeout == 10.0

    def test_negative_timeout_falls_back(self, monkeypatch):
        monkeypatch.setenv("DAILYDOSE_HTTP_TIMEOUT", "-1")
        assert config_from_env().http_timeout == 10.0
