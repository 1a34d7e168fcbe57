"""Tests for settings, database URL resolution and the retry decorator."""

from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import DisconnectionError, OperationalError

from content_sentiment import config
from content_sentiment.db import healthcheck, retry_on_connection_error


@pytest.fixture
def fresh_settings():
    config.settings.cache_clear()
    yield
    config.settings.cache_clear()


def test_database_url_from_env(monkeypatch, fresh_settings):
    monkeypatch.setenv("DATABASE_URL", "postgresql://user:pw@localhost/content")
    assert config.get_database_url() == "postgresql://user:pw@localhost/content"


def test_sqlite_fallback(monkeypatch, tmp_path, fresh_settings):
    monkeypatch.setenv("DATABASE_URL", "")
    monkeypatch.setenv("SQLITE_PATH", str(tmp_path / "nested" / "fallback.db"))
    url = config.get_database_url()
    assert url == f"sqlite:///{tmp_path / 'nested' / 'fallback.db'}"
    assert (tmp_path / "nested").is_dir()


def test_no_database_configured(monkeypatch, fresh_settings):
    monkeypatch.setenv("DATABASE_URL", "")
    monkeypatch.setenv("ALLOW_SQLITE_FALLBACK", "false")
    with pytest.raises(ValueError, match="No database configuration"):
        config.get_database_url()


def test_batch_size_setting(monkeypatch, fresh_settings):
    monkeypatch.setenv("SENTIMENT_BATCH_SIZE", "25")
    assert config.settings().SENTIMENT_BATCH_SIZE == 25


class TestRetry:
    def test_retries_disconnects(self):
        func = MagicMock(side_effect=[DisconnectionError("gone"), "ok"])
        wrapped = retry_on_connection_error(max_retries=3, delay=0)(func)
        with patch("content_sentiment.db.close_engine") as mock_close:
            assert wrapped() == "ok"
        assert func.call_count == 2
        mock_close.assert_called_once()

    def test_gives_up_after_max_retries(self):
        func = MagicMock(side_effect=DisconnectionError("gone"))
        wrapped = retry_on_connection_error(max_retries=2, delay=0)(func)
        with patch("content_sentiment.db.close_engine"):
            with pytest.raises(DisconnectionError):
                wrapped()
        assert func.call_count == 2

    def test_statement_errors_not_retried(self):
        error = OperationalError("SELECT * FROM missing", {}, Exception("no such table"))
        func = MagicMock(side_effect=error)
        wrapped = retry_on_connection_error(max_retries=3, delay=0)(func)
        with pytest.raises(OperationalError):
            wrapped()
        assert func.call_count == 1


def test_healthcheck(sqlite_db):
    assert healthcheck() is True
