"""Unit tests for AppSettings and sub-configs."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from config import (
    TURNSTILE_VERIFY_URL,
    AppSettings,
    DatabaseSettings,
    RevealSettings,
    TurnstileSettings,
)


@pytest.fixture
def with_mongo(monkeypatch):
    """Set the required MONGODB_URI so AppSettings can be instantiated."""
    monkeypatch.setenv("MONGODB_URI", "mongodb://localhost:27017/")
    return monkeypatch


class TestDatabaseSettings:
    def test_loads_mongodb_uri(self, monkeypatch):
        monkeypatch.setenv("MONGODB_URI", "mongodb://localhost:27017/")
        assert DatabaseSettings().mongodb_uri == "mongodb://localhost:27017/"

    def test_default_db_name(self, monkeypatch):
        monkeypatch.setenv("MONGODB_URI", "mongodb://localhost:27017/")
        monkeypatch.delenv("DB_NAME", raising=False)
        assert DatabaseSettings().db_name == "loqatr"

    def test_missing_mongodb_uri_raises(self, monkeypatch):
        monkeypatch.delenv("MONGODB_URI", raising=False)
        with pytest.raises(PydanticValidationError):
            DatabaseSettings()


class TestTurnstileSettings:
    def test_defaults(self, monkeypatch):
        for var in ("TURNSTILE_SECRET_KEY", "TURNSTILE_VERIFY_URL"):
            monkeypatch.delenv(var, raising=False)
        s = TurnstileSettings()
        assert s.turnstile_secret_key == ""
        assert s.turnstile_verify_url == TURNSTILE_VERIFY_URL
        assert s.turnstile_timeout_seconds == 5.0

    def test_secret_loaded(self, monkeypatch):
        monkeypatch.setenv("TURNSTILE_SECRET_KEY", "0xsecret")
        assert TurnstileSettings().turnstile_secret_key == "0xsecret"


class TestRevealSettings:
    def test_default_quota_is_twelve_per_hour(self, monkeypatch):
        monkeypatch.delenv("REVEAL_LIMIT_PER_HOUR", raising=False)
        monkeypatch.delenv("REVEAL_WINDOW_SECONDS", raising=False)
        s = RevealSettings()
        assert s.reveal_limit_per_hour == 12
        assert s.reveal_window_seconds == 3600

    def test_quota_override(self, monkeypatch):
        monkeypatch.setenv("REVEAL_LIMIT_PER_HOUR", "3")
        assert RevealSettings().reveal_limit_per_hour == 3


class TestAppSettings:
    def test_sub_configs_populated(self, with_mongo):
        s = AppSettings()
        assert s.db is not None
        assert s.turnstile is not None
        assert s.reveal is not None
        assert s.logging is not None
        assert s.sentry is not None

    def test_cors_allows_all_origins_by_default(self, with_mongo):
        with_mongo.delenv("CORS_ORIGINS", raising=False)
        assert AppSettings().cors_origins == ["*"]

    def test_explicit_sub_config_is_kept(self, with_mongo):
        reveal = RevealSettings(reveal_limit_per_hour=5)
        assert AppSettings(reveal=reveal).reveal.reveal_limit_per_hour == 5


@pytest.mark.parametrize(
    "env, expected",
    [("production", True), ("development", False)],
    ids=["production", "development"],
)
def test_is_production(with_mongo, env, expected):
    with_mongo.setenv("ENV", env)
    assert AppSettings().is_production is expected
