"""
Application configuration via pydantic-settings.

All settings are loaded from environment variables (and .env file).
Sub-configs are composed onto AppSettings in a model_validator so a single
AppSettings() call reads everything from the same source.
"""

from __future__ import annotations

from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TURNSTILE_VERIFY_URL = "https://challenges.cloudflare.com/turnstile/v0/siteverify"


class DatabaseSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    mongodb_uri: str
    db_name: str = "loqatr"


class TurnstileSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    turnstile_secret_key: str = ""
    # Publishable; rendered into the finder page
    turnstile_site_key: str = "0x4AAAAAABfQhbFMlvEyDxaH"
    turnstile_verify_url: str = TURNSTILE_VERIFY_URL
    turnstile_timeout_seconds: float = 5.0


class RevealSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    reveal_limit_per_hour: int = 12
    reveal_window_seconds: int = 3600
    # One tag_scanned notification per tag per day
    scan_notification_cooldown_seconds: int = 86400


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"
    log_format: str = "console"  # "json" in production

    # Sampling rates (0.0–1.0)
    sample_rate_tag_view: float = 0.25


class SentrySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    sentry_dsn: str = ""
    sentry_send_pii: bool = False
    sentry_traces_sample_rate: float = 0.1
    sentry_profile_sample_rate: float = 0.05


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Core
    env: str = "development"
    app_url: str = "https://www.loqatr.com"
    app_name: str = "LOQATR"

    # Finder pages call in from arbitrary origins
    cors_origins: list[str] = ["*"]

    # OpenAPI docs URL (None disables the docs UI in production)
    docs_url: Optional[str] = "/docs"

    # Sub-configs (composed via model_validator below)
    db: Optional[DatabaseSettings] = None
    turnstile: Optional[TurnstileSettings] = None
    reveal: Optional[RevealSettings] = None
    logging: Optional[LoggingSettings] = None
    sentry: Optional[SentrySettings] = None

    @model_validator(mode="after")
    def _populate_sub_configs(self) -> "AppSettings":
        if self.db is None:
            self.db = DatabaseSettings()
        if self.turnstile is None:
            self.turnstile = TurnstileSettings()
        if self.reveal is None:
            self.reveal = RevealSettings()
        if self.logging is None:
            self.logging = LoggingSettings()
        if self.sentry is None:
            self.sentry = SentrySettings()

        return self

    @property
    def is_production(self) -> bool:
        return self.env == "production"
