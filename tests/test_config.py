"""
Settings loading tests: environment variables, .env discovery and validation.
"""

import os

import pytest
from pydantic import ValidationError

from amrutam.core.config import (
    BillingSettings,
    CORSSettings,
    DatabaseSettings,
    SecuritySettings,
    Settings,
    get_settings,
    reset_settings,
)


def test_defaults():
    settings = Settings()
    assert settings.port == 3001
    assert settings.database.db_name == "amrutam-doctor-portal"
    assert settings.billing.commission_percentage == 15
    assert settings.booking.max_reschedules == 2
    assert settings.is_testing


def test_env_overrides_nested_settings(monkeypatch):
    monkeypatch.setenv("MONGO_URI", "mongodb://db.internal:27017")
    monkeypatch.setenv("BILLING_COMMISSION_PERCENTAGE", "20")
    monkeypatch.setenv("BOOKING_CANCELLATION_WINDOW_HOURS", "6")
    reset_settings()

    settings = get_settings()
    assert settings.database.uri == "mongodb://db.internal:27017"
    assert settings.billing.commission_percentage == 20
    assert settings.booking.cancellation_window_hours == 6


def test_get_settings_is_cached_until_reset(monkeypatch):
    first = get_settings()
    assert get_settings() is first

    monkeypatch.setenv("APP_VERSION", "2.0.0")
    assert get_settings().app_version == first.app_version
    reset_settings()
    assert get_settings().app_version == "2.0.0"


def test_env_file_is_discovered_from_parent_directory(monkeypatch, tmp_path):
    """A .env in a parent of the working directory is loaded without overriding set variables."""
    monkeypatch.delenv("MONGO_DB_NAME", raising=False)
    monkeypatch.setenv("APP_VERSION", "from-environment")
    (tmp_path / ".env").write_text("MONGO_DB_NAME=from_env_file\nAPP_VERSION=from-file\n")
    nested = tmp_path / "service" / "run"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)
    reset_settings()

    try:
        settings = get_settings()
        assert settings.database.db_name == "from_env_file"
        assert settings.app_version == "from-environment"
    finally:
        # load_dotenv writes straight to os.environ
        os.environ.pop("MONGO_DB_NAME", None)


def test_cors_origins_accept_comma_separated_and_json(monkeypatch):
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "https://portal.amrutam.com, https://admin.amrutam.com")
    assert CORSSettings().allowed_origins == ["https://portal.amrutam.com", "https://admin.amrutam.com"]

    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", '["https://one.example"]')
    assert CORSSettings().allowed_origins == ["https://one.example"]


def test_short_secret_key_is_rejected():
    with pytest.raises(ValidationError):
        SecuritySettings(secret_key="too-short")


def test_non_mongo_uri_is_rejected():
    with pytest.raises(ValidationError):
        DatabaseSettings(uri="postgres://localhost/db")


def test_invalid_app_env_is_rejected():
    with pytest.raises(ValidationError):
        Settings(app_env="qa")


def test_commission_out_of_range_is_rejected():
    with pytest.raises(ValidationError):
        BillingSettings(commission_percentage=150)
