"""
Test configuration management
"""
import pytest
from pydantic import ValidationError

from supportpal_exporter.config import Settings, get_settings


def test_settings_singleton():
    """Test settings returns same instance"""
    settings1 = get_settings()
    settings2 = get_settings()
    assert settings1 is settings2


def test_settings_defaults(monkeypatch):
    """Test default values"""
    monkeypatch.setenv("API_BASE_PATH", "https://support.example.com/")
    monkeypatch.setenv("API_TOKEN", "token")
    for name in ("EXPORTER_PORT", "SYNC_INTERVAL_SECONDS", "PAGE_SIZE", "MAX_TICKET_AGE_DAYS",
                 "MISSING_ORGANIZATION_LABEL"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.exporter_port == 20000
    assert settings.sync_interval_seconds == 60
    assert settings.page_size == 2000
    assert settings.max_ticket_age_days == 365
    assert settings.missing_organization_label == ""
    assert settings.API_BASE_URL == "https://support.example.com"


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("API_BASE_PATH", "https://helpdesk.example.org")
    monkeypatch.setenv("API_TOKEN", "secret")
    monkeypatch.setenv("MISSING_ORGANIZATION_LABEL", "no-org")
    monkeypatch.setenv("SYNC_INTERVAL_SECONDS", "15")

    settings = Settings(_env_file=None)

    assert settings.api_token == "secret"
    assert settings.missing_organization_label == "no-org"
    assert settings.sync_interval_seconds == 15


def test_api_settings_are_required(monkeypatch):
    monkeypatch.delenv("API_BASE_PATH", raising=False)
    monkeypatch.delenv("API_TOKEN", raising=False)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
