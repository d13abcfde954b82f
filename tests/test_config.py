"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from fireguard.config import Settings, get_settings, reset_settings_cache


def test_defaults():
    settings = Settings(secret_key="test")

    assert settings.inspection_reminder_days == [30, 14, 7, 1]
    assert settings.maintenance_reminder_days == [60, 30, 14, 7]
    assert settings.inspection_reminder_cron == "0 9 * * *"
    assert settings.maintenance_reminder_cron == "30 9 * * *"
    assert settings.privileged_roles == ["admin", "manager"]


def test_reminder_days_are_deduplicated_and_sorted():
    settings = Settings(secret_key="test", inspection_reminder_days=[1, 7, 7, 30])

    assert settings.inspection_reminder_days == [30, 7, 1]


@pytest.mark.parametrize("days", [[], [0], [7, -1]])
def test_reminder_days_must_be_positive(days):
    with pytest.raises(ValidationError):
        Settings(secret_key="test", maintenance_reminder_days=days)


def test_crontab_needs_five_fields():
    with pytest.raises(ValidationError):
        Settings(secret_key="test", inspection_reminder_cron="0 9 * *")


def test_roles_are_normalized():
    settings = Settings(secret_key="test", privileged_roles=[" Admin", "OWNER", ""])

    assert settings.privileged_roles == ["admin", "owner"]


def test_environment_list_values(monkeypatch):
    monkeypatch.setenv("INSPECTION_REMINDER_DAYS", "[3, 1]")
    reset_settings_cache()
    try:
        assert get_settings().inspection_reminder_days == [3, 1]
    finally:
        monkeypatch.delenv("INSPECTION_REMINDER_DAYS")
        reset_settings_cache()
