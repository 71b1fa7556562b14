"""Unit tests for core configuration module."""

from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from meeting_compliance.core.config import Settings


class TestSettings:
    """Tests for Settings configuration."""

    def test_settings_defaults(self) -> None:
        """Default values are applied correctly."""
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.timezone == "America/Indiana/Indianapolis"
        assert settings.open_door_notice_hours == 48
        assert settings.default_submission_lead_days == 3
        assert settings.default_submission_time == "17:00"
        assert settings.publication_scan_days == 60
        assert settings.log_level == "INFO"
        assert settings.log_dir is None
        assert settings.api_v1_prefix == "/api/v1"

    def test_settings_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Settings load from environment variables."""
        monkeypatch.setenv("TIMEZONE", "America/Chicago")
        monkeypatch.setenv("OPEN_DOOR_NOTICE_HOURS", "72")
        monkeypatch.setenv("DEFAULT_SUBMISSION_TIME", "12:00")
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.tzinfo == ZoneInfo("America/Chicago")
        assert settings.open_door_notice_hours == 72
        assert settings.default_submission_time == "12:00"

    def test_unknown_timezone(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TIMEZONE", "Mars/Olympus_Mons")
        with pytest.raises(ValidationError, match="Unknown timezone"):
            Settings(_env_file=None)  # type: ignore[call-arg]

    @pytest.mark.parametrize("value", ["5pm", "24:00", "17:60", "7:00"])
    def test_submission_time_format(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.setenv("DEFAULT_SUBMISSION_TIME", value)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]

    @pytest.mark.parametrize(
        ("name", "value"),
        [("OPEN_DOOR_NOTICE_HOURS", "-1"), ("PUBLICATION_SCAN_DAYS", "0"), ("PUBLICATION_SCAN_DAYS", "400")],
    )
    def test_numeric_bounds(self, monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
        monkeypatch.setenv(name, value)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]
