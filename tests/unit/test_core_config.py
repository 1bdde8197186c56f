"""Unit tests for Settings validation."""

import pytest
from pydantic import ValidationError

from warden.core.config import Settings
from warden.core.enums import Environment

BASE = {
    "_env_file": None,
    "database_url": "sqlite+aiosqlite:///:memory:",
    "redis_url": "redis://localhost:6379/0",
    "secret_key": "s" * 32,
}


def make_settings(**overrides) -> Settings:
    return Settings(**{**BASE, **overrides})


@pytest.mark.unit
class TestSettingsDefaults:
    """Defaults for the purge schedule and token lifetimes."""

    def test_defaults(self):
        settings = make_settings()

        assert settings.purge_retention_days == 7
        assert settings.purge_lookback_days is None
        assert settings.purge_run_hour == 0
        assert settings.algorithm == "HS256"
        assert settings.access_token_expire_minutes == 30
        assert settings.refresh_token_expire_days == 30
        assert settings.session_cache_ttl_seconds is None

    def test_json_logs_outside_development(self):
        assert make_settings(environment=Environment.DEVELOPMENT).use_json_logs is False
        assert make_settings(environment=Environment.PRODUCTION).use_json_logs is True

    def test_log_json_override_wins(self):
        settings = make_settings(environment=Environment.PRODUCTION, log_json=False)
        assert settings.use_json_logs is False

    def test_environment_flags(self):
        settings = make_settings(environment=Environment.TESTING)
        assert settings.is_testing
        assert not settings.is_production
        assert not settings.is_development


@pytest.mark.unit
class TestSettingsValidation:
    """Invalid configuration is rejected at load time."""

    def test_short_secret_rejected(self):
        with pytest.raises(ValidationError, match="at least 32"):
            make_settings(secret_key="short")

    @pytest.mark.parametrize("rounds", [9, 21])
    def test_bcrypt_rounds_out_of_range(self, rounds):
        with pytest.raises(ValidationError, match="bcrypt_rounds"):
            make_settings(bcrypt_rounds=rounds)

    def test_purge_run_hour_out_of_range(self):
        with pytest.raises(ValidationError, match="purge_run_hour"):
            make_settings(purge_run_hour=24)

    def test_lookback_must_be_positive(self):
        with pytest.raises(ValidationError, match="purge_lookback_days"):
            make_settings(purge_lookback_days=0)

    def test_negative_retention_rejected(self):
        with pytest.raises(ValidationError):
            make_settings(purge_retention_days=-1)

    def test_values_read_from_environment(self, monkeypatch):
        monkeypatch.setenv("PURGE_RETENTION_DAYS", "14")
        monkeypatch.setenv("PURGE_RUN_HOUR", "3")

        settings = make_settings()

        assert settings.purge_retention_days == 14
        assert settings.purge_run_hour == 3
