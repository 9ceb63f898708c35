"""
Unit tests for backend/settings.py
"""

import pytest
from pydantic import ValidationError

from backend.settings import Settings, get_settings


# Environment variables that CI might set which we need to clear for default tests
CI_ENV_VARS = [
    "ENVIRONMENT",
    "SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "SUPABASE_ANON_KEY",
    "SESSION_TICK_INTERVAL_SECONDS",
    "DEFAULT_BEEP_START_SECONDS",
    "MAX_ACTIVE_SESSIONS",
    "SESSION_IDLE_TTL_SECONDS",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Clear CI environment variables to test true defaults."""
    for var in CI_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.mark.unit
class TestSettingsDefaults:
    """Test that Settings applies correct defaults."""

    def test_environment_default(self, clean_env):
        """Default environment should be development."""
        settings = Settings(_env_file=None)
        assert settings.environment == "development"

    def test_supabase_fields_default_to_none(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.supabase_url is None
        assert settings.supabase_service_role_key is None
        assert settings.supabase_anon_key is None

    def test_session_engine_defaults(self, clean_env):
        """Session engine knobs have usable defaults."""
        settings = Settings(_env_file=None)
        assert settings.session_tick_interval_seconds == 0.25
        assert settings.default_beep_start_seconds == 3
        assert settings.max_active_sessions == 500

    def test_sentry_dsn_default_to_none(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.sentry_dsn is None


@pytest.mark.unit
class TestSettingsValidation:
    """Test Settings validation behavior."""

    def test_valid_environments_accepted(self):
        for env in ["development", "staging", "production", "test"]:
            settings = Settings(_env_file=None, environment=env)
            assert settings.environment == env

    def test_environment_case_insensitive(self):
        settings = Settings(_env_file=None, environment="PRODUCTION")
        assert settings.environment == "production"

    def test_invalid_environment_raises_error(self):
        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None, environment="invalid")
        assert "Invalid environment" in str(exc_info.value)

    def test_environment_is_read_from_the_field_only(self):
        settings = Settings(_env_file=None, environment="production")
        for name in ("is_production", "is_development", "is_test"):
            assert not hasattr(settings, name)

    def test_zero_tick_interval_allowed(self):
        """0 disables the background ticker."""
        settings = Settings(_env_file=None, session_tick_interval_seconds=0)
        assert settings.session_tick_interval_seconds == 0

    def test_negative_tick_interval_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, session_tick_interval_seconds=-1)

    @pytest.mark.parametrize("value", [-1, 11])
    def test_beep_start_out_of_range_rejected(self, value):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, default_beep_start_seconds=value)

    def test_max_active_sessions_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, max_active_sessions=0)


@pytest.mark.unit
class TestSettingsProperties:
    """Test Settings computed properties."""

    def test_supabase_key_prefers_service_role(self, clean_env):
        settings = Settings(
            _env_file=None,
            supabase_service_role_key="service-key",
            supabase_anon_key="anon-key",
        )
        assert settings.supabase_key == "service-key"

    def test_supabase_key_falls_back_to_anon(self, clean_env):
        settings = Settings(_env_file=None, supabase_anon_key="anon-key")
        assert settings.supabase_key == "anon-key"

    def test_api_keys_list_parses_comma_separated(self):
        settings = Settings(_env_file=None, api_keys="key1, key2,  ,key3")
        assert settings.api_keys_list == ["key1", "key2", "key3"]

    def test_session_idle_ttl_default_and_override(self, clean_env):
        assert Settings(_env_file=None).session_idle_ttl_seconds == 7200
        assert Settings(_env_file=None, session_idle_ttl_seconds=0).session_idle_ttl_seconds == 0

    def test_session_idle_ttl_rejects_negative(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, session_idle_ttl_seconds=-1)


@pytest.mark.unit
class TestGetSettings:
    """Test get_settings() function."""

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2


@pytest.mark.unit
class TestSettingsFromEnv:
    """Test Settings loading from environment variables."""

    def test_settings_loads_from_env(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "staging")
        monkeypatch.setenv("SESSION_TICK_INTERVAL_SECONDS", "0.5")
        monkeypatch.setenv("MAX_ACTIVE_SESSIONS", "20")

        settings = Settings(_env_file=None)

        assert settings.environment == "staging"
        assert settings.session_tick_interval_seconds == 0.5
        assert settings.max_active_sessions == 20
