import pytest
from pydantic import ValidationError

from app.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_db_port(self) -> None:
        s = Settings()
        assert s.db_port == 5432

    def test_default_max_job_attempts(self) -> None:
        s = Settings()
        assert s.max_job_attempts == 3

    def test_default_job_poll_interval(self) -> None:
        s = Settings()
        assert s.job_poll_interval_seconds == 5

    def test_default_analysis_provider(self) -> None:
        s = Settings()
        assert s.analysis_provider == "gemini"

    def test_default_analysis_temperature(self) -> None:
        s = Settings()
        assert s.analysis_temperature == 0.4

    def test_default_gemini_timeout(self) -> None:
        s = Settings()
        assert s.analysis_gemini_timeout_seconds == 30

    def test_default_facility_search_min_results(self) -> None:
        s = Settings()
        assert s.facility_search_min_results == 10


class TestSettingsFromEnv:
    def test_loads_app_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_ENV", "production")
        s = Settings()
        assert s.app_env == "production"

    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_db_host(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_HOST", "db.example.com")
        s = Settings()
        assert s.db_host == "db.example.com"

    def test_loads_analysis_provider(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ANALYSIS_PROVIDER", "openai")
        monkeypatch.setenv("ANALYSIS_OPENAI_MODEL_NAME", "gpt-4o-mini")
        s = Settings()
        assert s.analysis_provider == "openai"
        assert s.analysis_openai_model_name == "gpt-4o-mini"

    def test_loads_places_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GOOGLE_PLACES_API_KEY", "places-key")
        s = Settings()
        assert s.google_places_api_key == "places-key"


class TestSettingsValidation:
    def test_invalid_db_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_PORT", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_temperature_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ANALYSIS_TEMPERATURE", "warm")
        with pytest.raises(ValidationError):
            Settings()
