from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "postgres"
    db_username: str = "postgres"
    db_password: str = "secret"

    max_job_attempts: int = 3
    job_poll_interval_seconds: int = 5

    analysis_provider: str = "gemini"
    analysis_temperature: float = 0.4
    analysis_system_prompt: str = ""

    analysis_gemini_api_key: str = ""
    analysis_gemini_model_name: str = "gemini-1.5-flash"
    analysis_gemini_timeout_seconds: int = 30
    analysis_gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"

    analysis_openai_api_key: str = ""
    analysis_openai_model_name: str = ""
    analysis_openai_timeout_seconds: int = 30

    analysis_openai_compatible_api_key: str = ""
    analysis_openai_compatible_model_name: str = ""
    analysis_openai_compatible_timeout_seconds: int = 30
    analysis_openai_compatible_base_url: str | None = None

    analysis_openrouter_api_key: str = ""
    analysis_openrouter_model_name: str = ""
    analysis_openrouter_timeout_seconds: int = 30

    analysis_groq_api_key: str = ""
    analysis_groq_model_name: str = ""
    analysis_groq_timeout_seconds: int = 30

    analysis_together_api_key: str = ""
    analysis_together_model_name: str = ""
    analysis_together_timeout_seconds: int = 30

    analysis_deepseek_api_key: str = ""
    analysis_deepseek_model_name: str = ""
    analysis_deepseek_timeout_seconds: int = 30

    analysis_ollama_api_key: str = "ollama"
    analysis_ollama_model_name: str = ""
    analysis_ollama_timeout_seconds: int = 60

    google_places_api_key: str = ""
    places_timeout_seconds: int = 15
    facility_search_min_results: int = 10
