from typing import Any, ClassVar

from app.analysis.analyzer import SymptomAnalyzer
from app.analysis.base import BaseAnalyzer
from app.analysis.client_base import BaseCompletionClient
from app.analysis.example_client_adapter import ExampleClientAdapter
from app.analysis.gemini_client_adapter import GeminiClientAdapter
from app.analysis.openai_client_adapter import OpenAIClientAdapter
from app.config.settings import Settings


class AnalyzerFactory:
    """Creates the configured symptom analyzer."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseAnalyzer:
        """Create a configured analyzer from application settings."""
        provider = settings.analysis_provider.lower()
        if provider == "example":
            return SymptomAnalyzer(
                client=ExampleClientAdapter(),
                model="example",
                temperature=0.0,
            )
        return SymptomAnalyzer(
            client=cls._create_client(provider, settings),
            model=cls._resolve_model_name(provider, settings),
            temperature=settings.analysis_temperature,
            system_prompt=settings.analysis_system_prompt,
        )

    @classmethod
    def supported_providers(cls) -> list[str]:
        return [
            "example",
            "gemini",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]

    @classmethod
    def _create_client(cls, provider: str, settings: Settings) -> BaseCompletionClient:
        if provider == "gemini":
            return GeminiClientAdapter(
                api_key=settings.analysis_gemini_api_key,
                timeout_seconds=settings.analysis_gemini_timeout_seconds,
                base_url=settings.analysis_gemini_base_url,
            )
        return OpenAIClientAdapter(
            api_key=cls._provider_setting(provider, settings, "api_key") or "",
            timeout_seconds=cls._provider_setting(provider, settings, "timeout_seconds") or 30,
            base_url=cls._resolve_base_url(provider, settings),
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = (settings.analysis_openai_compatible_base_url or "").strip()
            if not url:
                raise ValueError(
                    "analysis_openai_compatible_base_url is required for "
                    "analysis_provider=openai_compatible"
                )
            return url
        return cls.OPENAI_COMPATIBLE_BASE_URLS[provider]

    @classmethod
    def _resolve_model_name(cls, provider: str, settings: Settings) -> str:
        return cls._provider_setting(provider, settings, "model_name") or ""

    @classmethod
    def _provider_setting(cls, provider: str, settings: Settings, name: str) -> Any:
        if provider not in cls.supported_providers():
            raise ValueError(
                f"Unknown analysis provider '{provider}'. "
                f"Choose from: {cls.supported_providers()}"
            )
        return getattr(settings, f"analysis_{provider}_{name}")
