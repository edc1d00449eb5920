from typing import ClassVar

from app.config.settings import Settings
from app.extraction.base import BaseExtractor
from app.extraction.example_client_adapter import ExampleClientAdapter
from app.extraction.extractor import StructuredExtractor
from app.extraction.openai_client_adapter import OpenAIClientAdapter


class ExtractorFactory:
    """Creates the configured structured extractor."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseExtractor:
        provider = settings.extraction_provider.lower()
        if provider == "example":
            return StructuredExtractor(
                client=ExampleClientAdapter(),
                model="example",
                temperature=0.0,
            )
        base_url = cls._resolve_base_url(provider, settings)
        client = OpenAIClientAdapter(
            api_key=cls._resolve(provider, settings, "api_key"),
            timeout_seconds=cls._resolve(provider, settings, "timeout_seconds"),
            base_url=base_url,
        )
        return StructuredExtractor(
            client=client,
            model=cls._resolve(provider, settings, "model_name"),
            temperature=settings.extraction_temperature,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.extraction_openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "extraction_openai_compatible_base_url is required for "
                    "extraction_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown extraction provider '{provider}'. Choose from: {supported}"
        )

    @staticmethod
    def _resolve(provider: str, settings: Settings, suffix: str):  # type: ignore[no-untyped-def]
        return getattr(settings, f"extraction_{provider}_{suffix}")
