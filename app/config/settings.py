from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pymupdf"
    raster_scale: float = 2.0
    raster_jpeg_quality: int = 90

    extraction_provider: str = "openai"
    extraction_temperature: float = 0.0

    extraction_openai_api_key: str = ""
    extraction_openai_model_name: str = "gpt-4o-mini"
    extraction_openai_timeout_seconds: int = 60

    extraction_openai_compatible_api_key: str = ""
    extraction_openai_compatible_model_name: str = ""
    extraction_openai_compatible_base_url: str = ""
    extraction_openai_compatible_timeout_seconds: int = 60

    extraction_openrouter_api_key: str = ""
    extraction_openrouter_model_name: str = ""
    extraction_openrouter_timeout_seconds: int = 60

    extraction_ollama_api_key: str = "ollama"
    extraction_ollama_model_name: str = ""
    extraction_ollama_timeout_seconds: int = 120

    render_viewport_width: int = 800
    render_device_scale: int = 3
    render_settle_timeout_ms: int = 15000
    render_jpeg_quality: int = 98

    qr_image_size: int = 200
    qr_left: float = 65.0
    qr_top: float = 85.0
    qr_box_size: float = 60.0

    output_dir: str = "output"
