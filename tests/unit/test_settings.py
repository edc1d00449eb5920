import pytest
from pydantic import ValidationError

from app.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        assert Settings().app_env == "dev"

    def test_default_pdf_engine(self) -> None:
        assert Settings().pdf_engine == "pymupdf"

    def test_default_raster_parameters(self) -> None:
        s = Settings()
        assert s.raster_scale == 2.0
        assert s.raster_jpeg_quality == 90

    def test_default_extraction_provider(self) -> None:
        s = Settings()
        assert s.extraction_provider == "openai"
        assert s.extraction_openai_timeout_seconds == 60

    def test_default_render_parameters(self) -> None:
        s = Settings()
        assert s.render_viewport_width == 800
        assert s.render_device_scale == 3

    def test_default_qr_placement(self) -> None:
        s = Settings()
        assert (s.qr_image_size, s.qr_left, s.qr_top, s.qr_box_size) == (200, 65.0, 85.0, 60.0)


class TestSettingsFromEnv:
    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        assert Settings().log_level == "DEBUG"

    def test_loads_extraction_provider(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EXTRACTION_PROVIDER", "example")
        assert Settings().extraction_provider == "example"

    def test_loads_raster_scale(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RASTER_SCALE", "3.5")
        assert Settings().raster_scale == 3.5


class TestSettingsValidation:
    def test_invalid_timeout_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EXTRACTION_OPENAI_TIMEOUT_SECONDS", "soon")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_qr_size_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("QR_IMAGE_SIZE", "big")
        with pytest.raises(ValidationError):
            Settings()
