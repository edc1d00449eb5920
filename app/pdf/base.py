from abc import ABC, abstractmethod

from app.processor.models import RasterImage


class BaseRasterizer(ABC):
    """Contract for all PDF rasterization adapters."""

    DEFAULT_SCALE = 2.0
    DEFAULT_JPEG_QUALITY = 90

    def __init__(
        self,
        scale: float = DEFAULT_SCALE,
        jpeg_quality: int = DEFAULT_JPEG_QUALITY,
    ) -> None:
        self._scale = scale
        self._jpeg_quality = jpeg_quality

    @abstractmethod
    def rasterize(self, pdf_bytes: bytes) -> RasterImage:
        """Render page 1 of a PDF into a JPEG bitmap.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            RasterImage with JPEG data at the configured magnification.

        Raises:
            RenderError: if the PDF is corrupt or page 1 cannot be decoded.
        """
