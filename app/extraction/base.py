from abc import ABC, abstractmethod

from app.processor.models import ExtractedRecord, RasterImage


class BaseExtractor(ABC):
    """Contract for all structured field extractors."""

    @abstractmethod
    def extract(self, image: RasterImage) -> ExtractedRecord:
        """Recognize TIV fields in a rasterized page.

        Args:
            image: JPEG bitmap of page 1 of the source document.

        Returns:
            ExtractedRecord with every recognized field; qr_data is left unset.

        Raises:
            ExtractionError: if the service returns no payload or a malformed one.
        """
