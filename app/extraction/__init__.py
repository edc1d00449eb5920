from app.extraction.base import BaseExtractor
from app.extraction.extractor import StructuredExtractor
from app.extraction.factory import ExtractorFactory

__all__ = ["BaseExtractor", "ExtractorFactory", "StructuredExtractor"]
