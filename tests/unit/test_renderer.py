from unittest.mock import MagicMock

import pymupdf
import pytest
from PIL import Image

from app.processor.exceptions import RenderError
from app.rendering.assembler import PdfAssembler
from app.rendering.renderer import DocumentRenderer
from app.rendering.surface import BaseRenderSurface


class FakeSurface(BaseRenderSurface):
    def __init__(self, bitmap: Image.Image) -> None:
        self.bitmap = bitmap
        self.captured: list[bytes] = []

    def capture(self, docx_bytes: bytes) -> Image.Image:
        self.captured.append(docx_bytes)
        return self.bitmap


def _page_count(pdf_bytes: bytes) -> int:
    with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:
        return doc.page_count


class TestDocumentRenderer:
    def test_short_document_renders_one_page(self) -> None:
        surface = FakeSurface(Image.new("RGB", (800, 600), "white"))
        pdf = DocumentRenderer(surface, PdfAssembler()).render(b"docx")
        assert pdf.startswith(b"%PDF")
        assert _page_count(pdf) == 1
        assert surface.captured == [b"docx"]

    def test_tall_document_renders_several_pages(self) -> None:
        # 2.3 A4 page heights at 800 px wide
        surface = FakeSurface(Image.new("RGB", (800, 2602), "white"))
        pdf = DocumentRenderer(surface, PdfAssembler()).render(b"docx")
        assert _page_count(pdf) == 3

    def test_surface_error_propagates(self) -> None:
        surface = MagicMock(spec=BaseRenderSurface)
        surface.capture.side_effect = RenderError("no browser")
        with pytest.raises(RenderError, match="no browser"):
            DocumentRenderer(surface, PdfAssembler()).render(b"docx")

    def test_assembly_failure_is_wrapped(self) -> None:
        assembler = MagicMock(spec=PdfAssembler)
        assembler.page_size = (100.0, 200.0)
        assembler.assemble.side_effect = OSError("disk")
        surface = FakeSurface(Image.new("RGB", (100, 100), "white"))
        with pytest.raises(RenderError, match="PDF assembly failed"):
            DocumentRenderer(surface, assembler).render(b"docx")
