from app.logging.logger import Log
from app.processor.exceptions import RenderError
from app.rendering.assembler import PdfAssembler
from app.rendering.paginator import paginate
from app.rendering.surface import BaseRenderSurface


class DocumentRenderer:
    """Turns a filled .docx into a paginated, image-based PDF."""

    def __init__(self, surface: BaseRenderSurface, assembler: PdfAssembler) -> None:
        self._surface = surface
        self._assembler = assembler

    def render(self, docx_bytes: bytes) -> bytes:
        """Render, paginate and assemble.

        Raises:
            RenderError: if any of the three steps fails.
        """
        bitmap = self._surface.capture(docx_bytes)
        Log.info(f"Captured document bitmap {bitmap.width}x{bitmap.height}")
        try:
            pages = paginate(bitmap, self._assembler.page_size)
            pdf_bytes = self._assembler.assemble(pages)
        except RenderError:
            raise
        except Exception as exc:
            raise RenderError(f"PDF assembly failed: {exc}") from exc
        Log.info(f"Rendered PDF with {len(pages)} page(s), {len(pdf_bytes)} bytes")
        return pdf_bytes
