import pymupdf

from app.pdf.base import BaseRasterizer
from app.processor.exceptions import RenderError
from app.processor.models import RasterImage


class PyMuPdfRasterizer(BaseRasterizer):
    """Renders the first PDF page using PyMuPDF."""

    def rasterize(self, pdf_bytes: bytes) -> RasterImage:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                if doc.page_count == 0:
                    raise RenderError("PDF has no pages")
                page = doc.load_page(0)
                matrix = pymupdf.Matrix(self._scale, self._scale)
                pixmap = page.get_pixmap(matrix=matrix, alpha=False)
                data = pixmap.tobytes(output="jpeg", jpg_quality=self._jpeg_quality)
                return RasterImage(data=data, width=pixmap.width, height=pixmap.height)
        except RenderError:
            raise
        except Exception as exc:
            raise RenderError(f"pymupdf rasterization failed: {exc}") from exc
