import io

import pdfplumber

from app.pdf.base import BaseRasterizer
from app.processor.exceptions import RenderError
from app.processor.models import RasterImage

_POINTS_PER_INCH = 72


class PdfPlumberRasterizer(BaseRasterizer):
    """Renders the first PDF page using pdfplumber's page images."""

    def rasterize(self, pdf_bytes: bytes) -> RasterImage:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                if not pdf.pages:
                    raise RenderError("PDF has no pages")
                page_image = pdf.pages[0].to_image(
                    resolution=_POINTS_PER_INCH * self._scale
                )
                image = page_image.original.convert("RGB")
            buf = io.BytesIO()
            image.save(buf, format="JPEG", quality=self._jpeg_quality)
            return RasterImage(data=buf.getvalue(), width=image.width, height=image.height)
        except RenderError:
            raise
        except Exception as exc:
            raise RenderError(f"pdfplumber rasterization failed: {exc}") from exc
