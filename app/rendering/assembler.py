import io

from PIL import Image
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas


class PdfAssembler:
    """Builds a PDF with one full-width JPEG image per page."""

    def __init__(
        self,
        page_size: tuple[float, float] = A4,
        jpeg_quality: int = 98,
    ) -> None:
        self._page_size = page_size
        self._jpeg_quality = jpeg_quality

    @property
    def page_size(self) -> tuple[float, float]:
        return self._page_size

    def assemble(self, pages: list[Image.Image]) -> bytes:
        """Place each bitmap on its own page.

        Several pages fill the page entirely. A single page keeps its
        aspect ratio and is anchored to the top edge.
        """
        if not pages:
            raise ValueError("Cannot assemble a PDF without pages")
        page_width, page_height = self._page_size
        buf = io.BytesIO()
        pdf = canvas.Canvas(buf, pagesize=self._page_size)
        for bitmap in pages:
            if len(pages) > 1:
                draw_height = page_height
            else:
                draw_height = page_width * bitmap.height / bitmap.width
            pdf.drawImage(
                ImageReader(self._encode(bitmap)),
                0,
                page_height - draw_height,
                width=page_width,
                height=draw_height,
            )
            pdf.showPage()
        pdf.save()
        return buf.getvalue()

    def _encode(self, bitmap: Image.Image) -> io.BytesIO:
        out = io.BytesIO()
        bitmap.convert("RGB").save(out, format="JPEG", quality=self._jpeg_quality)
        out.seek(0)
        return out
