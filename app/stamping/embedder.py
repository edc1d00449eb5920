from dataclasses import dataclass

import pymupdf

from app.logging.logger import Log
from app.processor.exceptions import EmbedError
from app.qr.encoder import QrEncoder

NO_QR_ADVISORY = "No QR data detected in the source; final PDF is unstamped."


@dataclass(frozen=True)
class EmbedResult:
    data: bytes
    stamped: bool
    advisory: str = ""


class CodeEmbedder:
    """Stamps a regenerated QR code on page 1 of the rendered PDF.

    Placement is given in PDF user space (origin bottom-left): the image's
    left edge sits `left` points from the page edge and its top edge `top`
    points below the top of the page.
    """

    def __init__(
        self,
        encoder: QrEncoder,
        left: float = 65.0,
        top: float = 85.0,
        size: float = 60.0,
    ) -> None:
        self._encoder = encoder
        self._left = left
        self._top = top
        self._size = size

    def stamp_origin(self, page_height: float) -> tuple[float, float]:
        """Bottom-left corner of the stamp in bottom-up PDF coordinates."""
        return self._left, page_height - self._top - self._size

    def stamp_rect(self, page_height: float) -> pymupdf.Rect:
        """Stamp rectangle in PyMuPDF's top-down page coordinates."""
        x, y = self.stamp_origin(page_height)
        top = page_height - (y + self._size)
        return pymupdf.Rect(x, top, x + self._size, top + self._size)

    def embed(self, pdf_bytes: bytes, qr_data: str | None) -> EmbedResult:
        """Return the stamped PDF, or the input untouched when there is no QR data.

        Raises:
            EmbedError: if the QR image cannot be generated or drawn.
        """
        if not qr_data:
            Log.warning(NO_QR_ADVISORY)
            return EmbedResult(data=pdf_bytes, stamped=False, advisory=NO_QR_ADVISORY)

        png = self._encoder.encode(qr_data)
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                if doc.page_count == 0:
                    raise EmbedError("Rendered PDF has no pages")
                page = doc.load_page(0)
                page.insert_image(self.stamp_rect(page.rect.height), stream=png)
                stamped = doc.tobytes(garbage=3, deflate=True)
        except EmbedError:
            raise
        except Exception as exc:
            raise EmbedError(f"Cannot stamp QR code: {exc}") from exc
        Log.info(f"Stamped QR code on page 1 ({len(stamped)} bytes)")
        return EmbedResult(data=stamped, stamped=True)
