import io

import qrcode
from PIL import Image

from app.processor.exceptions import EmbedError


class QrEncoder:
    """Generates a square PNG QR code image with medium error correction."""

    def __init__(self, size: int = 200, border: int = 2) -> None:
        self._size = size
        self._border = border

    def encode(self, text: str) -> bytes:
        """Encode text as a size x size PNG.

        Raises:
            EmbedError: if text is empty or the code cannot be generated.
        """
        if not text:
            raise EmbedError("Cannot generate a QR code from empty data")
        try:
            qr = qrcode.QRCode(
                error_correction=qrcode.constants.ERROR_CORRECT_M,
                border=self._border,
            )
            qr.add_data(text)
            qr.make(fit=True)
            raw = io.BytesIO()
            qr.make_image(fill_color="black", back_color="white").save(raw)
            raw.seek(0)
            with Image.open(raw) as image:
                scaled = image.convert("RGB").resize(
                    (self._size, self._size), Image.Resampling.NEAREST
                )
            out = io.BytesIO()
            scaled.save(out, format="PNG")
            return out.getvalue()
        except Exception as exc:
            raise EmbedError(f"QR generation failed: {exc}") from exc
