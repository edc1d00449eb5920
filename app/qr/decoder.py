import cv2
import numpy as np

from app.logging.logger import Log
from app.processor.models import RasterImage


class QrDecoder:
    """Locates and decodes a QR code in a page bitmap with OpenCV.

    Absence of a code is not an error: decode() returns None.
    """

    def __init__(self) -> None:
        self._detector = cv2.QRCodeDetector()

    def decode(self, image: RasterImage) -> str | None:
        gray = self._to_grayscale(image)
        if gray is None:
            Log.warning("QR decode skipped: bitmap could not be decoded")
            return None

        text = self._detect(gray)
        if text is None:
            # Light modules on a dark background.
            text = self._detect(cv2.bitwise_not(gray))
        if text is None:
            Log.info("No QR code found in source image")
        return text

    @staticmethod
    def _to_grayscale(image: RasterImage) -> np.ndarray | None:
        buffer = np.frombuffer(image.data, dtype=np.uint8)
        if buffer.size == 0:
            return None
        return cv2.imdecode(buffer, cv2.IMREAD_GRAYSCALE)

    def _detect(self, gray: np.ndarray) -> str | None:
        try:
            text, _points, _straight = self._detector.detectAndDecode(gray)
        except cv2.error as exc:
            Log.warning(f"OpenCV QR detection failed: {exc}")
            return None
        return text or None
