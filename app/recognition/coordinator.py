from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import replace

from app.extraction.base import BaseExtractor
from app.logging.logger import Log
from app.processor.exceptions import ExtractionError
from app.processor.models import (
    ExtractedRecord,
    RasterImage,
    RecognitionOutcome,
    StageStatus,
)
from app.qr.decoder import QrDecoder

StatusCallback = Callable[[str, StageStatus], None]

EXTRACTION = "extraction"
QR = "qr"


class RecognitionCoordinator:
    """Runs structured extraction and QR decoding concurrently on one bitmap.

    Extraction is mandatory: its failure aborts recognition and the QR result
    is dropped. QR decoding is optional: a failure or an empty result only
    yields qr_data=None.
    """

    def __init__(self, extractor: BaseExtractor, qr_decoder: QrDecoder) -> None:
        self._extractor = extractor
        self._qr_decoder = qr_decoder

    def recognize(
        self,
        image: RasterImage,
        on_status: StatusCallback | None = None,
    ) -> RecognitionOutcome:
        """Fan out to both recognizers and join.

        on_status is called once per recognizer with its own outcome, also
        when extraction fails and the join raises.

        Raises:
            ExtractionError: if structured extraction fails.
        """
        Log.info("Running field extraction and QR decoding")
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="recognition") as pool:
            extraction = pool.submit(self._extractor.extract, image)
            decoding = pool.submit(self._qr_decoder.decode, image)
            wait([extraction, decoding])

        qr_data = self._qr_result(decoding)
        extraction_status = (
            StageStatus.FAILED if extraction.exception() is not None else StageStatus.SUCCESS
        )
        qr_status = StageStatus.SUCCESS if qr_data else StageStatus.FAILED
        self._emit(on_status, EXTRACTION, extraction_status)
        self._emit(on_status, QR, qr_status)

        record = self._extraction_result(extraction)
        if qr_data is None:
            Log.warning("No QR code decoded; continuing without verification data")
        return RecognitionOutcome(
            record=replace(record, qr_data=qr_data),
            extraction_status=extraction_status,
            qr_status=qr_status,
        )

    @staticmethod
    def _extraction_result(extraction: "Future[ExtractedRecord]") -> ExtractedRecord:
        try:
            return extraction.result()
        except ExtractionError:
            raise
        except Exception as exc:
            raise ExtractionError(f"Field extraction failed: {exc}") from exc

    @staticmethod
    def _qr_result(decoding: "Future[str | None]") -> str | None:
        try:
            return decoding.result() or None
        except Exception as exc:
            Log.warning(f"QR decoding failed: {exc}")
            return None

    @staticmethod
    def _emit(on_status: StatusCallback | None, name: str, status: StageStatus) -> None:
        Log.info(f"Recognizer '{name}' finished: {status.value}")
        if on_status is not None:
            on_status(name, status)
