"""End-to-end run of the TIV workflow with a stubbed browser surface."""

import pymupdf
import pytest
from PIL import Image

from app.config.settings import Settings
from app.extraction.factory import ExtractorFactory
from app.pdf.pymupdf_adapter import PyMuPdfRasterizer
from app.processor.file_loader import SourceLoader, TemplateLoader
from app.processor.models import StageStatus, UploadedFile, WorkflowStage
from app.processor.workflow import TivWorkflow
from app.qr.decoder import QrDecoder
from app.qr.encoder import QrEncoder
from app.recognition.coordinator import RecognitionCoordinator
from app.rendering.assembler import PdfAssembler
from app.rendering.renderer import DocumentRenderer
from app.rendering.surface import BaseRenderSurface
from app.stamping.embedder import NO_QR_ADVISORY, CodeEmbedder
from app.templating.filler import DocxTemplateFiller


class WhitePageSurface(BaseRenderSurface):
    """Stands in for headless Chromium: a page-and-a-half tall white bitmap."""

    def capture(self, docx_bytes: bytes) -> Image.Image:
        assert docx_bytes.startswith(b"PK")
        return Image.new("RGB", (800, 1700), "white")


def _first_page_pixels(pdf_bytes: bytes) -> bytes:
    with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:
        return doc[0].get_pixmap().samples


@pytest.fixture()
def workflow() -> TivWorkflow:
    coordinator = RecognitionCoordinator(
        extractor=ExtractorFactory.create(Settings(extraction_provider="example")),
        qr_decoder=QrDecoder(),
    )
    return TivWorkflow(
        source_loader=SourceLoader(),
        template_loader=TemplateLoader(),
        rasterizer=PyMuPdfRasterizer(),
        coordinator=coordinator,
        filler=DocxTemplateFiller(),
        renderer=DocumentRenderer(WhitePageSurface(), PdfAssembler()),
        embedder=CodeEmbedder(QrEncoder()),
    )


@pytest.mark.integration
class TestTivWorkflow:
    def test_source_with_qr_produces_stamped_pdf(
        self,
        workflow: TivWorkflow,
        qr_pdf_bytes: bytes,
        template_docx_bytes: bytes,
        qr_payload: str,
    ) -> None:
        workflow.load_source(UploadedFile(filename="tiv.pdf", data=qr_pdf_bytes))
        workflow.load_template(UploadedFile(filename="plantilla.docx", data=template_docx_bytes))
        outcome = workflow.recognize()

        assert outcome is not None
        assert outcome.record.qr_data == qr_payload
        assert workflow.state.stage is WorkflowStage.REVIEW
        assert workflow.state.extraction_status is StageStatus.SUCCESS
        assert workflow.state.qr_status is StageStatus.SUCCESS

        filled = workflow.fill_template()
        rendered = workflow.render_document()
        final = workflow.embed_code()

        assert filled.artifact.filename == "1_ENMICADO_WORD_ABC-123.docx"
        assert rendered.artifact.data.startswith(b"%PDF")
        assert final.artifact.filename == "3_ENMICADO_FINAL_QR_ABC-123.pdf"
        assert final.advisory == ""
        with pymupdf.open(stream=rendered.artifact.data, filetype="pdf") as doc:
            assert doc.page_count == 2
        assert _first_page_pixels(final.artifact.data) != _first_page_pixels(
            rendered.artifact.data
        )

    def test_source_without_qr_leaves_pdf_unstamped(
        self,
        workflow: TivWorkflow,
        sample_pdf_bytes: bytes,
        template_docx_bytes: bytes,
    ) -> None:
        workflow.load_source(UploadedFile(filename="tiv.pdf", data=sample_pdf_bytes))
        workflow.load_template(UploadedFile(filename="plantilla.docx", data=template_docx_bytes))
        workflow.recognize()
        assert workflow.state.qr_status is StageStatus.FAILED

        workflow.fill_template()
        rendered = workflow.render_document()
        final = workflow.embed_code()
        assert final.advisory == NO_QR_ADVISORY
        assert final.artifact.data == rendered.artifact.data
