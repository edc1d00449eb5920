from __future__ import annotations

from typing import TYPE_CHECKING

from app.logging.logger import Log
from app.processor.exceptions import PrecursorMissing
from app.processor.models import (
    DOCX_MEDIA_TYPE,
    PDF_MEDIA_TYPE,
    Artifact,
    WorkflowStage,
    WorkflowState,
)
from app.processor.pipeline import PipelineStep

if TYPE_CHECKING:
    from app.rendering.renderer import DocumentRenderer
    from app.stamping.embedder import CodeEmbedder
    from app.templating.filler import DocxTemplateFiller


def artifact_filename(stage: int, placa: str) -> str:
    """Download name for a stage artifact, keyed by the vehicle plate."""
    if stage == 1:
        return f"1_ENMICADO_WORD_{placa or 'TEMP'}.docx"
    if stage == 2:
        return f"2_ENMICADO_PDF_{placa or 'TIV'}.pdf"
    if stage == 3:
        return f"3_ENMICADO_FINAL_QR_{placa or 'TIV'}.pdf"
    raise ValueError(f"Unknown artifact stage: {stage}")


class FillTemplateStep(PipelineStep):
    name = "fill_template"

    def __init__(self, filler: DocxTemplateFiller) -> None:
        self._filler = filler

    def run(self, context: WorkflowState) -> WorkflowState:
        if context.template is None:
            raise PrecursorMissing("Load a .docx template before filling it")
        if context.stage is not WorkflowStage.REVIEW:
            raise PrecursorMissing("Recognize the source PDF before filling the template")
        data = self._filler.fill(context.template, context.record)
        context.filled_template = Artifact(
            filename=artifact_filename(1, context.record.placa),
            content_type=DOCX_MEDIA_TYPE,
            data=data,
        )
        context.rendered_document = None
        context.final_document = None
        context.advisory = ""
        Log.info(f"Filled template: {context.filled_template.filename}")
        return context


class RenderDocumentStep(PipelineStep):
    name = "render_document"

    def __init__(self, renderer: DocumentRenderer) -> None:
        self._renderer = renderer

    def run(self, context: WorkflowState) -> WorkflowState:
        if context.filled_template is None:
            raise PrecursorMissing("No filled template available; run the template step first")
        data = self._renderer.render(context.filled_template.data)
        context.rendered_document = Artifact(
            filename=artifact_filename(2, context.record.placa),
            content_type=PDF_MEDIA_TYPE,
            data=data,
        )
        context.final_document = None
        context.advisory = ""
        Log.info(f"Rendered document: {context.rendered_document.filename}")
        return context


class EmbedCodeStep(PipelineStep):
    name = "embed_code"

    def __init__(self, embedder: CodeEmbedder) -> None:
        self._embedder = embedder

    def run(self, context: WorkflowState) -> WorkflowState:
        if context.filled_template is None or context.rendered_document is None:
            raise PrecursorMissing("No rendered PDF available; run the render step first")
        result = self._embedder.embed(context.rendered_document.data, context.record.qr_data)
        context.final_document = Artifact(
            filename=artifact_filename(3, context.record.placa),
            content_type=PDF_MEDIA_TYPE,
            data=result.data,
        )
        context.advisory = result.advisory
        Log.info(f"Final document: {context.final_document.filename}")
        return context
