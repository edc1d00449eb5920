from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING

from app.config.settings import Settings
from app.logging.logger import Log
from app.pdf.base import BaseRasterizer
from app.processor.capabilities import check_dependencies
from app.processor.exceptions import InvalidFileType, PrecursorMissing, WorkflowError
from app.processor.file_loader import SourceLoader, TemplateLoader
from app.processor.models import (
    RecognitionOutcome,
    StageResult,
    StageStatus,
    UploadedFile,
    WorkflowStage,
    WorkflowState,
)
from app.processor.pipeline import PipelineStep
from app.processor.steps import EmbedCodeStep, FillTemplateStep, RenderDocumentStep

if TYPE_CHECKING:
    from app.recognition.coordinator import RecognitionCoordinator
    from app.rendering.renderer import DocumentRenderer
    from app.stamping.embedder import CodeEmbedder
    from app.templating.filler import DocxTemplateFiller


class TivWorkflow:
    """Owns the single in-memory workflow state and gates every stage.

    Flow: load source -> recognize -> (edit fields) -> fill template ->
    render PDF -> embed QR. A failed stage leaves the state as it was.
    """

    def __init__(
        self,
        *,
        source_loader: SourceLoader,
        template_loader: TemplateLoader,
        rasterizer: BaseRasterizer,
        coordinator: RecognitionCoordinator,
        filler: DocxTemplateFiller,
        renderer: DocumentRenderer,
        embedder: CodeEmbedder,
    ) -> None:
        self._source_loader = source_loader
        self._template_loader = template_loader
        self._rasterizer = rasterizer
        self._coordinator = coordinator
        self._fill_step = FillTemplateStep(filler)
        self._render_step = RenderDocumentStep(renderer)
        self._embed_step = EmbedCodeStep(embedder)
        self._state = WorkflowState()

    @property
    def state(self) -> WorkflowState:
        return self._state

    def load_source(self, upload: UploadedFile) -> None:
        try:
            self._state.source = self._source_loader.load(upload)
        except InvalidFileType as exc:
            self._fail("load_source", exc)
            raise
        self._state.error = ""
        Log.info(f"Loaded source '{upload.filename}' ({len(upload.data)} bytes)")

    def load_template(self, upload: UploadedFile) -> None:
        try:
            self._state.template = self._template_loader.load(upload)
        except InvalidFileType as exc:
            self._fail("load_template", exc)
            raise
        self._state.clear_artifacts()
        self._state.advisory = ""
        self._state.error = ""
        Log.info(f"Loaded template '{upload.filename}'")

    def recognize(self) -> RecognitionOutcome | None:
        """Rasterize the source and run both recognizers.

        Returns None when the workflow was reset while recognition ran; the
        late result is discarded.

        Raises:
            PrecursorMissing: if no source is loaded.
            RenderError: if the source cannot be rasterized.
            ExtractionError: if structured extraction fails.
        """
        source = self._state.source
        if source is None:
            raise PrecursorMissing("Load a source PDF before recognition")
        generation = self._state.generation
        try:
            image = self._rasterizer.rasterize(source.data)
        except WorkflowError as exc:
            self._fail("recognize", exc)
            raise
        Log.info(f"Rasterized '{source.filename}' to {image.width}x{image.height}")

        # Statuses only reset once both recognizers are about to run.
        self._state.extraction_status = StageStatus.PENDING
        self._state.qr_status = StageStatus.PENDING
        self._state.error = ""
        try:
            outcome = self._coordinator.recognize(
                image, on_status=partial(self._set_status, generation)
            )
        except WorkflowError as exc:
            if generation == self._state.generation:
                self._fail("recognize", exc)
            raise

        if generation != self._state.generation:
            Log.warning("Workflow was reset during recognition; discarding result")
            return None
        self._state.record = outcome.record
        self._state.stage = WorkflowStage.REVIEW
        self._state.clear_artifacts()
        return outcome

    def update_field(self, name: str, value: str) -> None:
        """Apply a user edit to the record; invalidates every artifact."""
        self._state.record = self._state.record.with_updates(**{name: value})
        self._state.clear_artifacts()
        self._state.advisory = ""

    def fill_template(self) -> StageResult:
        return self._run_stage(self._fill_step, "filled_template")

    def render_document(self) -> StageResult:
        return self._run_stage(self._render_step, "rendered_document")

    def embed_code(self) -> StageResult:
        return self._run_stage(self._embed_step, "final_document")

    def reset(self) -> None:
        """Start over with a new source; the loaded template is kept."""
        self._state = WorkflowState(
            template=self._state.template,
            generation=self._state.generation + 1,
        )
        Log.info("Workflow reset")

    def _run_stage(self, step: PipelineStep, artifact_attr: str) -> StageResult:
        Log.info(f"Stage '{step.name}' started")
        try:
            candidate = step.run(self._state.copy())
        except WorkflowError as exc:
            self._fail(step.name, exc)
            raise
        candidate.error = ""
        self._state = candidate
        artifact = getattr(candidate, artifact_attr)
        Log.info(f"Stage '{step.name}' finished: {len(artifact.data)} bytes")
        return StageResult(artifact=artifact, advisory=candidate.advisory)

    def _set_status(self, generation: int, name: str, status: StageStatus) -> None:
        if generation != self._state.generation:
            return
        setattr(self._state, f"{name}_status", status)

    def _fail(self, stage: str, exc: Exception) -> None:
        Log.error(f"Stage '{stage}' failed: {exc}")
        self._state.error = str(exc)


def build_workflow(settings: Settings) -> TivWorkflow:
    """Build a TivWorkflow with all configured adapters.

    Raises:
        MissingDependency: if a required third-party package is not installed.
    """
    check_dependencies()

    # Imported after the capability check so a missing package fails cleanly.
    from app.extraction.factory import ExtractorFactory
    from app.pdf.factory import RasterizerFactory
    from app.qr.decoder import QrDecoder
    from app.qr.encoder import QrEncoder
    from app.recognition.coordinator import RecognitionCoordinator
    from app.rendering.assembler import PdfAssembler
    from app.rendering.renderer import DocumentRenderer
    from app.rendering.surface import BrowserRenderSurface
    from app.stamping.embedder import CodeEmbedder
    from app.templating.filler import DocxTemplateFiller

    coordinator = RecognitionCoordinator(
        extractor=ExtractorFactory.create(settings),
        qr_decoder=QrDecoder(),
    )
    renderer = DocumentRenderer(
        surface=BrowserRenderSurface(
            viewport_width=settings.render_viewport_width,
            device_scale=settings.render_device_scale,
            settle_timeout_ms=settings.render_settle_timeout_ms,
        ),
        assembler=PdfAssembler(jpeg_quality=settings.render_jpeg_quality),
    )
    embedder = CodeEmbedder(
        encoder=QrEncoder(size=settings.qr_image_size),
        left=settings.qr_left,
        top=settings.qr_top,
        size=settings.qr_box_size,
    )
    return TivWorkflow(
        source_loader=SourceLoader(),
        template_loader=TemplateLoader(),
        rasterizer=RasterizerFactory.create(settings),
        coordinator=coordinator,
        filler=DocxTemplateFiller(),
        renderer=renderer,
        embedder=embedder,
    )
