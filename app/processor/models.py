from base64 import b64encode
from dataclasses import asdict, dataclass, field, fields, replace
from enum import Enum

PDF_MEDIA_TYPE = "application/pdf"
DOCX_MEDIA_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)

REQUIRED_FIELDS: tuple[str, ...] = (
    "placa",
    "numero_motor",
    "numero_serie",
    "marca",
    "modelo",
)


@dataclass(frozen=True)
class UploadedFile:
    """A file handed to the workflow by the user, before validation."""

    filename: str
    data: bytes
    content_type: str | None = None


@dataclass(frozen=True)
class SourceDocument:
    """A validated scanned TIV PDF."""

    filename: str
    data: bytes


@dataclass(frozen=True)
class TemplateDocument:
    """A validated Word template containing «Placeholder» markers."""

    filename: str
    data: bytes


@dataclass
class ExtractedRecord:
    """Fields recognized from a TIV card. Absent values are empty strings."""

    titulo_numero: str = ""
    fecha: str = ""
    zona_registral: str = ""
    sede_registral: str = ""
    partida_registral: str = ""
    dua_dam: str = ""
    placa: str = ""
    categoria: str = ""
    marca: str = ""
    modelo: str = ""
    color: str = ""
    numero_vin: str = ""
    numero_serie: str = ""
    numero_motor: str = ""
    carroceria: str = ""
    potencia: str = ""
    combustible: str = ""
    form_rod: str = ""
    version: str = ""
    anio_fabricacion: str = ""
    anio_modelo: str = ""
    asientos: str = ""
    pasajeros: str = ""
    ruedas: str = ""
    ejes: str = ""
    cilindros: str = ""
    cilindrada: str = ""
    longitud: str = ""
    altura: str = ""
    ancho: str = ""
    peso_bruto: str = ""
    peso_neto: str = ""
    carga_util: str = ""
    codigo_verificacion: str = ""
    qr_data: str | None = None

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Names of the string fields, excluding qr_data."""
        return tuple(f.name for f in fields(cls) if f.name != "qr_data")

    def with_updates(self, **changes: str | None) -> "ExtractedRecord":
        unknown = set(changes) - set(self.field_names()) - {"qr_data"}
        if unknown:
            raise ValueError(f"Unknown record fields: {sorted(unknown)}")
        return replace(self, **changes)

    def to_dict(self) -> dict[str, str | None]:
        return asdict(self)


class StageStatus(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


class WorkflowStage(str, Enum):
    UPLOAD = "upload"
    REVIEW = "review"


@dataclass(frozen=True)
class RasterImage:
    """An encoded bitmap of a document page."""

    data: bytes
    width: int
    height: int
    media_type: str = "image/jpeg"

    def base64(self) -> str:
        """Header-less base64 payload, as sent to the extraction service."""
        return b64encode(self.data).decode("ascii")


@dataclass(frozen=True)
class Artifact:
    """A binary document produced by one workflow stage."""

    filename: str
    content_type: str
    data: bytes


@dataclass(frozen=True)
class RecognitionOutcome:
    record: ExtractedRecord
    extraction_status: StageStatus
    qr_status: StageStatus


@dataclass(frozen=True)
class StageResult:
    """Artifact produced by a user-gated stage, plus an optional advisory."""

    artifact: Artifact
    advisory: str = ""


@dataclass
class WorkflowState:
    """Single in-memory state of the TIV workflow.

    Artifacts form a chain: filled_template -> rendered_document ->
    final_document. A later artifact is only set while every earlier one is.
    """

    source: SourceDocument | None = None
    template: TemplateDocument | None = None
    record: ExtractedRecord = field(default_factory=ExtractedRecord)
    stage: WorkflowStage = WorkflowStage.UPLOAD
    extraction_status: StageStatus = StageStatus.PENDING
    qr_status: StageStatus = StageStatus.PENDING
    filled_template: Artifact | None = None
    rendered_document: Artifact | None = None
    final_document: Artifact | None = None
    generation: int = 0
    error: str = ""
    advisory: str = ""

    @property
    def template_done(self) -> bool:
        return self.filled_template is not None

    @property
    def render_done(self) -> bool:
        return self.template_done and self.rendered_document is not None

    @property
    def embed_enabled(self) -> bool:
        return self.render_done

    def clear_artifacts(self) -> None:
        self.filled_template = None
        self.rendered_document = None
        self.final_document = None

    def copy(self) -> "WorkflowState":
        return replace(self, record=replace(self.record))
