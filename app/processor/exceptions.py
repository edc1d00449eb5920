class WorkflowError(Exception):
    """Base exception for all workflow stage errors."""


class InvalidFileType(WorkflowError):
    """Raised when an uploaded file is not of the expected media type."""


class RenderError(WorkflowError):
    """Raised when a document cannot be rasterized or rendered."""


class ExtractionError(WorkflowError):
    """Raised when structured field extraction fails."""


class ExtractionValidationError(ExtractionError):
    """Raised when the extraction payload violates the record schema."""


class ExtractionNetworkError(ExtractionError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class TemplateError(WorkflowError):
    """Raised when a template cannot be parsed or filled."""


class PrecursorMissing(WorkflowError):
    """Raised when a stage runs before the artifact it consumes exists."""


class EmbedError(WorkflowError):
    """Raised when the QR code cannot be generated or stamped."""


class MissingDependency(WorkflowError):
    """Raised at startup when a required third-party module is not importable."""
