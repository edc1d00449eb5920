import mimetypes

from app.processor.exceptions import InvalidFileType
from app.processor.models import (
    PDF_MEDIA_TYPE,
    SourceDocument,
    TemplateDocument,
    UploadedFile,
)

_PDF_MAGIC = b"%PDF-"


def detect_media_type(upload: UploadedFile) -> str | None:
    """Declared content type, else a guess from the filename, else PDF magic."""
    if upload.content_type:
        return upload.content_type.split(";")[0].strip().lower()
    guessed, _ = mimetypes.guess_type(upload.filename)
    if guessed:
        return guessed
    if upload.data.startswith(_PDF_MAGIC):
        return PDF_MEDIA_TYPE
    return None


class SourceLoader:
    """Validates that an upload is a PDF and wraps it as a SourceDocument."""

    def load(self, upload: UploadedFile) -> SourceDocument:
        """Validate and hold the source file in memory.

        Raises:
            InvalidFileType: if the media type is not application/pdf.
        """
        media_type = detect_media_type(upload)
        if media_type != PDF_MEDIA_TYPE:
            raise InvalidFileType(
                f"'{upload.filename}' is not a PDF (got {media_type or 'unknown'})"
            )
        return SourceDocument(filename=upload.filename, data=upload.data)


class TemplateLoader:
    """Validates that an upload is a Word .docx template."""

    def load(self, upload: UploadedFile) -> TemplateDocument:
        if not upload.filename.lower().endswith(".docx"):
            raise InvalidFileType(f"'{upload.filename}' is not a Word (.docx) template")
        return TemplateDocument(filename=upload.filename, data=upload.data)
