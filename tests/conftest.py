import io

import docx
import pytest
import qrcode
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from app.processor.models import ExtractedRecord

QR_PAYLOAD = "https://tive.sunarp.gob.pe/verificar?c=91827364"


def _qr_png(text: str) -> bytes:
    image = qrcode.make(text, error_correction=qrcode.constants.ERROR_CORRECT_M)
    buf = io.BytesIO()
    image.save(buf)
    return buf.getvalue()


@pytest.fixture()
def qr_payload() -> str:
    return QR_PAYLOAD


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Single-page A4 PDF with TIV-like text and no QR code."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.drawString(72, 780, "TARJETA DE IDENTIFICACION VEHICULAR ELECTRONICA")
    c.drawString(400, 740, "PLACA ABC-123")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def qr_pdf_bytes() -> bytes:
    """Single-page A4 PDF with a large QR code in the top-left corner."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.drawString(300, 780, "PLACA ABC-123")
    c.drawImage(ImageReader(io.BytesIO(_qr_png(QR_PAYLOAD))), 60, 560, width=220, height=220)
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Valid PDF with a blank page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def template_docx_bytes() -> bytes:
    """Word template using «Field» markers in body, split runs, a table and a header."""
    document = docx.Document()
    document.sections[0].header.paragraphs[0].text = "«Zona_Registral_Completa» - «Sede_Registral»"
    document.add_paragraph("Placa: «Placa»")
    split = document.add_paragraph("Titulo: ")
    split.add_run("«Titulo_")
    bold = split.add_run("Invertido»")
    bold.bold = True
    split.add_run(" del «Fecha_Solo»")
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Marca"
    table.rows[0].cells[1].text = "«Marca» «Modelo»"
    document.add_paragraph("Desconocido: [«Campo_Inexistente»]")
    document.add_paragraph("Texto fijo sin marcadores")
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


@pytest.fixture()
def sample_record() -> ExtractedRecord:
    return ExtractedRecord(
        titulo_numero="2023-1234567",
        fecha="15/03/2023 10:42:17",
        zona_registral="IX",
        sede_registral="LIMA",
        placa="ABC-123",
        marca="HONDA",
        modelo="CB190R",
        numero_motor="SDH163FML1234567",
        numero_serie="LALPCJ0A8P3000001",
        codigo_verificacion="91827364",
        qr_data=QR_PAYLOAD,
    )
