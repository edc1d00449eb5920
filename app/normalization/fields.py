"""Derived display fields for the TIV Word template.

All functions are total: missing input yields an empty derived value.
"""

from app.processor.models import ExtractedRecord

ZONE_LABEL = "ZONA REGISTRAL N° "


def invert_title(value: str) -> str:
    """Swap the two halves of a title number: "2023-123456" -> "123456-2023".

    Values with zero or several hyphens are returned unchanged.
    """
    parts = value.split("-")
    if len(parts) != 2:
        return value
    return f"{parts[1]}-{parts[0]}"


def date_only(value: str) -> str:
    """Date part of a "dd/mm/yyyy hh:mm:ss" timestamp."""
    return value.split(" ", 1)[0]


def full_zone(value: str) -> str:
    if not value:
        return ""
    return f"{ZONE_LABEL}{value}"


def build_template_fields(record: ExtractedRecord) -> dict[str, str]:
    """Map a record onto the placeholder names used by the Word template."""
    return {
        "Contador": record.codigo_verificacion,
        "Placa": record.placa,
        "Titulo_Invertido": invert_title(record.titulo_numero),
        "Fecha": record.fecha,
        "Zona_Registral_Completa": full_zone(record.zona_registral),
        "Sede_Registral": record.sede_registral,
        "Partida_Nro": record.partida_registral,
        "DUA": record.dua_dam,
        "Titulo_Nro": record.titulo_numero,
        "Fecha_Solo": date_only(record.fecha),
        "Cilindrada": record.cilindrada,
        "Peso_Bruto": record.peso_bruto,
        "Peso_Neto": record.peso_neto,
        "Carga_Util": record.carga_util,
        "Nro_Cilindros": record.cilindros,
        "Longitud": record.longitud,
        "Altura": record.altura,
        "Ancho": record.ancho,
        "Nro_Version": record.version,
        "Tipo_Combustible": record.combustible,
        "Formula_Rodante": record.form_rod,
        "Potencia_Motor": record.potencia,
        "Tipo_Carroceria": record.carroceria,
        "Nro_Motor": record.numero_motor,
        "Nro_Serie": record.numero_serie,
        "Nro_VIN": record.numero_vin,
        "Color": record.color,
        "Nro_Asientos": record.asientos,
        "Nro_Pasajeros": record.pasajeros,
        "Nro_Ruedas": record.ruedas,
        "Nro_Ejes": record.ejes,
        "Año_Modelo": record.anio_modelo,
        "Modelo": record.modelo,
        "Marca": record.marca,
        "Categoria": record.categoria,
    }
