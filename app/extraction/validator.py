"""Validates the raw extraction payload and builds an ExtractedRecord."""

from typing import Any

from app.logging.logger import Log
from app.processor.exceptions import ExtractionValidationError
from app.processor.models import REQUIRED_FIELDS, ExtractedRecord

PLACEHOLDER_TOKENS = frozenset({"", "-", "--", "---", "N/A", "NA", "SIN VERSION", "NULL"})

# Order matters: mixed fuels mention a base fuel too, and hybrids count as electric.
_FUEL_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("ELECTRICO", ("ELECTRIC", "ELÉCTRIC")),
    ("BI-COMBUSTIBLE", ("BI-COMB", "BICOMB", "BI COMB", "DUAL", "/", "+")),
    ("DIESEL", ("DIESEL", "DIÉSEL", "PETROLEO", "PETRÓLEO")),
    ("GLP", ("GLP", "LPG")),
    ("GNV", ("GNV", "CNG")),
    ("GASOLINA", ("GASOLIN", "PETROL")),
)


def validate_and_build(data: dict[str, Any]) -> ExtractedRecord:
    """Validate raw parsed JSON and build an ExtractedRecord.

    Unknown keys are ignored and missing keys default to "". Required
    fields are not enforced, only reported.

    Raises:
        ExtractionValidationError: if a known field is not a string, a number or null.
    """
    values: dict[str, str] = {}
    for name in ExtractedRecord.field_names():
        values[name] = clean_value(data.get(name), name)
    values["combustible"] = normalize_fuel(values["combustible"])

    missing = [name for name in REQUIRED_FIELDS if not values[name]]
    if missing:
        Log.warning(f"Extraction is missing required fields: {', '.join(missing)}")
    return ExtractedRecord(**values)


def clean_value(raw: Any, name: str) -> str:
    if raw is None:
        return ""
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        # Numbers from providers that ignore the strict schema.
        raw = str(int(raw)) if isinstance(raw, float) and raw.is_integer() else str(raw)
    if not isinstance(raw, str):
        raise ExtractionValidationError(
            f"'{name}' must be a string, a number or null, got {type(raw).__name__}"
        )
    value = raw.strip()
    if value.upper() in PLACEHOLDER_TOKENS:
        return ""
    return value


def normalize_fuel(value: str) -> str:
    """Map a fuel label onto the fixed vocabulary; unknown labels pass through."""
    upper = value.upper()
    if not upper:
        return ""
    for canonical, keywords in _FUEL_KEYWORDS:
        if any(keyword in upper for keyword in keywords):
            return canonical
    return upper
