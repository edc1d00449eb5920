"""Tests for derived template fields."""

import pytest

from app.normalization.fields import (
    build_template_fields,
    date_only,
    full_zone,
    invert_title,
)
from app.processor.models import ExtractedRecord


class TestInvertTitle:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("2023-1234567", "1234567-2023"),
            ("1234567-2023", "2023-1234567"),
            ("AB-CD", "CD-AB"),
            ("2023-", "-2023"),
        ],
    )
    def test_swaps_two_part_identifiers(self, value: str, expected: str) -> None:
        assert invert_title(value) == expected

    @pytest.mark.parametrize("value", ["", "20231234567", "2023-12-345", "a-b-c-d"])
    def test_leaves_other_shapes_unchanged(self, value: str) -> None:
        assert invert_title(value) == value

    def test_year_position_does_not_matter(self) -> None:
        assert invert_title(invert_title("2023-99")) == "2023-99"


class TestDateOnly:
    def test_truncates_at_first_space(self) -> None:
        assert date_only("15/03/2023 10:42:17") == "15/03/2023"

    def test_truncates_at_first_of_several_spaces(self) -> None:
        assert date_only("15/03/2023 10:42 PM") == "15/03/2023"

    def test_returns_input_without_space(self) -> None:
        assert date_only("15/03/2023") == "15/03/2023"

    def test_empty_stays_empty(self) -> None:
        assert date_only("") == ""


class TestFullZone:
    def test_prefixes_label(self) -> None:
        assert full_zone("IX") == "ZONA REGISTRAL N° IX"

    def test_empty_stays_empty(self) -> None:
        assert full_zone("") == ""


class TestBuildTemplateFields:
    def test_maps_record_to_placeholders(self, sample_record: ExtractedRecord) -> None:
        fields = build_template_fields(sample_record)
        assert fields["Placa"] == "ABC-123"
        assert fields["Titulo_Invertido"] == "1234567-2023"
        assert fields["Titulo_Nro"] == "2023-1234567"
        assert fields["Fecha"] == "15/03/2023 10:42:17"
        assert fields["Fecha_Solo"] == "15/03/2023"
        assert fields["Zona_Registral_Completa"] == "ZONA REGISTRAL N° IX"
        assert fields["Contador"] == "91827364"
        assert fields["Marca"] == "HONDA"

    def test_empty_record_yields_empty_strings(self) -> None:
        fields = build_template_fields(ExtractedRecord())
        assert len(fields) == 35
        assert all(value == "" for value in fields.values())

    def test_qr_data_is_not_a_placeholder(self, sample_record: ExtractedRecord) -> None:
        fields = build_template_fields(sample_record)
        assert sample_record.qr_data not in fields.values()
