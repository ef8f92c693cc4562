"""
Unit tests for RowCleaner.

Run: pytest tests/unit/test_row_cleaning_service.py -v
"""

import re
from datetime import date, datetime

import pytest

from models.asset_import import AssetKind, ColumnMapping, DataType
from services.header_mapping_service import HeaderMapper
from services.row_cleaning_service import (
    RowCleaner,
    to_number,
    to_iso_date,
    to_text,
    infer_model,
    infer_brand,
)
from tests.factories import ITAssetRowFactory


@pytest.fixture
def cleaner(id_generator):
    return RowCleaner(id_generator=id_generator, min_confidence=0.3)


@pytest.fixture
def today(id_generator):
    return id_generator.today().isoformat()


def mapping(original, field, confidence=0.9, data_type=DataType.TEXT):
    return ColumnMapping(
        original_name=original,
        mapped_field=field,
        confidence=confidence,
        data_type=data_type,
        matched_by="header_pattern",
    )


# ===================
# CONVERTERS
# ===================

class TestToNumber:
    """Tests for to_number()"""

    @pytest.mark.parametrize("value, expected", [
        ("16 Go", 16.0),
        ("512GB", 512.0),
        ("-2.5", -2.5),
        (8, 8.0),
        (7.5, 7.5),
    ])
    def test_parses_numbers(self, value, expected):
        assert to_number(value) == expected

    @pytest.mark.parametrize("value", ["abc", "", None, True, float("nan"), "1.2.3", datetime(2024, 1, 1)])
    def test_non_numeric_is_none(self, value):
        assert to_number(value) is None


class TestToIsoDate:
    """Tests for to_iso_date()"""

    def test_datetime(self):
        assert to_iso_date(datetime(2024, 3, 15, 10, 30)) == "2024-03-15"

    def test_date(self):
        assert to_iso_date(date(2024, 3, 15)) == "2024-03-15"

    def test_literal_layouts(self):
        assert to_iso_date("15/03/2024") == "2024-03-15"
        assert to_iso_date("15.03.2024") == "2024-03-15"

    def test_generic_parse(self):
        assert to_iso_date("2024-03-15T10:00:00") == "2024-03-15"

    @pytest.mark.parametrize("value", ["garbage", "", None, 42, "31.02.2024", "now", "today", "Tomorrow"])
    def test_unparseable_is_none(self, value):
        assert to_iso_date(value) is None


class TestToText:
    """Tests for to_text()"""

    @pytest.mark.parametrize("value, expected", [
        (None, ""),
        (float("nan"), ""),
        (12.0, "12"),
        (12.5, "12.5"),
        (612345678, "612345678"),
        ("  Dell ", "Dell"),
    ])
    def test_text(self, value, expected):
        assert to_text(value) == expected


class TestInference:
    """Tests for infer_model() / infer_brand()"""

    @pytest.mark.parametrize("device_type, model, brand", [
        ("PC Portable", "Laptop Computer", "Business Laptop"),
        ("Laptop", "Laptop Computer", "Business Laptop"),
        ("Ordinateur", "Desktop Computer", "Business Desktop"),
        ("Serveur", "Server System", "Enterprise Server"),
        ("Imprimante", "Network Printer", "Office Printer"),
        ("Moniteur", "LCD Monitor", "Business Monitor"),
        ("Switch", "Network Switch", "Network Equipment"),
        ("Scanner", "Scanner Device", "Business Equipment"),
    ])
    def test_from_device_type(self, device_type, model, brand):
        assert infer_model(device_type) == model
        assert infer_brand(device_type) == brand

    def test_missing_device_type(self):
        assert infer_model("") == "Unknown Model"
        assert infer_brand(None) == "Unknown Brand"


# ===================
# IT ROWS
# ===================

class TestCleanItRows:
    """Tests for IT row cleaning"""

    def test_end_to_end_example(self, cleaner, today):
        """Type / Marque / N° Série row gets mapped values plus defaults."""
        rows = [{"Type": "PC Portable", "Marque": "Dell", "N° Série": "SN-123456789"}]
        mappings = HeaderMapper().map_columns(rows, AssetKind.IT)

        cleaned = cleaner.clean_rows(rows, mappings, AssetKind.IT)

        assert len(cleaned) == 1
        row = cleaned[0]
        assert row["device_type"] == "PC Portable"
        assert row["brand"] == "Dell"
        assert row["serial_number"] == "SN-123456789"
        assert row["status"] == "active"
        assert row["department"] == "IT"
        assert row["zone"] == "Office"
        assert row["owner_name"] == "Unassigned"
        assert row["date"] == today
        assert row["model"] == "Laptop Computer"

    def test_synthesized_serial_for_laptop(self, cleaner):
        rows = [{"Type": "Laptop", "Utilisateur": "Jean Dupont"}]
        mappings = [mapping("Type", "device_type", 1.0), mapping("Utilisateur", "owner_name")]

        row = cleaner.clean_rows(rows, mappings, AssetKind.IT)[0]

        assert row["serial_number"].startswith("LAP-")
        assert re.fullmatch(r"LAP-1710504000000-JEA-[0-9a-z]{9}", row["serial_number"])

    def test_serial_found_elsewhere_in_row(self, cleaner):
        """An unmapped serial-shaped value is used before synthesizing."""
        rows = [{"Type": "Laptop", "Divers": "XYZ12345678"}]

        row = cleaner.clean_rows(rows, [mapping("Type", "device_type", 1.0)], AssetKind.IT)[0]

        assert row["serial_number"] == "XYZ12345678"

    def test_words_are_not_taken_for_serials(self, cleaner):
        rows = [{"Type": "Laptop", "Ville": "Casablanca"}]

        row = cleaner.clean_rows(rows, [mapping("Type", "device_type", 1.0)], AssetKind.IT)[0]

        assert row["serial_number"].startswith("LAP-")

    def test_model_brand_and_date_found_in_row(self, cleaner):
        rows = [{
            "Type": "PC",
            "Fabricant": "Lenovo",
            "Description": "Lenovo ThinkPad T14",
            "Achat": "15.03.2024",
        }]

        row = cleaner.clean_rows(rows, [mapping("Type", "device_type", 1.0)], AssetKind.IT)[0]

        assert row["model"] == "Lenovo ThinkPad T14"
        assert row["brand"] == "Lenovo"
        assert row["date"] == "2024-03-15"

    def test_low_confidence_mappings_ignored(self, cleaner):
        rows = [{"Colonne": "Dell", "Type": "PC"}]
        mappings = [mapping("Colonne", "brand", 0.3), mapping("Type", "device_type", 1.0)]

        row = cleaner.clean_rows(rows, mappings, AssetKind.IT)[0]

        assert row["brand"] == "Dell"
        assert row["model"] == "Desktop Computer"

    def test_unmapped_echo_not_applied(self, cleaner):
        rows = [{"Remarque": "ok", "Type": "PC"}]
        echo = ColumnMapping(original_name="Remarque", mapped_field="Remarque", confidence=0.0)

        row = cleaner.clean_rows(rows, [echo, mapping("Type", "device_type", 1.0)], AssetKind.IT)[0]

        assert "Remarque" not in row

    def test_number_and_date_conversion(self, cleaner):
        rows = [{"Type": "PC", "RAM": "16 Go", "Achat": datetime(2023, 6, 1)}]
        mappings = [
            mapping("Type", "device_type", 1.0),
            mapping("RAM", "ram_gb", data_type=DataType.NUMBER),
            mapping("Achat", "date", data_type=DataType.DATE),
        ]

        row = cleaner.clean_rows(rows, mappings, AssetKind.IT)[0]

        assert row["ram_gb"] == 16.0
        assert row["date"] == "2023-06-01"

    def test_unparseable_number_is_none(self, cleaner):
        rows = [{"Type": "PC", "RAM": "n/a"}]
        mappings = [
            mapping("Type", "device_type", 1.0),
            mapping("RAM", "ram_gb", data_type=DataType.NUMBER),
        ]

        row = cleaner.clean_rows(rows, mappings, AssetKind.IT)[0]

        assert row["ram_gb"] is None

    def test_empty_value_does_not_replace_filled_one(self, cleaner):
        rows = [{"Marque": "Dell", "Fabricant": ""}]
        mappings = [mapping("Marque", "brand"), mapping("Fabricant", "brand")]

        row = cleaner.clean_rows(rows, mappings, AssetKind.IT)[0]

        assert row["brand"] == "Dell"

    def test_more_confident_mapping_wins(self, cleaner):
        """A weak date column on device_type never replaces the Type column."""
        rows = [{"Type": "Laptop", "Date d'achat": "15/03/2024"}]
        mappings = [
            mapping("Type", "device_type", 1.0),
            mapping("Date d'achat", "device_type", 0.33, data_type=DataType.DATE),
        ]

        row = cleaner.clean_rows(rows, mappings, AssetKind.IT)[0]

        assert row["device_type"] == "Laptop"

    def test_later_more_confident_mapping_replaces_value(self, cleaner):
        rows = [{"Fournisseur": "Ingram", "Marque": "Dell"}]
        mappings = [mapping("Fournisseur", "brand", 0.5), mapping("Marque", "brand", 0.9)]

        row = cleaner.clean_rows(rows, mappings, AssetKind.IT)[0]

        assert row["brand"] == "Dell"

    def test_blank_rows_skipped(self, cleaner):
        rows = [{"Type": "  ", "Marque": None}, {}]
        mappings = [mapping("Type", "device_type", 1.0), mapping("Marque", "brand")]

        assert cleaner.clean_rows(rows, mappings, AssetKind.IT) == []

    def test_every_it_row_has_an_essential_field(self, cleaner):
        rows = ITAssetRowFactory.create_batch(5) + [{"Autre": "x"}]
        mappings = HeaderMapper().map_columns(rows, AssetKind.IT)

        cleaned = cleaner.clean_rows(rows, mappings, AssetKind.IT)

        assert len(cleaned) == 6
        for row in cleaned:
            assert any(row.get(key) for key in ("device_type", "model", "brand"))


# ===================
# TELECOM ROWS
# ===================

class TestCleanTelecomRows:
    """Tests for telecom row cleaning"""

    def test_defaults(self, cleaner, today):
        rows = [{"Nom": "KARIM BENALI"}]

        row = cleaner.clean_rows(rows, [mapping("Nom", "sim_owner")], AssetKind.TELECOM)[0]

        assert row["sim_owner"] == "KARIM BENALI"
        assert row["provider"] == "Unknown"
        assert row["status"] == "active"
        assert row["department"] == "IT"
        assert row["zone"] == "Office"
        assert row["subscription_type"] == "Monthly"
        assert row["data_plan"] == "Basic"
        assert row["date"] == today
        assert re.fullmatch(r"SIM-1710504000000-[0-9a-z]{9}", row["sim_number"])

    def test_mapped_values_kept(self, cleaner):
        rows = [{"Tel": 612345678, "Operateur": "Inwi"}]
        mappings = [mapping("Tel", "sim_number"), mapping("Operateur", "provider")]

        row = cleaner.clean_rows(rows, mappings, AssetKind.TELECOM)[0]

        assert row["sim_number"] == "612345678"
        assert row["provider"] == "Inwi"


class TestHasEssentialFields:
    """Tests for RowCleaner.has_essential_fields()"""

    def test_it_requires_device_model_or_brand(self):
        assert RowCleaner.has_essential_fields({"brand": "Dell"}, AssetKind.IT) is True
        assert RowCleaner.has_essential_fields({"zone": "Office"}, AssetKind.IT) is False
        assert RowCleaner.has_essential_fields({"brand": "  "}, AssetKind.IT) is False

    def test_telecom_accepts_any_filled_field(self):
        assert RowCleaner.has_essential_fields({"notes": "x"}, AssetKind.TELECOM) is True
        assert RowCleaner.has_essential_fields({"notes": ""}, AssetKind.TELECOM) is False
        assert RowCleaner.has_essential_fields({}, AssetKind.TELECOM) is False
