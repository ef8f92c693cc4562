"""
Test data factories.

Uses factory pattern to generate consistent raw spreadsheet rows,
keyed by the original (French) headers.
"""

from io import BytesIO
from typing import Any, Optional

import pandas as pd


class ITAssetRowFactory:
    """
    Factory for raw IT asset rows.

    Usage:
        # Create with defaults
        row = ITAssetRowFactory.create()

        # Create with overrides
        row = ITAssetRowFactory.create(brand="HP")

        # Create multiple
        rows = ITAssetRowFactory.create_batch(5)
    """

    _counter = 0

    @classmethod
    def _next_counter(cls) -> int:
        cls._counter += 1
        return cls._counter

    @classmethod
    def create(
        cls,
        device_type: str = "PC Portable",
        brand: str = "Dell",
        model: str = "Dell Latitude 5520",
        serial: Optional[str] = None,
        owner: str = "Jean Dupont",
        department: str = "Finance",
    ) -> dict[str, Any]:
        """
        Create a single raw row.

        Returns:
            Row dict as the worksheet reader produces it
        """
        counter = cls._next_counter()
        return {
            "Type": device_type,
            "Marque": brand,
            "Modèle": model,
            "N° Série": serial or f"SN-{1000000000 + counter}-AB{counter:04d}",
            "Utilisateur": owner,
            "Département": department,
        }

    @classmethod
    def create_batch(cls, count: int, **overrides) -> list[dict[str, Any]]:
        """Create multiple rows."""
        return [cls.create(**overrides) for _ in range(count)]


class TelecomAssetRowFactory:
    """Factory for raw telecom (SIM) rows."""

    _counter = 0

    @classmethod
    def create(
        cls,
        name: str = "KARIM BENALI",
        phone: Optional[str] = None,
        provider: str = "IAM",
        city: str = "Casablanca",
    ) -> dict[str, Any]:
        cls._counter += 1
        return {
            "Nom": name,
            "N° Tel": phone or f"06{cls._counter:08d}",
            "Opérateur": provider,
            "Ville": city,
        }

    @classmethod
    def create_batch(cls, count: int, **overrides) -> list[dict[str, Any]]:
        return [cls.create(**overrides) for _ in range(count)]


def create_workbook(
    rows: list[list[Any]],
    sheet_name: str = "Inventaire"
) -> BytesIO:
    """
    Build an in-memory .xlsx from a grid of cells (no implicit header).

    Usage:
        file = create_workbook([["Type", "Marque"], ["PC", "Dell"]])
    """
    output = BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    output.seek(0)
    return output
