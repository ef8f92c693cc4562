"""
Row cleaning service.

Applies column mappings to raw rows, converts values to their mapped
type, fills required fields (from other columns of the same row when
possible, otherwise from defaults) and drops rows that still miss every
essential field.
"""

import math
import re
from datetime import date, datetime
from typing import Any, Optional
import structlog

import pandas as pd

from config import settings
from config.asset_fields import (
    ESSENTIAL_FIELDS,
    IT_DEFAULTS,
    TELECOM_DEFAULTS,
    DEVICE_DESCRIPTIONS,
    DEFAULT_BRAND_DESCRIPTION,
)
from models.asset_import import AssetKind, ColumnMapping, DataType
from parsers.value_classifiers import (
    find_value_in_row,
    format_date,
    is_brand,
    is_date,
    is_model,
    is_serial_number,
)
from utils.synthetic_ids import SyntheticIdGenerator

logger = structlog.get_logger(__name__)

_NON_NUMERIC = re.compile(r"[^\d.\-]")


# ===================
# VALUE CONVERSION
# ===================

def to_number(value: Any) -> Optional[float]:
    """
    Parse a number, ignoring units and separators ("16 Go" → 16.0).

    Returns None when nothing numeric is left.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return None if math.isnan(number) else number
    if not isinstance(value, str):
        return None

    cleaned = _NON_NUMERIC.sub("", value)
    try:
        return float(cleaned)
    except ValueError:
        return None


def to_iso_date(value: Any) -> Optional[str]:
    """
    Date as YYYY-MM-DD.

    Date objects are formatted directly, literal layouts go through
    format_date, anything else through pandas' parser. None if unparseable.
    """
    if value is pd.NaT:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    if is_date(text):
        return format_date(text)
    # pandas reads relative words ("now", "today") as the current date
    if not any(char.isdigit() for char in text):
        return None

    parsed = pd.to_datetime(text, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date().isoformat()


def to_text(value: Any) -> str:
    """Trimmed string; missing values become ""."""
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value).strip()


_CONVERTERS = {
    DataType.NUMBER: to_number,
    DataType.DATE: to_iso_date,
    DataType.TEXT: to_text,
}


# ===================
# INFERENCE
# ===================

def _is_row_serial(value: str) -> bool:
    return is_serial_number(value) and any(char.isdigit() for char in value)


def _describe_device(device_type: str) -> Optional[tuple[str, str]]:
    lowered = device_type.lower()
    for keywords, model, brand in DEVICE_DESCRIPTIONS:
        if any(keyword in lowered for keyword in keywords):
            return model, brand
    return None


def infer_model(device_type: Optional[str]) -> str:
    """Generic model name for a device type ("Laptop" → "Laptop Computer")."""
    if not device_type:
        return "Unknown Model"
    described = _describe_device(device_type)
    return described[0] if described else f"{device_type} Device"


def infer_brand(device_type: Optional[str]) -> str:
    """Generic brand label for a device type ("Serveur" → "Enterprise Server")."""
    if not device_type:
        return "Unknown Brand"
    described = _describe_device(device_type)
    return described[1] if described else DEFAULT_BRAND_DESCRIPTION


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


# ===================
# SERVICE
# ===================

class RowCleaner:
    """
    Turns raw rows into schema records.

    Args:
        id_generator: Source of synthetic serial/SIM numbers and today's date
        min_confidence: Mappings at or below this confidence are ignored
    """

    def __init__(
        self,
        id_generator: Optional[SyntheticIdGenerator] = None,
        min_confidence: Optional[float] = None
    ):
        self.id_generator = id_generator or SyntheticIdGenerator()
        self.min_confidence = (
            settings.row_mapping_min_confidence if min_confidence is None else min_confidence
        )

    def apply_mappings(self, row: dict[str, Any], mappings: list[ColumnMapping]) -> dict[str, Any]:
        """Converted values of every trusted mapping, keyed by target field."""
        cleaned: dict[str, Any] = {}
        confidences: dict[str, float] = {}
        for mapping in mappings:
            if mapping.confidence <= self.min_confidence:
                continue
            target = mapping.mapped_field
            value = _CONVERTERS[mapping.data_type](row.get(mapping.original_name))
            # Two columns on one field: a filled value from the more confident mapping wins
            if target in cleaned:
                if _is_blank(value):
                    continue
                if not _is_blank(cleaned[target]) and mapping.confidence <= confidences[target]:
                    continue
            cleaned[target] = value
            confidences[target] = mapping.confidence
        return cleaned

    def fill_it_fields(self, cleaned: dict[str, Any], row: dict[str, Any]) -> None:
        for key, default in IT_DEFAULTS.items():
            if not cleaned.get(key):
                cleaned[key] = default

        if not cleaned.get("serial_number"):
            cleaned["serial_number"] = (
                find_value_in_row(row, _is_row_serial)
                or self.id_generator.serial_number(cleaned["device_type"], cleaned["owner_name"])
            )
        if not cleaned.get("model"):
            cleaned["model"] = find_value_in_row(row, is_model) or infer_model(cleaned["device_type"])
        if not cleaned.get("brand"):
            cleaned["brand"] = find_value_in_row(row, is_brand) or infer_brand(cleaned["device_type"])
        if not cleaned.get("date"):
            cleaned["date"] = (
                find_value_in_row(row, is_date, format_date)
                or self.id_generator.today().isoformat()
            )

    def fill_telecom_fields(self, cleaned: dict[str, Any]) -> None:
        for key, default in TELECOM_DEFAULTS.items():
            if not cleaned.get(key):
                cleaned[key] = default

        if not cleaned.get("sim_number"):
            cleaned["sim_number"] = self.id_generator.sim_number()
        if not cleaned.get("date"):
            cleaned["date"] = self.id_generator.today().isoformat()

    @staticmethod
    def has_essential_fields(cleaned: dict[str, Any], kind: AssetKind) -> bool:
        """
        IT rows need device_type, model or brand.

        Telecom rows need provider, sim_number or sim_owner, or any filled field.
        """
        if any(not _is_blank(cleaned.get(key)) for key in ESSENTIAL_FIELDS[kind.value]):
            return True
        if kind == AssetKind.TELECOM:
            return any(not _is_blank(value) for value in cleaned.values())
        return False

    def clean_row(
        self,
        row: dict[str, Any],
        mappings: list[ColumnMapping],
        kind: AssetKind
    ) -> Optional[dict[str, Any]]:
        """
        Clean one raw row.

        Returns:
            The cleaned record, or None if the row is blank or lacks
            every essential field
        """
        if all(_is_blank(value) for value in row.values()):
            return None

        cleaned = self.apply_mappings(row, mappings)
        if kind == AssetKind.IT:
            self.fill_it_fields(cleaned, row)
        else:
            self.fill_telecom_fields(cleaned)

        if not self.has_essential_fields(cleaned, kind):
            return None
        return cleaned

    def clean_rows(
        self,
        rows: list[dict[str, Any]],
        mappings: list[ColumnMapping],
        kind: AssetKind
    ) -> list[dict[str, Any]]:
        """Clean every row, keeping input order."""
        kind = AssetKind(kind)
        cleaned_rows = []
        dropped = 0

        for index, row in enumerate(rows):
            cleaned = self.clean_row(row, mappings, kind)
            if cleaned is None:
                dropped += 1
                logger.debug("row_dropped", row_index=index)
                continue
            cleaned_rows.append(cleaned)

        logger.info(
            "rows_cleaned",
            asset_kind=kind.value,
            input_rows=len(rows),
            kept=len(cleaned_rows),
            dropped=dropped
        )
        return cleaned_rows


# Singleton instance
_row_cleaner: Optional[RowCleaner] = None


def get_row_cleaner() -> RowCleaner:
    """Get or create RowCleaner instance."""
    global _row_cleaner
    if _row_cleaner is None:
        _row_cleaner = RowCleaner()
    return _row_cleaner
