"""
Content classifiers for spreadsheet cell values.

Pure predicates deciding what a sample value looks like (serial number,
model, brand, device type, owner name, department, date), a date
normalizer, and helpers that apply them across rows.

None of these raise: anything unrecognized is simply False / None.
"""

import re
from datetime import date
from typing import Any, Callable, Optional

from models.asset_import import DataProfile

# ===================
# REFERENCE VALUES
# ===================

KNOWN_BRANDS = (
    "Dell", "HP", "Hewlett-Packard", "Lenovo", "Asus", "Acer", "MSI",
    "Apple", "Samsung", "Toshiba", "Sony", "IBM", "Fujitsu", "Panasonic",
    "LG", "AOC", "BenQ", "ViewSonic", "Cisco", "Netgear", "TP-Link",
)

DEVICE_TYPE_WORDS = (
    "PC", "Laptop", "Desktop", "Server", "Printer", "Monitor", "Router",
    "Switch", "Pc Portable", "Ordinateur", "Serveur", "Imprimante",
    "Moniteur", "Routeur", "Tablet", "Phone", "Mobile", "Workstation",
    "Thin Client",
)

DEPARTMENT_WORDS = (
    "IT", "HR", "Finance", "Marketing", "Sales", "Operations", "Management",
    "Administration", "Support", "Development", "Research", "Quality",
    "BU", "Direction", "Service", "Bureau", "Division", "Secteur",
)

MAX_BRAND_LENGTH = 20
MIN_SERIAL_LENGTH = 8
MIN_MODEL_LENGTH = 5

# ===================
# PATTERNS
# ===================

SERIAL_PATTERNS = (
    re.compile(r"^[A-Z]{2,4}-?\d{6,12}(-?[A-Z0-9]{3,8})?$", re.IGNORECASE),
    re.compile(r"^SN-?\d{10,15}-?[A-Z0-9]{6,12}$", re.IGNORECASE),
    re.compile(r"^[A-Z]{2,4}\d{8,15}$", re.IGNORECASE),
    re.compile(r"^\d{10,20}$"),
    re.compile(r"^[A-Z0-9]{8,20}$", re.IGNORECASE),
)

MODEL_PATTERNS = (
    re.compile(
        r"^(Dell|HP|Lenovo|Asus|Acer|MSI|Apple|Samsung|Toshiba|Sony)\s+[A-Z0-9\-\s]{3,20}$",
        re.IGNORECASE,
    ),
    re.compile(
        r"^(ThinkPad|Inspiron|Pavilion|Vostro|Latitude|Precision|EliteBook|ProBook)\s*[A-Z0-9\-\s]{2,15}$",
        re.IGNORECASE,
    ),
    re.compile(
        r"^(MacBook|iMac|Mac\s*Pro|Mac\s*Mini|Mac\s*Air)\s*[A-Z0-9\-\s]{2,15}$",
        re.IGNORECASE,
    ),
)

OWNER_NAME_PATTERN = re.compile(r"^[A-Za-zÀ-ÿ\s]{3,30}$")
SHORT_DEPARTMENT_CODE = re.compile(r"^[A-Z0-9\-\s]{1,10}$")

DATE_PATTERNS = (
    re.compile(r"^\d{4}-\d{1,2}-\d{1,2}$"),     # YYYY-MM-DD, YYYY-M-D
    re.compile(r"^\d{4}/\d{1,2}/\d{1,2}$"),     # YYYY/MM/DD
    re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$"),     # MM/DD/YYYY, M/D/YYYY
    re.compile(r"^\d{1,2}-\d{1,2}-\d{4}$"),     # MM-DD-YYYY, M-D-YYYY
    re.compile(r"^\d{1,2}\.\d{1,2}\.\d{4}$"),   # DD.MM.YYYY, D.M.YYYY
)


# ===================
# PREDICATES
# ===================

def is_serial_number(value: str) -> bool:
    """
    Looks like a serial number.

    Letter prefix + digit run (+ optional suffix), SN-prefixed codes,
    10-20 digit strings or 8-20 alphanumeric strings; at least 8 chars.
    """
    value = value.strip()
    if len(value) < MIN_SERIAL_LENGTH:
        return False
    return any(pattern.match(value) for pattern in SERIAL_PATTERNS)


def is_model(value: str) -> bool:
    """Known brand or product line followed by a model suffix, e.g. "Dell Latitude 5520"."""
    value = value.strip()
    if len(value) < MIN_MODEL_LENGTH:
        return False
    return any(pattern.match(value) for pattern in MODEL_PATTERNS)


def is_brand(value: str) -> bool:
    """Contains a well-known manufacturer name and is short enough to be a name."""
    lowered = value.strip().lower()
    if not lowered or len(lowered) > MAX_BRAND_LENGTH:
        return False
    return any(brand.lower() in lowered for brand in KNOWN_BRANDS)


def is_device_type(value: str) -> bool:
    lowered = value.strip().lower()
    if not lowered:
        return False
    return any(word.lower() in lowered for word in DEVICE_TYPE_WORDS)


def is_owner_name(value: str) -> bool:
    """2 to 4 alphabetic words, 3-30 chars ("Jean Dupont", "Élise Marie Roux")."""
    words = value.split()
    return bool(OWNER_NAME_PATTERN.match(value)) and 2 <= len(words) <= 4


def is_department(value: str) -> bool:
    """Known department word, or a short uppercase code like "DSI" or "BU-3"."""
    lowered = value.strip().lower()
    if not lowered:
        return False
    if any(word.lower() in lowered for word in DEPARTMENT_WORDS):
        return True
    return bool(SHORT_DEPARTMENT_CODE.match(value))


def is_date(value: str) -> bool:
    value = value.strip()
    return any(pattern.match(value) for pattern in DATE_PATTERNS)


# ===================
# DATE FORMATTING
# ===================

def _build_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def format_date(value: str) -> Optional[str]:
    """
    Normalize a literal date to YYYY-MM-DD.

    A 4-digit leading segment is the year. Otherwise:
    - "/" and "-" separated dates are read month-first, then day-first
      when month-first is not a valid date ("15/03/2024" → "2024-03-15")
    - "." separated dates are read day-first, then month-first

    Returns:
        ISO date string, or None when the value is not a valid date
    """
    value = value.strip()
    separator = next((sep for sep in ("/", ".", "-") if sep in value), None)
    if separator is None:
        return None

    parts = value.split(separator)
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        return None

    first, second, third = (int(part) for part in parts)

    if len(parts[0]) == 4:
        candidates = [(first, second, third)]
    elif len(parts[2]) == 4:
        month_first = (third, first, second)
        day_first = (third, second, first)
        candidates = [day_first, month_first] if separator == "." else [month_first, day_first]
    else:
        return None

    for year, month, day in candidates:
        parsed = _build_date(year, month, day)
        if parsed is not None:
            return parsed.isoformat()
    return None


# ===================
# ROW HELPERS
# ===================

def find_value_in_row(
    row: dict[str, Any],
    predicate: Callable[[str], bool],
    transform: Optional[Callable[[str], Optional[str]]] = None
) -> Optional[str]:
    """
    First string value in the row (all columns, in order) accepted by predicate.

    Args:
        row: Raw row, original header -> cell value
        predicate: Content classifier, e.g. is_serial_number
        transform: Optional conversion of the match (e.g. format_date);
                   a match it turns into None is skipped

    Returns:
        Trimmed (and transformed) value, or None
    """
    for value in row.values():
        if not isinstance(value, str):
            continue
        text = value.strip()
        if not text or not predicate(text):
            continue
        if transform is None:
            return text
        converted = transform(text)
        if converted:
            return converted
    return None


def extract_data_profile(rows: list[dict[str, Any]], sample_rows: int = 10) -> DataProfile:
    """
    Classify every string cell of the first sample_rows rows.

    A value can land in several buckets. Duplicates are dropped,
    first-seen order is kept.
    """
    buckets: dict[str, dict[str, None]] = {
        name: {} for name in DataProfile.model_fields
    }
    classifiers = (
        ("serial_numbers", is_serial_number),
        ("models", is_model),
        ("brands", is_brand),
        ("device_types", is_device_type),
        ("owners", is_owner_name),
        ("departments", is_department),
    )

    for row in rows[:sample_rows]:
        for value in row.values():
            if not isinstance(value, str):
                continue
            text = value.strip()
            if not text:
                continue
            for bucket, predicate in classifiers:
                if predicate(text):
                    buckets[bucket][text] = None
            if is_date(text):
                formatted = format_date(text)
                if formatted:
                    buckets["dates"][formatted] = None

    return DataProfile(**{name: list(values) for name, values in buckets.items()})
