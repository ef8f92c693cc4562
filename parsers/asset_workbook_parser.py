"""
Worksheet reader for asset inventory uploads.

Reads the first worksheet of an .xlsx export and turns it into raw rows
(original header -> cell value). Exports often carry a title block above
the real header row, so the header row is located by keyword hits.
"""

from dataclasses import dataclass, field
from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import Any, Optional, Union
import structlog

import pandas as pd

from config.asset_fields import HEADER_ROW_KEYWORDS
from exceptions import ExcelParseError

logger = structlog.get_logger(__name__)


@dataclass
class WorkbookRows:
    """Raw rows read from one worksheet."""
    sheet_name: str
    header_row_index: int
    headers: list[str] = field(default_factory=list)
    rows: list[dict[str, Any]] = field(default_factory=list)

    @property
    def has_data(self) -> bool:
        """True if at least one data row was read."""
        return len(self.rows) > 0


def read_asset_workbook(
    file: Union[str, Path, bytes, BytesIO],
    header_scan_rows: int = 10
) -> WorkbookRows:
    """
    Read the first worksheet of an asset export.

    Args:
        file: File path, raw bytes or file-like object
        header_scan_rows: Leading rows searched for the header row

    Returns:
        WorkbookRows with headers and one dict per non-empty data row.
        Empty cells are absent keys.

    Raises:
        ExcelParseError: If the file cannot be read or has no worksheet
    """
    logger.info("reading_asset_workbook", file_type=type(file).__name__)

    if isinstance(file, bytes):
        file = BytesIO(file)

    try:
        excel = pd.ExcelFile(file, engine="openpyxl")
    except Exception as e:
        logger.error("excel_read_failed", error=str(e))
        raise ExcelParseError(
            message="Failed to read Excel file",
            details={"original_error": str(e)}
        )

    if not excel.sheet_names:
        raise ExcelParseError(message="Workbook contains no worksheet")

    sheet_name = excel.sheet_names[0]
    try:
        df = excel.parse(sheet_name, header=None, dtype=object)
    except Exception as e:
        logger.error("sheet_read_failed", sheet=sheet_name, error=str(e))
        raise ExcelParseError(
            message=f"Failed to read sheet {sheet_name}",
            details={"original_error": str(e)}
        )

    grid = [[_cell_value(cell) for cell in record] for record in df.itertuples(index=False)]

    header_index = _find_header_row(grid, header_scan_rows)
    if header_index is None:
        logger.warning("asset_workbook_empty", sheet=sheet_name)
        return WorkbookRows(sheet_name=sheet_name, header_row_index=-1)

    headers = _build_headers(grid[header_index])

    rows = []
    for record in grid[header_index + 1:]:
        row = {
            header: value
            for header, value in zip(headers, record)
            if not _is_blank(value)
        }
        if row:
            rows.append(row)

    logger.info(
        "asset_workbook_read",
        sheet=sheet_name,
        header_row=header_index,
        headers=len(headers),
        rows=len(rows)
    )

    return WorkbookRows(
        sheet_name=sheet_name,
        header_row_index=header_index,
        headers=headers,
        rows=rows,
    )


# ===================
# HELPERS
# ===================

def _cell_value(cell: Any) -> Any:
    """Convert a pandas cell to a plain Python value (None for empty)."""
    if cell is None:
        return None
    if isinstance(cell, pd.Timestamp):
        return None if pd.isna(cell) else cell.to_pydatetime()
    if isinstance(cell, float) and pd.isna(cell):
        return None
    if cell is pd.NaT:
        return None
    if isinstance(cell, str):
        return cell if cell.strip() else None
    return cell


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _find_header_row(grid: list[list[Any]], scan_rows: int) -> Optional[int]:
    """
    Row with the most header keywords among the first scan_rows rows.

    Falls back to the first non-empty row when no keyword is found.
    """
    best_index = None
    best_hits = 0

    for index, record in enumerate(grid[:scan_rows]):
        text = " ".join(str(value).lower() for value in record if not _is_blank(value))
        hits = sum(1 for keyword in HEADER_ROW_KEYWORDS if keyword in text)
        if hits > best_hits:
            best_index, best_hits = index, hits

    if best_index is not None:
        return best_index

    for index, record in enumerate(grid):
        if any(not _is_blank(value) for value in record):
            return index
    return None


def _build_headers(record: list[Any]) -> list[str]:
    """Header names: blanks become Column_N, repeats get a numeric suffix."""
    headers = []
    seen: dict[str, int] = {}

    for position, value in enumerate(record, start=1):
        if _is_blank(value):
            name = f"Column_{position}"
        elif isinstance(value, datetime):
            name = value.date().isoformat()
        else:
            name = str(value).strip()

        if name in seen:
            base = name
            while name in seen:
                seen[base] += 1
                name = f"{base}_{seen[base]}"
        seen[name] = 1
        headers.append(name)

    return headers
