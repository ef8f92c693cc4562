"""
Spreadsheet parsers and cell value classifiers.
"""

from parsers.asset_workbook_parser import (
    read_asset_workbook,
    WorkbookRows,
)
from parsers.value_classifiers import (
    is_serial_number,
    is_model,
    is_brand,
    is_device_type,
    is_owner_name,
    is_department,
    is_date,
    format_date,
    find_value_in_row,
    extract_data_profile,
)

__all__ = [
    "read_asset_workbook",
    "WorkbookRows",
    "is_serial_number",
    "is_model",
    "is_brand",
    "is_device_type",
    "is_owner_name",
    "is_department",
    "is_date",
    "format_date",
    "find_value_in_row",
    "extract_data_profile",
]
