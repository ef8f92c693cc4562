"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    ValidationError,
    DatabaseError,

    # Excel parser
    ExcelParseError,

    # Asset import
    InvalidAssetKindError,
    AssetCreateError,
)

__all__ = [
    # Base
    "AppError",
    "ValidationError",
    "DatabaseError",

    # Excel parser
    "ExcelParseError",

    # Asset import
    "InvalidAssetKindError",
    "AssetCreateError",
]
