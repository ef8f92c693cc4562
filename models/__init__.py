"""
Pydantic models for validation and serialization.
"""

from models.asset_import import (
    AssetKind,
    DataType,
    ColumnMapping,
    DataProfile,
    PreviewResult,
    ImportResult,
)

__all__ = [
    "AssetKind",
    "DataType",
    "ColumnMapping",
    "DataProfile",
    "PreviewResult",
    "ImportResult",
]
