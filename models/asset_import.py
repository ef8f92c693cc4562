"""
Asset import models.

Data structures exchanged by the header mapper, the row cleaner and the
import service. All of them live for a single import and are never persisted.
"""

import math
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field


class AssetKind(str, Enum):
    """Target asset schema."""
    IT = "it"
    TELECOM = "telecom"


class DataType(str, Enum):
    """How a mapped column's values are converted."""
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"


class ColumnMapping(BaseModel):
    """
    Mapping of one source header to a target field.

    When no field matched, mapped_field echoes original_name and
    confidence is 0.
    """

    original_name: str = Field(description="Header as it appears in the file")
    mapped_field: str = Field(description="Target field key, or original_name if unmapped")
    confidence: float = Field(ge=0.0, le=1.0, description="Confidence score 0-1")
    data_type: DataType = DataType.TEXT
    matched_by: Optional[str] = Field(None, description="Strategy that produced the match")

    @property
    def percent(self) -> int:
        """Confidence as a whole percentage, half rounded up."""
        return int(math.floor(self.confidence * 100 + 0.5))

    @property
    def label(self) -> str:
        """Human-readable summary, e.g. "brand (90%)"."""
        return f"{self.mapped_field} ({self.percent}%)"


class DataProfile(BaseModel):
    """
    Values found in a sample of rows, grouped by what they look like.

    Built from the content classifiers; informational only.
    """

    serial_numbers: list[str] = Field(default_factory=list)
    models: list[str] = Field(default_factory=list)
    brands: list[str] = Field(default_factory=list)
    device_types: list[str] = Field(default_factory=list)
    owners: list[str] = Field(default_factory=list)
    departments: list[str] = Field(default_factory=list)
    dates: list[str] = Field(default_factory=list)


class PreviewResult(BaseModel):
    """Outcome of mapping and cleaning without persistence."""

    success: bool
    message: str
    column_mappings: list[ColumnMapping] = Field(default_factory=list)
    sample_data: list[dict[str, Any]] = Field(default_factory=list)
    total_rows: int = Field(0, ge=0, description="Rows accepted by the cleaner")
    data_profile: Optional[DataProfile] = None


class ImportResult(BaseModel):
    """Outcome of a committed import."""

    success: bool
    message: str
    created_assets: int = Field(0, ge=0)
    errors: list[str] = Field(default_factory=list)
    mapped_columns: dict[str, str] = Field(
        default_factory=dict,
        description='Original header -> "field (NN%)"'
    )
    sample_data: list[dict[str, Any]] = Field(default_factory=list)
