"""
Asset import service.

Runs the import pipeline for one spreadsheet:
header mapping -> row cleaning -> (commit only) storage, one row at a time.

Both entry points always return a result object. Input problems and
unexpected errors become failure results instead of exceptions.
"""

from typing import Any, Optional, Union
from io import BytesIO
from pathlib import Path
import structlog

from config import settings
from exceptions import ExcelParseError, InvalidAssetKindError
from models.asset_import import AssetKind, ColumnMapping, ImportResult, PreviewResult
from parsers.asset_workbook_parser import read_asset_workbook
from parsers.value_classifiers import extract_data_profile
from services.asset_store_service import AssetStore, get_asset_store
from services.header_mapping_service import HeaderMapper, get_header_mapper
from services.row_cleaning_service import RowCleaner, get_row_cleaner

logger = structlog.get_logger(__name__)

NO_DATA_MESSAGE = "No data found in the file"

WorkbookSource = Union[str, Path, bytes, BytesIO]


def resolve_asset_kind(kind: Union[str, AssetKind]) -> AssetKind:
    """
    Parse an asset kind ("it" / "telecom", any case).

    Raises:
        InvalidAssetKindError: For any other value
    """
    if isinstance(kind, AssetKind):
        return kind
    try:
        return AssetKind(str(kind).strip().lower())
    except ValueError:
        raise InvalidAssetKindError(kind)


def format_column_mappings(
    mappings: list[ColumnMapping],
    min_confidence: float
) -> dict[str, str]:
    """Original header -> "field (NN%)" for every mapping above min_confidence."""
    return {
        mapping.original_name: mapping.label
        for mapping in mappings
        if mapping.confidence > min_confidence
    }


class AssetImportService:
    """
    Preview and commit of asset spreadsheets.

    Collaborators default to the module singletons; pass them explicitly
    to control storage or id generation.
    """

    def __init__(
        self,
        mapper: Optional[HeaderMapper] = None,
        cleaner: Optional[RowCleaner] = None,
        store: Optional[AssetStore] = None
    ):
        self.mapper = mapper or get_header_mapper()
        self.cleaner = cleaner or get_row_cleaner()
        self._store = store

    @property
    def store(self) -> AssetStore:
        if self._store is None:
            self._store = get_asset_store()
        return self._store

    def _map_and_clean(
        self,
        rows: list[dict[str, Any]],
        kind: AssetKind,
        headers: Optional[list[str]]
    ) -> tuple[list[ColumnMapping], list[dict[str, Any]]]:
        mappings = self.mapper.map_columns(rows, kind, headers)
        cleaned = self.cleaner.clean_rows(rows, mappings, kind)
        return mappings, cleaned

    # ===================
    # PREVIEW
    # ===================

    def preview(
        self,
        rows: list[dict[str, Any]],
        kind: Union[str, AssetKind],
        headers: Optional[list[str]] = None
    ) -> PreviewResult:
        """
        Map and clean rows without storing anything.

        Args:
            rows: Raw rows (original header -> cell value)
            kind: "it" or "telecom"
            headers: Header order; defaults to the keys of the first row

        Returns:
            PreviewResult with every column mapping, a sample of cleaned
            rows and the number of rows that would be imported
        """
        try:
            asset_kind = resolve_asset_kind(kind)

            if not rows:
                logger.warning("asset_preview_no_data", asset_kind=asset_kind.value)
                return PreviewResult(success=False, message=NO_DATA_MESSAGE)

            mappings, cleaned = self._map_and_clean(rows, asset_kind, headers)

            profile = extract_data_profile(rows, settings.profile_sample_rows)
            logger.info(
                "data_profile_extracted",
                serial_numbers=len(profile.serial_numbers),
                models=len(profile.models),
                brands=len(profile.brands),
                device_types=len(profile.device_types),
                owners=len(profile.owners),
                departments=len(profile.departments),
                dates=len(profile.dates)
            )

            logger.info(
                "asset_preview_completed",
                asset_kind=asset_kind.value,
                rows=len(rows),
                valid_rows=len(cleaned),
                columns=len(mappings)
            )

            return PreviewResult(
                success=True,
                message=f"Preview ready: {len(cleaned)} of {len(rows)} rows can be imported",
                column_mappings=mappings,
                sample_data=cleaned[:settings.preview_sample_size],
                total_rows=len(cleaned),
                data_profile=profile,
            )

        except Exception as e:
            logger.error("asset_preview_failed", error=str(e), error_type=type(e).__name__)
            return PreviewResult(success=False, message=f"Preview failed: {_describe(e)}")

    def preview_workbook(self, file: WorkbookSource, kind: Union[str, AssetKind]) -> PreviewResult:
        """Read the first worksheet of an upload and preview it."""
        try:
            workbook = read_asset_workbook(file, settings.header_scan_rows)
        except ExcelParseError as e:
            return PreviewResult(success=False, message=e.message)
        return self.preview(workbook.rows, kind, workbook.headers)

    # ===================
    # COMMIT
    # ===================

    async def commit(
        self,
        rows: list[dict[str, Any]],
        kind: Union[str, AssetKind],
        headers: Optional[list[str]] = None
    ) -> ImportResult:
        """
        Map, clean and store rows.

        Rows are written sequentially. A failed write is logged and
        skipped; created_assets counts successful writes only.

        Returns:
            ImportResult with the created count, mapped columns and a
            sample of cleaned rows
        """
        try:
            asset_kind = resolve_asset_kind(kind)

            if not rows:
                logger.warning("asset_import_no_data", asset_kind=asset_kind.value)
                return ImportResult(success=False, message=NO_DATA_MESSAGE)

            mappings, cleaned = self._map_and_clean(rows, asset_kind, headers)
            mapped_columns = format_column_mappings(mappings, self.cleaner.min_confidence)
            sample = cleaned[:settings.import_sample_size]

            if not cleaned:
                return ImportResult(
                    success=False,
                    message="No valid rows to import",
                    mapped_columns=mapped_columns,
                )

            created = 0
            failed = 0
            for index, row in enumerate(cleaned):
                try:
                    await self.store.create_asset(asset_kind, row)
                    created += 1
                except Exception as e:
                    failed += 1
                    logger.warning(
                        "asset_create_failed",
                        asset_kind=asset_kind.value,
                        row_index=index,
                        error=str(e)
                    )

            errors = []
            if failed:
                errors.append(f"{failed} of {len(cleaned)} rows could not be saved")

            logger.info(
                "asset_import_completed",
                asset_kind=asset_kind.value,
                rows=len(rows),
                valid_rows=len(cleaned),
                created=created,
                failed=failed
            )

            return ImportResult(
                success=created > 0,
                message=f"Successfully imported {created} assets",
                created_assets=created,
                errors=errors,
                mapped_columns=mapped_columns,
                sample_data=sample,
            )

        except Exception as e:
            logger.error("asset_import_failed", error=str(e), error_type=type(e).__name__)
            return ImportResult(
                success=False,
                message=f"Import failed: {_describe(e)}",
                errors=[_describe(e)],
            )

    async def commit_workbook(self, file: WorkbookSource, kind: Union[str, AssetKind]) -> ImportResult:
        """Read the first worksheet of an upload and import it."""
        try:
            workbook = read_asset_workbook(file, settings.header_scan_rows)
        except ExcelParseError as e:
            return ImportResult(success=False, message=e.message, errors=[e.message])
        return await self.commit(workbook.rows, kind, workbook.headers)


def _describe(error: Exception) -> str:
    """Message of an application error, or str() of anything else."""
    return getattr(error, "message", None) or str(error)


# Singleton instance
_asset_import_service: Optional[AssetImportService] = None


def get_asset_import_service() -> AssetImportService:
    """Get or create AssetImportService instance."""
    global _asset_import_service
    if _asset_import_service is None:
        _asset_import_service = AssetImportService()
    return _asset_import_service
