"""
Asset import API routes.

Spreadsheet uploads for IT and telecom assets: preview the column
mapping first, then commit.
"""

from fastapi import APIRouter, UploadFile, File
from fastapi.responses import JSONResponse
import structlog

from models.asset_import import AssetKind, PreviewResult, ImportResult
from services.asset_import_service import get_asset_import_service
from exceptions import AppError, ValidationError

logger = structlog.get_logger(__name__)

router = APIRouter()

ALLOWED_EXTENSIONS = (".xlsx", ".xlsm")


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


async def _read_upload(file: UploadFile) -> bytes:
    """Read an uploaded workbook, rejecting other file types."""
    filename = (file.filename or "").lower()
    if not filename.endswith(ALLOWED_EXTENSIONS):
        raise ValidationError(
            message="Only .xlsx files are supported",
            code="INVALID_FILE_TYPE",
            details={"filename": file.filename}
        )

    contents = await file.read()
    if not contents:
        raise ValidationError(
            message="Uploaded file is empty",
            code="EMPTY_FILE",
            details={"filename": file.filename}
        )
    return contents


# ===================
# UPLOAD ROUTES
# ===================

@router.post("/{kind}/preview", response_model=PreviewResult)
async def preview_import(kind: AssetKind, file: UploadFile = File(...)):
    """
    Preview an asset spreadsheet.

    Maps the columns and cleans the rows without storing anything.

    Returns:
        PreviewResult with column mappings, sample rows and row count
    """
    try:
        logger.info("asset_preview_requested", asset_kind=kind.value, filename=file.filename)
        contents = await _read_upload(file)
        return get_asset_import_service().preview_workbook(contents, kind)
    except Exception as e:
        return handle_error(e)


@router.post("/{kind}/commit", response_model=ImportResult)
async def commit_import(kind: AssetKind, file: UploadFile = File(...)):
    """
    Import an asset spreadsheet.

    Same pipeline as preview, then stores every valid row.

    Returns:
        ImportResult with created count and mapped columns
    """
    try:
        logger.info("asset_import_requested", asset_kind=kind.value, filename=file.filename)
        contents = await _read_upload(file)
        return await get_asset_import_service().commit_workbook(contents, kind)
    except Exception as e:
        return handle_error(e)
