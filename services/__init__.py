"""
Business logic services.

Each service handles one step of the asset import pipeline.
"""

from services.header_mapping_service import HeaderMapper, get_header_mapper
from services.row_cleaning_service import RowCleaner, get_row_cleaner
from services.asset_store_service import AssetStore, SupabaseAssetStore, get_asset_store
from services.asset_import_service import AssetImportService, get_asset_import_service

__all__ = [
    "HeaderMapper",
    "get_header_mapper",
    "RowCleaner",
    "get_row_cleaner",
    "AssetStore",
    "SupabaseAssetStore",
    "get_asset_store",
    "AssetImportService",
    "get_asset_import_service",
]
