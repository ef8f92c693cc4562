"""
Asset store.

Persists cleaned asset records, one row per call. The import service
only depends on the AssetStore protocol; SupabaseAssetStore is the
production implementation.
"""

import asyncio
from typing import Any, Optional, Protocol, runtime_checkable
import structlog

from config import get_supabase_client, settings
from config.asset_fields import ASSET_FIELDS
from exceptions import AssetCreateError
from models.asset_import import AssetKind

logger = structlog.get_logger(__name__)


@runtime_checkable
class AssetStore(Protocol):
    """Destination for cleaned asset records."""

    async def create_asset(self, kind: AssetKind, row: dict[str, Any]) -> None:
        """Store one record; raise on failure."""
        ...


class SupabaseAssetStore:
    """
    Writes assets to the kind's Supabase table.

    The client is created on first write so previews never need
    database credentials.
    """

    def __init__(self, client: Any = None):
        self._client = client

    @property
    def db(self):
        if self._client is None:
            self._client = get_supabase_client()
        return self._client

    @staticmethod
    def build_payload(kind: AssetKind, row: dict[str, Any]) -> dict[str, Any]:
        """Keep only the keys that belong to the kind's schema."""
        fields = ASSET_FIELDS[AssetKind(kind).value]
        return {key: value for key, value in row.items() if key in fields}

    def _insert(self, kind: AssetKind, payload: dict[str, Any]) -> None:
        table = settings.assets_table(kind.value)
        result = self.db.table(table).insert(payload).execute()
        if not result.data:
            raise AssetCreateError(kind.value, "Insert returned no data")

    async def create_asset(self, kind: AssetKind, row: dict[str, Any]) -> None:
        """
        Insert one cleaned record.

        Raises:
            AssetCreateError: If the insert fails
        """
        kind = AssetKind(kind)
        payload = self.build_payload(kind, row)

        try:
            await asyncio.to_thread(self._insert, kind, payload)
        except AssetCreateError:
            raise
        except Exception as e:
            logger.error("asset_insert_failed", asset_kind=kind.value, error=str(e))
            raise AssetCreateError(kind.value, str(e)) from e

        logger.debug("asset_created", asset_kind=kind.value)


# Singleton instance
_asset_store: Optional[SupabaseAssetStore] = None


def get_asset_store() -> SupabaseAssetStore:
    """Get or create SupabaseAssetStore instance."""
    global _asset_store
    if _asset_store is None:
        _asset_store = SupabaseAssetStore()
    return _asset_store
