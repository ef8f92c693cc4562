"""
Unit tests for SupabaseAssetStore.

Run: pytest tests/unit/test_asset_store_service.py -v
"""

import asyncio
from unittest.mock import MagicMock

import pytest

from exceptions import AssetCreateError
from models.asset_import import AssetKind
from services.asset_store_service import SupabaseAssetStore


class TestBuildPayload:
    """Tests for SupabaseAssetStore.build_payload()"""

    def test_keeps_schema_keys_only(self):
        row = {"device_type": "PC", "brand": "Dell", "Remarque": "ok", "sim_number": "0612"}

        payload = SupabaseAssetStore.build_payload(AssetKind.IT, row)

        assert payload == {"device_type": "PC", "brand": "Dell"}

    def test_telecom_schema(self):
        row = {"sim_number": "0612345678", "provider": "IAM", "device_type": "PC"}

        payload = SupabaseAssetStore.build_payload(AssetKind.TELECOM, row)

        assert payload == {"sim_number": "0612345678", "provider": "IAM"}


class TestCreateAsset:
    """Tests for SupabaseAssetStore.create_asset()"""

    def test_inserts_into_it_table(self, mock_supabase):
        store = SupabaseAssetStore(client=mock_supabase)

        asyncio.run(store.create_asset(AssetKind.IT, {"device_type": "PC", "brand": "Dell"}))

        stored = mock_supabase.rows("it_assets")
        assert len(stored) == 1
        assert stored[0]["brand"] == "Dell"
        assert mock_supabase.rows("telecom_assets") == []

    def test_inserts_into_telecom_table(self, mock_supabase):
        store = SupabaseAssetStore(client=mock_supabase)

        asyncio.run(store.create_asset("telecom", {"sim_number": "0612345678"}))

        assert mock_supabase.rows("telecom_assets")[0]["sim_number"] == "0612345678"

    def test_client_resolved_lazily(self, mock_db):
        store = SupabaseAssetStore()

        asyncio.run(store.create_asset(AssetKind.IT, {"device_type": "Switch"}))

        assert mock_db.rows("it_assets")[0]["device_type"] == "Switch"

    def test_rejected_insert_raises(self, mock_supabase):
        mock_supabase.fail_insert_when = lambda item: item.get("brand") == "HP"
        store = SupabaseAssetStore(client=mock_supabase)

        with pytest.raises(AssetCreateError) as exc_info:
            asyncio.run(store.create_asset(AssetKind.IT, {"brand": "HP"}))

        assert exc_info.value.code == "DATABASE_ERROR"
        assert "insert rejected by mock" in exc_info.value.message
        assert exc_info.value.details["asset_kind"] == "it"

    def test_empty_insert_response_raises(self):
        client = MagicMock()
        client.table.return_value.insert.return_value.execute.return_value.data = []
        store = SupabaseAssetStore(client=client)

        with pytest.raises(AssetCreateError):
            asyncio.run(store.create_asset(AssetKind.IT, {"brand": "Dell"}))

        client.table.assert_called_with("it_assets")
