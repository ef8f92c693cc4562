"""
Database connection management.

The Supabase client is only needed to store committed assets; previews
run without credentials.
"""

from supabase import create_client, Client
from functools import lru_cache
import structlog

from config.settings import settings

logger = structlog.get_logger(__name__)


class DatabaseError(Exception):
    """Base exception for database errors."""
    pass


class ConnectionError(DatabaseError):
    """Failed to connect to database."""
    pass


@lru_cache()
def get_supabase_client() -> Client:
    """
    Get cached Supabase client instance.

    Call get_supabase_client.cache_clear() to reconnect.

    Returns:
        Client: Supabase client

    Raises:
        ConnectionError: If credentials are missing or the client cannot be created
    """
    if not settings.supabase_configured:
        logger.error("supabase_not_configured")
        raise ConnectionError("Supabase URL and key must be set to store assets")

    try:
        logger.info(
            "connecting_to_supabase",
            url=settings.supabase_url[:30] + "..."  # Log partial URL only
        )
        client = create_client(settings.supabase_url, settings.supabase_key)
        logger.info("supabase_connected", status="success")
        return client

    except Exception as e:
        logger.error(
            "supabase_connection_failed",
            error=str(e),
            error_type=type(e).__name__
        )
        raise ConnectionError(f"Failed to connect to Supabase: {e}") from e


def count_rows(client: Client, table: str) -> int:
    """Exact row count of a table."""
    result = client.table(table).select("id", count="exact").limit(1).execute()
    return result.count or 0


def check_connection() -> dict:
    """
    Check database connection health.

    Returns:
        {"status": "not_configured"} without credentials,
        {"status": "healthy", "<kind>_assets_count": n, ...} when both
        asset tables answer, {"status": "unhealthy", "error": ...} otherwise
    """
    if not settings.supabase_configured:
        return {"status": "not_configured"}

    try:
        client = get_supabase_client()
        status = {"status": "healthy"}
        for kind in ("it", "telecom"):
            status[f"{kind}_assets_count"] = count_rows(client, settings.assets_table(kind))
        return status

    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e)
        }
