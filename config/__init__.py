"""
Configuration module.

Exports:
    settings: Application settings instance
    get_settings: Cached settings factory
    get_supabase_client: Supabase client used to store committed assets
    check_connection: Health check for the asset tables

Matching tables live in config.asset_fields and are imported directly.
"""

from config.settings import settings, get_settings, Settings
from config.database import (
    get_supabase_client,
    check_connection,
    count_rows,
    DatabaseError,
    ConnectionError
)

__all__ = [
    # Settings
    "settings",
    "get_settings",
    "Settings",

    # Database
    "get_supabase_client",
    "check_connection",
    "count_rows",
    "DatabaseError",
    "ConnectionError",
]
