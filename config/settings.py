"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # SUPABASE
    # ===================
    supabase_url: Optional[str] = Field(
        None,
        description="Supabase project URL (required for commits)"
    )
    supabase_key: Optional[str] = Field(
        None,
        description="Supabase anon/public key (required for commits)"
    )
    it_assets_table: str = Field(
        default="it_assets",
        description="Table receiving imported IT assets"
    )
    telecom_assets_table: str = Field(
        default="telecom_assets",
        description="Table receiving imported telecom assets"
    )

    # ===================
    # COLUMN MATCHING
    # ===================
    synonym_match_threshold: float = Field(
        default=0.25,
        ge=0,
        le=1,
        description="Minimum score for a synonym match to be kept"
    )
    fuzzy_match_threshold: float = Field(
        default=0.4,
        ge=0,
        le=1,
        description="Minimum similarity between header and field key"
    )
    row_mapping_min_confidence: float = Field(
        default=0.3,
        ge=0,
        le=1,
        description="Mappings at or below this confidence are not applied to rows"
    )

    # ===================
    # SAMPLING
    # ===================
    preview_sample_size: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Cleaned rows returned with a preview"
    )
    import_sample_size: int = Field(
        default=3,
        ge=1,
        le=100,
        description="Cleaned rows returned with a committed import"
    )
    profile_sample_rows: int = Field(
        default=10,
        ge=1,
        le=1000,
        description="Rows scanned to build the data profile"
    )
    header_scan_rows: int = Field(
        default=10,
        ge=1,
        le=200,
        description="Leading worksheet rows searched for the header row"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=8000,
        ge=1000,
        le=65535,
        description="API port"
    )
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        description="Origins allowed to call the upload endpoints"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def supabase_configured(self) -> bool:
        """Check if Supabase credentials are present."""
        return bool(self.supabase_url and self.supabase_key)

    def assets_table(self, kind: str) -> str:
        """Table name for an asset kind ("it" or "telecom")."""
        return self.it_assets_table if kind == "it" else self.telecom_assets_table


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
