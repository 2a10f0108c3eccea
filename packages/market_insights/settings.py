"""
Central configuration using Pydantic Settings.
Handles environment variables and .env file loading.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # Database Configuration (unset means "no data yet", not an error)
    database_url: Optional[str] = Field(
        default=None,
        description="PostgreSQL connection string for the snapshot store",
        validation_alias="DATABASE_URL",
    )
    db_pool_min_size: int = Field(default=1, ge=1, le=10)
    db_pool_max_size: int = Field(default=5, ge=2, le=50)
    db_connection_timeout: float = Field(default=30.0, ge=1.0)
    
    # Snapshot fetch
    snapshot_row_limit: int = Field(
        default=1000,
        ge=1,
        description="Max rows fetched per request when no symbol filter is given",
    )
    upstream_fetch_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Seconds to wait for the snapshot fetch before giving up",
    )
    
    # Query defaults
    default_lookback_hours: int = Field(default=24, ge=1)
    max_lookback_hours: int = Field(default=168, ge=1)
    default_top_n: int = Field(default=10, ge=1)
    max_top_n: int = Field(default=100, ge=1)
    
    # Rate limiting
    rate_limit_enabled: bool = Field(default=True)
    rate_limit_public_api: str = Field(
        default="30/minute",
        description="slowapi limit string applied to public insight routes",
    )
    
    # API Settings
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
    )
    log_level: str = Field(default="INFO")
    
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return upper_v
    
    @field_validator("database_url")
    @classmethod
    def blank_url_is_unset(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v
    
    @property
    def storage_configured(self) -> bool:
        """True when a snapshot store connection string is available."""
        return self.database_url is not None


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings instance.
    Use this function to get settings throughout the application.
    """
    return Settings()


# Convenience export
settings = get_settings()
