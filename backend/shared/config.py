"""
Centralized configuration for the Eros identity backend.

All settings are loaded from environment variables with sensible defaults.
Concern-specific settings are namespaced (e.g., JWT_*, IDENTITY_PROVIDER_*, SUPABASE_*).
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Eros Identity API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Session tokens (self-issued)
    jwt_secret: str = ""
    jwt_issuer: str = "eros-backend"
    jwt_audience: str = "eros-users"
    jwt_realm: str = "eros-api"
    jwt_expiry_days: int = 7

    # External identity provider
    identity_provider_credentials_path: str = ""
    identity_provider_project_id: str = ""
    identity_provider_timeout_seconds: float = 5.0

    # Identity store: "supabase" for Postgres, "memory" for local development
    identity_store: Literal["supabase", "memory"] = "supabase"

    # Supabase (identity store)
    supabase_url: str = ""
    supabase_service_role_key: str = ""

    # Validation policy
    min_age: int = 18
    otp_min_length: int = 6
    otp_max_length: int = 6
    phone_min_digits: int = 1
    phone_max_digits: int = 15


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
