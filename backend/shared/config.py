"""
Centralized configuration for the Quillpost backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., JWT_*, EMAIL_*, SUPABASE_*).
"""

from functools import lru_cache
from typing import Literal
from pydantic import Field
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
    app_name: str = "Quillpost API"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "test"] = "development"
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

    # Rate limiting (fixed windows per client address)
    rate_limit_enabled: bool = True
    rate_limit_requests: int = 100
    rate_limit_window: int = 60  # seconds
    auth_rate_limit_requests: int = 10
    auth_rate_limit_window: int = 900
    password_reset_rate_limit_requests: int = 3
    password_reset_rate_limit_window: int = 3600

    # Public base URL, used to build links in outgoing emails
    app_url: str = "http://localhost:8000"

    # Session tokens (JWT_SECRET is required, at least 32 characters)
    jwt_secret: str = Field(..., min_length=32)
    jwt_algorithm: str = "HS256"
    access_token_ttl_seconds: int = 3600  # 1 hour
    refresh_token_ttl_seconds: int = 2592000  # 30 days

    # Passwords and one-time tokens
    bcrypt_rounds: int = 12
    email_verification_ttl_hours: int = 24
    password_reset_ttl_hours: int = 1

    # Email delivery
    email_from: str = "noreply@example.com"
    email_api_key: str = ""
    email_api_url: str = "https://api.resend.com/emails"

    # User store: "memory" for local development, "supabase" for deployments
    user_store_backend: Literal["memory", "supabase"] = "memory"

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_db_url: str = ""

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
