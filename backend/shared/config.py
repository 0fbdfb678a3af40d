"""
Centralized configuration for the Prime Portal backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., SUPABASE_*, SESSION_*).
"""

from functools import lru_cache
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
    app_name: str = "Prime Portal API"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:8080"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    supabase_db_url: str = ""  # Direct Postgres URI, only used for migrations

    # Admin OTP login signs in to Supabase Auth with this shared credential
    admin_default_password: str = ""

    # Session store
    session_namespace: str = "savannah_prime"
    session_storage_dir: str = ""  # Empty keeps sessions in memory

    # Browsing contexts held by the API
    context_idle_ttl_seconds: int = 3600
    context_sweep_interval_seconds: int = 60

    # Frontend URLs (for redirects)
    frontend_url: str = "http://localhost:5173"
    password_reset_path: str = "/reset-password"

    @property
    def password_reset_url(self) -> str:
        """Where password reset emails send the client."""
        return f"{self.frontend_url.rstrip('/')}{self.password_reset_path}"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
