"""
Application configuration management.
"""

from dataclasses import dataclass
from functools import lru_cache


# Shared by every manager in every process that should see each other's broadcasts.
GLOBAL_SCOPE_ID = "ctcm"


@dataclass(frozen=True)
class Settings:
    """Application settings (code-only; no environment variables)."""

    # Application
    app_name: str = "Cross-Tab Communication"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # Channels
    global_scope_id: str = GLOBAL_SCOPE_ID
    channel_name_length: int = 6
    transport: str = "local"

    # Max inbound messages buffered per hosted channel by the HTTP service
    inbox_limit: int = 1000


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
