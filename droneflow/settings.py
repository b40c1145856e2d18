"""Application configuration management."""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv


@dataclass
class Settings:
    """Application settings loaded from environment."""

    # App
    app_name: str = "DroneFlow"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"  # development, staging, production

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: List[str] = field(default_factory=lambda: ["http://localhost:3000"])

    # Database
    database_url: str = "sqlite+aiosqlite:///./droneflow.db"
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Lifecycle
    status_compare_and_swap: bool = True

    # Storage folders
    folder_automation_enabled: bool = False
    folder_root: Optional[str] = None

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"  # json or text

    def __post_init__(self):
        """Validate settings after initialization."""
        if self.folder_automation_enabled and not self.folder_root:
            raise ValueError("FOLDER_ROOT is required when FOLDER_AUTOMATION_ENABLED is set")
        if self.log_format not in ("json", "text"):
            raise ValueError(f"LOG_FORMAT must be 'json' or 'text', got '{self.log_format}'")

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def async_database_url(self) -> str:
        """DATABASE_URL with an async driver selected."""
        url = self.database_url
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        if url.startswith("sqlite:///"):
            return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
        return url


def load_settings_from_env() -> Settings:
    """Load settings from environment variables (and .env, if present)."""
    load_dotenv()

    def get_bool(key: str, default: bool = False) -> bool:
        value = os.getenv(key, str(default)).lower()
        return value in ("true", "1", "yes")

    def get_int(key: str, default: int) -> int:
        return int(os.getenv(key, str(default)))

    def get_list(key: str, default: List[str]) -> List[str]:
        value = os.getenv(key)
        if value:
            return [item.strip() for item in value.split(",")]
        return default

    return Settings(
        # App
        app_name=os.getenv("APP_NAME", "DroneFlow"),
        app_version=os.getenv("APP_VERSION", "0.1.0"),
        debug=get_bool("DEBUG", False),
        environment=os.getenv("ENVIRONMENT", "development"),

        # Server
        host=os.getenv("HOST", "0.0.0.0"),
        port=get_int("PORT", 8000),
        allowed_origins=get_list("ALLOWED_ORIGINS", ["http://localhost:3000"]),

        # Database
        database_url=os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./droneflow.db"),
        database_pool_size=get_int("DATABASE_POOL_SIZE", 5),
        database_max_overflow=get_int("DATABASE_MAX_OVERFLOW", 10),

        # Lifecycle
        status_compare_and_swap=get_bool("STATUS_COMPARE_AND_SWAP", True),

        # Storage folders
        folder_automation_enabled=get_bool("FOLDER_AUTOMATION_ENABLED", False),
        folder_root=os.getenv("FOLDER_ROOT"),

        # Logging
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_format=os.getenv("LOG_FORMAT", "json"),
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_settings_from_env()


def clear_settings_cache() -> None:
    """Clear settings cache (for testing)."""
    get_settings.cache_clear()
