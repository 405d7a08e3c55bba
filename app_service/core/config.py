# Standard library imports
import os
from typing import Final, List, Optional
from dotenv import load_dotenv

from app_service.di.pattern import DEFAULT_PATTERN

_TRUE_VALUES = ("true", "1", "yes")


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    """
    Application settings loaded from environment variables.

    This class centralizes all configuration settings for the application.
    All settings are loaded from environment variables with sensible defaults.
    Settings are read once at bootstrap and never change at runtime.
    """

    def __init__(self) -> None:
        # Load environment variables from .env file
        load_dotenv()

        self.app_name: Final[str] = os.getenv("APP_NAME", "app-service")
        self.app_version: Final[str] = os.getenv("APP_VERSION", "1.0.0")

        # Component Discovery Configuration
        # Comma-separated packages to scan, e.g. "app_service,acme_adapters"
        self.scan_namespaces: Final[List[str]] = _split_csv(
            os.getenv("SCAN_NAMESPACES", "app_service")
        )
        # Regular expression over simple class names
        self.scan_pattern: Final[str] = os.getenv("SCAN_PATTERN", DEFAULT_PATTERN)
        self.enforce_layers: Final[bool] = os.getenv(
            "ENFORCE_LAYERS", "true"
        ).lower() in _TRUE_VALUES

        # HTTP Server Configuration
        self.host: Final[str] = os.getenv("HOST", "0.0.0.0")
        self.port: Final[int] = int(os.getenv("PORT", "8080"))
        # Comma-separated browser origins allowed by CORS; empty disables CORS
        self.cors_origins: Final[List[str]] = _split_csv(os.getenv("CORS_ORIGINS", ""))

        # Logging Configuration
        self.log_level: Final[str] = os.getenv("LOG_LEVEL", "INFO").upper()


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)

    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
