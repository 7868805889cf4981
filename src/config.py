"""
Configuration settings for the application.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Redis (selection ledger persistence)
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    SELECTION_KEY_PREFIX: str = os.getenv("SELECTION_KEY_PREFIX", "selection:")
    SELECTION_TTL_SECONDS: int = int(
        os.getenv("SELECTION_TTL_SECONDS", str(30 * 24 * 3600))
    )

    # Remote catalog service
    CATALOG_SERVICE_URL: str | None = os.getenv("CATALOG_SERVICE_URL")
    CATALOG_SERVICE_TOKEN: str | None = os.getenv("CATALOG_SERVICE_TOKEN")
    CATALOG_FETCH_TIMEOUT_SECONDS: float = float(
        os.getenv("CATALOG_FETCH_TIMEOUT_SECONDS", "5.0")
    )

    # Catalog cache / listing
    CATALOG_CACHE_TTL_SECONDS: float = float(
        os.getenv("CATALOG_CACHE_TTL_SECONDS", "300")
    )
    CATALOG_WARM_ON_STARTUP: bool = (
        os.getenv("CATALOG_WARM_ON_STARTUP", "false").lower() == "true"
    )
    CATALOG_PAGE_SIZE: int = int(os.getenv("CATALOG_PAGE_SIZE", "12"))
    CATALOG_MAX_PAGE_SIZE: int = int(os.getenv("CATALOG_MAX_PAGE_SIZE", "100"))

    # Search suggestions
    SUGGESTION_DEBOUNCE_MS: int = int(os.getenv("SUGGESTION_DEBOUNCE_MS", "300"))
    SUGGESTION_MIN_QUERY_LENGTH: int = int(
        os.getenv("SUGGESTION_MIN_QUERY_LENGTH", "2")
    )
    SUGGESTION_LIMIT: int = int(os.getenv("SUGGESTION_LIMIT", "6"))
    SUGGESTION_LOCATION: str = os.getenv("SUGGESTION_LOCATION", "Cairo")
    SUGGESTION_PRICE_CEILING: str = os.getenv("SUGGESTION_PRICE_CEILING", "500k")

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.
        """
        return self.ENVIRONMENT.lower() == "production"

    @property
    def remote_catalog_enabled(self) -> bool:
        """Return True when the remote catalog service can be queried."""
        return bool(self.CATALOG_SERVICE_URL)

    @property
    def suggestion_debounce_seconds(self) -> float:
        return max(self.SUGGESTION_DEBOUNCE_MS, 0) / 1000.0

    def __init__(self):
        self.env = os.getenv("ENV", "dev")
        self.debug = os.getenv("DEBUG", "false").lower() == "true"
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        logging.basicConfig(level=self.log_level)
        self.logger = logging.getLogger(__name__)

        self.logger.debug(
            f"Config initialized with env={self.env}, debug={self.debug}, "
            f"log_level={self.log_level}"
        )


# Create a global settings instance for import
settings = Settings()
