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

    # Catalog service settings
    CATALOG_API_URL: str = os.getenv(
        "CATALOG_API_URL",
        "https://api.escuelajs.co/api/v1",
    )
    CATALOG_TIMEOUT_SECONDS: float = float(os.getenv("CATALOG_TIMEOUT_SECONDS", "10"))

    # Inventory view settings
    DEFAULT_PAGE_SIZE: int = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
    LOAD_ON_STARTUP: bool = os.getenv("LOAD_ON_STARTUP", "true").lower() == "true"
    LOAD_ERROR_MESSAGE: str = os.getenv(
        "LOAD_ERROR_MESSAGE",
        "Failed to load products. Please try again.",
    )

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.
        """
        return self.ENVIRONMENT.lower() == "production"

    @property
    def catalog_base_url(self) -> str:
        """Catalog URL without a trailing slash."""
        return self.CATALOG_API_URL.rstrip("/")

    def __init__(self):
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        logging.basicConfig(level=self.log_level)
        self.logger = logging.getLogger(__name__)

        self.logger.debug(
            f"Config initialized with environment={self.ENVIRONMENT}, "
            f"log_level={self.log_level}, catalog={self.catalog_base_url}"
        )


# Create a global settings instance for import
settings = Settings()
