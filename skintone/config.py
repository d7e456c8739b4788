"""Service configuration.

Reads environment variables with defaults for the skin tone service.
"""
import os
from typing import List


class Config:
    """Configuration for the skin tone service."""

    # Logging
    LOG_LEVEL: str = os.environ.get("SKINTONE_LOG_LEVEL", "INFO")

    # Remote image fetch
    FETCH_TIMEOUT: float = float(os.environ.get("SKINTONE_FETCH_TIMEOUT", "10"))
    FETCH_USER_AGENT: str = os.environ.get(
        "SKINTONE_FETCH_USER_AGENT", "Mozilla/5.0 (compatible; SkinToneAnalyzer/3.0)"
    )

    # HTTP server
    HOST: str = os.environ.get("SKINTONE_HOST", "0.0.0.0")
    PORT: int = int(os.environ.get("SKINTONE_PORT", "3002"))
    ALLOWED_ORIGINS: str = os.environ.get("SKINTONE_ALLOWED_ORIGINS", "*")

    @classmethod
    def get_allowed_origins(cls) -> List[str]:
        """Parse the comma separated origin list."""
        return [origin.strip() for origin in cls.ALLOWED_ORIGINS.split(",") if origin.strip()]


config = Config()
