"""Configuration management for nikkei-yprice."""
import os
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _optional_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    return float(value) if value else None


class Config:
    """Application configuration."""

    # Nikkei endpoints
    NIKKEI_BASE_URL: str = os.getenv("NIKKEI_BASE_URL", "https://www.nikkei.com")

    # HTTP settings. No timeout unless REQUEST_TIMEOUT is set.
    REQUEST_TIMEOUT: Optional[float] = _optional_float("REQUEST_TIMEOUT")
    USER_AGENT: str = os.getenv(
        "USER_AGENT",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36",
    )

    # Pipeline defaults
    DEFAULT_HEADER_ROWS: int = int(os.getenv("DEFAULT_HEADER_ROWS", "1"))
    DEFAULT_CONCURRENCY: int = int(os.getenv("DEFAULT_CONCURRENCY", "5"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls) -> None:
        """Validate configuration values."""
        if cls.DEFAULT_HEADER_ROWS < 0:
            raise ValueError("DEFAULT_HEADER_ROWS must be >= 0")
        if cls.DEFAULT_CONCURRENCY < 1:
            raise ValueError("DEFAULT_CONCURRENCY must be >= 1")
        if cls.REQUEST_TIMEOUT is not None and cls.REQUEST_TIMEOUT <= 0:
            raise ValueError("REQUEST_TIMEOUT must be positive when set")
