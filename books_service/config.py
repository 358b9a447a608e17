"""
Configuration management using environment variables.
"""

from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings

DEFAULT_BOOKS_FILE = Path(__file__).resolve().parent / "data" / "books.json"


class BooksServiceConfig(BaseSettings):
    """
    Configuration class for the books service.
    Uses pydantic BaseSettings for environment variable management.
    """

    # API Settings
    api_title: str = "Books Service API"
    api_version: str = "1.0.0"
    api_description: str = "Read-only queries over a static collection of books"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # Book Store
    books_file: str = str(DEFAULT_BOOKS_FILE)

    # Query Settings
    timezone: str = "UTC"
    words_per_page: int = 250
    most_recent_limit: int = 3

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"
    log_file: Optional[str] = None

    # CORS Settings
    cors_origins: list = ["*"]

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",  # Ignore extra fields from .env
    }

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v):
        """Ensure the time zone is known."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            if v.upper() != "UTC":
                raise ValueError(f"unknown timezone: {v}")
        return v

    @field_validator("words_per_page")
    @classmethod
    def validate_words_per_page(cls, v):
        """Ensure the word multiplier is positive."""
        if v < 1:
            raise ValueError("words_per_page must be positive")
        return v

    @field_validator("most_recent_limit")
    @classmethod
    def validate_most_recent_limit(cls, v):
        """Ensure at least one recent book is returned."""
        if v < 1:
            raise ValueError("most_recent_limit must be at least 1")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        """Ensure log format is valid."""
        valid_formats = ["json", "console"]
        if v.lower() not in valid_formats:
            raise ValueError(f"log_format must be one of: {valid_formats}")
        return v.lower()

    def get_books_file_path(self) -> Path:
        """Get books file path as Path object."""
        return Path(self.books_file)

    def get_log_file_path(self) -> Optional[Path]:
        """Get log file path as Path object."""
        if self.log_file:
            return Path(self.log_file)
        return None


# Global configuration instance
config = BooksServiceConfig()
