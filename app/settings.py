# app/settings.py
"""
Application settings loaded from environment variables (or a .env file).
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Store
    database_url: str = "sqlite:///db.sqlite"  # file in project root

    # Logging
    log_level: str = "INFO"

    # Every top-level operation is aborted once this many seconds have passed
    operation_timeout_seconds: float = 100.0

    # Listing defaults, used when page/recordPerPage are missing or invalid
    default_page: int = 1
    default_record_per_page: int = 10

    # Invoices are due this many days after creation
    invoice_due_days: int = 1

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
