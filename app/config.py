"""
Configuration for the profile parser service.
Uses pydantic-settings for environment variable loading (prefix PROFILE_PARSER_).
"""

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PROFILE_PARSER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "Profile Parser"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # Uploads
    max_upload_bytes: int = 10 * 1024 * 1024

    # OCR (Tesseract)
    ocr_language: str = "eng"
    tesseract_cmd: Optional[str] = None

    # Web scraping
    scrape_timeout_seconds: float = 30.0
    scrape_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    )
    # Hostnames (and their subdomains) that may be scraped; empty = any public host
    scrape_allowed_hosts: List[str] = ["linkedin.com"]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
