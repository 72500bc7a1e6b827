"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "jobboard"

    # Uploads (transient logo files live here only while a request runs)
    upload_dir: str = "uploads"
    max_logo_size_mb: int = Field(5, ge=1)

    # Logo fingerprinting
    # Changing algorithm or size makes existing stored fingerprints incomparable.
    logo_hash_algorithm: str = "ahash"
    logo_hash_size: int = Field(8, ge=2)
    logo_match_threshold: int = Field(10, ge=0)

    # App
    log_level: str = "INFO"
    debug: bool = False

    @property
    def max_logo_size_bytes(self) -> int:
        return self.max_logo_size_mb * 1024 * 1024

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
