"""Application configuration module."""

from typing import Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Database settings
    DATABASE_URL: Optional[str] = None
    DB_TYPE: str = "sqlite"
    DB_HOST: str = "localhost"
    DB_PORT: Optional[int] = None
    DB_NAME: str = "nekobox"
    DB_USER: str = "nekobox"
    DB_PASSWORD: str = ""
    DB_PATH: str = "./nekobox.db"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    SQL_ECHO: bool = False

    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False
    LOG_FILE: Optional[str] = None

    # Question settings
    QUESTION_TOKEN_LENGTH: int = 6
    QUESTION_PAGE_SIZE: int = 20

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()

    @field_validator("QUESTION_TOKEN_LENGTH", "QUESTION_PAGE_SIZE")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"Value must be positive, got {v}")
        return v


# Create global settings instance
settings = Settings()
