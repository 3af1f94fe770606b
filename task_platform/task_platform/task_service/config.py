"""
Configuration management for the task service
"""
from datetime import timedelta
from typing import List, Optional
import re

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {"": "seconds", "s": "seconds", "m": "minutes", "h": "hours", "d": "days"}


def parse_expires_in(value: str) -> timedelta:
    """
    Convert a token lifetime such as "24h", "30m", "7d", "45s" or "3600"
    into a timedelta. A bare number is read as seconds.

    Raises:
        ValueError: If the value is not a recognised duration
    """
    match = _DURATION_RE.match(str(value).lower())
    if not match:
        raise ValueError(f"Invalid duration '{value}'. Use forms like 24h, 30m, 7d, 45s or 3600")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


class Settings(BaseSettings):
    """Task service configuration loaded from environment variables"""

    # Server Configuration
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # Database Configuration
    MONGO_URI: str = Field(
        default="mongodb://localhost:27017",
        validation_alias=AliasChoices("MONGO_URI", "MONGODB_URI"),
    )
    MONGO_DB_NAME: str = "task_platform"

    # Token Configuration
    JWT_SECRET: str = "change-this-secret-in-production"
    JWT_EXPIRES_IN: str = "24h"
    JWT_ALGORITHM: str = "HS256"

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("JWT_EXPIRES_IN")
    @classmethod
    def validate_expires_in(cls, v: str) -> str:
        parse_expires_in(v)
        return v

    @property
    def token_lifetime(self) -> timedelta:
        return parse_expires_in(self.JWT_EXPIRES_IN)


# Global settings instance
settings = Settings()
