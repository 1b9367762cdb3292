"""
Process-wide configuration shared by every settings class.

All config classes read the same .env file. The fields here control the
FastAPI debug flag and the root log level.

Dependencies: pydantic_settings
System role: Root of the course service configuration classes
"""

from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict
from pydantic import Field


class BaseSettings(PydanticBaseSettings):
    """Shared .env handling plus the service-wide flags."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    debug: bool = Field(
        default=False,
        description="Run FastAPI in debug mode and echo SQL statements",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level passed to configure_logging()",
    )
