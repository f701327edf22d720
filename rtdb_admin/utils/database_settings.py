import logging
from typing import Any, Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Configuration settings for the Realtime Database client."""

    model_config = SettingsConfigDict(
        env_prefix="FIREBASE_",
        case_sensitive=False,
        validate_assignment=True,
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    database_url: Optional[str] = Field(
        default=None, description="Realtime Database URL"
    )
    auth_variable_override: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Auth variable override applied to every request (JSON object)"
    )
    access_token: Optional[str] = Field(
        default=None, description="Static bearer token used to authorize requests"
    )
    database_emulator_host: Optional[str] = Field(
        default=None, description="host:port of a local database emulator"
    )
    timeout: float = Field(
        default=30.0, description="Total timeout of one HTTP exchange in seconds"
    )
    pool_size: int = Field(
        default=10, description="Maximum number of pooled connections"
    )
    log_level: str = Field(default="INFO", description="Logging level")
    log_dir: Optional[str] = Field(
        default=None, description="Directory for JSON log files; console only when unset"
    )

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @field_validator("pool_size")
    @classmethod
    def validate_pool_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("pool_size must be at least 1")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {v}")
        return level
