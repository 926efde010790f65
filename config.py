"""Configuration management for TinyLink."""

from typing import List, Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, model_validator


class Config(BaseSettings):
    """Application configuration.

    Every field can be set from the environment with a ``TINYLINK_`` prefix,
    e.g. ``TINYLINK_DATABASE_URL``.
    """

    # Store settings
    store_backend: Literal["memory", "postgres"] = Field(
        default="memory",
        description="Link store backend: 'memory' (single process) or 'postgres'"
    )

    database_url: Optional[str] = Field(
        default=None,
        description="PostgreSQL connection URL (required for the postgres backend)"
    )

    database_create_tables: bool = Field(
        default=False,
        description="Create the links table on startup if missing"
    )

    database_pool_max_size: int = Field(
        default=10,
        ge=1,
        description="Maximum connections in the asyncpg pool"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=9200,
        description="Port to listen on"
    )

    workers: int = Field(
        default=1,
        ge=1,
        description="Number of uvicorn worker processes. Only 1 is allowed with the memory backend."
    )

    cors_allow_origins: List[str] = Field(
        default=["*"],
        description="Origins allowed to call the JSON API from a browser"
    )

    # Short link settings
    base_url: str = Field(
        default="http://localhost:9200",
        description="Base URL for generating short URLs"
    )

    path_prefix: str = Field(
        default="",
        description="Path prefix for short URLs (e.g., '/l' for /l/abc123)"
    )

    short_code_length: int = Field(
        default=6,
        ge=1,
        description="Length of generated short codes"
    )

    short_code_alphabet: Optional[str] = Field(
        default=None,
        description="Characters for generated short codes (defaults to base62)"
    )

    enable_custom_codes: bool = Field(
        default=True,
        description="Allow users to provide custom short codes"
    )

    max_generation_attempts: int = Field(
        default=5,
        ge=1,
        description="Generate-and-insert attempts before failing with GenerationExhausted"
    )

    custom_code_min_length: int = Field(default=3, ge=1)
    custom_code_max_length: int = Field(default=32, ge=1)

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = SettingsConfigDict(
        env_prefix="TINYLINK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    @model_validator(mode="after")
    def check_backend(self) -> "Config":
        if self.store_backend == "postgres" and not self.database_url:
            raise ValueError("database_url is required when store_backend is 'postgres'")
        if self.store_backend == "memory" and self.workers > 1:
            raise ValueError("The memory backend cannot be shared between worker processes")
        if self.custom_code_min_length > self.custom_code_max_length:
            raise ValueError("custom_code_min_length must not exceed custom_code_max_length")
        return self


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
