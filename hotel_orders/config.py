"""Configuration management for the order service."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Redis Configuration
    redis_url: str = Field(default="redis://localhost:6379/0", description="Redis URL")

    # API Configuration
    api_port: int = Field(default=8000, description="API server port")
    api_host: str = Field(default="0.0.0.0", description="API server host")

    # Environment
    environment: Literal["development", "staging", "production"] = Field(
        default="development"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "text"] = Field(default="json", description="Log format")

    # Live streams
    subscriber_queue_size: int = Field(
        default=100, ge=1, description="Pending events buffered per stream subscriber"
    )
    stream_heartbeat_seconds: float = Field(
        default=15.0, gt=0, description="Keep-alive interval for SSE streams"
    )

    # Order lifecycle
    max_transition_retries: int = Field(
        default=3, ge=1, description="Attempts at a status update on version conflicts"
    )
    transition_policy: Literal["permissive", "strict"] = Field(
        default="permissive", description="Which status transition rules apply"
    )
    default_fulfillment_type: Literal["delivery", "pickup", "dine_in"] = Field(
        default="delivery", description="Fulfillment type when the request omits one"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v_upper


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
