"""
Core configuration module for the Knapsack Memetic Optimizer.

This module manages application-level settings using Pydantic Settings,
providing type-safe configuration with environment variable support.
"""

from typing import Any, Dict, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All settings can be overridden via environment variables or a `.env` file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        # Allow extra fields for forward compatibility
        extra="ignore"
    )

    # Application settings
    app_name: str = "Knapsack Memetic Optimizer"
    app_version: str = "1.0.0"
    environment: str = Field(default="development")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="WARNING")

    # Logfire settings
    logfire_token: str = Field(default="")
    logfire_service_name: str = Field(default="knapsack-optimizer")
    logfire_environment: str = Field(default="development")
    logfire_console: bool = Field(default=False)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept lower-case level names from the environment."""
        if isinstance(v, str):
            return v.upper()
        return v

    def get_logfire_settings(self) -> Dict[str, Any]:
        """Get Logfire configuration."""
        return {
            "token": self.logfire_token or None,
            "send_to_logfire": "if-token-present",
            "service_name": self.logfire_service_name,
            "environment": self.logfire_environment,
            "console": None if self.logfire_console else False,
        }


# Create global settings instance
settings = Settings()
