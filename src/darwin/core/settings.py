"""
Environment settings for Darwin Metaheuristics observability.

Settings are read with Pydantic Settings so every value can be overridden
through ``DARWIN_``-prefixed environment variables or a ``.env`` file.
"""

from typing import Any, Dict, Literal, Optional, Union
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ObservabilitySettings(BaseSettings):
    """
    Logfire and logging settings with environment variable support.

    All settings can be overridden via environment variables, e.g.
    ``DARWIN_LOGFIRE_TOKEN`` or ``DARWIN_LOG_LEVEL``.
    """

    model_config = SettingsConfigDict(
        env_prefix="DARWIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Logfire settings
    logfire_token: Optional[str] = Field(default=None, description="Logfire write token")
    logfire_service_name: str = Field(default="darwin", description="Service name reported to logfire")
    logfire_environment: str = Field(default="development", description="Deployment environment")
    send_to_logfire: Union[bool, Literal["if-token-present"]] = Field(
        default="if-token-present",
        description="Whether spans are exported to the logfire backend"
    )
    logfire_console: bool = Field(default=False, description="Print spans to the console")

    # Logging settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Level of the darwin logger hierarchy"
    )

    @field_validator("log_level", mode="before")
    def normalize_log_level(cls, v):
        """Accept lower-case level names."""
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("logfire_token", mode="before")
    def empty_token_is_none(cls, v):
        """Treat an empty token as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def get_logfire_settings(self) -> Dict[str, Any]:
        """Get Logfire configuration."""
        return {
            "token": self.logfire_token,
            "service_name": self.logfire_service_name,
            "environment": self.logfire_environment,
            "send_to_logfire": self.send_to_logfire,
            "console": None if self.logfire_console else False,
        }


# Create global settings instance
settings = ObservabilitySettings()
