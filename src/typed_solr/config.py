"""
Configuration management for the typed SOLR client.

This module handles loading and validating configuration from environment variables
and .env files using Pydantic. The library itself never reads the environment;
only :meth:`SOLRClient.from_config` and the command line use these settings.
"""

import os
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


class SOLRConfig(BaseModel):
    """Configuration for the SOLR connection."""

    base_url: str = Field(
        default="http://localhost",
        description="Scheme and host of the SOLR instance; any path is ignored",
    )
    port: int = Field(default=8983, description="Port SOLR listens on")
    core: Optional[str] = Field(
        default=None, description="Name of the SOLR core to query"
    )
    username: Optional[str] = Field(
        default=None, description="Username for SOLR authentication"
    )
    password: Optional[str] = Field(
        default=None, description="Password for SOLR authentication"
    )
    timeout: float = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(
        default=True, description="Whether to verify SSL certificates"
    )
    default_rows: int = Field(
        default=10, description="Number of rows the command line requests by default"
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate that the base URL is properly formatted."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("SOLR base URL must start with http:// or https://")
        if v.endswith("/"):
            v = v.rstrip("/")
        return v

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate that port is in valid range."""
        if not (1 <= v <= 65535):
            raise ValueError("Port must be between 1 and 65535")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate that timeout is positive."""
        if v <= 0:
            raise ValueError("Timeout must be positive")
        return v

    @field_validator("default_rows")
    @classmethod
    def validate_default_rows(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Default rows must be positive")
        if v > 10000:
            raise ValueError("Default rows should not exceed 10000")
        return v

    @property
    def auth(self) -> Optional[tuple]:
        """Basic auth credentials, when both parts are configured."""
        if self.username and self.password:
            return (self.username, self.password)
        return None


class Config(BaseModel):
    """Main configuration class that combines all configuration sections."""

    solr: SOLRConfig = Field(default_factory=SOLRConfig)
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v_upper

    @classmethod
    def from_env(cls, env_file: Optional[Union[str, Path]] = None) -> "Config":
        """
        Load configuration from environment variables and optional .env file.

        Args:
            env_file: Optional path to .env file. If not provided, looks for .env
                     in the current directory.

        Returns:
            Configured Config instance.

        Raises:
            ValueError: If configuration is invalid.
        """
        if env_file is None:
            env_file = Path.cwd() / ".env"

        if isinstance(env_file, str):
            env_file = Path(env_file)

        if env_file.exists():
            load_dotenv(env_file)

        solr_config = SOLRConfig(
            base_url=os.getenv("SOLR_BASE_URL", "http://localhost"),
            port=int(os.getenv("SOLR_PORT", "8983")),
            core=os.getenv("SOLR_CORE") or None,
            username=os.getenv("SOLR_USERNAME") or None,
            password=os.getenv("SOLR_PASSWORD") or None,
            timeout=float(os.getenv("SOLR_TIMEOUT", "30")),
            verify_ssl=os.getenv("SOLR_VERIFY_SSL", "true").lower() == "true",
            default_rows=int(os.getenv("SOLR_DEFAULT_ROWS", "10")),
        )

        return cls(solr=solr_config, log_level=os.getenv("LOG_LEVEL", "INFO"))


def get_config(env_file: Optional[Union[str, Path]] = None) -> Config:
    """
    Convenience function to get configuration.

    Args:
        env_file: Optional path to .env file.

    Returns:
        Configured Config instance.
    """
    return Config.from_env(env_file)
