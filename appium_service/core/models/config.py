"""
Configuration models.

Provides Pydantic models for appium_service configuration with validation.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import ConfigDict, Field, field_validator

from ..address import DEFAULT_LOCAL_IP_ADDRESS, validate_address
from .base import AppiumBaseModel

LogLevel = Literal["debug", "info", "warning", "error"]

DEFAULT_APPIUM_PORT = 4723
DEFAULT_STARTUP_TIMEOUT = 120.0


class ConfigBaseModel(AppiumBaseModel):
    """Base model for config sections with relaxed strict mode for TOML loading."""

    model_config = ConfigDict(
        strict=False,  # Allow coercion from TOML and env var strings
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )


class ServerConfig(ConfigBaseModel):
    """Server section: where and how long to wait for the server."""

    address: str = DEFAULT_LOCAL_IP_ADDRESS
    port: int = Field(default=DEFAULT_APPIUM_PORT, ge=0)
    startup_timeout: float = Field(default=DEFAULT_STARTUP_TIMEOUT, gt=0)
    log_file: str | None = None

    @field_validator("address", mode="before")
    @classmethod
    def check_address(cls, v: Any) -> str:
        """Validate the bind address, defaulting blank values."""
        if v is None:
            return validate_address("")
        if not isinstance(v, str):
            raise ValueError(f"address must be a string, got {type(v).__name__}")
        return validate_address(v)


class PathsConfig(ConfigBaseModel):
    """Explicit locations of the Node.js executable and Appium entry script."""

    node: str | None = None
    appium_js: str | None = None

    @field_validator("node", "appium_js", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class LoggingConfig(ConfigBaseModel):
    """Logging configuration section."""

    level: LogLevel = "warning"
    console: bool = False
    file: bool = True
    path: str | None = None

    @field_validator("path", mode="before")
    @classmethod
    def blank_path_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

