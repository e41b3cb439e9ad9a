"""Configuration management for controldata."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ControlFileConfig(BaseModel):
    """Control file location and encoding."""

    data_dir: Path = Field(
        default=Path("/var/lib/postgresql/data"), description="Cluster data directory"
    )
    byte_order: Literal["little", "big"] = Field(
        default="little", description="Byte order of the server that wrote pg_control"
    )


class FormattingConfig(BaseModel):
    """Rendering of timestamp fields."""

    time_locale: str = Field(
        default="", description="LC_TIME locale; empty string uses the environment"
    )
    time_format: str = Field(
        default="%c", description="strftime format for timestamps"
    )


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="REST API port")
    metrics_port: int = Field(default=8001, ge=1, le=65535, description="Prometheus metrics port")


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="json", description="Log format")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="controldata", description="Service name for tracing")


class Config(BaseSettings):
    """Main configuration for controldata."""

    model_config = SettingsConfigDict(
        env_prefix="CONTROLDATA_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    control_file: ControlFileConfig = Field(default_factory=ControlFileConfig)
    formatting: FormattingConfig = Field(default_factory=FormattingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()
