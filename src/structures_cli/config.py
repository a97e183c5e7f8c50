"""Configuration management for the Structures CLI."""

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, HttpUrl, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="console", description="Log format ('console' or 'json')")
    file: Optional[Path] = Field(default=None, description="Log file path")

class ServerConfig(BaseModel):
    """Connection to the Structures server."""

    url: HttpUrl = Field(default="http://localhost:8080", description="Base URL of the Structures server.")
    api_path: str = Field(default="/api/structures", description="Path of the structure service below the base URL.")
    request_timeout_seconds: float = Field(default=60.0, ge=1.0, description="Timeout for a single request to the server.")
    connect_timeout_seconds: float = Field(default=10.0, ge=1.0, description="Timeout for establishing a connection.")
    ssl_verify: bool = Field(default=True, description="Verify SSL certificates.")
    username: Optional[str] = Field(default=None, description="Username for basic authentication.")
    password: Optional[SecretStr] = Field(default=None, description="Password for basic authentication.")

    @property
    def has_credentials(self) -> bool:
        return bool(self.username) and self.password is not None and bool(self.password.get_secret_value())

class ConversionConfig(BaseModel):
    """Settings for the type conversion engine."""

    max_depth: int = Field(default=64, ge=1, le=512, description="Maximum nesting depth of a single conversion.")
    tenant_id_field_name: str = Field(default="structuresTenantId", description="Field holding the tenant id in shared entity indices.")


class Config(BaseSettings):
    """Main configuration. Loads from environment variables prefixed with STRUCTURES_."""

    model_config = SettingsConfigDict(
        env_prefix='STRUCTURES_',
        env_nested_delimiter='__', # e.g., STRUCTURES_SERVER__URL
        extra='ignore',
        env_file='.env',
        env_file_encoding='utf-8'
    )

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    conversion: ConversionConfig = Field(default_factory=ConversionConfig)

    @classmethod
    def from_file(cls, file_path: Path) -> "Config":
        """Create configuration strictly from a JSON file.
        Environment variables are not layered on top.
        """
        with open(file_path) as f:
            config_data = json.load(f)
        return cls.model_validate(config_data)
