"""Typed view of the ``config:`` section of config.yaml.

Every field has a default so the service starts with no file at all.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field

Environment = Literal["development", "production", "test"]


class CORSConfig(BaseModel):
    origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default_factory=lambda: ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default_factory=lambda: ["*"])


class AppConfig(BaseModel):
    """Where the HTTP server binds and how it presents itself."""

    environment: Environment = "development"
    host: str = "localhost"
    port: int = Field(default=8000, ge=1, le=65535)
    cors: CORSConfig = Field(default_factory=CORSConfig)


class DatabaseConfig(BaseModel):
    """SQLAlchemy connection settings.

    The pool settings only apply to server databases; SQLite URLs ignore them.
    """

    url: str = "sqlite:///./users.db"
    pool_size: int = Field(default=20, ge=1)
    max_overflow: int = Field(default=10, ge=0)
    pool_timeout: int = Field(default=30, description="Seconds to wait for a connection")
    pool_recycle: int = Field(default=1800, description="Seconds before a connection is replaced")
    echo: bool = False

    @computed_field
    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @computed_field
    @property
    def is_in_memory(self) -> bool:
        """True for ``sqlite://`` and ``sqlite:///:memory:``."""
        return self.url in ("sqlite://", "sqlite:///:memory:")


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: Literal["json", "plain"] = Field(
        default="plain", description="Format of the file sink; the console is always plain"
    )
    file: str | None = None
    max_size_mb: int = Field(default=10, ge=1)
    backup_count: int = Field(default=5, ge=0)


class ConfigData(BaseModel):
    app: AppConfig = Field(default_factory=AppConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
