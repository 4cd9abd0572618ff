"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class JWTConfig(BaseModel):
    """JWT validation configuration."""

    secret: str | None = Field(
        default=None, description="Shared secret used to sign and verify tokens"
    )
    issuer: str = Field(
        default="bookshelf-api", description="Issuer expected in (and written to) tokens"
    )
    audiences: list[str] = Field(
        default_factory=lambda: ["bookshelf"],
        description="JWT audiences that this API accepts",
    )
    allowed_algorithms: list[str] = Field(
        default_factory=lambda: ["HS256", "HS384", "HS512"],
        description="JWT algorithms allowed for token validation",
    )
    clock_skew: int = Field(default=60, description="Clock skew tolerance in seconds")
    user_id_claim: str = Field(
        default="sub", description="Claim holding the caller's user id"
    )


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./bookshelf.db",
        description="Database connection URL",
    )
    pool_size: int = Field(default=20, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    echo: bool = Field(default=False, description="Echo SQL statements")

    @computed_field
    @property
    def is_sqlite(self) -> bool:
        """Whether the configured URL points at SQLite."""
        return self.url.startswith("sqlite")


class CoverConfig(BaseModel):
    """Cover image acquisition and storage configuration."""

    storage_dir: str = Field(
        default="./uploads/bookcovers", description="Directory holding cover files"
    )
    route_prefix: str = Field(
        default="/api/books/cover/",
        description="Path prefix of the cover-serving route, joined with the book id",
    )
    file_extension: str = Field(
        default=".png", description="Extension used for every stored cover"
    )
    connect_timeout: float = Field(
        default=3.0, description="Connect timeout for cover downloads in seconds"
    )
    read_timeout: float = Field(
        default=3.0, description="Read timeout for cover downloads in seconds"
    )
    chunk_size: int = Field(
        default=64 * 1024, description="Chunk size used when streaming cover bytes"
    )


class PaginationConfig(BaseModel):
    """Default paging applied by the listing endpoints."""

    default_size: int = Field(default=10, description="Page size when none is given")
    max_size: int = Field(default=100, description="Largest page size accepted")


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")
    public_base_url: str | None = Field(
        default=None,
        description="Externally visible base URL used to build cover references",
    )
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )

    @property
    def base_url(self) -> str:
        """Public base URL, falling back to one built from host and port."""
        if self.public_base_url:
            return self.public_base_url.rstrip("/")
        scheme = "https" if self.environment == "production" else "http"
        return f"{scheme}://{self.host}:{self.port}"


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    jwt: JWTConfig = Field(
        default_factory=JWTConfig, description="JWT validation configuration"
    )
    cover: CoverConfig = Field(
        default_factory=CoverConfig, description="Cover storage configuration"
    )
    pagination: PaginationConfig = Field(
        default_factory=PaginationConfig, description="Pagination defaults"
    )
