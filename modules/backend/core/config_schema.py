"""
Configuration Schemas.

Pydantic models defining the expected structure of each YAML config file.
Used by AppConfig to validate configuration at load time. If a YAML file
has missing keys, wrong types, or unknown fields, a clear ValidationError
is raised at startup instead of a cryptic KeyError deep in application code.

Each top-level class corresponds to one file in config/settings/:
    ApplicationSchema  → application.yaml
    DatabaseSchema     → database.yaml
    LoggingSchema      → logging.yaml
    SecuritySchema     → security.yaml
    StorageSchema      → storage.yaml
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# application.yaml
# =============================================================================


class ServerSchema(_StrictBase):
    host: str
    port: int


class CorsSchema(_StrictBase):
    origins: list[str]


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    environment: str
    debug: bool
    api_prefix: str
    docs_enabled: bool
    server: ServerSchema
    cors: CorsSchema


# =============================================================================
# database.yaml
# =============================================================================


class DatabaseSchema(_StrictBase):
    driver: Literal["sqlite", "postgresql"]
    sqlite_path: str
    host: str
    port: int
    name: str
    user: str
    pool_size: int
    max_overflow: int
    pool_timeout: int
    pool_recycle: int
    echo: bool


# =============================================================================
# logging.yaml
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int
    backup_count: int


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: str
    format: str
    handlers: HandlersSchema


# =============================================================================
# security.yaml
# =============================================================================


class JwtSchema(_StrictBase):
    algorithm: str
    access_token_expire_minutes: int
    audience: str


class CorsEnforcementSchema(_StrictBase):
    allow_methods: list[str]
    allow_headers: list[str]


class SecuritySchema(_StrictBase):
    jwt: JwtSchema
    cors: CorsEnforcementSchema


# =============================================================================
# storage.yaml
# =============================================================================


class S3StorageSchema(_StrictBase):
    endpoint_url: str | None
    bucket: str
    region: str


class LocalStorageSchema(_StrictBase):
    root: str
    public_base_url: str


class StorageSchema(_StrictBase):
    driver: Literal["s3", "local"]
    upload_url_expire_minutes: int
    download_url_expire_minutes: int
    max_upload_bytes: int
    s3: S3StorageSchema
    local: LocalStorageSchema
