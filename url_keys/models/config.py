"""Configuration models for the URL key generator."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from url_keys.constants import (
    DEFAULT_INDEX_FILE,
    DEFAULT_LOG_FILE,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_URL_SUFFIX,
    UNIQUE_TOKEN_LENGTH,
)


class ResolverConfig(BaseModel):
    """Settings shared by every generate() call of a resolver instance."""

    default_suffix: str | None = Field(
        default=DEFAULT_URL_SUFFIX, description="Suffix used when no per-store override applies"
    )
    suffix_config_path: str | None = Field(
        default=None, description="Config path holding a per-store suffix override"
    )
    max_attempts: int = Field(
        default=DEFAULT_MAX_ATTEMPTS, ge=1, description="Uniqueness mutations before giving up"
    )
    token_length: int = Field(default=UNIQUE_TOKEN_LENGTH, ge=1, le=64)
    on_exhaustion: Literal["return", "raise"] = Field(
        default="return",
        description="Return the last colliding value, or raise UrlKeyExhaustedError",
    )


class StoreConfig(BaseModel):
    """A single store view and the website it belongs to."""

    store_id: int = Field(ge=1, description="Store view ID")
    code: str = Field(description="Store view code")
    website_id: int = Field(ge=1, description="Owning website ID")
    is_active: bool = Field(default=True)


class ConfigValues(BaseModel):
    """Scoped configuration values (config path -> value)."""

    default: dict[str, str | None] = Field(default_factory=dict)
    stores: dict[int, dict[str, str | None]] = Field(default_factory=dict)


class LoggingConfig(BaseModel):
    """Logging configuration for loguru."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    serialize: bool = Field(default=False, description="Serialize file logs to JSON")
    colorize: bool = Field(default=True, description="Colorize console output")
    file_path: str | None = Field(default=DEFAULT_LOG_FILE, description="None disables file logs")
    rotation: str = Field(default="50 MB", description="Log rotation size/time")
    retention: str = Field(default="30 days", description="Log retention period")
    compression: str = Field(default="zip", description="Compression format for rotated logs")


class AppConfig(BaseModel):
    """Complete configuration for the url-keys CLI."""

    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    stores: list[StoreConfig] = Field(default_factory=list)
    config_values: ConfigValues = Field(default_factory=ConfigValues)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    index_file: str = Field(default=DEFAULT_INDEX_FILE)

    @field_validator("stores")
    @classmethod
    def validate_unique_store_ids(cls, v: list[StoreConfig]) -> list[StoreConfig]:
        """Reject duplicate store IDs."""
        ids = [store.store_id for store in v]
        if len(ids) != len(set(ids)):
            raise ValueError("store_id values must be unique")
        return v
