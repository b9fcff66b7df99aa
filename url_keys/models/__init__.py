"""Pydantic data models and entity objects."""

from url_keys.models.config import (
    AppConfig,
    ConfigValues,
    LoggingConfig,
    ResolverConfig,
    StoreConfig,
)
from url_keys.models.entities import DataEntity, ExtensibleEntity
from url_keys.models.paths import (
    AttributeDescriptor,
    AttributeScope,
    GenerationResult,
    PathRecord,
    ProjectedPath,
)
from url_keys.models.validation import ValidatorResult

__all__ = [
    # Paths
    "AttributeScope",
    "AttributeDescriptor",
    "ProjectedPath",
    "PathRecord",
    "GenerationResult",
    # Entities
    "DataEntity",
    "ExtensibleEntity",
    # Validation
    "ValidatorResult",
    # Config
    "ResolverConfig",
    "StoreConfig",
    "ConfigValues",
    "LoggingConfig",
    "AppConfig",
]
