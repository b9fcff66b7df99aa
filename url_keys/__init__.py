"""Scope-aware unique URL key generation."""

from url_keys.exceptions import (
    DuplicatePathError,
    FieldValidatorError,
    ScopeLookupError,
    UrlKeyError,
    UrlKeyExhaustedError,
)
from url_keys.models import AttributeDescriptor, AttributeScope, DataEntity, ExtensibleEntity
from url_keys.resolver import UrlKeyGenerator

__version__ = "1.0.0"

__all__ = [
    "UrlKeyGenerator",
    "AttributeDescriptor",
    "AttributeScope",
    "DataEntity",
    "ExtensibleEntity",
    "UrlKeyError",
    "ScopeLookupError",
    "UrlKeyExhaustedError",
    "DuplicatePathError",
    "FieldValidatorError",
]
