"""Utility functions and helpers."""

from url_keys.utils.config_loader import load_app_config, load_yaml_config
from url_keys.utils.formatting import DataFormatter, FieldMapper, FormatterIterator, FormatterOptions
from url_keys.utils.logging import get_logger, setup_logging
from url_keys.utils.slug import format_url_key
from url_keys.utils.validation import assert_valid, validate_required_fields

__all__ = [
    "setup_logging",
    "get_logger",
    "format_url_key",
    "load_yaml_config",
    "load_app_config",
    "DataFormatter",
    "FieldMapper",
    "FormatterIterator",
    "FormatterOptions",
    "validate_required_fields",
    "assert_valid",
]
