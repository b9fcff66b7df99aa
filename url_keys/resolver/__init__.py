"""Scoped URL key resolution."""

from url_keys.resolver.interfaces import (
    ConfigLookup,
    EntityObject,
    PathIndex,
    ScopeRegistry,
    TokenSource,
)
from url_keys.resolver.url_key_generator import (
    SuffixCache,
    UrlKeyGenerator,
    apply_suffix,
    clock_token,
    is_numeric_id,
    strip_suffix,
)

__all__ = [
    "UrlKeyGenerator",
    "SuffixCache",
    "clock_token",
    "is_numeric_id",
    "strip_suffix",
    "apply_suffix",
    "PathIndex",
    "ScopeRegistry",
    "ConfigLookup",
    "EntityObject",
    "TokenSource",
]
