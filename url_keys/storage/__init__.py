"""Bundled path index, store registry and config lookup implementations."""

from url_keys.storage.path_index import InMemoryPathIndex, JsonPathIndex
from url_keys.storage.scopes import MappingConfigLookup, StaticScopeRegistry

__all__ = [
    "InMemoryPathIndex",
    "JsonPathIndex",
    "StaticScopeRegistry",
    "MappingConfigLookup",
]
