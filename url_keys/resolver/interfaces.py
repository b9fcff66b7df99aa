"""Collaborators consumed by the URL key generator."""

from collections.abc import Mapping
from typing import Any, Protocol

from url_keys.models.paths import PathRecord


class PathIndex(Protocol):
    """Stored request paths. Criteria values are scalars or collections (membership)."""

    def find_one(self, criteria: Mapping[str, Any]) -> PathRecord | None: ...

    def find_all(self, criteria: Mapping[str, Any]) -> list[PathRecord]: ...


class ScopeRegistry(Protocol):
    """Store and website metadata."""

    def list_scope_ids(self, include_disabled: bool = False) -> list[int]: ...

    def get_website_scope_ids(self, store_id: int) -> list[int]: ...


class ConfigLookup(Protocol):
    """Scoped configuration values."""

    def get_value(self, config_path: str, scope_type: str, scope_id: Any = None) -> str | None: ...


class EntityObject(Protocol):
    """Entity carrying the candidate value."""

    def get_id(self) -> Any: ...

    def get_data(self, key: str | None = None) -> Any: ...

    def store_id_field(self) -> str: ...


class TokenSource(Protocol):
    """Produces a short uniqueness token of the requested length."""

    def __call__(self, length: int) -> str: ...
