"""Static store registry and mapping-backed config lookup."""

from collections.abc import Iterable
from typing import Any

from url_keys.constants import SCOPE_TYPE_STORE
from url_keys.exceptions import ScopeLookupError
from url_keys.models.config import ConfigValues, StoreConfig


class StaticScopeRegistry:
    """Stores and websites defined up front, e.g. from YAML configuration."""

    def __init__(self, stores: Iterable[StoreConfig]) -> None:
        self._stores: dict[int, StoreConfig] = {store.store_id: store for store in stores}

    def get_store(self, store_id: Any) -> StoreConfig:
        """
        Get a store by ID.

        Raises:
            ScopeLookupError: If no such store exists
        """
        try:
            return self._stores[int(store_id)]
        except (KeyError, TypeError, ValueError):
            raise ScopeLookupError(
                f"The store that was requested wasn't found: {store_id!r}", store_id=store_id
            ) from None

    def list_scope_ids(self, include_disabled: bool = False) -> list[int]:
        return [
            store.store_id
            for store in self._stores.values()
            if include_disabled or store.is_active
        ]

    def get_website_scope_ids(self, store_id: Any) -> list[int]:
        """Return every store ID sharing a website with the given store."""
        website_id = self.get_store(store_id).website_id
        return [store.store_id for store in self._stores.values() if store.website_id == website_id]


class MappingConfigLookup:
    """Config values keyed by path, with store values falling back to defaults."""

    def __init__(self, values: ConfigValues | None = None) -> None:
        self.values = values or ConfigValues()

    def get_value(self, config_path: str, scope_type: str, scope_id: Any = None) -> str | None:
        if scope_type == SCOPE_TYPE_STORE and scope_id is not None:
            store_values = self.values.stores.get(int(scope_id), {})
            if config_path in store_values:
                return store_values[config_path]
        return self.values.default.get(config_path)
