"""Scoped URL key generation.

Turns a candidate value into a request path that no other entity owns in any of
the stores the attribute applies to. On collision, a short token is appended and
the check repeated, up to a fixed number of attempts.
"""

import hashlib
import itertools
import re
import secrets
import time
from collections.abc import Callable, Iterable
from typing import Any

from tenacity import Retrying, retry_if_result, stop_after_attempt

from url_keys.constants import (
    FIELD_REQUEST_PATH,
    FIELD_STORE_ID,
    SCOPE_TYPE_STORE,
    UNIQUE_TOKEN_LENGTH,
    UNIQUE_TOKEN_SEPARATOR,
)
from url_keys.exceptions import UrlKeyExhaustedError
from url_keys.models.config import ResolverConfig
from url_keys.models.paths import AttributeDescriptor, GenerationResult, ProjectedPath
from url_keys.resolver.interfaces import (
    ConfigLookup,
    EntityObject,
    PathIndex,
    ScopeRegistry,
    TokenSource,
)
from url_keys.utils.logging import get_logger

logger = get_logger(__name__)


def clock_token(length: int = UNIQUE_TOKEN_LENGTH) -> str:
    """
    Generate a short token from a nanosecond clock reading and random bits.

    Args:
        length: Number of hex characters to keep

    Returns:
        Lowercase hex token
    """
    seed = f"{time.time_ns()}:{secrets.randbits(32)}".encode()
    return hashlib.sha256(seed).hexdigest()[:length]


def is_numeric_id(value: Any) -> bool:
    """Return True for ints and digit-only strings (bools excluded)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, str):
        return value.strip().isdigit()
    return False


def strip_suffix(value: str, suffix: str | None) -> str:
    """Remove one trailing occurrence of suffix, case-insensitively.

    Examples:
        >>> strip_suffix("Shoes.HTML", ".html")
        'Shoes'
        >>> strip_suffix("shoes.html.html", ".html")
        'shoes.html'
    """
    if not suffix:
        return value
    return re.sub(re.escape(suffix) + r"\Z", "", value, count=1, flags=re.IGNORECASE)


def apply_suffix(value: str, suffix: str | None) -> str:
    """Strip then re-append suffix, so already-suffixed values are unchanged."""
    return strip_suffix(value, suffix) + (suffix or "")


class SuffixCache:
    """Per-store suffixes, loaded once and kept for the life of the owner."""

    def __init__(self) -> None:
        self._values: dict[int, str | None] = {}

    def get_or_load(self, store_id: int, loader: Callable[[int], str | None]) -> str | None:
        if store_id not in self._values:
            self._values[store_id] = loader(store_id)
        return self._values[store_id]

    def __contains__(self, store_id: object) -> bool:
        return store_id in self._values

    def __len__(self) -> int:
        return len(self._values)


class UrlKeyGenerator:
    """Resolve a candidate URL key into one that is free in every applicable store.

    Args:
        storage: Index of recorded request paths
        scope_registry: Store and website metadata
        config_lookup: Source of per-store suffix overrides
        attribute: Attribute holding the candidate value
        config: Suffix, attempt and exhaustion settings
        token_source: Produces the token appended on collision
    """

    def __init__(
        self,
        storage: PathIndex,
        scope_registry: ScopeRegistry,
        config_lookup: ConfigLookup,
        attribute: AttributeDescriptor | None = None,
        config: ResolverConfig | None = None,
        token_source: TokenSource = clock_token,
    ) -> None:
        self.storage = storage
        self.scope_registry = scope_registry
        self.config_lookup = config_lookup
        self.attribute = attribute
        self.config = config or ResolverConfig()
        self.token_source = token_source
        self._suffixes = SuffixCache()

    def set_attribute(self, attribute: AttributeDescriptor) -> "UrlKeyGenerator":
        self.attribute = attribute
        return self

    def set_default_suffix(self, suffix: str | None) -> "UrlKeyGenerator":
        self.config = self.config.model_copy(update={"default_suffix": suffix})
        return self

    def set_suffix_config_path(self, path: str | None) -> "UrlKeyGenerator":
        # Cached values belong to the previous path
        self.config = self.config.model_copy(update={"suffix_config_path": path})
        self._suffixes = SuffixCache()
        return self

    def _load_suffix(self, store_id: int) -> str | None:
        return self.config_lookup.get_value(
            self.config.suffix_config_path, SCOPE_TYPE_STORE, store_id
        )

    def resolve_suffix(self, store_id: Any = None) -> str | None:
        """
        Get the request path suffix for a store.

        Args:
            store_id: Store ID, or None for the default scope

        Returns:
            The store's configured suffix when a suffix config path is set and
            store_id is numeric, otherwise the default suffix. None means no suffix.
        """
        if self.config.suffix_config_path and is_numeric_id(store_id):
            return self._suffixes.get_or_load(int(store_id), self._load_suffix)
        return self.config.default_suffix

    def project_paths(
        self,
        entity_id: Any,
        entity_type: str | None,
        value: str,
        store_ids: Iterable[int],
    ) -> list[ProjectedPath]:
        """Build one suffixed path per store, in the order given."""
        return [
            ProjectedPath(
                store_id=store_id,
                entity_id=entity_id,
                entity_type=entity_type,
                request_path=apply_suffix(value, self.resolve_suffix(store_id)),
            )
            for store_id in store_ids
        ]

    def is_available(self, paths: list[ProjectedPath]) -> bool:
        """
        Check that no other entity owns any of the projected paths.

        Records matching a path exactly (same store, entity, type and request
        path) belong to the entity being saved and are not collisions.

        Args:
            paths: Projected paths for one candidate value

        Returns:
            True if the candidate is free in every store
        """
        owned_ids: set[int] = set()
        request_paths: list[str] = []
        store_ids: list[int | None] = []

        for path in paths:
            if path.entity_id is not None and path.entity_id != "":
                record = self.storage.find_one(path.to_criteria())
                if record is not None:
                    owned_ids.add(record.url_rewrite_id)

            if path.request_path not in request_paths:
                request_paths.append(path.request_path)
            if path.store_id not in store_ids:
                store_ids.append(path.store_id)

        if not request_paths:
            return True

        records = self.storage.find_all(
            {FIELD_REQUEST_PATH: request_paths, FIELD_STORE_ID: store_ids}
        )
        conflicts = [record for record in records if record.url_rewrite_id not in owned_ids]

        return not conflicts

    def make_unique(self, value: str) -> str:
        return f"{value}{UNIQUE_TOKEN_SEPARATOR}{self.token_source(self.config.token_length)}"

    def _require_attribute(self) -> AttributeDescriptor:
        if self.attribute is None:
            raise ValueError("No attribute set on UrlKeyGenerator; call set_attribute() first")
        return self.attribute

    @staticmethod
    def _store_id_of(entity: EntityObject) -> Any:
        store_id = entity.get_data(entity.store_id_field())
        if is_numeric_id(store_id):
            return int(store_id)
        return store_id

    def get_scope_ids(self, entity: EntityObject) -> list[int]:
        """
        Get the store IDs a candidate value must be free in.

        Global and non-scope-aware attributes, and website/store attributes
        saved without a store, are checked in every store.

        Raises:
            ScopeLookupError: If the entity's store cannot be resolved
        """
        attribute = self._require_attribute()
        store_id = self._store_id_of(entity)

        if attribute.is_scope_aware:
            if attribute.is_website() and store_id:
                return self.scope_registry.get_website_scope_ids(store_id)
            if attribute.is_store() and store_id:
                return [store_id]

        return self.scope_registry.list_scope_ids(include_disabled=False)

    def generate_result(self, entity: EntityObject) -> GenerationResult:
        """
        Resolve the entity's candidate value and return it with its projected paths.

        Args:
            entity: Entity carrying the candidate under the attribute code

        Returns:
            Final value, the paths to record for it, and the attempt count

        Raises:
            ValueError: If the candidate value is empty
            ScopeLookupError: If a store or website cannot be resolved
            UrlKeyExhaustedError: If attempts run out and on_exhaustion is "raise"
        """
        attribute = self._require_attribute()
        value = entity.get_data(attribute.attribute_code)
        if value is None or str(value) == "":
            raise ValueError(f"Entity has no value for attribute '{attribute.attribute_code}'")

        entity_id = entity.get_id()
        entity_type = attribute.entity_type_code
        store_ids = self.get_scope_ids(entity)
        own_suffix = self.resolve_suffix(self._store_id_of(entity))
        base = strip_suffix(str(value), own_suffix)
        counter = itertools.count()

        def attempt() -> GenerationResult:
            number = next(counter)
            candidate = base if number == 0 else self.make_unique(base)
            paths = self.project_paths(entity_id, entity_type, candidate, store_ids)
            available = self.is_available(paths)
            if not available:
                logger.debug(
                    "Request path taken",
                    candidate=candidate,
                    attempt=number,
                    entity_id=entity_id,
                )
            return GenerationResult(
                value=candidate + (own_suffix or ""),
                paths=paths,
                available=available,
                attempts=number,
            )

        retrying = Retrying(
            stop=stop_after_attempt(self.config.max_attempts + 1),
            retry=retry_if_result(lambda result: not result.available),
            retry_error_callback=lambda state: state.outcome.result(),
        )
        result = retrying(attempt)

        if not result.available:
            logger.warning(
                "URL key still collides after max attempts",
                value=result.value,
                attempts=result.attempts,
                entity_id=entity_id,
            )
            if self.config.on_exhaustion == "raise":
                raise UrlKeyExhaustedError(
                    f"No free URL key found after {result.attempts} attempts",
                    last_value=result.value,
                    attempts=result.attempts,
                )
        else:
            logger.info(
                "URL key resolved",
                value=result.value,
                attempts=result.attempts,
                stores=len(store_ids),
            )

        return result

    def generate(self, entity: EntityObject) -> str:
        """Return a URL key for the entity that no other entity owns in its stores."""
        return self.generate_result(entity).value
