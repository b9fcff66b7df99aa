"""Shared pytest fixtures and configuration."""

import itertools
from collections.abc import Callable, Iterator

import pytest
from loguru import logger

from url_keys.models.config import ConfigValues, ResolverConfig, StoreConfig
from url_keys.models.paths import AttributeDescriptor, AttributeScope, PathRecord
from url_keys.resolver.url_key_generator import UrlKeyGenerator
from url_keys.storage.path_index import InMemoryPathIndex
from url_keys.storage.scopes import MappingConfigLookup, StaticScopeRegistry


class SequenceTokens:
    """Deterministic token source returning t001, t002, ... and counting calls."""

    def __init__(self, prefix: str = "t") -> None:
        self.prefix = prefix
        self.calls = 0
        self._counter = itertools.count(1)

    def __call__(self, length: int) -> str:
        self.calls += 1
        return f"{self.prefix}{next(self._counter):03d}"[:length]


@pytest.fixture(autouse=True)
def reset_loguru() -> Iterator[None]:
    """Drop sinks added by a test (e.g. CLI runs) once it finishes."""
    yield
    logger.remove()


@pytest.fixture
def sample_stores() -> list[StoreConfig]:
    """Three stores: 1 and 2 on website 1, 3 on website 2, plus inactive 4 on website 2."""
    return [
        StoreConfig(store_id=1, code="default", website_id=1),
        StoreConfig(store_id=2, code="french", website_id=1),
        StoreConfig(store_id=3, code="wholesale", website_id=2),
        StoreConfig(store_id=4, code="archive", website_id=2, is_active=False),
    ]


@pytest.fixture
def scope_registry(sample_stores: list[StoreConfig]) -> StaticScopeRegistry:
    return StaticScopeRegistry(sample_stores)


@pytest.fixture
def config_lookup() -> MappingConfigLookup:
    return MappingConfigLookup(ConfigValues())


@pytest.fixture
def path_index() -> InMemoryPathIndex:
    return InMemoryPathIndex()


@pytest.fixture
def tokens() -> SequenceTokens:
    return SequenceTokens()


@pytest.fixture
def store_attribute() -> AttributeDescriptor:
    return AttributeDescriptor(
        entity_type_code="catalog_product", attribute_code="url_key", scope=AttributeScope.STORE
    )


@pytest.fixture
def make_generator(
    path_index: InMemoryPathIndex,
    scope_registry: StaticScopeRegistry,
    config_lookup: MappingConfigLookup,
    store_attribute: AttributeDescriptor,
    tokens: SequenceTokens,
) -> Callable[..., UrlKeyGenerator]:
    """Factory for generators sharing the test's index, registry and tokens."""

    def factory(
        scope: AttributeScope | None = AttributeScope.STORE,
        config: ResolverConfig | None = None,
        **overrides,
    ) -> UrlKeyGenerator:
        attribute = store_attribute.model_copy(update={"scope": scope})
        return UrlKeyGenerator(
            storage=overrides.get("storage", path_index),
            scope_registry=overrides.get("scope_registry", scope_registry),
            config_lookup=overrides.get("config_lookup", config_lookup),
            attribute=attribute,
            config=config or ResolverConfig(default_suffix=".html"),
            token_source=overrides.get("token_source", tokens),
        )

    return factory


@pytest.fixture
def make_record() -> Callable[..., PathRecord]:
    ids = itertools.count(1)

    def factory(
        request_path: str,
        store_id: int = 1,
        entity_id: int = 7,
        entity_type: str = "catalog_product",
    ) -> PathRecord:
        return PathRecord(
            url_rewrite_id=next(ids),
            store_id=store_id,
            entity_id=entity_id,
            entity_type=entity_type,
            request_path=request_path,
        )

    return factory
