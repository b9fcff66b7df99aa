"""BDD tests for scoped URL key generation."""

import re
from unittest.mock import MagicMock

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from url_keys.models.config import ResolverConfig, StoreConfig
from url_keys.models.entities import DataEntity
from url_keys.models.paths import AttributeDescriptor, AttributeScope, PathRecord, ProjectedPath
from url_keys.resolver.url_key_generator import UrlKeyGenerator, clock_token
from url_keys.storage.path_index import InMemoryPathIndex
from url_keys.storage.scopes import MappingConfigLookup, StaticScopeRegistry

# Load all scenarios from feature file
scenarios("features/url_key_generation.feature")


# Fixtures


@pytest.fixture
def context() -> dict:
    """Shared scenario state."""
    return {
        "stores": [],
        "suffix": None,
        "index": InMemoryPathIndex(),
        "storage": None,
        "tokens": MagicMock(side_effect=clock_token),
        "result": None,
    }


# Background Steps


@given(parsers.parse("stores {first:d} and {second:d} belong to website {website:d}"))
def two_stores(context: dict, first: int, second: int, website: int) -> None:
    for store_id in (first, second):
        context["stores"].append(
            StoreConfig(store_id=store_id, code=f"store_{store_id}", website_id=website)
        )


@given(parsers.parse("store {store_id:d} belongs to website {website:d}"))
def one_store(context: dict, store_id: int, website: int) -> None:
    context["stores"].append(
        StoreConfig(store_id=store_id, code=f"store_{store_id}", website_id=website)
    )


@given(parsers.parse('the default URL suffix is "{suffix}"'))
def default_suffix(context: dict, suffix: str) -> None:
    context["suffix"] = suffix


# Given Steps


@given("an empty path index")
def empty_index(context: dict) -> None:
    assert len(context["index"]) == 0


@given(parsers.parse('entity {entity_id:d} owns "{request_path}" in store {store_id:d}'))
def entity_owns_path(context: dict, entity_id: int, request_path: str, store_id: int) -> None:
    context["index"].add(
        ProjectedPath(
            store_id=store_id,
            entity_id=entity_id,
            entity_type="catalog_product",
            request_path=request_path,
        )
    )


@given("every request path is taken")
def every_path_taken(context: dict) -> None:
    storage = MagicMock()
    storage.find_one.return_value = None
    storage.find_all.return_value = [
        PathRecord(url_rewrite_id=1, store_id=1, entity_id=1, request_path="taken.html")
    ]
    context["storage"] = storage


# When Steps


@when(
    parsers.parse(
        'entity {entity_id:d} saves URL key "{value}" in store {store_id:d} with {scope} scope'
    )
)
def save_url_key(context: dict, entity_id: int, value: str, store_id: int, scope: str) -> None:
    storage = context["storage"] or MagicMock(wraps=context["index"])
    context["storage"] = storage

    generator = UrlKeyGenerator(
        storage=storage,
        scope_registry=StaticScopeRegistry(context["stores"]),
        config_lookup=MappingConfigLookup(),
        attribute=AttributeDescriptor(
            entity_type_code="catalog_product",
            attribute_code="url_key",
            scope=AttributeScope(scope),
        ),
        config=ResolverConfig(default_suffix=context["suffix"]),
        token_source=context["tokens"],
    )

    entity = DataEntity(entity_id=entity_id, store_id=store_id, url_key=value)
    context["result"] = generator.generate_result(entity)


# Then Steps


@then(parsers.parse('the generated URL key is "{expected}"'))
def key_is(context: dict, expected: str) -> None:
    assert context["result"].value == expected


@then(parsers.parse('the generated URL key matches "{pattern}"'))
def key_matches(context: dict, pattern: str) -> None:
    regex = re.escape(pattern).replace("XXXX", "[0-9a-f]{4}")
    assert re.fullmatch(regex, context["result"].value), context["result"].value


@then(parsers.parse('availability was checked in stores "{store_ids}"'))
def checked_stores(context: dict, store_ids: str) -> None:
    expected = [int(s) for s in store_ids.split(",")]
    criteria = context["storage"].find_all.call_args.args[0]
    assert criteria["store_id"] == expected
    assert [p.store_id for p in context["result"].paths] == expected


@then("no uniqueness token was requested")
def no_token(context: dict) -> None:
    context["tokens"].assert_not_called()


@then(parsers.parse("generation stops after {attempts:d} attempts"))
def stops_after(context: dict, attempts: int) -> None:
    assert context["result"].attempts == attempts
    assert context["tokens"].call_count == attempts
    assert context["storage"].find_all.call_count == attempts + 1


@then("a URL key is still returned")
def key_returned(context: dict) -> None:
    result = context["result"]
    assert not result.available
    assert re.fullmatch(r"shoes-[0-9a-f]{4}\.html", result.value)
