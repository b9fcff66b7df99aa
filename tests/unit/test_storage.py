"""Unit tests for the bundled path index, store registry and config lookup."""

import pytest

from url_keys.exceptions import DuplicatePathError, ScopeLookupError
from url_keys.models.config import ConfigValues
from url_keys.models.paths import PathRecord, ProjectedPath
from url_keys.storage.path_index import InMemoryPathIndex
from url_keys.storage.scopes import MappingConfigLookup, StaticScopeRegistry


def projected(request_path: str, store_id: int = 1, entity_id: int = 42) -> ProjectedPath:
    return ProjectedPath(
        store_id=store_id,
        entity_id=entity_id,
        entity_type="catalog_product",
        request_path=request_path,
    )


class TestInMemoryPathIndex:
    """Test InMemoryPathIndex."""

    def test_add_assigns_ids(self, path_index: InMemoryPathIndex) -> None:
        first = path_index.add(projected("a.html"))
        second = path_index.add(projected("b.html"))

        assert first.url_rewrite_id == 1
        assert second.url_rewrite_id == 2
        assert len(path_index) == 2

    def test_find_one_exact(self, path_index: InMemoryPathIndex) -> None:
        path_index.add(projected("a.html", store_id=1))
        path_index.add(projected("a.html", store_id=2))

        record = path_index.find_one({"store_id": 2, "request_path": "a.html"})

        assert record is not None
        assert record.store_id == 2

    def test_find_one_missing(self, path_index: InMemoryPathIndex) -> None:
        assert path_index.find_one({"request_path": "nope.html"}) is None

    def test_find_all_membership(self, path_index: InMemoryPathIndex) -> None:
        path_index.save_paths(
            [
                projected("a.html", store_id=1),
                projected("b.html", store_id=2),
                projected("a.html", store_id=3),
            ]
        )

        records = path_index.find_all({"request_path": ["a.html", "b.html"], "store_id": {1, 2}})

        assert sorted(r.request_path for r in records) == ["a.html", "b.html"]

    def test_find_all_empty_collection_matches_nothing(
        self, path_index: InMemoryPathIndex
    ) -> None:
        path_index.add(projected("a.html"))
        assert path_index.find_all({"store_id": []}) == []

    def test_add_same_entity_returns_existing(self, path_index: InMemoryPathIndex) -> None:
        first = path_index.add(projected("a.html"))
        again = path_index.add(projected("a.html"))

        assert again == first
        assert len(path_index) == 1

    def test_add_other_entity_raises(self, path_index: InMemoryPathIndex) -> None:
        path_index.add(projected("a.html", entity_id=7))

        with pytest.raises(DuplicatePathError) as exc_info:
            path_index.add(projected("a.html", entity_id=42))

        assert exc_info.value.store_id == 1
        assert exc_info.value.request_path == "a.html"

    def test_add_ignores_incoming_record_id(self, path_index: InMemoryPathIndex) -> None:
        record = PathRecord(
            url_rewrite_id=50,
            store_id=1,
            entity_id=1,
            entity_type="catalog_product",
            request_path="a.html",
        )
        assert path_index.add(record).url_rewrite_id == 1

    def test_seeded_records(self) -> None:
        index = InMemoryPathIndex(
            [PathRecord(url_rewrite_id=10, store_id=1, request_path="a.html")]
        )

        assert index.add(projected("b.html")).url_rewrite_id == 11

    def test_seeded_duplicate_ids_rejected(self) -> None:
        record = PathRecord(url_rewrite_id=1, store_id=1, request_path="a.html")
        with pytest.raises(ValueError, match="Duplicate url_rewrite_id"):
            InMemoryPathIndex([record, record])

    def test_delete_entity(self, path_index: InMemoryPathIndex) -> None:
        path_index.save_paths([projected("a.html", entity_id=1), projected("b.html", entity_id=2)])

        assert path_index.delete_entity(1, "catalog_product") == 1
        assert [r.request_path for r in path_index] == ["b.html"]


class TestStaticScopeRegistry:
    """Test StaticScopeRegistry."""

    def test_list_active_only(self, scope_registry: StaticScopeRegistry) -> None:
        assert scope_registry.list_scope_ids() == [1, 2, 3]

    def test_list_including_disabled(self, scope_registry: StaticScopeRegistry) -> None:
        assert scope_registry.list_scope_ids(include_disabled=True) == [1, 2, 3, 4]

    def test_website_scope_ids(self, scope_registry: StaticScopeRegistry) -> None:
        assert scope_registry.get_website_scope_ids(1) == [1, 2]
        assert scope_registry.get_website_scope_ids("4") == [3, 4]

    @pytest.mark.parametrize("store_id", [99, None, "abc"])
    def test_unknown_store(self, scope_registry: StaticScopeRegistry, store_id) -> None:
        with pytest.raises(ScopeLookupError) as exc_info:
            scope_registry.get_website_scope_ids(store_id)

        assert exc_info.value.store_id == store_id
        assert isinstance(exc_info.value, LookupError)


class TestMappingConfigLookup:
    """Test MappingConfigLookup."""

    @pytest.fixture
    def lookup(self) -> MappingConfigLookup:
        return MappingConfigLookup(
            ConfigValues(
                default={"seo/suffix": ".html", "seo/empty": None},
                stores={2: {"seo/suffix": ""}},
            )
        )

    def test_store_value(self, lookup: MappingConfigLookup) -> None:
        assert lookup.get_value("seo/suffix", "store", 2) == ""

    def test_falls_back_to_default(self, lookup: MappingConfigLookup) -> None:
        assert lookup.get_value("seo/suffix", "store", 1) == ".html"
        assert lookup.get_value("seo/suffix", "default") == ".html"

    def test_unknown_path(self, lookup: MappingConfigLookup) -> None:
        assert lookup.get_value("seo/other", "store", 1) is None
        assert lookup.get_value("seo/empty", "store", 1) is None
