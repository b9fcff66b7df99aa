"""Path index implementations: in-memory and JSON-file backed."""

import json
from collections.abc import Iterable, Mapping
from datetime import datetime
from pathlib import Path
from typing import Any

from url_keys.constants import (
    FIELD_ENTITY_ID,
    FIELD_ENTITY_TYPE,
    FIELD_REQUEST_PATH,
    FIELD_STORE_ID,
)
from url_keys.exceptions import DuplicatePathError
from url_keys.models.paths import PathRecord, ProjectedPath
from url_keys.utils.logging import get_logger

logger = get_logger(__name__)

_COLLECTION_TYPES = (list, tuple, set, frozenset)
_PATH_FIELDS = {FIELD_STORE_ID, FIELD_ENTITY_ID, FIELD_ENTITY_TYPE, FIELD_REQUEST_PATH}


def _matches(record: PathRecord, criteria: Mapping[str, Any]) -> bool:
    """Equality for scalar criteria, membership for collections."""
    for field, expected in criteria.items():
        actual = getattr(record, field, None)
        if isinstance(expected, _COLLECTION_TYPES):
            if actual not in expected:
                return False
        elif actual != expected:
            return False
    return True


class InMemoryPathIndex:
    """Request paths held in a list, with a unique (store_id, request_path) constraint."""

    def __init__(self, records: Iterable[PathRecord] = ()) -> None:
        self._records: list[PathRecord] = []
        for record in records:
            self._insert(record)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(list(self._records))

    @property
    def records(self) -> list[PathRecord]:
        return list(self._records)

    def _next_id(self) -> int:
        return max((record.url_rewrite_id for record in self._records), default=0) + 1

    def _insert(self, record: PathRecord) -> None:
        if any(r.url_rewrite_id == record.url_rewrite_id for r in self._records):
            raise ValueError(f"Duplicate url_rewrite_id: {record.url_rewrite_id}")
        self._records.append(record)

    def find_one(self, criteria: Mapping[str, Any]) -> PathRecord | None:
        for record in self._records:
            if _matches(record, criteria):
                return record
        return None

    def find_all(self, criteria: Mapping[str, Any]) -> list[PathRecord]:
        return [record for record in self._records if _matches(record, criteria)]

    def add(self, path: ProjectedPath) -> PathRecord:
        """
        Record a projected path.

        Args:
            path: Path to record

        Returns:
            The new record, or the existing one if this entity already owns it

        Raises:
            DuplicatePathError: If another entity owns the request path in that store
        """
        existing = self.find_one(
            {FIELD_STORE_ID: path.store_id, FIELD_REQUEST_PATH: path.request_path}
        )
        if existing is not None:
            if (existing.entity_id, existing.entity_type) == (path.entity_id, path.entity_type):
                return existing
            raise DuplicatePathError(
                f"Request path '{path.request_path}' already exists in store {path.store_id}",
                store_id=path.store_id,
                request_path=path.request_path,
            )

        record = PathRecord(
            url_rewrite_id=self._next_id(), **path.model_dump(include=_PATH_FIELDS)
        )
        self._records.append(record)
        logger.debug("Path recorded", request_path=record.request_path, store_id=record.store_id)
        return record

    def save_paths(self, paths: Iterable[ProjectedPath]) -> list[PathRecord]:
        """Record several paths. Paths already written stay written if a later one fails."""
        return [self.add(path) for path in paths]

    def delete_entity(self, entity_id: Any, entity_type: str) -> int:
        """Remove every record for an entity. Returns the number removed."""
        before = len(self._records)
        self._records = [
            record
            for record in self._records
            if not (record.entity_id == entity_id and record.entity_type == entity_type)
        ]
        return before - len(self._records)


class JsonPathIndex(InMemoryPathIndex):
    """In-memory index persisted to a JSON file."""

    def __init__(self, file_path: Path | str) -> None:
        """
        Initialize the index, loading any records already on disk.

        Args:
            file_path: JSON file holding the records
        """
        self.file_path = Path(file_path)
        super().__init__(self._load())

    def _load(self) -> list[PathRecord]:
        if not self.file_path.exists():
            logger.debug("Path index file not found, starting empty", path=str(self.file_path))
            return []

        try:
            content = json.loads(self.file_path.read_text())
            records = [PathRecord.model_validate(item) for item in content["data"]]
            logger.info("Path index loaded", path=str(self.file_path), count=len(records))
            return records

        except Exception as e:
            logger.error("Failed to load path index", path=str(self.file_path), error=str(e))
            raise

    def save(self) -> None:
        """Write all records to the JSON file."""
        content = {
            "data": [record.model_dump(mode="json") for record in self._records],
            "saved_at": datetime.now().isoformat(),
        }

        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            self.file_path.write_text(json.dumps(content, indent=2))
            logger.info("Path index saved", path=str(self.file_path), count=len(self._records))

        except OSError as e:
            logger.error("Failed to save path index", path=str(self.file_path), error=str(e))
            raise
