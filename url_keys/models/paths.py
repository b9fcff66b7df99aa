"""Path index data models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from url_keys.constants import (
    FIELD_ENTITY_ID,
    FIELD_ENTITY_TYPE,
    FIELD_REQUEST_PATH,
    FIELD_STORE_ID,
)


class AttributeScope(str, Enum):
    """How widely a single attribute value applies."""

    GLOBAL = "global"
    WEBSITE = "website"
    STORE = "store"


class AttributeDescriptor(BaseModel):
    """Read-only attribute metadata supplied by the caller.

    A ``scope`` of None marks an attribute that is not scope-aware; such
    attributes are treated as global.
    """

    entity_type_code: str = Field(description="Entity type tag, e.g. 'catalog_product'")
    attribute_code: str = Field(description="Attribute holding the candidate value")
    scope: AttributeScope | None = Field(default=None)

    @property
    def is_scope_aware(self) -> bool:
        return self.scope is not None

    def is_global(self) -> bool:
        return self.scope is AttributeScope.GLOBAL

    def is_website(self) -> bool:
        return self.scope is AttributeScope.WEBSITE

    def is_store(self) -> bool:
        return self.scope is AttributeScope.STORE


class ProjectedPath(BaseModel):
    """A suffixed candidate path as it would be recorded for one store."""

    store_id: int | None = Field(default=None)
    entity_id: int | str | None = Field(default=None)
    entity_type: str | None = Field(default=None)
    request_path: str = Field(min_length=1)

    def to_criteria(self) -> dict[str, Any]:
        """Return the path as index criteria, omitting empty fields.

        None and "" are dropped; 0 is kept.
        """
        data = {
            FIELD_STORE_ID: self.store_id,
            FIELD_ENTITY_ID: self.entity_id,
            FIELD_ENTITY_TYPE: self.entity_type,
            FIELD_REQUEST_PATH: self.request_path,
        }
        return {key: value for key, value in data.items() if value is not None and value != ""}


class PathRecord(ProjectedPath):
    """A path stored in the index."""

    url_rewrite_id: int = Field(ge=1, description="Unique record ID")


class GenerationResult(BaseModel):
    """Outcome of one generate() call."""

    value: str = Field(description="Final URL key, suffixed for the entity's own store")
    paths: list[ProjectedPath] = Field(
        default_factory=list, description="Projected paths for the final value, ready to record"
    )
    available: bool = Field(description="False when every attempt still collided")
    attempts: int = Field(ge=0, description="Uniqueness mutations applied")
