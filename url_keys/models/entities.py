"""Entity data objects handed to the URL key generator."""

from typing import Any

from url_keys.constants import EXTENSIBLE_STORE_ID_FIELD, FIELD_ENTITY_ID, FIELD_STORE_ID


class DataEntity:
    """Plain key/value entity.

    Args:
        data: Initial field values
        id_field_name: Field holding the entity identifier
    """

    id_field_name = FIELD_ENTITY_ID

    def __init__(self, data: dict[str, Any] | None = None, **fields: Any) -> None:
        self._data: dict[str, Any] = {**(data or {}), **fields}

    def get_id(self) -> Any:
        return self._data.get(self.id_field_name)

    def get_data(self, key: str | None = None) -> Any:
        """Return one field value, or a copy of all fields when key is None."""
        if key is None:
            return dict(self._data)
        return self._data.get(key)

    def set_data(self, key: str, value: Any) -> "DataEntity":
        self._data[key] = value
        return self

    def store_id_field(self) -> str:
        """Name of the field carrying the store the entity was submitted under."""
        return FIELD_STORE_ID

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DataEntity):
            return NotImplemented
        return type(self) is type(other) and self._data == other._data


class ExtensibleEntity(DataEntity):
    """Entity carrying extension attributes alongside its own fields."""

    STORE_ID = EXTENSIBLE_STORE_ID_FIELD

    def __init__(
        self,
        data: dict[str, Any] | None = None,
        extension_attributes: dict[str, Any] | None = None,
        **fields: Any,
    ) -> None:
        super().__init__(data, **fields)
        self.extension_attributes: dict[str, Any] = dict(extension_attributes or {})

    def store_id_field(self) -> str:
        return self.STORE_ID
