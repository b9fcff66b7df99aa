"""Data formatting helpers.

A DataFormatter reduces an item (mapping, pydantic model or DataEntity) to a
string, a dict or a DataEntity, with field filtering, renaming and nested
formatting of list-valued fields.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Literal

from pydantic import BaseModel, Field

from url_keys.models.entities import DataEntity

FormatType = Literal["string", "array", "object"]


class FieldMapper(BaseModel):
    """Renames fields (source name -> output name). Unmapped fields keep their names."""

    mapping: dict[str, str] = Field(default_factory=dict)

    def map(self, data: Mapping[str, Any]) -> dict[str, Any]:
        return {self.mapping.get(key, key): value for key, value in data.items()}


class FormatterOptions(BaseModel):
    """Output options for a DataFormatter."""

    format: FormatType = Field(default="string")
    glue: str = Field(default=",", description="Joins values in string format")
    prepend: str | None = Field(default=None, description="Placed at start of formatted string")
    append: str | None = Field(default=None, description="Placed at end of formatted string")
    value_wrap_pattern: str = Field(
        default="{value}", description="Applied to each value; may use {value} and {field}"
    )
    included_fields: list[str] = Field(
        default_factory=list, description="If empty, all fields are included"
    )
    excluded_fields: list[str] = Field(default_factory=list)


def _to_dict(item: Any) -> dict[str, Any]:
    if isinstance(item, DataEntity):
        return item.get_data()
    if isinstance(item, BaseModel):
        return item.model_dump()
    if isinstance(item, Mapping):
        return dict(item)
    raise TypeError(f"Cannot format item of type {type(item).__name__}")


class FormatterIterator:
    """Formats each element of a list-valued field with a nested formatter."""

    def __init__(self, formatter: "DataFormatter", glue: str = "|") -> None:
        self.formatter = formatter
        self.glue = glue

    def format(self, items: Iterable[Any]) -> str | list[Any]:
        formatted = [self.formatter.format(item) for item in items]
        if all(isinstance(value, str) for value in formatted):
            return self.glue.join(formatted)
        return formatted


class DataFormatter:
    """Formats items according to FormatterOptions.

    Args:
        options: Output options
        system_field_mapper: Renames applied first
        custom_field_mapper: Renames applied after the system mapper
        iterators: Nested formatters keyed by source field name
    """

    def __init__(
        self,
        options: FormatterOptions | None = None,
        system_field_mapper: FieldMapper | None = None,
        custom_field_mapper: FieldMapper | None = None,
        iterators: Mapping[str, FormatterIterator] | None = None,
    ) -> None:
        self.options = options or FormatterOptions()
        self.system_field_mapper = system_field_mapper
        self.custom_field_mapper = custom_field_mapper
        self.iterators: dict[str, FormatterIterator] = dict(iterators or {})

    def add_iterator(self, field: str, iterator: FormatterIterator) -> "DataFormatter":
        self.iterators[field] = iterator
        return self

    def get_iterator(self, field: str) -> FormatterIterator | None:
        return self.iterators.get(field)

    def _select(self, data: dict[str, Any]) -> dict[str, Any]:
        included = self.options.included_fields
        excluded = set(self.options.excluded_fields)
        if included:
            data = {field: data[field] for field in included if field in data}
        return {field: value for field, value in data.items() if field not in excluded}

    def _wrap(self, field: str, value: Any) -> str:
        if value is None:
            value = ""
        elif isinstance(value, (list, tuple)):
            value = self.options.glue.join(str(v) for v in value)
        return self.options.value_wrap_pattern.format(value=value, field=field)

    def format(self, item: Any) -> str | dict[str, Any] | DataEntity:
        """
        Format a single item.

        Args:
            item: Mapping, pydantic model or DataEntity

        Returns:
            str for "string" format, dict for "array", DataEntity for "object"
        """
        data = self._select(_to_dict(item))

        for field, iterator in self.iterators.items():
            if isinstance(data.get(field), (list, tuple)):
                data[field] = iterator.format(data[field])

        if self.system_field_mapper is not None:
            data = self.system_field_mapper.map(data)
        if self.custom_field_mapper is not None:
            data = self.custom_field_mapper.map(data)

        if self.options.format == "array":
            return data
        if self.options.format == "object":
            return DataEntity(data)

        body = self.options.glue.join(self._wrap(field, value) for field, value in data.items())
        return f"{self.options.prepend or ''}{body}{self.options.append or ''}"
