"""Field validation helpers."""

from collections.abc import Iterable, Mapping
from typing import Any

from url_keys.exceptions import FieldValidatorError
from url_keys.models.entities import DataEntity
from url_keys.models.validation import ValidatorResult


def _as_mapping(item: Mapping[str, Any] | DataEntity) -> Mapping[str, Any]:
    if isinstance(item, DataEntity):
        return item.get_data()
    return item


def validate_required_fields(
    items: Iterable[Mapping[str, Any] | DataEntity], required: Iterable[str]
) -> ValidatorResult:
    """
    Check that every item carries a non-empty value for each required field.

    Args:
        items: Mappings or entities to check
        required: Field names that must be present

    Returns:
        Result listing each missing field once, in the order given

    Examples:
        >>> validate_required_fields([{"sku": "A"}], ["sku", "name"]).invalid_data
        ['name']
    """
    required = list(required)
    missing: list[str] = []

    for item in items:
        data = _as_mapping(item)
        for field in required:
            value = data.get(field)
            if (value is None or value == "") and field not in missing:
                missing.append(field)

    if not missing:
        return ValidatorResult(is_valid=True)

    return ValidatorResult(
        is_valid=False,
        invalid_data=missing,
        message=f"Missing required fields: {', '.join(missing)}",
    )


def assert_valid(field: str, results: ValidatorResult | list[ValidatorResult]) -> None:
    """Raise FieldValidatorError when any of the results is invalid."""
    checked = [results] if isinstance(results, ValidatorResult) else results
    if any(not result.is_valid for result in checked):
        raise FieldValidatorError(field, results)
