"""Exceptions raised by the URL key generator and its collaborators."""

from collections.abc import Iterable

from url_keys.models.validation import ValidatorResult


class UrlKeyError(Exception):
    """Base exception for URL key errors."""


class ScopeLookupError(UrlKeyError, LookupError):
    """A store or website could not be resolved. Never retried."""

    def __init__(self, message: str, store_id: object = None):
        self.store_id = store_id
        super().__init__(message)


class UrlKeyExhaustedError(UrlKeyError):
    """Every uniqueness attempt still collided."""

    def __init__(self, message: str, last_value: str, attempts: int):
        self.last_value = last_value
        self.attempts = attempts
        super().__init__(message)


class DuplicatePathError(UrlKeyError):
    """A request path is already recorded for another entity in the same store."""

    def __init__(self, message: str, store_id: int | None, request_path: str):
        self.store_id = store_id
        self.request_path = request_path
        super().__init__(message)


class FieldValidatorError(UrlKeyError):
    """Aggregates one or more validator results for a field into one message.

    Args:
        field: Name of the field whose items were validated
        validators: A single result, or an iterable of results
        code: Optional numeric error code
    """

    def __init__(
        self,
        field: str,
        validators: ValidatorResult | Iterable[ValidatorResult] = (),
        code: int = 0,
    ):
        self.field = field
        self.code = code

        if isinstance(validators, ValidatorResult):
            self.results = [validators]
            message = validators.message
        else:
            self.results = list(validators)
            messages = [
                (
                    f"Items contained within the {field} field are missing the "
                    f"following fields: {', '.join(result.invalid_data)}"
                )
                if result.invalid_data
                else ""
                for result in self.results
            ]
            message = "\n".join(m for m in messages if m)

        super().__init__(message)
