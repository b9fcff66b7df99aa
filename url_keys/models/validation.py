"""Validator result models."""

from pydantic import BaseModel, Field


class ValidatorResult(BaseModel):
    """Outcome of validating a collection of items."""

    is_valid: bool = Field(default=True)
    invalid_data: list[str] = Field(
        default_factory=list, description="Fields that failed validation"
    )
    message: str = Field(default="", description="Human-readable summary")
