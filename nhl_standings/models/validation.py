from typing import Any, List, Optional

from pydantic import BaseModel, Field


class ValidationError(BaseModel):
    """A single problem found in a raw snapshot."""

    field: str  # Path into the payload, e.g. "standings[3].points"
    message: str
    value: Optional[Any] = None


class ValidationResult(BaseModel):
    is_valid: bool
    errors: List[ValidationError] = Field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: List[ValidationError]) -> "ValidationResult":
        return cls(is_valid=not errors, errors=errors)
