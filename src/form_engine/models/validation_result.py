"""
Validation and submission result models.

These models represent the outcome of evaluating a form's compiled rules
against the values held by a session.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class RuleType(str, Enum):
    """Kinds of checks, in the order they are evaluated for a field."""

    REQUIRED = "required"
    PATTERN = "pattern"
    MIN = "min"
    MAX = "max"
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    FILE_SIZE = "fileSize"
    FILE_TYPE = "fileType"
    CUSTOM = "custom"


class FieldValidationError(BaseModel):
    """Validation error for a specific field."""

    field_name: str = Field(..., description="Id of the field with error")
    error_type: RuleType = Field(..., description="Check that failed")
    message: str = Field(..., description="Human-readable error message")
    expected: Any | None = Field(default=None, description="Expected value/format")
    received: Any | None = Field(default=None, description="Received value")

    model_config = {"use_enum_values": True}


class ValidationResult(BaseModel):
    """Result of form validation."""

    is_valid: bool = Field(..., description="Whether the form data is valid")
    errors: list[FieldValidationError] = Field(
        default_factory=list, description="List of validation errors"
    )
    validated_data: dict[str, Any] | None = Field(
        default=None, description="Collected values if valid"
    )
    warnings: list[str] = Field(
        default_factory=list, description="Non-blocking warnings"
    )

    @property
    def error_count(self) -> int:
        """Get the number of validation errors."""
        return len(self.errors)

    def get_field_errors(self, field_name: str) -> list[FieldValidationError]:
        """Get all errors for a specific field."""
        return [e for e in self.errors if e.field_name == field_name]

    def to_error_dict(self) -> dict[str, list[str]]:
        """Convert errors to a dict mapping field names to error messages."""
        result: dict[str, list[str]] = {}
        for error in self.errors:
            if error.field_name not in result:
                result[error.field_name] = []
            result[error.field_name].append(error.message)
        return result


class SubmitStatus(str, Enum):
    """Outcome of one submit attempt."""

    SUCCESS = "success"
    INVALID = "invalid"  # at least one field failed validation
    FAILED = "failed"  # the submit callback raised
    IGNORED = "ignored"  # a previous submit was still pending


class SubmitResult(BaseModel):
    """What a single call to ``FormSession.submit()`` produced."""

    status: SubmitStatus
    errors: list[FieldValidationError] = Field(default_factory=list)
    values: dict[str, Any] = Field(default_factory=dict)
    notice: str | None = Field(default=None, description="Transient message shown to the user")

    @property
    def ok(self) -> bool:
        return self.status is SubmitStatus.SUCCESS
