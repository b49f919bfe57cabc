"""
Data models for the form engine.

This module contains Pydantic models for:
- The form schema (fields, options, validation blocks, layout)
- Validation and submission results
"""

from form_engine.models.schema import (
    BaseField,
    CheckboxField,
    DateField,
    FieldKind,
    FieldOption,
    FileField,
    FormField,
    FormSchema,
    Layout,
    NumberField,
    RadioField,
    SelectField,
    TextareaField,
    TextField,
    UnknownField,
    UploadedFile,
    ValidationRule,
    ValidationSettings,
)
from form_engine.models.validation_result import (
    FieldValidationError,
    RuleType,
    SubmitResult,
    SubmitStatus,
    ValidationResult,
)

__all__ = [
    # Schema
    "BaseField",
    "CheckboxField",
    "DateField",
    "FieldKind",
    "FieldOption",
    "FileField",
    "FormField",
    "FormSchema",
    "Layout",
    "NumberField",
    "RadioField",
    "SelectField",
    "TextareaField",
    "TextField",
    "UnknownField",
    "UploadedFile",
    "ValidationRule",
    "ValidationSettings",
    # Results
    "FieldValidationError",
    "RuleType",
    "SubmitResult",
    "SubmitStatus",
    "ValidationResult",
]
