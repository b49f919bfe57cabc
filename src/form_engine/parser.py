"""
Schema parsing at the input boundary.

Raw text comes from an external editor. It either becomes a ``FormSchema``
or a single error string that the editor shows inline; there is no partial
result. A schema that parses but is semantically off (duplicate ids, a
select without options) is still returned, together with a list of shape
issues, so the preview can render best-effort.
"""

import json
import logging
from dataclasses import dataclass, field

from pydantic import ValidationError

from form_engine.errors import RuleCompileError, SchemaParseError, SchemaShapeError
from form_engine.models.schema import (
    CheckboxField,
    FormSchema,
    RadioField,
    SelectField,
    UnknownField,
)
from form_engine.rules import compile_rules

logger = logging.getLogger("form-engine")

JSON_ERROR_PREFIX = "Invalid JSON format"
SCHEMA_ERROR_PREFIX = "Invalid schema format"


@dataclass
class SchemaShapeIssue:
    """A semantic problem in an otherwise parseable schema."""

    path: str
    message: str
    error_type: str

    def to_error(self) -> SchemaShapeError:
        return SchemaShapeError(self.path, self.message, self.error_type)


@dataclass
class ParseResult:
    """Outcome of parsing raw schema text."""

    schema: FormSchema | None = None
    error: str | None = None
    issues: list[SchemaShapeIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.schema is not None


def inspect_schema(schema: FormSchema) -> list[SchemaShapeIssue]:
    """
    Find semantic problems in a parsed schema.

    Args:
        schema: The schema to inspect.

    Returns:
        List of issues found, in field order. Never raises.
    """
    issues: list[SchemaShapeIssue] = []
    seen_ids: set[str] = set()

    for i, form_field in enumerate(schema.fields):
        path = f"fields[{i}]"

        if form_field.id in seen_ids:
            issues.append(SchemaShapeIssue(path, f"Duplicate id: {form_field.id}", "duplicate_id"))
        seen_ids.add(form_field.id)

        if isinstance(form_field, UnknownField):
            issues.append(SchemaShapeIssue(
                path,
                f"Unknown field type {form_field.type!r}; rendered as text input",
                "unknown_type",
            ))

        if isinstance(form_field, (SelectField, RadioField)) and not form_field.options:
            issues.append(SchemaShapeIssue(
                path,
                f"{form_field.type} field '{form_field.id}' has no options",
                "empty_options",
            ))

        if isinstance(form_field, CheckboxField) and form_field.options is not None and form_field.checked is not None:
            issues.append(SchemaShapeIssue(
                path,
                f"checkbox field '{form_field.id}' sets both options and checked",
                "ambiguous_checkbox",
            ))

        try:
            compile_rules(form_field, strict=True)
        except RuleCompileError as exc:
            issues.append(SchemaShapeIssue(f"{path}.validation", str(exc), "invalid_rule"))

    return issues


def parse_schema(text: str) -> ParseResult:
    """
    Parse raw editor text into a form schema.

    Parsing is pure: the same text always produces an equal result.

    Args:
        text: JSON text describing the form.

    Returns:
        ParseResult with either ``schema`` (plus shape ``issues``) or ``error``.
    """
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError is a ValueError; deep nesting exhausts the decoder's stack
        return ParseResult(error=f"{JSON_ERROR_PREFIX}: {e}")

    try:
        schema = FormSchema.model_validate(data)
    except ValidationError as e:
        return ParseResult(error=f"{SCHEMA_ERROR_PREFIX}: {e}")

    issues = inspect_schema(schema)
    for issue in issues:
        logger.warning("Schema issue at %s: %s", issue.path, issue.message)

    return ParseResult(schema=schema, issues=issues)


def parse_schema_or_raise(text: str, *, strict_shape: bool = False) -> FormSchema:
    """
    Parse raw text, raising instead of returning an error.

    Args:
        text: JSON text describing the form.
        strict_shape: Also raise on the first shape issue.

    Raises:
        SchemaParseError: If the text is not valid JSON or not a valid schema.
        SchemaShapeError: With ``strict_shape``, if the schema has shape issues.
    """
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise SchemaParseError(str(e), JSON_ERROR_PREFIX) from e

    try:
        schema = FormSchema.model_validate(data)
    except ValidationError as e:
        raise SchemaParseError(str(e), SCHEMA_ERROR_PREFIX) from e

    if strict_shape:
        issues = inspect_schema(schema)
        if issues:
            raise issues[0].to_error()
    return schema
