"""
Validation tools for form data.

These tools validate submitted values against a schema's compiled rules.
"""

import json
from typing import Any

from form_engine.config import get_config
from form_engine.parser import parse_schema
from form_engine.session import FormSession


def _error_response(field_name: str, error_type: str, message: str) -> str:
    return json.dumps(
        {
            "is_valid": False,
            "errors": [{
                "field_name": field_name,
                "error_type": error_type,
                "message": message,
            }],
            "validated_data": None,
            "warnings": [],
        },
        indent=get_config().indent_json_output,
    )


async def validate_form_data(schema_json: str, form_data: str | dict[str, Any]) -> str:
    """
    Validate form data against a form schema.

    Args:
        schema_json: JSON text describing the form.
        form_data: Values keyed by field id, as a dict or JSON text.
            Example: {"email": "user@example.com", "age": 25}

    Returns:
        JSON string containing validation results:
        - is_valid: boolean indicating if data is valid
        - errors: array of validation errors with field names and messages
        - validated_data: collected values if valid, null if invalid
        - warnings: keys in the data that match no field
    """
    parsed = parse_schema(schema_json)
    if not parsed.ok:
        return _error_response("_schema", "parse_error", parsed.error or "")

    if isinstance(form_data, str):
        try:
            form_data = json.loads(form_data)
        except json.JSONDecodeError as e:
            return _error_response("_json", "parse_error", f"Invalid JSON format: {e}")
    if not isinstance(form_data, dict):
        return _error_response("_json", "parse_error", "Form data must be a JSON object")

    session = FormSession(parsed.schema)
    warnings = []
    for field_id, value in form_data.items():
        try:
            session.set_value(field_id, value)
        except KeyError:
            warnings.append(f"Unknown field: {field_id}")

    result = await session.validate()
    result.warnings.extend(warnings)
    return json.dumps(result.model_dump(mode="json"), indent=get_config().indent_json_output)
