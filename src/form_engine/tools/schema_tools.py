"""
Schema tools.

Preview and code generation for a schema given as JSON text. Each tool
takes and returns plain strings so it can be exposed unchanged over MCP
or wired into the playground.
"""

import json
from dataclasses import asdict

from form_engine.codegen import generate_markup
from form_engine.config import get_config
from form_engine.parser import parse_schema
from form_engine.render.preview import render_form
from form_engine.render.theme import Theme


def preview_form(schema_json: str, is_dark_mode: bool = False) -> str:
    """
    Render a form schema to preview HTML.

    Args:
        schema_json: JSON text describing the form.
            Example: {"formTitle": "Contact", "fields": [{"id": "email", "type": "email"}]}
        is_dark_mode: Render with the dark theme instead of the light one.

    Returns:
        JSON string containing either:
        - html: the rendered form
        - issues: non-blocking schema problems (duplicate ids, empty options, ...)
        or:
        - error: why the text could not be parsed
    """
    config = get_config()
    parsed = parse_schema(schema_json)
    if not parsed.ok:
        return json.dumps({"error": parsed.error}, indent=config.indent_json_output)

    rendered = render_form(parsed.schema, theme=Theme.from_flag(is_dark_mode))
    return json.dumps(
        {
            "html": rendered.to_html(),
            "issues": [asdict(issue) for issue in parsed.issues],
        },
        indent=config.indent_json_output,
    )


def generate_form_code(schema_json: str) -> str:
    """
    Generate static HTML markup for a form schema.

    Args:
        schema_json: JSON text describing the form.

    Returns:
        JSON string with ``code`` on success or ``error`` on a parse failure.
    """
    config = get_config()
    parsed = parse_schema(schema_json)
    if not parsed.ok:
        return json.dumps({"error": parsed.error}, indent=config.indent_json_output)
    return json.dumps({"code": generate_markup(parsed.schema)}, indent=config.indent_json_output)
