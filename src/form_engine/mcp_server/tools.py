"""
MCP Tool definitions for the form engine.

Wraps the schema and validation tools as MCP tools.
"""

import json
import logging
from typing import Any

from form_engine.tools import generate_form_code, preview_form, validate_form_data

logger = logging.getLogger("form-engine-mcp")

_SCHEMA_JSON_PROPERTY = {
    "type": "string",
    "description": (
        "Form schema as JSON text: an object with formTitle and a fields array. "
        'Example: {"formTitle": "Contact", "fields": [{"id": "email", "type": "email", "label": "Email", "required": true}]}'
    ),
}


async def call_mcp_tool(name: str, arguments: dict[str, Any]) -> str:
    """
    Run one MCP tool and return its JSON text result.

    Unknown tool names and failing tools produce an ``error`` object rather
    than an exception, so the MCP session stays up.
    """
    try:
        if name == "preview_form":
            return preview_form(
                schema_json=arguments["schema_json"],
                is_dark_mode=bool(arguments.get("is_dark_mode", False)),
            )
        if name == "validate_form_data":
            return await validate_form_data(
                schema_json=arguments["schema_json"],
                form_data=arguments.get("form_data", {}),
            )
        if name == "generate_form_code":
            return generate_form_code(schema_json=arguments["schema_json"])
    except KeyError as e:
        logger.error(f"Missing argument for {name}: {e}")
        return json.dumps({"error": f"Missing argument: {e.args[0]}"})
    except Exception as e:
        logger.error(f"Error in {name}: {e}", exc_info=True)
        return json.dumps({"error": str(e)})

    return json.dumps({"error": f"Unknown tool: {name}"})


def get_mcp_tools() -> list[dict]:
    """
    Get MCP tool definitions for registration with MCP server.

    Returns list of tool schemas compatible with MCP protocol.
    """
    return [
        {
            "name": "preview_form",
            "description": """
Render a declarative form schema to preview HTML.

Supported field types: text, email, password, tel, url, textarea, file,
select, checkbox, radio, number, date. Unknown types render as text inputs.

Returns JSON with:
- html: the rendered form
- issues: schema problems that did not stop rendering (duplicate ids, empty options)
or, when the schema text is invalid:
- error: "Invalid JSON format: ..." or "Invalid schema format: ..."
""".strip(),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "schema_json": _SCHEMA_JSON_PROPERTY,
                    "is_dark_mode": {
                        "type": "boolean",
                        "description": "Render with the dark theme",
                        "default": False,
                    },
                },
                "required": ["schema_json"],
            },
        },
        {
            "name": "validate_form_data",
            "description": """
Validate form values against a form schema's field rules.

Rules are checked per field in the order required, pattern, min/max,
minLength/maxLength, file size/type, custom; the first failing rule is reported.

Returns JSON with is_valid, errors (field_name, error_type, message),
validated_data (when valid) and warnings (keys that match no field).
""".strip(),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "schema_json": _SCHEMA_JSON_PROPERTY,
                    "form_data": {
                        "type": "object",
                        "description": "Values keyed by field id",
                    },
                },
                "required": ["schema_json", "form_data"],
            },
        },
        {
            "name": "generate_form_code",
            "description": """
Generate static HTML markup reproducing a form schema.

Hidden fields and fields of unknown type are omitted. The output is
deterministic: the same schema always yields the same text.

Returns JSON with code (the markup) or error.
""".strip(),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "schema_json": _SCHEMA_JSON_PROPERTY,
                },
                "required": ["schema_json"],
            },
        },
    ]
