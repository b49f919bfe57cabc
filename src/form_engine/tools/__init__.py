"""
Tool functions for the form engine.

JSON text in, JSON text out; shared by the MCP server and the playground.
"""

from form_engine.tools.schema_tools import (
    generate_form_code,
    preview_form,
)
from form_engine.tools.validation_tools import validate_form_data

__all__ = [
    "preview_form",
    "generate_form_code",
    "validate_form_data",
]
