"""
form-engine: schema-driven forms.

Describe a form as JSON, render it, validate input against per-field
rules and export it as static markup.

Simple Usage:
    from form_engine import parse_schema, FormSession

    parsed = parse_schema('''{
        "formTitle": "Contact",
        "fields": [
            {"id": "email", "type": "email", "label": "Email", "required": true,
             "validation": {"pattern": "^[^@]+@[^@]+$", "message": "Enter a valid email"}}
        ]
    }''')
    if not parsed.ok:
        print(parsed.error)  # "Invalid JSON format: ..."

    session = FormSession(parsed.schema, on_submit=save_contact)
    session.set_value("email", "john@example.com")
    result = await session.submit()

Rendering:
    from form_engine import Theme

    html = session.render(Theme.from_flag(is_dark_mode)).to_html()

Copy Code:
    from form_engine import MemoryClipboard, generate_markup

    code = generate_markup(parsed.schema)
    session.copy_code(MemoryClipboard())
    session.is_copied  # True for the next 2 seconds
"""

__version__ = "0.1.0"

from form_engine.codegen import Clipboard, MemoryClipboard, generate_markup
from form_engine.config import FormEngineConfig, get_config, update_config
from form_engine.errors import (
    ClipboardError,
    FormEngineError,
    RuleCompileError,
    SchemaParseError,
    SchemaShapeError,
    SubmitCallbackError,
)
from form_engine.models import (
    FieldValidationError,
    FormSchema,
    Layout,
    SubmitResult,
    SubmitStatus,
    ValidationResult,
)
from form_engine.parser import ParseResult, SchemaShapeIssue, parse_schema, parse_schema_or_raise
from form_engine.render import (
    DARK_THEME,
    LIGHT_THEME,
    RenderedForm,
    Theme,
    dispatch_control,
    render_form,
    resolve_layout,
)
from form_engine.rules import CompiledRules, compile_rules
from form_engine.session import FormSession, ManualClock, SessionState, SystemClock

__all__ = [
    # Parsing
    "parse_schema",
    "parse_schema_or_raise",
    "ParseResult",
    "SchemaShapeIssue",
    # Models
    "FormSchema",
    "Layout",
    # Rules
    "compile_rules",
    "CompiledRules",
    # Rendering
    "dispatch_control",
    "render_form",
    "resolve_layout",
    "RenderedForm",
    "Theme",
    "LIGHT_THEME",
    "DARK_THEME",
    # Session
    "FormSession",
    "SessionState",
    "SystemClock",
    "ManualClock",
    # Code generation
    "generate_markup",
    "Clipboard",
    "MemoryClipboard",
    # Results
    "ValidationResult",
    "FieldValidationError",
    "SubmitResult",
    "SubmitStatus",
    # Config
    "FormEngineConfig",
    "get_config",
    "update_config",
    # Errors
    "FormEngineError",
    "SchemaParseError",
    "SchemaShapeError",
    "RuleCompileError",
    "SubmitCallbackError",
    "ClipboardError",
]
