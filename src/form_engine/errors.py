"""
Error types for the form engine.

Only programmatic entry points raise these. The live session and the
renderers recover locally at every external boundary and log instead.
"""


class FormEngineError(Exception):
    """Base class for all form engine errors."""


class SchemaParseError(FormEngineError):
    """Raw schema text could not be parsed into a form schema."""

    PREFIX = "Invalid JSON format"

    def __init__(self, detail: str, prefix: str | None = None):
        self.detail = detail
        self.prefix = prefix or self.PREFIX
        super().__init__(f"{self.prefix}: {detail}")


class SchemaShapeError(FormEngineError):
    """Schema parsed but is semantically invalid (duplicate ids, empty options, ...)."""

    def __init__(self, path: str, message: str, error_type: str):
        self.path = path
        self.error_type = error_type
        super().__init__(f"{path}: {message}")


class RuleCompileError(FormEngineError):
    """A field's validation block cannot be compiled into checks."""

    def __init__(self, field_id: str, message: str):
        self.field_id = field_id
        super().__init__(f"Field '{field_id}': {message}")


class SubmitCallbackError(FormEngineError):
    """The external submit callback raised or rejected."""


class ClipboardError(FormEngineError):
    """Writing generated code to the clipboard failed."""
