"""
Static markup generation ("copy code").

``generate_markup`` reproduces a schema as plain HTML that can be pasted
into another project. It depends only on the schema, never on live
session values, so repeated calls on the same schema return identical
text.
"""

import logging
from html import escape
from typing import Protocol

from form_engine.errors import ClipboardError
from form_engine.models.schema import (
    BaseField,
    CheckboxField,
    DateField,
    FieldOption,
    FileField,
    FormSchema,
    NumberField,
    RadioField,
    SelectField,
    TextareaField,
    TextField,
)
from form_engine.render.controls import DEFAULT_TEXTAREA_ROWS

logger = logging.getLogger("form-engine")

FIELD_CLASS = "w-full border rounded-lg p-2.5 focus:outline-none focus:ring-2 focus:ring-[#EC5990]"
INDENT = "  "


class Clipboard(Protocol):
    """Anything that can receive copied text."""

    def write_text(self, text: str) -> None: ...


class MemoryClipboard:
    """In-process clipboard; keeps the last text written."""

    def __init__(self) -> None:
        self.text: str | None = None

    def write_text(self, text: str) -> None:
        self.text = text


def _attr(value: object) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return escape(str(value), quote=True)


def _label(form_field: BaseField) -> str:
    required = " *" if form_field.required else ""
    return (
        f'<label for="{_attr(form_field.id)}" class="block font-medium">'
        f"{escape(form_field.label)}{required}</label>"
    )


def _input(input_type: str, form_field: BaseField, **attributes: object) -> str:
    rendered = "".join(
        f' {key}="{_attr(value)}"' for key, value in attributes.items() if value is not None
    )
    return f'<input type="{_attr(input_type)}" id="{_attr(form_field.id)}"{rendered} class="{FIELD_CLASS}"/>'


def _choices(input_type: str, form_field: BaseField, options: list[FieldOption]) -> list[str]:
    lines = []
    for option in options:
        lines.append(
            f'<label><input type="{input_type}" name="{_attr(form_field.id)}" value="{_attr(option.value)}"/> '
            f"{escape(option.label)}</label>"
        )
    return lines


def _field_lines(form_field: BaseField) -> list[str] | None:
    """Markup lines for one field, or None when the field is not exported."""
    match form_field:
        case TextField():
            return [_label(form_field), _input(form_field.type, form_field, placeholder=form_field.placeholder)]
        case TextareaField():
            placeholder = (
                f' placeholder="{_attr(form_field.placeholder)}"' if form_field.placeholder is not None else ""
            )
            rows = form_field.rows or DEFAULT_TEXTAREA_ROWS
            return [
                _label(form_field),
                f'<textarea id="{_attr(form_field.id)}"{placeholder} rows="{rows}" class="{FIELD_CLASS}"></textarea>',
            ]
        case SelectField():
            multiple = " multiple" if form_field.multiple else ""
            return [
                _label(form_field),
                f'<select id="{_attr(form_field.id)}"{multiple} class="{FIELD_CLASS}">',
                *(
                    f'{INDENT}<option value="{_attr(option.value)}">{escape(option.label)}</option>'
                    for option in form_field.options
                ),
                "</select>",
            ]
        case NumberField():
            return [
                _label(form_field),
                _input(
                    "number",
                    form_field,
                    min=form_field.min,
                    max=form_field.max,
                    step=form_field.step,
                    placeholder=form_field.placeholder,
                ),
            ]
        case DateField():
            return [_label(form_field), _input("date", form_field, min=form_field.min_date, max=form_field.max_date)]
        case FileField():
            multiple = "multiple" if form_field.multiple else None
            return [_label(form_field), _input("file", form_field, accept=form_field.accept, multiple=multiple)]
        case CheckboxField() if form_field.is_group:
            return [_label(form_field), *_choices("checkbox", form_field, form_field.options or [])]
        case CheckboxField():
            checked = " checked" if form_field.checked else ""
            return [
                f'<label><input type="checkbox" id="{_attr(form_field.id)}" name="{_attr(form_field.id)}"{checked}/> '
                f"{escape(form_field.label)}{' *' if form_field.required else ''}</label>"
            ]
        case RadioField():
            return [_label(form_field), *_choices("radio", form_field, form_field.options)]
        case _:
            return None


def generate_markup(schema: FormSchema) -> str:
    """
    Generate static HTML for a schema.

    Hidden fields and fields of unrecognized kind are left out. Every text
    and attribute value is HTML-escaped.

    Args:
        schema: The form to export.

    Returns:
        Markup text, identical for identical schemas.
    """
    lines = ['<form class="space-y-6">']
    for form_field in schema.fields:
        if form_field.hidden:
            continue
        field_lines = _field_lines(form_field)
        if field_lines is None:
            logger.debug("Skipping field '%s' of unknown type in generated code", form_field.id)
            continue
        lines.append(f'{INDENT}<div class="space-y-2">')
        lines.extend(f"{INDENT * 2}{line}" for line in field_lines)
        lines.append(f"{INDENT}</div>")
    lines.append(f'{INDENT}<button type="submit">{escape(schema.submit_button_text)}</button>')
    lines.append("</form>")
    return "\n".join(lines) + "\n"


def copy_to_clipboard(text: str, clipboard: Clipboard) -> bool:
    """
    Write text to a clipboard without letting a failure escape.

    Returns:
        True if the write succeeded, False if it failed (the failure is logged).
    """
    try:
        clipboard.write_text(text)
    except Exception as e:
        error = e if isinstance(e, ClipboardError) else ClipboardError(str(e))
        logger.warning("Failed to copy form code: %s", error)
        return False
    return True
