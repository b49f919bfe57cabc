"""
Live form preview.

Assembles the resolved layout, the dispatched controls and the session's
transient state into a ``RenderedForm`` and serializes it to the HTML the
playground and the ``preview_form`` tool display.
"""

from dataclasses import dataclass, field
from html import escape
from typing import Any, Mapping

from form_engine.models.schema import FormSchema
from form_engine.render.controls import Control, ControlType, render_controls
from form_engine.render.layout import ResolvedLayout, resolve_layout
from form_engine.render.theme import LIGHT_THEME, Theme
from form_engine.rules import CompiledRules

NO_SCHEMA_MESSAGE = "No valid schema available. Please provide a valid schema."


@dataclass(frozen=True)
class RenderedForm:
    """Everything needed to draw one form in one visual variant."""

    title: str
    layout: ResolvedLayout
    theme: Theme
    controls: list[Control] = field(default_factory=list)
    description: str | None = None
    submit_button_text: str = "Submit"
    reset_button_text: str = "Reset"
    show_reset: bool = False
    class_name: str | None = None
    notice: str | None = None
    notice_ok: bool = True
    is_copied: bool = False

    @property
    def copy_button_text(self) -> str:
        return "Copied!" if self.is_copied else "Copy Code"

    def to_html(self) -> str:
        """Serialize to an HTML fragment."""
        theme = self.theme
        parts = [f'<div class="{_attr(_join("p-6", self.class_name))}">']
        parts.append('<div class="flex justify-between items-center mb-6">')
        parts.append(f'<h1 class="{theme.title}">{escape(self.title)}</h1>')
        parts.append(f'<button type="button" data-action="copy">{self.copy_button_text}</button>')
        parts.append("</div>")
        parts.append(f'<div class="{theme.card}">')
        if self.description:
            parts.append(f'<p class="{theme.description} mb-6">{escape(self.description)}</p>')
        parts.append(f'<form class="{self.layout.container_class}">')
        for control in self.controls:
            parts.append(_field_html(control, theme))
        parts.append('<div class="col-span-full flex space-x-4 mt-6">')
        parts.append(f'<button type="submit" class="{theme.submit_button}">{escape(self.submit_button_text)}</button>')
        if self.show_reset:
            parts.append(f'<button type="reset" class="{theme.reset_button}">{escape(self.reset_button_text)}</button>')
        parts.append("</div>")
        parts.append("</form>")
        if self.notice:
            notice_class = theme.notice_success if self.notice_ok else theme.notice_failure
            parts.append(f'<div class="{notice_class}" role="status">{escape(self.notice)}</div>')
        parts.append("</div>")
        parts.append("</div>")
        return "\n".join(parts)


def _join(*parts: str | None) -> str:
    return " ".join(part for part in parts if part)


def _attr(value: Any) -> str:
    return escape(str(value), quote=True)


def _attributes(attributes: Mapping[str, Any]) -> str:
    rendered = []
    for key, value in attributes.items():
        if value is True:
            rendered.append(f" {key}")
        else:
            rendered.append(f' {key}="{_attr(_format_number(value))}"')
    return "".join(rendered)


def _format_number(value: Any) -> Any:
    # 10.0 -> 10 so numeric attributes read the way they were written
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _disabled(control: Control) -> str:
    return " disabled" if control.disabled else ""


def _control_html(control: Control, theme: Theme) -> str:
    field_id = _attr(control.field_id)
    attrs = _attributes(control.attributes)

    match control.control_type:
        case ControlType.TEXT_AREA:
            value = "" if control.value is None else escape(str(control.value))
            return (
                f'<textarea id="{field_id}" name="{field_id}" class="{control.css_class}"'
                f"{attrs}{_disabled(control)}>{value}</textarea>"
            )
        case ControlType.SELECT:
            options = "".join(
                f'<option value="{_attr(option.value)}"'
                f'{" selected" if option.selected else ""}'
                f'{" disabled" if option.disabled else ""}>{escape(option.label)}</option>'
                for option in control.options
            )
            return (
                f'<select id="{field_id}" name="{field_id}" class="{control.css_class}"'
                f"{attrs}{_disabled(control)}>{options}</select>"
            )
        case ControlType.CHECKBOX_GROUP | ControlType.RADIO_GROUP:
            wrapper = "flex space-x-4" if control.inline else "space-y-2"
            items = "".join(
                '<label class="flex items-center space-x-2">'
                f'<input type="{control.input_type}" name="{field_id}" value="{_attr(option.value)}"'
                f' class="{control.css_class}"'
                f'{" checked" if option.selected else ""}'
                f'{" disabled" if option.disabled else ""}/>'
                f'<span class="{theme.text}">{escape(option.label)}</span></label>'
                for option in control.options
            )
            return f'<div class="{wrapper}">{items}</div>'
        case ControlType.CHECKBOX:
            return (
                '<label class="flex items-center space-x-2">'
                f'<input type="checkbox" id="{field_id}" name="{field_id}" class="{control.css_class}"'
                f"{attrs}{_disabled(control)}/>"
                f'<span class="{theme.text}">{escape(control.label)}</span></label>'
            )
        case ControlType.FILE_INPUT:
            return (
                f'<input type="file" id="{field_id}" name="{field_id}" class="{control.css_class}"'
                f"{attrs}{_disabled(control)}/>"
            )
        case _:
            value = "" if control.value is None else control.value
            return (
                f'<input type="{_attr(control.input_type or "text")}" id="{field_id}" name="{field_id}"'
                f' value="{_attr(_format_number(value))}" class="{control.css_class}"'
                f"{attrs}{_disabled(control)}/>"
            )


def _field_html(control: Control, theme: Theme) -> str:
    parts = ['<div class="space-y-2">']
    if not control.has_own_label:
        required = '<span class="text-red-500 ml-1">*</span>' if control.required else ""
        parts.append(
            f'<label for="{_attr(control.field_id)}" class="{theme.label}">'
            f"{escape(control.label)}{required}</label>"
        )
    if control.description:
        parts.append(f'<p class="{theme.description}">{escape(control.description)}</p>')
    parts.append(_control_html(control, theme))
    if control.error:
        parts.append(f'<p class="{theme.error}">{escape(control.error)}</p>')
    parts.append("</div>")
    return "".join(parts)


def render_form(
    schema: FormSchema,
    *,
    theme: Theme = LIGHT_THEME,
    rules: Mapping[str, CompiledRules] | None = None,
    values: Mapping[str, Any] | None = None,
    errors: Mapping[str, str] | None = None,
    notice: str | None = None,
    notice_ok: bool = True,
    is_copied: bool = False,
) -> RenderedForm:
    """
    Render a schema with the given session state.

    Without ``values`` every control shows its field's initial value.

    Args:
        schema: The form to render.
        theme: Visual variant.
        rules: Compiled rules per field id.
        values: Current values per field id.
        errors: Current error message per field id.
        notice: Transient submit notice, if one is showing.
        notice_ok: Whether the notice reports success.
        is_copied: Whether the copy acknowledgement is showing.

    Returns:
        RenderedForm for the schema's visible fields.
    """
    return RenderedForm(
        title=schema.form_title,
        description=schema.form_description,
        layout=resolve_layout(schema.layout),
        theme=theme,
        controls=render_controls(schema, rules=rules, values=values, errors=errors, theme=theme),
        submit_button_text=schema.submit_button_text,
        reset_button_text=schema.reset_button_text,
        show_reset=schema.show_reset,
        class_name=schema.class_name,
        notice=notice,
        notice_ok=notice_ok,
        is_copied=is_copied,
    )


def render_placeholder(theme: Theme = LIGHT_THEME) -> str:
    """HTML shown in place of the form while the editor holds invalid text."""
    return (
        '<div class="p-6">'
        f'<h2 class="{theme.title} mb-4">Form Preview</h2>'
        '<div class="flex items-center space-x-2 p-4 bg-yellow-50 rounded-lg">'
        f'<p class="text-yellow-700">{NO_SCHEMA_MESSAGE}</p>'
        "</div></div>"
    )
