"""
Field renderer dispatch.

Maps every field kind to a concrete control description. A ``Control`` is
everything a display layer needs to draw one input and wire it to the
session: the control type, HTML attributes, options with their selected
state, the bound value and the current error.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

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
from form_engine.render.theme import LIGHT_THEME, Theme
from form_engine.rules import CompiledRules, initial_value


# Marks a value the session never set, as opposed to one explicitly cleared
UNSET: Any = object()

DEFAULT_TEXTAREA_ROWS = 5


class ControlType(str, Enum):
    """Concrete interactive controls."""

    TEXT_INPUT = "text_input"
    TEXT_AREA = "text_area"
    FILE_INPUT = "file_input"
    SELECT = "select"
    CHECKBOX_GROUP = "checkbox_group"
    CHECKBOX = "checkbox"
    RADIO_GROUP = "radio_group"
    NUMBER_INPUT = "number_input"
    DATE_INPUT = "date_input"


@dataclass(frozen=True)
class OptionControl:
    """One choice inside a select, radio group or checkbox group."""

    value: str
    label: str
    disabled: bool = False
    selected: bool = False


@dataclass(frozen=True)
class Control:
    """A field bound to its value slot, rules and current error."""

    control_type: ControlType
    field_id: str
    label: str
    input_type: str | None = None
    value: Any = None
    error: str | None = None
    required: bool = False
    disabled: bool = False
    description: str | None = None
    css_class: str = ""
    attributes: dict[str, Any] = field(default_factory=dict)
    options: tuple[OptionControl, ...] = ()
    inline: bool = False
    rules: CompiledRules | None = None

    @property
    def has_own_label(self) -> bool:
        """A single checkbox draws its label next to the box, not above it."""
        return self.control_type is ControlType.CHECKBOX


def _classes(*parts: str | None) -> str:
    return " ".join(part for part in parts if part)


def _attrs(**kwargs: Any) -> dict[str, Any]:
    """Keep only attributes that are set, in keyword order."""
    return {key: value for key, value in kwargs.items() if value is not None and value is not False}


def _is_selected(option: FieldOption, value: Any) -> bool:
    if isinstance(value, (list, tuple, set, frozenset)):
        return option.value in value
    return value == option.value


def _options(options: list[FieldOption] | None, value: Any, field_disabled: bool) -> tuple[OptionControl, ...]:
    return tuple(
        OptionControl(
            value=option.value,
            label=option.label,
            disabled=option.disabled or field_disabled,
            selected=_is_selected(option, value),
        )
        for option in options or []
    )


def dispatch_control(
    form_field: BaseField,
    *,
    rules: CompiledRules | None = None,
    value: Any = UNSET,
    error: str | None = None,
    theme: Theme = LIGHT_THEME,
) -> Control:
    """
    Build the control for a field.

    Args:
        form_field: The field to render.
        rules: Compiled rules bound to the control.
        value: Current value from the session slot. When omitted, the
            field's initial value is used; an explicit None stays None.
        error: Current validation message for the field, if any.
        theme: Visual variant providing the CSS classes.

    Returns:
        Control description. Unknown kinds yield a text input.
    """
    if value is UNSET:
        value = initial_value(form_field)

    common = dict(
        field_id=form_field.id,
        label=form_field.label,
        value=value,
        error=error,
        required=form_field.required,
        disabled=form_field.disabled,
        description=form_field.description,
        rules=rules,
    )
    field_class = _classes(theme.field, form_field.class_name)

    match form_field:
        case TextField():
            return Control(
                control_type=ControlType.TEXT_INPUT,
                input_type=form_field.type,
                css_class=field_class,
                attributes=_attrs(
                    placeholder=form_field.placeholder,
                    autocomplete=form_field.autocomplete,
                    minlength=form_field.min_length,
                    maxlength=form_field.max_length,
                ),
                **common,
            )
        case TextareaField():
            return Control(
                control_type=ControlType.TEXT_AREA,
                css_class=_classes(
                    field_class,
                    "resize" if form_field.resizable else "resize-none",
                ),
                attributes=_attrs(
                    placeholder=form_field.placeholder,
                    rows=form_field.rows or DEFAULT_TEXTAREA_ROWS,
                    cols=form_field.cols,
                    maxlength=form_field.max_length,
                ),
                **common,
            )
        case FileField():
            return Control(
                control_type=ControlType.FILE_INPUT,
                input_type="file",
                css_class=field_class,
                attributes=_attrs(accept=form_field.accept, multiple=form_field.multiple),
                **common,
            )
        case SelectField():
            return Control(
                control_type=ControlType.SELECT,
                css_class=field_class,
                attributes=_attrs(multiple=form_field.multiple),
                options=_options(form_field.options, value, form_field.disabled),
                **common,
            )
        case CheckboxField() if form_field.is_group:
            return Control(
                control_type=ControlType.CHECKBOX_GROUP,
                input_type="checkbox",
                css_class=_classes(theme.checkbox, form_field.class_name),
                options=_options(form_field.options, value, form_field.disabled),
                **common,
            )
        case CheckboxField():
            return Control(
                control_type=ControlType.CHECKBOX,
                input_type="checkbox",
                css_class=_classes(theme.checkbox, form_field.class_name),
                attributes=_attrs(checked=bool(value)),
                **common,
            )
        case RadioField():
            return Control(
                control_type=ControlType.RADIO_GROUP,
                input_type="radio",
                css_class=_classes(theme.radio, form_field.class_name),
                options=_options(form_field.options, value, form_field.disabled),
                inline=form_field.inline,
                **common,
            )
        case NumberField():
            return Control(
                control_type=ControlType.NUMBER_INPUT,
                input_type="number",
                css_class=field_class,
                attributes=_attrs(
                    min=form_field.min,
                    max=form_field.max,
                    step=form_field.step,
                    placeholder=form_field.placeholder,
                ),
                **common,
            )
        case DateField():
            return Control(
                control_type=ControlType.DATE_INPUT,
                input_type="date",
                css_class=field_class,
                attributes=_attrs(min=form_field.min_date, max=form_field.max_date),
                **common,
            )
        case _:
            # Unrecognized kinds degrade to a plain text input
            return Control(
                control_type=ControlType.TEXT_INPUT,
                input_type="text",
                css_class=field_class,
                attributes=_attrs(placeholder=form_field.placeholder),
                **common,
            )


def render_controls(
    schema: FormSchema,
    *,
    rules: Mapping[str, CompiledRules] | None = None,
    values: Mapping[str, Any] | None = None,
    errors: Mapping[str, str] | None = None,
    theme: Theme = LIGHT_THEME,
) -> list[Control]:
    """Build controls for every visible field, in declaration order."""
    rules = rules or {}
    values = values or {}
    errors = errors or {}
    return [
        dispatch_control(
            form_field,
            rules=rules.get(form_field.id),
            value=values.get(form_field.id, UNSET),
            error=errors.get(form_field.id),
            theme=theme,
        )
        for form_field in schema.fields
        if not form_field.hidden
    ]
