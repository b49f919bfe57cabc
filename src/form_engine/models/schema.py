"""
Form schema models.

These models describe a form declaratively: the fields it contains, their
kind-specific options, the validation block attached to each field and the
layout hints for the whole form. They are parsed from the JSON text the
user edits, so every key uses camelCase on the wire (``formTitle``,
``defaultValue``) and snake_case in Python (``form_title``,
``default_value``).

A schema instance is never mutated. Each successful parse produces a new
``FormSchema`` that replaces the previous one wholesale.
"""

from enum import Enum
from typing import Annotated, Any, Awaitable, Callable, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag
from pydantic.alias_generators import to_camel


class FieldKind(str, Enum):
    """Every field kind the engine knows how to render."""

    TEXT = "text"
    EMAIL = "email"
    PASSWORD = "password"
    TEL = "tel"
    URL = "url"
    TEXTAREA = "textarea"
    FILE = "file"
    SELECT = "select"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    NUMBER = "number"
    DATE = "date"


# Kinds rendered as a single-line text input
TEXT_KINDS = frozenset({"text", "email", "password", "tel", "url"})

KNOWN_KINDS = frozenset(kind.value for kind in FieldKind)


class SchemaModel(BaseModel):
    """Base model: camelCase aliases, immutable, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class FieldOption(SchemaModel):
    """A choice offered by select, radio and grouped checkbox fields."""

    value: str = Field(..., description="Submitted value")
    label: str = Field(..., description="Displayed text")
    disabled: bool = Field(default=False, description="Whether this option can be chosen")


class ValidationRule(SchemaModel):
    """Declarative validation block attached to a field."""

    pattern: str | None = Field(default=None, description="Regex the value must match")
    message: str | None = Field(default=None, description="Message shown when a check fails")
    min: float | None = Field(default=None, description="Minimum numeric value")
    max: float | None = Field(default=None, description="Maximum numeric value")
    min_length: int | None = Field(default=None, description="Minimum length")
    max_length: int | None = Field(default=None, description="Maximum length")
    custom_validator: Callable[[Any], bool | Awaitable[bool]] | None = Field(
        default=None,
        exclude=True,
        description="Programmatic predicate, sync or async",
    )


class UploadedFile(SchemaModel):
    """A file chosen in a file control."""

    name: str
    size: int = 0
    content_type: str | None = None


class BaseField(SchemaModel):
    """Attributes shared by every field kind."""

    id: str = Field(..., description="Unique id, used as value key and DOM anchor")
    label: str = Field(default="", description="Human-readable label")
    required: bool = Field(default=False)
    disabled: bool = Field(default=False)
    hidden: bool = Field(default=False)
    description: str | None = Field(default=None, description="Help text")
    class_name: str | None = Field(default=None, description="Extra CSS classes")
    default_value: Any = Field(default=None)
    placeholder: str | None = Field(default=None)
    validation: ValidationRule | None = Field(default=None)


class TextField(BaseField):
    """Single-line text input (text, email, password, tel, url)."""

    type: Literal["text", "email", "password", "tel", "url"] = "text"
    autocomplete: str | None = None
    min_length: int | None = None
    max_length: int | None = None


class TextareaField(BaseField):
    """Multi-line text input."""

    type: Literal["textarea"] = "textarea"
    rows: int | None = None
    cols: int | None = None
    max_length: int | None = None
    resizable: bool = False


class FileField(BaseField):
    """File picker."""

    type: Literal["file"] = "file"
    accept: str | None = None
    multiple: bool = False
    max_size: int | None = Field(default=None, description="Maximum size per file in bytes")
    allowed_types: list[str] | None = None


class SelectField(BaseField):
    """Drop-down choice, single or multiple."""

    type: Literal["select"] = "select"
    options: list[FieldOption] = Field(default_factory=list)
    multiple: bool = False
    searchable: bool = False
    clearable: bool = False


class CheckboxField(BaseField):
    """
    Checkbox in one of two modes.

    With ``options`` the field is a group of independent boxes whose checked
    values are collected into a list. Without them it is a single box bound
    to ``checked``.
    """

    type: Literal["checkbox"] = "checkbox"
    options: list[FieldOption] | None = None
    checked: bool | None = None

    @property
    def is_group(self) -> bool:
        return self.options is not None


class RadioField(BaseField):
    """Mutually exclusive choice."""

    type: Literal["radio"] = "radio"
    options: list[FieldOption] = Field(default_factory=list)
    inline: bool = False


class NumberField(BaseField):
    """Numeric input."""

    type: Literal["number"] = "number"
    min: float | None = None
    max: float | None = None
    step: float | None = None


class DateField(BaseField):
    """Date input bounded by ISO dates."""

    type: Literal["date"] = "date"
    min_date: str | None = None
    max_date: str | None = None
    date_format: str | None = None


class UnknownField(BaseField):
    """Any field whose ``type`` the engine does not recognize."""

    type: str = ""


def _field_tag(value: Any) -> str:
    """Pick the union member for a raw dict or an already built field."""
    if isinstance(value, dict):
        kind = value.get("type")
    else:
        kind = getattr(value, "type", None)
    if isinstance(value, UnknownField) or not isinstance(kind, str):
        return "unknown"
    if kind in TEXT_KINDS:
        return "text"
    if kind in KNOWN_KINDS:
        return kind
    return "unknown"


FormField = Annotated[
    Union[
        Annotated[TextField, Tag("text")],
        Annotated[TextareaField, Tag("textarea")],
        Annotated[FileField, Tag("file")],
        Annotated[SelectField, Tag("select")],
        Annotated[CheckboxField, Tag("checkbox")],
        Annotated[RadioField, Tag("radio")],
        Annotated[NumberField, Tag("number")],
        Annotated[DateField, Tag("date")],
        Annotated[UnknownField, Tag("unknown")],
    ],
    Discriminator(_field_tag),
]


class Layout(SchemaModel):
    """Form-level arrangement hints."""

    columns: Literal[1, 2, 3, 4] = 1
    spacing: Literal["compact", "normal", "relaxed"] = "normal"
    label_position: Literal["top", "left", "right"] = "top"


class ValidationSettings(SchemaModel):
    """When fields are validated while the user edits."""

    mode: Literal["onSubmit", "onBlur", "onChange"] = "onSubmit"
    re_validate_mode: Literal["onSubmit", "onBlur", "onChange"] = "onChange"


class FormSchema(SchemaModel):
    """Complete declarative description of one form."""

    id: str | None = None
    form_title: str = Field(..., description="Form title")
    form_description: str | None = None
    fields: list[FormField] = Field(..., description="Fields in declaration order")
    submit_button_text: str = "Submit"
    reset_button_text: str = "Reset"
    show_reset: bool = False
    class_name: str | None = None
    validation: ValidationSettings | None = None
    layout: Layout | None = None
    on_submit: Callable[[dict[str, Any]], Any] | None = Field(default=None, exclude=True)
    on_reset: Callable[[], Any] | None = Field(default=None, exclude=True)

    @property
    def field_ids(self) -> list[str]:
        return [field.id for field in self.fields]

    @property
    def visible_fields(self) -> list[BaseField]:
        return [field for field in self.fields if not field.hidden]

    @property
    def validation_settings(self) -> ValidationSettings:
        return self.validation or ValidationSettings()

    def get_field(self, field_id: str) -> BaseField:
        """Return the first field with ``field_id``.

        Raises:
            KeyError: If no field has this id.
        """
        for field in self.fields:
            if field.id == field_id:
                return field
        raise KeyError(field_id)

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize back to the camelCase JSON the editor works with."""
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)
