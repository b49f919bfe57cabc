"""
Form session: live values and errors for one rendering of one schema.

A session is created when a schema is accepted and thrown away when the
schema changes. It compiles the schema's rules once, holds the current
value and error per field id, and runs the submit and reset flows.

Transient feedback (the submit notice and the "Copied!" acknowledgement)
is stored as an expiry timestamp on the session's clock rather than as a
timer, so callers simply read ``notice`` / ``is_copied`` and tests can move
a ``ManualClock`` forward instead of sleeping.

Usage:
    session = FormSession(schema, on_submit=save)
    await session.handle_change("email", "john@example.com")
    result = await session.submit()
    if result.ok:
        print(session.notice)
"""

import inspect
import logging
import time
from enum import Enum
from typing import Any, Awaitable, Callable, Protocol

from form_engine.codegen import Clipboard, copy_to_clipboard, generate_markup
from form_engine.config import FormEngineConfig, get_config
from form_engine.errors import SubmitCallbackError
from form_engine.models.schema import BaseField, FormSchema
from form_engine.models.validation_result import (
    FieldValidationError,
    SubmitResult,
    SubmitStatus,
    ValidationResult,
)
from form_engine.render.preview import RenderedForm, render_form
from form_engine.render.theme import LIGHT_THEME, Theme
from form_engine.rules import compile_schema_rules, initial_value, is_empty

logger = logging.getLogger("form-engine")

SUCCESS_NOTICE = "Form submitted successfully!"
FAILURE_NOTICE = "Form submission failed. Please try again."

SubmitCallback = Callable[[dict[str, Any]], None | Awaitable[None]]
ResetCallback = Callable[[], None]


class Clock(Protocol):
    """Source of the current time in seconds."""

    def now(self) -> float: ...


class SystemClock:
    """Monotonic wall clock."""

    def now(self) -> float:
        return time.monotonic()


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: float = 0.0):
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += seconds


class SessionState(str, Enum):
    EDITING = "editing"
    SUBMITTING = "submitting"


class FormSession:
    """Live state of one form."""

    def __init__(
        self,
        schema: FormSchema,
        *,
        on_submit: SubmitCallback | None = None,
        on_reset: ResetCallback | None = None,
        clock: Clock | None = None,
        config: FormEngineConfig | None = None,
    ):
        self.schema = schema
        self._config = config or get_config()
        self._clock = clock or SystemClock()
        self._on_submit = on_submit or schema.on_submit
        self._on_reset = on_reset or schema.on_reset

        # First definition wins for duplicate ids
        self._fields: dict[str, BaseField] = {}
        for form_field in schema.fields:
            self._fields.setdefault(form_field.id, form_field)

        self._rules = compile_schema_rules(schema, default_message=self._config.default_message)
        self._values: dict[str, Any] = {}
        self._errors: dict[str, FieldValidationError] = {}
        self._state = SessionState.EDITING
        self._submit_count = 0
        self._notice: str | None = None
        self._notice_ok = True
        self._notice_until = 0.0
        self._copied_until = 0.0
        self._restore_defaults()

    # State

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_submitting(self) -> bool:
        return self._state is SessionState.SUBMITTING

    @property
    def submit_count(self) -> int:
        return self._submit_count

    @property
    def values(self) -> dict[str, Any]:
        """Snapshot of every field's current value, hidden and disabled included."""
        return dict(self._values)

    @property
    def errors(self) -> dict[str, str]:
        """Current error message per field id."""
        return {field_id: error.message for field_id, error in self._errors.items()}

    @property
    def field_errors(self) -> list[FieldValidationError]:
        return list(self._errors.values())

    @property
    def notice(self) -> str | None:
        """Submit notice, while it has not expired."""
        if self._notice is not None and self._clock.now() < self._notice_until:
            return self._notice
        return None

    @property
    def notice_ok(self) -> bool:
        return self._notice_ok

    @property
    def is_copied(self) -> bool:
        return self._clock.now() < self._copied_until

    def get_value(self, field_id: str) -> Any:
        return self._values[field_id]

    def set_value(self, field_id: str, value: Any) -> None:
        """
        Store a value without validating it.

        Raises:
            KeyError: If the schema has no field with this id.
        """
        if field_id not in self._fields:
            raise KeyError(field_id)
        self._values[field_id] = value

    # Validation

    def _validates_on(self, event: str) -> bool:
        settings = self.schema.validation_settings
        mode = settings.re_validate_mode if self._submit_count else settings.mode
        return mode == event

    async def _evaluate(self, form_field: BaseField) -> FieldValidationError | None:
        if form_field.disabled:
            return None
        value = self._values.get(form_field.id)
        enforce_required = True
        if form_field.hidden:
            enforce_required = self._config.enforce_hidden_required
            if not enforce_required and is_empty(value):
                return None
        return await self._rules[form_field.id].evaluate(value, enforce_required=enforce_required)

    async def validate_field(self, field_id: str) -> FieldValidationError | None:
        """
        Re-validate a single field and update its stored error.

        Raises:
            KeyError: If the schema has no field with this id.
        """
        error = await self._evaluate(self._fields[field_id])
        if error is None:
            self._errors.pop(field_id, None)
        else:
            self._errors[field_id] = error
        return error

    async def handle_change(self, field_id: str, value: Any) -> FieldValidationError | None:
        """Store an edited value, validating it if the form's mode asks for it."""
        self.set_value(field_id, value)
        if self._validates_on("onChange"):
            return await self.validate_field(field_id)
        return self._errors.get(field_id)

    async def handle_blur(self, field_id: str) -> FieldValidationError | None:
        """Validate a field when it loses focus, if the form's mode asks for it."""
        if field_id not in self._fields:
            raise KeyError(field_id)
        if self._validates_on("onBlur"):
            return await self.validate_field(field_id)
        return self._errors.get(field_id)

    async def validate(self) -> ValidationResult:
        """
        Validate every field in declaration order without submitting.

        Replaces the stored errors with the outcome.
        """
        errors: list[FieldValidationError] = []
        for form_field in self._fields.values():
            error = await self._evaluate(form_field)
            if error is not None:
                errors.append(error)

        self._errors = {error.field_name: error for error in errors}
        is_valid = not errors
        return ValidationResult(
            is_valid=is_valid,
            errors=errors,
            validated_data=self._collect_values() if is_valid else None,
        )

    def _collect_values(self) -> dict[str, Any]:
        """Values handed to the submit callback."""
        collected: dict[str, Any] = {}
        for field_id, form_field in self._fields.items():
            value = self._values.get(field_id)
            if form_field.disabled:
                continue
            if form_field.hidden and is_empty(value):
                continue
            collected[field_id] = value
        return collected

    # Submit / reset

    def _show_notice(self, text: str, ok: bool) -> None:
        self._notice = text
        self._notice_ok = ok
        self._notice_until = self._clock.now() + self._config.feedback_seconds

    async def _invoke_submit(self, values: dict[str, Any]) -> None:
        if self._on_submit is None:
            return
        try:
            outcome = self._on_submit(dict(values))
            if inspect.isawaitable(outcome):
                await outcome
        except Exception as e:
            raise SubmitCallbackError(str(e) or type(e).__name__) from e

    async def submit(self) -> SubmitResult:
        """
        Validate every field and, if all pass, hand the values to the submit callback.

        Never raises. Field values are kept whatever the outcome. A call made
        while a previous submit is still awaiting its callback is dropped.

        Returns:
            SubmitResult describing this attempt.
        """
        if self.is_submitting:
            logger.info("Submit ignored: previous submit still pending")
            return SubmitResult(status=SubmitStatus.IGNORED, values=self._collect_values())

        self._state = SessionState.SUBMITTING
        self._submit_count += 1
        self._notice = None
        try:
            result = await self.validate()
            if not result.is_valid:
                logger.info("Submit blocked by %d invalid field(s)", result.error_count)
                return SubmitResult(
                    status=SubmitStatus.INVALID,
                    errors=result.errors,
                    values=self._collect_values(),
                )

            values = result.validated_data or {}
            try:
                await self._invoke_submit(values)
            except SubmitCallbackError as e:
                logger.error("Form submission error: %s", e, exc_info=e.__cause__)
                self._show_notice(FAILURE_NOTICE, ok=False)
                return SubmitResult(status=SubmitStatus.FAILED, values=values, notice=FAILURE_NOTICE)

            logger.info("Form submitted with %d value(s)", len(values))
            self._show_notice(SUCCESS_NOTICE, ok=True)
            return SubmitResult(status=SubmitStatus.SUCCESS, values=values, notice=SUCCESS_NOTICE)
        finally:
            self._state = SessionState.EDITING

    def _restore_defaults(self) -> None:
        self._values = {field_id: initial_value(f) for field_id, f in self._fields.items()}

    def reset(self) -> None:
        """Restore initial values, clear errors and the notice, then call the reset callback."""
        self._restore_defaults()
        self._errors.clear()
        self._notice = None
        self._submit_count = 0

        if self._on_reset is None:
            return
        try:
            self._on_reset()
        except Exception:
            logger.warning("Reset callback raised", exc_info=True)

    # Copy code / rendering

    def generate_code(self) -> str:
        return generate_markup(self.schema)

    def copy_code(self, clipboard: Clipboard) -> bool:
        """
        Copy the generated markup to a clipboard.

        On success the "copied" acknowledgement shows for the configured
        feedback period; every successful copy restarts that period.

        Returns:
            Whether the write succeeded.
        """
        copied = copy_to_clipboard(self.generate_code(), clipboard)
        if copied:
            self._copied_until = self._clock.now() + self._config.feedback_seconds
        return copied

    def render(self, theme: Theme = LIGHT_THEME) -> RenderedForm:
        """Render the form with the current values, errors and feedback."""
        return render_form(
            self.schema,
            theme=theme,
            rules=self._rules,
            values=self._values,
            errors=self.errors,
            notice=self.notice,
            notice_ok=self._notice_ok,
            is_copied=self.is_copied,
        )
