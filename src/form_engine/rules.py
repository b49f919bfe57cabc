"""
Validation rule compiler.

Turns a field's declarative validation block into an ordered tuple of
executable checks. The order is fixed:

    required -> pattern -> min/max -> minLength/maxLength -> file -> custom

and the first failing check decides the error reported for the field.
Compilation is pure: the same field always yields the same checks. Broken
configuration (a regex that does not compile, ``min`` above ``max``) is
reported here, at compile time, rather than when the user submits.
"""

import inspect
import logging
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Awaitable, Callable, Mapping

from form_engine.config import get_config
from form_engine.errors import RuleCompileError
from form_engine.models.schema import (
    BaseField,
    CheckboxField,
    DateField,
    FileField,
    FormSchema,
    NumberField,
    UploadedFile,
)
from form_engine.models.validation_result import FieldValidationError, RuleType

logger = logging.getLogger("form-engine")

Predicate = Callable[[Any], bool | Awaitable[bool]]


def is_empty(value: Any) -> bool:
    """Whether ``value`` counts as "nothing entered" for the required check."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


def _items(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def _to_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _to_date(value: Any) -> date | None:
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def _to_file(value: Any) -> UploadedFile | None:
    if isinstance(value, UploadedFile):
        return value
    if isinstance(value, Mapping):
        try:
            return UploadedFile.model_validate(value)
        except ValueError:
            return None
    return None


def _type_allowed(upload: UploadedFile, allowed: list[str]) -> bool:
    """Match a file against ``image/*``, ``application/pdf`` or ``.pdf`` entries."""
    content_type = (upload.content_type or "").lower()
    name = upload.name.lower()
    for entry in allowed:
        entry = entry.strip().lower()
        if not entry:
            continue
        if entry.startswith("."):
            if name.endswith(entry):
                return True
        elif entry.endswith("/*"):
            if content_type.startswith(entry[:-1]):
                return True
        elif content_type == entry:
            return True
    return False


def _at_least(bound: Any, convert: Callable[[Any], Any]) -> Predicate:
    def check(value: Any) -> bool:
        for item in _items(value):
            converted = convert(item)
            if converted is None or converted < bound:
                return False
        return True
    return check


def _at_most(bound: Any, convert: Callable[[Any], Any]) -> Predicate:
    def check(value: Any) -> bool:
        for item in _items(value):
            converted = convert(item)
            if converted is None or converted > bound:
                return False
        return True
    return check


def _each_file(accept: Callable[[UploadedFile], bool]) -> Predicate:
    def check(value: Any) -> bool:
        for item in _items(value):
            upload = _to_file(item)
            if upload is None or not accept(upload):
                return False
        return True
    return check


@dataclass(frozen=True)
class Check:
    """One executable check of a compiled rule set."""

    rule: RuleType
    message: str
    predicate: Predicate
    skip_empty: bool = True
    expected: Any = None


@dataclass(frozen=True)
class CompiledRules:
    """Ordered checks for one field."""

    field_id: str
    checks: tuple[Check, ...] = field(default_factory=tuple)

    @property
    def rule_types(self) -> list[RuleType]:
        return [check.rule for check in self.checks]

    @property
    def is_required(self) -> bool:
        return any(check.rule is RuleType.REQUIRED for check in self.checks)

    async def evaluate(
        self,
        value: Any,
        *,
        enforce_required: bool = True,
    ) -> FieldValidationError | None:
        """
        Run checks in order and return the first failure, if any.

        Args:
            value: Current value of the field.
            enforce_required: When False the required check is skipped.

        Returns:
            The error of the first failing check, or None when all pass.
        """
        empty = is_empty(value)
        for check in self.checks:
            if check.rule is RuleType.REQUIRED and not enforce_required:
                continue
            if empty and check.skip_empty:
                continue
            try:
                passed = check.predicate(value)
                if inspect.isawaitable(passed):
                    passed = await passed
            except Exception:
                logger.warning(
                    "Check %s on field '%s' raised; treating as failed",
                    check.rule.value,
                    self.field_id,
                    exc_info=True,
                )
                passed = False
            if not passed:
                return FieldValidationError(
                    field_name=self.field_id,
                    error_type=check.rule,
                    message=check.message,
                    expected=check.expected,
                    received=value,
                )
        return None


def _bounds_for(field: BaseField) -> tuple[Any, Any, Callable[[Any], Any]]:
    """Pick the bound values and the value converter for a field."""
    if isinstance(field, DateField):
        # Dates are bounded by minDate/maxDate only
        return _to_date(field.min_date), _to_date(field.max_date), _to_date
    rule = field.validation
    low = rule.min if rule else None
    high = rule.max if rule else None
    if isinstance(field, NumberField):
        if low is None:
            low = field.min
        if high is None:
            high = field.max
    return low, high, _to_number


def compile_rules(
    field: BaseField,
    *,
    strict: bool = True,
    default_message: str | None = None,
) -> CompiledRules:
    """
    Compile the checks for a single field.

    Args:
        field: The field to compile.
        strict: If True, broken configuration raises RuleCompileError.
            If False, the offending check is dropped and a warning is logged.
        default_message: Message used when the validation block has none.
            Defaults to the configured ``default_message``.

    Returns:
        CompiledRules with the checks in evaluation order.

    Raises:
        RuleCompileError: In strict mode, for an invalid regex, inverted bounds or
            numeric bounds on a date field.
    """
    rule = field.validation
    fallback = default_message or get_config().default_message
    message = rule.message if rule and rule.message else fallback
    checks: list[Check] = []

    def reject(problem: str) -> None:
        error = RuleCompileError(field.id, problem)
        if strict:
            raise error
        logger.warning("Dropping check: %s", error)

    if field.required:
        checks.append(Check(RuleType.REQUIRED, message, lambda v: not is_empty(v), skip_empty=False))

    if rule and rule.pattern is not None:
        try:
            regex = re.compile(rule.pattern)
        except re.error as exc:
            reject(f"invalid pattern {rule.pattern!r}: {exc}")
        else:
            checks.append(Check(
                RuleType.PATTERN,
                message,
                lambda v: all(regex.search(str(item)) is not None for item in _items(v)),
                expected=rule.pattern,
            ))

    if isinstance(field, DateField) and rule and (rule.min is not None or rule.max is not None):
        reject("numeric min/max do not apply to date fields; use minDate/maxDate")

    low, high, convert = _bounds_for(field)
    if low is not None and high is not None and low > high:
        reject(f"min ({low}) is greater than max ({high})")
    else:
        if low is not None:
            checks.append(Check(RuleType.MIN, message, _at_least(low, convert), expected=low))
        if high is not None:
            checks.append(Check(RuleType.MAX, message, _at_most(high, convert), expected=high))

    min_length = rule.min_length if rule else None
    max_length = rule.max_length if rule else None
    if min_length is not None and max_length is not None and min_length > max_length:
        reject(f"minLength ({min_length}) is greater than maxLength ({max_length})")
    else:
        if min_length is not None:
            checks.append(Check(
                RuleType.MIN_LENGTH,
                message,
                lambda v: len(v if isinstance(v, (list, tuple)) else str(v)) >= min_length,
                expected=min_length,
            ))
        if max_length is not None:
            checks.append(Check(
                RuleType.MAX_LENGTH,
                message,
                lambda v: len(v if isinstance(v, (list, tuple)) else str(v)) <= max_length,
                expected=max_length,
            ))

    if isinstance(field, FileField):
        max_size = field.max_size
        allowed_types = field.allowed_types
        if max_size is not None:
            checks.append(Check(
                RuleType.FILE_SIZE,
                message,
                _each_file(lambda upload: upload.size <= max_size),
                expected=max_size,
            ))
        if allowed_types:
            checks.append(Check(
                RuleType.FILE_TYPE,
                message,
                _each_file(lambda upload: _type_allowed(upload, allowed_types)),
                expected=list(allowed_types),
            ))

    if rule and rule.custom_validator is not None:
        checks.append(Check(RuleType.CUSTOM, message, rule.custom_validator, skip_empty=False))

    return CompiledRules(field_id=field.id, checks=tuple(checks))


def compile_schema_rules(
    schema: FormSchema,
    *,
    strict: bool = False,
    default_message: str | None = None,
) -> dict[str, CompiledRules]:
    """Compile every field of a schema, keyed by field id.

    Non-strict by default so one misconfigured field never stops the rest
    of the form from rendering.
    """
    compiled: dict[str, CompiledRules] = {}
    for field in schema.fields:
        if field.id in compiled:
            logger.warning("Duplicate field id '%s'; keeping the first definition", field.id)
            continue
        compiled[field.id] = compile_rules(field, strict=strict, default_message=default_message)
    return compiled


def initial_value(field: BaseField) -> Any:
    """Value a field starts with, and returns to on reset."""
    if field.default_value is not None:
        return field.default_value
    if isinstance(field, CheckboxField):
        return [] if field.is_group else bool(field.checked)
    if isinstance(field, FileField):
        return []
    if getattr(field, "multiple", False):
        return []
    if isinstance(field, NumberField):
        return None
    return ""
