"""Tests for the validation rule compiler."""

import asyncio

import pytest

from form_engine.errors import RuleCompileError
from form_engine.models.schema import (
    CheckboxField,
    DateField,
    FileField,
    FormSchema,
    NumberField,
    SelectField,
    TextField,
    UploadedFile,
    ValidationRule,
)
from form_engine.models.validation_result import RuleType
from form_engine.rules import compile_rules, compile_schema_rules, initial_value, is_empty


def evaluate(field, value, **kwargs):
    return asyncio.run(compile_rules(field).evaluate(value, **kwargs))


class TestIsEmpty:
    """Tests for the emptiness predicate."""

    def test_empty_values(self):
        """Test values that count as nothing entered."""
        for value in (None, "", [], (), {}, False):
            assert is_empty(value)

    def test_non_empty_values(self):
        """Test that zero and whitespace are real values."""
        for value in (0, 0.0, " ", ["a"], True):
            assert not is_empty(value)


class TestCompileRules:
    """Tests for compile_rules."""

    def test_check_order(self):
        """Test that checks follow required, pattern, bounds, length, custom."""
        field = TextField(
            id="code",
            required=True,
            validation=ValidationRule(
                pattern="^[A-Z]+$",
                min_length=2,
                max_length=4,
                custom_validator=lambda v: True,
            ),
        )
        assert compile_rules(field).rule_types == [
            RuleType.REQUIRED,
            RuleType.PATTERN,
            RuleType.MIN_LENGTH,
            RuleType.MAX_LENGTH,
            RuleType.CUSTOM,
        ]

    def test_compile_is_deterministic(self):
        """Test that compiling the same field twice yields the same checks."""
        field = NumberField(id="n", required=True, validation=ValidationRule(min=1, max=5))
        first = compile_rules(field)
        second = compile_rules(field)
        assert first.rule_types == second.rule_types
        assert [c.message for c in first.checks] == [c.message for c in second.checks]

    def test_invalid_pattern_raises(self):
        """Test that a broken regex is reported at compile time."""
        field = TextField(id="p", validation=ValidationRule(pattern="[a-"))
        with pytest.raises(RuleCompileError) as exc_info:
            compile_rules(field)
        assert exc_info.value.field_id == "p"
        assert "Field 'p'" in str(exc_info.value)

    def test_inverted_bounds_raise(self):
        """Test that min above max is a configuration error."""
        with pytest.raises(RuleCompileError):
            compile_rules(NumberField(id="n", validation=ValidationRule(min=5, max=1)))
        with pytest.raises(RuleCompileError):
            compile_rules(TextField(id="t", validation=ValidationRule(min_length=5, max_length=1)))

    def test_non_strict_drops_broken_check(self):
        """Test that non-strict compilation keeps the other checks."""
        field = TextField(id="p", required=True, validation=ValidationRule(pattern="(", max_length=3))
        compiled = compile_rules(field, strict=False)
        assert compiled.rule_types == [RuleType.REQUIRED, RuleType.MAX_LENGTH]

    def test_schema_rules_keep_first_duplicate(self):
        """Test that duplicate ids compile the first definition only."""
        schema = FormSchema(
            form_title="T",
            fields=[TextField(id="a", required=True), TextField(id="a")],
        )
        compiled = compile_schema_rules(schema)
        assert list(compiled) == ["a"]
        assert compiled["a"].is_required


class TestEvaluate:
    """Tests for CompiledRules.evaluate."""

    def test_required_empty(self):
        """Test that an empty required value fails with the default message."""
        error = evaluate(TextField(id="name", required=True), "")
        assert error.field_name == "name"
        assert error.error_type == RuleType.REQUIRED
        assert error.message == "This field is required"

    def test_required_wins_over_pattern(self):
        """Test that the first failing check in order is reported."""
        field = TextField(
            id="zip",
            required=True,
            validation=ValidationRule(pattern="^[0-9]{5}$", message="Enter 5 digits"),
        )
        error = evaluate(field, "")
        assert error.error_type == RuleType.REQUIRED
        assert error.message == "Enter 5 digits"

    def test_pattern(self):
        """Test that a mismatch yields the rule's message and a match passes."""
        field = TextField(
            id="zip",
            required=True,
            validation=ValidationRule(pattern="^[0-9]{5}$", message="Enter 5 digits"),
        )
        error = evaluate(field, "12a45")
        assert error.error_type == RuleType.PATTERN
        assert error.message == "Enter 5 digits"
        assert error.expected == "^[0-9]{5}$"
        assert evaluate(field, "12345") is None

    def test_empty_optional_skips_checks(self):
        """Test that an empty optional value skips pattern and length checks."""
        field = TextField(id="nick", validation=ValidationRule(pattern="^x+$", min_length=3))
        assert evaluate(field, "") is None

    def test_numeric_bounds(self):
        """Test min and max on numbers and numeric strings."""
        field = TextField(id="qty", validation=ValidationRule(min=1, max=10))
        assert evaluate(field, 0).error_type == RuleType.MIN
        assert evaluate(field, "11").error_type == RuleType.MAX
        assert evaluate(field, "abc").error_type == RuleType.MIN
        assert evaluate(field, 10) is None

    def test_number_field_bounds(self):
        """Test that a number field's own min/max apply without a validation block."""
        field = NumberField(id="age", min=18, max=99)
        assert evaluate(field, 17).error_type == RuleType.MIN
        assert evaluate(field, 100).error_type == RuleType.MAX
        assert evaluate(field, 30) is None

    def test_validation_block_overrides_number_bounds(self):
        """Test that validation.min takes precedence over the field's min."""
        field = NumberField(id="age", min=18, validation=ValidationRule(min=21))
        assert evaluate(field, 20).error_type == RuleType.MIN

    def test_length_bounds(self):
        """Test minLength and maxLength."""
        field = TextField(id="pw", validation=ValidationRule(min_length=8, max_length=12))
        assert evaluate(field, "short").error_type == RuleType.MIN_LENGTH
        assert evaluate(field, "much-too-long-password").error_type == RuleType.MAX_LENGTH
        assert evaluate(field, "just-right") is None

    def test_date_bounds(self):
        """Test that minDate/maxDate bound ISO dates."""
        field = DateField(id="start", min_date="2024-01-01", max_date="2024-12-31")
        assert evaluate(field, "2023-12-31").error_type == RuleType.MIN
        assert evaluate(field, "2025-01-01").error_type == RuleType.MAX
        assert evaluate(field, "2024-06-15") is None

    def test_numeric_validation_keeps_date_bounds(self):
        """Test that numeric min/max on a date field never replaces minDate/maxDate."""
        field = DateField(id="start", min_date="2024-01-01", validation=ValidationRule(max=5))
        with pytest.raises(RuleCompileError):
            compile_rules(field)
        rules = compile_rules(field, strict=False)
        assert rules.rule_types == [RuleType.MIN]
        assert asyncio.run(rules.evaluate("2024-06-15")) is None
        assert asyncio.run(rules.evaluate("2023-06-15")).error_type == RuleType.MIN

    def test_file_constraints(self):
        """Test maxSize and allowedTypes on uploaded files."""
        field = FileField(id="cv", max_size=1000, allowed_types=[".pdf", "image/*"])
        big = UploadedFile(name="cv.pdf", size=5000, content_type="application/pdf")
        wrong = UploadedFile(name="cv.exe", size=10, content_type="application/octet-stream")
        image = {"name": "me.png", "size": 10, "contentType": "image/png"}
        assert evaluate(field, [big]).error_type == RuleType.FILE_SIZE
        assert evaluate(field, [wrong]).error_type == RuleType.FILE_TYPE
        assert evaluate(field, [image]) is None

    def test_select_multiple_items(self):
        """Test that list values are checked item by item."""
        field = SelectField(id="s", multiple=True, validation=ValidationRule(pattern="^[a-c]$"))
        assert evaluate(field, ["a", "b"]) is None
        assert evaluate(field, ["a", "z"]).error_type == RuleType.PATTERN

    def test_single_checkbox_required(self):
        """Test that an unchecked required box fails."""
        field = CheckboxField(id="agree", required=True)
        assert evaluate(field, False).error_type == RuleType.REQUIRED
        assert evaluate(field, True) is None


class TestCustomValidator:
    """Tests for custom predicates."""

    def test_sync_predicate(self):
        """Test a plain function predicate."""
        field = TextField(id="u", validation=ValidationRule(custom_validator=lambda v: v != "admin", message="Taken"))
        error = evaluate(field, "admin")
        assert error.error_type == RuleType.CUSTOM
        assert error.message == "Taken"
        assert evaluate(field, "ada") is None

    def test_async_predicate(self):
        """Test that a coroutine predicate is awaited."""

        async def available(value):
            await asyncio.sleep(0)
            return value != "admin"

        field = TextField(id="u", validation=ValidationRule(custom_validator=available))
        assert evaluate(field, "admin").error_type == RuleType.CUSTOM
        assert evaluate(field, "ada") is None

    def test_raising_predicate_fails(self):
        """Test that a predicate that raises counts as a failure."""

        def broken(value):
            raise RuntimeError("boom")

        field = TextField(id="u", validation=ValidationRule(custom_validator=broken))
        assert evaluate(field, "x").error_type == RuleType.CUSTOM

    def test_custom_runs_on_empty(self):
        """Test that the custom predicate runs even for empty values."""
        seen = []
        field = TextField(id="u", validation=ValidationRule(custom_validator=lambda v: seen.append(v) or True))
        assert evaluate(field, "") is None
        assert seen == [""]

    def test_custom_runs_last(self):
        """Test that an earlier failing check short-circuits the predicate."""
        calls = []
        field = TextField(
            id="u",
            validation=ValidationRule(pattern="^a", custom_validator=lambda v: calls.append(v) or False),
        )
        assert evaluate(field, "b").error_type == RuleType.PATTERN
        assert calls == []


class TestInitialValue:
    """Tests for initial field values."""

    def test_kind_defaults(self):
        """Test the empty value each kind starts with."""
        assert initial_value(TextField(id="t")) == ""
        assert initial_value(NumberField(id="n")) is None
        assert initial_value(FileField(id="f")) == []
        assert initial_value(SelectField(id="s", multiple=True)) == []
        assert initial_value(SelectField(id="s")) == ""
        assert initial_value(CheckboxField(id="c", options=[])) == []
        assert initial_value(CheckboxField(id="c", checked=True)) is True
        assert initial_value(CheckboxField(id="c")) is False

    def test_default_value_wins(self):
        """Test that defaultValue overrides the kind default."""
        assert initial_value(TextField(id="t", default_value="hi")) == "hi"
