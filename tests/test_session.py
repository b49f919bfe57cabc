"""Tests for FormSession."""

import asyncio

import pytest

from form_engine.codegen import MemoryClipboard, generate_markup
from form_engine.config import FormEngineConfig
from form_engine.models.schema import (
    FormSchema,
    NumberField,
    TextField,
    ValidationRule,
    ValidationSettings,
)
from form_engine.models.validation_result import RuleType, SubmitStatus
from form_engine.parser import parse_schema
from form_engine.session import (
    FAILURE_NOTICE,
    SUCCESS_NOTICE,
    FormSession,
    ManualClock,
    SessionState,
)


def name_schema(**kwargs) -> FormSchema:
    return parse_schema(
        '{"formTitle": "T", "fields": [{"id": "name", "type": "text", "label": "Name", "required": true}]}'
    ).schema.model_copy(update=kwargs)


class TestValues:
    """Tests for value storage."""

    def test_initial_values(self):
        """Test that every field starts at its initial value."""
        schema = FormSchema(
            form_title="T",
            fields=[TextField(id="a", default_value="x"), NumberField(id="n")],
        )
        session = FormSession(schema)
        assert session.values == {"a": "x", "n": None}
        assert session.state is SessionState.EDITING

    def test_unknown_field_raises(self):
        """Test that programming errors surface as KeyError."""
        session = FormSession(name_schema())
        with pytest.raises(KeyError):
            session.set_value("missing", 1)
        with pytest.raises(KeyError):
            session.get_value("missing")


class TestSubmit:
    """Tests for FormSession.submit."""

    def test_required_empty_blocks(self):
        """Test that an empty required field fails and the callback is not called."""
        calls = []
        session = FormSession(name_schema(), on_submit=calls.append)
        result = asyncio.run(session.submit())
        assert result.status is SubmitStatus.INVALID
        assert not result.ok
        assert [e.field_name for e in result.errors] == ["name"]
        assert result.errors[0].error_type == RuleType.REQUIRED
        assert session.errors == {"name": "This field is required"}
        assert session.notice is None
        assert calls == []

    def test_success(self):
        """Test that valid values reach the callback and show a notice."""
        received = []
        session = FormSession(name_schema(), on_submit=received.append, clock=ManualClock())
        session.set_value("name", "Ada")
        result = asyncio.run(session.submit())
        assert result.ok
        assert result.values == {"name": "Ada"}
        assert result.notice == SUCCESS_NOTICE
        assert received == [{"name": "Ada"}]
        assert session.notice == SUCCESS_NOTICE
        assert session.notice_ok
        assert session.errors == {}

    def test_schema_callback_used(self):
        """Test that the schema's own on_submit is the default callback."""
        received = []
        session = FormSession(name_schema(on_submit=received.append))
        session.set_value("name", "Ada")
        asyncio.run(session.submit())
        assert received == [{"name": "Ada"}]

    def test_async_callback_awaited(self):
        """Test that a coroutine callback is awaited before success."""
        done = []

        async def on_submit(values):
            await asyncio.sleep(0)
            done.append(values["name"])

        session = FormSession(name_schema(), on_submit=on_submit)
        session.set_value("name", "Ada")
        assert asyncio.run(session.submit()).ok
        assert done == ["Ada"]

    def test_callback_failure_keeps_values(self):
        """Test that a rejecting callback shows the failure notice and keeps values."""

        async def on_submit(values):
            raise RuntimeError("server down")

        session = FormSession(name_schema(), on_submit=on_submit, clock=ManualClock())
        session.set_value("name", "Ada")
        result = asyncio.run(session.submit())
        assert result.status is SubmitStatus.FAILED
        assert result.notice == FAILURE_NOTICE
        assert session.notice == FAILURE_NOTICE
        assert not session.notice_ok
        assert session.get_value("name") == "Ada"
        assert session.state is SessionState.EDITING

    def test_double_submit_ignored(self):
        """Test that a submit while one is pending is dropped."""
        gate = asyncio.Event()
        calls = []

        async def on_submit(values):
            calls.append(values)
            await gate.wait()

        async def scenario():
            session = FormSession(name_schema(), on_submit=on_submit)
            session.set_value("name", "Ada")
            first = asyncio.create_task(session.submit())
            await asyncio.sleep(0)
            assert session.is_submitting
            second = await session.submit()
            gate.set()
            return await first, second, session

        first, second, session = asyncio.run(scenario())
        assert first.status is SubmitStatus.SUCCESS
        assert second.status is SubmitStatus.IGNORED
        assert len(calls) == 1
        assert session.state is SessionState.EDITING

    def test_fields_validated_in_order(self):
        """Test one error per failing field, in declaration order."""
        schema = FormSchema(
            form_title="T",
            fields=[
                TextField(id="b", required=True),
                TextField(id="a", validation=ValidationRule(pattern="^x$", message="Only x")),
                TextField(id="c", required=True),
            ],
        )
        session = FormSession(schema)
        session.set_value("a", "y")
        result = asyncio.run(session.submit())
        assert [e.field_name for e in result.errors] == ["b", "a", "c"]
        assert session.errors["a"] == "Only x"

    def test_disabled_fields_skipped(self):
        """Test that disabled fields are neither validated nor submitted."""
        schema = FormSchema(
            form_title="T",
            fields=[TextField(id="a"), TextField(id="locked", required=True, disabled=True)],
        )
        session = FormSession(schema)
        session.set_value("a", "ok")
        result = asyncio.run(session.submit())
        assert result.ok
        assert result.values == {"a": "ok"}


class TestHiddenFields:
    """Tests for hidden field handling."""

    def _schema(self):
        return FormSchema(
            form_title="T",
            fields=[
                TextField(id="name"),
                TextField(
                    id="token",
                    hidden=True,
                    required=True,
                    validation=ValidationRule(pattern="^[0-9]+$", message="Digits only"),
                ),
            ],
        )

    def test_not_required_by_default(self):
        """Test that an empty hidden required field does not block submit."""
        session = FormSession(self._schema(), config=FormEngineConfig())
        result = asyncio.run(session.submit())
        assert result.ok
        assert "token" not in result.values

    def test_validated_when_supplied(self):
        """Test that a supplied hidden value is still checked and collected."""
        session = FormSession(self._schema(), config=FormEngineConfig())
        session.set_value("token", "abc")
        assert asyncio.run(session.submit()).errors[0].message == "Digits only"
        session.set_value("token", "123")
        result = asyncio.run(session.submit())
        assert result.ok
        assert result.values["token"] == "123"

    def test_enforced_when_configured(self):
        """Test that enforce_hidden_required makes hidden fields blocking."""
        session = FormSession(self._schema(), config=FormEngineConfig(enforce_hidden_required=True))
        result = asyncio.run(session.submit())
        assert result.status is SubmitStatus.INVALID
        assert result.errors[0].field_name == "token"
        assert result.errors[0].error_type == RuleType.REQUIRED


class TestReset:
    """Tests for FormSession.reset."""

    def test_reset_restores_defaults(self):
        """Test that reset restores values, clears errors and calls the callback."""
        resets = []
        schema = FormSchema(form_title="T", fields=[TextField(id="a", default_value="x", required=True)])
        session = FormSession(schema, on_reset=lambda: resets.append(True))
        session.set_value("a", "")
        asyncio.run(session.submit())
        assert session.errors
        session.reset()
        assert session.values == {"a": "x"}
        assert session.errors == {}
        assert session.submit_count == 0
        assert resets == [True]
        assert session.schema is schema

    def test_reset_then_submit_reproduces_error(self):
        """Test that reset followed by submit gives the same required error."""
        session = FormSession(name_schema())
        before = asyncio.run(session.submit()).errors
        session.set_value("name", "Ada")
        session.reset()
        after = asyncio.run(session.submit()).errors
        assert [(e.field_name, e.error_type, e.message) for e in before] == [
            (e.field_name, e.error_type, e.message) for e in after
        ]

    def test_failing_reset_callback_swallowed(self):
        """Test that a raising reset callback does not escape."""

        def on_reset():
            raise RuntimeError("boom")

        session = FormSession(name_schema(), on_reset=on_reset)
        session.set_value("name", "Ada")
        session.reset()
        assert session.get_value("name") == ""

    def test_reset_clears_notice(self):
        """Test that reset clears the submitted flag."""
        session = FormSession(name_schema(), clock=ManualClock())
        session.set_value("name", "Ada")
        asyncio.run(session.submit())
        session.reset()
        assert session.notice is None


class TestValidationModes:
    """Tests for change/blur validation."""

    def test_on_submit_mode_waits_for_first_submit(self):
        """Test default mode: edits validate only after the first submit."""
        session = FormSession(name_schema())
        assert asyncio.run(session.handle_change("name", "")) is None
        assert session.errors == {}

        asyncio.run(session.submit())
        assert session.errors == {"name": "This field is required"}
        assert asyncio.run(session.handle_change("name", "Ada")) is None
        assert session.errors == {}

    def test_on_change_mode(self):
        """Test that onChange validates every edit."""
        session = FormSession(name_schema(validation=ValidationSettings(mode="onChange")))
        error = asyncio.run(session.handle_change("name", ""))
        assert error.error_type == RuleType.REQUIRED
        assert session.errors == {"name": "This field is required"}

    def test_on_blur_mode(self):
        """Test that onBlur validates on blur only."""
        session = FormSession(name_schema(validation=ValidationSettings(mode="onBlur")))
        assert asyncio.run(session.handle_change("name", "")) is None
        assert asyncio.run(session.handle_blur("name")).error_type == RuleType.REQUIRED

    def test_validate_without_callback(self):
        """Test that validate() never calls the submit callback."""
        calls = []
        session = FormSession(name_schema(), on_submit=calls.append)
        session.set_value("name", "Ada")
        result = asyncio.run(session.validate())
        assert result.is_valid
        assert result.validated_data == {"name": "Ada"}
        assert calls == []


class TestTransientFlags:
    """Tests for the clock-driven notice and copied flags."""

    def test_notice_expires_after_two_seconds(self):
        """Test the submit notice auto-clears."""
        clock = ManualClock()
        session = FormSession(name_schema(), clock=clock, config=FormEngineConfig())
        session.set_value("name", "Ada")
        asyncio.run(session.submit())
        clock.advance(1.5)
        assert session.notice == SUCCESS_NOTICE
        clock.advance(0.5)
        assert session.notice is None

    def test_copy_code(self):
        """Test that copying writes the markup and sets the copied flag."""
        clock = ManualClock()
        clipboard = MemoryClipboard()
        session = FormSession(name_schema(), clock=clock, config=FormEngineConfig())
        assert session.copy_code(clipboard)
        assert clipboard.text == generate_markup(session.schema)
        assert session.is_copied
        assert session.render().copy_button_text == "Copied!"
        clock.advance(2.0)
        assert not session.is_copied

    def test_each_copy_restarts_timer(self):
        """Test that a second click extends the copied window."""
        clock = ManualClock()
        session = FormSession(name_schema(), clock=clock, config=FormEngineConfig())
        session.copy_code(MemoryClipboard())
        clock.advance(1.5)
        session.copy_code(MemoryClipboard())
        clock.advance(1.0)
        assert session.is_copied
        clock.advance(1.0)
        assert not session.is_copied

    def test_clipboard_failure(self):
        """Test that a failing clipboard is reported, not raised."""

        class BrokenClipboard:
            def write_text(self, text):
                raise OSError("no display")

        session = FormSession(name_schema(), clock=ManualClock())
        assert session.copy_code(BrokenClipboard()) is False
        assert not session.is_copied


class TestRender:
    """Tests for FormSession.render."""

    def test_render_reflects_state(self):
        """Test that the rendered form shows current values and errors."""
        session = FormSession(name_schema())
        asyncio.run(session.submit())
        html = session.render().to_html()
        assert "This field is required" in html

        session.set_value("name", "Ada")
        control = session.render().controls[0]
        assert control.value == "Ada"
