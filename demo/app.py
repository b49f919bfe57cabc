"""
form-engine Playground - Interactive Form Schema Demo

This Gradio app demonstrates the form engine by:
1. Editing a form schema as JSON and previewing it live
2. Submitting values and showing per-field validation errors
3. Generating the form's static markup ("Copy Code")
"""

import asyncio
import json
import logging
import sys
from pathlib import Path

import gradio as gr

# Add src to path for local development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from form_engine import FormSession, MemoryClipboard, Theme, get_config, parse_schema
from form_engine.render import render_placeholder

logger = logging.getLogger("form-engine")

EXAMPLE_SCHEMA = {
    "formTitle": "Project Requirements Survey",
    "formDescription": "Please fill out this survey about your project needs",
    "fields": [
        {
            "id": "name",
            "type": "text",
            "label": "Full Name",
            "required": True,
            "placeholder": "Enter your full name",
        },
        {
            "id": "email",
            "type": "email",
            "label": "Email Address",
            "required": True,
            "placeholder": "you@example.com",
            "validation": {
                "pattern": "^[^\\s@]+@[^\\s@]+\\.[^\\s@]+$",
                "message": "Please enter a valid email address",
            },
        },
        {
            "id": "companySize",
            "type": "select",
            "label": "Company Size",
            "required": True,
            "options": [
                {"value": "1-50", "label": "1-50 employees"},
                {"value": "51-200", "label": "51-200 employees"},
                {"value": "201-1000", "label": "201-1000 employees"},
                {"value": "1000+", "label": "1000+ employees"},
            ],
        },
        {
            "id": "timeline",
            "type": "radio",
            "label": "Project Timeline",
            "options": [
                {"value": "immediate", "label": "Immediate (within 1 month)"},
                {"value": "short", "label": "Short-term (1-3 months)"},
                {"value": "long", "label": "Long-term (3+ months)"},
            ],
        },
        {
            "id": "comments",
            "type": "textarea",
            "label": "Additional Comments",
            "rows": 4,
        },
    ],
    "showReset": True,
    "layout": {"columns": 1, "spacing": "normal"},
}

clipboard = MemoryClipboard()


def _preview(session: FormSession | None, is_dark_mode: bool) -> str:
    theme = Theme.from_flag(is_dark_mode)
    if session is None:
        return render_placeholder(theme)
    return session.render(theme).to_html()


def load_schema(schema_text: str, is_dark_mode: bool):
    """Parse the editor text and start a fresh session for it."""
    parsed = parse_schema(schema_text)
    if not parsed.ok:
        return None, _preview(None, is_dark_mode), f"❌ {parsed.error}", "{}"

    session = FormSession(parsed.schema)
    if parsed.issues:
        status = "⚠️ Schema issues:\n" + "\n".join(f"- `{i.path}`: {i.message}" for i in parsed.issues)
    else:
        status = "✅ Schema is valid"
    values_text = json.dumps(session.values, indent=get_config().indent_json_output)
    return session, _preview(session, is_dark_mode), status, values_text


async def submit_values(session: FormSession | None, values_text: str, is_dark_mode: bool):
    """Apply the edited values and submit the form."""
    if session is None:
        return _preview(None, is_dark_mode), {}, "❌ Fix the schema first"

    try:
        values = json.loads(values_text or "{}")
    except json.JSONDecodeError as e:
        return _preview(session, is_dark_mode), {}, f"❌ Invalid JSON format: {e}"
    if not isinstance(values, dict):
        return _preview(session, is_dark_mode), {}, "❌ Values must be a JSON object"

    for field_id, value in values.items():
        try:
            session.set_value(field_id, value)
        except KeyError:
            logger.warning("Ignoring value for unknown field '%s'", field_id)

    result = await session.submit()
    if result.ok:
        status = f"✅ {result.notice}"
    elif result.notice:
        status = f"❌ {result.notice}"
    else:
        status = f"⚠️ {len(result.errors)} field(s) need attention"
    return _preview(session, is_dark_mode), result.model_dump(mode="json"), status


def reset_form(session: FormSession | None, is_dark_mode: bool):
    """Restore default values."""
    if session is None:
        return _preview(None, is_dark_mode), "{}"
    session.reset()
    return _preview(session, is_dark_mode), json.dumps(session.values, indent=get_config().indent_json_output)


def copy_code(session: FormSession | None, is_dark_mode: bool):
    """Generate the form markup, put it on the clipboard and refresh the preview."""
    if session is None:
        return "", "❌ Fix the schema first", _preview(None, is_dark_mode)
    if not session.copy_code(clipboard):
        return "", "❌ Failed to copy form code.", _preview(session, is_dark_mode)
    return clipboard.text, "✅ Copied!", _preview(session, is_dark_mode)


def sync_submit_values(session, values_text, is_dark_mode):
    return asyncio.run(submit_values(session, values_text, is_dark_mode))


# Create Gradio Interface
with gr.Blocks(title="form-engine Playground") as demo:
    gr.Markdown("""
# 📝 form-engine Playground

**How it works:**
1. Edit the form schema (JSON) on the left → the preview updates
2. Edit the values and click "Submit" → see validation errors
3. Click "Copy Code" → get static HTML for the form
    """)

    session_state = gr.State(None)

    with gr.Row():
        with gr.Column(scale=1):
            schema_input = gr.Code(
                label="📋 Form Schema",
                language="json",
                value=json.dumps(EXAMPLE_SCHEMA, indent=2),
            )
            dark_mode = gr.Checkbox(label="🌙 Dark mode", value=False)
            schema_status = gr.Markdown()

        with gr.Column(scale=1):
            preview_html = gr.HTML(label="Preview")

    with gr.Tab("🎯 Submit"):
        with gr.Row():
            with gr.Column(scale=1):
                values_input = gr.Code(label="Values", language="json", value="{}")
                with gr.Row():
                    submit_btn = gr.Button("🚀 Submit", variant="primary")
                    reset_btn = gr.Button("↺ Reset", variant="secondary")
            with gr.Column(scale=1):
                submit_status = gr.Markdown()
                submit_result = gr.JSON(label="Result")

    with gr.Tab("📄 Copy Code"):
        copy_btn = gr.Button("Copy Code", variant="secondary")
        copy_status = gr.Markdown()
        code_output = gr.Code(label="Generated markup", language="html")

    schema_input.change(
        fn=load_schema,
        inputs=[schema_input, dark_mode],
        outputs=[session_state, preview_html, schema_status, values_input],
    )
    dark_mode.change(
        fn=_preview,
        inputs=[session_state, dark_mode],
        outputs=preview_html,
    )
    submit_btn.click(
        fn=sync_submit_values,
        inputs=[session_state, values_input, dark_mode],
        outputs=[preview_html, submit_result, submit_status],
    )
    reset_btn.click(
        fn=reset_form,
        inputs=[session_state, dark_mode],
        outputs=[preview_html, values_input],
    )
    copy_btn.click(
        fn=copy_code,
        inputs=[session_state, dark_mode],
        outputs=[code_output, copy_status, preview_html],
    )
    demo.load(
        fn=load_schema,
        inputs=[schema_input, dark_mode],
        outputs=[session_state, preview_html, schema_status, values_input],
    )


if __name__ == "__main__":
    config = get_config()
    logging.basicConfig(level=config.get_log_level())
    demo.launch(server_name="0.0.0.0", server_port=config.demo_port)
