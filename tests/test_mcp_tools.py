"""Tests for the tool functions and their MCP wrappers."""

import asyncio
import json

from starlette.testclient import TestClient

from form_engine.mcp_server import create_mcp_server, create_sse_app
from form_engine.mcp_server.tools import call_mcp_tool, get_mcp_tools
from form_engine.tools import generate_form_code, preview_form, validate_form_data

SCHEMA_JSON = json.dumps({
    "formTitle": "Contact",
    "fields": [
        {"id": "name", "type": "text", "label": "Name", "required": True},
        {
            "id": "email",
            "type": "email",
            "label": "Email",
            "validation": {"pattern": "^[^@]+@[^@]+$", "message": "Enter a valid email"},
        },
        {"id": "s", "type": "select", "options": []},
    ],
})


class TestPreviewForm:
    """Tests for preview_form."""

    def test_preview(self):
        """Test that a valid schema yields HTML and issues."""
        result = json.loads(preview_form(SCHEMA_JSON))
        assert "<form" in result["html"]
        assert "Contact" in result["html"]
        assert result["issues"][0]["error_type"] == "empty_options"

    def test_dark_mode(self):
        """Test that the flag switches theme classes."""
        result = json.loads(preview_form(SCHEMA_JSON, is_dark_mode=True))
        assert "bg-gray-800" in result["html"]

    def test_parse_error(self):
        """Test that broken text yields an error."""
        result = json.loads(preview_form("{"))
        assert result["error"].startswith("Invalid JSON format: ")


class TestValidateFormData:
    """Tests for validate_form_data."""

    def test_invalid_data(self):
        """Test per-field errors."""
        result = json.loads(asyncio.run(validate_form_data(SCHEMA_JSON, {"name": "", "email": "nope"})))
        assert result["is_valid"] is False
        assert [e["field_name"] for e in result["errors"]] == ["name", "email"]
        assert result["errors"][1]["message"] == "Enter a valid email"

    def test_valid_data_as_json_text(self):
        """Test that JSON text data is accepted and unknown keys warned about."""
        data = json.dumps({"name": "Ada", "email": "ada@example.com", "extra": 1})
        result = json.loads(asyncio.run(validate_form_data(SCHEMA_JSON, data)))
        assert result["is_valid"] is True
        assert result["validated_data"]["name"] == "Ada"
        assert result["warnings"] == ["Unknown field: extra"]

    def test_bad_inputs(self):
        """Test schema and data parse errors."""
        result = json.loads(asyncio.run(validate_form_data("nope", {})))
        assert result["errors"][0]["field_name"] == "_schema"
        result = json.loads(asyncio.run(validate_form_data(SCHEMA_JSON, "{")))
        assert result["errors"][0]["field_name"] == "_json"
        result = json.loads(asyncio.run(validate_form_data(SCHEMA_JSON, "[1]")))
        assert result["errors"][0]["error_type"] == "parse_error"


class TestGenerateFormCode:
    """Tests for generate_form_code."""

    def test_code(self):
        """Test that the code matches the markup generator."""
        result = json.loads(generate_form_code(SCHEMA_JSON))
        assert '<input type="email" id="email"' in result["code"]

    def test_error(self):
        """Test parse errors."""
        assert "error" in json.loads(generate_form_code("[]"))


class TestMcpTools:
    """Tests for MCP tool definitions and dispatch."""

    def test_tool_definitions(self):
        """Test that every tool is declared with a schema."""
        tools = get_mcp_tools()
        assert [t["name"] for t in tools] == ["preview_form", "validate_form_data", "generate_form_code"]
        for tool in tools:
            assert "schema_json" in tool["inputSchema"]["required"]

    def test_call_tools(self):
        """Test dispatch to each tool."""
        preview = json.loads(asyncio.run(call_mcp_tool("preview_form", {"schema_json": SCHEMA_JSON})))
        assert "html" in preview
        validation = json.loads(asyncio.run(call_mcp_tool(
            "validate_form_data",
            {"schema_json": SCHEMA_JSON, "form_data": {"name": "Ada"}},
        )))
        assert validation["is_valid"] is True
        code = json.loads(asyncio.run(call_mcp_tool("generate_form_code", {"schema_json": SCHEMA_JSON})))
        assert "code" in code

    def test_unknown_tool_and_missing_argument(self):
        """Test that bad calls return an error object."""
        unknown = json.loads(asyncio.run(call_mcp_tool("nope", {})))
        assert unknown["error"] == "Unknown tool: nope"
        missing = json.loads(asyncio.run(call_mcp_tool("preview_form", {})))
        assert missing["error"] == "Missing argument: schema_json"


class TestSseApp:
    """Tests for the SSE transport app."""

    def test_health(self):
        """Test the health endpoint."""
        client = TestClient(create_sse_app(create_mcp_server()))
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["service"] == "form-engine-mcp"
        assert "preview_form" in body["tools"]
