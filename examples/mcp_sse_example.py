#!/usr/bin/env python3
"""
MCP Server SSE Example

Connects to a running form-engine MCP server over SSE, lists its tools,
then previews, validates and exports a small contact form.

Prerequisites:
    1. Start the server:
       python run_mcp_server.py --transport sse --port 8080

    2. Health check:
       curl http://localhost:8080/health

Usage:
    python examples/mcp_sse_example.py
"""

import asyncio
import json
import os
import sys

from mcp import ClientSession
from mcp.client.sse import sse_client

CONTACT_FORM = {
    "formTitle": "Contact Us",
    "fields": [
        {"id": "name", "type": "text", "label": "Name", "required": True},
        {
            "id": "email",
            "type": "email",
            "label": "Email",
            "required": True,
            "validation": {"pattern": "^[^@]+@[^@]+$", "message": "Enter a valid email"},
        },
        {
            "id": "topic",
            "type": "select",
            "label": "Topic",
            "options": [
                {"value": "sales", "label": "Sales"},
                {"value": "support", "label": "Support"},
            ],
        },
    ],
}


def _text(result) -> str:
    return "".join(getattr(block, "text", "") for block in result.content)


async def main():
    """Call every form-engine tool over SSE."""

    mcp_url = os.environ.get("MCP_URL", "http://localhost:8080/sse")
    schema_json = json.dumps(CONTACT_FORM)

    print("=" * 60)
    print("🚀 MCP Server SSE Example")
    print("=" * 60)
    print(f"MCP Server URL: {mcp_url}")
    print()

    try:
        async with sse_client(mcp_url) as (read_stream, write_stream):
            async with ClientSession(read_stream, write_stream) as session:
                await session.initialize()
                print("✅ Connected to MCP server")

                tools = await session.list_tools()
                print(f"\nAvailable tools ({len(tools.tools)}):")
                for tool in tools.tools:
                    print(f"   - {tool.name}")
                print()

                preview = await session.call_tool("preview_form", {"schema_json": schema_json})
                print(f"preview_form: {len(_text(preview))} characters of JSON")

                validation = await session.call_tool(
                    "validate_form_data",
                    {"schema_json": schema_json, "form_data": {"name": "", "email": "not-an-email"}},
                )
                print("\nvalidate_form_data:")
                print(_text(validation))

                code = await session.call_tool("generate_form_code", {"schema_json": schema_json})
                print("\ngenerate_form_code:")
                print(json.loads(_text(code)).get("code", ""))

    except Exception as e:
        print(f"❌ Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
