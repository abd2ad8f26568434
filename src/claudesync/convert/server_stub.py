"""Generated Node.js MCP server that serves a converted skill's prompts.

The stub uses the official ``@modelcontextprotocol/sdk`` stdio transport and
answers ``prompts/list`` and ``prompts/get`` from a prompt table embedded as
JSON.
"""

from __future__ import annotations

import json

from claudesync.convert.dxt import DxtPrompt

SERVER_ENTRY_POINT = "server/index.js"

_TEMPLATE = """\
#!/usr/bin/env node
// Auto-generated MCP server for skill: {name}
// Serves the skill's prompts over MCP.

import {{ Server }} from "@modelcontextprotocol/sdk/server/index.js";
import {{ StdioServerTransport }} from "@modelcontextprotocol/sdk/server/stdio.js";

const PROMPTS = {prompts};

const server = new Server(
  {{ name: {name_json}, version: "1.0.0" }},
  {{ capabilities: {{ prompts: {{}} }} }}
);

server.setRequestHandler("prompts/list", async () => ({{
  prompts: PROMPTS.map((p) => ({{
    name: p.name,
    description: p.description,
  }})),
}}));

server.setRequestHandler("prompts/get", async (request) => {{
  const prompt = PROMPTS.find((p) => p.name === request.params.name);
  if (!prompt) {{
    throw new Error(`Prompt not found: ${{request.params.name}}`);
  }}
  return {{
    messages: [{{ role: "user", content: {{ type: "text", text: prompt.text }} }}],
  }};
}});

const transport = new StdioServerTransport();
await server.connect(transport);
"""


def generate_mcp_server(name: str, prompts: list[DxtPrompt]) -> str:
    """Return the JavaScript source of a prompt-serving MCP server."""
    table = [
        {"name": p.name, "description": p.description, "text": p.text or ""}
        for p in prompts
    ]
    return _TEMPLATE.format(
        name=name.replace("\n", " "),
        name_json=json.dumps(name),
        prompts=json.dumps(table, indent=2),
    )
