from __future__ import annotations

# Tool descriptions used by FastMCP when registering tools. Keep short and clear.
TOOL_DESCRIPTIONS: dict[str, str] = {
    "prepare_parameters": "Convert, default-fill and validate a raw parameter map for a provider. Returns violations instead of failing.",
    "get_parameter_schema": "Return the parameter definitions, type summary and default preset for a provider/capability.",
    "list_presets": "List named parameter presets for a provider/capability, optionally filtered by tag.",
    "compare_parameters": "Diff two parameter maps into added, removed, changed and unchanged keys.",
}


# Concise server instructions for agents: role, workflow, rules, outputs.
SERVER_INSTRUCTIONS: str = (
    "Parameter Engine MCP Server - Agent Instructions.\n"
    "Role: This server normalizes and validates generation parameters for AI providers "
    "(openai, gemini) before a request is sent. It does not call any provider itself.\n\n"
    "Workflow (short):\n"
    "1) Call get_parameter_schema with provider and capability (chat or image) to see the knobs, "
    "their types, bounds and defaults.\n"
    "2) Optionally call list_presets and pick a preset_id.\n"
    "3) Call prepare_parameters with your raw values (text is fine) and the optional preset_id. "
    "Use the returned parameters only when valid is true.\n\n"
    "Hard rules (must follow):\n"
    "- Providers are scoped by capability: 'openai' + 'image' is a different schema from 'openai' + 'chat'.\n"
    "- Unknown keys are dropped from prepared parameters.\n"
    "- Treat violations as blocking and warnings/suggestions as advisory.\n\n"
    "Outputs and failures (summary):\n"
    "- prepare_parameters returns PreparedParameters (valid, parameters, violations, warnings, suggestions).\n"
    "- Lookups for an unknown provider return a structured error with code 'unknown_provider'.\n"
    "- Unexpected faults surface as MCP ToolErrors."
)


__all__ = ["TOOL_DESCRIPTIONS", "SERVER_INSTRUCTIONS"]
