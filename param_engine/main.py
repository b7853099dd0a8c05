from __future__ import annotations

import argparse
import sys
from functools import lru_cache
from typing import Annotated, Any, NoReturn

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from loguru import logger
from pydantic import Field

from .core.schema_registry import provider_key
from .core.service import ParameterService
from .exceptions import ParameterEngineError
from .providers import create_default_service
from .schema import (
    Error,
    ParameterDiff,
    ParameterSchemaResponse,
    PreparedParameters,
    PresetListResponse,
)
from .settings import get_settings
from .shard import constants as C
from .shard.enums import Capability
from .shard.instructions import SERVER_INSTRUCTIONS, TOOL_DESCRIPTIONS

app = FastMCP("param-engine", instructions=SERVER_INSTRUCTIONS)


@lru_cache
def get_service() -> ParameterService:
    return create_default_service()


def _scoped(provider: str, capability: Capability | None) -> str:
    # Callers may pass an already scoped id ("openai:image") without a capability.
    return provider_key(provider.strip().lower(), capability)


def _unknown_provider(provider: str) -> Error:
    known = ", ".join(sorted(get_service().schemas.list_providers())) or "none"
    return Error(
        code=C.ERROR_CODE_UNKNOWN_PROVIDER,
        message=f"No parameter schema registered for '{provider}'. Known providers: {known}.",
    )


def _handle_error(e: Exception) -> NoReturn:
    """Convert an exception to a ToolError for proper MCP error handling."""
    if isinstance(e, ParameterEngineError):
        raise ToolError(e.user_message)

    logger.error(f"Unexpected error: {type(e).__name__}: {e}")
    raise ToolError("An unexpected error occurred. Please try again.")


@app.tool(
    name="prepare_parameters",
    description=TOOL_DESCRIPTIONS["prepare_parameters"],
    annotations={
        "title": "Prepare Parameters",
        "readOnlyHint": True,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def mcp_prepare_parameters(
    provider: Annotated[str, Field(description="Provider id: 'openai' | 'gemini', or a scoped id such as 'openai:image'.")],
    parameters: Annotated[
        dict[str, Any],
        Field(description="Raw parameter values; textual numbers and booleans are converted."),
    ],
    capability: Annotated[
        Capability | None,
        Field(description="Capability scope: 'chat' | 'image' | 'video'."),
    ] = None,
    preset_id: Annotated[
        str | None,
        Field(description="Optional preset whose values are used as a base under the given parameters."),
    ] = None,
    include_suggestions: Annotated[bool, Field(description="Include advisory suggestions in the result.")] = False,
) -> PreparedParameters:
    """Convert, default-fill and validate a raw parameter map."""
    try:
        service = get_service()
        scoped = _scoped(provider, capability)
        # Without a schema nothing can be validated; never report such a set as valid.
        if not service.definitions(scoped):
            error = _unknown_provider(scoped)
            return PreparedParameters(valid=False, provider=scoped, violations=[error.message], error=error)
        return service.prepare(
            scoped,
            parameters,
            preset_id=preset_id,
            include_suggestions=include_suggestions,
        )
    except Exception as e:
        _handle_error(e)


@app.tool(
    name="get_parameter_schema",
    description=TOOL_DESCRIPTIONS["get_parameter_schema"],
    annotations={
        "title": "Get Parameter Schema",
        "readOnlyHint": True,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def mcp_get_parameter_schema(
    provider: Annotated[str, Field(description="Provider id: 'openai' | 'gemini', or a scoped id.")],
    capability: Annotated[
        Capability | None,
        Field(description="Capability scope: 'chat' | 'image' | 'video'."),
    ] = None,
) -> ParameterSchemaResponse:
    """Return definitions, a type summary and the default preset id."""
    try:
        service = get_service()
        scoped = _scoped(provider, capability)
        definitions = service.definitions(scoped)
        if not definitions:
            return ParameterSchemaResponse(provider=scoped, error=_unknown_provider(scoped))
        default = service.presets.get_default(scoped)
        return ParameterSchemaResponse(
            provider=scoped,
            definitions=list(definitions),
            summary=service.schemas.summary(scoped),
            default_preset_id=default.id if default else None,
        )
    except Exception as e:
        _handle_error(e)


@app.tool(
    name="list_presets",
    description=TOOL_DESCRIPTIONS["list_presets"],
    annotations={
        "title": "List Presets",
        "readOnlyHint": True,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def mcp_list_presets(
    provider: Annotated[str, Field(description="Provider id: 'openai' | 'gemini', or a scoped id.")],
    capability: Annotated[
        Capability | None,
        Field(description="Capability scope: 'chat' | 'image' | 'video'."),
    ] = None,
    tag: Annotated[str | None, Field(description="Optional tag filter, e.g. 'creative'.")] = None,
) -> PresetListResponse:
    """List presets for a provider, optionally filtered by tag."""
    try:
        service = get_service()
        scoped = _scoped(provider, capability)
        if scoped not in service.presets.providers():
            return PresetListResponse(provider=scoped, error=_unknown_provider(scoped))
        presets = service.presets.list_by_tag(scoped, tag) if tag else service.presets.list_by_provider(scoped)
        default = service.presets.get_default(scoped)
        return PresetListResponse(provider=scoped, presets=presets, default_preset_id=default.id if default else None)
    except Exception as e:
        _handle_error(e)


@app.tool(
    name="compare_parameters",
    description=TOOL_DESCRIPTIONS["compare_parameters"],
    annotations={
        "title": "Compare Parameters",
        "readOnlyHint": True,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def mcp_compare_parameters(
    before: Annotated[dict[str, Any], Field(description="Baseline parameter map.")],
    after: Annotated[dict[str, Any], Field(description="Parameter map to compare against the baseline.")],
) -> ParameterDiff:
    """Structural diff of two parameter maps."""
    try:
        return get_service().compare(before, after)
    except Exception as e:
        _handle_error(e)


def main() -> None:
    parser = argparse.ArgumentParser(description="Parameter Engine MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http", "sse", "streamable-http"],
        help="Transport to use (stdio, sse, http, streamable-http). Default: stdio",
    )
    parser.add_argument("--host", help="Host to bind to")
    parser.add_argument("--port", type=int, help="Port to listen on")
    args = parser.parse_args()

    # stdout belongs to the stdio transport; log to stderr only.
    logger.remove()
    logger.add(sys.stderr, level=get_settings().log_level)

    transport = args.transport
    logger.info(f"Starting parameter engine MCP server on {args.host}:{args.port} with {transport} transport")
    get_service()

    # FastMCP's stdio transport does not accept `host`/`port` kwargs.
    http_transports = {"http", "sse", "streamable-http"}
    if transport in http_transports:
        app.run(transport=transport, host=args.host, port=args.port)
    else:
        app.run()


if __name__ == "__main__":
    main()
