# =============================================================================
# tools/mcp_server.py  —  FastMCP server publishing the UseGrant tools
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Takes the tool registry (tools/registry.py) and publishes every tool
#   definition over MCP so the ADK agent (or any MCP client) can call it.
#
# HOW IT WORKS (the flow):
#   1. The agent decides it needs something (e.g., the list of tenants)
#   2. It calls a tool by name via MCP (e.g., "listTenants")
#   3. FastMCP routes the call to the wrapper generated below
#   4. The wrapper hands the arguments to ToolDefinition.execute()
#   5. The agent receives the SDK's result (or a short confirmation)
#
# WHY GENERATED WRAPPERS?
#   FastMCP derives a tool's input schema from a Python function signature.
#   Our tools are described by pydantic models instead, so for each model we
#   build a function whose signature lists the model's fields (camelCase
#   wire names, required vs. optional, descriptions).  FastMCP never sees
#   the difference.
#
# RUNNING THIS SERVER:
#   python -m tools.mcp_server      (needs USEGRANT_API_KEY and
#                                    USEGRANT_CLIENT_FACTORY, see core/config.py)
# =============================================================================

import inspect
import json
import logging
import sys
from typing import Annotated, Any, Callable, Mapping

from fastmcp import FastMCP
from pydantic import Field

from core.config import Settings, load_settings, resolve_client_factory
from tools.registry import ToolDefinition, create_tools

logger = logging.getLogger("usegrant.mcp")

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: STDOUT carries the MCP JSON stream, and a stray log
# line there would corrupt the protocol.
#
# ANSI COLOR CODES:
#   - CYAN for incoming requests (tool name + parameters)
#   - GREEN for response JSON
#   - YELLOW for intermediate status/progress messages
# =============================================================================
_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses (JSON output)
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"     # Reset to default terminal color

SERVER_NAME = "usegrant-tools"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: Any) -> Any:
    """Log the tool response as compact JSON in GREEN, then return it."""
    body = json.dumps(result, separators=(",", ":"), default=str)
    logger.info(f"{_GREEN}  ← {tool_name} response: {body}{_RESET}")
    return result


# =============================================================================
# Tool wrappers
# =============================================================================
def _signature_for(definition: ToolDefinition) -> inspect.Signature:
    """Keyword-only signature mirroring the tool's parameter model."""
    parameters = []
    for field_name, info in definition.parameters.model_fields.items():
        annotation = info.annotation
        metadata = list(info.metadata)
        if info.description:
            metadata.append(Field(description=info.description))
        if metadata:
            annotation = Annotated[(annotation, *metadata)]
        parameters.append(
            inspect.Parameter(
                info.alias or field_name,
                inspect.Parameter.KEYWORD_ONLY,
                default=inspect.Parameter.empty if info.is_required() else info.default,
                annotation=annotation,
            )
        )
    return inspect.Signature(parameters)


def as_mcp_function(definition: ToolDefinition) -> Callable[..., Any]:
    """Wrap a ToolDefinition in a coroutine function FastMCP can register."""

    async def call_tool(**arguments: Any) -> Any:
        _log_request(definition.name, **arguments)
        result = await definition.execute(arguments)
        return _log_response(definition.name, result)

    signature = _signature_for(definition)
    call_tool.__signature__ = signature
    call_tool.__annotations__ = {p.name: p.annotation for p in signature.parameters.values()}
    call_tool.__name__ = definition.name
    call_tool.__qualname__ = definition.name
    call_tool.__doc__ = definition.description
    return call_tool


def build_server(tools: Mapping[str, ToolDefinition], name: str = SERVER_NAME) -> FastMCP:
    """Create a FastMCP server exposing every tool in ``tools``."""
    mcp = FastMCP(name)
    for tool_name, definition in tools.items():
        mcp.tool(as_mcp_function(definition), name=tool_name, description=definition.description)
    _log_status(f"Registered {len(tools)} tools on '{name}'")
    return mcp


def create_server(settings: Settings) -> FastMCP:
    """Build the server from settings (API key + client factory path)."""
    factory = resolve_client_factory(settings.client_factory_path)
    return build_server(create_tools(settings.api_key, factory))


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    create_server(settings).run()


# =============================================================================
# Server entry point
# =============================================================================
# The agent starts this module as a subprocess and talks to it over stdio.
# =============================================================================
if __name__ == "__main__":
    main()
