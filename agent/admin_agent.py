# =============================================================================
# agent/admin_agent.py  —  Google ADK Agent Configuration (UseGrant admin)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Configures and creates the Google ADK agent: the coordinator that takes
#   an administrator's request ("add example.com to provider prv_123 and
#   verify it"), decides which UseGrant tools to call, and reports back.
#
# HOW IT WORKS (simplified):
#
#   ┌──────────────────────────────────────────────────────────────────┐
#   │                       Google ADK Agent                          │
#   │  System prompt ──▶ LLM (via LiteLlm) ──▶ MCP tool connection    │
#   └──────────────────────────────────────────────────────────────────┘
#                                                      │ stdio
#                                                      ▼
#                                          ┌─────────────────────┐
#                                          │  FastMCP Server     │
#                                          │  (tools/mcp_server) │
#                                          └─────────────────────┘
#                                                      │
#                                                      ▼
#                                          ┌─────────────────────┐
#                                          │  UseGrant SDK       │
#                                          │  (client factory)   │
#                                          └─────────────────────┘
#
# MCP CONNECTION:
#   ADK starts the MCP server as a subprocess and talks to it over
#   stdin/stdout.  The subprocess gets this process's environment, so
#   USEGRANT_API_KEY and USEGRANT_CLIENT_FACTORY reach the server.
# =============================================================================

import os
import sys
from typing import Optional

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_admin_prompt
from core.config import Settings, load_settings

AGENT_NAME = "usegrant_admin"


def mcp_server_parameters() -> StdioServerParameters:
    """How ADK should launch the tool server subprocess.

    We run the server module with the current interpreter, from the project
    root, so the subprocess sees the same virtual environment and packages.
    """
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return StdioServerParameters(
        command=sys.executable,
        args=["-m", "tools.mcp_server"],
        cwd=project_root,
        env=dict(os.environ),
    )


def create_agent(settings: Optional[Settings] = None) -> Agent:
    """Create the UseGrant administrator agent.

    Args:
        settings: Loaded settings; read from the environment when omitted.
            Only ``agent_model`` is used here, the rest is consumed by the
            tool server subprocess.

    Returns:
        A configured Google ADK Agent instance.
    """
    settings = settings or load_settings()

    mcp_tools = MCPToolset(connection_params=mcp_server_parameters())

    # LiteLlm reads the provider key (e.g. OPENROUTER_API_KEY) from the
    # environment; switching models is just a different AGENT_MODEL string.
    return Agent(
        name=AGENT_NAME,
        model=LiteLlm(model=settings.agent_model),
        instruction=get_admin_prompt(),
        tools=[mcp_tools],
    )
