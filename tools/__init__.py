# =============================================================================
# tools/__init__.py
# =============================================================================
# This package turns UseGrant SDK operations into agent tools.
#
#   registry.py    create_tools(api_key) → {tool name: ToolDefinition}
#   mcp_server.py  publishes those definitions over MCP with FastMCP
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT talk to the network themselves (the SDK does)
#   - They do NOT retry, cache or translate SDK errors
#   - They do NOT know about Google ADK
#
# TOOL CONTRACT QUALITY:
#   Each tool has a clear camelCase name (e.g. "listTenantProviders"), a
#   one-line description the LLM reads, and a typed parameter model so the
#   LLM knows exactly WHAT to pass.
# =============================================================================
