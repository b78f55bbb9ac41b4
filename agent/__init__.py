# =============================================================================
# agent/__init__.py
# =============================================================================
# This package contains the Google ADK agent configuration.
#
# ARCHITECTURAL ROLE:
#   The agent/ layer is the coordinator.  It:
#     1. Receives the administrator's request
#     2. Works out which UseGrant objects are involved
#     3. Calls tools (via MCP) to read or change them
#     4. Reports what it did, with IDs
#
# WHAT THE AGENT IS NOT:
#   - It is NOT the SDK (that's an external collaborator, see core/client.py)
#   - It is NOT the tool definitions (that's in tools/)
# =============================================================================
