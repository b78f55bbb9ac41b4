# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains the framework-free pieces of the UseGrant tool layer:
# payload schemas, the SDK client contract, error types and configuration.
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports Google ADK, FastMCP, or any orchestration
#   framework. The tools/ layer builds on core/; core/ never looks upward.
# =============================================================================
