# =============================================================================
# core/errors.py  —  Error types raised by the tool layer
# =============================================================================
#
# Only two kinds of failure originate here:
#   - ConfigurationError: the registry cannot be built (no API key, no client
#     factory).  Raised synchronously, before any tool exists.
#   - ToolValidationError: the agent sent arguments that don't match a tool's
#     parameter schema.  Raised before the SDK client is even constructed.
#
# Anything the SDK raises (network failures, not-found, cancellation) is NOT
# wrapped.  It reaches the caller with its original type.
# =============================================================================

from typing import Any, Optional


class GrantToolError(Exception):
    """Base class for errors raised by the UseGrant tool layer itself."""


class ConfigurationError(GrantToolError):
    """The tool registry is missing something it needs to be built."""


class ToolValidationError(GrantToolError, ValueError):
    """Tool arguments failed the tool's parameter schema.

    Attributes:
        tool: Name of the tool that rejected the input.
        fields: Wire names of the offending fields (e.g. ["providerId"]).
        errors: The raw pydantic error list, for callers that want detail.
    """

    def __init__(self, tool: str, errors: list[dict[str, Any]]):
        self.tool = tool
        self.errors = errors
        self.fields = _field_names(errors)
        details = "; ".join(
            f"{_location(err) or '<input>'}: {err.get('msg', 'invalid')}" for err in errors
        )
        super().__init__(f"Invalid input for {tool}: {details}")


def _location(err: dict[str, Any]) -> Optional[str]:
    loc = err.get("loc") or ()
    return ".".join(str(part) for part in loc) or None


def _field_names(errors: list[dict[str, Any]]) -> list[str]:
    names: list[str] = []
    for err in errors:
        loc = err.get("loc") or ()
        if loc and str(loc[0]) not in names:
            names.append(str(loc[0]))
    return names
