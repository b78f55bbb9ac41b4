# =============================================================================
# core/config.py  —  Environment-driven settings
# =============================================================================
#
# Settings come from the process environment, optionally seeded from a .env
# file in the working directory (python-dotenv).  The MCP server and the
# agent read them; the tool registry itself only needs an API key and a
# client factory, which can also be passed in directly.
#
#   USEGRANT_API_KEY          API key handed to every SDK client
#   USEGRANT_CLIENT_FACTORY   "module:attribute" of the SDK client factory
#   AGENT_MODEL               LiteLlm model string for the admin agent
#   LOG_LEVEL                 Logging level for the MCP server (stderr)
# =============================================================================

import importlib
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from core.client import ClientFactory
from core.errors import ConfigurationError

DEFAULT_AGENT_MODEL = "openrouter/openai/gpt-4o"


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str] = None
    client_factory_path: Optional[str] = None
    agent_model: str = DEFAULT_AGENT_MODEL
    log_level: str = "INFO"


def load_settings(*, dotenv: bool = True) -> Settings:
    """Read settings from the environment (and .env unless told not to)."""
    if dotenv:
        load_dotenv(find_dotenv(usecwd=True))
    return Settings(
        api_key=os.getenv("USEGRANT_API_KEY") or None,
        client_factory_path=os.getenv("USEGRANT_CLIENT_FACTORY") or None,
        agent_model=os.getenv("AGENT_MODEL") or DEFAULT_AGENT_MODEL,
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )


def resolve_client_factory(path: Optional[str]) -> ClientFactory:
    """Import a client factory from a "module:attribute" path.

    Raises:
        ConfigurationError: if no path is given, it is malformed, or the
            target can't be imported or isn't callable.
    """
    if not path:
        raise ConfigurationError(
            "No UseGrant client factory configured; set USEGRANT_CLIENT_FACTORY "
            "to 'module:attribute' or pass client_factory explicitly"
        )

    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigurationError(
            f"Invalid client factory path {path!r}; expected 'module:attribute'"
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError(f"Cannot import client factory module {module_name!r}") from exc

    target = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise ConfigurationError(f"{module_name!r} has no attribute {attr!r}") from exc

    if not callable(target):
        raise ConfigurationError(f"Client factory {path!r} is not callable")
    return target
