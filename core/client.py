# =============================================================================
# core/client.py  —  The UseGrant SDK contract
# =============================================================================
#
# The SDK is an external collaborator: authentication, transport, pagination
# and error semantics all live there.  This module only states the surface
# the tools call, so the registry can be typed against it and tests can
# supply a fake.
#
# A client is built per tool call:
#
#     client = factory(api_key, signal=abort_signal)
#
# The signal is handed over untouched.  If the caller sets it while a call
# is in flight, the SDK aborts and raises whatever it raises for that.
# =============================================================================

import asyncio
from typing import Any, Optional, Protocol


class GrantClient(Protocol):
    """Async UseGrant SDK client, bound to one API key and one abort signal."""

    # --- Providers ---
    async def list_providers(self) -> Any: ...
    async def create_provider(self, payload: dict) -> Any: ...
    async def get_provider(self, provider_id: str) -> Any: ...
    async def delete_provider(self, provider_id: str) -> Any: ...

    # --- Clients ---
    async def list_clients(self, provider_id: str) -> Any: ...
    async def create_client(self, provider_id: str, payload: dict) -> Any: ...
    async def get_client(self, provider_id: str, client_id: str) -> Any: ...
    async def delete_client(self, provider_id: str, client_id: str) -> Any: ...

    # --- Domains ---
    async def list_domains(self, provider_id: str) -> Any: ...
    async def add_domain(self, provider_id: str, payload: dict) -> Any: ...
    async def get_domain(self, provider_id: str, domain_id: str) -> Any: ...
    async def delete_domain(self, provider_id: str, domain_id: str) -> Any: ...
    async def verify_domain(self, provider_id: str, domain_id: str) -> Any: ...

    # --- Tokens ---
    async def create_token(self, provider_id: str, client_id: str, payload: dict) -> Any: ...
    # Returns a mapping or an object; either way it must carry ``exp``.
    async def validate_token(
        self, tenant_id: str, policy_id: str, access_token: str
    ) -> Any: ...

    # --- Tenants ---
    async def list_tenants(self) -> Any: ...
    async def create_tenant(self, payload: dict) -> Any: ...
    async def get_tenant(self, tenant_id: str) -> Any: ...
    async def delete_tenant(self, tenant_id: str) -> Any: ...

    # --- Tenant providers ---
    async def list_tenant_providers(self, tenant_id: str) -> Any: ...
    async def create_tenant_provider(self, tenant_id: str, payload: dict) -> Any: ...
    async def get_tenant_provider(self, tenant_id: str, provider_id: str) -> Any: ...
    async def delete_tenant_provider(self, tenant_id: str, provider_id: str) -> Any: ...

    # --- Tenant provider policies ---
    async def list_tenant_provider_policies(self, tenant_id: str, provider_id: str) -> Any: ...
    async def create_tenant_provider_policy(
        self, tenant_id: str, provider_id: str, payload: dict
    ) -> Any: ...
    async def get_tenant_provider_policy(
        self, tenant_id: str, provider_id: str, policy_id: str
    ) -> Any: ...
    async def delete_tenant_provider_policy(
        self, tenant_id: str, provider_id: str, policy_id: str
    ) -> Any: ...


class ClientFactory(Protocol):
    """Builds a GrantClient for one call."""

    def __call__(
        self, api_key: str, *, signal: Optional[asyncio.Event] = None
    ) -> GrantClient: ...
