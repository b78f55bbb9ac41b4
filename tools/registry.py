# =============================================================================
# tools/registry.py  —  The UseGrant tool registry (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Turns an API key into a dict of tool definitions, one per UseGrant SDK
#   operation.  Each definition bundles:
#     1. a description   → what the LLM reads to decide WHEN to call it
#     2. a pydantic model → what the LLM must send (validated before use)
#     3. an async handler → builds a fresh SDK client, calls ONE method
#
# HOW A CALL FLOWS:
#   execute(arguments, context)
#     → parameters.model_validate(arguments)      (ToolValidationError on failure)
#     → client_factory(api_key, signal=context.abort_signal)
#     → await client.<sdk_method>(<ids in fixed order>, <payload>)
#     → result unchanged  |  "<Entity> <id> deleted"  |  {"isValid": True, "exp": ...}
#
# WHAT THIS LAYER DOES NOT DO:
#   No retries, no timeouts, no caching, no error translation.  Whatever the
#   SDK raises (including on cancellation) reaches the caller as-is.
#   Nothing is kept between calls: every execution builds its own client.
# =============================================================================

import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from core.client import ClientFactory, GrantClient
from core.config import load_settings, resolve_client_factory
from core.errors import ConfigurationError, ToolValidationError
from core.models import (
    AddDomainPayload,
    ClientId,
    CreateClientPayload,
    CreateProviderPayload,
    CreateTenantPayload,
    CreateTenantProviderPayload,
    CreateTenantProviderPolicyPayload,
    CreateTokenPayload,
    DomainId,
    GrantModel,
    ProviderId,
    TenantId,
    TenantProviderId,
    TenantProviderPolicyId,
)


@dataclass(frozen=True)
class ToolContext:
    """Per-call context supplied by the hosting runtime."""

    abort_signal: Optional[asyncio.Event] = None

    @classmethod
    def coerce(cls, context: Any) -> "ToolContext":
        """Accept a ToolContext, None, or a mapping with ``abortSignal``/``abort_signal``."""
        if context is None:
            return cls()
        if isinstance(context, cls):
            return context
        if isinstance(context, Mapping):
            signal = context.get("abortSignal", context.get("abort_signal"))
            return cls(abort_signal=signal)
        raise TypeError(f"Unsupported tool context: {type(context).__name__}")


Handler = Callable[[Any, ToolContext], Awaitable[Any]]


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    parameters: type[BaseModel]
    handler: Handler = field(repr=False)

    async def execute(
        self,
        arguments: Optional[Mapping[str, Any]] = None,
        context: Union[ToolContext, Mapping[str, Any], None] = None,
    ) -> Any:
        """Validate ``arguments`` and run the tool.

        ``context`` may also be a plain mapping such as ``{"abortSignal": event}``.

        Raises:
            ToolValidationError: if the arguments don't fit ``parameters``.
                The SDK is never touched in that case.
            TypeError: if ``context`` is neither a ToolContext nor a mapping.
        """
        ctx = ToolContext.coerce(context)
        params = self.validate(arguments)
        return await self.handler(params, ctx)

    def validate(self, arguments: Optional[Mapping[str, Any]]) -> BaseModel:
        try:
            return self.parameters.model_validate({} if arguments is None else arguments)
        except ValidationError as exc:
            raise ToolValidationError(self.name, exc.errors(include_url=False)) from exc

    def json_schema(self) -> dict:
        """JSON schema of the parameters, using the wire (camelCase) names."""
        return self.parameters.model_json_schema(by_alias=True)


# =============================================================================
# Parameter models
# =============================================================================
# Each tool's parameters are the union of its identifier fields and, for
# create tools, the fields of the matching payload schema.  Identifier fields
# are stripped back out before the payload is handed to the SDK.
# =============================================================================
class NoParams(GrantModel):
    pass


class ProviderRef(GrantModel):
    id: ProviderId


class ProviderScope(GrantModel):
    provider_id: ProviderId


class ClientRef(ProviderScope):
    client_id: ClientId


class DomainRef(ProviderScope):
    domain_id: DomainId


class CreateClientParams(ProviderScope, CreateClientPayload):
    pass


class AddDomainParams(ProviderScope, AddDomainPayload):
    pass


class CreateAccessTokenParams(ClientRef, CreateTokenPayload):
    pass


class TenantRef(GrantModel):
    id: TenantId


class TenantScope(GrantModel):
    tenant_id: TenantId


class CreateTenantProviderParams(TenantScope, CreateTenantProviderPayload):
    pass


class TenantProviderRef(TenantScope):
    provider_id: TenantProviderId


class CreateTenantProviderPolicyParams(TenantProviderRef, CreateTenantProviderPolicyPayload):
    pass


class TenantProviderPolicyRef(TenantProviderRef):
    policy_id: TenantProviderPolicyId


class ValidateAccessTokenParams(TenantScope):
    policy_id: TenantProviderPolicyId
    access_token: str = Field(description="Access token to validate")


# =============================================================================
# Handlers
# =============================================================================
class _GrantTools:
    """Holds the API key and client factory every handler is bound over."""

    def __init__(self, api_key: str, client_factory: ClientFactory):
        self._api_key = api_key
        self._client_factory = client_factory

    def _sdk(self, context: ToolContext) -> GrantClient:
        return self._client_factory(self._api_key, signal=context.abort_signal)

    # --- Providers -----------------------------------------------------------
    async def list_providers(self, params: NoParams, context: ToolContext) -> Any:
        return await self._sdk(context).list_providers()

    async def create_provider(self, params: CreateProviderPayload, context: ToolContext) -> Any:
        return await self._sdk(context).create_provider(params.to_payload())

    async def get_provider(self, params: ProviderRef, context: ToolContext) -> Any:
        return await self._sdk(context).get_provider(params.id)

    async def delete_provider(self, params: ProviderRef, context: ToolContext) -> str:
        await self._sdk(context).delete_provider(params.id)
        return f"Provider {params.id} deleted"

    # --- Clients -------------------------------------------------------------
    async def list_clients(self, params: ProviderScope, context: ToolContext) -> Any:
        return await self._sdk(context).list_clients(params.provider_id)

    async def create_client(self, params: CreateClientParams, context: ToolContext) -> Any:
        payload = params.to_payload(exclude={"provider_id"})
        return await self._sdk(context).create_client(params.provider_id, payload)

    async def get_client(self, params: ClientRef, context: ToolContext) -> Any:
        return await self._sdk(context).get_client(params.provider_id, params.client_id)

    async def delete_client(self, params: ClientRef, context: ToolContext) -> str:
        await self._sdk(context).delete_client(params.provider_id, params.client_id)
        return f"Client {params.client_id} deleted"

    # --- Domains -------------------------------------------------------------
    async def list_domains(self, params: ProviderScope, context: ToolContext) -> Any:
        return await self._sdk(context).list_domains(params.provider_id)

    async def add_domain(self, params: AddDomainParams, context: ToolContext) -> Any:
        return await self._sdk(context).add_domain(params.provider_id, {"domain": params.domain})

    async def get_domain(self, params: DomainRef, context: ToolContext) -> Any:
        return await self._sdk(context).get_domain(params.provider_id, params.domain_id)

    async def delete_domain(self, params: DomainRef, context: ToolContext) -> str:
        await self._sdk(context).delete_domain(params.provider_id, params.domain_id)
        return f"Domain {params.domain_id} deleted"

    async def verify_domain(self, params: DomainRef, context: ToolContext) -> Any:
        return await self._sdk(context).verify_domain(params.provider_id, params.domain_id)

    # --- Tokens --------------------------------------------------------------
    async def create_access_token(
        self, params: CreateAccessTokenParams, context: ToolContext
    ) -> Any:
        payload = params.to_payload(exclude={"provider_id", "client_id"})
        return await self._sdk(context).create_token(params.provider_id, params.client_id, payload)

    async def validate_access_token(
        self, params: ValidateAccessTokenParams, context: ToolContext
    ) -> dict:
        # isValid is always True here: an invalid token surfaces as an SDK error.
        result = await self._sdk(context).validate_token(
            params.tenant_id, params.policy_id, params.access_token
        )
        if isinstance(result, Mapping):
            exp = result.get("exp")
        else:
            exp = getattr(result, "exp", None)
        return {"isValid": True, "exp": exp}

    # --- Tenants -------------------------------------------------------------
    async def list_tenants(self, params: NoParams, context: ToolContext) -> Any:
        return await self._sdk(context).list_tenants()

    async def create_tenant(self, params: CreateTenantPayload, context: ToolContext) -> Any:
        return await self._sdk(context).create_tenant(params.to_payload())

    async def get_tenant(self, params: TenantRef, context: ToolContext) -> Any:
        return await self._sdk(context).get_tenant(params.id)

    async def delete_tenant(self, params: TenantRef, context: ToolContext) -> str:
        await self._sdk(context).delete_tenant(params.id)
        return f"Tenant {params.id} deleted"

    # --- Tenant providers ----------------------------------------------------
    async def list_tenant_providers(self, params: TenantScope, context: ToolContext) -> Any:
        return await self._sdk(context).list_tenant_providers(params.tenant_id)

    async def create_tenant_provider(
        self, params: CreateTenantProviderParams, context: ToolContext
    ) -> Any:
        payload = params.to_payload(exclude={"tenant_id"})
        return await self._sdk(context).create_tenant_provider(params.tenant_id, payload)

    async def get_tenant_provider(self, params: TenantProviderRef, context: ToolContext) -> Any:
        return await self._sdk(context).get_tenant_provider(params.tenant_id, params.provider_id)

    async def delete_tenant_provider(
        self, params: TenantProviderRef, context: ToolContext
    ) -> str:
        await self._sdk(context).delete_tenant_provider(params.tenant_id, params.provider_id)
        return f"Tenant provider {params.provider_id} deleted"

    # --- Tenant provider policies --------------------------------------------
    async def list_tenant_provider_policies(
        self, params: TenantProviderRef, context: ToolContext
    ) -> Any:
        return await self._sdk(context).list_tenant_provider_policies(
            params.tenant_id, params.provider_id
        )

    async def create_tenant_provider_policy(
        self, params: CreateTenantProviderPolicyParams, context: ToolContext
    ) -> Any:
        payload = params.to_payload(exclude={"tenant_id", "provider_id"})
        return await self._sdk(context).create_tenant_provider_policy(
            params.tenant_id, params.provider_id, payload
        )

    async def get_tenant_provider_policy(
        self, params: TenantProviderPolicyRef, context: ToolContext
    ) -> Any:
        return await self._sdk(context).get_tenant_provider_policy(
            params.tenant_id, params.provider_id, params.policy_id
        )

    async def delete_tenant_provider_policy(
        self, params: TenantProviderPolicyRef, context: ToolContext
    ) -> str:
        await self._sdk(context).delete_tenant_provider_policy(
            params.tenant_id, params.provider_id, params.policy_id
        )
        return f"Tenant provider policy {params.policy_id} deleted"


# =============================================================================
# Factory
# =============================================================================
def create_tools(
    api_key: Optional[str],
    client_factory: Optional[ClientFactory] = None,
) -> dict[str, ToolDefinition]:
    """Build every UseGrant tool, bound to ``api_key``.

    Args:
        api_key: UseGrant API key.  Required; checked before anything else.
        client_factory: Builds an SDK client per call.  Defaults to the
            factory named by ``USEGRANT_CLIENT_FACTORY``.  There is no
            Python UseGrant SDK to fall back on, so without either one
            construction fails even when the API key is present.

    Returns:
        Tool name → ToolDefinition.  No network calls happen here.

    Raises:
        ConfigurationError: if the API key is missing (checked first), or
            no client factory was passed and USEGRANT_CLIENT_FACTORY is
            unset or can't be imported.
    """
    if not api_key:
        raise ConfigurationError("Missing api key for UseGrant SDK")
    if client_factory is None:
        client_factory = resolve_client_factory(load_settings().client_factory_path)

    t = _GrantTools(api_key, client_factory)
    definitions = [
        ToolDefinition("listProviders", "List all providers", NoParams, t.list_providers),
        ToolDefinition("createProvider", "Create a new provider", CreateProviderPayload, t.create_provider),
        ToolDefinition("getProvider", "Get a provider by ID", ProviderRef, t.get_provider),
        ToolDefinition("deleteProvider", "Delete a provider", ProviderRef, t.delete_provider),
        ToolDefinition("listClients", "List all clients", ProviderScope, t.list_clients),
        ToolDefinition(
            "createClient", "Create a new client for a provider", CreateClientParams, t.create_client
        ),
        ToolDefinition(
            "getClient", "Get client details by provider and client ID", ClientRef, t.get_client
        ),
        ToolDefinition("deleteClient", "Delete a client from a provider", ClientRef, t.delete_client),
        ToolDefinition(
            "listDomains", "List all domains for a provider", ProviderScope, t.list_domains
        ),
        ToolDefinition("addDomain", "Add a new domain for a provider", AddDomainParams, t.add_domain),
        ToolDefinition(
            "getDomain", "Get a domain by provider and domain ID", DomainRef, t.get_domain
        ),
        ToolDefinition(
            "deleteDomain", "Delete a domain by provider and domain ID", DomainRef, t.delete_domain
        ),
        ToolDefinition(
            "verifyDomain", "Verify a domain by provider and domain ID", DomainRef, t.verify_domain
        ),
        ToolDefinition(
            "createAccessToken",
            "Create a new access token for a client",
            CreateAccessTokenParams,
            t.create_access_token,
        ),
        ToolDefinition("listTenants", "List all tenants", NoParams, t.list_tenants),
        ToolDefinition("createTenant", "Create a new tenant", CreateTenantPayload, t.create_tenant),
        ToolDefinition("getTenant", "Get a tenant by ID", TenantRef, t.get_tenant),
        ToolDefinition("deleteTenant", "Delete a tenant", TenantRef, t.delete_tenant),
        ToolDefinition(
            "listTenantProviders",
            "List all providers for a tenant",
            TenantScope,
            t.list_tenant_providers,
        ),
        ToolDefinition(
            "createTenantProvider",
            "Create a new provider for a tenant",
            CreateTenantProviderParams,
            t.create_tenant_provider,
        ),
        ToolDefinition(
            "getTenantProvider", "Get a provider for a tenant", TenantProviderRef, t.get_tenant_provider
        ),
        ToolDefinition(
            "deleteTenantProvider",
            "Delete a provider for a tenant",
            TenantProviderRef,
            t.delete_tenant_provider,
        ),
        ToolDefinition(
            "listTenantProviderPolicies",
            "List all policies for a tenant provider",
            TenantProviderRef,
            t.list_tenant_provider_policies,
        ),
        ToolDefinition(
            "createTenantProviderPolicy",
            "Create a new policy for a tenant provider",
            CreateTenantProviderPolicyParams,
            t.create_tenant_provider_policy,
        ),
        ToolDefinition(
            "getTenantProviderPolicy",
            "Get a policy for a tenant provider",
            TenantProviderPolicyRef,
            t.get_tenant_provider_policy,
        ),
        ToolDefinition(
            "deleteTenantProviderPolicy",
            "Delete a policy for a tenant provider",
            TenantProviderPolicyRef,
            t.delete_tenant_provider_policy,
        ),
        ToolDefinition(
            "validateAccessToken",
            "Validate an access token",
            ValidateAccessTokenParams,
            t.validate_access_token,
        ),
    ]
    return {definition.name: definition for definition in definitions}
