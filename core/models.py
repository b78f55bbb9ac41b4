# =============================================================================
# core/models.py  —  Identifier types and payload schemas (the "nouns")
# =============================================================================
#
# These models describe the SHAPE of what the agent may send to UseGrant.
# They carry no behavior.  UseGrant itself owns providers, clients, domains,
# tenants and policies; this layer only carries identifiers and request
# payloads through to the SDK.
#
# WHY PYDANTIC (and not dataclasses)?
#   Tool arguments arrive as untrusted JSON produced by an LLM.  Pydantic
#   gives us structural validation (required fields, types) with error
#   locations we can report back, and a JSON schema the agent can read.
#
# NAMING:
#   Python attributes are snake_case.  The names the agent sees on the wire
#   are camelCase aliases (provider_id → "providerId"), matching UseGrant's
#   own API vocabulary.  Unknown keys are ignored, not rejected.
# =============================================================================

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GrantModel(BaseModel):
    """Base for every schema: camelCase wire names, snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_payload(self, *, exclude: Optional[set[str]] = None) -> dict:
        """Dump as an SDK payload: wire names, unset optionals omitted."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude=exclude)


# -----------------------------------------------------------------------------
# Identifiers — opaque strings.  We never parse or prefix-check them.
# -----------------------------------------------------------------------------
ProviderId = Annotated[str, Field(description="Provider ID")]
ClientId = Annotated[str, Field(description="Client ID")]
DomainId = Annotated[str, Field(description="Domain ID")]
TenantId = Annotated[str, Field(description="Tenant ID")]
TenantProviderId = Annotated[str, Field(description="Tenant provider ID")]
TenantProviderPolicyId = Annotated[str, Field(description="Tenant provider policy ID")]

Name = Annotated[str, Field(min_length=1, description="Display name")]


# -----------------------------------------------------------------------------
# Creation payloads
# -----------------------------------------------------------------------------
class CreateProviderPayload(GrantModel):
    name: Name
    description: Optional[str] = Field(default=None, description="Provider description")


class CreateClientPayload(GrantModel):
    name: Name
    audience: str = Field(description="Audience the client's tokens are issued for")


class AddDomainPayload(GrantModel):
    domain: str = Field(min_length=1, description="Domain name, e.g. example.com")


class CreateTokenPayload(GrantModel):
    expires_in: Optional[int] = Field(
        default=None, gt=0, description="Token lifetime in seconds"
    )
    scope: Optional[str] = Field(default=None, description="Space separated scopes")


class CreateTenantPayload(GrantModel):
    name: Name


class CreateTenantProviderPayload(GrantModel):
    name: Name
    description: Optional[str] = Field(default=None, description="Provider description")


class CreateTenantProviderPolicyPayload(GrantModel):
    name: Name
    client_id: str = Field(description="Client the policy admits tokens from")
    audience: str = Field(description="Audience a token must carry to pass the policy")
    description: Optional[str] = Field(default=None, description="Policy description")
