"""
Tests for tools.registry.

Tests cover:
- create_tools construction (tool set, API key check, default factory)
- Pass-through of SDK results with fixed argument order
- Delete confirmations and access token validation reshaping
- Validation failures that never reach the SDK
"""

from types import SimpleNamespace

import pytest

from core.config import Settings
from core.errors import ConfigurationError, ToolValidationError
from tools import registry
from tools.registry import ToolContext, create_tools

EXPECTED_TOOLS = {
    "listProviders",
    "createProvider",
    "getProvider",
    "deleteProvider",
    "listClients",
    "createClient",
    "getClient",
    "deleteClient",
    "listDomains",
    "addDomain",
    "getDomain",
    "deleteDomain",
    "verifyDomain",
    "createAccessToken",
    "listTenants",
    "createTenant",
    "getTenant",
    "deleteTenant",
    "listTenantProviders",
    "createTenantProvider",
    "getTenantProvider",
    "deleteTenantProvider",
    "listTenantProviderPolicies",
    "createTenantProviderPolicy",
    "getTenantProviderPolicy",
    "deleteTenantProviderPolicy",
    "validateAccessToken",
}


class TestCreateTools:
    def test_exposes_exactly_the_usegrant_tools(self, tools):
        assert set(tools) == EXPECTED_TOOLS

    def test_every_tool_has_description_and_schema(self, tools):
        for name, definition in tools.items():
            assert definition.name == name
            assert definition.description
            assert definition.json_schema()["type"] == "object"

    def test_construction_makes_no_sdk_calls(self, fake_sdk):
        create_tools("key1", fake_sdk)
        assert fake_sdk.clients == []
        assert fake_sdk.calls == []

    @pytest.mark.parametrize("api_key", ["", None])
    def test_missing_api_key_fails_immediately(self, fake_sdk, api_key):
        with pytest.raises(ConfigurationError, match="Missing api key"):
            create_tools(api_key, fake_sdk)
        assert fake_sdk.clients == []

    def test_missing_api_key_checked_before_factory_lookup(self, monkeypatch):
        def fail():
            raise AssertionError("settings should not be read")

        monkeypatch.setattr(registry, "load_settings", fail)
        with pytest.raises(ConfigurationError, match="Missing api key"):
            create_tools("")

    def test_default_factory_from_settings(self, monkeypatch):
        monkeypatch.setattr(
            registry,
            "load_settings",
            lambda: Settings(client_factory_path="unittest.mock:MagicMock"),
        )
        assert set(create_tools("key1")) == EXPECTED_TOOLS

    def test_no_factory_configured(self, monkeypatch):
        monkeypatch.setattr(registry, "load_settings", lambda: Settings())
        with pytest.raises(ConfigurationError, match="USEGRANT_CLIENT_FACTORY"):
            create_tools("key1")


# (tool, arguments, SDK method, positional args the SDK must receive)
PASS_THROUGH_CASES = [
    ("listProviders", {}, "list_providers", ()),
    (
        "createProvider",
        {"name": "Acme", "description": "Main"},
        "create_provider",
        ({"name": "Acme", "description": "Main"},),
    ),
    ("getProvider", {"id": "p_1"}, "get_provider", ("p_1",)),
    ("listClients", {"providerId": "p_1"}, "list_clients", ("p_1",)),
    (
        "createClient",
        {"providerId": "p_1", "name": "web", "audience": "https://api.acme.dev"},
        "create_client",
        ("p_1", {"name": "web", "audience": "https://api.acme.dev"}),
    ),
    ("getClient", {"providerId": "p_1", "clientId": "c_1"}, "get_client", ("p_1", "c_1")),
    ("listDomains", {"providerId": "p_1"}, "list_domains", ("p_1",)),
    (
        "addDomain",
        {"providerId": "p_1", "domain": "acme.dev"},
        "add_domain",
        ("p_1", {"domain": "acme.dev"}),
    ),
    ("getDomain", {"providerId": "p_1", "domainId": "d_1"}, "get_domain", ("p_1", "d_1")),
    ("verifyDomain", {"providerId": "p_1", "domainId": "d_1"}, "verify_domain", ("p_1", "d_1")),
    (
        "createAccessToken",
        {"providerId": "p_1", "clientId": "c_1", "expiresIn": 3600},
        "create_token",
        ("p_1", "c_1", {"expiresIn": 3600}),
    ),
    ("listTenants", {}, "list_tenants", ()),
    ("createTenant", {"name": "Globex"}, "create_tenant", ({"name": "Globex"},)),
    ("getTenant", {"id": "t_1"}, "get_tenant", ("t_1",)),
    ("listTenantProviders", {"tenantId": "t_1"}, "list_tenant_providers", ("t_1",)),
    (
        "createTenantProvider",
        {"tenantId": "t_1", "name": "SSO"},
        "create_tenant_provider",
        ("t_1", {"name": "SSO"}),
    ),
    (
        "getTenantProvider",
        {"tenantId": "t_1", "providerId": "tp_1"},
        "get_tenant_provider",
        ("t_1", "tp_1"),
    ),
    (
        "listTenantProviderPolicies",
        {"tenantId": "t_1", "providerId": "tp_1"},
        "list_tenant_provider_policies",
        ("t_1", "tp_1"),
    ),
    (
        "createTenantProviderPolicy",
        {
            "tenantId": "t_1",
            "providerId": "tp_1",
            "name": "api",
            "clientId": "c_1",
            "audience": "https://api.acme.dev",
        },
        "create_tenant_provider_policy",
        ("t_1", "tp_1", {"name": "api", "clientId": "c_1", "audience": "https://api.acme.dev"}),
    ),
    (
        "getTenantProviderPolicy",
        {"tenantId": "t_1", "providerId": "tp_1", "policyId": "pol_1"},
        "get_tenant_provider_policy",
        ("t_1", "tp_1", "pol_1"),
    ),
]


class TestPassThrough:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("tool, arguments, method, expected_args", PASS_THROUGH_CASES)
    async def test_returns_sdk_result_unchanged(
        self, tools, fake_sdk, tool, arguments, method, expected_args
    ):
        sentinel = object()
        fake_sdk.responses[method] = sentinel

        result = await tools[tool].execute(arguments, ToolContext())

        assert result is sentinel
        assert fake_sdk.calls == [(method, expected_args)]

    @pytest.mark.asyncio
    async def test_client_bound_to_api_key(self, tools, fake_sdk):
        await tools["listTenants"].execute({})
        assert [client.api_key for client in fake_sdk.clients] == ["key1"]

    @pytest.mark.asyncio
    async def test_fresh_client_per_call(self, tools, fake_sdk):
        await tools["getTenant"].execute({"id": "t_1"})
        await tools["getTenant"].execute({"id": "t_1"})
        assert len(fake_sdk.clients) == 2
        assert fake_sdk.clients[0] is not fake_sdk.clients[1]

    @pytest.mark.asyncio
    async def test_unknown_fields_are_dropped_from_payload(self, tools, fake_sdk):
        await tools["createTenant"].execute({"name": "Globex", "color": "red"})
        assert fake_sdk.calls == [("create_tenant", ({"name": "Globex"},))]

    @pytest.mark.asyncio
    async def test_snake_case_names_accepted(self, tools, fake_sdk):
        await tools["getClient"].execute({"provider_id": "p_1", "client_id": "c_1"})
        assert fake_sdk.calls == [("get_client", ("p_1", "c_1"))]

    @pytest.mark.asyncio
    async def test_sdk_errors_propagate_unchanged(self, tools, fake_sdk):
        error = LookupError("provider not found")
        fake_sdk.responses["get_provider"] = error

        with pytest.raises(LookupError) as exc_info:
            await tools["getProvider"].execute({"id": "p_404"})
        assert exc_info.value is error


class TestDeleteTools:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "tool, arguments, method, expected_args, message",
        [
            ("deleteProvider", {"id": "p_1"}, "delete_provider", ("p_1",), "Provider p_1 deleted"),
            (
                "deleteClient",
                {"providerId": "p_1", "clientId": "c_1"},
                "delete_client",
                ("p_1", "c_1"),
                "Client c_1 deleted",
            ),
            (
                "deleteDomain",
                {"providerId": "p_1", "domainId": "d_1"},
                "delete_domain",
                ("p_1", "d_1"),
                "Domain d_1 deleted",
            ),
            ("deleteTenant", {"id": "t_1"}, "delete_tenant", ("t_1",), "Tenant t_1 deleted"),
            (
                "deleteTenantProvider",
                {"tenantId": "t_1", "providerId": "tp_1"},
                "delete_tenant_provider",
                ("t_1", "tp_1"),
                "Tenant provider tp_1 deleted",
            ),
            (
                "deleteTenantProviderPolicy",
                {"tenantId": "t_1", "providerId": "tp_1", "policyId": "pol_1"},
                "delete_tenant_provider_policy",
                ("t_1", "tp_1", "pol_1"),
                "Tenant provider policy pol_1 deleted",
            ),
        ],
    )
    async def test_returns_confirmation(
        self, tools, fake_sdk, tool, arguments, method, expected_args, message
    ):
        fake_sdk.responses[method] = {"ignored": True}

        result = await tools[tool].execute(arguments, ToolContext())

        assert result == message
        assert fake_sdk.calls == [(method, expected_args)]

    @pytest.mark.asyncio
    async def test_delete_provider_scenario(self, fake_sdk):
        result = await create_tools("key1", fake_sdk)["deleteProvider"].execute({"id": "p_1"})
        assert result == "Provider p_1 deleted"


class TestValidateAccessToken:
    @pytest.mark.asyncio
    async def test_keeps_only_exp(self, tools, fake_sdk):
        fake_sdk.responses["validate_token"] = {"exp": 1700000000, "scope": "x"}

        result = await tools["validateAccessToken"].execute(
            {"tenantId": "t1", "policyId": "pol1", "accessToken": "tok"}, ToolContext()
        )

        assert result == {"isValid": True, "exp": 1700000000}
        assert fake_sdk.calls == [("validate_token", ("t1", "pol1", "tok"))]

    @pytest.mark.asyncio
    async def test_reads_exp_from_object_result(self, tools, fake_sdk):
        fake_sdk.responses["validate_token"] = SimpleNamespace(exp=5, scope="x")

        result = await tools["validateAccessToken"].execute(
            {"tenantId": "t1", "policyId": "pol1", "accessToken": "tok"}
        )

        assert result == {"isValid": True, "exp": 5}

    @pytest.mark.asyncio
    async def test_always_reports_valid_on_success(self, tools, fake_sdk):
        fake_sdk.responses["validate_token"] = {"exp": 1, "valid": False}

        result = await tools["validateAccessToken"].execute(
            {"tenantId": "t1", "policyId": "pol1", "accessToken": "tok"}
        )

        assert result["isValid"] is True

    @pytest.mark.asyncio
    async def test_rejected_token_raises_sdk_error(self, tools, fake_sdk):
        fake_sdk.responses["validate_token"] = PermissionError("token expired")

        with pytest.raises(PermissionError, match="token expired"):
            await tools["validateAccessToken"].execute(
                {"tenantId": "t1", "policyId": "pol1", "accessToken": "tok"}
            )


# One schema-valid argument set per tool, with every required field present.
VALID_ARGUMENTS = {tool: arguments for tool, arguments, _, _ in PASS_THROUGH_CASES}
VALID_ARGUMENTS.update(
    {
        "deleteProvider": {"id": "p_1"},
        "deleteClient": {"providerId": "p_1", "clientId": "c_1"},
        "deleteDomain": {"providerId": "p_1", "domainId": "d_1"},
        "deleteTenant": {"id": "t_1"},
        "deleteTenantProvider": {"tenantId": "t_1", "providerId": "tp_1"},
        "deleteTenantProviderPolicy": {"tenantId": "t_1", "providerId": "tp_1", "policyId": "pol_1"},
        "validateAccessToken": {"tenantId": "t1", "policyId": "pol1", "accessToken": "tok"},
    }
)


def _required_field_cases():
    """(tool, wire name) for every required field of every registered tool."""
    definitions = create_tools("key1", lambda api_key, *, signal=None: None)
    cases = []
    for name, definition in sorted(definitions.items()):
        for field_name, info in definition.parameters.model_fields.items():
            if info.is_required():
                cases.append((name, info.alias or field_name))
    return cases


REQUIRED_FIELD_CASES = _required_field_cases()


class TestValidation:
    def test_valid_arguments_cover_every_tool(self, tools):
        assert set(VALID_ARGUMENTS) == EXPECTED_TOOLS
        for name, arguments in VALID_ARGUMENTS.items():
            tools[name].validate(arguments)

    def test_every_tool_with_inputs_has_required_fields(self):
        tools_with_required = {tool for tool, _ in REQUIRED_FIELD_CASES}
        assert tools_with_required == EXPECTED_TOOLS - {"listProviders", "listTenants"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tool, missing", REQUIRED_FIELD_CASES)
    async def test_missing_field_never_reaches_sdk(self, tools, fake_sdk, tool, missing):
        arguments = dict(VALID_ARGUMENTS[tool])
        del arguments[missing]

        with pytest.raises(ToolValidationError) as exc_info:
            await tools[tool].execute(arguments, ToolContext())

        assert exc_info.value.tool == tool
        assert missing in exc_info.value.fields
        assert fake_sdk.clients == []
        assert fake_sdk.calls == []

    @pytest.mark.asyncio
    async def test_non_string_identifier_rejected(self, tools, fake_sdk):
        with pytest.raises(ToolValidationError) as exc_info:
            await tools["getTenant"].execute({"id": 42})

        assert exc_info.value.fields == ["id"]
        assert fake_sdk.calls == []

    @pytest.mark.asyncio
    async def test_error_message_names_tool_and_field(self, tools):
        with pytest.raises(ToolValidationError, match=r"Invalid input for getClient: .*clientId"):
            await tools["getClient"].execute({"providerId": "p_1"})

    @pytest.mark.asyncio
    async def test_validation_error_is_value_error(self, tools):
        with pytest.raises(ValueError):
            await tools["createAccessToken"].execute(
                {"providerId": "p_1", "clientId": "c_1", "expiresIn": 0}
            )
