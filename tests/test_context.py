"""
Tests for kernel construction, plugin registration, HTTP client factory and Graph client wiring
"""

import pytest
from pathlib import Path
from unittest.mock import MagicMock
import sys

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from semantic_kernel import Kernel

from cozy_kitchen.core import graph_client
from cozy_kitchen.core.config import Config
from cozy_kitchen.core.context import SERVICE_ID, PlannerContext, build_kernel
from cozy_kitchen.core.exceptions import ConfigurationError
from cozy_kitchen.core.http_client import HttpClientFactory
from cozy_kitchen.plugins import MyIpAddressPlugin


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ["AzureAd__ClientId", "AZUREAD__CLIENTID", "AzureAd__TenantId", "AZUREAD__TENANTID"]:
        monkeypatch.delenv(name, raising=False)


def test_build_kernel_with_openai_service():
    kernel = build_kernel(Config(llm_provider="openai", api_key="sk-test", model_name="gpt-4o"))

    assert kernel.get_service(SERVICE_ID) is not None


def test_build_kernel_rejects_unknown_provider():
    with pytest.raises(ConfigurationError, match="Unsupported llm_provider"):
        build_kernel(Config(llm_provider="carrier-pigeon", api_key="x"))


def test_context_imports_packaged_prompt_plugins():
    context = PlannerContext.create(Config(), kernel=Kernel())

    context.import_prompt_plugin("ResumeAssistantPlugin")
    context.import_prompt_plugin("TravelAgentPlugin")

    assert set(context.kernel.plugins["ResumeAssistantPlugin"].functions) == {"ResumeSummary", "CoverLetter"}
    assert set(context.kernel.plugins["TravelAgentPlugin"].functions) == {"SuggestDestinations", "ItineraryPlanner"}


def test_context_missing_prompt_plugin_fails(tmp_path):
    context = PlannerContext.create(Config(plugins_dir=tmp_path), kernel=Kernel())

    with pytest.raises(Exception):
        context.import_prompt_plugin("ResumeAssistantPlugin")


def test_context_registers_native_plugin_under_class_name():
    context = PlannerContext.create(Config(), kernel=Kernel())

    context.add_native_plugin(MyIpAddressPlugin(MagicMock()))

    functions = context.kernel.plugins["MyIpAddressPlugin"].functions
    assert set(functions) == {"GetMyIpAddress", "GetIpCountry"}


def test_context_registers_native_plugin_under_given_name():
    context = PlannerContext.create(Config(), kernel=Kernel())

    context.add_native_plugin(MyIpAddressPlugin(MagicMock()), "NetworkPlugin")

    assert "NetworkPlugin" in context.kernel.plugins


@pytest.mark.asyncio
async def test_http_client_factory_closes_its_clients():
    factory = HttpClientFactory()
    first = factory.create_client()
    second = factory.create_client()

    assert first is not second
    await factory.close()

    assert first.closed and second.closed


def test_graph_client_uses_interactive_browser_credential(monkeypatch):
    credential_cls = MagicMock(name="InteractiveBrowserCredential")
    client_cls = MagicMock(name="GraphServiceClient")
    monkeypatch.setattr(graph_client, "InteractiveBrowserCredential", credential_cls)
    monkeypatch.setattr(graph_client, "GraphServiceClient", client_cls)
    config = Config(settings={"AzureAd": {"ClientId": "client-1", "TenantId": "tenant-1"}})

    client = graph_client.get_graph_service_client(config)

    credential_cls.assert_called_once_with(
        tenant_id="tenant-1", client_id="client-1", redirect_uri="http://localhost"
    )
    client_cls.assert_called_once_with(credentials=credential_cls.return_value, scopes=["User.Read"])
    assert client is client_cls.return_value


@pytest.mark.parametrize("settings, missing", [
    ({}, "AzureAd:ClientId"),
    ({"AzureAd": {"ClientId": "client-1"}}, "AzureAd:TenantId"),
])
def test_graph_client_requires_azure_ad_settings(monkeypatch, settings, missing):
    monkeypatch.setattr(graph_client, "InteractiveBrowserCredential", MagicMock())
    monkeypatch.setattr(graph_client, "GraphServiceClient", MagicMock())

    with pytest.raises(ConfigurationError, match=missing):
        graph_client.get_graph_service_client(Config(settings=settings))
