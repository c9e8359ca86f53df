"""
Tests for Config loading and hierarchical key lookup
"""

import pytest
from pathlib import Path
import sys

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cozy_kitchen.core.config import Config
from cozy_kitchen.core.paths import DEFAULT_PLUGINS_ROOT, get_plugins_root_folder


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer environment variables out of the lookups"""
    for name in ["AzureAd__ClientId", "AZUREAD__CLIENTID", "AzureAd__TenantId", "AZUREAD__TENANTID"]:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def yaml_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "llm_provider: azure_openai\n"
        "model_name: gpt-4o-mini\n"
        "plugins_dir: ./prompts\n"
        "AzureAd:\n"
        "  ClientId: client-123\n"
        "  TenantId: tenant-456\n",
        encoding="utf-8",
    )
    return path


def test_from_yaml_splits_fields_and_sections(yaml_config):
    config = Config.from_yaml(yaml_config)

    assert config.llm_provider == "azure_openai"
    assert config.model_name == "gpt-4o-mini"
    assert config.plugins_dir == Path("./prompts")
    assert config.settings == {"AzureAd": {"ClientId": "client-123", "TenantId": "tenant-456"}}


def test_get_value_walks_sections(yaml_config):
    config = Config.from_yaml(yaml_config)

    assert config.get_value("AzureAd:ClientId") == "client-123"
    assert config.get_value("AzureAd:TenantId") == "tenant-456"


def test_get_value_is_case_insensitive(yaml_config):
    config = Config.from_yaml(yaml_config)

    assert config.get_value("azuread:clientid") == "client-123"


def test_get_value_missing_returns_none(yaml_config):
    config = Config.from_yaml(yaml_config)

    assert config.get_value("AzureAd:Secret") is None
    assert config.get_value("Missing:Key") is None
    # A section is not a value
    assert config.get_value("AzureAd") is None


def test_environment_overrides_yaml(yaml_config, monkeypatch):
    monkeypatch.setenv("AzureAd__ClientId", "from-env")
    config = Config.from_yaml(yaml_config)

    assert config.get_value("AzureAd:ClientId") == "from-env"
    assert config.get_value("AzureAd:TenantId") == "tenant-456"


def test_defaults_without_yaml(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    config = Config()

    assert config.llm_provider == "openai"
    assert config.allow_loops is True
    assert config.api_key == "sk-test"
    assert config.data_dir == config.base_dir / "data"
    assert config.get_value("AzureAd:ClientId") is None


def test_to_yaml_round_trip_keeps_sections(yaml_config, tmp_path):
    config = Config.from_yaml(yaml_config)
    out = tmp_path / "saved.yaml"
    config.to_yaml(out)

    reloaded = Config.from_yaml(out)
    assert reloaded.model_name == "gpt-4o-mini"
    assert reloaded.get_value("AzureAd:TenantId") == "tenant-456"


def test_plugins_root_defaults_to_packaged_prompts():
    assert get_plugins_root_folder() == DEFAULT_PLUGINS_ROOT
    assert (DEFAULT_PLUGINS_ROOT / "ResumeAssistantPlugin").is_dir()
    assert (DEFAULT_PLUGINS_ROOT / "TravelAgentPlugin").is_dir()


def test_plugins_root_follows_config(tmp_path):
    config = Config(plugins_dir=tmp_path)

    assert get_plugins_root_folder(config) == tmp_path
