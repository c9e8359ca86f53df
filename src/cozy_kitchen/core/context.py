import logging
from dataclasses import dataclass
from typing import Any, Optional

from openai import AsyncOpenAI
from semantic_kernel import Kernel
from semantic_kernel.connectors.ai.open_ai import AzureChatCompletion, OpenAIChatCompletion

from .config import Config
from .exceptions import ConfigurationError
from .http_client import HttpClientFactory
from .paths import get_plugins_root_folder

logger = logging.getLogger(__name__)

SERVICE_ID = "chat"


def build_kernel(config: Config) -> Kernel:
    """Create a kernel with the chat completion service named in the config"""
    kernel = Kernel()

    if config.llm_provider == "openai":
        async_client = None
        if config.openai_base_url:
            async_client = AsyncOpenAI(api_key=config.api_key, base_url=config.openai_base_url)
        service = OpenAIChatCompletion(
            service_id=SERVICE_ID,
            ai_model_id=config.model_name,
            api_key=config.api_key,
            async_client=async_client,
        )
    elif config.llm_provider == "azure_openai":
        service = AzureChatCompletion(
            service_id=SERVICE_ID,
            deployment_name=config.azure_openai_deployment or config.model_name,
            endpoint=config.azure_openai_endpoint,
            api_key=config.api_key,
            api_version=config.azure_openai_api_version,
        )
    else:
        raise ConfigurationError(f"Unsupported llm_provider: {config.llm_provider}")

    kernel.add_service(service)
    logger.info(f"Kernel created with {config.llm_provider} model {config.model_name}")
    return kernel


@dataclass
class PlannerContext:
    """Objects shared by the hosted service, created once at startup.

    All plugin registration goes through this context so the kernel has a
    single owner.
    """

    config: Config
    kernel: Kernel
    http_client_factory: HttpClientFactory

    @classmethod
    def create(cls, config: Config, kernel: Optional[Kernel] = None) -> "PlannerContext":
        return cls(
            config=config,
            kernel=kernel if kernel is not None else build_kernel(config),
            http_client_factory=HttpClientFactory(),
        )

    def import_prompt_plugin(self, plugin_name: str):
        """Load a prompt-directory plugin from the plugins root folder"""
        root = get_plugins_root_folder(self.config)
        plugin = self.kernel.add_plugin(parent_directory=str(root), plugin_name=plugin_name)
        logger.info(f"Imported prompt plugin {plugin_name} from {root}")
        return plugin

    def add_native_plugin(self, plugin: Any, plugin_name: Optional[str] = None):
        """Register a code-defined plugin object (defaults to its class name)"""
        name = plugin_name or type(plugin).__name__
        registered = self.kernel.add_plugin(plugin, plugin_name=name)
        logger.info(f"Registered native plugin {name}")
        return registered
