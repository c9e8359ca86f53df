import logging

from azure.identity import InteractiveBrowserCredential
from msgraph_beta import GraphServiceClient

from .config import Config
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

GRAPH_SCOPES = ["User.Read"]
REDIRECT_URI = "http://localhost"


def _require(config: Config, key: str) -> str:
    value = config.get_value(key)
    if not value:
        raise ConfigurationError(f"Missing configuration value '{key}'")
    return value


def get_graph_service_client(config: Config) -> GraphServiceClient:
    """Build a Graph client authorized through the interactive browser flow.

    The browser prompt opens lazily, on the first Graph request.
    """
    client_id = _require(config, "AzureAd:ClientId")
    tenant_id = _require(config, "AzureAd:TenantId")

    credential = InteractiveBrowserCredential(
        tenant_id=tenant_id,
        client_id=client_id,
        redirect_uri=REDIRECT_URI,
    )
    logger.info(f"Graph client configured for tenant {tenant_id}")
    return GraphServiceClient(credentials=credential, scopes=GRAPH_SCOPES)
