import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional
import yaml
from dotenv import load_dotenv

load_dotenv()

@dataclass
class Config:
    """Configuration for the Cozy Kitchen planner console"""

    # Paths
    base_dir: Path = Path(__file__).parent.parent.parent.parent
    data_dir: Path = None
    # Root folder holding the prompt plugin directories (None -> packaged prompts)
    plugins_dir: Path = None

    # LLM Settings
    llm_provider: str = "openai"  # openai, azure_openai
    model_name: str = "gpt-4o"
    api_key: Optional[str] = None
    # Optional base URL for OpenAI-compatible endpoints (e.g., Ollama, LocalAI)
    openai_base_url: Optional[str] = None
    azure_openai_endpoint: Optional[str] = None
    azure_openai_deployment: Optional[str] = None
    azure_openai_api_version: Optional[str] = None

    # Planner Settings
    allow_loops: bool = True

    # Hierarchical sections (e.g. AzureAd) looked up with get_value("Section:Key")
    settings: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.data_dir is None:
            self.data_dir = self.base_dir / "data"

        if self.api_key is None:
            if self.llm_provider == "azure_openai":
                self.api_key = os.getenv("AZURE_OPENAI_API_KEY")
            else:
                self.api_key = os.getenv("OPENAI_API_KEY")

        # Load OpenAI-compatible base URL from environment (e.g., Ollama/LocalAI)
        if self.openai_base_url is None:
            self.openai_base_url = os.getenv("OPENAI_BASE_URL")

        if self.azure_openai_endpoint is None:
            self.azure_openai_endpoint = os.getenv("AZURE_OPENAI_ENDPOINT")
        if self.azure_openai_deployment is None:
            self.azure_openai_deployment = os.getenv("AZURE_OPENAI_DEPLOYMENT_NAME")

    def get_value(self, key: str) -> Optional[str]:
        """Resolve a colon-separated key such as 'AzureAd:ClientId'.

        Environment variables use the double-underscore form ('AzureAd__ClientId')
        and take precedence over the YAML sections.
        """
        env_name = key.replace(":", "__")
        value = os.getenv(env_name) or os.getenv(env_name.upper())
        if value:
            return value

        node: Any = self.settings
        for part in key.split(":"):
            if not isinstance(node, dict):
                return None
            match = next((k for k in node if str(k).lower() == part.lower()), None)
            if match is None:
                return None
            node = node[match]

        if node is None or isinstance(node, dict):
            return None
        return str(node)

    @classmethod
    def from_yaml(cls, path: Path) -> "Config":
        """Load configuration from YAML file
        Note: keys that are not Config fields are kept as hierarchical settings.
        """
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        known = {f.name for f in fields(cls)} - {'settings'}
        kwargs = {k: v for k, v in data.items() if k in known}
        settings = {k: v for k, v in data.items() if k not in known}

        # Convert path-like fields to Path objects
        for path_field in ['base_dir', 'data_dir', 'plugins_dir']:
            if kwargs.get(path_field) is not None:
                kwargs[path_field] = Path(kwargs[path_field])

        return cls(settings=settings, **kwargs)

    def to_yaml(self, path: Path):
        """Save configuration to YAML file"""
        data = {
            k: str(v) if isinstance(v, Path) else v
            for k, v in self.__dict__.items()
            if k not in ('settings', 'api_key')
        }
        data.update(self.settings)
        with open(path, 'w') as f:
            yaml.dump(data, f, default_flow_style=False)
