from pathlib import Path
from typing import Optional

from .config import Config

# Prompt plugins ship with the package under plugins/prompts
DEFAULT_PLUGINS_ROOT = Path(__file__).parent.parent / "plugins" / "prompts"


def get_plugins_root_folder(config: Optional[Config] = None) -> Path:
    """Return the folder that holds the prompt plugin directories"""
    if config is not None and config.plugins_dir is not None:
        return Path(config.plugins_dir)
    return DEFAULT_PLUGINS_ROOT
