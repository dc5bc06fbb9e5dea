"""
Configuration loader
"""
import logging
import os
import yaml
from pathlib import Path
from typing import Optional
from towerguess.models import Settings


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/towerguess.yaml"


def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load configuration from YAML file

    Args:
        config_path: Path to config file. None means $TOWERGUESS_CONFIG or
            config/towerguess.yaml, falling back to defaults if absent.

    Returns:
        Settings object

    Raises:
        FileNotFoundError: If an explicitly given config file does not exist
    """
    explicit = config_path is not None
    path = Path(config_path or os.environ.get("TOWERGUESS_CONFIG", DEFAULT_CONFIG_PATH))

    if not path.exists():
        if explicit:
            raise FileNotFoundError(f"Config file not found: {config_path}")
        logger.info(f"No config file at {path}, using defaults")
        return Settings()

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    return Settings(**data)
