"""Application configuration models and loaders."""

from .config_data import ConfigData
from .config_template import load_config

__all__ = ["ConfigData", "load_config"]
