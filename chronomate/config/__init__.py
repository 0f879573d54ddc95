"""Configuration module for chronomate."""

from chronomate.config.loader import get_config_path, load_config, save_config
from chronomate.config.schema import Config

__all__ = ["Config", "get_config_path", "load_config", "save_config"]
