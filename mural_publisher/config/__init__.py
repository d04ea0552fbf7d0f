"""Configuration module — exports Settings and load_config."""

from mural_publisher.config.loader import DEFAULTS, load_config
from mural_publisher.config.settings import Settings

__all__ = ["DEFAULTS", "Settings", "load_config"]
