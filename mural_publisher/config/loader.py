"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ───────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. DEFAULTS below       — always present, so a missing YAML file is fine
#   2. config/config.yaml   — pipeline defaults checked into the repo
#   3. .env / environment   — credentials and per-machine overrides
#
# The _deep_merge helper does recursive dict merging:
#   base = {"contentful": {"locale": "en-US"}}
#   overrides = {"contentful": {"space_id": "abc"}}
#   result = {"contentful": {"locale": "en-US", "space_id": "abc"}}
# ──────────────────────────────────────────────────────────────────────
"""

import copy
from pathlib import Path
from typing import Any

import yaml

from mural_publisher.config.settings import Settings
from mural_publisher.utils.errors import ConfigurationError

DEFAULTS: dict[str, Any] = {
    "contentful": {
        "environment": "master",
        "locale": "en-US",
        "api_base_url": "https://api.contentful.com",
        "upload_base_url": "https://upload.contentful.com",
        "page_size": 100,
        "timeout": 30.0,
    },
    "publishing": {
        "content_type": "mural",
        "template_filename": "template.txt",
        "allowed_extensions": [".jpg", ".jpeg", ".png"],
        "templates_dir": "contentfull_data_post",
    },
    "asset_processing": {
        "max_attempts": 10,
        "base_delay": 2.0,
        "timeout": 120.0,
    },
}


def load_config(
    path: str = "config/config.yaml",
    settings: Settings | None = None,
) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Environment variables (via Settings) override YAML values where keys overlap.

    Args:
        path: Path to the YAML configuration file.
        settings: Pre-built settings; read from the environment when omitted.

    Returns:
        Fully resolved configuration dictionary.

    Raises:
        ConfigurationError: If the YAML file exists but is not a mapping.
    """
    config = copy.deepcopy(DEFAULTS)

    config_path = Path(path)
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            try:
                yaml_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc
        if not isinstance(yaml_config, dict):
            raise ConfigurationError(f"Expected a mapping at the top of {config_path}")
        _deep_merge(config, yaml_config)

    if settings is None:
        settings = Settings()
    env_overrides: dict[str, Any] = {
        "contentful": {
            "management_token": settings.contentful_management_token,
            "space_id": settings.contentful_space_id,
        },
    }
    # Only override YAML values that were set explicitly.
    if settings.contentful_environment:
        env_overrides["contentful"]["environment"] = settings.contentful_environment
    if settings.mural_templates_dir:
        env_overrides["publishing"] = {"templates_dir": settings.mural_templates_dir}

    _deep_merge(config, env_overrides)
    return config


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
