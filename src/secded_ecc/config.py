# file: src/secded_ecc/config.py

"""
Configuration loading.

Configuration is a nested dict, read from YAML. When no path is given the
packaged default_config.yaml is used, falling back to hardcoded defaults if it
is missing.
"""

import copy
import os
from typing import Any, Dict, Optional

import yaml

from .errors import ECCConfigurationError


DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "default_config.yaml")

_DEFAULT_CONFIG = {
    "system": {
        "verbose": False,
    },
    "ecc": {
        "type": "secded",
        "secded": {
            "verify_tables": True,
        },
    },
    "campaign": {
        "seed": 1234,
        "num_words": 1000,
        "num_flips": 2,
    },
}


def get_default_config() -> Dict[str, Any]:
    """Return a fresh copy of the hardcoded default configuration."""
    return copy.deepcopy(_DEFAULT_CONFIG)


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from file or use defaults.

    Args:
        config_path: Path to a YAML config file, or None for the packaged default

    Returns:
        Configuration dictionary

    Raises:
        ECCConfigurationError: If an explicit path cannot be read or parsed,
            or does not hold a mapping
    """
    if config_path is None:
        if not os.path.exists(DEFAULT_CONFIG_PATH):
            return get_default_config()
        config_path = DEFAULT_CONFIG_PATH

    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ECCConfigurationError(f"Cannot load config {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise ECCConfigurationError(
            f"Config {config_path} must contain a mapping, got {type(config).__name__}"
        )

    return config
