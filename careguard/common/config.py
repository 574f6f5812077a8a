"""Configuration file loading for careguard.

Policy tables and route catalogs can be kept outside the code in YAML or
JSON files (YAML is a superset of JSON, so both go through the same
loader). Environment variables inside string values are expanded.
"""

import os
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from ..rbac.exceptions import ConfigurationError


def load_document(config_path: Union[str, Path]) -> Any:
    """Load a YAML or JSON document.

    Args:
        config_path: Path to the file

    Returns:
        Parsed document with environment variables expanded (None for an
        empty file)

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the file is not valid UTF-8 YAML/JSON
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_file.open("r", encoding="utf-8") as f:
        try:
            document = yaml.safe_load(f)
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Invalid configuration file {config_path}: {e}") from e

    return _expand_env_vars(document)


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Load a configuration file whose root is a mapping.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigurationError: If config file is invalid or its root is not a mapping
    """
    config = load_document(config_path)

    if config is None:
        config = {}

    if not isinstance(config, dict):
        raise ConfigurationError(
            f"Configuration root must be a mapping, got {type(config).__name__}"
        )

    return config


def _expand_env_vars(obj: Any) -> Any:
    """Recursively expand environment variables in configuration.

    Args:
        obj: Configuration object (dict, list, str, etc.)

    Returns:
        Configuration with expanded environment variables
    """
    if isinstance(obj, dict):
        return {key: _expand_env_vars(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    elif isinstance(obj, str):
        return os.path.expandvars(obj)
    else:
        return obj
