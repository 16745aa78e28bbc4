import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from hr_analytics.errors import ConfigLoadError
from .models import AnalyticsConfig

# Configure logger for this module
logger = logging.getLogger(__name__)


def load_yaml_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Loads configuration data from a YAML file.

    Args:
        config_path: Path pointing to the YAML configuration file.

    Returns:
        A dictionary containing the loaded configuration. An empty file gives
        an empty dictionary.

    Raises:
        ConfigLoadError: If the file cannot be found or parsed.
    """
    if not isinstance(config_path, Path):
        config_path = Path(config_path)

    logger.info(f"Attempting to load configuration from: {config_path}")

    if not config_path.is_file():
        logger.error(f"Configuration file not found at path: {config_path}")
        raise ConfigLoadError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.exception(f"Error parsing YAML configuration file {config_path}: {e}")
        raise ConfigLoadError(f"Error parsing YAML file {config_path}") from e
    except OSError as e:
        logger.error(f"Could not read configuration file {config_path}: {e}")
        raise ConfigLoadError(f"Could not read configuration file {config_path}") from e

    if config_data is None:
        logger.warning(f"Configuration file {config_path} is empty; using defaults.")
        return {}

    if not isinstance(config_data, dict):
        logger.error(f"Configuration file {config_path} did not parse into a dictionary.")
        raise ConfigLoadError(
            f"Invalid configuration format in {config_path}: Expected a dictionary."
        )

    logger.info(f"Successfully loaded configuration from {config_path}")
    return config_data


def build_config(config_data: Optional[Dict[str, Any]]) -> AnalyticsConfig:
    """
    Validates a configuration mapping into an AnalyticsConfig.
    Sections and keys that are omitted keep their defaults.

    Raises:
        ConfigLoadError: If the mapping does not satisfy the schema.
    """
    try:
        return AnalyticsConfig.model_validate(config_data or {})
    except ValidationError as e:
        logger.error(f"Configuration validation failed: {e}")
        raise ConfigLoadError(f"Invalid analytics configuration: {e}") from e


def load_config(config_path: Union[str, Path]) -> AnalyticsConfig:
    """Loads and validates the YAML analytics configuration at ``config_path``."""
    return build_config(load_yaml_config(config_path))
