import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from cerberus import Validator
from pydantic import ValidationError

from feasibility_model.config.models import EngineConfig

# Configure logger for this module
logger = logging.getLogger(__name__)

# Top-level section types of a scenario document. Only the outer shape is
# checked here; the engines tolerate malformed content inside each section.
SCENARIO_SCHEMA: Dict[str, Any] = {
    "name": {"type": "string", "required": False},
    "extends": {"type": "string", "required": False},
    "basics": {"type": "dict", "required": False, "nullable": True},
    "grades": {"type": "list", "required": False, "nullable": True},
    "grades_years": {"type": "dict", "required": False, "nullable": True},
    "income": {"type": "dict", "required": False, "nullable": True},
    "expenses": {"type": "dict", "required": False, "nullable": True},
    "discounts": {"type": "list", "required": False, "nullable": True},
    "hr": {"type": "dict", "required": False, "nullable": True},
    "capacity": {"type": "dict", "required": False, "nullable": True},
    "school_capacity": {"type": "number", "required": False, "nullable": True},
    "norm": {"type": "dict", "required": False, "nullable": True},
}

NORM_SCHEMA: Dict[str, Any] = {
    "teacher_weekly_max_hours": {"type": "number", "required": False, "nullable": True},
    "curriculum_weekly_hours": {"type": "dict", "required": False, "nullable": True},
    "years": {"type": "dict", "required": False, "nullable": True},
}


class ConfigLoadError(Exception):
    """Custom exception for errors during config loading."""

    pass


def load_yaml_config(config_path: Path) -> Optional[Dict[str, Any]]:
    """
    Loads configuration data from a YAML (or JSON) file.

    Args:
        config_path: Path object pointing to the YAML configuration file.

    Returns:
        A dictionary containing the loaded configuration.

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
        logger.exception(f"Could not read configuration file {config_path}: {e}")
        raise ConfigLoadError(f"Could not read configuration file {config_path}") from e

    if not isinstance(config_data, dict):
        logger.error(f"Configuration file {config_path} did not parse into a dictionary.")
        raise ConfigLoadError(
            f"Invalid configuration format in {config_path}: Expected a dictionary."
        )

    logger.info(f"Successfully loaded configuration from {config_path}")
    return config_data


def _validate(document: Dict[str, Any], schema: Dict[str, Any], label: str) -> Dict[str, Any]:
    v = Validator(schema, allow_unknown=True)
    if not v.validate(document):
        logger.error(f"{label} validation failed: {v.errors}")
        raise ConfigLoadError(f"{label} validation failed: {v.errors}")
    return document


def validate_scenario_document(document: Dict[str, Any]) -> Dict[str, Any]:
    """Check the top-level section types of a scenario; raises ConfigLoadError."""
    return _validate(document, SCENARIO_SCHEMA, "Scenario")


def validate_norm_document(document: Dict[str, Any]) -> Dict[str, Any]:
    """Check the top-level section types of a norm config; raises ConfigLoadError."""
    return _validate(document, NORM_SCHEMA, "Norm config")


def load_norm_config(config_path: Path) -> Dict[str, Any]:
    return validate_norm_document(load_yaml_config(config_path))


def load_engine_config(config_path: Optional[Path] = None) -> EngineConfig:
    """
    Build an EngineConfig, optionally overriding defaults from a YAML file.

    Raises:
        ConfigLoadError: If the file is unreadable or fails model validation.
    """
    if config_path is None:
        return EngineConfig()
    data = load_yaml_config(config_path)
    try:
        return EngineConfig(**data)
    except ValidationError as e:
        logger.error(f"Engine config {config_path} failed validation: {e}")
        raise ConfigLoadError(f"Engine config {config_path} failed validation") from e


# Expose for import
__all__ = [
    "load_yaml_config",
    "load_norm_config",
    "load_engine_config",
    "validate_scenario_document",
    "validate_norm_document",
    "ConfigLoadError",
]
