# offer_model/config/loaders.py
import logging
import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional, Set

import yaml
from cerberus import Validator
from pydantic import ValidationError

from offer_model.config.models import OfferConfig

# Configure logger for this module
logger = logging.getLogger(__name__)

# Sections whose keys depend on a mode switch; an override replaces them instead of merging
REPLACE_KEYS: Set[str] = {
    "offer.vesting",
}

_NON_NEGATIVE_NUMBER = {"type": "number", "min": 0, "required": False}

OFFER_SCHEMA: Dict[str, Any] = {
    "offer": {
        "type": "dict",
        "required": True,
        "schema": {
            "base_salary": _NON_NEGATIVE_NUMBER,
            "performance_bonus_percentage": _NON_NEGATIVE_NUMBER,
            "joining_bonus": _NON_NEGATIVE_NUMBER,
            "relocation_bonus": _NON_NEGATIVE_NUMBER,
            "stock_grant_value": _NON_NEGATIVE_NUMBER,
            "exchange_rate": {"type": "number", "required": False},
            "vesting_years": {"type": "integer", "min": 0, "required": False},
            "vesting": {
                "type": "dict",
                "required": False,
                "schema": {
                    "mode": {"type": "string", "allowed": ["equal", "custom"], "required": True},
                    "schedule": {
                        "required": False,
                        "oneof": [
                            {
                                "type": "list",
                                "schema": {
                                    "type": "dict",
                                    "schema": {
                                        "year": {"type": "integer", "min": 1, "required": True},
                                        "percentage": {"type": "number", "min": 0, "required": True},
                                    },
                                },
                            },
                            {
                                "type": "dict",
                                "keysrules": {"type": "integer", "min": 1},
                                "valuesrules": {"type": "number", "min": 0},
                            },
                        ],
                    },
                },
            },
            "pf_included_in_base": {"type": "boolean", "required": False},
            "employer_pf_percentage": _NON_NEGATIVE_NUMBER,
        },
    },
    "current": {
        "type": "dict",
        "required": False,
        "schema": {
            "base_salary": _NON_NEGATIVE_NUMBER,
            "variable_pay": _NON_NEGATIVE_NUMBER,
        },
    },
    "reporting": {"type": "dict", "required": False},
}


class ConfigLoadError(Exception):
    """Custom exception for errors during config loading."""

    pass


def deep_merge(base: Dict[str, Any], override: Dict[str, Any], path: str = "") -> Dict[str, Any]:
    """
    Recursively merge override into base and return the result.
    Sections listed in REPLACE_KEYS are taken whole from the override.
    """
    for key, val in override.items():
        key_path = f"{path}.{key}" if path else str(key)
        if (
            key in base
            and isinstance(base[key], dict)
            and isinstance(val, dict)
            and key_path not in REPLACE_KEYS
        ):
            base[key] = deep_merge(base[key], val, key_path)
        else:
            base[key] = deepcopy(val)
    return base


def _read_yaml(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except FileNotFoundError as e:
        logger.error(f"Configuration file not found (FileNotFoundError): {config_path}")
        raise ConfigLoadError(f"Configuration file not found: {config_path}") from e
    except yaml.YAMLError as e:
        logger.exception(f"Error parsing YAML configuration file {config_path}: {e}")
        raise ConfigLoadError(f"Error parsing YAML file {config_path}") from e

    if config_data is None:
        return {}
    if not isinstance(config_data, dict):
        logger.error(f"Configuration file {config_path} did not parse into a dictionary.")
        raise ConfigLoadError(
            f"Invalid configuration format in {config_path}: Expected a dictionary."
        )
    return config_data


def load_yaml_config(config_path: Path, _seen: Optional[Set[Path]] = None) -> Dict[str, Any]:
    """
    Loads configuration data from a YAML file, resolving ``extends``.

    A file may name a parent file (relative to itself) under ``extends``;
    the parent is loaded first and the child's keys are deep-merged over it.

    Args:
        config_path: Path object pointing to the YAML configuration file.

    Returns:
        A dictionary containing the merged configuration.

    Raises:
        ConfigLoadError: If the file cannot be found or parsed.
        FileNotFoundError: If an ``extends`` parent does not exist.
        ValueError: If the ``extends`` chain is circular.
    """
    if not isinstance(config_path, Path):
        config_path = Path(config_path)

    seen = set() if _seen is None else _seen
    resolved = config_path.resolve()
    if resolved in seen:
        raise ValueError(f"Circular extends detected in '{config_path}'")
    seen.add(resolved)

    logger.info(f"Attempting to load configuration from: {config_path}")
    if not config_path.is_file():
        logger.error(f"Configuration file not found at path: {config_path}")
        raise ConfigLoadError(f"Configuration file not found: {config_path}")

    config_data = _read_yaml(config_path)

    parent = config_data.pop("extends", None)
    if parent:
        parent_fp = Path(os.path.join(config_path.parent, parent))
        if not parent_fp.exists():
            raise FileNotFoundError(f"Parent config '{parent}' not found for {config_path}")
        config_data = deep_merge(load_yaml_config(parent_fp, seen), config_data)

    logger.info(f"Successfully loaded configuration from {config_path}")
    return config_data


def validate_config_schema(config_data: Dict[str, Any]) -> None:
    """Structural check of raw config data; raises ConfigLoadError on failure."""
    v = Validator(OFFER_SCHEMA)
    if not v.validate(config_data):
        logger.error(f"Config validation failed: {v.errors}")
        raise ConfigLoadError(f"Config validation failed: {v.errors}")


def parse_offer_config(config_data: Dict[str, Any]) -> OfferConfig:
    """Validate raw config data into an OfferConfig."""
    validate_config_schema(config_data)
    try:
        config = OfferConfig.model_validate(config_data)
    except ValidationError as e:
        logger.error(f"Offer configuration is invalid: {e}")
        raise ConfigLoadError(f"Offer configuration is invalid: {e}") from e
    logger.debug(f"Offer configuration parsed: {config}")
    return config


def load_offer_config(config_path: Path) -> OfferConfig:
    """
    Loads YAML (with ``extends``), validates its schema and returns the
    validated offer, current package and reporting options.
    """
    return parse_offer_config(load_yaml_config(config_path))


# Expose for import
__all__ = [
    "ConfigLoadError",
    "deep_merge",
    "load_offer_config",
    "load_yaml_config",
    "parse_offer_config",
    "validate_config_schema",
]
