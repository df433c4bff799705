"""
Configuration utilities for loading the budget mapping and runtime settings.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

MAPPING_ENV_VAR = "BUDGET_ID_TO_PROJECT_ID_MAPPING"
MAPPING_PATH_ENV_VAR = "BUDGET_ID_TO_PROJECT_ID_MAPPING_PATH"


def _as_mapping(value: Any, source: str) -> Dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        logger.error("%s must be an object, got %s", source, type(value).__name__)
        return {}
    return value


def parse_budget_project_mapping(raw: Optional[str]) -> Dict[str, str]:
    """
    Parse a budget ID to project ID mapping.

    Tries JSON first, then falls back to YAML. Anything that cannot be parsed
    into an object yields an empty mapping.

    Args:
        raw: Serialized mapping

    Returns:
        Dictionary of budget ID to project ID
    """
    if not raw:
        return {}

    try:
        return _as_mapping(json.loads(raw), MAPPING_ENV_VAR)
    except json.JSONDecodeError:
        try:
            return _as_mapping(yaml.safe_load(raw), MAPPING_ENV_VAR)
        except yaml.YAMLError as e:
            logger.error("Failed to parse %s as JSON or YAML: %s", MAPPING_ENV_VAR, e)

    return {}


def load_budget_project_mapping() -> Dict[str, str]:
    """Load the budget to project mapping from environment or file.

    The environment variable wins when set. The file format is determined by
    its extension (.json, .yml, .yaml).
    """
    mapping_str = os.environ.get(MAPPING_ENV_VAR)
    if mapping_str:
        return parse_budget_project_mapping(mapping_str)

    config_path = os.environ.get(MAPPING_PATH_ENV_VAR)
    if not config_path:
        logger.warning("%s is not set, no budgets are mapped", MAPPING_ENV_VAR)
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            if config_path.endswith((".yml", ".yaml")):
                return _as_mapping(yaml.safe_load(f), config_path)
            else:
                return _as_mapping(json.load(f), config_path)
    except FileNotFoundError:
        logger.warning("Budget mapping file not found: %s", config_path)
    except OSError as e:
        logger.error("Failed to read budget mapping file %s: %s", config_path, e)
    except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        logger.error("Failed to parse budget mapping file: %s", e)

    return {}


def is_dry_run() -> bool:
    """Whether DRY_RUN is enabled in the environment."""
    return os.environ.get("DRY_RUN", "false").lower() in ("true", "1", "yes")
