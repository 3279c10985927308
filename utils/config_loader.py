"""Qualification configuration loader utility.

This module loads MEDDPICC qualification configurations from YAML or JSON
files and validates them in two passes: structure (JSON Schema) and then
cross-field governance rules. A configuration that fails either pass is
rejected with a QualificationConfigError listing every defect.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-10-19
Version: 1.0.0
License: MIT

Example:
    >>> from utils.config_loader import load_qualification_config
    >>> config = load_qualification_config()
    >>> print(config.scoring.max_score)
    320
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from models.config_error import ConfigError
from models.qualification_config import QualificationConfig
from utils.config import config as settings
from utils.cross_field_rules import find_cross_field_errors
from utils.exceptions import QualificationConfigError
from utils.logging_config import log_exception
from utils.schema_validator import validate_config_structure

logger = logging.getLogger(__name__)


def load_raw_config(config_path: Path) -> Any:
    """Read a configuration file without validating it.

    Files ending in ``.json`` are parsed as JSON; anything else as YAML.

    Args:
        config_path: Path to the configuration file.

    Returns:
        The parsed document.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        QualificationConfigError: If the file cannot be parsed.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Qualification config file not found: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            if config_path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        log_exception(logger, f"Could not parse qualification config {config_path}", e)
        raise QualificationConfigError([ConfigError(location=str(config_path), message=str(e))]) from e


def find_config_errors(config: QualificationConfig) -> list[ConfigError]:
    """Return every cross-field defect of an already parsed configuration."""
    return find_cross_field_errors(config)


def parse_qualification_config(data: Any, schema: Optional[dict] = None) -> QualificationConfig:
    """Build a validated QualificationConfig from a raw document.

    Args:
        data: Parsed YAML/JSON document using the camelCase interchange keys.
        schema: Structural JSON schema. Loaded from ``schemas/`` when omitted.

    Returns:
        The immutable configuration.

    Raises:
        QualificationConfigError: If any structural or cross-field rule fails.
    """
    errors = validate_config_structure(data, schema)
    if errors:
        raise QualificationConfigError(errors)

    try:
        config = QualificationConfig.model_validate(data)
    except ValidationError as e:
        raise QualificationConfigError([
            ConfigError(
                location=".".join(str(p) for p in err["loc"]) or "root",
                message=err["msg"]
            )
            for err in e.errors()
        ]) from e

    errors = find_config_errors(config)
    if errors:
        raise QualificationConfigError(errors)

    logger.debug(
        f"Parsed qualification config v{config.version}: "
        f"{len(config.pillars)} pillars, {config.total_questions} questions"
    )
    return config


def load_qualification_config(config_path: Optional[Path] = None) -> QualificationConfig:
    """Load and validate a qualification configuration file.

    Args:
        config_path: Path to a YAML or JSON file. Defaults to
            ``config.QUALIFICATION_CONFIG`` (the bundled MEDDPICC set).

    Returns:
        The immutable configuration.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        QualificationConfigError: If the file is unparsable or invalid.
    """
    config_path = Path(config_path or settings.QUALIFICATION_CONFIG)
    data = load_raw_config(config_path)
    config = parse_qualification_config(data)
    logger.info(f"Loaded qualification config from: {config_path}")
    return config


# Made with Bob
