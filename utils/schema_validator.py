"""Utility for JSON schema validation of qualification configurations.

This module validates raw configuration documents (as loaded from YAML or
JSON) against the structural JSON Schema before they are turned into
models. Every violation is collected; validation never stops at the first
one.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-10-19
Version: 1.0.0
License: MIT
"""

import json
import logging
from pathlib import Path
from typing import Optional

from jsonschema import Draft7Validator

from models.config_error import ConfigError
from utils.config import config

logger = logging.getLogger(__name__)


def load_schema(schema_path: Optional[Path] = None) -> dict:
    """Load JSON schema from file.

    Args:
        schema_path: Path to the JSON schema file. Defaults to
            ``config.QUALIFICATION_SCHEMA``.

    Returns:
        Schema as a dictionary.

    Raises:
        FileNotFoundError: If schema file doesn't exist.
        json.JSONDecodeError: If schema file is not valid JSON.

    Example:
        >>> schema = load_schema()
        >>> print(schema["title"])
        Qualification Configuration
    """
    schema_path = Path(schema_path or config.QUALIFICATION_SCHEMA)
    try:
        with open(schema_path, 'r', encoding='utf-8') as f:
            schema = json.load(f)
        logger.debug(f"Loaded schema from: {schema_path}")
        return schema
    except FileNotFoundError:
        logger.error(f"Schema file not found: {schema_path}")
        raise
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in schema file: {str(e)}")
        raise


def validate_json(data: object, schema: dict) -> list[ConfigError]:
    """Validate JSON data against schema.

    Args:
        data: JSON data to validate.
        schema: JSON schema to validate against.

    Returns:
        One ConfigError per violation, ordered by location. Empty when valid.

    Example:
        >>> errors = validate_json({"pillars": []}, load_schema())
        >>> print(errors[0])
        root: 'scoring' is a required property
    """
    validator = Draft7Validator(schema)
    errors = []

    for error in sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path]):
        error_path = ".".join(str(p) for p in error.path) if error.path else "root"
        errors.append(ConfigError(location=error_path, message=error.message))
        logger.debug(f"Validation error: {error_path}: {error.message}")

    if errors:
        logger.warning(f"JSON validation failed with {len(errors)} errors")
    else:
        logger.debug("JSON validation successful")

    return errors


def validate_config_structure(data: object, schema: Optional[dict] = None) -> list[ConfigError]:
    """Validate a raw qualification configuration document.

    Args:
        data: Parsed YAML/JSON document.
        schema: Schema to use. Loaded from disk when omitted.

    Returns:
        List of structural errors (empty if valid).
    """
    return validate_json(data, schema if schema is not None else load_schema())


# Made with Bob
