"""Configuration management using environment variables.

This module loads configuration from .env file and provides
typed access to configuration values with sensible defaults.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-10-19
Version: 1.0.0
License: MIT
"""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

# Load .env file from project root
load_dotenv()

# Repository root (utils/ is one level below)
PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _optional_env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name, default)
    if value is None or value.strip() == "" or value.lower() == "none":
        return None
    return value


class Config:
    """Configuration class for the qualification engine.

    Loads configuration from environment variables with fallback defaults.
    All values are loaded once at module import time.

    Example:
        >>> from utils.config import config
        >>> print(config.COACHING_COMPLETION_THRESHOLD)
        0.5
    """

    # Directory Configuration
    DATA_DIR: Path = Path(os.getenv("DATA_DIR", str(PROJECT_ROOT / "data")))
    SCHEMAS_DIR: Path = Path(os.getenv("SCHEMAS_DIR", str(PROJECT_ROOT / "schemas")))

    # Qualification Configuration
    QUALIFICATION_CONFIG: Path = Path(
        os.getenv("QUALIFICATION_CONFIG", str(DATA_DIR / "meddpicc" / "config.yml"))
    )
    QUALIFICATION_SCHEMA: Path = SCHEMAS_DIR / "qualification_config.schema.json"

    # Coaching
    COACHING_COMPLETION_THRESHOLD: float = float(os.getenv("COACHING_COMPLETION_THRESHOLD", "0.5"))

    # Logging Configuration
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: Optional[str] = _optional_env("LOG_FILE")
    LOG_FORMAT: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    @classmethod
    def validate(cls) -> list[str]:
        """Validate configuration values.

        Returns:
            List of validation error messages (empty if valid).
        """
        errors = []

        if not 0.0 < cls.COACHING_COMPLETION_THRESHOLD <= 1.0:
            errors.append(
                f"COACHING_COMPLETION_THRESHOLD must be in (0, 1], got {cls.COACHING_COMPLETION_THRESHOLD}"
            )

        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if cls.LOG_LEVEL.upper() not in valid_levels:
            errors.append(f"LOG_LEVEL must be one of {valid_levels}, got {cls.LOG_LEVEL}")

        return errors


# Global config instance
config = Config()


# Validate configuration on import
_validation_errors = config.validate()
if _validation_errors:
    import warnings
    for error in _validation_errors:
        warnings.warn(f"Configuration warning: {error}")
