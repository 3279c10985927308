"""Exceptions raised for bad configuration.

Bad data never raises; these exceptions are reserved for schemas and
qualification configurations that are internally inconsistent and must be
fixed before an engine can be used.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-10-19
Version: 1.0.0
License: MIT
"""

from typing import Iterable

from models.config_error import ConfigError


class QualificationError(Exception):
    """Base exception for the qualification engine."""
    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class ConfigurationError(QualificationError, ValueError):
    """Configuration is malformed.

    Carries every detected defect so callers can report them all at once.
    """
    def __init__(self, errors: Iterable[ConfigError], title: str = "Configuration is invalid"):
        self.errors = list(errors)
        message = title
        if self.errors:
            message = f"{title}:\n- " + "\n- ".join(str(e) for e in self.errors)
        super().__init__(message)


class SchemaConfigurationError(ConfigurationError):
    """A validation schema failed to compile."""
    def __init__(self, errors: Iterable[ConfigError]):
        super().__init__(errors, title="Validation schema is invalid")


class QualificationConfigError(ConfigurationError):
    """A qualification (pillar/scoring/coaching) configuration is invalid."""
    def __init__(self, errors: Iterable[ConfigError]):
        super().__init__(errors, title="Qualification configuration is invalid")
