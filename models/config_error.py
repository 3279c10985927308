"""Configuration error data model.

This module defines the model used to report defects found in a validation
schema or a qualification configuration. Configuration errors are collected
at load/compile time and kept apart from per-record validation issues.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-10-19
Version: 1.0.0
License: MIT
"""

from pydantic import BaseModel, ConfigDict, Field


class ConfigError(BaseModel):
    """A single defect in a schema or configuration.

    Attributes:
        location: Dotted path to the offending element
            (e.g. "pillars.champion.questions.q_ch_2").
        message: Human-readable description of the defect.

    Example:
        >>> err = ConfigError(location="scoring.thresholds", message="Gap between 191 and 200")
        >>> print(err)
        scoring.thresholds: Gap between 191 and 200
    """
    model_config = ConfigDict(frozen=True)

    location: str = Field(..., description="Path to the offending configuration element")
    message: str = Field(..., description="Description of the defect")

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"
