"""Data models for record validation.

This module defines the Pydantic models for declaring field-level
validation rules and for reporting the outcome of validating a record.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-10-19
Version: 1.0.0
License: MIT

Classes:
    Severity: Error or warning.
    RuleKind: Closed set of rule kinds.
    FieldRule: One declarative rule on one field.
    ValidationIssue: A failed rule reported for a field.
    ValidationResult: Complete outcome of validating a record.
    ValidationSummary: Condensed status for display.

Example:
    Declaring a rule::

        from models.validation_data import FieldRule, RuleKind, Severity

        rule = FieldRule(
            field="title",
            kind=RuleKind.MIN_LENGTH,
            min=3,
            severity=Severity.WARNING,
            message="Title should be at least 3 characters long"
        )
"""

from enum import Enum
from typing import Any, Callable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class Severity(str, Enum):
    """Severity of a failed rule."""
    ERROR = "error"
    WARNING = "warning"


class RuleKind(str, Enum):
    """Kinds of field rules understood by the validation engine."""
    REQUIRED = "required"
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    MIN = "min"
    MAX = "max"
    EMAIL = "email"
    PATTERN = "pattern"
    PHONE = "phone"
    URL = "url"
    CUSTOM = "custom"


# Kinds that need a numeric bound in `min`/`max`
BOUNDED_KINDS = {
    RuleKind.MIN_LENGTH: "min",
    RuleKind.MAX_LENGTH: "max",
    RuleKind.MIN: "min",
    RuleKind.MAX: "max",
}


class FieldRule(BaseModel):
    """A single declarative rule applied to one field.

    Attributes:
        field: Name of the field the rule applies to.
        kind: Rule kind.
        severity: Whether a failure blocks the record (error) or not (warning).
        message: Message reported on failure. A kind-specific default is
            used when empty.
        min: Lower bound for minLength/min rules.
        max: Upper bound for maxLength/max rules.
        pattern: Regular expression for pattern rules.
        custom: Name of a registered predicate for custom rules.
        depends_on: Other fields a custom rule reads from the record.
        predicate: Callable ``(value, record, context) -> bool`` for custom
            rules. Takes precedence over ``custom``. Not serialized.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    field: str = Field(..., description="Field name")
    kind: RuleKind = Field(..., description="Rule kind")
    severity: Severity = Field(default=Severity.ERROR, description="Failure severity")
    message: str = Field(default="", description="Failure message")
    min: Optional[float] = Field(default=None, description="Lower bound")
    max: Optional[float] = Field(default=None, description="Upper bound")
    pattern: Optional[str] = Field(default=None, description="Regular expression")
    custom: Optional[str] = Field(default=None, description="Registered predicate name")
    depends_on: List[str] = Field(default_factory=list, alias="dependsOn", description="Fields read by the rule")
    predicate: Optional[Callable[..., Any]] = Field(default=None, exclude=True, description="Custom predicate")


class ValidationIssue(BaseModel):
    """A failed rule reported against a field."""
    model_config = ConfigDict(frozen=True)

    field: str = Field(..., description="Field name")
    message: str = Field(..., description="Failure message")
    severity: Severity = Field(..., description="Failure severity")


class ValidationResult(BaseModel):
    """Outcome of validating one record.

    ``is_valid`` is derived from ``errors``; warnings never affect it.
    """
    model_config = ConfigDict(frozen=True)

    errors: List[ValidationIssue] = Field(default_factory=list, description="Blocking issues")
    warnings: List[ValidationIssue] = Field(default_factory=list, description="Non-blocking issues")

    @computed_field
    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def for_field(self, field: str) -> List[ValidationIssue]:
        """Return errors then warnings reported for one field."""
        return [i for i in self.errors if i.field == field] + [i for i in self.warnings if i.field == field]


class ValidationSummary(BaseModel):
    """Condensed validation status for display."""
    status: str = Field(..., description="error, warning or success")
    message: str = Field(..., description="Human-readable status")
    count: int = Field(..., description="Number of issues behind the status")
