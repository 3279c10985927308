"""Declarative record validation engine.

This module compiles field-level validation schemas and evaluates records
against them. A schema maps field names to ordered rule lists; every rule
of every field is evaluated so callers see the complete set of errors and
warnings in one pass.

Two kinds of problems are kept apart:

* Data problems (a record's values break a rule) are returned as
  ValidationIssue entries and never raise.
* Configuration problems (the schema itself is malformed) are found by
  ``find_schema_errors`` and raised by ``compile_schema`` as a
  SchemaConfigurationError before any record is validated.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-10-19
Version: 1.0.0
License: MIT

Example:
    >>> schema = {"title": [
    ...     {"kind": "required", "message": "Title is required"},
    ...     {"kind": "minLength", "min": 3},
    ... ]}
    >>> result = validate(schema, {"title": ""})
    >>> print(result.is_valid, len(result.errors))
    False 1
"""

import logging
import math
import re
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, ValidationError

from models.config_error import ConfigError
from models.validation_data import (
    BOUNDED_KINDS,
    FieldRule,
    RuleKind,
    Severity,
    ValidationIssue,
    ValidationResult,
    ValidationSummary,
)
from utils.exceptions import SchemaConfigurationError

logger = logging.getLogger(__name__)

Predicate = Callable[[Any, Mapping, Mapping], bool]
RawSchema = Mapping[str, List[Union[FieldRule, Mapping[str, Any]]]]

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{0,15}$")
PHONE_SEPARATORS = re.compile(r"[\s\-\(\)]")


class CompiledSchema(BaseModel):
    """A validated schema, ready to be applied to any number of records.

    Rules keep their declaration order and have their default messages and
    custom predicates resolved.
    """
    model_config = ConfigDict(frozen=True)

    rules: Dict[str, Tuple[FieldRule, ...]]

    @property
    def fields(self) -> List[str]:
        return list(self.rules)


def _format_bound(bound: Optional[float]) -> str:
    if bound is not None and float(bound).is_integer():
        return str(int(bound))
    return str(bound)


def _default_message(rule: FieldRule) -> str:
    if rule.kind is RuleKind.REQUIRED:
        return "This field is required"
    if rule.kind is RuleKind.MIN_LENGTH:
        return f"Must be at least {_format_bound(rule.min)} characters"
    if rule.kind is RuleKind.MAX_LENGTH:
        return f"Must be at most {_format_bound(rule.max)} characters"
    if rule.kind is RuleKind.MIN:
        return f"Value must be at least {_format_bound(rule.min)}"
    if rule.kind is RuleKind.MAX:
        return f"Value must be at most {_format_bound(rule.max)}"
    if rule.kind is RuleKind.EMAIL:
        return "Please enter a valid email address"
    if rule.kind is RuleKind.PHONE:
        return "Please enter a valid phone number"
    if rule.kind is RuleKind.URL:
        return "Please enter a valid URL"
    if rule.kind is RuleKind.PATTERN:
        return "Invalid format"
    return "Invalid value"


def _parse_rule(field_name: str, raw: Any, location: str) -> Tuple[Optional[FieldRule], List[ConfigError]]:
    """Turn one raw rule entry into a FieldRule, or report why it can't be."""
    if isinstance(raw, FieldRule):
        return raw, []
    if not isinstance(raw, Mapping):
        return None, [ConfigError(location=location, message="Rule must be a mapping")]

    try:
        return FieldRule.model_validate({"field": field_name, **raw}), []
    except ValidationError as e:
        return None, [
            ConfigError(
                location=f"{location}.{'.'.join(str(p) for p in err['loc'])}" if err["loc"] else location,
                message=err["msg"]
            )
            for err in e.errors()
        ]


def _check_rule(
    rule: FieldRule,
    location: str,
    field_names: set,
    predicates: Mapping[str, Predicate]
) -> List[ConfigError]:
    errors = []

    bound_attr = BOUNDED_KINDS.get(rule.kind)
    if bound_attr is not None:
        bound = getattr(rule, bound_attr)
        if bound is None:
            errors.append(ConfigError(location=location, message=f"{rule.kind.value} rule requires '{bound_attr}'"))
        elif not math.isfinite(bound):
            errors.append(ConfigError(location=location, message=f"'{bound_attr}' must be a finite number"))
        elif rule.kind in (RuleKind.MIN_LENGTH, RuleKind.MAX_LENGTH) and bound < 0:
            errors.append(ConfigError(location=location, message=f"'{bound_attr}' must not be negative"))

    if rule.min is not None and rule.max is not None and rule.min > rule.max:
        errors.append(ConfigError(location=location, message=f"min {rule.min} is greater than max {rule.max}"))

    if rule.kind is RuleKind.PATTERN:
        if not rule.pattern:
            errors.append(ConfigError(location=location, message="pattern rule requires 'pattern'"))
        else:
            try:
                re.compile(rule.pattern)
            except re.error as e:
                errors.append(ConfigError(location=location, message=f"Invalid regular expression: {e}"))

    if rule.kind is RuleKind.CUSTOM and rule.predicate is None:
        if not rule.custom:
            errors.append(ConfigError(location=location, message="custom rule requires a predicate"))
        elif rule.custom not in predicates:
            errors.append(ConfigError(location=location, message=f"Unknown custom predicate '{rule.custom}'"))

    for dependency in rule.depends_on:
        if dependency not in field_names:
            errors.append(ConfigError(
                location=location,
                message=f"Rule depends on field '{dependency}' which is not in the schema"
            ))

    return errors


def _collect(
    schema: Any,
    predicates: Optional[Mapping[str, Predicate]],
    known_fields: Optional[set]
) -> Tuple[Dict[str, Tuple[FieldRule, ...]], List[ConfigError]]:
    predicates = predicates or {}
    if not isinstance(schema, Mapping):
        return {}, [ConfigError(location="schema", message="Schema must map field names to rule lists")]

    field_names = set(schema)
    compiled: Dict[str, Tuple[FieldRule, ...]] = {}
    errors: List[ConfigError] = []

    for field_name, rules in schema.items():
        if known_fields is not None and field_name not in known_fields:
            errors.append(ConfigError(location=field_name, message=f"Unknown field '{field_name}'"))
        if isinstance(rules, (str, bytes)) or not isinstance(rules, (list, tuple)):
            errors.append(ConfigError(location=field_name, message="Rules must be a list"))
            continue

        field_rules = []
        for index, raw in enumerate(rules):
            location = f"{field_name}[{index}]"
            rule, parse_errors = _parse_rule(field_name, raw, location)
            errors.extend(parse_errors)
            if rule is None:
                continue

            if rule.field != field_name:
                errors.append(ConfigError(
                    location=location,
                    message=f"Rule targets field '{rule.field}' but is declared under '{field_name}'"
                ))
            errors.extend(_check_rule(rule, location, field_names, predicates))

            updates: Dict[str, Any] = {}
            if not rule.message:
                updates["message"] = _default_message(rule)
            if rule.kind is RuleKind.CUSTOM and rule.predicate is None and rule.custom in predicates:
                updates["predicate"] = predicates[rule.custom]
            field_rules.append(rule.model_copy(update=updates) if updates else rule)

        compiled[field_name] = tuple(field_rules)

    return compiled, errors


def find_schema_errors(
    schema: Any,
    predicates: Optional[Mapping[str, Predicate]] = None,
    known_fields: Optional[set] = None
) -> List[ConfigError]:
    """Return every configuration defect of a validation schema.

    Args:
        schema: Mapping of field name to rule list (FieldRule or dict).
        predicates: Named custom predicates available to ``custom`` rules.
        known_fields: When given, every schema field must be one of these.

    Returns:
        List of ConfigError (empty if the schema is usable).
    """
    _, errors = _collect(schema, predicates, known_fields)
    return errors


def compile_schema(
    schema: Any,
    predicates: Optional[Mapping[str, Predicate]] = None,
    known_fields: Optional[set] = None
) -> CompiledSchema:
    """Compile a schema into a reusable, immutable form.

    Args:
        schema: Mapping of field name to rule list (FieldRule or dict).
        predicates: Named custom predicates available to ``custom`` rules.
        known_fields: When given, every schema field must be one of these.

    Returns:
        The compiled schema.

    Raises:
        SchemaConfigurationError: If the schema has any configuration error.
    """
    if isinstance(schema, CompiledSchema):
        return schema

    rules, errors = _collect(schema, predicates, known_fields)
    if errors:
        logger.error(f"Validation schema has {len(errors)} configuration errors")
        raise SchemaConfigurationError(errors)

    logger.debug(f"Compiled validation schema with {sum(len(r) for r in rules.values())} rules")
    return CompiledSchema(rules=rules)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


def _to_number(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeError("Booleans are not numbers")
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        number = float(value.strip())
    else:
        raise TypeError(f"Cannot compare {type(value).__name__} to a number")
    if not math.isfinite(number):
        raise ValueError("Value is not a finite number")
    return number


def _passes(rule: FieldRule, value: Any, record: Mapping, context: Mapping) -> bool:
    """Return True when ``value`` satisfies ``rule``."""
    if rule.kind is RuleKind.REQUIRED:
        return not _is_empty(value)

    if rule.kind is RuleKind.CUSTOM:
        try:
            return bool(rule.predicate(value, record, context))
        except Exception as e:
            logger.debug(f"Custom rule on '{rule.field}' could not be evaluated: {e}")
            return False

    # Presence is only reported by `required`
    if _is_empty(value):
        return True

    try:
        if rule.kind is RuleKind.MIN_LENGTH:
            return len(value) >= rule.min
        if rule.kind is RuleKind.MAX_LENGTH:
            return len(value) <= rule.max
        if rule.kind is RuleKind.MIN:
            return _to_number(value) >= rule.min
        if rule.kind is RuleKind.MAX:
            return _to_number(value) <= rule.max
        if rule.kind is RuleKind.EMAIL:
            return isinstance(value, str) and EMAIL_PATTERN.match(value.strip()) is not None
        if rule.kind is RuleKind.PHONE:
            return isinstance(value, str) and PHONE_PATTERN.match(PHONE_SEPARATORS.sub("", value)) is not None
        if rule.kind is RuleKind.URL:
            if not isinstance(value, str):
                return False
            parsed = urlparse(value.strip())
            return bool(parsed.scheme and parsed.netloc)
        if rule.kind is RuleKind.PATTERN:
            return re.search(rule.pattern, str(value)) is not None
    except (TypeError, ValueError, OverflowError):
        return False

    return False


def _check_field(
    compiled: CompiledSchema,
    field_name: str,
    record: Mapping,
    context: Mapping
) -> Tuple[List[ValidationIssue], List[ValidationIssue]]:
    errors: List[ValidationIssue] = []
    warnings: List[ValidationIssue] = []
    value = record.get(field_name)

    for rule in compiled.rules.get(field_name, ()):
        if _passes(rule, value, record, context):
            continue
        issue = ValidationIssue(field=field_name, message=rule.message, severity=rule.severity)
        if rule.severity is Severity.ERROR:
            errors.append(issue)
        else:
            warnings.append(issue)

    return errors, warnings


def validate(
    schema: Union[CompiledSchema, RawSchema],
    record: Any,
    context: Optional[Mapping] = None
) -> ValidationResult:
    """Validate a record against every rule of a schema.

    Args:
        schema: A CompiledSchema, or a raw schema which is compiled first.
        record: Mapping of field name to value. Anything else is treated as
            an empty record.
        context: Auxiliary data for custom cross-field rules.

    Returns:
        ValidationResult with errors and warnings in schema order.

    Raises:
        SchemaConfigurationError: Only when a raw schema is malformed.
    """
    compiled = compile_schema(schema)
    record = record if isinstance(record, Mapping) else {}
    context = context if context is not None else {}

    errors: List[ValidationIssue] = []
    warnings: List[ValidationIssue] = []
    for field_name in compiled.rules:
        field_errors, field_warnings = _check_field(compiled, field_name, record, context)
        errors.extend(field_errors)
        warnings.extend(field_warnings)

    return ValidationResult(errors=errors, warnings=warnings)


def validate_field(
    schema: Union[CompiledSchema, RawSchema],
    field_name: str,
    value: Any,
    record: Any = None,
    context: Optional[Mapping] = None
) -> List[ValidationIssue]:
    """Validate a single field, for real-time form feedback.

    The record is taken as-is with ``field_name`` set to ``value``, so the
    result always equals ``validate(...).for_field(field_name)`` for that
    record: errors first, then warnings.

    Args:
        schema: A CompiledSchema, or a raw schema which is compiled first.
        field_name: Field to validate. Unknown fields yield no issues.
        value: Candidate value for the field.
        record: Remaining record values, used by cross-field rules.
        context: Auxiliary data for custom cross-field rules.

    Returns:
        Issues reported for the field.
    """
    compiled = compile_schema(schema)
    if field_name not in compiled.rules:
        return []

    merged = dict(record) if isinstance(record, Mapping) else {}
    merged[field_name] = value
    errors, warnings = _check_field(compiled, field_name, merged, context if context is not None else {})
    return errors + warnings


def get_validation_summary(result: ValidationResult) -> ValidationSummary:
    """Condense a validation result into a single display status."""
    if result.errors:
        count = len(result.errors)
        return ValidationSummary(
            status="error",
            message=f"{count} error{'s' if count > 1 else ''} must be fixed",
            count=count
        )

    if result.warnings:
        count = len(result.warnings)
        return ValidationSummary(
            status="warning",
            message=f"{count} warning{'s' if count > 1 else ''}",
            count=count
        )

    return ValidationSummary(status="success", message="Ready to save", count=0)


# Made with Bob
