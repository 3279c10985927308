"""Validation rules for sales opportunity records.

This module declares the opportunity form rules as a validation schema plus
the named cross-field predicates they rely on. Records use snake_case keys:

    title, company_id, value, expected_close_date, probability, owner_id,
    contact_id, description, industry, lead_source, tags

Context keys understood by the predicates:

    existing_opportunities: list of {id, title, company_id} mappings
    editing_id: id of the opportunity being edited (excluded from duplicates)
    available_contacts: list of {id, company_id} mappings
    today: reference date for close-date rules (date or ISO string)

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-10-19
Version: 1.0.0
License: MIT
"""

import logging
from datetime import date, datetime, timedelta
from functools import lru_cache
from collections.abc import Mapping
from typing import Any, Optional

from engines.validation_engine import CompiledSchema, compile_schema, validate
from models.validation_data import ValidationResult

logger = logging.getLogger(__name__)

MAX_DEAL_VALUE = 10_000_000

REQUIRED_FIELDS = ["title", "company_id", "value", "expected_close_date", "owner_id"]
OPTIONAL_FIELDS = ["description", "contact_id", "industry", "lead_source", "tags"]


def _as_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if number != number else number


def _as_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(str(value).strip()).date()


def _today(context: Mapping) -> date:
    reference = context.get("today")
    return _as_date(reference) if reference else date.today()


def _one_year_after(day: date) -> date:
    try:
        return day.replace(year=day.year + 1)
    except ValueError:
        # Feb 29
        return day + timedelta(days=365)


def deal_value_positive(value, record, context) -> bool:
    number = _as_number(value)
    return number is not None and number > 0


def deal_value_plausible(value, record, context) -> bool:
    number = _as_number(value)
    return number is None or number <= MAX_DEAL_VALUE


def probability_in_range(value, record, context) -> bool:
    number = _as_number(value)
    return number is not None and 0 <= number <= 100


def close_date_not_past(value, record, context) -> bool:
    if not value:
        return True
    return _as_date(value) >= _today(context)


def close_date_within_year(value, record, context) -> bool:
    if not value:
        return True
    return _as_date(value) <= _one_year_after(_today(context))


def contact_matches_company(value, record, context) -> bool:
    """A selected contact must belong to the selected company."""
    contacts = context.get("available_contacts")
    company_id = record.get("company_id")
    if not value or not company_id or not contacts:
        return True

    contact = next((c for c in contacts if c.get("id") == value), None)
    return contact is None or contact.get("company_id") == company_id


def title_unique_for_company(value, record, context) -> bool:
    """No other opportunity of the same company may share the title."""
    existing = context.get("existing_opportunities")
    company_id = record.get("company_id")
    if not value or not company_id or not existing:
        return True

    editing_id = context.get("editing_id")
    title = str(value).lower()
    for opportunity in existing:
        if (
            opportunity.get("id") != editing_id
            and str(opportunity.get("title", "")).lower() == title
            and opportunity.get("company_id") == company_id
        ):
            return False
    return True


OPPORTUNITY_PREDICATES = {
    "deal_value_positive": deal_value_positive,
    "deal_value_plausible": deal_value_plausible,
    "probability_in_range": probability_in_range,
    "close_date_not_past": close_date_not_past,
    "close_date_within_year": close_date_within_year,
    "contact_matches_company": contact_matches_company,
    "title_unique_for_company": title_unique_for_company,
}

OPPORTUNITY_SCHEMA = {
    "title": [
        {"kind": "required", "message": "Opportunity title is required"},
        {"kind": "minLength", "min": 3, "severity": "warning",
         "message": "Title should be at least 3 characters long"},
        {"kind": "custom", "custom": "title_unique_for_company", "severity": "warning",
         "dependsOn": ["company_id"],
         "message": "An opportunity with this title already exists for this company"},
    ],
    "company_id": [
        {"kind": "required", "message": "Company selection is required"},
    ],
    "value": [
        {"kind": "custom", "custom": "deal_value_positive",
         "message": "Valid deal value greater than zero is required"},
        {"kind": "custom", "custom": "deal_value_plausible", "severity": "warning",
         "message": "Deal value seems unusually high. Please verify."},
    ],
    "expected_close_date": [
        {"kind": "required", "message": "Expected close date is required"},
        {"kind": "custom", "custom": "close_date_not_past",
         "message": "Close date cannot be in the past"},
        {"kind": "custom", "custom": "close_date_within_year", "severity": "warning",
         "message": "Close date is more than a year away"},
    ],
    "probability": [
        {"kind": "custom", "custom": "probability_in_range",
         "message": "Probability must be between 0% and 100%"},
    ],
    "owner_id": [
        {"kind": "required", "message": "Opportunity owner is required"},
    ],
    "contact_id": [
        {"kind": "custom", "custom": "contact_matches_company", "dependsOn": ["company_id"],
         "message": "Selected contact does not belong to the selected company"},
    ],
}


@lru_cache(maxsize=1)
def get_opportunity_schema() -> CompiledSchema:
    """Return the compiled opportunity schema (compiled once per process)."""
    return compile_schema(
        OPPORTUNITY_SCHEMA,
        predicates=OPPORTUNITY_PREDICATES,
        known_fields=set(REQUIRED_FIELDS + OPTIONAL_FIELDS + ["probability"])
    )


def validate_opportunity(record: Any, context: Optional[Mapping] = None) -> ValidationResult:
    """Validate an opportunity record against the opportunity schema."""
    result = validate(get_opportunity_schema(), record, context)
    logger.debug(
        f"Opportunity validation: {len(result.errors)} errors, {len(result.warnings)} warnings"
    )
    return result


def _is_filled(value: Any) -> bool:
    if isinstance(value, (list, tuple, set)):
        return len(value) > 0
    return bool(value) and bool(str(value).strip())


def calculate_form_progress(record: Mapping) -> int:
    """Return form completion as a percentage (0-100).

    Required fields account for 70% of progress and optional fields for 30%.

    Example:
        >>> calculate_form_progress({"title": "Renewal", "company_id": "c1"})
        28
    """
    record = record if isinstance(record, Mapping) else {}
    completed_required = sum(1 for f in REQUIRED_FIELDS if _is_filled(record.get(f)))
    completed_optional = sum(1 for f in OPTIONAL_FIELDS if _is_filled(record.get(f)))

    progress = (
        completed_required / len(REQUIRED_FIELDS) * 70
        + completed_optional / len(OPTIONAL_FIELDS) * 30
    )
    return int(progress + 0.5)


# Made with Bob
