"""Tests for the opportunity form rule set.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-10-19
Version: 1.0.0
License: MIT
"""

import pytest

from engines.opportunity_rules import (
    calculate_form_progress,
    get_opportunity_schema,
    validate_opportunity,
)
from engines.validation_engine import validate_field


TODAY = "2026-03-01"


@pytest.fixture
def opportunity():
    return {
        "title": "Platform renewal",
        "company_id": "acme",
        "value": 250000,
        "expected_close_date": "2026-06-30",
        "probability": 60,
        "owner_id": "u-7",
        "contact_id": "c-1",
    }


@pytest.fixture
def context():
    return {
        "today": TODAY,
        "available_contacts": [
            {"id": "c-1", "company_id": "acme"},
            {"id": "c-2", "company_id": "globex"},
        ],
        "existing_opportunities": [
            {"id": "o-1", "title": "Platform Renewal", "company_id": "globex"},
            {"id": "o-2", "title": "Support expansion", "company_id": "acme"},
        ],
    }


def messages(issues):
    return [issue.message for issue in issues]


def test_schema_compiles():
    compiled = get_opportunity_schema()
    assert "contact_id" in compiled.fields


def test_valid_opportunity(opportunity, context):
    result = validate_opportunity(opportunity, context)

    assert result.is_valid
    assert result.warnings == []


def test_empty_opportunity_reports_every_required_field(context):
    result = validate_opportunity({}, context)

    assert messages(result.errors) == [
        "Opportunity title is required",
        "Company selection is required",
        "Valid deal value greater than zero is required",
        "Expected close date is required",
        "Probability must be between 0% and 100%",
        "Opportunity owner is required",
    ]


def test_short_title_is_a_warning(opportunity, context):
    opportunity["title"] = "AB"
    result = validate_opportunity(opportunity, context)

    assert result.is_valid
    assert messages(result.warnings) == ["Title should be at least 3 characters long"]


def test_duplicate_title_for_same_company(opportunity, context):
    opportunity["title"] = "support EXPANSION"
    result = validate_opportunity(opportunity, context)

    assert messages(result.warnings) == ["An opportunity with this title already exists for this company"]

    context["editing_id"] = "o-2"
    assert validate_opportunity(opportunity, context).warnings == []


def test_deal_value_rules(opportunity, context):
    opportunity["value"] = "0"
    assert messages(validate_opportunity(opportunity, context).errors) == [
        "Valid deal value greater than zero is required"
    ]

    opportunity["value"] = 25_000_000
    result = validate_opportunity(opportunity, context)
    assert result.is_valid
    assert messages(result.warnings) == ["Deal value seems unusually high. Please verify."]


def test_close_date_rules(opportunity, context):
    opportunity["expected_close_date"] = "2026-02-27"
    assert messages(validate_opportunity(opportunity, context).errors) == ["Close date cannot be in the past"]

    opportunity["expected_close_date"] = "2027-06-01"
    assert messages(validate_opportunity(opportunity, context).warnings) == ["Close date is more than a year away"]

    opportunity["expected_close_date"] = "not a date"
    assert "Close date cannot be in the past" in messages(validate_opportunity(opportunity, context).errors)


@pytest.mark.parametrize("probability", [-1, 101, "abc", None])
def test_probability_out_of_range(opportunity, context, probability):
    opportunity["probability"] = probability
    assert messages(validate_opportunity(opportunity, context).errors) == [
        "Probability must be between 0% and 100%"
    ]


def test_contact_must_belong_to_company(opportunity, context):
    opportunity["contact_id"] = "c-2"
    result = validate_opportunity(opportunity, context)

    assert result.errors[0].field == "contact_id"
    assert result.errors[0].message == "Selected contact does not belong to the selected company"


def test_contact_field_validation_uses_record(opportunity, context):
    issues = validate_field(get_opportunity_schema(), "contact_id", "c-2", opportunity, context)
    assert messages(issues) == ["Selected contact does not belong to the selected company"]

    issues = validate_field(get_opportunity_schema(), "contact_id", "c-2", {**opportunity, "company_id": "globex"}, context)
    assert issues == []


def test_form_progress():
    assert calculate_form_progress({}) == 0
    assert calculate_form_progress({"title": "Renewal", "company_id": "acme"}) == 28
    assert calculate_form_progress({
        "title": "Renewal",
        "company_id": "acme",
        "value": 10,
        "expected_close_date": "2026-06-30",
        "owner_id": "u-1",
        "description": "Three year renewal",
        "contact_id": "c-1",
        "industry": "Retail",
        "lead_source": "Referral",
        "tags": ["renewal"],
    }) == 100
    assert calculate_form_progress({"title": "   ", "tags": []}) == 0
