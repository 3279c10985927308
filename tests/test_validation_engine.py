"""Tests for the declarative record validation engine.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-10-19
Version: 1.0.0
License: MIT
"""

import pytest

from engines.validation_engine import (
    CompiledSchema,
    compile_schema,
    find_schema_errors,
    get_validation_summary,
    validate,
    validate_field,
)
from models.validation_data import FieldRule, RuleKind, Severity, ValidationResult
from utils.exceptions import ConfigurationError, SchemaConfigurationError


CONTACT_SCHEMA = {
    "name": [{"kind": "required"}, {"kind": "maxLength", "max": 10, "severity": "warning"}],
    "email": [{"kind": "email"}],
    "phone": [{"kind": "phone"}],
    "website": [{"kind": "url"}],
    "zip": [{"kind": "pattern", "pattern": r"^\d{5}$", "message": "ZIP must have 5 digits"}],
    "age": [{"kind": "min", "min": 18}, {"kind": "max", "max": 120}],
}


def test_title_required_and_min_length():
    """An empty title fails `required` only; minLength passes on empty values."""
    schema = {"title": [{"kind": "required"}, {"kind": "minLength", "min": 3}]}

    result = validate(schema, {"title": ""})

    assert result.is_valid is False
    assert len(result.errors) == 1
    assert result.errors[0].field == "title"
    assert result.errors[0].message == "This field is required"


def test_all_rules_of_all_fields_are_evaluated():
    result = validate(CONTACT_SCHEMA, {
        "name": "",
        "email": "not-an-email",
        "phone": "abc",
        "website": "example.com",
        "zip": "123",
        "age": 12,
    })

    assert [e.field for e in result.errors] == ["name", "email", "phone", "website", "zip", "age"]
    assert result.errors[4].message == "ZIP must have 5 digits"
    assert result.errors[5].message == "Value must be at least 18"


def test_valid_record_passes():
    result = validate(CONTACT_SCHEMA, {
        "name": "Ada",
        "email": "ada@example.com",
        "phone": "+1 (555) 123-4567",
        "website": "https://example.com/about",
        "zip": "02139",
        "age": "42",
    })

    assert result.is_valid
    assert result.errors == []
    assert result.warnings == []


def test_warnings_do_not_affect_validity():
    result = validate(CONTACT_SCHEMA, {"name": "A very long name indeed"})

    assert result.is_valid
    assert len(result.warnings) == 1
    assert result.warnings[0].severity == Severity.WARNING
    assert result.warnings[0].message == "Must be at most 10 characters"


@pytest.mark.parametrize("value", [None, "", "   ", [], {}])
def test_required_fails_on_empty_values(value):
    result = validate({"tags": [{"kind": "required"}]}, {"tags": value})
    assert not result.is_valid


def test_non_mapping_record_is_treated_as_empty():
    result = validate({"title": [{"kind": "required"}]}, ["not", "a", "record"])

    assert not result.is_valid
    assert result.errors[0].field == "title"


@pytest.mark.parametrize("value", ["abc", float("nan"), "inf", True, object()])
def test_numeric_rules_fail_on_non_numbers(value):
    result = validate({"amount": [{"kind": "min", "min": 0}]}, {"amount": value})
    assert not result.is_valid


def test_min_length_fails_on_unsized_value():
    result = validate({"code": [{"kind": "minLength", "min": 2}]}, {"code": 12345})
    assert not result.is_valid


def test_custom_predicate_receives_record_and_context():
    calls = []

    def belongs(value, record, context):
        calls.append((value, record.get("company"), context.get("contacts")))
        return value in context.get("contacts", {}).get(record.get("company"), [])

    schema = {
        "company": [{"kind": "required"}],
        "contact": [FieldRule(field="contact", kind=RuleKind.CUSTOM, predicate=belongs,
                              message="Contact does not belong to the company")],
    }
    context = {"contacts": {"acme": ["c1"], "globex": ["c2"]}}

    assert validate(schema, {"company": "acme", "contact": "c1"}, context).is_valid
    result = validate(schema, {"company": "acme", "contact": "c2"}, context)

    assert result.errors[0].message == "Contact does not belong to the company"
    assert calls[-1] == ("c2", "acme", context["contacts"])


def test_raising_predicate_counts_as_failure():
    def explode(value, record, context):
        raise KeyError("boom")

    schema = {"x": [FieldRule(field="x", kind=RuleKind.CUSTOM, predicate=explode, message="Broken")]}
    result = validate(schema, {"x": 1})

    assert not result.is_valid
    assert result.errors[0].message == "Broken"


def test_named_predicates_are_resolved_at_compile_time():
    compiled = compile_schema(
        {"code": [{"kind": "custom", "custom": "is_upper", "message": "Use capitals"}]},
        predicates={"is_upper": lambda value, record, context: str(value).isupper()}
    )

    assert isinstance(compiled, CompiledSchema)
    assert validate(compiled, {"code": "ABC"}).is_valid
    assert validate(compiled, {"code": "abc"}).errors[0].message == "Use capitals"


def test_compile_is_reusable_and_idempotent():
    compiled = compile_schema(CONTACT_SCHEMA)

    assert compile_schema(compiled) is compiled
    assert compiled.fields == list(CONTACT_SCHEMA)


def test_schema_errors_are_all_reported():
    schema = {
        "title": [
            {"kind": "minLength"},
            {"kind": "pattern", "pattern": "(unclosed"},
            {"kind": "custom", "custom": "missing"},
            {"kind": "bogus"},
            {"kind": "min", "min": 5, "max": 1},
        ],
        "owner": [{"kind": "custom", "predicate": None, "dependsOn": ["nowhere"]}],
    }

    errors = find_schema_errors(schema)
    locations = [e.location for e in errors]

    assert "title[0]" in locations
    assert "title[1]" in locations
    assert "title[2]" in locations
    assert any(loc.startswith("title[3]") for loc in locations)
    assert "title[4]" in locations
    assert sum(1 for loc in locations if loc == "owner[0]") == 2


def test_rule_field_must_match_schema_key():
    schema = {"title": [FieldRule(field="name", kind=RuleKind.REQUIRED)]}

    errors = find_schema_errors(schema)

    assert len(errors) == 1
    assert "declared under 'title'" in errors[0].message


def test_known_fields_detect_nonexistent_fields():
    errors = find_schema_errors({"ghost": [{"kind": "required"}]}, known_fields={"title"})

    assert [e.location for e in errors] == ["ghost"]


def test_compile_raises_configuration_error():
    with pytest.raises(SchemaConfigurationError) as exc_info:
        compile_schema({"title": [{"kind": "maxLength"}]})

    assert isinstance(exc_info.value, ConfigurationError)
    assert isinstance(exc_info.value, ValueError)
    assert exc_info.value.errors[0].location == "title[0]"
    assert "Validation schema is invalid" in str(exc_info.value)


def test_non_mapping_schema_is_a_configuration_error():
    assert find_schema_errors(["title"])[0].location == "schema"


def test_validate_is_deterministic():
    record = {"name": "", "email": "x@", "age": 200}

    assert validate(CONTACT_SCHEMA, record) == validate(CONTACT_SCHEMA, record)


@pytest.mark.parametrize("field_name", list(CONTACT_SCHEMA))
@pytest.mark.parametrize("record", [
    {"name": "", "email": "bad", "phone": "0", "website": "nope", "zip": "1", "age": -1},
    {"name": "Longer than ten", "email": "a@b.co", "age": "19"},
    {},
])
def test_field_and_record_validation_agree(field_name, record):
    compiled = compile_schema(CONTACT_SCHEMA)
    whole = validate(compiled, record)

    issues = validate_field(compiled, field_name, record.get(field_name), record)

    assert issues == whole.for_field(field_name)
    assert [i for i in issues if i.severity == Severity.ERROR] == [
        e for e in whole.errors if e.field == field_name
    ]


def test_validate_field_uses_candidate_value():
    issues = validate_field(CONTACT_SCHEMA, "name", "", {"name": "Ada"})
    assert [i.message for i in issues] == ["This field is required"]


def test_validate_field_unknown_field():
    assert validate_field(CONTACT_SCHEMA, "nickname", "x") == []


def test_validation_summary():
    assert get_validation_summary(ValidationResult()).model_dump() == {
        "status": "success", "message": "Ready to save", "count": 0
    }

    result = validate(CONTACT_SCHEMA, {"name": "", "email": "bad"})
    summary = get_validation_summary(result)
    assert summary.status == "error"
    assert summary.message == "2 errors must be fixed"

    result = validate(CONTACT_SCHEMA, {"name": "A very long name indeed"})
    summary = get_validation_summary(result)
    assert (summary.status, summary.message, summary.count) == ("warning", "1 warning", 1)
