"""Pytest configuration and fixtures for the qualification engine tests.

This module provides shared fixtures: the bundled MEDDPICC configuration,
small hand-built configurations and an answer factory.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-10-19
Version: 1.0.0
License: MIT
"""

import copy
from datetime import datetime, timedelta, timezone

import pytest

from models.assessment_data import Answer
from utils.config import PROJECT_ROOT
from utils.config_loader import load_qualification_config, parse_qualification_config


BASE_TIME = datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc)

YES_NO_PARTIAL = [
    {"label": "No", "value": "no", "score": 0},
    {"label": "Partial", "value": "partial", "score": 5},
    {"label": "Yes", "value": "yes", "score": 10},
]


def small_config_data() -> dict:
    """Two pillars with two questions each (20 points per pillar)."""
    return {
        "version": "test",
        "pillars": [
            {
                "id": "alpha",
                "title": "Alpha",
                "description": "First pillar",
                "maxScore": 20,
                "criticalActions": ["Run alpha discovery"],
                "improvementActions": ["Deepen alpha"],
                "questions": [
                    {"id": "q_a1", "text": "Alpha one", "options": copy.deepcopy(YES_NO_PARTIAL)},
                    {"id": "q_a2", "text": "Alpha two", "options": copy.deepcopy(YES_NO_PARTIAL)},
                ],
            },
            {
                "id": "beta",
                "title": "Beta",
                "description": "Second pillar",
                "maxScore": 20,
                "questions": [
                    {"id": "q_b1", "text": "Beta one", "options": copy.deepcopy(YES_NO_PARTIAL)},
                    {"id": "q_b2", "text": "Beta two", "options": copy.deepcopy(YES_NO_PARTIAL)},
                ],
            },
        ],
        "scoring": {
            "maxScore": 40,
            "thresholds": {
                "weak": {"max": 19, "label": "Weak"},
                "moderate": {"min": 20, "max": 29, "label": "Moderate"},
                "strong": {"min": 30, "label": "Strong"},
            },
        },
        "coachingConditions": [
            {
                "id": "alpha_missing",
                "pillarId": "alpha",
                "triggerValue": "no",
                "prompt": "Get alpha on the record",
                "priority": "high",
                "actionItems": ["Ask about alpha"],
            },
            {
                "id": "beta_partial",
                "pillarId": "beta",
                "triggerValue": "partial",
                "prompt": "Firm up beta",
                "priority": "low",
            },
        ],
        "stageRequirements": {
            "engage": {"minScore": 10, "requiredPillars": ["alpha"], "minPillarScore": 10},
        },
    }


@pytest.fixture(scope="session")
def meddpicc_config():
    """The bundled MEDDPICC configuration."""
    return load_qualification_config(PROJECT_ROOT / "data" / "meddpicc" / "config.yml")


@pytest.fixture
def small_data():
    """Raw document for the small configuration, safe to modify per test."""
    return small_config_data()


@pytest.fixture(scope="session")
def small_config():
    return parse_qualification_config(small_config_data())


@pytest.fixture(scope="session")
def champion_config():
    """A single Champion pillar with one question scored 0 / 15 / 30."""
    return parse_qualification_config({
        "pillars": [{
            "id": "champion",
            "title": "Champion",
            "description": "Internal advocate",
            "maxScore": 30,
            "questions": [{
                "id": "q_champion",
                "text": "Do we have a champion?",
                "options": [
                    {"label": "No", "value": "no", "score": 0},
                    {"label": "Partial", "value": "partial", "score": 15},
                    {"label": "Yes", "value": "yes", "score": 30},
                ],
            }],
        }],
        "scoring": {
            "maxScore": 30,
            "thresholds": {
                "weak": {"max": 14},
                "moderate": {"min": 15, "max": 29},
                "strong": {"min": 30},
            },
        },
    })


@pytest.fixture
def make_answer():
    """Factory for answers timestamped relative to a fixed base time.

    Returns:
        Callable ``(pillar_id, question_id, value, seconds=0, confidence=None)``.
    """
    def _make(pillar_id, question_id, value, seconds=0, confidence=None):
        return Answer(
            pillar_id=pillar_id,
            question_id=question_id,
            value=value,
            timestamp=BASE_TIME + timedelta(seconds=seconds),
            confidence=confidence,
        )
    return _make


@pytest.fixture
def answer_all(meddpicc_config, make_answer):
    """Answer every MEDDPICC question with the same value."""
    def _answer_all(value, seconds=0):
        return [
            make_answer(pillar.id, question.id, value, seconds=seconds + index)
            for pillar in meddpicc_config.pillars
            for index, question in enumerate(pillar.questions)
        ]
    return _answer_all
