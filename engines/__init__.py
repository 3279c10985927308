"""Qualification engines.

This package contains the four pure engines of the qualification core:
record validation, MEDDPICC scoring, coaching recommendations and batch
analytics. They share only the data models in ``models``.
"""

from .analytics_aggregator import aggregate
from .coaching_engine import CoachingEngine, assess_position, recommend
from .scoring_engine import ScoringEngine, classify_score, score
from .validation_engine import (
    CompiledSchema,
    compile_schema,
    find_schema_errors,
    get_validation_summary,
    validate,
    validate_field,
)

__all__ = [
    'aggregate',
    'CoachingEngine',
    'assess_position',
    'recommend',
    'ScoringEngine',
    'classify_score',
    'score',
    'CompiledSchema',
    'compile_schema',
    'find_schema_errors',
    'get_validation_summary',
    'validate',
    'validate_field',
]

# Made with Bob
