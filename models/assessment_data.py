"""Assessment and scoring result data models.

This module defines the Pydantic models for answers supplied by callers and
for the scored assessment derived from them.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-10-19
Version: 1.0.0
License: MIT
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class Confidence(str, Enum):
    """How sure the rep is about an answer."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def weight(self) -> float:
        return _CONFIDENCE_WEIGHTS[self]


_CONFIDENCE_WEIGHTS = {
    Confidence.LOW: 0.6,
    Confidence.MEDIUM: 0.8,
    Confidence.HIGH: 1.0,
}


class Answer(BaseModel):
    """An answer to one question.

    A newer answer for the same (pillar_id, question_id) replaces the older one.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    pillar_id: str = Field(..., alias="pillarId", description="Pillar the question belongs to")
    question_id: str = Field(..., alias="questionId", description="Question id")
    value: str = Field(..., description="Selected option value")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the answer was given"
    )
    confidence: Optional[Confidence] = Field(default=None, description="Answer confidence")


class Assessment(BaseModel):
    """A set of answers for one opportunity. Owned by the caller."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Assessment id")
    answers: List[Answer] = Field(default_factory=list, description="Answers in supply order")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        alias="createdAt",
        description="Creation timestamp"
    )


class QuestionResult(BaseModel):
    """Resolved outcome of one question.

    Attributes:
        question_id: Question id.
        value: Resolved option value, None when unanswered or unmatched.
        score: Resolved option score, None when unanswered or unmatched.
        min_score: Lowest option score of the question.
        max_score: Highest option score of the question.
        at_minimum: True when the question is a gap (unanswered or lowest option).
    """
    model_config = ConfigDict(frozen=True)

    question_id: str
    value: Optional[str] = None
    score: Optional[int] = None
    min_score: int = 0
    max_score: int = 0
    at_minimum: bool = True

    @property
    def answered(self) -> bool:
        return self.score is not None


class PillarResult(BaseModel):
    """Score breakdown for one pillar."""
    model_config = ConfigDict(frozen=True)

    pillar_id: str
    score: int = 0
    max_score: int = 0
    percentage: float = 0.0
    level: str = "weak"
    answered_questions: int = 0
    total_questions: int = 0
    questions: List[QuestionResult] = Field(default_factory=list)

    @property
    def ratio(self) -> float:
        return self.score / self.max_score if self.max_score else 0.0

    def answered_values(self) -> List[str]:
        return [q.value for q in self.questions if q.value is not None]


class ScoredAssessment(BaseModel):
    """Derived scores for an answer set. Always recomputed, never mutated.

    ``pillar_scores`` and ``total_score`` are derived from
    ``pillar_breakdown`` so the total is always the sum of the pillars.
    """
    model_config = ConfigDict(frozen=True)

    assessment_id: Optional[str] = None
    pillar_breakdown: List[PillarResult] = Field(default_factory=list)
    level: str
    max_score: int
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    completion: float = Field(0.0, ge=0.0, le=1.0)
    answer_count: int = Field(0, description="Live answers, one per answered question key")
    supplied_answer_count: int = Field(0, description="Every supplied answer, re-answers included")
    first_answer_at: Optional[datetime] = None
    last_answer_at: Optional[datetime] = None
    stage_readiness: Dict[str, bool] = Field(default_factory=dict)

    @computed_field
    @property
    def pillar_scores(self) -> Dict[str, int]:
        return {p.pillar_id: p.score for p in self.pillar_breakdown}

    @computed_field
    @property
    def total_score(self) -> int:
        return sum(p.score for p in self.pillar_breakdown)

    def get_pillar(self, pillar_id: str) -> Optional[PillarResult]:
        for pillar in self.pillar_breakdown:
            if pillar.pillar_id == pillar_id:
                return pillar
        return None
