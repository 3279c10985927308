"""Qualification configuration data models.

This module defines the Pydantic models for the MEDDPICC qualification
configuration: pillars and their questions, scoring thresholds, coaching
conditions and stage requirements.

Configuration objects are frozen. Editing a configuration means building a
new object, never mutating one that engines may be reading.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-10-19
Version: 1.0.0
License: MIT

Classes:
    AnswerOption: One selectable answer with its score.
    Question: One qualification question.
    Pillar: One qualification dimension.
    ScoreThreshold: One named band of total scores.
    ScoringConfig: Maximum total score and threshold bands.
    Priority: Coaching priority.
    CoachingCondition: Declarative coaching trigger.
    StageRequirement: Minimum scores needed to advance a sales stage.
    QualificationConfig: The complete configuration.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


_FROZEN = ConfigDict(frozen=True, populate_by_name=True)


class AnswerOption(BaseModel):
    """A selectable answer and the score it contributes."""
    model_config = _FROZEN

    label: str = Field(..., description="Display label")
    value: str = Field(..., description="Stored answer value")
    score: int = Field(..., description="Score contributed when selected")


class Question(BaseModel):
    """A qualification question.

    Options are declared from weakest to strongest answer.
    """
    model_config = _FROZEN

    id: str = Field(..., description="Question id, unique across the configuration")
    text: str = Field(..., description="Question text")
    tooltip: Optional[str] = Field(default=None, description="Guidance shown with the question")
    options: List[AnswerOption] = Field(default_factory=list, description="Answer options")

    @property
    def max_score(self) -> int:
        return max((o.score for o in self.options), default=0)

    @property
    def min_score(self) -> int:
        return min((o.score for o in self.options), default=0)

    def find_option(self, value: str) -> Optional[AnswerOption]:
        for option in self.options:
            if option.value == value:
                return option
        return None


class Pillar(BaseModel):
    """A qualification dimension made of questions.

    Attributes:
        id: Pillar id, unique within the configuration.
        title: Display title.
        description: Short description.
        primer: Longer explanation for reps.
        questions: Questions in declaration order.
        max_score: Declared maximum. Derived from the questions when omitted.
        critical_actions: Action items suggested when the pillar is critically weak.
        improvement_actions: Action items suggested when the pillar needs work.
    """
    model_config = _FROZEN

    id: str
    title: str
    description: str = ""
    primer: Optional[str] = None
    questions: List[Question] = Field(default_factory=list)
    declared_max_score: Optional[int] = Field(default=None, alias="maxScore")
    critical_actions: List[str] = Field(default_factory=list, alias="criticalActions")
    improvement_actions: List[str] = Field(default_factory=list, alias="improvementActions")

    @property
    def computed_max_score(self) -> int:
        return sum(q.max_score for q in self.questions)

    @property
    def max_score(self) -> int:
        if self.declared_max_score is not None:
            return self.declared_max_score
        return self.computed_max_score


class ScoreThreshold(BaseModel):
    """A named band of total scores. Missing bounds are open-ended."""
    model_config = _FROZEN

    min: Optional[int] = None
    max: Optional[int] = None
    label: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None


class ScoringConfig(BaseModel):
    """Maximum total score and the threshold bands that partition it."""
    model_config = _FROZEN

    max_score: int = Field(..., alias="maxScore")
    thresholds: Dict[str, ScoreThreshold] = Field(default_factory=dict)

    def ordered_levels(self) -> List[str]:
        """Return level names from weakest to strongest (ascending ``min``)."""
        return [
            name for name, _ in sorted(
                self.thresholds.items(),
                key=lambda item: item[1].min if item[1].min is not None else 0
            )
        ]

    def bounds(self, level: str) -> tuple[int, int]:
        """Return the inclusive integer range covered by a level."""
        threshold = self.thresholds[level]
        low = threshold.min if threshold.min is not None else 0
        high = threshold.max if threshold.max is not None else self.max_score
        return low, high


class Priority(str, Enum):
    """Coaching priority, strongest first."""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    Priority.CRITICAL: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}


class CoachingCondition(BaseModel):
    """A coaching trigger: fires when an answer in the pillar has ``trigger_value``."""
    model_config = _FROZEN

    id: Optional[str] = None
    pillar_id: str = Field(..., alias="pillarId")
    trigger_value: str = Field(..., alias="triggerValue")
    prompt: str
    priority: Priority = Priority.MEDIUM
    action_items: List[str] = Field(default_factory=list, alias="actionItems")


class StageRequirement(BaseModel):
    """Score requirements for a sales stage."""
    model_config = _FROZEN

    min_score: int = Field(..., alias="minScore")
    required_pillars: List[str] = Field(default_factory=list, alias="requiredPillars")
    min_pillar_score: int = Field(default=20, alias="minPillarScore")


class QualificationConfig(BaseModel):
    """Complete qualification configuration.

    Example:
        >>> from utils.config_loader import load_qualification_config
        >>> config = load_qualification_config()
        >>> print([p.id for p in config.pillars][:2])
        ['metrics', 'economic_buyer']
    """
    model_config = _FROZEN

    version: str = "1.0.0"
    pillars: List[Pillar] = Field(default_factory=list)
    scoring: ScoringConfig
    coaching_conditions: List[CoachingCondition] = Field(default_factory=list, alias="coachingConditions")
    stage_requirements: Dict[str, StageRequirement] = Field(default_factory=dict, alias="stageRequirements")

    def get_pillar(self, pillar_id: str) -> Optional[Pillar]:
        for pillar in self.pillars:
            if pillar.id == pillar_id:
                return pillar
        return None

    @property
    def total_questions(self) -> int:
        return sum(len(p.questions) for p in self.pillars)
