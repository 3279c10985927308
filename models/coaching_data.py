"""Coaching recommendation data models.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-10-19
Version: 1.0.0
License: MIT
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from models.qualification_config import Priority


class CoachingRecommendation(BaseModel):
    """A prioritized suggestion tied to a weak or unmet pillar.

    Attributes:
        pillar_id: Pillar the advice targets ("overall" for the fallback).
        text: Recommendation text.
        priority: Coaching priority.
        action_items: Concrete next steps.
        source: "condition", "completion" or "fallback".
    """
    model_config = ConfigDict(frozen=True)

    pillar_id: str = Field(..., description="Target pillar")
    text: str = Field(..., description="Recommendation text")
    priority: Priority = Field(..., description="Coaching priority")
    action_items: List[str] = Field(default_factory=list, description="Next steps")
    source: str = Field(default="condition", description="How the recommendation was produced")


class PositionAnalysis(BaseModel):
    """Competitive strengths and areas of concern for one assessment."""
    model_config = ConfigDict(frozen=True)

    strengths: List[str] = Field(default_factory=list, description="Pillars qualified strongly")
    concerns: List[str] = Field(default_factory=list, description="Pillars needing attention")
