"""Analytics snapshot data models.

This module defines the Pydantic models returned by the analytics
aggregator for a batch of scored assessments.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-10-19
Version: 1.0.0
License: MIT
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class PillarStatistics(BaseModel):
    """Per-pillar statistics across a batch."""
    model_config = ConfigDict(frozen=True)

    pillar_id: str = Field(..., description="Pillar id")
    average_score: float = Field(0.0, description="Mean pillar score")
    min_score: int = Field(0, description="Lowest pillar score")
    max_score: int = Field(0, description="Highest pillar score")
    average_percentage: float = Field(0.0, description="Mean pillar score as a percentage of its maximum")
    common_gap: Optional[str] = Field(None, description="Question most often left at its minimum")
    gap_frequency: Dict[str, int] = Field(default_factory=dict, description="Gap count per question")


class AnalyticsSnapshot(BaseModel):
    """Aggregate view over a batch of scored assessments.

    Attributes:
        total_assessments: Batch size.
        distribution: Assessment count per threshold level.
        average_score: Mean total score.
        median_score: Median total score.
        min_score: Lowest total score.
        max_score: Highest total score.
        pillar_statistics: Per-pillar statistics in pillar declaration order.
        completion_rate: Fraction of assessments with every pillar answered.
        average_time_to_complete: Mean seconds between first and last
            answer, re-answers included, over assessments with at least two
            supplied answers.

    Averages are plain means, not rounded; round them for display.
    """
    model_config = ConfigDict(frozen=True)

    total_assessments: int = 0
    distribution: Dict[str, int] = Field(default_factory=dict)
    average_score: float = 0.0
    median_score: float = 0.0
    min_score: int = 0
    max_score: int = 0
    pillar_statistics: List[PillarStatistics] = Field(default_factory=list)
    completion_rate: float = 0.0
    average_time_to_complete: Optional[float] = None

    @computed_field
    @property
    def per_pillar_average(self) -> Dict[str, float]:
        return {s.pillar_id: s.average_score for s in self.pillar_statistics}

    @computed_field
    @property
    def common_gaps(self) -> Dict[str, Optional[str]]:
        return {s.pillar_id: s.common_gap for s in self.pillar_statistics}
