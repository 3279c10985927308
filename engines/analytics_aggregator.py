"""Analytics over batches of scored assessments.

This module aggregates many ScoredAssessments into an AnalyticsSnapshot:
level distribution, overall score statistics, per-pillar statistics with
their most common gap, completion rate and average time to complete.

Every call recomputes from scratch. Sums use ``math.fsum`` and medians sort
their inputs, so the snapshot does not depend on the order of the batch.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-10-19
Version: 1.0.0
License: MIT
"""

import logging
import math
import statistics
from typing import Dict, Iterable, List, Optional

from models.analytics_data import AnalyticsSnapshot, PillarStatistics
from models.assessment_data import PillarResult, ScoredAssessment
from models.qualification_config import Pillar, QualificationConfig

logger = logging.getLogger(__name__)


def _mean(values: List[float]) -> float:
    return math.fsum(values) / len(values) if values else 0.0


def level_distribution(scored: List[ScoredAssessment], config: QualificationConfig) -> Dict[str, int]:
    """Count assessments per threshold level.

    Every configured level is present (zero when unused); levels unknown to
    the configuration are counted under their own name.
    """
    distribution = {level: 0 for level in config.scoring.ordered_levels()}
    for assessment in scored:
        distribution[assessment.level] = distribution.get(assessment.level, 0) + 1
    return distribution


def gap_frequency(pillar: Pillar, results: List[Optional[PillarResult]]) -> Dict[str, int]:
    """Count, per question, how many assessments left it at its minimum.

    A missing pillar or question result counts as unanswered, hence a gap.
    """
    counts = {question.id: 0 for question in pillar.questions}
    for result in results:
        at_minimum = {}
        if result is not None:
            at_minimum = {q.question_id: q.at_minimum for q in result.questions}
        for question in pillar.questions:
            if at_minimum.get(question.id, True):
                counts[question.id] += 1
    return counts


def common_gap(counts: Dict[str, int]) -> Optional[str]:
    """Return the most frequent gap; ties go to the earlier question."""
    best_id, best_count = None, 0
    for question_id, count in counts.items():
        if count > best_count:
            best_id, best_count = question_id, count
    return best_id


def pillar_statistics(pillar: Pillar, scored: List[ScoredAssessment]) -> PillarStatistics:
    results = [assessment.get_pillar(pillar.id) for assessment in scored]
    scores = [result.score if result is not None else 0 for result in results]
    max_score = pillar.max_score
    counts = gap_frequency(pillar, results)

    return PillarStatistics(
        pillar_id=pillar.id,
        average_score=_mean(scores),
        min_score=min(scores, default=0),
        max_score=max(scores, default=0),
        average_percentage=_mean([s / max_score * 100 for s in scores]) if max_score else 0.0,
        common_gap=common_gap(counts),
        gap_frequency=counts
    )


def _is_complete(assessment: ScoredAssessment, config: QualificationConfig) -> bool:
    for pillar in config.pillars:
        result = assessment.get_pillar(pillar.id)
        if result is None or result.answered_questions == 0:
            return False
    return True


def _time_to_complete(assessment: ScoredAssessment) -> Optional[float]:
    if assessment.supplied_answer_count < 2 or assessment.first_answer_at is None or assessment.last_answer_at is None:
        return None
    return (assessment.last_answer_at - assessment.first_answer_at).total_seconds()


def aggregate(scored_assessments: Iterable[ScoredAssessment], config: QualificationConfig) -> AnalyticsSnapshot:
    """Aggregate a batch of scored assessments.

    Args:
        scored_assessments: Scored assessments, in any order.
        config: Qualification configuration the assessments were scored with.

    Returns:
        AnalyticsSnapshot for the batch. An empty batch yields zero counts,
        zero averages and no average time to complete.

    Example:
        >>> snapshot = aggregate([strong, weak, weak], config)
        >>> print(snapshot.distribution)
        {'weak': 2, 'moderate': 0, 'strong': 1}
    """
    scored = list(scored_assessments)
    logger.debug(f"Aggregating {len(scored)} scored assessments")

    totals = [assessment.total_score for assessment in scored]
    durations = [d for d in (_time_to_complete(a) for a in scored) if d is not None]
    completed = sum(1 for assessment in scored if _is_complete(assessment, config))

    snapshot = AnalyticsSnapshot(
        total_assessments=len(scored),
        distribution=level_distribution(scored, config),
        average_score=_mean(totals),
        median_score=float(statistics.median(totals)) if totals else 0.0,
        min_score=min(totals, default=0),
        max_score=max(totals, default=0),
        pillar_statistics=[pillar_statistics(pillar, scored) for pillar in config.pillars],
        completion_rate=completed / len(scored) if scored else 0.0,
        average_time_to_complete=_mean(durations) if durations else None
    )

    if not scored:
        logger.warning("Aggregated an empty batch of assessments")
    return snapshot


# Made with Bob
