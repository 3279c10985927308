"""Gap-driven coaching recommendations.

This module turns a ScoredAssessment into a prioritized, deduplicated list
of CoachingRecommendation entries. Two sources are combined:

* Condition-based: a declarative CoachingCondition fires when an answer in
  its pillar has the condition's trigger value.
* Completion-based: every pillar whose score ratio is below the completion
  threshold gets a generic recommendation, so a weak pillar is never left
  without advice.

When the configuration is missing or malformed the engine degrades to a
single generic recommendation instead of raising.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-10-19
Version: 1.0.0
License: MIT
"""

import logging
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from pydantic import ValidationError

from models.assessment_data import Answer, Confidence, ScoredAssessment
from models.coaching_data import CoachingRecommendation, PositionAnalysis
from models.qualification_config import CoachingCondition, Priority, QualificationConfig
from utils.config import config as settings
from utils.cross_field_rules import find_cross_field_errors

logger = logging.getLogger(__name__)

CRITICAL_RATIO = 0.3
STRENGTH_RATIO = 0.8
CONCERN_RATIO = 0.4

FALLBACK_TEXT = "Continue strengthening qualification across all MEDDPICC pillars"

STRENGTH_MESSAGES = {
    "metrics": "Strong business case with quantified ROI",
    "economic_buyer": "Excellent access to decision makers",
    "champion": "Powerful internal advocacy network",
    "implicate_the_pain": "Clear urgency and compelling event",
    "decision_criteria": "Strong alignment with evaluation criteria",
    "decision_process": "Well-mapped decision process",
    "paper_process": "Smooth procurement and legal path",
    "competition": "Clear competitive differentiation",
}

CONCERN_MESSAGES = {
    "metrics": "Weak business case - needs quantification",
    "economic_buyer": "Limited access to budget decision makers",
    "champion": "Insufficient internal support network",
    "implicate_the_pain": "Low urgency - no compelling event",
    "decision_criteria": "Poor fit with evaluation requirements",
    "decision_process": "Unclear decision-making process",
    "paper_process": "Potential procurement/legal obstacles",
    "competition": "Weak competitive position",
}


def fallback_recommendations() -> List[CoachingRecommendation]:
    return [CoachingRecommendation(
        pillar_id="overall",
        text=FALLBACK_TEXT,
        priority=Priority.MEDIUM,
        action_items=["Review every pillar and answer the open questions"],
        source="fallback"
    )]


def _coerce_config(config: Any) -> Optional[QualificationConfig]:
    """Return a usable configuration, or None when it is absent or malformed."""
    if config is None:
        return None
    if not isinstance(config, QualificationConfig):
        try:
            config = QualificationConfig.model_validate(config)
        except ValidationError as e:
            logger.warning(f"Coaching configuration is malformed ({e.error_count()} errors)")
            return None

    errors = find_cross_field_errors(config)
    if errors:
        logger.warning(f"Coaching configuration is inconsistent: {errors[0]}")
        return None
    return config


def _coerce_conditions(conditions: Sequence[Any]) -> List[CoachingCondition]:
    coerced = []
    for raw in conditions:
        if isinstance(raw, CoachingCondition):
            coerced.append(raw)
            continue
        try:
            coerced.append(CoachingCondition.model_validate(raw))
        except ValidationError:
            logger.debug(f"Skipping malformed coaching condition: {raw!r}")
    return coerced


class CoachingEngine:
    """Produces coaching recommendations for scored assessments.

    Attributes:
        config: Qualification configuration, or None in fallback mode.
        completion_threshold: Pillar score ratio below which a pillar gets a
            completion-based recommendation.
    """

    def __init__(self, config: Any, completion_threshold: Optional[float] = None):
        if completion_threshold is None:
            completion_threshold = settings.COACHING_COMPLETION_THRESHOLD
        if not 0.0 < completion_threshold <= 1.0:
            raise ValueError(f"completion_threshold must be in (0, 1], got {completion_threshold}")

        self.completion_threshold = completion_threshold
        self.config = _coerce_config(config)

    def _condition_recommendations(
        self,
        scored: ScoredAssessment,
        conditions: List[CoachingCondition]
    ) -> List[CoachingRecommendation]:
        pillar_ids = {p.id for p in self.config.pillars}
        recommendations = []
        for condition in conditions:
            if condition.pillar_id not in pillar_ids:
                logger.debug(f"Skipping coaching condition {condition.id} for unknown pillar '{condition.pillar_id}'")
                continue

            result = scored.get_pillar(condition.pillar_id)
            if result is None or condition.trigger_value not in result.answered_values():
                continue

            recommendations.append(CoachingRecommendation(
                pillar_id=condition.pillar_id,
                text=condition.prompt,
                priority=condition.priority,
                action_items=list(condition.action_items),
                source="condition"
            ))
        return recommendations

    def _completion_recommendations(self, scored: ScoredAssessment) -> List[CoachingRecommendation]:
        recommendations = []
        for pillar in self.config.pillars:
            result = scored.get_pillar(pillar.id)
            score = result.score if result is not None else 0
            ratio = score / pillar.max_score
            if ratio >= self.completion_threshold:
                continue

            if ratio < CRITICAL_RATIO:
                recommendations.append(CoachingRecommendation(
                    pillar_id=pillar.id,
                    text=f"Close critical gaps in {pillar.title}",
                    priority=Priority.CRITICAL,
                    action_items=list(pillar.critical_actions) or [f"Address critical gaps in {pillar.title} pillar"],
                    source="completion"
                ))
            else:
                recommendations.append(CoachingRecommendation(
                    pillar_id=pillar.id,
                    text=f"Strengthen {pillar.title} qualification",
                    priority=Priority.HIGH,
                    action_items=list(pillar.improvement_actions) or [f"Strengthen {pillar.title} pillar positioning"],
                    source="completion"
                ))
        return recommendations

    def recommend(
        self,
        scored: Optional[ScoredAssessment],
        conditions: Optional[Sequence[Any]] = None
    ) -> List[CoachingRecommendation]:
        """Return recommendations for one scored assessment.

        Args:
            scored: The scored assessment.
            conditions: List of coaching conditions to evaluate. Defaults
                to the configuration's own conditions.

        Returns:
            Recommendations ordered by pillar declaration order, then
            priority (critical first). Empty only when the assessment sits in
            the strongest level, no pillar is below the completion threshold
            and no condition fired. A weaker assessment with nothing else to
            say gets the overall fallback recommendation, as does a
            ``conditions`` argument that is not a list or tuple.
        """
        if self.config is None or scored is None:
            logger.warning("Coaching configuration or scores unavailable; using fallback recommendation")
            return fallback_recommendations()

        if conditions is None:
            conditions = self.config.coaching_conditions
        elif not isinstance(conditions, (list, tuple)):
            logger.warning(f"Coaching conditions must be a list, got {type(conditions).__name__}; using fallback recommendation")
            return fallback_recommendations()
        candidates = (
            self._condition_recommendations(scored, _coerce_conditions(conditions))
            + self._completion_recommendations(scored)
        )

        seen = set()
        unique: List[Tuple[int, CoachingRecommendation]] = []
        for recommendation in candidates:
            key = (recommendation.pillar_id, recommendation.text)
            if key in seen:
                continue
            seen.add(key)
            unique.append((len(unique), recommendation))

        order = {p.id: i for i, p in enumerate(self.config.pillars)}
        unique.sort(key=lambda item: (order[item[1].pillar_id], item[1].priority.rank, item[0]))
        recommendations = [recommendation for _, recommendation in unique]
        if not recommendations and scored.level != self.config.scoring.ordered_levels()[-1]:
            logger.info(f"No pillar-specific advice for a {scored.level} assessment; using fallback recommendation")
            return fallback_recommendations()

        logger.debug(f"Generated {len(recommendations)} coaching recommendations")
        return recommendations

    def assess_position(
        self,
        scored: ScoredAssessment,
        answers: Optional[Iterable[Any]] = None
    ) -> PositionAnalysis:
        """Summarize competitive strengths and areas of concern.

        Args:
            scored: The scored assessment.
            answers: Raw answers, used to flag pillars answered with low
                confidence.

        Returns:
            PositionAnalysis with strengths (pillars at or above 80%) and
            concerns (pillars below 40%, plus low-confidence pillars).
        """
        if self.config is None:
            return PositionAnalysis()

        strengths: List[str] = []
        concerns: List[str] = []
        for pillar in self.config.pillars:
            result = scored.get_pillar(pillar.id)
            ratio = result.ratio if result is not None else 0.0
            if ratio >= STRENGTH_RATIO:
                strengths.append(STRENGTH_MESSAGES.get(pillar.id, f"Strong {pillar.title} positioning"))
            elif ratio < CONCERN_RATIO:
                concerns.append(CONCERN_MESSAGES.get(pillar.id, f"Concerns in {pillar.title} area"))

        low_confidence: List[str] = []
        for raw in answers or []:
            answer = raw
            if isinstance(raw, Mapping):
                try:
                    answer = Answer.model_validate(raw)
                except ValidationError:
                    continue
            if isinstance(answer, Answer) and answer.confidence is Confidence.LOW:
                if answer.pillar_id not in low_confidence:
                    low_confidence.append(answer.pillar_id)

        if low_confidence:
            concerns.append(f"Low confidence in: {', '.join(low_confidence)}")

        return PositionAnalysis(strengths=strengths, concerns=concerns)


def recommend(
    config: Any,
    scored: Optional[ScoredAssessment],
    conditions: Optional[Sequence[Any]] = None,
    completion_threshold: Optional[float] = None
) -> List[CoachingRecommendation]:
    """Return coaching recommendations for a scored assessment.

    Convenience wrapper around ``CoachingEngine(config).recommend(...)``.
    """
    return CoachingEngine(config, completion_threshold).recommend(scored, conditions)


def assess_position(
    config: Any,
    scored: ScoredAssessment,
    answers: Optional[Iterable[Any]] = None
) -> PositionAnalysis:
    return CoachingEngine(config).assess_position(scored, answers)


# Made with Bob
