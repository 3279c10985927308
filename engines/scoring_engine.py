"""MEDDPICC scoring engine.

This module turns a set of answers into a ScoredAssessment: per-question
and per-pillar scores, the total, its threshold level, answer confidence,
completion and sales-stage readiness.

Scoring is a pure recomputation. The latest answer per (pillar, question)
wins; answers that reference unknown pillars, questions or option values
contribute nothing and are logged at DEBUG level.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-10-19
Version: 1.0.0
License: MIT

Example:
    >>> from utils.config_loader import load_qualification_config
    >>> engine = ScoringEngine(load_qualification_config())
    >>> scored = engine.score([
    ...     Answer(pillar_id="champion", question_id="q_ch_1", value="yes")
    ... ])
    >>> print(scored.total_score, scored.level)
    10 weak
"""

import logging
import math
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple, Union

from pydantic import ValidationError

from models.assessment_data import (
    Answer,
    Assessment,
    PillarResult,
    QuestionResult,
    ScoredAssessment,
)
from models.qualification_config import Pillar, QualificationConfig, ScoringConfig
from utils.cross_field_rules import find_cross_field_errors
from utils.exceptions import QualificationConfigError

logger = logging.getLogger(__name__)

STRONG_PILLAR_RATIO = 0.8
MODERATE_PILLAR_RATIO = 0.6

AnswerInput = Union[Answer, Mapping]


def classify_score(total: int, scoring: ScoringConfig) -> str:
    """Return the threshold level for a total score.

    Levels are walked from weakest to strongest (ascending ``min``) and the
    strongest level whose lower bound is reached wins, so a higher total can
    never land in a weaker level.

    Args:
        total: Total assessment score.
        scoring: Scoring configuration with threshold levels.

    Returns:
        Level name (e.g. "weak", "moderate", "strong").
    """
    levels = scoring.ordered_levels()
    level = levels[0]
    for candidate in levels:
        low, _ = scoring.bounds(candidate)
        if low <= total:
            level = candidate
    return level


def pillar_level(score: int, max_score: int) -> str:
    ratio = score / max_score if max_score else 0.0
    if ratio >= STRONG_PILLAR_RATIO:
        return "strong"
    if ratio >= MODERATE_PILLAR_RATIO:
        return "moderate"
    return "weak"


def _as_utc(timestamp: datetime) -> datetime:
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def _coerce_answers(answers: Iterable[AnswerInput]) -> List[Answer]:
    coerced = []
    for raw in answers or []:
        if isinstance(raw, Answer):
            coerced.append(raw)
            continue
        try:
            coerced.append(Answer.model_validate(raw))
        except ValidationError as e:
            logger.debug(f"Ignoring malformed answer {raw!r}: {e.error_count()} errors")
    return coerced


def latest_answers(answers: Iterable[AnswerInput]) -> Dict[Tuple[str, str], Answer]:
    """Keep the newest answer per (pillar_id, question_id).

    Equal timestamps resolve to the answer supplied last.
    """
    latest: Dict[Tuple[str, str], Answer] = {}
    for answer in _coerce_answers(answers):
        key = (answer.pillar_id, answer.question_id)
        current = latest.get(key)
        if current is None or _as_utc(answer.timestamp) >= _as_utc(current.timestamp):
            latest[key] = answer
    return latest


class ScoringEngine:
    """Scores answer sets against one immutable qualification configuration.

    The configuration is checked once, at construction; an engine that
    exists is always safe to call and never raises for bad answers.

    Attributes:
        config: The qualification configuration.
    """

    def __init__(self, config: QualificationConfig):
        """Initialize the scoring engine.

        Args:
            config: Qualification configuration.

        Raises:
            QualificationConfigError: If the configuration is inconsistent.
        """
        errors = find_cross_field_errors(config)
        if errors:
            logger.error(f"Refusing to score with an invalid configuration ({len(errors)} errors)")
            raise QualificationConfigError(errors)

        self.config = config
        self._known_keys = {
            (pillar.id, question.id)
            for pillar in config.pillars
            for question in pillar.questions
        }

    def _score_pillar(self, pillar: Pillar, latest: Dict[Tuple[str, str], Answer]) -> PillarResult:
        questions = []
        for question in pillar.questions:
            answer = latest.get((pillar.id, question.id))
            option = question.find_option(answer.value) if answer is not None else None
            if answer is not None and option is None:
                logger.debug(
                    f"Unknown option '{answer.value}' for question {question.id}; scored as unanswered"
                )

            questions.append(QuestionResult(
                question_id=question.id,
                value=option.value if option else None,
                score=option.score if option else None,
                min_score=question.min_score,
                max_score=question.max_score,
                at_minimum=option is None or option.score <= question.min_score
            ))

        score = sum(q.score for q in questions if q.score is not None)
        max_score = pillar.max_score
        return PillarResult(
            pillar_id=pillar.id,
            score=score,
            max_score=max_score,
            percentage=round(score / max_score * 100, 2) if max_score else 0.0,
            level=pillar_level(score, max_score),
            answered_questions=sum(1 for q in questions if q.answered),
            total_questions=len(questions),
            questions=questions
        )

    def _confidence(self, latest: Dict[Tuple[str, str], Answer], breakdown: List[PillarResult]) -> float:
        total_questions = self.config.total_questions
        if not total_questions:
            return 0.0

        weights = []
        for pillar in breakdown:
            for question in pillar.questions:
                if not question.answered:
                    continue
                answer = latest[(pillar.pillar_id, question.question_id)]
                weights.append(answer.confidence.weight if answer.confidence else 1.0)
        return min(1.0, math.fsum(weights) / total_questions)

    def stage_readiness(self, total: int, pillar_scores: Dict[str, int]) -> Dict[str, bool]:
        """Return, per sales stage, whether its score requirements are met."""
        readiness = {}
        for stage, requirement in self.config.stage_requirements.items():
            readiness[stage] = total >= requirement.min_score and all(
                pillar_scores.get(pillar_id, 0) >= requirement.min_pillar_score
                for pillar_id in requirement.required_pillars
            )
        return readiness

    def score(
        self,
        answers: Union[Assessment, Iterable[AnswerInput]],
        assessment_id: Optional[str] = None
    ) -> ScoredAssessment:
        """Score an answer set.

        Args:
            answers: Answers in any order, or an Assessment.
            assessment_id: Id recorded on the result. Taken from the
                Assessment when one is given.

        Returns:
            The scored assessment.
        """
        if isinstance(answers, Assessment):
            assessment_id = assessment_id or answers.id
            answers = answers.answers

        supplied = _coerce_answers(answers)
        latest = latest_answers(supplied)
        ignored = [key for key in latest if key not in self._known_keys]
        if ignored:
            logger.debug(f"Ignoring {len(ignored)} answers for unknown pillar/question ids: {ignored}")

        breakdown = [self._score_pillar(pillar, latest) for pillar in self.config.pillars]
        total = sum(p.score for p in breakdown)
        answered = sum(p.answered_questions for p in breakdown)
        total_questions = self.config.total_questions
        timestamps = sorted(_as_utc(a.timestamp) for a in supplied)

        scored = ScoredAssessment(
            assessment_id=assessment_id,
            pillar_breakdown=breakdown,
            level=classify_score(total, self.config.scoring),
            max_score=self.config.scoring.max_score,
            confidence=self._confidence(latest, breakdown),
            completion=answered / total_questions if total_questions else 0.0,
            answer_count=len(latest),
            supplied_answer_count=len(supplied),
            first_answer_at=timestamps[0] if timestamps else None,
            last_answer_at=timestamps[-1] if timestamps else None,
            stage_readiness=self.stage_readiness(total, {p.pillar_id: p.score for p in breakdown})
        )

        logger.debug(
            f"Scored assessment {assessment_id or '<anonymous>'}: "
            f"{total}/{scored.max_score} ({scored.level}), completion {scored.completion:.0%}"
        )
        return scored


def score(
    config: QualificationConfig,
    answers: Union[Assessment, Iterable[AnswerInput]],
    assessment_id: Optional[str] = None
) -> ScoredAssessment:
    """Score an answer set against a configuration.

    Convenience wrapper around ``ScoringEngine(config).score(answers)``.
    """
    return ScoringEngine(config).score(answers, assessment_id=assessment_id)


# Made with Bob
