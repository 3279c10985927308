"""Cross-field governance rules for qualification configurations.

These rules enforce constraints that cannot be expressed using JSON Schema
alone and MUST be executed after schema validation, on a parsed
QualificationConfig.

Every rule appends to a shared list so that a configuration author sees all
problems in one pass.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-10-19
Version: 1.0.0
License: MIT
"""

from models.config_error import ConfigError
from models.qualification_config import QualificationConfig, ScoringConfig


def find_cross_field_errors(config: QualificationConfig) -> list[ConfigError]:
    errors: list[ConfigError] = []

    # ------------------------------------------------------------
    # Rule 1: Pillar ids unique, question ids unique across pillars
    # ------------------------------------------------------------
    seen_pillars = set()
    seen_questions: dict[str, str] = {}
    for pillar in config.pillars:
        if pillar.id in seen_pillars:
            errors.append(ConfigError(
                location=f"pillars.{pillar.id}",
                message=f"Duplicate pillar id '{pillar.id}'"
            ))
        seen_pillars.add(pillar.id)

        for question in pillar.questions:
            if question.id in seen_questions:
                errors.append(ConfigError(
                    location=f"pillars.{pillar.id}.questions.{question.id}",
                    message=(
                        f"Duplicate question id '{question.id}' "
                        f"(already used in pillar '{seen_questions[question.id]}')"
                    )
                ))
            else:
                seen_questions[question.id] = pillar.id

    # ------------------------------------------------------------
    # Rule 2: Options are non-negative, weakly increasing, distinct
    # ------------------------------------------------------------
    for pillar in config.pillars:
        for question in pillar.questions:
            location = f"pillars.{pillar.id}.questions.{question.id}"
            if not question.options:
                errors.append(ConfigError(location=location, message="Question has no answer options"))
                continue

            values = [o.value for o in question.options]
            duplicates = sorted({v for v in values if values.count(v) > 1})
            if duplicates:
                errors.append(ConfigError(
                    location=location,
                    message=f"Duplicate option values: {', '.join(duplicates)}"
                ))

            previous = None
            for option in question.options:
                if option.score < 0:
                    errors.append(ConfigError(
                        location=f"{location}.{option.value}",
                        message=f"Option score must be non-negative (found {option.score})"
                    ))
                if previous is not None and option.score < previous:
                    errors.append(ConfigError(
                        location=f"{location}.{option.value}",
                        message="Option scores must not decrease from weaker to stronger answers"
                    ))
                previous = option.score

    # ------------------------------------------------------------
    # Rule 3: Pillar maxScore matches its questions
    # ------------------------------------------------------------
    for pillar in config.pillars:
        computed = pillar.computed_max_score
        if pillar.declared_max_score is not None and pillar.declared_max_score != computed:
            errors.append(ConfigError(
                location=f"pillars.{pillar.id}.maxScore",
                message=(
                    f"maxScore {pillar.declared_max_score} does not match the sum of "
                    f"question maximums ({computed})"
                )
            ))
        if pillar.max_score <= 0:
            errors.append(ConfigError(
                location=f"pillars.{pillar.id}.maxScore",
                message="Pillar maximum score must be positive"
            ))

    # ------------------------------------------------------------
    # Rule 4: Scoring maxScore and exhaustive thresholds
    # ------------------------------------------------------------
    total_max = sum(p.max_score for p in config.pillars)
    if config.scoring.max_score != total_max:
        errors.append(ConfigError(
            location="scoring.maxScore",
            message=f"maxScore {config.scoring.max_score} does not match the sum of pillar maximums ({total_max})"
        ))
    errors.extend(find_threshold_errors(config.scoring))

    # ------------------------------------------------------------
    # Rule 5: Coaching conditions and stages reference real pillars
    # ------------------------------------------------------------
    for index, condition in enumerate(config.coaching_conditions):
        if condition.pillar_id not in seen_pillars:
            errors.append(ConfigError(
                location=f"coachingConditions.{condition.id or index}",
                message=f"Unknown pillar '{condition.pillar_id}'"
            ))

    for stage, requirement in config.stage_requirements.items():
        for pillar_id in requirement.required_pillars:
            if pillar_id not in seen_pillars:
                errors.append(ConfigError(
                    location=f"stageRequirements.{stage}",
                    message=f"Unknown pillar '{pillar_id}'"
                ))
        if requirement.min_score > config.scoring.max_score:
            errors.append(ConfigError(
                location=f"stageRequirements.{stage}.minScore",
                message=f"minScore {requirement.min_score} exceeds scoring maxScore {config.scoring.max_score}"
            ))

    return errors


def find_threshold_errors(scoring: ScoringConfig) -> list[ConfigError]:
    """Check that threshold levels partition ``[0, max_score]`` contiguously.

    Missing ``min`` means 0 and missing ``max`` means ``max_score``. Levels
    are walked in ascending ``min`` order; each level must start exactly one
    above the previous level's end, the first must start at 0 and the last
    must end at ``max_score``.

    Args:
        scoring: Scoring configuration to check.

    Returns:
        List of threshold errors (empty if the partition is exact).
    """
    errors: list[ConfigError] = []
    if not scoring.thresholds:
        return [ConfigError(location="scoring.thresholds", message="At least one threshold level is required")]

    expected_low = 0
    levels = scoring.ordered_levels()
    for position, level in enumerate(levels):
        location = f"scoring.thresholds.{level}"
        threshold = scoring.thresholds[level]
        low, high = scoring.bounds(level)

        if threshold.max is None and position != len(levels) - 1:
            errors.append(ConfigError(location=location, message="Only the strongest level may omit max"))
        if low > high:
            errors.append(ConfigError(location=location, message=f"min {low} is greater than max {high}"))
        if low < expected_low:
            errors.append(ConfigError(
                location=location,
                message=f"Range overlaps the previous level (starts at {low}, expected {expected_low})"
            ))
        elif low > expected_low:
            errors.append(ConfigError(
                location=location,
                message=f"Scores {expected_low}-{low - 1} are not covered by any level"
            ))
        expected_low = max(expected_low, high + 1)

    if expected_low <= scoring.max_score:
        errors.append(ConfigError(
            location="scoring.thresholds",
            message=f"Scores {expected_low}-{scoring.max_score} are not covered by any level"
        ))
    elif expected_low > scoring.max_score + 1:
        errors.append(ConfigError(
            location="scoring.thresholds",
            message=f"Threshold ranges extend beyond maxScore {scoring.max_score}"
        ))

    return errors
