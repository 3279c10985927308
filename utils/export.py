"""Utility for exporting scored assessments.

This module renders a ScoredAssessment as JSON, CSV or a plain-text
summary so callers can offer downloads or log readable reports. Nothing is
written to disk here; callers decide where the text goes.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-10-19
Version: 1.0.0
License: MIT

Example:
    >>> from utils.export import export_assessment
    >>> print(export_assessment(scored, config, fmt="summary"))
    Assessment: opp-42
    Total: 150/320 (weak)
    ...
"""

import csv
import io
import json
import logging

from models.assessment_data import ScoredAssessment
from models.qualification_config import QualificationConfig

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("summary", "json", "csv")

CSV_FIELDS = [
    "pillar_id",
    "title",
    "score",
    "max_score",
    "percentage",
    "level",
    "answered_questions",
    "total_questions",
]


def _titles(config: QualificationConfig) -> dict:
    return {pillar.id: pillar.title for pillar in config.pillars}


def export_json(scored: ScoredAssessment, config: QualificationConfig) -> str:
    data = {
        "config_version": config.version,
        "assessment": scored.model_dump(mode="json"),
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def export_csv(scored: ScoredAssessment, config: QualificationConfig) -> str:
    """One row per pillar followed by a TOTAL row."""
    titles = _titles(config)
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_FIELDS, lineterminator="\n")
    writer.writeheader()

    for pillar in scored.pillar_breakdown:
        writer.writerow({
            "pillar_id": pillar.pillar_id,
            "title": titles.get(pillar.pillar_id, pillar.pillar_id),
            "score": pillar.score,
            "max_score": pillar.max_score,
            "percentage": pillar.percentage,
            "level": pillar.level,
            "answered_questions": pillar.answered_questions,
            "total_questions": pillar.total_questions,
        })

    writer.writerow({
        "pillar_id": "TOTAL",
        "title": "Total",
        "score": scored.total_score,
        "max_score": scored.max_score,
        "percentage": round(scored.total_score / scored.max_score * 100, 2) if scored.max_score else 0.0,
        "level": scored.level,
        "answered_questions": sum(p.answered_questions for p in scored.pillar_breakdown),
        "total_questions": sum(p.total_questions for p in scored.pillar_breakdown),
    })
    return buffer.getvalue()


def export_summary(scored: ScoredAssessment, config: QualificationConfig) -> str:
    titles = _titles(config)
    threshold = config.scoring.thresholds.get(scored.level)
    level_label = threshold.label if threshold and threshold.label else scored.level

    lines = [
        f"Assessment: {scored.assessment_id or 'unnamed'}",
        f"Total: {scored.total_score}/{scored.max_score} ({level_label})",
        f"Completion: {scored.completion:.0%}  Confidence: {scored.confidence:.0%}",
        "",
        "Pillars:",
    ]
    for pillar in scored.pillar_breakdown:
        lines.append(
            f"  {titles.get(pillar.pillar_id, pillar.pillar_id)}: "
            f"{pillar.score}/{pillar.max_score} ({pillar.level})"
        )

    if scored.stage_readiness:
        lines.append("")
        lines.append("Stage readiness:")
        for stage, ready in scored.stage_readiness.items():
            lines.append(f"  {stage}: {'ready' if ready else 'not ready'}")

    return "\n".join(lines) + "\n"


def export_assessment(scored: ScoredAssessment, config: QualificationConfig, fmt: str = "summary") -> str:
    """Render a scored assessment.

    Args:
        scored: The scored assessment.
        config: Configuration used for titles and level labels.
        fmt: "summary", "json" or "csv".

    Returns:
        The rendered text.

    Raises:
        ValueError: If ``fmt`` is not a supported format.
    """
    if fmt == "json":
        return export_json(scored, config)
    if fmt == "csv":
        return export_csv(scored, config)
    if fmt == "summary":
        return export_summary(scored, config)

    logger.error(f"Unsupported export format: {fmt}")
    raise ValueError(f"Unsupported export format '{fmt}' (expected one of {', '.join(EXPORT_FORMATS)})")


# Made with Bob
