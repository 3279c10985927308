"""Tests for batch analytics over scored assessments.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-10-19
Version: 1.0.0
License: MIT
"""

import random

import pytest

from engines.analytics_aggregator import aggregate, common_gap
from engines.scoring_engine import score


@pytest.fixture
def batch(meddpicc_config, answer_all, make_answer):
    """Three assessments: one strong, two weak."""
    strong = score(meddpicc_config, answer_all("yes"), assessment_id="strong")
    weak_single = score(meddpicc_config, [make_answer("metrics", "q_metrics_2", "yes")], assessment_id="weak-1")
    weak_empty = score(meddpicc_config, [], assessment_id="weak-2")
    return [strong, weak_single, weak_empty]


def test_distribution_counts_every_level(meddpicc_config, batch):
    snapshot = aggregate(batch, meddpicc_config)

    assert snapshot.distribution == {"strong": 1, "weak": 2, "moderate": 0}
    assert snapshot.total_assessments == 3


def test_unknown_levels_are_counted_by_name(meddpicc_config, batch):
    odd = batch[0].model_copy(update={"level": "legacy"})

    snapshot = aggregate([odd], meddpicc_config)

    assert snapshot.distribution["legacy"] == 1
    assert snapshot.distribution["strong"] == 0


def test_score_statistics(meddpicc_config, batch):
    snapshot = aggregate(batch, meddpicc_config)

    assert snapshot.average_score == pytest.approx(110.0)
    assert snapshot.median_score == 10
    assert snapshot.min_score == 0
    assert snapshot.max_score == 320


def test_per_pillar_statistics(meddpicc_config, batch):
    snapshot = aggregate(batch, meddpicc_config)
    metrics = snapshot.pillar_statistics[0]

    assert [s.pillar_id for s in snapshot.pillar_statistics] == [p.id for p in meddpicc_config.pillars]
    assert metrics.average_score == pytest.approx(50 / 3, abs=0.01)
    assert (metrics.min_score, metrics.max_score) == (0, 40)
    assert snapshot.per_pillar_average["champion"] == pytest.approx(40 / 3, abs=0.01)


def test_common_gap_prefers_most_frequent_then_declaration_order(meddpicc_config, batch):
    snapshot = aggregate(batch, meddpicc_config)

    # q_metrics_2 was answered "yes" once, so it is the least frequent gap
    assert snapshot.common_gaps["metrics"] == "q_metrics_1"
    assert snapshot.pillar_statistics[0].gap_frequency == {
        "q_metrics_1": 2, "q_metrics_2": 1, "q_metrics_3": 2, "q_metrics_4": 2,
    }
    assert snapshot.common_gaps["champion"] == "q_ch_1"


def test_lowest_option_counts_as_gap(meddpicc_config, answer_all, make_answer):
    answers = answer_all("yes") + [make_answer("competition", "q_co_3", "no", seconds=3600)]

    snapshot = aggregate([score(meddpicc_config, answers)], meddpicc_config)

    assert snapshot.common_gaps["competition"] == "q_co_3"
    assert snapshot.common_gaps["metrics"] is None


def test_common_gap_without_gaps():
    assert common_gap({"a": 0, "b": 0}) is None
    assert common_gap({"a": 1, "b": 2, "c": 2}) == "b"


def test_completion_rate_and_time_to_complete(meddpicc_config, batch):
    snapshot = aggregate(batch, meddpicc_config)

    assert snapshot.completion_rate == pytest.approx(1 / 3)
    # Only the strong assessment has two or more answers: offsets 0..3 seconds
    assert snapshot.average_time_to_complete == pytest.approx(3.0)


def test_time_to_complete_counts_re_answers(small_config, make_answer):
    replaced_first = score(small_config, [
        make_answer("alpha", "q_a1", "no", seconds=0),
        make_answer("alpha", "q_a2", "yes", seconds=5),
        make_answer("alpha", "q_a1", "yes", seconds=10),
    ])
    re_answered_only = score(small_config, [
        make_answer("alpha", "q_a1", "no", seconds=0),
        make_answer("alpha", "q_a1", "yes", seconds=30),
    ])

    assert aggregate([replaced_first], small_config).average_time_to_complete == pytest.approx(10.0)
    assert aggregate([re_answered_only], small_config).average_time_to_complete == pytest.approx(30.0)
    assert aggregate([replaced_first, re_answered_only], small_config).average_time_to_complete == pytest.approx(20.0)


def test_averages_are_not_rounded(meddpicc_config, batch):
    snapshot = aggregate(batch, meddpicc_config)

    assert snapshot.pillar_statistics[0].average_score == 50 / 3


def test_empty_batch(meddpicc_config):
    snapshot = aggregate([], meddpicc_config)

    assert snapshot.total_assessments == 0
    assert snapshot.distribution == {"weak": 0, "moderate": 0, "strong": 0}
    assert snapshot.average_score == 0.0
    assert snapshot.completion_rate == 0.0
    assert snapshot.average_time_to_complete is None
    assert all(s.common_gap is None for s in snapshot.pillar_statistics)


def test_aggregate_is_order_independent(meddpicc_config, batch, answer_all):
    batch = batch + [score(meddpicc_config, answer_all("partial"), assessment_id="mid")]
    shuffled = list(batch)
    random.Random(7).shuffle(shuffled)

    assert aggregate(batch, meddpicc_config) == aggregate(shuffled, meddpicc_config)
    assert aggregate(batch, meddpicc_config) == aggregate(batch, meddpicc_config)
