"""Tests for event rating recomputation and refresh ordering."""

from __future__ import annotations

import pytest

from domain.pipeline import RatingRefreshSequencer, compute_event_ratings
from domain.ratings.common import Alliance, EventMatch
from domain.ratings.opr.calculator import OprParameters


def _match(
    label: str,
    red: tuple[int, ...],
    red_score: float | None,
    blue: tuple[int, ...],
    blue_score: float | None,
) -> EventMatch:
    return EventMatch(
        label=label,
        red=Alliance(team_numbers=red, score=red_score),
        blue=Alliance(team_numbers=blue, score=blue_score),
    )


MATCHES = [
    _match("Q1", (1,), 20, (2,), 15),
    _match("Q2", (1,), 30, (3,), 10),
    _match("Q3", (2,), 25, (3,), 5),
    _match("Q4", (1,), float("nan"), (2,), 3),
    _match("Q5", (3,), None, (1,), None),
]


def test_compute_event_ratings_reports_counts() -> None:
    messages: list[str] = []
    event_ratings = compute_event_ratings([1, 2, 3], MATCHES, echo=messages.append)

    assert event_ratings.has_ratings
    assert [result.team_number for result in event_ratings.ratings] == [1, 2, 3]
    assert [result.team_number for result in event_ratings.schedule_strength] == [1, 2, 3]
    assert event_ratings.score_summary is not None
    assert event_ratings.total_matches == 5
    assert event_ratings.completed_matches == 3
    assert event_ratings.skipped_matches == 1
    assert event_ratings.converged is True
    assert event_ratings.solver_iterations == 2
    assert messages == [
        "total_matches=5 completed_matches=3 skipped_matches=1 rated_teams=3 schedule_teams=3"
    ]


def test_insufficient_sample_is_an_empty_result_not_an_error() -> None:
    messages: list[str] = []
    event_ratings = compute_event_ratings(
        [1, 2, 3],
        MATCHES,
        params=OprParameters(min_completed_matches=4),
        echo=messages.append,
    )

    assert event_ratings.ratings == []
    assert event_ratings.schedule_strength == []
    assert not event_ratings.has_ratings
    assert event_ratings.converged is None
    assert messages[0].startswith("insufficient sample completed_matches=3")


def test_roster_without_played_teams_is_not_reported_as_small_sample() -> None:
    messages: list[str] = []
    event_ratings = compute_event_ratings([7, 8], MATCHES, echo=messages.append)

    assert event_ratings.ratings == []
    assert event_ratings.completed_matches == 3
    assert not any(message.startswith("insufficient sample") for message in messages)


def test_iteration_cap_is_reported_as_not_converged() -> None:
    pair_matches = [
        _match("Q1", (1, 2), 30, (3, 4), 70),
        _match("Q2", (1, 3), 40, (2, 4), 60),
        _match("Q3", (1, 4), 50, (2, 3), 50),
    ]
    messages: list[str] = []
    event_ratings = compute_event_ratings(
        [1, 2, 3, 4],
        pair_matches,
        params=OprParameters(max_iterations=1),
        echo=messages.append,
    )

    assert len(event_ratings.ratings) == 4
    assert event_ratings.converged is False
    assert event_ratings.solver_iterations == 1
    assert messages[0] == "not converged iterations=1 max_iterations=1 tolerance=0.01"


def test_sequencer_applies_results_in_fetch_order() -> None:
    sequencer = RatingRefreshSequencer()
    older = sequencer.begin_fetch()
    newer = sequencer.begin_fetch()

    stale = compute_event_ratings([1, 2, 3], MATCHES[:2])
    fresh = compute_event_ratings([1, 2, 3], MATCHES)

    assert sequencer.apply(newer, fresh) is True
    assert sequencer.apply(older, stale) is False
    assert sequencer.current is fresh
    assert sequencer.applied_token == newer


def test_sequencer_accepts_in_order_completions() -> None:
    sequencer = RatingRefreshSequencer()
    assert sequencer.current is None

    first = sequencer.begin_fetch()
    first_result = compute_event_ratings([1, 2, 3], MATCHES[:2])
    assert sequencer.apply(first, first_result) is True

    second = sequencer.begin_fetch()
    second_result = compute_event_ratings([1, 2, 3], MATCHES)
    assert sequencer.apply(second, second_result) is True
    assert sequencer.current is second_result


def test_sequencer_rejects_unissued_tokens() -> None:
    sequencer = RatingRefreshSequencer()
    sequencer.begin_fetch()

    with pytest.raises(ValueError, match="was never issued"):
        sequencer.apply(5, compute_event_ratings([], []))
