"""Recompute event ratings from one data snapshot."""

from __future__ import annotations

import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from domain.ratings.common import (
    EventMatch,
    RatingResult,
    ScheduleStrengthResult,
    filter_scored_matches,
)
from domain.ratings.opr.calculator import OprParameters, solve_ratings
from domain.ratings.schedule.calculator import (
    ScheduleStrengthParameters,
    compute_schedule_strength,
)
from domain.ratings.summary import EventScoreSummary, summarize_event_scores


@dataclass(frozen=True)
class EventRatings:
    """Everything derived from one (teams, matches) snapshot."""

    ratings: list[RatingResult]
    schedule_strength: list[ScheduleStrengthResult]
    score_summary: EventScoreSummary | None
    total_matches: int
    completed_matches: int
    skipped_matches: int
    solver_iterations: int = 0
    # None when the solver never ran.
    converged: bool | None = None

    @property
    def has_ratings(self) -> bool:
        return bool(self.ratings)


def compute_event_ratings(
    teams: Sequence[int],
    matches: Sequence[EventMatch],
    *,
    params: OprParameters | None = None,
    schedule_params: ScheduleStrengthParameters | None = None,
    echo: Callable[[str], None] | None = None,
) -> EventRatings:
    """Run OPR then schedule strength over the same snapshot."""
    params = params or OprParameters()
    scored_matches, skipped_matches = filter_scored_matches(matches)

    ratings, solution = solve_ratings(teams, scored_matches, params)
    schedule_strength = compute_schedule_strength(teams, scored_matches, ratings, schedule_params)
    score_summary = summarize_event_scores(scored_matches)

    if echo is not None:
        if not teams or len(scored_matches) < params.min_completed_matches:
            echo(
                "insufficient sample "
                f"completed_matches={len(scored_matches)} "
                f"min_completed_matches={params.min_completed_matches} "
                f"roster_teams={len(teams)}"
            )
        if solution is not None and not solution.converged:
            echo(
                "not converged "
                f"iterations={solution.iterations} "
                f"max_iterations={params.max_iterations} "
                f"tolerance={params.tolerance}"
            )
        echo(
            f"total_matches={len(matches)} "
            f"completed_matches={len(scored_matches)} "
            f"skipped_matches={skipped_matches} "
            f"rated_teams={len(ratings)} "
            f"schedule_teams={len(schedule_strength)}"
        )

    return EventRatings(
        ratings=ratings,
        schedule_strength=schedule_strength,
        score_summary=score_summary,
        total_matches=len(matches),
        completed_matches=len(scored_matches),
        skipped_matches=skipped_matches,
        solver_iterations=0 if solution is None else solution.iterations,
        converged=None if solution is None else solution.converged,
    )


class RatingRefreshSequencer:
    """Apply refresh results in the order their data was fetched.

    Each refresh takes a token from ``begin_fetch`` before requesting data.
    A result is applied only if its token is newer than the last applied one,
    so a slow response for stale data never replaces a newer result.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._issued = 0
        self._applied = 0
        self._current: EventRatings | None = None

    @property
    def current(self) -> EventRatings | None:
        with self._lock:
            return self._current

    @property
    def applied_token(self) -> int:
        with self._lock:
            return self._applied

    def begin_fetch(self) -> int:
        with self._lock:
            self._issued += 1
            return self._issued

    def apply(self, token: int, event_ratings: EventRatings) -> bool:
        """Store ``event_ratings`` unless a newer fetch was already applied."""
        with self._lock:
            if token < 1 or token > self._issued:
                raise ValueError(f"fetch token={token} was never issued")
            if token <= self._applied:
                return False
            self._applied = token
            self._current = event_ratings
            return True


__all__ = ["EventRatings", "RatingRefreshSequencer", "compute_event_ratings"]
