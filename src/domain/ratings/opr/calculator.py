"""Offensive Power Rating via least squares over alliance scores."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from domain.ratings.common import EventMatch, RatingResult, filter_scored_matches, unique_roster


@dataclass(frozen=True)
class OprParameters:
    min_completed_matches: int = 3
    max_iterations: int = 100
    tolerance: float = 0.01
    # None derives the alliance size from the matches themselves.
    assumed_alliance_size: float | None = None


@dataclass(frozen=True)
class NormalEquations:
    """Projection ``(AᵗA, Aᵗb)`` of the alliance-score design matrix."""

    team_numbers: tuple[int, ...]
    ata: list[list[float]]
    atb: list[float]
    total_score: float
    alliance_count: int
    team_slot_count: int

    def observed_alliance_size(self) -> float:
        if self.alliance_count == 0:
            return 0.0
        return self.team_slot_count / self.alliance_count


@dataclass(frozen=True)
class GaussSeidelSolution:
    values: list[float]
    iterations: int
    converged: bool


def build_normal_equations(teams: Sequence[int], matches: Sequence[EventMatch]) -> NormalEquations:
    """Accumulate ``AᵗA`` and ``Aᵗb`` directly from completed matches.

    Each alliance contributes one equation: the sum of its members' ratings equals
    its score. Only teammates share cross terms. Members missing from the roster
    are ignored, and a match is dropped when either alliance has no roster teams.
    """
    team_numbers = tuple(unique_roster(teams))
    team_index = {team: index for index, team in enumerate(team_numbers)}
    size = len(team_numbers)

    ata = [[0.0] * size for _ in range(size)]
    atb = [0.0] * size
    total_score = 0.0
    alliance_count = 0
    team_slot_count = 0

    scored_matches, _ = filter_scored_matches(matches)
    for match in scored_matches:
        for _, alliance in match.alliances():
            total_score += float(alliance.score)
            alliance_count += 1
            team_slot_count += len(alliance.team_numbers)

        red_indexes = [team_index[team] for team in match.red.team_numbers if team in team_index]
        blue_indexes = [team_index[team] for team in match.blue.team_numbers if team in team_index]
        if not red_indexes or not blue_indexes:
            continue

        for indexes, score in ((red_indexes, match.red.score), (blue_indexes, match.blue.score)):
            for row in indexes:
                atb[row] += float(score)
                for column in indexes:
                    ata[row][column] += 1.0

    return NormalEquations(
        team_numbers=team_numbers,
        ata=ata,
        atb=atb,
        total_score=total_score,
        alliance_count=alliance_count,
        team_slot_count=team_slot_count,
    )


def initial_estimate(equations: NormalEquations, assumed_alliance_size: float | None = None) -> float:
    """Average alliance score per team slot, used to seed every rating."""
    alliance_size = (
        assumed_alliance_size
        if assumed_alliance_size is not None
        else equations.observed_alliance_size()
    )
    denominator = equations.alliance_count * alliance_size
    if denominator <= 0.0:
        return 0.0
    return equations.total_score / denominator


def solve_gauss_seidel(
    ata: Sequence[Sequence[float]],
    atb: Sequence[float],
    initial: float,
    *,
    max_iterations: int = 100,
    tolerance: float = 0.01,
) -> GaussSeidelSolution:
    """Relax ``ata @ x = atb`` in place, one unknown at a time.

    Rows with a zero diagonal are left at ``initial``. Stops once the largest
    per-pass change drops below ``tolerance`` or after ``max_iterations`` passes.
    """
    size = len(atb)
    values = [initial] * size
    iterations = 0
    converged = False

    for _ in range(max_iterations):
        iterations += 1
        max_change = 0.0
        for i in range(size):
            diagonal = ata[i][i]
            if diagonal == 0.0:
                continue

            row = ata[i]
            residual = atb[i]
            for j in range(size):
                if j != i:
                    residual -= row[j] * values[j]

            new_value = residual / diagonal
            max_change = max(max_change, abs(new_value - values[i]))
            values[i] = new_value

        if max_change < tolerance:
            converged = True
            break

    return GaussSeidelSolution(values=values, iterations=iterations, converged=converged)


def solve_ratings(
    teams: Sequence[int],
    matches: Sequence[EventMatch],
    params: OprParameters | None = None,
) -> tuple[list[RatingResult], GaussSeidelSolution | None]:
    """Ratings plus the solver outcome, or ``([], None)`` when the sample gate fails."""
    params = params or OprParameters()
    if not teams:
        return [], None

    scored_matches, _ = filter_scored_matches(matches)
    if len(scored_matches) < params.min_completed_matches:
        return [], None

    equations = build_normal_equations(teams, scored_matches)
    solution = solve_gauss_seidel(
        equations.ata,
        equations.atb,
        initial_estimate(equations, params.assumed_alliance_size),
        max_iterations=params.max_iterations,
        tolerance=params.tolerance,
    )

    played = [
        (team, solution.values[index])
        for index, team in enumerate(equations.team_numbers)
        if equations.ata[index][index] != 0.0
    ]
    # sorted() is stable under reverse=True, so equal ratings keep roster order.
    ordered = sorted(played, key=lambda item: item[1], reverse=True)
    ratings = [
        RatingResult(team_number=team, opr=opr, rank=rank)
        for rank, (team, opr) in enumerate(ordered, start=1)
    ]
    return ratings, solution


def compute_ratings(
    teams: Sequence[int],
    matches: Sequence[EventMatch],
    params: OprParameters | None = None,
) -> list[RatingResult]:
    """Return one OPR per roster team that played, best first.

    Returns an empty list when the roster is empty or fewer than
    ``min_completed_matches`` well-formed completed matches exist.
    """
    ratings, _ = solve_ratings(teams, matches, params)
    return ratings


__all__ = [
    "GaussSeidelSolution",
    "NormalEquations",
    "OprParameters",
    "build_normal_equations",
    "compute_ratings",
    "initial_estimate",
    "solve_gauss_seidel",
    "solve_ratings",
]
