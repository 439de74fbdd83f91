"""Strength of schedule derived from OPR."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from domain.ratings.common import (
    EventMatch,
    RatingResult,
    ScheduleStrengthResult,
    filter_scored_matches,
    unique_roster,
)
from domain.ratings.protocol import AllianceColor, ScheduleLuck


@dataclass(frozen=True)
class ScheduleStrengthParameters:
    luck_threshold: float = 2.0


def classify_schedule_strength(sos: float, threshold: float = 2.0) -> ScheduleLuck:
    """Label a schedule lucky above ``+threshold`` and unlucky below ``-threshold``."""
    if sos > threshold:
        return ScheduleLuck.LUCKY
    if sos < -threshold:
        return ScheduleLuck.UNLUCKY
    return ScheduleLuck.NEUTRAL


def _average(total: float, count: int) -> float:
    return total / count if count > 0 else 0.0


def compute_schedule_strength(
    teams: Sequence[int],
    matches: Sequence[EventMatch],
    ratings: Sequence[RatingResult],
    params: ScheduleStrengthParameters | None = None,
) -> list[ScheduleStrengthResult]:
    """Average partner OPR minus average opponent OPR for every roster team.

    Partners and opponents without a rating are left out of both the sum and
    the count. Teams with no completed matches, or whose partners and opponents
    are all unrated, are omitted.
    """
    params = params or ScheduleStrengthParameters()
    if not ratings:
        return []

    opr_lookup = {result.team_number: result.opr for result in ratings}
    scored_matches, _ = filter_scored_matches(matches)

    entries: list[tuple[int, float, float, float, int]] = []
    for team in unique_roster(teams):
        partner_sum = 0.0
        partner_count = 0
        opponent_sum = 0.0
        opponent_count = 0
        match_count = 0

        for match in scored_matches:
            color = match.alliance_for(team)
            if color is None:
                continue
            match_count += 1

            own, other = (match.red, match.blue) if color is AllianceColor.RED else (match.blue, match.red)
            for partner in own.team_numbers:
                if partner != team and partner in opr_lookup:
                    partner_sum += opr_lookup[partner]
                    partner_count += 1
            for opponent in other.team_numbers:
                if opponent in opr_lookup:
                    opponent_sum += opr_lookup[opponent]
                    opponent_count += 1

        if match_count == 0 or partner_count + opponent_count == 0:
            continue

        avg_partner_opr = _average(partner_sum, partner_count)
        avg_opponent_opr = _average(opponent_sum, opponent_count)
        entries.append(
            (team, avg_partner_opr - avg_opponent_opr, avg_partner_opr, avg_opponent_opr, match_count)
        )

    ordered = sorted(entries, key=lambda entry: entry[1], reverse=True)
    return [
        ScheduleStrengthResult(
            team_number=team,
            sos=sos,
            avg_partner_opr=avg_partner_opr,
            avg_opponent_opr=avg_opponent_opr,
            match_count=match_count,
            rank=rank,
            luck=classify_schedule_strength(sos, params.luck_threshold),
        )
        for rank, (team, sos, avg_partner_opr, avg_opponent_opr, match_count) in enumerate(
            ordered, start=1
        )
    ]


__all__ = [
    "ScheduleStrengthParameters",
    "classify_schedule_strength",
    "compute_schedule_strength",
]
