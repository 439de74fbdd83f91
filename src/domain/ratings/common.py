"""Shared types for event rating calculators."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from math import isfinite

from domain.ratings.protocol import AllianceColor, ScheduleLuck


@dataclass(frozen=True)
class Alliance:
    """One side of a match: its teams and their combined final score."""

    team_numbers: tuple[int, ...]
    score: float | None = None

    def has_valid_score(self) -> bool:
        return is_valid_score(self.score)


@dataclass(frozen=True)
class EventMatch:
    """Immutable match snapshot as fetched from the competition data provider."""

    label: str
    red: Alliance
    blue: Alliance
    completed: bool | None = None

    @property
    def is_completed(self) -> bool:
        # An explicit completed flag never overrides a missing score.
        return self.red.score is not None and self.blue.score is not None

    def alliances(self) -> tuple[tuple[AllianceColor, Alliance], tuple[AllianceColor, Alliance]]:
        return (AllianceColor.RED, self.red), (AllianceColor.BLUE, self.blue)

    def alliance_for(self, team_number: int) -> AllianceColor | None:
        if team_number in self.red.team_numbers:
            return AllianceColor.RED
        if team_number in self.blue.team_numbers:
            return AllianceColor.BLUE
        return None

    def is_well_formed(self) -> bool:
        """Both alliances have distinct teams and finite scores, and no team plays both sides."""
        if not self.red.team_numbers or not self.blue.team_numbers:
            return False
        if not (self.red.has_valid_score() and self.blue.has_valid_score()):
            return False
        red_teams = set(self.red.team_numbers)
        blue_teams = set(self.blue.team_numbers)
        if len(red_teams) != len(self.red.team_numbers) or len(blue_teams) != len(self.blue.team_numbers):
            return False
        return not red_teams & blue_teams


@dataclass(frozen=True)
class RatingResult:
    """One team's Offensive Power Rating and its position in the event."""

    team_number: int
    opr: float
    rank: int


@dataclass(frozen=True)
class ScheduleStrengthResult:
    """One team's strength of schedule: partner strength minus opponent strength."""

    team_number: int
    sos: float
    avg_partner_opr: float
    avg_opponent_opr: float
    match_count: int
    rank: int
    luck: ScheduleLuck = ScheduleLuck.NEUTRAL


def is_valid_score(score: object) -> bool:
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        return False
    return isfinite(score)


def unique_roster(teams: Iterable[int]) -> list[int]:
    """Drop repeated team numbers while keeping first-seen roster order."""
    return list(dict.fromkeys(teams))


def filter_scored_matches(matches: Sequence[EventMatch]) -> tuple[list[EventMatch], int]:
    """Split out completed, well-formed matches.

    Returns ``(scored_matches, skipped_count)`` where ``skipped_count`` only counts
    completed matches that were rejected as malformed. Incomplete matches are
    neither returned nor counted.
    """
    scored: list[EventMatch] = []
    skipped = 0
    for match in matches:
        if not match.is_completed:
            continue
        if not match.is_well_formed():
            skipped += 1
            continue
        scored.append(match)
    return scored, skipped


__all__ = [
    "Alliance",
    "EventMatch",
    "RatingResult",
    "ScheduleStrengthResult",
    "filter_scored_matches",
    "is_valid_score",
    "unique_roster",
]
