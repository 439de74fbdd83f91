"""Event-wide and per-team score statistics."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from domain.ratings.common import EventMatch, filter_scored_matches
from domain.ratings.protocol import AllianceColor


@dataclass(frozen=True)
class EventScoreSummary:
    completed_matches: int
    average_score: float
    high_score: float
    low_score: float
    average_red_score: float
    average_blue_score: float
    red_wins: int
    blue_wins: int
    ties: int


@dataclass(frozen=True)
class TeamRecord:
    team_number: int
    wins: int
    losses: int
    ties: int
    matches_played: int
    average_score: float
    high_score: float

    @property
    def win_rate(self) -> float:
        return self.wins / self.matches_played if self.matches_played else 0.0


def summarize_event_scores(matches: Sequence[EventMatch]) -> EventScoreSummary | None:
    """Score distribution and red/blue outcome split over completed matches."""
    scored_matches, _ = filter_scored_matches(matches)
    if not scored_matches:
        return None

    red_scores = [float(match.red.score) for match in scored_matches]
    blue_scores = [float(match.blue.score) for match in scored_matches]
    all_scores = red_scores + blue_scores
    red_wins = sum(1 for red, blue in zip(red_scores, blue_scores) if red > blue)
    blue_wins = sum(1 for red, blue in zip(red_scores, blue_scores) if blue > red)

    return EventScoreSummary(
        completed_matches=len(scored_matches),
        average_score=sum(all_scores) / len(all_scores),
        high_score=max(all_scores),
        low_score=min(all_scores),
        average_red_score=sum(red_scores) / len(red_scores),
        average_blue_score=sum(blue_scores) / len(blue_scores),
        red_wins=red_wins,
        blue_wins=blue_wins,
        ties=len(scored_matches) - red_wins - blue_wins,
    )


def team_record(team_number: int, matches: Sequence[EventMatch]) -> TeamRecord | None:
    """Win/loss/tie record and alliance scores for one team, or None if it never played."""
    scored_matches, _ = filter_scored_matches(matches)

    wins = losses = ties = 0
    scores: list[float] = []
    for match in scored_matches:
        color = match.alliance_for(team_number)
        if color is None:
            continue

        own_score = float(match.red.score if color is AllianceColor.RED else match.blue.score)
        other_score = float(match.blue.score if color is AllianceColor.RED else match.red.score)
        scores.append(own_score)
        if own_score > other_score:
            wins += 1
        elif own_score < other_score:
            losses += 1
        else:
            ties += 1

    if not scores:
        return None

    return TeamRecord(
        team_number=team_number,
        wins=wins,
        losses=losses,
        ties=ties,
        matches_played=len(scores),
        average_score=sum(scores) / len(scores),
        high_score=max(scores),
    )


__all__ = ["EventScoreSummary", "TeamRecord", "summarize_event_scores", "team_record"]
