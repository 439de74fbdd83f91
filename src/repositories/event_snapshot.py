"""Convert competition-provider payloads into rating domain types."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from domain.ratings.common import Alliance, EventMatch, unique_roster


@dataclass(frozen=True)
class EventSnapshot:
    """Roster and match list for one event as fetched at one point in time."""

    event_code: str | None
    teams: list[int]
    matches: list[EventMatch]
    team_names: dict[int, str] = field(default_factory=dict)


def _parse_team_number(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _parse_score(value: Any) -> float | None:
    """Map a provider score to a float, None for unplayed, NaN for garbage."""
    if value is None:
        return None
    if isinstance(value, bool):
        return float("nan")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return float("nan")
    return float("nan")


def _team_numbers(values: Any) -> tuple[int, ...]:
    if not isinstance(values, list):
        return ()
    parsed = (_parse_team_number(value) for value in values)
    return tuple(team for team in parsed if team is not None)


def _station_team_numbers(teams: Any, prefix: str) -> tuple[int, ...]:
    if not isinstance(teams, list):
        return ()
    selected = [
        team.get("teamNumber")
        for team in teams
        if isinstance(team, Mapping) and str(team.get("station", "")).startswith(prefix)
    ]
    return _team_numbers(selected)


def _parse_alliance(raw_match: Mapping[str, Any], color: str) -> Alliance:
    simplified = raw_match.get(color)
    if isinstance(simplified, Mapping):
        return Alliance(
            team_numbers=_team_numbers(simplified.get("teams")),
            score=_parse_score(simplified.get("total")),
        )

    # Raw provider shape: stations like "Red1" and per-color final score keys.
    capitalized = color.capitalize()
    return Alliance(
        team_numbers=_station_team_numbers(raw_match.get("teams"), capitalized),
        score=_parse_score(raw_match.get(f"score{capitalized}Final")),
    )


def parse_match_payload(raw_match: Mapping[str, Any]) -> EventMatch:
    """Normalize one match in either the simplified or the raw provider shape."""
    label = raw_match.get("description")
    if not label:
        label = f"Match {raw_match.get('matchNumber', '?')}"

    completed = raw_match.get("completed")
    return EventMatch(
        label=str(label),
        red=_parse_alliance(raw_match, "red"),
        blue=_parse_alliance(raw_match, "blue"),
        completed=completed if isinstance(completed, bool) else None,
    )


def parse_matches_payload(payload: Any) -> list[EventMatch]:
    """Accept ``{"matches": [...]}``, ``{"Schedule": [...]}`` or a bare list."""
    if isinstance(payload, Mapping):
        raw_matches = payload.get("matches", payload.get("Schedule", []))
    elif isinstance(payload, list):
        raw_matches = payload
    else:
        raise ValueError(f"Unsupported matches payload type: {type(payload)!r}")

    if not isinstance(raw_matches, list):
        return []
    return [parse_match_payload(raw) for raw in raw_matches if isinstance(raw, Mapping)]


def _raw_teams(payload: Any) -> list[Any]:
    if isinstance(payload, Mapping):
        raw_teams = payload.get("teams", [])
    elif isinstance(payload, list):
        raw_teams = payload
    else:
        raise ValueError(f"Unsupported teams payload type: {type(payload)!r}")
    return raw_teams if isinstance(raw_teams, list) else []


def parse_teams_payload(payload: Any) -> list[int]:
    """Ordered, de-duplicated roster from team objects or bare team numbers."""
    roster: list[int] = []
    for raw in _raw_teams(payload):
        value = raw.get("teamNumber") if isinstance(raw, Mapping) else raw
        team = _parse_team_number(value)
        if team is not None:
            roster.append(team)
    return unique_roster(roster)


def parse_team_names(payload: Any) -> dict[int, str]:
    """Team number to display name, preferring the short name."""
    names: dict[int, str] = {}
    for raw in _raw_teams(payload):
        if not isinstance(raw, Mapping):
            continue
        team = _parse_team_number(raw.get("teamNumber"))
        name = raw.get("nameShort") or raw.get("nameFull")
        if team is not None and name:
            names[team] = str(name)
    return names


def parse_event_snapshot(payload: Mapping[str, Any]) -> EventSnapshot:
    """Build a snapshot from ``{"event": ..., "teams": ..., "matches": ...}``."""
    if not isinstance(payload, Mapping):
        raise ValueError(f"Event snapshot must be a JSON object, got {type(payload)!r}")

    teams_payload = payload.get("teams") or []
    matches = parse_matches_payload(payload.get("matches") or [])
    teams = parse_teams_payload(teams_payload)
    if not teams:
        # Fall back to everyone who appears in the schedule, in first-seen order.
        teams = unique_roster(
            team
            for match in matches
            for team in (*match.red.team_numbers, *match.blue.team_numbers)
        )

    event_code = payload.get("event")
    return EventSnapshot(
        event_code=None if event_code is None else str(event_code),
        teams=teams,
        matches=matches,
        team_names=parse_team_names(teams_payload),
    )


def load_event_snapshot(path: Path) -> EventSnapshot:
    """Read a saved event snapshot JSON file."""
    with path.open("r", encoding="utf-8") as file:
        payload = json.load(file)
    return parse_event_snapshot(payload)


__all__ = [
    "EventSnapshot",
    "load_event_snapshot",
    "parse_event_snapshot",
    "parse_match_payload",
    "parse_matches_payload",
    "parse_team_names",
    "parse_teams_payload",
]
