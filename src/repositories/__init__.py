"""Snapshot loading helpers."""

from repositories.event_snapshot import (
    EventSnapshot,
    load_event_snapshot,
    parse_event_snapshot,
    parse_matches_payload,
    parse_teams_payload,
)

__all__ = [
    "EventSnapshot",
    "load_event_snapshot",
    "parse_event_snapshot",
    "parse_matches_payload",
    "parse_teams_payload",
]
