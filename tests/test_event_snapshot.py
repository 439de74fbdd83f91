"""Tests for competition payload normalization."""

from __future__ import annotations

import json
import math
from pathlib import Path

import pytest

from repositories.event_snapshot import (
    load_event_snapshot,
    parse_event_snapshot,
    parse_match_payload,
    parse_matches_payload,
    parse_team_names,
    parse_teams_payload,
)


def test_parse_simplified_match_payload() -> None:
    match = parse_match_payload(
        {
            "description": "Qualification 4",
            "matchNumber": 4,
            "red": {"total": 88, "auto": 20, "teams": [1234, 5678]},
            "blue": {"total": 61, "teams": [4321, 8765]},
        }
    )

    assert match.label == "Qualification 4"
    assert match.red.team_numbers == (1234, 5678)
    assert match.red.score == pytest.approx(88.0)
    assert match.blue.team_numbers == (4321, 8765)
    assert match.is_completed


def test_parse_raw_provider_match_payload() -> None:
    match = parse_match_payload(
        {
            "matchNumber": 7,
            "teams": [
                {"teamNumber": 11, "station": "Red1"},
                {"teamNumber": 22, "station": "Blue1"},
                {"teamNumber": 33, "station": "Red2"},
                {"teamNumber": 44, "station": "Blue2"},
            ],
            "scoreRedFinal": 40,
            "scoreBlueFinal": None,
        }
    )

    assert match.label == "Match 7"
    assert match.red.team_numbers == (11, 33)
    assert match.blue.team_numbers == (22, 44)
    assert match.blue.score is None
    assert not match.is_completed


def test_garbage_score_becomes_nan_and_is_malformed() -> None:
    match = parse_match_payload(
        {
            "description": "Q1",
            "red": {"total": "n/a", "teams": [1]},
            "blue": {"total": "12", "teams": [2]},
        }
    )

    assert math.isnan(match.red.score)
    assert match.blue.score == pytest.approx(12.0)
    assert match.is_completed
    assert not match.is_well_formed()


def test_parse_matches_payload_shapes() -> None:
    raw = {"description": "Q1", "red": {"total": 1, "teams": [1]}, "blue": {"total": 2, "teams": [2]}}

    assert len(parse_matches_payload({"matches": [raw]})) == 1
    assert len(parse_matches_payload({"Schedule": [raw, "junk"]})) == 1
    assert len(parse_matches_payload([raw, raw])) == 2
    with pytest.raises(ValueError, match="Unsupported matches payload type"):
        parse_matches_payload("matches")


def test_parse_teams_payload_keeps_order_and_drops_duplicates() -> None:
    payload = {
        "teams": [
            {"teamNumber": 300, "nameShort": "Gears"},
            {"teamNumber": 100, "nameFull": "Robo Club"},
            {"teamNumber": 300},
            {"teamNumber": None},
        ]
    }

    assert parse_teams_payload(payload) == [300, 100]
    assert parse_teams_payload([5, "6", True, 5]) == [5, 6]
    assert parse_team_names(payload) == {300: "Gears", 100: "Robo Club"}


def test_snapshot_without_roster_falls_back_to_schedule_teams() -> None:
    snapshot = parse_event_snapshot(
        {
            "event": "USCAFFL",
            "matches": [
                {"description": "Q1", "red": {"total": 1, "teams": [3, 1]}, "blue": {"total": 2, "teams": [2]}},
                {"description": "Q2", "red": {"total": 1, "teams": [1]}, "blue": {"total": 2, "teams": [4]}},
            ],
        }
    )

    assert snapshot.event_code == "USCAFFL"
    assert snapshot.teams == [3, 1, 2, 4]


def test_load_event_snapshot_from_file(tmp_path: Path) -> None:
    snapshot_path = tmp_path / "event.json"
    snapshot_path.write_text(
        json.dumps(
            {
                "event": "DEVDATA",
                "teams": {"teams": [{"teamNumber": 1}, {"teamNumber": 2}]},
                "matches": {
                    "matches": [
                        {"description": "Q1", "red": {"total": 10, "teams": [1]}, "blue": {"total": 5, "teams": [2]}}
                    ]
                },
            }
        )
    )

    snapshot = load_event_snapshot(snapshot_path)
    assert snapshot.teams == [1, 2]
    assert [match.label for match in snapshot.matches] == ["Q1"]


def test_snapshot_must_be_an_object() -> None:
    with pytest.raises(ValueError, match="must be a JSON object"):
        parse_event_snapshot([1, 2, 3])


def test_null_match_lists_degrade_to_no_matches() -> None:
    assert parse_matches_payload({"matches": None}) == []
    assert parse_matches_payload({"Schedule": None}) == []

    snapshot = parse_event_snapshot({"teams": [1, 2], "matches": {"matches": None}})
    assert snapshot.teams == [1, 2]
    assert snapshot.matches == []

    empty = parse_event_snapshot({"teams": None, "matches": None})
    assert empty.teams == []
    assert empty.matches == []


def test_integral_float_team_numbers_are_accepted() -> None:
    assert parse_teams_payload([1234.0, {"teamNumber": 5678.0}, 12.5]) == [1234, 5678]

    match = parse_match_payload(
        {"description": "Q1", "red": {"total": 10, "teams": [1.0, 2]}, "blue": {"total": 5, "teams": [3.0]}}
    )
    assert match.red.team_numbers == (1, 2)
    assert match.blue.team_numbers == (3,)
