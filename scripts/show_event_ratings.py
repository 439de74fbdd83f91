#!/usr/bin/env python3
"""Show OPR and strength-of-schedule tables for a saved event snapshot."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from domain.pipeline import EventRatings, compute_event_ratings
from domain.ratings.opr.config import OprSystemConfig, load_opr_system_configs
from domain.ratings.protocol import ScheduleLuck
from domain.ratings.summary import team_record
from repositories.event_snapshot import EventSnapshot, load_event_snapshot

DEFAULT_CONFIG_DIR = ROOT_DIR / "configs" / "ratings" / "opr"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Event OPR and schedule-strength reports.",
)


def _select_config(config_dir: Path, system_name: str | None) -> OprSystemConfig:
    configs = load_opr_system_configs(config_dir)
    if system_name is None:
        return configs[0]
    for config in configs:
        if config.name == system_name:
            return config
    raise typer.BadParameter(
        f"No OPR system named '{system_name}' found in {config_dir}",
        param_hint="--system-name",
    )


def _team_label(snapshot: EventSnapshot, team_number: int) -> str:
    name = snapshot.team_names.get(team_number)
    return f"{team_number} {name}" if name else str(team_number)


def _echo_tables(snapshot: EventSnapshot, event_ratings: EventRatings, top_n: int) -> None:
    summary = event_ratings.score_summary
    if summary is not None:
        typer.echo(
            f"completed_matches={summary.completed_matches} "
            f"avg_score={summary.average_score:.1f} "
            f"high={summary.high_score:.0f} low={summary.low_score:.0f} "
            f"red_wins={summary.red_wins} blue_wins={summary.blue_wins} ties={summary.ties}"
        )

    if not event_ratings.ratings:
        typer.echo("OPR: not enough data (requires completed matches).")
        return

    typer.echo(f"OPR ({len(event_ratings.ratings)} teams)")
    for result in event_ratings.ratings[:top_n]:
        typer.echo(
            f"{result.rank:3d}. {_team_label(snapshot, result.team_number):<28} "
            f"opr={result.opr:7.1f}"
        )

    typer.echo(f"Schedule strength ({len(event_ratings.schedule_strength)} teams)")
    for result in event_ratings.schedule_strength[:top_n]:
        label = "" if result.luck is ScheduleLuck.NEUTRAL else result.luck.value
        typer.echo(
            f"{result.rank:3d}. {_team_label(snapshot, result.team_number):<28} "
            f"sos={result.sos:+6.1f} partners={result.avg_partner_opr:6.1f} "
            f"opponents={result.avg_opponent_opr:6.1f} matches={result.match_count:3d} {label}"
        )


def _echo_team(snapshot: EventSnapshot, event_ratings: EventRatings, team_number: int) -> None:
    record = team_record(team_number, snapshot.matches)
    if record is None:
        typer.echo(f"team={_team_label(snapshot, team_number)} has no completed matches.")
        return

    typer.echo(
        f"team={_team_label(snapshot, team_number)} "
        f"record={record.wins}-{record.losses}-{record.ties} "
        f"matches={record.matches_played} "
        f"avg_score={record.average_score:.1f} high={record.high_score:.0f}"
    )
    rating = next((r for r in event_ratings.ratings if r.team_number == team_number), None)
    if rating is not None:
        typer.echo(f"opr={rating.opr:.1f} opr_rank=#{rating.rank}")
    schedule = next(
        (r for r in event_ratings.schedule_strength if r.team_number == team_number), None
    )
    if schedule is not None:
        typer.echo(f"sos={schedule.sos:+.1f} sos_rank=#{schedule.rank} luck={schedule.luck.value}")


@app.command()
def show_event_ratings(
    snapshot_path: Annotated[
        Path,
        typer.Argument(help="JSON file with 'teams' and 'matches' provider payloads."),
    ],
    config_dir: Annotated[
        Path,
        typer.Option("--config-dir", help="Directory of OPR system TOML files."),
    ] = DEFAULT_CONFIG_DIR,
    system_name: Annotated[
        str | None,
        typer.Option("--system-name", help="Config [system].name. Defaults to the first file."),
    ] = None,
    top_n: Annotated[
        int,
        typer.Option("--top-n", help="Number of rows to print per table."),
    ] = 20,
    team_number: Annotated[
        int | None,
        typer.Option("--team-number", help="Also print the record, OPR and schedule for this team."),
    ] = None,
) -> None:
    """Compute ratings for one snapshot and print the ranked tables."""
    if top_n <= 0:
        raise typer.BadParameter("--top-n must be greater than 0")
    if not snapshot_path.is_file():
        raise typer.BadParameter(f"Snapshot file not found: {snapshot_path}")

    config = _select_config(config_dir, system_name)
    snapshot = load_event_snapshot(snapshot_path)

    typer.echo(
        f"event={snapshot.event_code or snapshot_path.stem} "
        f"system={config.name} teams={len(snapshot.teams)}"
    )
    event_ratings = compute_event_ratings(
        snapshot.teams,
        snapshot.matches,
        params=config.parameters,
        schedule_params=config.schedule_parameters,
        echo=typer.echo,
    )
    _echo_tables(snapshot, event_ratings, top_n)
    if team_number is not None:
        _echo_team(snapshot, event_ratings, team_number)


if __name__ == "__main__":
    app()
