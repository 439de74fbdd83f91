"""Load OPR system definitions from TOML files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from domain.config_base import BaseSystemConfig, load_system_configs, parse_system_metadata
from domain.ratings.opr.calculator import OprParameters
from domain.ratings.schedule.calculator import ScheduleStrengthParameters


@dataclass(frozen=True)
class OprSystemConfig(BaseSystemConfig):
    """Configuration for one OPR / schedule-strength system."""

    parameters: OprParameters
    schedule_parameters: ScheduleStrengthParameters

    def as_config_json(self) -> dict[str, Any]:
        return {
            "min_completed_matches": self.parameters.min_completed_matches,
            "max_iterations": self.parameters.max_iterations,
            "tolerance": self.parameters.tolerance,
            "assumed_alliance_size": self.parameters.assumed_alliance_size,
            "luck_threshold": self.schedule_parameters.luck_threshold,
        }


def load_opr_system_configs(config_dir: Path) -> list[OprSystemConfig]:
    """Load and validate all OPR system TOML config files in a directory."""
    return load_system_configs(
        config_dir,
        _parse_opr_system_config,
        duplicate_name_label="opr",
    )


def _parse_opr_system_config(raw: dict[str, Any], file_path: Path) -> OprSystemConfig:
    name, description = parse_system_metadata(raw, file_path)
    opr_raw = raw.get("opr", {})
    schedule_raw = raw.get("schedule", {})

    # 0 means "use the alliance size observed in the match data".
    assumed_alliance_size = float(opr_raw.get("assumed_alliance_size", 0.0))
    if assumed_alliance_size < 0.0:
        raise ValueError(f"{file_path}: [opr].assumed_alliance_size must be >= 0")

    parameters = OprParameters(
        min_completed_matches=int(opr_raw.get("min_completed_matches", 3)),
        max_iterations=int(opr_raw.get("max_iterations", 100)),
        tolerance=float(opr_raw.get("tolerance", 0.01)),
        assumed_alliance_size=assumed_alliance_size if assumed_alliance_size > 0.0 else None,
    )
    schedule_parameters = ScheduleStrengthParameters(
        luck_threshold=float(schedule_raw.get("luck_threshold", 2.0)),
    )
    _validate_parameters(
        file_path=file_path,
        parameters=parameters,
        schedule_parameters=schedule_parameters,
    )

    return OprSystemConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
        schedule_parameters=schedule_parameters,
    )


def _validate_parameters(
    *,
    file_path: Path,
    parameters: OprParameters,
    schedule_parameters: ScheduleStrengthParameters,
) -> None:
    if parameters.min_completed_matches < 1:
        raise ValueError(f"{file_path}: [opr].min_completed_matches must be >= 1")
    if parameters.max_iterations < 1:
        raise ValueError(f"{file_path}: [opr].max_iterations must be >= 1")
    if parameters.tolerance <= 0.0:
        raise ValueError(f"{file_path}: [opr].tolerance must be > 0")
    if schedule_parameters.luck_threshold < 0.0:
        raise ValueError(f"{file_path}: [schedule].luck_threshold must be >= 0")
