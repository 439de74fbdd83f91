"""Strength-of-schedule modules."""

from domain.ratings.schedule.calculator import (
    ScheduleStrengthParameters,
    classify_schedule_strength,
    compute_schedule_strength,
)

__all__ = [
    "ScheduleStrengthParameters",
    "classify_schedule_strength",
    "compute_schedule_strength",
]
