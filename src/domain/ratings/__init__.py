"""Rating-system domain modules."""

from domain.ratings.common import (
    Alliance,
    EventMatch,
    RatingResult,
    ScheduleStrengthResult,
)
from domain.ratings.protocol import AllianceColor, ScheduleLuck

__all__ = [
    "Alliance",
    "AllianceColor",
    "EventMatch",
    "RatingResult",
    "ScheduleLuck",
    "ScheduleStrengthResult",
]
