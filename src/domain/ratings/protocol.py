"""Shared enums for event rating calculators."""

from __future__ import annotations

from enum import Enum


class AllianceColor(str, Enum):
    """Which side of the field an alliance played on."""

    RED = "red"
    BLUE = "blue"


class ScheduleLuck(str, Enum):
    """Presentation label for a strength-of-schedule value."""

    LUCKY = "lucky"
    NEUTRAL = "neutral"
    UNLUCKY = "unlucky"


__all__ = ["AllianceColor", "ScheduleLuck"]
