"""Length unit conversion.

All geometry is expressed in the internal length unit of the host, the
decimal foot. External dimensions (configs, CLI options) are converted once,
at the boundary.
"""

from __future__ import annotations

from enum import Enum

MILLIMETERS_PER_FOOT = 304.8


class LengthUnit(Enum):
    """Linear units accepted for external dimensions."""

    MILLIMETERS = "mm"
    CENTIMETERS = "cm"
    METERS = "m"
    INCHES = "in"
    FEET = "ft"

    @classmethod
    def parse(cls, value: "str | LengthUnit") -> "LengthUnit":
        """Accept either a member or its short name ("mm", "ft", ...)."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for unit in cls:
            if key in (unit.value, unit.name.lower()):
                return unit
        raise ValueError(f"Unknown length unit: {value}")


_MILLIMETERS_PER_UNIT = {
    LengthUnit.MILLIMETERS: 1.0,
    LengthUnit.CENTIMETERS: 10.0,
    LengthUnit.METERS: 1000.0,
    LengthUnit.INCHES: 25.4,
    LengthUnit.FEET: MILLIMETERS_PER_FOOT,
}


def to_internal(value: float, unit: LengthUnit) -> float:
    """Convert ``value`` expressed in ``unit`` to internal feet."""
    return value * _MILLIMETERS_PER_UNIT[unit] / MILLIMETERS_PER_FOOT


def from_internal(value: float, unit: LengthUnit) -> float:
    """Convert an internal length back to ``unit``."""
    return value * MILLIMETERS_PER_FOOT / _MILLIMETERS_PER_UNIT[unit]


def convert(value: float, source: LengthUnit, target: LengthUnit) -> float:
    """Convert ``value`` between two external units."""
    if source is target:
        return value
    return value * _MILLIMETERS_PER_UNIT[source] / _MILLIMETERS_PER_UNIT[target]
