"""Core data models, units, errors and configuration."""

from .config import BuildConfig
from .errors import BuildError, BuildFailed
from .model import Footprint, Level, OpeningKind, OpeningSpec, Point3D, WallSegment
from .units import LengthUnit, from_internal, to_internal

__all__ = [
    "BuildConfig",
    "BuildError",
    "BuildFailed",
    "Footprint",
    "LengthUnit",
    "Level",
    "OpeningKind",
    "OpeningSpec",
    "Point3D",
    "WallSegment",
    "from_internal",
    "to_internal",
]
