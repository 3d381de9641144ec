"""House Builder - plans and builds a simple rectangular house on a CAD host."""

__version__ = "0.1.0"
__author__ = "Marco"
__email__ = "marco@example.com"

from .core.config import BuildConfig
from .core.model import Footprint, Level, Point3D, WallSegment
from .engine.api import build_house, plan_building

__all__ = [
    "BuildConfig",
    "Footprint",
    "Level",
    "Point3D",
    "WallSegment",
    "build_house",
    "plan_building",
]
