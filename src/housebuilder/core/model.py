"""Core data models for house building.

This module defines the value types shared by the planners, the roof
profiler, the host boundary and the orchestrator. All lengths are in the
internal unit (decimal feet).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence, Union

from shapely.geometry import Polygon

from .errors import InvalidDimension, InvalidFootprint

EPSILON = 1e-9  # Tolerance for point matching


@dataclass(frozen=True)
class Point3D:
    """Represents a point (or a vector) in model space.

    Attributes:
        x: The x-coordinate.
        y: The y-coordinate.
        z: The z-coordinate (vertical axis).
    """

    x: float
    y: float
    z: float = 0.0

    def __add__(self, other: Point3D) -> Point3D:
        return Point3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Point3D) -> Point3D:
        return Point3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> Point3D:
        return Point3D(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def offset(self, dx: float = 0.0, dy: float = 0.0, dz: float = 0.0) -> Point3D:
        return Point3D(self.x + dx, self.y + dy, self.z + dz)

    def midpoint(self, other: Point3D) -> Point3D:
        return Point3D(
            (self.x + other.x) / 2, (self.y + other.y) / 2, (self.z + other.z) / 2
        )

    def dot(self, other: Point3D) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> Point3D:
        """Return the unit vector in the same direction."""
        norm = self.length()
        if norm == 0:
            raise ValueError("Cannot normalize a zero-length vector")
        return self * (1.0 / norm)

    def distance_to(self, other: Point3D) -> float:
        return (other - self).length()

    def is_close(self, other: Point3D, epsilon: float = EPSILON) -> bool:
        return self.distance_to(other) < epsilon

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class Level:
    """A named horizontal datum of the building.

    Attributes:
        id: Host identifier of the level.
        name: Human-readable name, e.g. "Level 1".
        elevation: Elevation in internal units.
    """

    id: str
    name: str
    elevation: float


@dataclass
class WallSegment:
    """A straight wall between two points.

    The host fills in ``width`` (and ``id``) after creation; no other field
    changes once the segment exists.

    Attributes:
        start: Start point of the wall location line.
        end: End point of the wall location line.
        base_level: Level the wall stands on.
        top_level: Level the wall top is constrained to.
        width: Wall thickness reported by the host.
        id: Host identifier, if the wall was created.
    """

    start: Point3D
    end: Point3D
    base_level: Level | None = None
    top_level: Level | None = None
    width: float | None = None
    id: str | None = None

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)

    @property
    def midpoint(self) -> Point3D:
        return self.start.midpoint(self.end)

    @property
    def direction(self) -> Point3D:
        """Unit vector from start to end."""
        return (self.end - self.start).normalized()

    def at_elevation(self, z: float) -> WallSegment:
        """Return a copy of this segment with both endpoints moved to height ``z``."""
        return WallSegment(
            start=Point3D(self.start.x, self.start.y, z),
            end=Point3D(self.end.x, self.end.y, z),
            base_level=self.base_level,
            top_level=self.top_level,
            width=self.width,
            id=self.id,
        )


@dataclass(frozen=True)
class Footprint:
    """Closed outline of the building at ground level.

    The first point is repeated as the last one to mark closure, so a
    rectangle has five points and four edges.

    Attributes:
        points: Ordered outline points, first == last.
    """

    points: tuple[Point3D, ...]

    def __post_init__(self) -> None:
        if len(self.points) < 4:
            raise InvalidFootprint(
                f"A footprint needs at least 4 points, got {len(self.points)}"
            )
        if not self.points[0].is_close(self.points[-1]):
            raise InvalidFootprint("Footprint is not closed: first point != last point")
        for i in range(len(self.points) - 1):
            if self.points[i].is_close(self.points[i + 1]):
                raise InvalidFootprint(f"Footprint edge {i} has zero length")
        if not self.to_polygon().is_valid:
            raise InvalidFootprint("Footprint is not a simple polygon")

    @property
    def edge_count(self) -> int:
        return len(self.points) - 1

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) of the outline."""
        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return min(xs), min(ys), max(xs), max(ys)

    @property
    def extents(self) -> tuple[float, float]:
        """(width, depth) of the bounding box."""
        min_x, min_y, max_x, max_y = self.bounds
        return max_x - min_x, max_y - min_y

    @property
    def is_ccw(self) -> bool:
        return self.to_polygon().exterior.is_ccw

    def to_polygon(self) -> Polygon:
        """Return the outline as a 2D Shapely polygon."""
        return Polygon([(p.x, p.y) for p in self.points])


class ParameterKey(Enum):
    """Element parameters the builder sets after creation."""

    SILL_HEIGHT = "sill_height"
    DEFINES_SLOPE = "defines_slope"
    SLOPE_ANGLE = "slope_angle"


class OpeningKind(Enum):
    """Category of an opening hosted by a wall."""

    DOOR = "door"
    WINDOW = "window"


@dataclass(frozen=True)
class OpeningSpec:
    """Which opening to place and how high.

    Attributes:
        kind: Door or window.
        family_name: Host family name, e.g. "M_Single-Flush".
        type_name: Host type name, e.g. "0915 x 2032mm".
        sill_height: Sill height in config units. Windows only; a door always
            sits at the wall base.
    """

    kind: OpeningKind
    family_name: str
    type_name: str
    sill_height: float | None = None

    def __post_init__(self) -> None:
        if self.kind is OpeningKind.DOOR and self.sill_height:
            raise InvalidDimension("A door sits at the wall base and takes no sill height")
        if self.sill_height is not None and self.sill_height < 0:
            raise InvalidDimension(f"Sill height must be >= 0, got {self.sill_height}")

    @property
    def effective_sill_height(self) -> float:
        if self.kind is OpeningKind.DOOR or self.sill_height is None:
            return 0.0
        return self.sill_height


@dataclass(frozen=True)
class OpeningType:
    """A door or window type offered by the host catalog.

    Attributes:
        kind: Door or window.
        family_name: Host family name.
        type_name: Host type name.
        width: Opening width in internal units.
        height: Opening height in internal units.
        is_active: Whether the host has the type activated for placement.
        id: Host identifier.
    """

    kind: OpeningKind
    family_name: str
    type_name: str
    width: float = 0.0
    height: float = 0.0
    is_active: bool = False
    id: str | None = None


@dataclass(frozen=True)
class RoofType:
    """A roof type offered by the host catalog.

    Attributes:
        family_name: Host family name, e.g. "Basic Roof".
        type_name: Host type name, e.g. "Cold Roof - Concrete".
        thickness: Default roof thickness in internal units.
        id: Host identifier.
    """

    family_name: str
    type_name: str
    thickness: float = 0.0
    id: str | None = None


@dataclass(frozen=True)
class Curve:
    """A bounded straight curve used for roof profiles."""

    start: Point3D
    end: Point3D

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)


@dataclass(frozen=True)
class ReferencePlane:
    """Sketch plane for an extrusion roof.

    The plane passes through ``origin``, ``bubble_end`` and ``free_end``.
    """

    origin: Point3D
    bubble_end: Point3D
    free_end: Point3D


@dataclass(frozen=True)
class FootprintRoofProfile:
    """Closed loop of roof edges, each one optionally defining a slope."""

    curves: tuple[Curve, ...]
    defines_slope: tuple[bool, ...]
    slope_angle: float


@dataclass(frozen=True)
class ExtrusionRoofProfile:
    """Two-segment ridge profile extruded between two parameters."""

    curves: tuple[Curve, ...]
    plane: ReferencePlane
    start_param: float
    end_param: float


RoofProfile = Union[FootprintRoofProfile, ExtrusionRoofProfile]


@dataclass(frozen=True)
class PlacedOpening:
    """An opening placed on a wall.

    Attributes:
        kind: Door or window.
        wall_index: Index of the host wall in footprint order.
        point: Insertion point.
        opening_type: Catalog entry that was placed.
        instance: Host handle of the created instance, if built.
    """

    kind: OpeningKind
    wall_index: int
    point: Point3D
    opening_type: OpeningType
    instance: Any = None


@dataclass
class BuildResult:
    """Everything a build produced, in creation order."""

    levels: tuple[Level, Level]
    footprint: Footprint
    walls: list[WallSegment] = field(default_factory=list)
    openings: list[PlacedOpening] = field(default_factory=list)
    roof_profile: RoofProfile | None = None
    roof: Any = None
    stage: Any = None

    @property
    def doors(self) -> Sequence[PlacedOpening]:
        return [o for o in self.openings if o.kind is OpeningKind.DOOR]

    @property
    def windows(self) -> Sequence[PlacedOpening]:
        return [o for o in self.openings if o.kind is OpeningKind.WINDOW]
