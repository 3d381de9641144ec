"""Roof profile strategies.

Two interchangeable strategies turn the created walls into a roof:

* ``flat`` (:class:`FlatOffsetFootprint`): the wall loop pushed outward by
  half a wall width, every edge sloping at a configurable angle.
* ``extrusion`` (:class:`RidgeExtrusion`): a two-segment ridge drawn over
  wall 1 and extruded along wall 0.

Strategies are picked by name from a registry, never by inspecting the walls.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Protocol, Sequence

from ..core.errors import HostOperationFailed, InsufficientWalls, RoofTypeNotFound
from ..core.model import (
    Curve,
    ExtrusionRoofProfile,
    Footprint,
    FootprintRoofProfile,
    Level,
    ParameterKey,
    Point3D,
    ReferencePlane,
    RoofProfile,
    RoofType,
    WallSegment,
)
from .footprint import corner_offsets

if TYPE_CHECKING:
    from ..core.config import BuildConfig
    from ..host.interface import BuildHost

LOGGER = logging.getLogger(__name__)

# The extrusion sketch plane passes through the footprint center
PLANE_ORIGIN = Point3D(0.0, 0.0, 0.0)
REFERENCE_PLANE_EXTENT = 20.0  # length of the plane's defining vectors


class RoofStrategy(Protocol):
    """Protocol for roof strategies.

    All strategies must implement this interface to be compatible with the
    strategy registry and the build orchestrator.
    """

    name: str

    def precheck(self, walls: Sequence[WallSegment], footprint: Footprint) -> None:
        """Check the wall-count precondition.

        Raises:
            InsufficientWalls: If the walls cannot carry this roof.
        """
        ...

    def profile(
        self,
        walls: Sequence[WallSegment],
        footprint: Footprint,
        level: Level,
        roof_type: RoofType,
        config: "BuildConfig",
    ) -> RoofProfile:
        """Compute the roof curves for the given walls."""
        ...

    def create(
        self, host: "BuildHost", profile: Any, level: Level, roof_type: RoofType
    ) -> Any:
        """Create the roof on the host and return its handle."""
        ...


def select_roof_type(
    catalog: Iterable[RoofType], family_name: str, type_name: str
) -> RoofType:
    """Find the roof type with an exact (family, type) name match.

    Raises:
        RoofTypeNotFound: If no entry matches both names.
    """
    for candidate in catalog:
        if candidate.family_name == family_name and candidate.type_name == type_name:
            return candidate
    raise RoofTypeNotFound(family_name, type_name)


def _half_wall_width(walls: Sequence[WallSegment]) -> float:
    width = walls[0].width
    if width is None:
        raise HostOperationFailed("Host did not report the width of wall 0")
    return width / 2


class FlatOffsetFootprint:
    """Footprint roof following the outer face of the walls."""

    name = "flat"

    def precheck(self, walls: Sequence[WallSegment], footprint: Footprint) -> None:
        if len(walls) != footprint.edge_count:
            raise InsufficientWalls(
                f"Flat roof needs one wall per footprint edge: "
                f"{len(walls)} walls for {footprint.edge_count} edges"
            )

    def profile(
        self,
        walls: Sequence[WallSegment],
        footprint: Footprint,
        level: Level,
        roof_type: RoofType,
        config: "BuildConfig",
    ) -> FootprintRoofProfile:
        self.precheck(walls, footprint)
        offsets = corner_offsets(footprint, _half_wall_width(walls))

        curves = []
        for i, wall in enumerate(walls):
            start = wall.start + offsets[i]
            end = wall.end + offsets[i + 1]
            curves.append(
                Curve(
                    Point3D(start.x, start.y, level.elevation),
                    Point3D(end.x, end.y, level.elevation),
                )
            )

        LOGGER.debug(
            "Flat roof profile: %d edges at slope %.3f rad",
            len(curves),
            config.slope_angle,
        )
        return FootprintRoofProfile(
            curves=tuple(curves),
            defines_slope=tuple(True for _ in curves),
            slope_angle=config.slope_angle,
        )

    def create(
        self,
        host: "BuildHost",
        profile: FootprintRoofProfile,
        level: Level,
        roof_type: RoofType,
    ) -> Any:
        roof, edges = host.create_footprint_roof(list(profile.curves), level, roof_type)
        for edge, defines_slope in zip(edges, profile.defines_slope):
            host.set_parameter(edge, ParameterKey.DEFINES_SLOPE, defines_slope)
            if defines_slope:
                host.set_parameter(edge, ParameterKey.SLOPE_ANGLE, profile.slope_angle)
        return roof


class RidgeExtrusion:
    """Gable roof: a peaked profile over wall 1 extruded along wall 0."""

    name = "extrusion"

    def precheck(self, walls: Sequence[WallSegment], footprint: Footprint) -> None:
        if len(walls) < 2:
            raise InsufficientWalls(
                f"Extrusion roof needs at least 2 walls, got {len(walls)}"
            )

    def profile(
        self,
        walls: Sequence[WallSegment],
        footprint: Footprint,
        level: Level,
        roof_type: RoofType,
        config: "BuildConfig",
    ) -> ExtrusionRoofProfile:
        self.precheck(walls, footprint)
        dt = _half_wall_width(walls)
        eaves = level.elevation + roof_type.thickness
        ridge = eaves + config.ridge_rise_internal

        ridge_wall = walls[1]
        along = ridge_wall.direction
        low_start = ridge_wall.start - along * dt
        low_end = ridge_wall.end + along * dt
        middle = ridge_wall.midpoint

        first = Point3D(low_start.x, low_start.y, eaves)
        peak = Point3D(middle.x, middle.y, ridge)
        last = Point3D(low_end.x, low_end.y, eaves)
        curves = (Curve(first, peak), Curve(peak, last))

        plane = ReferencePlane(
            origin=PLANE_ORIGIN,
            bubble_end=PLANE_ORIGIN.offset(dz=REFERENCE_PLANE_EXTENT),
            free_end=PLANE_ORIGIN
            + Point3D(along.x, along.y, 0.0) * REFERENCE_PLANE_EXTENT,
        )

        axis_wall = walls[0]
        axis = axis_wall.direction
        start_param = (axis_wall.start - PLANE_ORIGIN).dot(axis) - dt
        end_param = (axis_wall.end - PLANE_ORIGIN).dot(axis) + dt

        LOGGER.debug(
            "Extrusion roof profile: eaves %.4f, ridge %.4f, extent [%.4f, %.4f]",
            eaves,
            ridge,
            start_param,
            end_param,
        )
        return ExtrusionRoofProfile(
            curves=curves, plane=plane, start_param=start_param, end_param=end_param
        )

    def create(
        self,
        host: "BuildHost",
        profile: ExtrusionRoofProfile,
        level: Level,
        roof_type: RoofType,
    ) -> Any:
        return host.create_extrusion_roof(
            list(profile.curves),
            profile.plane,
            level,
            roof_type,
            profile.start_param,
            profile.end_param,
        )


# Registry of available strategies
_STRATEGIES: Dict[str, RoofStrategy] = {
    "flat": FlatOffsetFootprint(),
    "extrusion": RidgeExtrusion(),
}


def register_strategy(name: str, strategy: RoofStrategy) -> None:
    """Register a roof strategy under ``name``.

    Args:
        name: Name used in ``BuildConfig.roof_strategy``.
        strategy: Strategy instance to register.
    """
    _STRATEGIES[name] = strategy


def get_strategy(name: str) -> RoofStrategy:
    """Get a roof strategy by name.

    Raises:
        KeyError: If the strategy is not registered.
    """
    if name not in _STRATEGIES:
        raise KeyError(f"Roof strategy '{name}' is not registered")
    return _STRATEGIES[name]


def list_strategies() -> List[str]:
    """List all registered roof strategy names."""
    return sorted(_STRATEGIES)
