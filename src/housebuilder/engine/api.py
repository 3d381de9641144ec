"""Core API for house building.

This module provides the two entry points of the engine: planning the
geometry of a house without any host, and building it on a host.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..core.config import BuildConfig
from ..core.model import BuildResult, Level, OpeningType, PlacedOpening, RoofType
from ..core.units import to_internal
from ..geom.footprint import plan_rectangle, segments_of
from ..geom.openings import placement_point
from ..geom.roof import get_strategy
from ..host.interface import BuildHost
from .orchestrator import BuildOrchestrator


def plan_building(
    config: Optional[BuildConfig] = None,
    base_level: Optional[Level] = None,
    top_level: Optional[Level] = None,
    wall_width: float = 0.0,
    roof_thickness: float = 0.0,
) -> BuildResult:
    """Compute the full geometry of a build without touching a host.

    Args:
        config: Build parameters.
        base_level: Level the walls stand on (defaults to elevation 0).
        top_level: Level carrying the roof (defaults to
            ``config.storey_height`` above base).
        wall_width: Wall thickness in internal units.
        roof_thickness: Roof thickness in internal units.

    Returns:
        A BuildResult whose host handles are all None.

    Raises:
        InvalidDimension: If the footprint dimensions are not positive.
        InsufficientWalls: If the roof strategy cannot use the walls.
        KeyError: If the roof strategy is not registered.
    """
    config = config or BuildConfig()
    strategy = get_strategy(config.roof_strategy)

    if base_level is None:
        base_level = Level(id="base", name=config.base_level_name, elevation=0.0)
    if top_level is None:
        top_level = Level(
            id="top",
            name=config.top_level_name,
            elevation=base_level.elevation + config.storey_height_internal,
        )

    footprint = plan_rectangle(config.width_internal, config.depth_internal)
    walls = [
        replace(
            segment.at_elevation(base_level.elevation),
            base_level=base_level,
            top_level=top_level,
            width=wall_width,
        )
        for segment in segments_of(footprint)
    ]

    openings = []
    for index, wall in enumerate(walls):
        spec = config.door if index == 0 else config.window
        sill_height = to_internal(spec.effective_sill_height, config.unit)
        openings.append(
            PlacedOpening(
                kind=spec.kind,
                wall_index=index,
                point=placement_point(wall, sill_height),
                opening_type=OpeningType(spec.kind, spec.family_name, spec.type_name),
            )
        )

    roof_type = RoofType(config.roof_family_name, config.roof_type_name, roof_thickness)
    profile = strategy.profile(walls, footprint, top_level, roof_type, config)

    return BuildResult(
        levels=(base_level, top_level),
        footprint=footprint,
        walls=walls,
        openings=openings,
        roof_profile=profile,
    )


def build_house(host: BuildHost, config: Optional[BuildConfig] = None) -> BuildResult:
    """Build a house on ``host`` in one transaction.

    Raises:
        BuildFailed: If any stage fails; the host keeps none of the build.
    """
    return BuildOrchestrator(host, config).run()
