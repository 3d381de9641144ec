"""Build orchestration.

The orchestrator runs one house build against a host as a fixed sequence of
stages inside a single host transaction:

    IDLE -> LEVELS_RESOLVED -> FOOTPRINT_PLANNED -> WALLS_CREATED
         -> OPENINGS_PLACED -> ROOF_BUILT -> COMMITTED

The first error at any stage aborts the build; the transaction is rolled
back and a :class:`BuildFailed` naming that stage is raised.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple

from ..core.config import BuildConfig
from ..core.errors import (
    BuildError,
    BuildFailed,
    HostOperationFailed,
    InvalidDimension,
    UnknownRoofStrategy,
)
from ..core.model import (
    BuildResult,
    Footprint,
    Level,
    OpeningSpec,
    OpeningType,
    PlacedOpening,
    WallSegment,
)
from ..geom.footprint import plan_rectangle, segments_of
from ..geom.openings import ensure_active, placement_point
from ..geom.roof import RoofStrategy, get_strategy
from ..host.interface import BuildHost, ParameterKey, transaction

LOGGER = logging.getLogger(__name__)


class BuildStage(Enum):
    """States of a build, in the order they are reached."""

    IDLE = "idle"
    LEVELS_RESOLVED = "levels_resolved"
    FOOTPRINT_PLANNED = "footprint_planned"
    WALLS_CREATED = "walls_created"
    OPENINGS_PLACED = "openings_placed"
    ROOF_BUILT = "roof_built"
    COMMITTED = "committed"


class BuildOrchestrator:
    """Builds one house on a host.

    Args:
        host: Host to build on, passed explicitly.
        config: Build parameters.

    Raises:
        BuildFailed: At stage IDLE, with an UnknownRoofStrategy cause, if
            ``config.roof_strategy`` is not a registered strategy. Nothing is
            asked of the host in that case.
    """

    def __init__(self, host: BuildHost, config: Optional[BuildConfig] = None):
        self.host = host
        self.config = config or BuildConfig()
        self.stage = BuildStage.IDLE
        try:
            self.strategy: RoofStrategy = get_strategy(self.config.roof_strategy)
        except KeyError as e:
            cause = UnknownRoofStrategy(self.config.roof_strategy)
            LOGGER.error("Build rejected: %s", cause)
            raise BuildFailed(BuildStage.IDLE, cause) from e

    @contextmanager
    def _stage(self, target: BuildStage) -> Iterator[None]:
        """Run the work that leads to ``target``; advance only if it succeeds."""
        try:
            yield
        except BuildFailed:
            raise
        except BuildError as e:
            LOGGER.error("Stage '%s' failed: %s", target.value, e)
            raise BuildFailed(target, e) from e
        except Exception as e:
            LOGGER.error("Stage '%s' failed in the host: %s", target.value, e)
            cause = HostOperationFailed(str(e))
            raise BuildFailed(target, cause) from e
        self.stage = target
        LOGGER.info("Build stage: %s", target.value)

    def run(self) -> BuildResult:
        """Run the whole build.

        Returns:
            The committed build result.

        Raises:
            BuildFailed: If any stage fails. Nothing is left in the host model.
            RuntimeError: If this orchestrator already ran.
        """
        if self.stage is not BuildStage.IDLE:
            raise RuntimeError(f"Orchestrator already used (stage {self.stage.value})")

        config = self.config
        with self._stage(BuildStage.COMMITTED):
            with transaction(self.host, config.transaction_name):
                with self._stage(BuildStage.LEVELS_RESOLVED):
                    levels = self.resolve_levels()

                with self._stage(BuildStage.FOOTPRINT_PLANNED):
                    footprint = plan_rectangle(config.width_internal, config.depth_internal)
                result = BuildResult(levels=levels, footprint=footprint)

                with self._stage(BuildStage.WALLS_CREATED):
                    result.walls = self.create_walls(footprint, *levels)

                with self._stage(BuildStage.OPENINGS_PLACED):
                    result.openings = self.place_openings(result.walls, levels[0])

                with self._stage(BuildStage.ROOF_BUILT):
                    result.roof_profile, result.roof = self.build_roof(
                        result.walls, footprint, levels[1]
                    )

        result.stage = self.stage
        LOGGER.info(
            "Built house: %d walls, %d doors, %d windows, %s roof",
            len(result.walls),
            len(result.doors),
            len(result.windows),
            self.strategy.name,
        )
        return result

    def resolve_levels(self) -> Tuple[Level, Level]:
        """Find the base and top levels by name."""
        levels = self.host.find_levels()
        base = self.host.find_level_by_name(levels, self.config.base_level_name)
        top = self.host.find_level_by_name(levels, self.config.top_level_name)
        if not top.elevation > base.elevation:
            raise InvalidDimension(
                f"Top level '{top.name}' ({top.elevation}) must be above "
                f"base level '{base.name}' ({base.elevation})"
            )
        return base, top

    def create_walls(
        self, footprint: Footprint, base: Level, top: Level
    ) -> List[WallSegment]:
        """Create one wall per footprint edge, standing on the base level."""
        walls = []
        for segment in segments_of(footprint):
            curve = segment.at_elevation(base.elevation)
            walls.append(self.host.create_wall(curve, base, top))
        return walls

    def place_openings(
        self, walls: Sequence[WallSegment], level: Level
    ) -> List[PlacedOpening]:
        """Put the door on wall 0 and a window on every other wall."""
        config = self.config
        door_type = self._opening_type(config.door)
        placed = [self._place(0, walls[0], door_type, level, 0.0)]

        if len(walls) > 1:
            window_type = self._opening_type(config.window)
            sill_height = config.sill_height_internal
            for index in range(1, len(walls)):
                opening = self._place(index, walls[index], window_type, level, sill_height)
                self.host.set_parameter(opening.instance, ParameterKey.SILL_HEIGHT, sill_height)
                placed.append(opening)
        return placed

    def _opening_type(self, spec: OpeningSpec) -> OpeningType:
        found = self.host.find_family_type(spec.kind, spec.family_name, spec.type_name)
        return ensure_active(self.host, found)

    def _place(
        self,
        index: int,
        wall: WallSegment,
        opening_type: OpeningType,
        level: Level,
        sill_height: float,
    ) -> PlacedOpening:
        clearance = opening_type.width if self.config.check_clearance else 0.0
        point = placement_point(wall, sill_height, clearance)
        instance = self.host.create_opening(point, opening_type, wall, level)
        LOGGER.debug(
            "Placed %s on wall %d at (%.4f, %.4f, %.4f)",
            opening_type.kind.value,
            index,
            point.x,
            point.y,
            point.z,
        )
        return PlacedOpening(
            kind=opening_type.kind,
            wall_index=index,
            point=point,
            opening_type=opening_type,
            instance=instance,
        )

    def build_roof(self, walls: Sequence[WallSegment], footprint: Footprint, level: Level):
        """Compute the roof profile with the configured strategy and create it."""
        self.strategy.precheck(walls, footprint)
        roof_type = self.host.find_roof_type(
            self.config.roof_family_name, self.config.roof_type_name
        )
        profile = self.strategy.profile(walls, footprint, level, roof_type, self.config)
        roof = self.strategy.create(self.host, profile, level, roof_type)
        return profile, roof

