"""Boundary between the house builder and a CAD host.

The builder never talks to a CAD model directly: every lookup, element
creation and parameter change goes through a :class:`BuildHost` passed in
explicitly by the caller. Lookups return the item they were asked for or
raise the matching not-found error.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, List, Protocol, Sequence, Tuple

from ..core.model import (
    Curve,
    Level,
    OpeningKind,
    OpeningType,
    ParameterKey,
    Point3D,
    ReferencePlane,
    RoofType,
    WallSegment,
)

LOGGER = logging.getLogger(__name__)


class BuildHost(Protocol):
    """Protocol for CAD hosts.

    A host owns the persistent model and its transactions. All lengths are
    in the internal unit.
    """

    def find_levels(self) -> List[Level]:
        """Return every level of the model, in host order."""
        ...

    def find_level_by_name(self, levels: Sequence[Level], name: str) -> Level:
        """Pick a level by exact name.

        Raises:
            LevelNotFound: If no level has that name.
        """
        ...

    def find_family_type(
        self, category: OpeningKind, family_name: str, type_name: str
    ) -> OpeningType:
        """Look up a door or window type.

        Raises:
            TypeNotFound: If the (family, type) pair is not in the catalog.
        """
        ...

    def find_roof_type(self, family_name: str, type_name: str) -> RoofType:
        """Look up a roof type.

        Raises:
            RoofTypeNotFound: If the (family, type) pair is not in the catalog.
        """
        ...

    def activate(self, opening_type: OpeningType) -> None:
        """Make an opening type available for placement."""
        ...

    def create_wall(
        self, curve: WallSegment, base_level: Level, top_level: Level
    ) -> WallSegment:
        """Create a wall along ``curve`` and return it with ``id`` and ``width`` set."""
        ...

    def create_opening(
        self, point: Point3D, opening_type: OpeningType, host_wall: WallSegment, level: Level
    ) -> Any:
        """Insert a door or window into ``host_wall`` and return its handle."""
        ...

    def set_parameter(self, instance: Any, key: ParameterKey, value: Any) -> None:
        """Set a parameter of a created element."""
        ...

    def create_footprint_roof(
        self, curve_loop: Sequence[Curve], level: Level, roof_type: RoofType
    ) -> Tuple[Any, List[Any]]:
        """Create a footprint roof.

        Returns:
            The roof handle and one edge handle per curve, in curve order.
        """
        ...

    def create_extrusion_roof(
        self,
        curves: Sequence[Curve],
        plane: ReferencePlane,
        level: Level,
        roof_type: RoofType,
        start_param: float,
        end_param: float,
    ) -> Any:
        """Create an extrusion roof and return its handle."""
        ...

    def begin(self, name: str) -> None:
        ...

    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        ...


@contextmanager
def transaction(host: BuildHost, name: str) -> Iterator[BuildHost]:
    """Run a block inside one host transaction.

    Commits exactly once if the block finishes. Rolls back and re-raises if
    the block or the commit raises.
    """
    host.begin(name)
    LOGGER.debug("Transaction '%s' started", name)
    try:
        yield host
        host.commit()
    except BaseException:
        LOGGER.warning("Transaction '%s' rolled back", name)
        host.rollback()
        raise
    LOGGER.info("Transaction '%s' committed", name)
