"""In-memory CAD host.

:class:`InMemoryHost` implements the :class:`~.interface.BuildHost` contract
without any CAD runtime. Elements created inside a transaction are staged and
only become part of the model on commit; rollback discards them, including
type activations. The host refuses mutations outside a transaction, like a
real CAD host does.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from ..core.config import (
    DEFAULT_ROOF_THICKNESS,
    DEFAULT_STOREY_HEIGHT,
    DEFAULT_WALL_WIDTH,
    DEFAULTS_UNIT,
)
from ..core.errors import HostOperationFailed, LevelNotFound
from ..core.model import (
    Curve,
    Level,
    OpeningKind,
    OpeningType,
    Point3D,
    ReferencePlane,
    RoofType,
    WallSegment,
)
from ..core.units import to_internal
from ..geom.openings import select_type
from ..geom.roof import select_roof_type
from .interface import ParameterKey

LOGGER = logging.getLogger(__name__)


@dataclass
class HostElement:
    """An element stored by the in-memory host.

    Attributes:
        id: Element identifier.
        kind: "wall", "door", "window", "roof" or "roof_edge".
        data: Creation arguments of the element.
        parameters: Parameters set after creation.
    """

    id: str
    kind: str
    data: Dict[str, Any]
    parameters: Dict[ParameterKey, Any] = field(default_factory=dict)


def _type_key(opening_type: OpeningType) -> Tuple[OpeningKind, str, str]:
    return (opening_type.kind, opening_type.family_name, opening_type.type_name)


class InMemoryHost:
    """Transactional element store standing in for a CAD document."""

    def __init__(
        self,
        levels: Iterable[Level] = (),
        opening_types: Iterable[OpeningType] = (),
        roof_types: Iterable[RoofType] = (),
        wall_width: float = 0.0,
        fail_on: Optional[Set[str]] = None,
    ):
        self.levels = list(levels)
        self.opening_types = list(opening_types)
        self.roof_types = list(roof_types)
        self.wall_width = wall_width
        self.fail_on = set(fail_on or ())

        self.elements: Dict[str, HostElement] = {}
        self.calls: List[str] = []
        self.transactions: List[Tuple[str, str]] = []

        self._active: Set[Tuple[OpeningKind, str, str]] = {
            _type_key(t) for t in self.opening_types if t.is_active
        }
        self._staged: Dict[str, HostElement] = {}
        self._staged_active: Set[Tuple[OpeningKind, str, str]] = set()
        self._transaction: Optional[str] = None
        self._ids = itertools.count(1)

    # ------------------------------------------------------------------ #
    # Inspection helpers
    # ------------------------------------------------------------------ #
    @property
    def in_transaction(self) -> bool:
        return self._transaction is not None

    def elements_of_kind(self, kind: str) -> List[HostElement]:
        return [e for e in self.elements.values() if e.kind == kind]

    @property
    def walls(self) -> List[HostElement]:
        return self.elements_of_kind("wall")

    @property
    def doors(self) -> List[HostElement]:
        return self.elements_of_kind("door")

    @property
    def windows(self) -> List[HostElement]:
        return self.elements_of_kind("window")

    @property
    def roofs(self) -> List[HostElement]:
        return self.elements_of_kind("roof")

    def is_active(self, opening_type: OpeningType) -> bool:
        key = _type_key(opening_type)
        return key in self._active or key in self._staged_active

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #
    def _record(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise HostOperationFailed(f"Host failed during '{operation}'")

    def _require_transaction(self, operation: str) -> None:
        if self._transaction is None:
            raise HostOperationFailed(
                f"'{operation}' modifies the model and needs an open transaction"
            )

    def _add(self, kind: str, **data: Any) -> HostElement:
        element = HostElement(id=f"{kind}-{next(self._ids)}", kind=kind, data=data)
        self._staged[element.id] = element
        return element

    def _lookup(self, element_id: Optional[str]) -> Optional[HostElement]:
        if element_id is None:
            return None
        return self._staged.get(element_id) or self.elements.get(element_id)

    # ------------------------------------------------------------------ #
    # Lookups
    # ------------------------------------------------------------------ #
    def find_levels(self) -> List[Level]:
        self._record("find_levels")
        return list(self.levels)

    def find_level_by_name(self, levels: Sequence[Level], name: str) -> Level:
        self._record("find_level_by_name")
        for level in levels:
            if level.name == name:
                return level
        raise LevelNotFound(name)

    def find_family_type(
        self, category: OpeningKind, family_name: str, type_name: str
    ) -> OpeningType:
        self._record("find_family_type")
        found = select_type(self.opening_types, category, family_name, type_name)
        return replace(found, is_active=self.is_active(found))

    def find_roof_type(self, family_name: str, type_name: str) -> RoofType:
        self._record("find_roof_type")
        return select_roof_type(self.roof_types, family_name, type_name)

    # ------------------------------------------------------------------ #
    # Mutations
    # ------------------------------------------------------------------ #
    def activate(self, opening_type: OpeningType) -> None:
        self._record("activate")
        self._require_transaction("activate")
        self._staged_active.add(_type_key(opening_type))

    def create_wall(
        self, curve: WallSegment, base_level: Level, top_level: Level
    ) -> WallSegment:
        self._record("create_wall")
        self._require_transaction("create_wall")
        if curve.length == 0:
            raise HostOperationFailed("Cannot create a wall along a zero-length curve")
        element = self._add(
            "wall", start=curve.start, end=curve.end, base_level=base_level, top_level=top_level
        )
        LOGGER.debug("Created %s from %s to %s", element.id, curve.start, curve.end)
        return WallSegment(
            start=curve.start,
            end=curve.end,
            base_level=base_level,
            top_level=top_level,
            width=self.wall_width,
            id=element.id,
        )

    def create_opening(
        self,
        point: Point3D,
        opening_type: OpeningType,
        host_wall: WallSegment,
        level: Level,
    ) -> HostElement:
        self._record("create_opening")
        self._require_transaction("create_opening")
        wall = self._lookup(host_wall.id)
        if wall is None or wall.kind != "wall":
            raise HostOperationFailed(f"Host wall '{host_wall.id}' does not exist")
        if not self.is_active(opening_type):
            raise HostOperationFailed(
                f"Type '{opening_type.family_name} / {opening_type.type_name}' is not active"
            )
        return self._add(
            opening_type.kind.value,
            point=point,
            opening_type=opening_type,
            wall_id=wall.id,
            level=level,
        )

    def set_parameter(self, instance: Any, key: ParameterKey, value: Any) -> None:
        self._record("set_parameter")
        self._require_transaction("set_parameter")
        element = self._staged.get(getattr(instance, "id", None))
        if element is None:
            raise HostOperationFailed(
                f"Element '{getattr(instance, 'id', instance)}' is not editable "
                "in the open transaction"
            )
        element.parameters[key] = value

    def create_footprint_roof(
        self, curve_loop: Sequence[Curve], level: Level, roof_type: RoofType
    ) -> Tuple[HostElement, List[HostElement]]:
        self._record("create_footprint_roof")
        self._require_transaction("create_footprint_roof")
        if len(curve_loop) < 3:
            raise HostOperationFailed("A footprint roof needs at least 3 curves")
        for current, following in zip(curve_loop, list(curve_loop[1:]) + [curve_loop[0]]):
            if not current.end.is_close(following.start, 1e-6):
                raise HostOperationFailed("Footprint roof curves do not form a closed loop")
        roof = self._add(
            "roof", style="footprint", curves=tuple(curve_loop), level=level, roof_type=roof_type
        )
        edges = [
            self._add("roof_edge", roof_id=roof.id, curve=curve) for curve in curve_loop
        ]
        return roof, edges

    def create_extrusion_roof(
        self,
        curves: Sequence[Curve],
        plane: ReferencePlane,
        level: Level,
        roof_type: RoofType,
        start_param: float,
        end_param: float,
    ) -> HostElement:
        self._record("create_extrusion_roof")
        self._require_transaction("create_extrusion_roof")
        if not curves:
            raise HostOperationFailed("An extrusion roof needs a profile")
        if start_param >= end_param:
            raise HostOperationFailed(
                f"Extrusion start {start_param} must be below end {end_param}"
            )
        return self._add(
            "roof",
            style="extrusion",
            curves=tuple(curves),
            plane=plane,
            level=level,
            roof_type=roof_type,
            start_param=start_param,
            end_param=end_param,
        )

    # ------------------------------------------------------------------ #
    # Transactions
    # ------------------------------------------------------------------ #
    def begin(self, name: str) -> None:
        self._record("begin")
        if self._transaction is not None:
            raise HostOperationFailed(
                f"Transaction '{self._transaction}' is already open"
            )
        self._transaction = name

    def commit(self) -> None:
        self._record("commit")
        if self._transaction is None:
            raise HostOperationFailed("No open transaction to commit")
        self.elements.update(self._staged)
        self._active |= self._staged_active
        self.transactions.append((self._transaction, "committed"))
        self._reset_transaction()

    def rollback(self) -> None:
        self.calls.append("rollback")
        if self._transaction is None:
            return
        LOGGER.debug("Discarding %d staged elements", len(self._staged))
        self.transactions.append((self._transaction, "rolled back"))
        self._reset_transaction()

    def _reset_transaction(self) -> None:
        self._staged = {}
        self._staged_active = set()
        self._transaction = None


def default_host() -> InMemoryHost:
    """Create a host seeded like a stock metric architectural template.

    Two levels one default storey apart, one door, one window and one roof
    type, all types inactive, default-width walls.
    """

    def mm(value: float) -> float:
        return to_internal(value, DEFAULTS_UNIT)

    return InMemoryHost(
        levels=[
            Level(id="level-1", name="Level 1", elevation=0.0),
            Level(id="level-2", name="Level 2", elevation=mm(DEFAULT_STOREY_HEIGHT)),
        ],
        opening_types=[
            OpeningType(
                OpeningKind.DOOR,
                "M_Single-Flush",
                "0915 x 2032mm",
                width=mm(915),
                height=mm(2032),
                id="door-type-1",
            ),
            OpeningType(
                OpeningKind.WINDOW,
                "M_Window-Casement-Double",
                "1050 x 1350mm",
                width=mm(1050),
                height=mm(1350),
                id="window-type-1",
            ),
        ],
        roof_types=[
            RoofType(
                "Basic Roof",
                "Cold Roof - Concrete",
                thickness=mm(DEFAULT_ROOF_THICKNESS),
                id="roof-type-1",
            ),
        ],
        wall_width=mm(DEFAULT_WALL_WIDTH),
    )
