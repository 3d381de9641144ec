"""Build configuration.

Every tunable of a build lives here with a documented default, so that no
geometry or orchestration code carries inline numbers. Dimensions are given
in ``unit`` and converted to internal units on access.

Length defaults are stored in millimetres. A length left unset on a
:class:`BuildConfig` takes its default converted to the config's ``unit``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional

from .errors import InvalidDimension
from .model import OpeningKind, OpeningSpec
from .units import LengthUnit, convert, to_internal

# --------------------------------------------------------------------------- #
# Global parameters (lengths in DEFAULTS_UNIT)
# --------------------------------------------------------------------------- #
DEFAULTS_UNIT = LengthUnit.MILLIMETERS
DEFAULT_WIDTH = 10000.0
DEFAULT_DEPTH = 5000.0
DEFAULT_SILL_HEIGHT = 900.0
DEFAULT_RIDGE_RISE = 500.0  # ridge height above the eaves
DEFAULT_STOREY_HEIGHT = 4000.0  # top level above base level when no host gives one
DEFAULT_WALL_WIDTH = 200.0
DEFAULT_ROOF_THICKNESS = 300.0
DEFAULT_SLOPE_ANGLE = 0.5  # radians, flat-footprint roof edges
DEFAULT_ROOF_STRATEGY = "extrusion"

DEFAULT_DOOR = OpeningSpec(OpeningKind.DOOR, "M_Single-Flush", "0915 x 2032mm")
DEFAULT_WINDOW = OpeningSpec(
    OpeningKind.WINDOW,
    "M_Window-Casement-Double",
    "1050 x 1350mm",
    sill_height=DEFAULT_SILL_HEIGHT,
)

_LENGTH_DEFAULTS = {
    "width": DEFAULT_WIDTH,
    "depth": DEFAULT_DEPTH,
    "ridge_rise": DEFAULT_RIDGE_RISE,
    "storey_height": DEFAULT_STOREY_HEIGHT,
}


def default_length(value: float, unit: LengthUnit) -> float:
    """Express a default length (in ``DEFAULTS_UNIT``) in ``unit``."""
    return convert(value, DEFAULTS_UNIT, unit)


def default_window(unit: LengthUnit) -> OpeningSpec:
    """The default window with its sill height expressed in ``unit``."""
    return replace(
        DEFAULT_WINDOW, sill_height=default_length(DEFAULT_SILL_HEIGHT, unit)
    )


@dataclass(frozen=True)
class BuildConfig:
    """Parameters of one house build.

    Length fields left as None take their millimetre default converted to
    ``unit``, so ``BuildConfig(unit=LengthUnit.METERS)`` describes the same
    house as ``BuildConfig()``.

    Attributes:
        width: Overall footprint width (x extent), in ``unit``.
        depth: Overall footprint depth (y extent), in ``unit``.
        unit: Unit of every length in this record.
        base_level_name: Level the walls stand on.
        top_level_name: Level the walls reach and the roof sits on.
        door: Door placed on the front wall (wall 0).
        window: Window placed on every other wall.
        roof_family_name: Roof family looked up in the host catalog.
        roof_type_name: Roof type looked up in the host catalog.
        roof_strategy: Registered roof strategy name ("extrusion" or "flat").
        slope_angle: Slope of every edge of a flat footprint roof, radians.
        ridge_rise: Height of the ridge above the eaves of an extrusion roof.
        storey_height: Top level elevation above the base level, used when
            planning without a host.
        check_clearance: Reject walls shorter than the opening placed on them.
        transaction_name: Name of the host transaction.
    """

    width: Optional[float] = None
    depth: Optional[float] = None
    unit: LengthUnit = LengthUnit.MILLIMETERS
    base_level_name: str = "Level 1"
    top_level_name: str = "Level 2"
    door: OpeningSpec = DEFAULT_DOOR
    window: Optional[OpeningSpec] = None
    roof_family_name: str = "Basic Roof"
    roof_type_name: str = "Cold Roof - Concrete"
    roof_strategy: str = DEFAULT_ROOF_STRATEGY
    slope_angle: float = DEFAULT_SLOPE_ANGLE
    ridge_rise: Optional[float] = None
    storey_height: Optional[float] = None
    check_clearance: bool = True
    transaction_name: str = field(default="Create House")

    def __post_init__(self) -> None:
        for name, default in _LENGTH_DEFAULTS.items():
            if getattr(self, name) is None:
                object.__setattr__(self, name, default_length(default, self.unit))
        if self.window is None:
            object.__setattr__(self, "window", default_window(self.unit))

        if self.door.kind is not OpeningKind.DOOR:
            raise ValueError("BuildConfig.door must be a door spec")
        if self.window.kind is not OpeningKind.WINDOW:
            raise ValueError("BuildConfig.window must be a window spec")
        if self.ridge_rise < 0:
            raise InvalidDimension(f"Ridge rise must be >= 0, got {self.ridge_rise}")
        if not self.storey_height > 0:
            raise InvalidDimension(
                f"Storey height must be > 0, got {self.storey_height}"
            )

    # Internal-unit accessors
    @property
    def width_internal(self) -> float:
        return to_internal(self.width, self.unit)

    @property
    def depth_internal(self) -> float:
        return to_internal(self.depth, self.unit)

    @property
    def sill_height_internal(self) -> float:
        return to_internal(self.window.effective_sill_height, self.unit)

    @property
    def ridge_rise_internal(self) -> float:
        return to_internal(self.ridge_rise, self.unit)

    @property
    def storey_height_internal(self) -> float:
        return to_internal(self.storey_height, self.unit)

    def with_overrides(self, **changes: Any) -> BuildConfig:
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> BuildConfig:
        """Build a config from a JSON-like mapping.

        Openings are given as ``{"family": ..., "type": ..., "sill_height": ...}``.
        Missing keys keep their defaults, expressed in the given ``unit``;
        unknown keys are rejected.

        Raises:
            ValueError: If a key is unknown or a value has the wrong shape.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")

        unit = LengthUnit.parse(data.get("unit", DEFAULTS_UNIT))
        values: Dict[str, Any] = {"unit": unit}
        for key, value in data.items():
            if key == "unit":
                continue
            if key == "door":
                values[key] = _opening_from_dict(OpeningKind.DOOR, value, DEFAULT_DOOR)
            elif key == "window":
                values[key] = _opening_from_dict(
                    OpeningKind.WINDOW, value, default_window(unit)
                )
            elif key in ("width", "depth", "slope_angle", "ridge_rise", "storey_height"):
                values[key] = float(value)
            else:
                values[key] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, LengthUnit):
                value = value.value
            elif isinstance(value, OpeningSpec):
                value = {
                    "family": value.family_name,
                    "type": value.type_name,
                    "sill_height": value.sill_height,
                }
            data[f.name] = value
        return data


def _opening_from_dict(
    kind: OpeningKind, data: Dict[str, Any], default: OpeningSpec
) -> OpeningSpec:
    if not isinstance(data, dict):
        raise ValueError(f"Opening '{kind.value}' must be an object, got: {data}")
    sill_height = data.get("sill_height", default.sill_height)
    return OpeningSpec(
        kind=kind,
        family_name=data.get("family", default.family_name),
        type_name=data.get("type", default.type_name),
        sill_height=float(sill_height) if sill_height is not None else None,
    )
