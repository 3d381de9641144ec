"""JSON input and output for house builds.

This module loads build configurations and in-memory host fixtures from
JSON files, and writes JSON reports of finished builds.
"""

import json
from pathlib import Path
from typing import Any, Dict

from ..core.config import BuildConfig
from ..core.model import (
    BuildResult,
    Curve,
    ExtrusionRoofProfile,
    FootprintRoofProfile,
    Level,
    OpeningKind,
    OpeningType,
    Point3D,
    RoofType,
)
from ..core.units import LengthUnit, to_internal
from ..host.memory import InMemoryHost


def _read_json(path: str) -> Any:
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with open(file_path, encoding="utf-8") as f:
        return json.load(f)


def load_config(path: str) -> BuildConfig:
    """Load a build configuration from a JSON file.

    Args:
        path: Path to a JSON object with BuildConfig fields.

    Returns:
        BuildConfig with defaults for the missing fields.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the JSON data is invalid or malformed.
    """
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a JSON object, got: {type(data).__name__}")
    return BuildConfig.from_dict(data)


def load_host(path: str) -> InMemoryHost:
    """Seed an in-memory host from a JSON fixture.

    The fixture format is::

        {
          "unit": "mm",
          "wall_width": 200,
          "levels": [{"name": "Level 1", "elevation": 0}, ...],
          "opening_types": [{"kind": "door", "family": "...", "type": "...",
                             "width": 915, "height": 2032, "active": false}, ...],
          "roof_types": [{"family": "...", "type": "...", "thickness": 300}, ...]
        }

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the JSON data is invalid or malformed.
    """
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"Host fixture must be a JSON object, got: {type(data).__name__}")
    unit = LengthUnit.parse(data.get("unit", "mm"))

    def length(value: Any) -> float:
        return to_internal(float(value), unit)

    levels = []
    for i, level_data in enumerate(data.get("levels", [])):
        try:
            levels.append(
                Level(
                    id=level_data.get("id", f"level-{i + 1}"),
                    name=level_data["name"],
                    elevation=length(level_data["elevation"]),
                )
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid level data at index {i}: {e}") from e

    opening_types = []
    for i, type_data in enumerate(data.get("opening_types", [])):
        try:
            opening_types.append(
                OpeningType(
                    kind=OpeningKind(type_data["kind"]),
                    family_name=type_data["family"],
                    type_name=type_data["type"],
                    width=length(type_data.get("width", 0.0)),
                    height=length(type_data.get("height", 0.0)),
                    is_active=bool(type_data.get("active", False)),
                    id=type_data.get("id", f"opening-type-{i + 1}"),
                )
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid opening type at index {i}: {e}") from e

    roof_types = []
    for i, type_data in enumerate(data.get("roof_types", [])):
        try:
            roof_types.append(
                RoofType(
                    family_name=type_data["family"],
                    type_name=type_data["type"],
                    thickness=length(type_data.get("thickness", 0.0)),
                    id=type_data.get("id", f"roof-type-{i + 1}"),
                )
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid roof type at index {i}: {e}") from e

    return InMemoryHost(
        levels=levels,
        opening_types=opening_types,
        roof_types=roof_types,
        wall_width=length(data.get("wall_width", 0.0)),
    )


def _point(point: Point3D) -> list:
    return [point.x, point.y, point.z]


def _curve(curve: Curve) -> Dict[str, list]:
    return {"start": _point(curve.start), "end": _point(curve.end)}


def _element_id(handle: Any) -> Any:
    return getattr(handle, "id", handle)


def result_to_dict(result: BuildResult) -> Dict[str, Any]:
    """Convert a build result to plain JSON data (lengths in internal units)."""
    roof: Dict[str, Any] = {"id": _element_id(result.roof)}
    profile = result.roof_profile
    if isinstance(profile, FootprintRoofProfile):
        roof.update(
            style="footprint",
            curves=[_curve(c) for c in profile.curves],
            defines_slope=list(profile.defines_slope),
            slope_angle=profile.slope_angle,
        )
    elif isinstance(profile, ExtrusionRoofProfile):
        roof.update(
            style="extrusion",
            curves=[_curve(c) for c in profile.curves],
            plane={
                "origin": _point(profile.plane.origin),
                "bubble_end": _point(profile.plane.bubble_end),
                "free_end": _point(profile.plane.free_end),
            },
            start_param=profile.start_param,
            end_param=profile.end_param,
        )

    return {
        "stage": getattr(result.stage, "value", result.stage),
        "levels": [
            {"id": level.id, "name": level.name, "elevation": level.elevation}
            for level in result.levels
        ],
        "footprint": [_point(p) for p in result.footprint.points],
        "walls": [
            {
                "id": wall.id,
                "start": _point(wall.start),
                "end": _point(wall.end),
                "width": wall.width,
                "base_level": wall.base_level.name if wall.base_level else None,
                "top_level": wall.top_level.name if wall.top_level else None,
            }
            for wall in result.walls
        ],
        "openings": [
            {
                "id": _element_id(opening.instance),
                "kind": opening.kind.value,
                "wall_index": opening.wall_index,
                "point": _point(opening.point),
                "family": opening.opening_type.family_name,
                "type": opening.opening_type.type_name,
            }
            for opening in result.openings
        ],
        "roof": roof,
    }


def save_report(result: BuildResult, output_path: str) -> None:
    """Write a JSON report of a build.

    Args:
        result: The build (or plan) to report.
        output_path: Path where to save the JSON file.
    """
    # Ensure output directory exists
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(result_to_dict(result), f, indent=2)
