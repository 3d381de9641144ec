"""Footprint planning.

This module builds the closed rectangular outline of the house and splits
it into the ordered wall segments the orchestrator creates. Edge 0 is the
front of the house and receives the door.
"""

from __future__ import annotations

import logging
from typing import List

from ..core.errors import InvalidDimension, InvalidFootprint
from ..core.model import Footprint, Point3D, WallSegment

LOGGER = logging.getLogger(__name__)


def plan_rectangle(width: float, depth: float) -> Footprint:
    """Plan a rectangle centered at the origin.

    The outline runs counter-clockwise starting from the front-left corner,
    and the first point is repeated at the end.

    Args:
        width: Extent along x, internal units.
        depth: Extent along y, internal units.

    Returns:
        A five-point closed Footprint at z = 0.

    Raises:
        InvalidDimension: If width or depth is not strictly positive.
    """
    # "not >" also rejects NaN
    if not width > 0:
        raise InvalidDimension(f"Footprint width must be > 0, got {width}")
    if not depth > 0:
        raise InvalidDimension(f"Footprint depth must be > 0, got {depth}")

    half_w = width / 2
    half_d = depth / 2
    points = (
        Point3D(-half_w, -half_d, 0.0),
        Point3D(half_w, -half_d, 0.0),
        Point3D(half_w, half_d, 0.0),
        Point3D(-half_w, half_d, 0.0),
        Point3D(-half_w, -half_d, 0.0),
    )
    LOGGER.debug("Planned %.4f x %.4f rectangle footprint", width, depth)
    return Footprint(points)


def segments_of(footprint: Footprint) -> List[WallSegment]:
    """Split a footprint into wall segments, one per edge, in outline order.

    Segment ``i`` runs from ``points[i]`` to ``points[i + 1]``.
    """
    points = footprint.points
    return [
        WallSegment(start=points[i], end=points[i + 1])
        for i in range(len(points) - 1)
    ]


def corner_offsets(footprint: Footprint, distance: float) -> List[Point3D]:
    """Compute outward miter vectors at every corner of a footprint.

    Moving both ends of edge ``i`` by ``offsets[i]`` and ``offsets[i + 1]``
    shifts that edge outward by ``distance`` while keeping the loop closed.
    The returned list is aligned with ``footprint.points`` (last == first).
    For an axis-aligned rectangle each offset is ``(+-distance, +-distance)``.

    Args:
        footprint: Closed footprint.
        distance: Offset distance; negative values offset inward.

    Returns:
        One horizontal vector per footprint point.
    """
    corners = list(footprint.points[:-1])
    count = len(corners)
    # Outward normal of direction d is (d.y, -d.x) on a CCW loop
    sign = 1.0 if footprint.is_ccw else -1.0

    offsets = []
    for i in range(count):
        prev_dir = (corners[i] - corners[i - 1]).normalized()
        next_dir = (corners[(i + 1) % count] - corners[i]).normalized()
        n1 = Point3D(sign * prev_dir.y, -sign * prev_dir.x, 0.0)
        n2 = Point3D(sign * next_dir.y, -sign * next_dir.x, 0.0)
        denominator = 1.0 + n1.dot(n2)
        if denominator <= 1e-9:
            raise InvalidFootprint(f"Footprint folds back on itself at corner {i}")
        offsets.append((n1 + n2) * (distance / denominator))

    offsets.append(offsets[0])
    return offsets
