"""Door and window placement on wall segments."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Iterable

from ..core.errors import SegmentTooShort, TypeNotFound
from ..core.model import OpeningKind, OpeningType, Point3D, WallSegment

if TYPE_CHECKING:
    from ..host.interface import BuildHost

LOGGER = logging.getLogger(__name__)


def placement_point(
    segment: WallSegment, sill_height: float, min_clearance: float = 0.0
) -> Point3D:
    """Return the insertion point of an opening centered on a wall.

    Args:
        segment: Host wall segment.
        sill_height: Vertical offset from the wall base; 0 for doors.
        min_clearance: Shortest wall length that can take the opening,
            usually the opening width.

    Returns:
        Midpoint of the segment raised by ``sill_height``.

    Raises:
        SegmentTooShort: If the segment is shorter than ``min_clearance``.
    """
    length = segment.length
    if length < min_clearance:
        raise SegmentTooShort(length, min_clearance)
    return segment.midpoint.offset(dz=sill_height)


def select_type(
    catalog: Iterable[OpeningType],
    category: OpeningKind,
    family_name: str,
    type_name: str,
) -> OpeningType:
    """Find the opening type with an exact (family, type) name match.

    Raises:
        TypeNotFound: If no entry of ``category`` matches both names.
    """
    for candidate in catalog:
        if (
            candidate.kind is category
            and candidate.family_name == family_name
            and candidate.type_name == type_name
        ):
            return candidate
    raise TypeNotFound(category.value, family_name, type_name)


def ensure_active(host: "BuildHost", opening_type: OpeningType) -> OpeningType:
    """Activate an opening type on the host if it is not active yet.

    Returns the type marked active. Calling it again on the result is a no-op.
    """
    if opening_type.is_active:
        return opening_type
    LOGGER.debug(
        "Activating %s type %s / %s",
        opening_type.kind.value,
        opening_type.family_name,
        opening_type.type_name,
    )
    host.activate(opening_type)
    return replace(opening_type, is_active=True)
