"""Geometry planning for house building.

This module provides the footprint planner, opening placement and the
roof profile strategies.
"""

from .footprint import corner_offsets, plan_rectangle, segments_of
from .openings import ensure_active, placement_point, select_type
from .roof import get_strategy, list_strategies, register_strategy

__all__ = [
    "plan_rectangle",
    "segments_of",
    "corner_offsets",
    "placement_point",
    "select_type",
    "ensure_active",
    "get_strategy",
    "list_strategies",
    "register_strategy",
]
