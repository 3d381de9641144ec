"""Visualization module for house building.

This module renders top views of planned and built houses.
"""

from .generator import generate_plan_image

__all__ = ["generate_plan_image"]
