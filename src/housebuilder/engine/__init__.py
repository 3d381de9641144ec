"""Engine module for house building.

This module provides the build orchestrator and the planning/building API.
"""

from .api import build_house, plan_building
from .orchestrator import BuildOrchestrator, BuildStage

__all__ = ["build_house", "plan_building", "BuildOrchestrator", "BuildStage"]
