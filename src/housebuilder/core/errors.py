"""Error kinds raised while planning or building a house.

Every failure is terminal for the current build. The orchestrator wraps the
first error it sees in :class:`BuildFailed`, carrying the stage that was being
entered and the original cause.
"""

from __future__ import annotations

from typing import Any


class BuildError(Exception):
    """Base class for every error raised by the house builder."""

    pass


class InvalidDimension(BuildError):
    """Raised when a length, width, depth or elevation is not usable."""

    pass


class InvalidFootprint(BuildError):
    """Raised when a footprint is not a closed, simple polygon."""

    pass


class LevelNotFound(BuildError):
    """Raised when a level name is missing from the host's levels."""

    def __init__(self, name: str):
        super().__init__(f"Level '{name}' not found")
        self.name = name


class TypeNotFound(BuildError):
    """Raised when an opening family/type pair is missing from the catalog."""

    def __init__(self, category: Any, family_name: str, type_name: str):
        super().__init__(
            f"No {category} type '{family_name} / {type_name}' in the catalog"
        )
        self.category = category
        self.family_name = family_name
        self.type_name = type_name


class RoofTypeNotFound(BuildError):
    """Raised when a roof family/type pair is missing from the catalog."""

    def __init__(self, family_name: str, type_name: str):
        super().__init__(f"No roof type '{family_name} / {type_name}' in the catalog")
        self.family_name = family_name
        self.type_name = type_name


class UnknownRoofStrategy(BuildError):
    """Raised when a config names a roof strategy that is not registered."""

    def __init__(self, name: str):
        super().__init__(f"Roof strategy '{name}' is not registered")
        self.name = name


class InsufficientWalls(BuildError):
    """Raised when a roof strategy's wall-count precondition does not hold."""

    pass


class SegmentTooShort(BuildError):
    """Raised when a wall segment cannot host an opening of the given width."""

    def __init__(self, length: float, clearance: float):
        super().__init__(
            f"Wall segment of length {length:.4f} is shorter than the "
            f"required clearance {clearance:.4f}"
        )
        self.length = length
        self.clearance = clearance


class HostOperationFailed(BuildError):
    """Raised when the host rejects or fails an operation."""

    pass


class BuildFailed(BuildError):
    """Terminal failure of a build.

    Attributes:
        stage: The build stage that was being entered when the failure happened.
        cause: The underlying error.
    """

    def __init__(self, stage: Any, cause: BaseException):
        stage_name = getattr(stage, "value", stage)
        super().__init__(f"Build failed at stage '{stage_name}': {cause}")
        self.stage = stage
        self.cause = cause
