"""Shared fixtures for the house builder tests."""

from dataclasses import replace

import pytest

from housebuilder.core.config import DEFAULT_WINDOW, BuildConfig
from housebuilder.core.model import Level, RoofType
from housebuilder.core.units import LengthUnit
from housebuilder.geom.footprint import plan_rectangle, segments_of
from housebuilder.host.memory import default_host


@pytest.fixture
def host():
    return default_host()


@pytest.fixture
def config():
    return BuildConfig()


@pytest.fixture
def feet_config():
    """Config in internal units so expected values stay readable."""
    return BuildConfig(
        width=10.0,
        depth=6.0,
        unit=LengthUnit.FEET,
        window=replace(DEFAULT_WINDOW, sill_height=3.0),
        ridge_rise=2.0,
    )


@pytest.fixture
def rectangle():
    return plan_rectangle(10.0, 6.0)


@pytest.fixture
def walls(rectangle):
    segments = segments_of(rectangle)
    for segment in segments:
        segment.width = 1.0
    return segments


@pytest.fixture
def roof_level():
    return Level(id="level-2", name="Level 2", elevation=12.0)


@pytest.fixture
def roof_type():
    return RoofType("Basic Roof", "Cold Roof - Concrete", thickness=1.0)
