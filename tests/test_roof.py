"""Tests for the roof profile strategies."""

import pytest

from housebuilder.core.errors import HostOperationFailed, InsufficientWalls, RoofTypeNotFound
from housebuilder.core.model import (
    ExtrusionRoofProfile,
    FootprintRoofProfile,
    Point3D,
    RoofType,
)
from housebuilder.geom.roof import (
    FlatOffsetFootprint,
    RidgeExtrusion,
    get_strategy,
    list_strategies,
    register_strategy,
    select_roof_type,
)


def test_registry_contains_both_strategies():
    assert list_strategies() == ["extrusion", "flat"]
    assert isinstance(get_strategy("flat"), FlatOffsetFootprint)
    assert isinstance(get_strategy("extrusion"), RidgeExtrusion)
    with pytest.raises(KeyError):
        get_strategy("mansard")


def test_register_strategy():
    strategy = RidgeExtrusion()
    register_strategy("gable", strategy)
    try:
        assert get_strategy("gable") is strategy
    finally:
        from housebuilder.geom import roof

        roof._STRATEGIES.pop("gable")


def test_flat_profile_offsets_walls(walls, rectangle, roof_level, roof_type, feet_config):
    profile = FlatOffsetFootprint().profile(walls, rectangle, roof_level, roof_type, feet_config)

    assert isinstance(profile, FootprintRoofProfile)
    assert len(profile.curves) == len(walls)
    assert profile.curves[0].start == Point3D(-5.5, -3.5, 12.0)
    assert profile.curves[0].end == Point3D(5.5, -3.5, 12.0)
    assert profile.curves[2].start == Point3D(5.5, 3.5, 12.0)
    # Closed loop parallel to the walls
    for current, following in zip(profile.curves, profile.curves[1:] + profile.curves[:1]):
        assert current.end == following.start
    assert profile.defines_slope == (True, True, True, True)
    assert profile.slope_angle == 0.5


def test_flat_profile_uses_configured_slope(walls, rectangle, roof_level, roof_type, feet_config):
    config = feet_config.with_overrides(slope_angle=0.3)
    profile = FlatOffsetFootprint().profile(walls, rectangle, roof_level, roof_type, config)
    assert profile.slope_angle == 0.3


def test_flat_profile_requires_one_wall_per_edge(walls, rectangle, roof_level, roof_type, feet_config):
    with pytest.raises(InsufficientWalls):
        FlatOffsetFootprint().profile(walls[:3], rectangle, roof_level, roof_type, feet_config)


def test_flat_profile_rejects_extra_walls(walls, rectangle, roof_level, roof_type, feet_config):
    with pytest.raises(InsufficientWalls):
        FlatOffsetFootprint().profile(
            walls + walls[:1], rectangle, roof_level, roof_type, feet_config
        )


def test_extrusion_profile(walls, rectangle, roof_level, roof_type, feet_config):
    profile = RidgeExtrusion().profile(walls, rectangle, roof_level, roof_type, feet_config)

    assert isinstance(profile, ExtrusionRoofProfile)
    first, second = profile.curves
    assert first.start == Point3D(5.0, -3.5, 13.0)
    assert first.end == Point3D(5.0, 0.0, 15.0)
    assert second.start == first.end
    assert second.end == Point3D(5.0, 3.5, 13.0)

    assert profile.plane.origin == Point3D(0.0, 0.0, 0.0)
    assert profile.plane.bubble_end == Point3D(0.0, 0.0, 20.0)
    assert profile.plane.free_end == Point3D(0.0, 20.0, 0.0)
    assert profile.start_param == pytest.approx(-5.5)
    assert profile.end_param == pytest.approx(5.5)


def test_extrusion_needs_two_walls(walls, rectangle, roof_level, roof_type, feet_config):
    strategy = RidgeExtrusion()
    strategy.precheck(walls[:2], rectangle)
    with pytest.raises(InsufficientWalls):
        strategy.profile(walls[:1], rectangle, roof_level, roof_type, feet_config)


def test_strategies_need_wall_width(walls, rectangle, roof_level, roof_type, feet_config):
    walls[0].width = None
    for strategy in (FlatOffsetFootprint(), RidgeExtrusion()):
        with pytest.raises(HostOperationFailed):
            strategy.profile(walls, rectangle, roof_level, roof_type, feet_config)


def test_select_roof_type():
    catalog = [
        RoofType("Basic Roof", "Generic - 400mm"),
        RoofType("Basic Roof", "Cold Roof - Concrete", thickness=1.0),
    ]
    assert select_roof_type(catalog, "Basic Roof", "Cold Roof - Concrete") is catalog[1]
    with pytest.raises(RoofTypeNotFound):
        select_roof_type(catalog, "Sloped Glazing", "Cold Roof - Concrete")
