"""Tests for the host-free planning entry point."""

import pytest

from housebuilder import BuildConfig, build_house, plan_building
from housebuilder.core.errors import InvalidDimension
from housebuilder.core.model import ExtrusionRoofProfile, FootprintRoofProfile, Level, OpeningKind
from housebuilder.core.units import LengthUnit


def test_plan_default_house():
    result = plan_building(wall_width=1.0, roof_thickness=1.0)

    assert len(result.walls) == 4
    assert [o.kind for o in result.openings] == [OpeningKind.DOOR] + [OpeningKind.WINDOW] * 3
    assert result.roof is None
    assert result.stage is None
    assert all(o.instance is None for o in result.openings)
    assert result.levels[1].elevation == pytest.approx(4000.0 / 304.8)


def test_plan_uses_given_levels(feet_config):
    base = Level("b", "Level 1", 2.0)
    top = Level("t", "Level 2", 12.0)

    result = plan_building(feet_config, base, top, wall_width=1.0, roof_thickness=1.0)

    assert all(w.start.z == 2.0 and w.end.z == 2.0 for w in result.walls)
    assert all(w.width == 1.0 for w in result.walls)
    assert result.doors[0].point.z == 2.0
    assert [w.point.z for w in result.windows] == pytest.approx([5.0] * 3)

    profile = result.roof_profile
    assert isinstance(profile, ExtrusionRoofProfile)
    assert profile.curves[0].end.z == pytest.approx(15.0)
    assert (profile.start_param, profile.end_param) == pytest.approx((-5.5, 5.5))


def test_plan_flat_roof(feet_config):
    top = Level("t", "Level 2", 12.0)
    config = feet_config.with_overrides(roof_strategy="flat")

    result = plan_building(config, top_level=top, wall_width=1.0)

    profile = result.roof_profile
    assert isinstance(profile, FootprintRoofProfile)
    assert len(profile.curves) == 4
    assert {c.start.z for c in profile.curves} == {12.0}


def test_plan_rejects_bad_dimensions(config):
    with pytest.raises(InvalidDimension):
        plan_building(config.with_overrides(width=-1.0))


def test_plan_rejects_unknown_strategy(config):
    with pytest.raises(KeyError):
        plan_building(config.with_overrides(roof_strategy="dome"))


def test_plan_matches_build(host):
    config = BuildConfig()
    base, top = host.levels
    planned = plan_building(
        config,
        base,
        top,
        wall_width=host.wall_width,
        roof_thickness=host.roof_types[0].thickness,
    )
    built = build_house(host, config)

    assert [w.start for w in planned.walls] == [w.start for w in built.walls]
    assert [o.point for o in planned.openings] == [o.point for o in built.openings]
    assert planned.roof_profile == built.roof_profile


def test_plan_storey_height_comes_from_config():
    config = BuildConfig(unit=LengthUnit.METERS, storey_height=3.0)

    result = plan_building(config)

    assert result.levels[1].elevation == pytest.approx(3000.0 / 304.8)
