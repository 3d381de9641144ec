"""Tests for the in-memory host and the transaction helper."""

import pytest

from housebuilder.core.errors import HostOperationFailed, LevelNotFound, RoofTypeNotFound
from housebuilder.core.model import Curve, OpeningKind, ParameterKey, Point3D, WallSegment
from housebuilder.host.interface import transaction
from housebuilder.host.memory import InMemoryHost


def _wall(host):
    base, top = host.levels
    return host.create_wall(WallSegment(Point3D(0, 0), Point3D(10, 0)), base, top)


def test_level_lookup(host):
    levels = host.find_levels()
    assert [level.name for level in levels] == ["Level 1", "Level 2"]
    assert host.find_level_by_name(levels, "Level 2").elevation > 0
    with pytest.raises(LevelNotFound):
        host.find_level_by_name(levels, "Roof")


def test_roof_type_lookup(host):
    assert host.find_roof_type("Basic Roof", "Cold Roof - Concrete").thickness > 0
    with pytest.raises(RoofTypeNotFound):
        host.find_roof_type("Basic Roof", "Warm Roof - Timber")


def test_mutations_need_a_transaction(host):
    with pytest.raises(HostOperationFailed):
        _wall(host)


def test_commit_keeps_elements(host):
    with transaction(host, "walls"):
        wall = _wall(host)
        assert host.walls == []  # staged until commit

    assert wall.width == host.wall_width
    assert [w.id for w in host.walls] == [wall.id]
    assert host.transactions == [("walls", "committed")]
    assert not host.in_transaction


def test_rollback_discards_everything(host):
    door = host.find_family_type(OpeningKind.DOOR, "M_Single-Flush", "0915 x 2032mm")

    with pytest.raises(RuntimeError):
        with transaction(host, "doomed"):
            host.activate(door)
            _wall(host)
            raise RuntimeError("boom")

    assert host.elements == {}
    assert not host.is_active(door)
    assert host.transactions == [("doomed", "rolled back")]


def test_failed_commit_rolls_back():
    host = InMemoryHost(fail_on={"commit"})
    with pytest.raises(HostOperationFailed):
        with transaction(host, "t"):
            pass
    assert host.transactions == [("t", "rolled back")]
    assert not host.in_transaction


def test_nested_transactions_are_rejected(host):
    host.begin("outer")
    with pytest.raises(HostOperationFailed):
        host.begin("inner")
    host.rollback()


def test_opening_requires_active_type_and_existing_wall(host):
    window = host.find_family_type(
        OpeningKind.WINDOW, "M_Window-Casement-Double", "1050 x 1350mm"
    )
    with transaction(host, "openings"):
        wall = _wall(host)
        with pytest.raises(HostOperationFailed):
            host.create_opening(Point3D(5, 0), window, wall, wall.base_level)
        host.activate(window)
        ghost = WallSegment(Point3D(0, 0), Point3D(1, 0), id="wall-999")
        with pytest.raises(HostOperationFailed):
            host.create_opening(Point3D(5, 0), window, ghost, wall.base_level)
        instance = host.create_opening(Point3D(5, 0), window, wall, wall.base_level)
        host.set_parameter(instance, ParameterKey.SILL_HEIGHT, 3.0)

    assert host.windows[0].parameters == {ParameterKey.SILL_HEIGHT: 3.0}
    assert host.windows[0].data["wall_id"] == wall.id


def test_footprint_roof_needs_closed_loop(host):
    level = host.levels[1]
    roof_type = host.roof_types[0]
    square = [
        Curve(Point3D(0, 0), Point3D(1, 0)),
        Curve(Point3D(1, 0), Point3D(1, 1)),
        Curve(Point3D(1, 1), Point3D(0, 1)),
        Curve(Point3D(0, 1), Point3D(0, 0)),
    ]
    with transaction(host, "roof"):
        with pytest.raises(HostOperationFailed):
            host.create_footprint_roof(square[:3], level, roof_type)
        roof, edges = host.create_footprint_roof(square, level, roof_type)

    assert len(edges) == 4
    assert all(e.data["roof_id"] == roof.id for e in edges)
    assert host.roofs[0].data["style"] == "footprint"


def test_simulated_failure(host):
    host.fail_on.add("find_levels")
    with pytest.raises(HostOperationFailed):
        host.find_levels()
