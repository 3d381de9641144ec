"""Tests for length unit conversion."""

import pytest

from housebuilder.core.units import LengthUnit, from_internal, to_internal


def test_millimeters_to_feet():
    assert to_internal(304.8, LengthUnit.MILLIMETERS) == pytest.approx(1.0)
    assert to_internal(10000, LengthUnit.MILLIMETERS) == pytest.approx(32.808399, rel=1e-6)


@pytest.mark.parametrize(
    "value, unit, expected",
    [
        (1.0, LengthUnit.FEET, 1.0),
        (12.0, LengthUnit.INCHES, 1.0),
        (30.48, LengthUnit.CENTIMETERS, 1.0),
        (0.3048, LengthUnit.METERS, 1.0),
    ],
)
def test_other_units(value, unit, expected):
    assert to_internal(value, unit) == pytest.approx(expected)


def test_from_internal_inverts_to_internal():
    internal = to_internal(900.0, LengthUnit.MILLIMETERS)
    assert from_internal(internal, LengthUnit.MILLIMETERS) == pytest.approx(900.0)


def test_parse_short_and_long_names():
    assert LengthUnit.parse("mm") is LengthUnit.MILLIMETERS
    assert LengthUnit.parse("Feet") is LengthUnit.FEET
    assert LengthUnit.parse(LengthUnit.METERS) is LengthUnit.METERS
    with pytest.raises(ValueError):
        LengthUnit.parse("furlong")
