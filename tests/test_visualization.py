"""Tests for plan image generation."""

from housebuilder.engine.api import build_house, plan_building
from housebuilder.visualization.generator import generate_plan_image


def test_plan_image(tmp_path):
    output = tmp_path / "images" / "plan.png"

    assert generate_plan_image(plan_building(wall_width=0.5), output)
    assert output.read_bytes().startswith(b"\x89PNG")


def test_built_flat_house_image(host, config, tmp_path):
    result = build_house(host, config.with_overrides(roof_strategy="flat"))
    output = tmp_path / "flat.png"

    assert generate_plan_image(result, output)
    assert output.exists()


def test_unwritable_path_returns_false(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")

    assert generate_plan_image(plan_building(), blocker / "plan.png") is False
