"""Tests for the command line interface."""

import json

import pytest
from typer.testing import CliRunner

from housebuilder.cli import app

runner = CliRunner()


def test_strategies():
    result = runner.invoke(app, ["strategies"])

    assert result.exit_code == 0
    assert result.output.split() == ["extrusion", "flat"]


def test_build_default_house(tmp_path):
    report = tmp_path / "report.json"

    result = runner.invoke(app, ["build", "--out", str(report)])

    assert result.exit_code == 0, result.output
    assert "Built 4 walls" in result.output
    assert json.loads(report.read_text(encoding="utf-8"))["stage"] == "committed"


def test_build_failure_exits_with_stage(tmp_path):
    config = tmp_path / "narrow.json"
    config.write_text(json.dumps({"width": 800}), encoding="utf-8")

    result = runner.invoke(app, ["build", "--config", str(config)])

    assert result.exit_code == 1
    assert "openings_placed" in result.output


def test_build_missing_config(tmp_path):
    result = runner.invoke(app, ["build", "--config", str(tmp_path / "nope.json")])

    assert result.exit_code == 1
    assert "File not found" in result.output


def test_plan_with_flat_roof(tmp_path):
    report = tmp_path / "plan.json"

    result = runner.invoke(app, ["plan", "--roof", "flat", "--out", str(report)])

    assert result.exit_code == 0, result.output
    data = json.loads(report.read_text(encoding="utf-8"))
    assert data["stage"] is None
    assert data["roof"]["style"] == "footprint"


def test_plan_unknown_strategy():
    result = runner.invoke(app, ["plan", "--roof", "dome"])

    assert result.exit_code == 1


def test_plan_defaults_are_millimetres_in_any_unit(tmp_path):
    config = tmp_path / "feet.json"
    config.write_text(json.dumps({"unit": "ft", "width": 30, "depth": 20}), encoding="utf-8")
    report = tmp_path / "plan.json"

    result = runner.invoke(app, ["plan", "--config", str(config), "--out", str(report)])

    assert result.exit_code == 0, result.output
    data = json.loads(report.read_text(encoding="utf-8"))
    assert data["walls"][0]["width"] == pytest.approx(200 / 304.8)


def test_build_unknown_strategy_reports_idle_stage(tmp_path):
    config = tmp_path / "dome.json"
    config.write_text(json.dumps({"roof_strategy": "dome"}), encoding="utf-8")

    result = runner.invoke(app, ["build", "--config", str(config)])

    assert result.exit_code == 1
    assert "idle" in result.output
