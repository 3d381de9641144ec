"""Command Line Interface for House Builder.

This module provides a simple CLI to plan a house, build it on an in-memory
host and inspect the available roof strategies. Every command exits with 0 on
success and 1 on failure.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .core.config import (
    DEFAULT_ROOF_THICKNESS,
    DEFAULT_WALL_WIDTH,
    DEFAULTS_UNIT,
    BuildConfig,
)
from .core.errors import BuildError, BuildFailed
from .core.model import BuildResult, ExtrusionRoofProfile, FootprintRoofProfile
from .core.units import from_internal, to_internal
from .engine.api import build_house, plan_building
from .geom.roof import list_strategies
from .host.memory import default_host
from .io.parser import load_config, load_host, save_report

app = typer.Typer(
    name="house-builder",
    help="A CLI tool to plan and build a simple rectangular house",
    no_args_is_help=True,
)
console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_config(config: Optional[Path], strategy: Optional[str]) -> BuildConfig:
    build_config = load_config(str(config)) if config else BuildConfig()
    if config:
        console.print(f"[green]✓[/green] Loaded config from {config}")
    if strategy:
        build_config = build_config.with_overrides(roof_strategy=strategy)
    return build_config


def _length_option(value: Optional[float], default: float, config: BuildConfig) -> float:
    """Internal length of a CLI option, or of its millimetre default when unset."""
    if value is None:
        return to_internal(default, DEFAULTS_UNIT)
    return to_internal(value, config.unit)


def _print_result(result: BuildResult, config: BuildConfig) -> None:
    unit = config.unit

    def fmt(value: float) -> str:
        return f"{from_internal(value, unit):.1f}"

    walls = Table(title=f"Walls ({unit.value})")
    walls.add_column("#", justify="right")
    walls.add_column("Start", style="cyan")
    walls.add_column("End", style="cyan")
    walls.add_column("Length", justify="right")
    walls.add_column("Id")
    for i, wall in enumerate(result.walls):
        walls.add_row(
            str(i),
            f"({fmt(wall.start.x)}, {fmt(wall.start.y)})",
            f"({fmt(wall.end.x)}, {fmt(wall.end.y)})",
            fmt(wall.length),
            wall.id or "-",
        )
    console.print(walls)

    openings = Table(title=f"Openings ({unit.value})")
    openings.add_column("Wall", justify="right")
    openings.add_column("Kind")
    openings.add_column("Type", style="cyan")
    openings.add_column("Point")
    for opening in result.openings:
        point = opening.point
        openings.add_row(
            str(opening.wall_index),
            opening.kind.value,
            f"{opening.opening_type.family_name} / {opening.opening_type.type_name}",
            f"({fmt(point.x)}, {fmt(point.y)}, {fmt(point.z)})",
        )
    console.print(openings)

    profile = result.roof_profile
    roof = Table(title=f"Roof ({unit.value})")
    roof.add_column("Curve", justify="right")
    roof.add_column("Start", style="cyan")
    roof.add_column("End", style="cyan")
    if profile is not None:
        for i, curve in enumerate(profile.curves):
            roof.add_row(
                str(i),
                f"({fmt(curve.start.x)}, {fmt(curve.start.y)}, {fmt(curve.start.z)})",
                f"({fmt(curve.end.x)}, {fmt(curve.end.y)}, {fmt(curve.end.z)})",
            )
    console.print(roof)
    if isinstance(profile, FootprintRoofProfile):
        console.print(f"Footprint roof, slope {profile.slope_angle:.3f} rad on every edge")
    elif isinstance(profile, ExtrusionRoofProfile):
        console.print(
            f"Extrusion roof from {fmt(profile.start_param)} to {fmt(profile.end_param)}"
        )


def _write_outputs(result: BuildResult, out: Optional[Path], image: Optional[Path]) -> None:
    if out:
        save_report(result, str(out))
        console.print(f"[green]✓[/green] Report saved to {out}")
    if image:
        from .visualization.generator import generate_plan_image

        if generate_plan_image(result, image):
            console.print(f"[green]✓[/green] Plan image saved to {image}")
        else:
            console.print(f"[yellow]![/yellow] Could not generate image {image}")


@app.command()
def plan(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config JSON file"),
    strategy: Optional[str] = typer.Option(None, "--roof", help="Roof strategy override"),
    wall_width: Optional[float] = typer.Option(
        None, "--wall-width", help="Wall width, in config units (default 200 mm)"
    ),
    roof_thickness: Optional[float] = typer.Option(
        None, "--roof-thickness", help="Roof thickness, in config units (default 300 mm)"
    ),
    out: Optional[Path] = typer.Option(None, "--out", help="Path to output report JSON file"),
    image: Optional[Path] = typer.Option(None, "--image", help="Path to output PNG plan"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
):
    """Compute the geometry of a house without any host."""
    _configure_logging(verbose)
    try:
        build_config = _load_config(config, strategy)
        result = plan_building(
            build_config,
            wall_width=_length_option(wall_width, DEFAULT_WALL_WIDTH, build_config),
            roof_thickness=_length_option(roof_thickness, DEFAULT_ROOF_THICKNESS, build_config),
        )
        _print_result(result, build_config)
        _write_outputs(result, out, image)
    except FileNotFoundError as e:
        console.print(f"[red]Error: File not found - {e}[/red]")
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: Invalid JSON - {e}[/red]")
        raise typer.Exit(1)
    except (BuildError, KeyError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def build(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config JSON file"),
    host: Optional[Path] = typer.Option(None, "--host", help="Path to host fixture JSON file"),
    strategy: Optional[str] = typer.Option(None, "--roof", help="Roof strategy override"),
    out: Optional[Path] = typer.Option(None, "--out", help="Path to output report JSON file"),
    image: Optional[Path] = typer.Option(None, "--image", help="Path to output PNG plan"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
):
    """Build a house on an in-memory host in one transaction."""
    _configure_logging(verbose)
    try:
        build_config = _load_config(config, strategy)
        if host:
            host_obj = load_host(str(host))
            console.print(f"[green]✓[/green] Loaded host from {host}")
        else:
            host_obj = default_host()

        result = build_house(host_obj, build_config)
        console.print(
            f"[green]✓[/green] Built {len(result.walls)} walls, {len(result.doors)} door(s), "
            f"{len(result.windows)} window(s) and a {build_config.roof_strategy} roof"
        )
        if verbose:
            _print_result(result, build_config)
        _write_outputs(result, out, image)
    except BuildFailed as e:
        console.print(f"[bold red]✗ Build failed at stage '{e.stage.value}':[/bold red] {e.cause}")
        raise typer.Exit(1)
    except FileNotFoundError as e:
        console.print(f"[red]Error: File not found - {e}[/red]")
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: Invalid JSON - {e}[/red]")
        raise typer.Exit(1)
    except (BuildError, KeyError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def strategies():
    """List the registered roof strategies."""
    for name in list_strategies():
        console.print(name)


if __name__ == "__main__":
    app()
