"""Image generation for house builds.

This module renders a top view of a planned or built house to PNG:
footprint, walls, door and window positions and the roof outline.
"""

import logging
from pathlib import Path

import matplotlib

matplotlib.use("Agg")  # Use non-interactive backend to avoid GUI issues

import matplotlib.pyplot as plt

from ..core.model import BuildResult, OpeningKind

LOGGER = logging.getLogger(__name__)

OPENING_STYLES = {
    OpeningKind.DOOR: {"marker": "s", "color": "#8B4513", "label": "door"},
    OpeningKind.WINDOW: {"marker": "o", "color": "#1E90FF", "label": "window"},
}


def generate_plan_image(result: BuildResult, output_path: Path) -> bool:
    """Generate a PNG top view of a house.

    Args:
        result: Planned or built house.
        output_path: Path where to save the PNG image.

    Returns:
        True if the image was generated successfully, False otherwise.
    """
    try:
        # Ensure output directory exists
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        fig, ax = plt.subplots(figsize=(10, 7))

        # Footprint fill
        x, y = result.footprint.to_polygon().exterior.coords.xy
        ax.fill(x, y, color="0.92", zorder=0)

        # Walls, drawn with their real thickness when known
        for index, wall in enumerate(result.walls):
            linewidth = 4.0 if wall.width else 1.5
            ax.plot(
                [wall.start.x, wall.end.x],
                [wall.start.y, wall.end.y],
                color="k",
                linewidth=linewidth,
                solid_capstyle="projecting",
                zorder=2,
            )
            middle = wall.midpoint
            ax.annotate(
                f"W{index}",
                (middle.x, middle.y),
                textcoords="offset points",
                xytext=(6, 6),
                fontsize=8,
            )

        # Roof curves (plan projection)
        if result.roof_profile is not None:
            for curve in result.roof_profile.curves:
                ax.plot(
                    [curve.start.x, curve.end.x],
                    [curve.start.y, curve.end.y],
                    color="#B22222",
                    linestyle="--",
                    linewidth=1.2,
                    zorder=3,
                )

        # Openings
        seen = set()
        for opening in result.openings:
            style = OPENING_STYLES[opening.kind]
            label = style["label"] if opening.kind not in seen else None
            seen.add(opening.kind)
            ax.scatter(
                [opening.point.x],
                [opening.point.y],
                marker=style["marker"],
                color=style["color"],
                s=60,
                zorder=4,
                label=label,
            )

        ax.set_aspect("equal")
        ax.set_xlabel("X (ft)")
        ax.set_ylabel("Y (ft)")
        ax.set_title("House plan")
        if seen:
            ax.legend(loc="upper right")

        fig.tight_layout()
        fig.savefig(output_path, dpi=150)
        plt.close(fig)
        LOGGER.info("Plan image written to %s", output_path)
        return True

    except Exception as e:
        LOGGER.error("Error in image generation: %s", e)
        return False
