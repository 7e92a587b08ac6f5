"""
Side-by-side plot of the in-memory and the delegated subset.
"""

from collections.abc import Sequence
from logging import getLogger
from pathlib import Path

from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.patches import Rectangle

from stwindow.records import PointRecord
from stwindow.window import SpatioTemporalWindow

logger = getLogger("STWindow")


def _draw_panel(ax: Axes, records: Sequence[PointRecord], subset: Sequence[PointRecord], window: SpatioTemporalWindow, title: str) -> None:
    ax.scatter([r.x for r in records], [r.y for r in records], marker="+", color="grey", linewidths=0.8)
    x_min, y_min, x_max, y_max = window.bounds
    ax.add_patch(Rectangle((x_min, y_min), x_max - x_min, y_max - y_min, fill=False, edgecolor="red"))
    ax.scatter([r.x for r in subset], [r.y for r in subset], marker="+", color="red", linewidths=0.8)
    ax.set_title(title)
    ax.set_aspect("equal", adjustable="datalim")


def plot_subset_comparison(
    records: Sequence[PointRecord],
    in_memory_subset: Sequence[PointRecord],
    delegated_subset: Sequence[PointRecord],
    window: SpatioTemporalWindow,
    output_path: str | Path | None = None,
    delegated_title: str = "PostGIS subset",
) -> Figure:
    """
    Plot all records in grey with the window and each subset highlighted.

    Returns:
        The figure, also written to output_path when given
    """
    fig = Figure(figsize=(12, 6))
    left, right = fig.subplots(1, 2)
    _draw_panel(left, records, in_memory_subset, window, "In-memory subset")
    _draw_panel(right, records, delegated_subset, window, delegated_title)

    if output_path is not None:
        fig.savefig(output_path)
        logger.info(f"Wrote comparison plot to {output_path}")
    return fig
