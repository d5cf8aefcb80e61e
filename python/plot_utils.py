"""
Shared plotting utilities for fixed-size scatter plot images.
Provides styling, the output device, category legends and the scatter helpers.

Usage:
    from plot_utils import PlotConfig, scatter_plot

    cfg = PlotConfig(
    xlabel="Metric 1",
    ylabel="Metric 2",
    title="Example Plot",
    logx=True,
    logy=True,
    )

    scatter_plot([1, 10, 100], [2, 20, 200], outfile="example", cfg=cfg)
"""

from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns
from matplotlib.lines import Line2D

from log_utils import info

# Relative to the working directory the scripts are run from
PLOTS_DIR = Path("plots")


def init_style():
    """Initialize consistent style for all plots.
    - Inside ticks on all sides
    - Small solid markers
    - Light dashed grid
    """

    plt.rcParams.update({
        # Font / text
        "font.size": 12,
        "axes.titlesize": 14,
        "axes.labelsize": 12,
        "legend.fontsize": 10,

        # Markers
        "lines.markersize": 4,

        # Ticks
        "xtick.direction": "in",
        "ytick.direction": "in",
        "xtick.top": True,
        "ytick.right": True,

        # Grid
        "grid.alpha": 0.25,
    })


@dataclass
class PlotConfig:
    xlabel: str
    ylabel: str
    title: Optional[str] = None
    logx: bool = False
    logy: bool = False
    width_px: int = 800
    height_px: int = 600
    dpi: int = 100
    marker: str = "."
    markersize: float = 60
    color: str = "black"
    grid: bool = True


@dataclass
class LegendEntry:
    label: str
    color: str


def _prepare_outfile(outfile) -> Path:
    outfile = Path(outfile)
    if not outfile.is_absolute() and outfile.parent == Path("."):
        outfile = PLOTS_DIR / outfile
    outfile.parent.mkdir(parents=True, exist_ok=True)
    return outfile.with_suffix(".png")


@contextmanager
def raster_device(outfile, width_px: int = 800, height_px: int = 600, dpi: int = 100):
    """Open a figure that is written to outfile as a width_px x height_px PNG.

    Yields (fig, ax). The image is saved when the block exits normally and the
    figure is closed either way. If saving fails the partial file is removed.
    """
    outfile = Path(outfile)
    fig, ax = plt.subplots(figsize=(width_px / dpi, height_px / dpi), dpi=dpi)
    saving = False
    try:
        yield fig, ax
        saving = True
        fig.savefig(outfile, dpi=dpi)
    except Exception:
        if saving:
            outfile.unlink(missing_ok=True)
        raise
    finally:
        plt.close(fig)


def legend_entries(levels: Sequence, colors: Sequence[str], prefix: str = "User") -> List[LegendEntry]:
    if len(levels) != len(colors):
        raise ValueError(
            f"Legend needs one color per category: {len(levels)} levels, {len(colors)} colors"
        )
    return [LegendEntry(f"{prefix} {level}", color) for level, color in zip(levels, colors)]


def add_category_legend(ax, entries: Sequence[LegendEntry], loc: str = "upper left"):
    """Draw one swatch per entry, in the order given."""
    handles = [
        Line2D(
            [], [],
            linestyle="none",
            marker="o",
            markersize=5,
            color=entry.color,
            label=entry.label,
        )
        for entry in entries
    ]
    return ax.legend(handles=handles, loc=loc, fontsize="small")


def _apply_axes(ax, cfg: PlotConfig):
    ax.set_xlabel(cfg.xlabel)
    ax.set_ylabel(cfg.ylabel)

    if cfg.title:
        ax.set_title(cfg.title)
    if cfg.logx:
        ax.set_xscale("log")
    if cfg.logy:
        ax.set_yscale("log")

    if cfg.grid:
        ax.grid(True, alpha=0.4, linestyle="--")
        ax.set_axisbelow(True)


def scatter_plot(
    x,
    y,
    *,
    outfile,
    cfg: PlotConfig,
    colors: Optional[Sequence[str]] = None,
    legend: Optional[Sequence[LegendEntry]] = None,
    legend_loc: str = "upper left",
) -> Path:
    """Create a standardized scatter plot.

    Args:
        x: x values
        y: y values, same length as x
        outfile: path to output .png
        cfg: PlotConfig instance
        colors: optional per-point colors; cfg.color is used otherwise
        legend: optional legend entries, drawn in order
    """
    if len(x) != len(y):
        raise ValueError(f"x and y differ in length: {len(x)} != {len(y)}")
    if colors is not None and len(colors) != len(x):
        raise ValueError(f"Expected {len(x)} point colors, got {len(colors)}")

    init_style()
    outfile = _prepare_outfile(outfile)
    with raster_device(outfile, cfg.width_px, cfg.height_px, cfg.dpi) as (fig, ax):
        ax.scatter(
            x,
            y,
            c=list(colors) if colors is not None else cfg.color,
            marker=cfg.marker,
            s=cfg.markersize,
        )
        _apply_axes(ax, cfg)
        if legend:
            add_category_legend(ax, legend, loc=legend_loc)
        fig.tight_layout()

    print(f"Saved plot: {outfile}")
    return outfile


def seaborn_scatter_plot(df: pd.DataFrame, x: str, y: str, hue: str, *, outfile, cfg: PlotConfig) -> Path:
    """Scatter plot colored by a column through seaborn's hue mapping."""
    init_style()
    outfile = _prepare_outfile(outfile)
    with raster_device(outfile, cfg.width_px, cfg.height_px, cfg.dpi) as (fig, ax):
        sns.scatterplot(data=df, x=x, y=y, hue=hue, ax=ax)
        _apply_axes(ax, cfg)
        fig.tight_layout()

    info(f"seaborn colored {df[hue].nunique()} categories of '{hue}'")
    print(f"Saved plot: {outfile}")
    return outfile
