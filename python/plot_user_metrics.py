"""
Plot software usage metrics with and without coloring by user.

Writes three 800x600 images:
    uncolored_plot.png          metric_1 vs metric_2, one color
    seaborn_colored_plot.png    colored by user through seaborn's hue mapping
    colored_plot.png            colored by user with a Lab color ramp and a
                                hand-built legend
"""

import argparse
from pathlib import Path
from typing import List, Sequence

import pandas as pd

from color_ramp import DEFAULT_ANCHORS, color_ramp, point_colors
from dataset import USAGE_SCHEMA, category_levels, load_dataset, require_positive
from log_utils import info, set_verbose
from plot_utils import (
    PLOTS_DIR,
    PlotConfig,
    legend_entries,
    scatter_plot,
    seaborn_scatter_plot,
)

UNCOLORED_FILE = "uncolored_plot.png"
SEABORN_COLORED_FILE = "seaborn_colored_plot.png"
RAMP_COLORED_FILE = "colored_plot.png"

UNCOLORED_TITLE = 'Software Usage Metrics Not Colored by Factor "user"'
SEABORN_COLORED_TITLE = 'Software Usage Metrics Colored by Factor "user" (seaborn)'
RAMP_COLORED_TITLE = 'Software Usage Metrics Colored by Factor "user"'


def _config(title: str) -> PlotConfig:
    return PlotConfig(
        xlabel="Metric 1",
        ylabel="Metric 2",
        title=title,
        logx=True,
        logy=True,
    )


def plot_uncolored(df: pd.DataFrame, out_dir: Path) -> Path:
    return scatter_plot(
        df["metric_1"].tolist(),
        df["metric_2"].tolist(),
        outfile=Path(out_dir) / UNCOLORED_FILE,
        cfg=_config(UNCOLORED_TITLE),
    )


def plot_seaborn_colored(df: pd.DataFrame, out_dir: Path) -> Path:
    return seaborn_scatter_plot(
        df,
        "metric_1",
        "metric_2",
        "user",
        outfile=Path(out_dir) / SEABORN_COLORED_FILE,
        cfg=_config(SEABORN_COLORED_TITLE),
    )


def plot_ramp_colored(
    df: pd.DataFrame, out_dir: Path, anchors: Sequence = DEFAULT_ANCHORS
) -> Path:
    """
    Color each point by its user's rank on a ramp through the anchors and add
    a legend with one entry per user in the same rank order.
    """
    levels = category_levels(df, "user")
    ramp = color_ramp(len(levels), anchors)
    info(f"Built {len(ramp)}-color ramp through {', '.join(map(str, anchors))}")

    return scatter_plot(
        df["metric_1"].tolist(),
        df["metric_2"].tolist(),
        outfile=Path(out_dir) / RAMP_COLORED_FILE,
        cfg=_config(RAMP_COLORED_TITLE),
        colors=point_colors(df, "user", anchors),
        legend=legend_entries(levels, ramp, prefix="User"),
    )


def plot_all(csv_file: Path, out_dir: Path = PLOTS_DIR) -> List[Path]:
    df = load_dataset(csv_file, USAGE_SCHEMA)
    require_positive(df, ["metric_1", "metric_2"])
    info(f"{len(category_levels(df, 'user'))} distinct users")

    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    return [
        plot_uncolored(df, out_dir),
        plot_seaborn_colored(df, out_dir),
        plot_ramp_colored(df, out_dir),
    ]


def main():
    parser = argparse.ArgumentParser(
        usage="python plot_user_metrics.py [csv_file] [--out out_dir] [--verbose]",
        description=(
            "Write uncolored_plot.png, seaborn_colored_plot.png and colored_plot.png "
            "(800x600). Only the input file and output directory can be chosen; "
            "file names, titles and image size are fixed."
        ),
    )
    parser.add_argument(
        "csv_file",
        type=Path,
        nargs="?",
        default=Path("example_data.csv"),
        help="Path to the input CSV file (default: example_data.csv)",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=PLOTS_DIR,
        help="Output directory (default: plots/ under the working directory)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output")
    args = parser.parse_args()
    set_verbose(args.verbose)

    plot_all(args.csv_file, args.out)
    print(f"Plots written to {args.out}")


if __name__ == "__main__":
    main()
