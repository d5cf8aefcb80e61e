"""
Color ramps for coloring points by category.

A ramp of N colors is built by walking linearly through a sequence of anchor
colors in CIE L*a*b* space rather than RGB, so the stops between two distant
hues (red and blue, say) stay saturated instead of turning muddy.

Usage:
    from color_ramp import color_ramp, category_colors

    color_ramp(5)                        # red -> orange -> blue, 5 hex colors
    category_colors([1, 2, 3])           # {1: "#ff0000", 2: "#ffa500", 3: "#0000ff"}
"""

from typing import Dict, List, Sequence

import numpy as np
import pandas as pd
from matplotlib.colors import to_hex, to_rgb

from dataset import category_ranks

DEFAULT_ANCHORS = ("red", "orange", "blue")

# sRGB (linear) -> XYZ, D65 white
_RGB_TO_XYZ = np.array([
    [0.4124564, 0.3575761, 0.1804375],
    [0.2126729, 0.7151522, 0.0721750],
    [0.0193339, 0.1191920, 0.9503041],
])
_XYZ_TO_RGB = np.linalg.inv(_RGB_TO_XYZ)
_WHITE_D65 = np.array([0.95047, 1.0, 1.08883])
_DELTA = 6 / 29


def _lab_f(t):
    return np.where(t > _DELTA ** 3, np.cbrt(t), t / (3 * _DELTA ** 2) + 4 / 29)


def _lab_f_inv(t):
    return np.where(t > _DELTA, t ** 3, 3 * _DELTA ** 2 * (t - 4 / 29))


def srgb_to_lab(rgb) -> np.ndarray:
    """Convert sRGB values in [0, 1] (shape (..., 3)) to L*a*b*."""
    rgb = np.asarray(rgb, dtype=float)
    linear = np.where(rgb <= 0.04045, rgb / 12.92, ((rgb + 0.055) / 1.055) ** 2.4)
    xyz = linear @ _RGB_TO_XYZ.T / _WHITE_D65
    fx, fy, fz = (_lab_f(xyz[..., i]) for i in range(3))
    return np.stack([116 * fy - 16, 500 * (fx - fy), 200 * (fy - fz)], axis=-1)


def lab_to_srgb(lab) -> np.ndarray:
    """Convert L*a*b* (shape (..., 3)) to sRGB, clipped to [0, 1]."""
    lab = np.asarray(lab, dtype=float)
    fy = (lab[..., 0] + 16) / 116
    fx = fy + lab[..., 1] / 500
    fz = fy - lab[..., 2] / 200
    xyz = np.stack([_lab_f_inv(fx), _lab_f_inv(fy), _lab_f_inv(fz)], axis=-1)
    linear = np.clip((xyz * _WHITE_D65) @ _XYZ_TO_RGB.T, 0.0, 1.0)
    rgb = np.where(
        linear <= 0.0031308, 12.92 * linear, 1.055 * linear ** (1 / 2.4) - 0.055
    )
    return np.clip(rgb, 0.0, 1.0)


def _ramp_positions(n: int, num_anchors: int) -> np.ndarray:
    if n < 1:
        raise ValueError(f"Ramp needs at least one color, got n={n}")
    if num_anchors < 2:
        raise ValueError(f"Ramp needs at least two anchor colors, got {num_anchors}")
    if n == 1:
        return np.zeros(1)
    return np.array([j * (num_anchors - 1) / (n - 1) for j in range(n)])


def ramp_lab(n: int, anchors: Sequence = DEFAULT_ANCHORS) -> np.ndarray:
    """L*a*b* coordinates of an n-stop ramp through the anchors, shape (n, 3)."""
    positions = _ramp_positions(n, len(anchors))
    anchor_lab = srgb_to_lab([to_rgb(c) for c in anchors])
    return np.stack(
        [np.interp(positions, np.arange(len(anchors)), anchor_lab[:, i]) for i in range(3)],
        axis=-1,
    )


def color_ramp(n: int, anchors: Sequence = DEFAULT_ANCHORS) -> List[str]:
    """
    Return n hex colors spread evenly along the anchors.

    Stops that land exactly on an anchor reproduce that anchor, so the first
    and last colors are always the first and last anchors and n == len(anchors)
    gives the anchors back.

    Args:
        n: number of colors, >= 1.
        anchors: two or more matplotlib color specs.
    """
    positions = _ramp_positions(n, len(anchors))
    rgb = lab_to_srgb(ramp_lab(n, anchors))

    colors = []
    for pos, stop in zip(positions, rgb):
        nearest = int(round(pos))
        if np.isclose(pos, nearest):
            colors.append(to_hex(to_rgb(anchors[nearest])))
        else:
            colors.append(to_hex(stop))
    return colors


def category_colors(levels: Sequence, anchors: Sequence = DEFAULT_ANCHORS) -> Dict:
    """Map each category level, in rank order, to its ramp color."""
    return dict(zip(levels, color_ramp(len(levels), anchors)))


def point_colors(
    df: pd.DataFrame, column: str, anchors: Sequence = DEFAULT_ANCHORS
) -> List[str]:
    """Per-row colors, each row taking the ramp color of its category rank."""
    ramp = color_ramp(len(df[column].cat.categories), anchors)
    return [ramp[rank] for rank in category_ranks(df, column)]
