"""Colour gradient and the mapping from escape intensity to colour level."""

from __future__ import annotations

import numpy as np
from matplotlib.colors import LinearSegmentedColormap, to_rgb as _to_rgb

GRADIENT = (
    "#000033",
    "#000055",
    "#0000BB",
    "#5500BB",
    "#BB00BB",
    "#FF0055",
    "#FF5500",
    "#FFBB00",
    "#FFFF00",
)


def build_palette(max_iter: int) -> np.ndarray:
    """Interpolate the gradient linearly to exactly ``max_iter`` RGB colours in [0, 1].

    The first entry is the first gradient stop and the last is the last stop.
    """
    if max_iter < 1:
        raise ValueError(f"max_iter must be >= 1, got {max_iter!r}")
    if max_iter == 1:
        return np.array([_to_rgb(GRADIENT[-1])], dtype=np.float64)
    cmap = LinearSegmentedColormap.from_list("mandelbrot", list(GRADIENT), N=max_iter)
    return np.asarray(cmap(np.arange(max_iter)), dtype=np.float64)[:, :3]


def color_levels(iterations: np.ndarray, max_iter: int) -> np.ndarray:
    # intensity k -> level k - 1, bounded points (k == max_iter) get the last colour
    return (np.clip(iterations, 1, max_iter) - 1).astype(np.int32)


def to_rgb(levels: np.ndarray, palette: np.ndarray) -> np.ndarray:
    return np.round(palette[levels] * 255).astype(np.uint8)
