"""View state, sampling window and grid evaluation for a single render."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

import numpy as np
from tqdm import tqdm

from mandelexplorer.escape import escape_time
from mandelexplorer.palette import build_palette, color_levels
from mandelexplorer.util.logging_setup import get_logger

BASE_SPAN = 3.5
ZOOM_STEP = 2.0


@dataclass(frozen=True)
class View:
    """Centre of the view in the complex plane plus a magnification."""

    center_x: float = -0.5
    center_y: float = 0.0
    zoom: float = 1.0

    def zoomed(self, x: float, y: float, factor: float = ZOOM_STEP) -> "View":
        return replace(self, center_x=x, center_y=y, zoom=self.zoom * factor)


@dataclass(frozen=True)
class Window:
    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @property
    def x_range(self) -> Tuple[float, float]:
        return (self.x_min, self.x_max)

    @property
    def y_range(self) -> Tuple[float, float]:
        return (self.y_min, self.y_max)

    @property
    def extent(self) -> Tuple[float, float, float, float]:
        return (self.x_min, self.x_max, self.y_min, self.y_max)


@dataclass(frozen=True)
class IterationPolicy:
    """Iteration budget grows linearly with zoom up to a hard cap."""

    base: int = 100
    per_zoom: int = 20
    cap: int = 500

    def budget(self, zoom: float) -> int:
        return int(min(self.base + math.floor(zoom * self.per_zoom), self.cap))


DEFAULT_POLICY = IterationPolicy()


@dataclass(frozen=True)
class RenderResult:
    view: View
    window: Window
    max_iter: int
    iterations: np.ndarray
    levels: np.ndarray
    palette: np.ndarray

    @property
    def width(self) -> int:
        return int(self.iterations.shape[1])

    @property
    def height(self) -> int:
        return int(self.iterations.shape[0])

    def describe(self) -> Dict[str, Any]:
        return {
            "center_x": self.view.center_x,
            "center_y": self.view.center_y,
            "zoom": self.view.zoom,
            "x_range": list(self.window.x_range),
            "y_range": list(self.window.y_range),
            "max_iter": self.max_iter,
        }


def _check_size(width: int, height: int) -> None:
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
            raise ValueError(f"{name} must be a positive integer, got {value!r}")


def _check_view(view: View, base_span: float) -> None:
    if not math.isfinite(view.zoom) or view.zoom <= 0:
        raise ValueError(f"zoom must be a positive finite number, got {view.zoom!r}")
    if not (math.isfinite(view.center_x) and math.isfinite(view.center_y)):
        raise ValueError(f"centre must be finite, got ({view.center_x!r}, {view.center_y!r})")
    if not math.isfinite(base_span) or base_span <= 0:
        raise ValueError(f"base_span must be a positive finite number, got {base_span!r}")


def resolve_window(view: View, width: int, height: int, base_span: float = BASE_SPAN) -> Window:
    _check_size(width, height)
    _check_view(view, base_span)

    half_height = base_span / view.zoom / 2
    half_width = half_height * (width / height)
    return Window(
        x_min=view.center_x - half_width,
        x_max=view.center_x + half_width,
        y_min=view.center_y - half_height,
        y_max=view.center_y + half_height,
    )


def iteration_budget(zoom: float, policy: IterationPolicy = DEFAULT_POLICY) -> int:
    return policy.budget(zoom)


def sample_axes(window: Window, width: int, height: int) -> Tuple[np.ndarray, np.ndarray]:
    xs = np.linspace(window.x_min, window.x_max, width, dtype=np.float64)
    ys = np.linspace(window.y_min, window.y_max, height, dtype=np.float64)
    return xs, ys


def evaluate_grid(xs: np.ndarray, ys: np.ndarray, max_iter: int, progress: bool = False) -> np.ndarray:
    """Escape intensity for every (x, y) sample; row i holds ys[i]."""
    grid = np.empty((len(ys), len(xs)), dtype=np.int32)
    for i, y in enumerate(tqdm(ys, desc="rows", unit="row", disable=not progress, leave=False)):
        for j, x in enumerate(xs):
            grid[i, j] = escape_time(complex(x, y), max_iter).intensity
    return grid


def render_view(
    view: View,
    width: int = 800,
    height: int = 600,
    *,
    base_span: float = BASE_SPAN,
    policy: Optional[IterationPolicy] = None,
    progress: bool = False,
) -> RenderResult:
    logger = get_logger()
    policy = policy or DEFAULT_POLICY

    window = resolve_window(view, width, height, base_span)
    max_iter = iteration_budget(view.zoom, policy)
    xs, ys = sample_axes(window, width, height)

    logger.info("Render start centre=(%.6f, %.6f) zoom=%.1f size=%sx%s iter=%s",
                view.center_x, view.center_y, view.zoom, width, height, max_iter)
    logger.debug("Window re=[%r, %r] im=[%r, %r]", window.x_min, window.x_max, window.y_min, window.y_max)
    start = time.perf_counter()

    iterations = evaluate_grid(xs, ys, max_iter, progress=progress)
    palette = build_palette(max_iter)
    levels = color_levels(iterations, max_iter)

    logger.info("Render done in %.2fs", time.perf_counter() - start)
    return RenderResult(
        view=view,
        window=window,
        max_iter=max_iter,
        iterations=iterations,
        levels=levels,
        palette=palette,
    )
