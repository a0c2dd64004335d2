"""Click-to-zoom loop: render, wait for a click or cancel, render again."""

from __future__ import annotations

import enum
from typing import Optional

from mandelexplorer.plotting import InputUnavailable, MatplotlibCanvas
from mandelexplorer.util.logging_setup import get_logger
from mandelexplorer.viewport import (
    BASE_SPAN,
    ZOOM_STEP,
    IterationPolicy,
    RenderResult,
    View,
    render_view,
)


class ExplorerState(enum.Enum):
    AWAITING_CLICK = "awaiting_click"
    RENDERED = "rendered"
    TERMINATED = "terminated"


class ZoomExplorer:
    """Owns the current view and drives one canvas through the zoom states.

    The canvas needs ``draw(frame)`` and ``next_click()``; the latter returns
    plane coordinates ``(x, y)`` or ``None`` to cancel, and may raise
    ``InputUnavailable``.
    """

    def __init__(
        self,
        canvas,
        *,
        view: Optional[View] = None,
        width: int = 800,
        height: int = 600,
        zoom_factor: float = ZOOM_STEP,
        base_span: float = BASE_SPAN,
        policy: Optional[IterationPolicy] = None,
        progress: bool = False,
    ):
        if zoom_factor <= 0:
            raise ValueError(f"zoom_factor must be positive, got {zoom_factor!r}")
        self.canvas = canvas
        self.view = view or View()
        self.width = width
        self.height = height
        self.zoom_factor = zoom_factor
        self.base_span = base_span
        self.policy = policy
        self.progress = progress
        self.state: Optional[ExplorerState] = None
        self.frame: Optional[RenderResult] = None
        self.renders = 0

    def render(self) -> RenderResult:
        self.frame = render_view(
            self.view,
            self.width,
            self.height,
            base_span=self.base_span,
            policy=self.policy,
            progress=self.progress,
        )
        self.canvas.draw(self.frame)
        self.renders += 1
        self.state = ExplorerState.RENDERED
        return self.frame

    def step(self) -> ExplorerState:
        if self.state is not ExplorerState.RENDERED:
            raise RuntimeError(f"cannot wait for input in state {self.state}")
        logger = get_logger()
        self.state = ExplorerState.AWAITING_CLICK

        try:
            click = self.canvas.next_click()
        except InputUnavailable as e:
            logger.warning("Input unavailable, stopping: %s", e)
            click = None

        if click is None:
            self.state = ExplorerState.TERMINATED
            return self.state

        x, y = click
        self.view = self.view.zoomed(x, y, self.zoom_factor)
        logger.info("Zooming to (%.6f, %.6f) at %.1fx", self.view.center_x, self.view.center_y, self.view.zoom)
        self.render()
        return self.state

    def run(self) -> View:
        logger = get_logger()
        logger.info("Interactive Mandelbrot Explorer")
        logger.info("Click anywhere to zoom in %gx, press ESC or close the window to exit", self.zoom_factor)

        self.render()
        while self.state is not ExplorerState.TERMINATED:
            self.step()

        logger.info("Exiting... (%s renders, final zoom %.1fx)", self.renders, self.view.zoom)
        return self.view


def zoom_loop(canvas=None, **options) -> View:
    own_canvas = canvas is None
    if own_canvas:
        canvas = MatplotlibCanvas()
    try:
        return ZoomExplorer(canvas, **options).run()
    finally:
        if own_canvas and not canvas.closed:
            canvas.close()
