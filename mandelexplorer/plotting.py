"""matplotlib window that draws rendered frames and captures zoom clicks."""

from __future__ import annotations

from typing import Optional, Tuple

import matplotlib.pyplot as plt
from matplotlib.backend_bases import MouseButton
from matplotlib.colors import ListedColormap

from mandelexplorer.util.logging_setup import get_logger
from mandelexplorer.viewport import RenderResult


class InputUnavailable(RuntimeError):
    """The window that delivers clicks no longer exists."""


def title_for(frame: RenderResult) -> str:
    return f"Mandelbrot Set (Zoom: {frame.view.zoom:.1f}x)"


def axis_labels_for(frame: RenderResult) -> Tuple[str, str]:
    return (
        f"Real (centre: {frame.view.center_x:.6f})",
        f"Imaginary (centre: {frame.view.center_y:.6f})",
    )


class MatplotlibCanvas:
    """Single figure that acts as both the rendering and the input collaborator.

    ``draw`` replaces the raster shown in the axes. ``next_click`` blocks in the
    backend event loop until the user left-clicks inside the axes (returns the
    plane coordinates) or presses Escape / closes the window (returns ``None``).
    """

    def __init__(self, figsize: Tuple[float, float] = (10.0, 7.5)):
        self.figure, self.axes = plt.subplots(figsize=figsize)
        self._click: Optional[Tuple[float, float]] = None
        self._closed = False
        self._cids = [
            self.figure.canvas.mpl_connect("button_press_event", self._on_button_press),
            self.figure.canvas.mpl_connect("key_press_event", self._on_key_press),
            self.figure.canvas.mpl_connect("close_event", self._on_close),
        ]

    @property
    def closed(self) -> bool:
        return self._closed

    def draw(self, frame: RenderResult) -> None:
        ax = self.axes
        ax.clear()
        ax.imshow(
            frame.levels,
            cmap=ListedColormap(frame.palette, name="mandelbrot"),
            vmin=0,
            vmax=len(frame.palette) - 1,
            extent=frame.window.extent,
            origin="lower",
            interpolation="nearest",
            aspect="auto",
        )
        xlabel, ylabel = axis_labels_for(frame)
        ax.set_title(title_for(frame))
        ax.set_xlabel(xlabel)
        ax.set_ylabel(ylabel)
        self.figure.tight_layout()
        self.figure.canvas.draw_idle()

    def next_click(self) -> Optional[Tuple[float, float]]:
        if self._closed or not plt.fignum_exists(self.figure.number):
            raise InputUnavailable("figure window has been closed")

        plt.show(block=False)
        # clicks queued while the previous render blocked the GUI are discarded
        self.figure.canvas.flush_events()
        if self._closed:
            return None

        self._click = None
        self.figure.canvas.start_event_loop(timeout=0)
        return self._click

    def close(self) -> None:
        for cid in self._cids:
            self.figure.canvas.mpl_disconnect(cid)
        self._cids = []
        plt.close(self.figure)
        self._closed = True

    def _on_button_press(self, event) -> None:
        if event.inaxes is not self.axes or event.button != MouseButton.LEFT:
            return
        if event.xdata is None or event.ydata is None:
            return
        self._click = (float(event.xdata), float(event.ydata))
        get_logger().debug("Click at (%r, %r)", self._click[0], self._click[1])
        self.figure.canvas.stop_event_loop()

    def _on_key_press(self, event) -> None:
        if event.key == "escape":
            self._click = None
            self.figure.canvas.stop_event_loop()

    def _on_close(self, event) -> None:
        self._closed = True
        self._click = None
        self.figure.canvas.stop_event_loop()
