from __future__ import annotations

import os

import numpy as np
from PIL import Image

from mandelexplorer.palette import to_rgb
from mandelexplorer.util.logging_setup import get_logger
from mandelexplorer.viewport import RenderResult

def frame_to_image(frame: RenderResult) -> Image.Image:
    # grid row 0 is the bottom of the window, image row 0 is the top
    buf = np.ascontiguousarray(np.flipud(to_rgb(frame.levels, frame.palette)))
    return Image.fromarray(buf)

def save_frame(frame: RenderResult, path: str) -> str:
    logger = get_logger()
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    img = frame_to_image(frame)
    img.save(path, format="PNG", optimize=True)
    logger.info("Saved frame -> %s (%sx%s)", path, frame.width, frame.height)
    return path
