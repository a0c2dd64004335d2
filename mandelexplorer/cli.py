from __future__ import annotations

import argparse
import subprocess
from typing import Any, Dict, Optional

from mandelexplorer.config import apply_overrides, load_config, normalise_config
from mandelexplorer.explorer import zoom_loop
from mandelexplorer.export import save_frame
from mandelexplorer.util.logging_setup import configure_root_logging, get_logger, parse_level
from mandelexplorer.util.manifest import build_manifest, write_manifest
from mandelexplorer.viewport import IterationPolicy, View, render_view

def _git_commit() -> Optional[str]:
    try:
        r = subprocess.run(["git", "rev-parse", "HEAD"], capture_output=True, text=True, check=True)
        return r.stdout.strip()
    except (OSError, subprocess.CalledProcessError):
        return None

def _add_view_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--center-x", type=float, default=None, help="Real part of the view centre.")
    p.add_argument("--center-y", type=float, default=None, help="Imaginary part of the view centre.")
    p.add_argument("--zoom", type=float, default=None, help="Starting magnification (1 shows a span of 3.5 vertically).")
    p.add_argument("--width", type=int, default=None, help="Samples along the real axis.")
    p.add_argument("--height", type=int, default=None, help="Samples along the imaginary axis.")
    p.add_argument("--progress", action="store_true", default=None, help="Show a per-row progress bar while rendering.")

def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="mandelexplorer", description="Click-to-zoom Mandelbrot set explorer.")
    p.add_argument("--config", type=str, default=None, help="Path to config JSON. If omitted, built-in defaults are used.")
    p.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Log level.")
    p.add_argument("--log-file", type=str, default="", help="Log file path (rotating). Empty disables file logging.")
    sub = p.add_subparsers(dest="cmd", required=True)

    e = sub.add_parser("explore", help="Open the interactive window; click to zoom 2x, Escape to quit.")
    _add_view_args(e)

    r = sub.add_parser("render", help="Render one view to a PNG file without opening a window.")
    _add_view_args(r)
    r.add_argument("--output", type=str, default="mandelbrot.png", help="Output PNG path.")
    r.add_argument("--manifest", type=str, default=None, help="Also write a JSON run manifest to this path.")

    return p

def _policy(cfg: Dict[str, Any]) -> IterationPolicy:
    return IterationPolicy(base=cfg["base_iter"], per_zoom=cfg["iter_per_zoom"], cap=cfg["max_iter_cap"])

def _view(cfg: Dict[str, Any]) -> View:
    return View(center_x=cfg["center"][0], center_y=cfg["center"][1], zoom=cfg["zoom"])

def main(argv: Optional[list] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    log_file = args.log_file if args.log_file and args.log_file.strip() else None
    configure_root_logging(level=parse_level(args.log_level), console=True, log_file=log_file)
    logger = get_logger()

    try:
        cfg = apply_overrides(
            load_config(args.config),
            center_x=args.center_x,
            center_y=args.center_y,
            zoom=args.zoom,
            width=args.width,
            height=args.height,
            progress=args.progress,
        )
        cfg = normalise_config(cfg)
    except OSError as e:
        logger.error("Cannot read config %s: %s", args.config, e)
        return 2
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    if args.cmd == "explore":
        final = zoom_loop(
            view=_view(cfg),
            width=cfg["width"],
            height=cfg["height"],
            zoom_factor=cfg["zoom_factor"],
            base_span=cfg["base_span"],
            policy=_policy(cfg),
            progress=cfg["progress"],
        )
        logger.info("Final view centre=(%.6f, %.6f) zoom=%.1fx", final.center_x, final.center_y, final.zoom)
        return 0

    if args.cmd == "render":
        frame = render_view(
            _view(cfg),
            cfg["width"],
            cfg["height"],
            base_span=cfg["base_span"],
            policy=_policy(cfg),
            progress=cfg["progress"],
        )
        save_frame(frame, args.output)
        if args.manifest:
            manifest = build_manifest(config=cfg, view=frame.describe(), git_commit=_git_commit(), output=args.output)
            write_manifest(args.manifest, manifest)
            logger.info("Run manifest written: %s", args.manifest)
        return 0

    raise RuntimeError("Unknown command.")
