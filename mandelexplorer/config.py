import json
import math
from numbers import Integral
from typing import Any, Dict, Optional

DEFAULTS: Dict[str, Any] = {
    "width": 800,
    "height": 600,
    "center": [-0.5, 0.0],
    "zoom": 1.0,
    "zoom_factor": 2.0,
    "base_span": 3.5,
    "base_iter": 100,
    "iter_per_zoom": 20,
    "max_iter_cap": 500,
    "progress": False,
}

def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    cfg = dict(DEFAULTS)
    if config_path:
        with open(config_path, "r", encoding="utf-8") as f:
            loaded = json.load(f)
        if not isinstance(loaded, dict):
            raise ValueError("Config JSON must be an object.")
        unknown = sorted(set(loaded) - set(DEFAULTS))
        if unknown:
            raise ValueError(f"Unknown config field(s): {', '.join(unknown)}")
        cfg.update(loaded)
    return cfg

def apply_overrides(
    cfg: Dict[str, Any],
    *,
    center_x: Optional[float] = None,
    center_y: Optional[float] = None,
    zoom: Optional[float] = None,
    width: Optional[int] = None,
    height: Optional[int] = None,
    progress: Optional[bool] = None,
) -> Dict[str, Any]:
    """Layer command line values over a loaded config. ``None`` means not given."""
    out = dict(cfg)
    center = list(out.get("center", DEFAULTS["center"]))
    if center_x is not None:
        center[0] = center_x
    if center_y is not None:
        center[1] = center_y
    out["center"] = center
    for key, value in (("zoom", zoom), ("width", width), ("height", height), ("progress", progress)):
        if value is not None:
            out[key] = value
    return out

def _positive_float(raw: Any, key: str) -> float:
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a positive finite number, got {raw!r}.")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be a positive finite number, got {raw!r}.") from None
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{key} must be a positive finite number.")
    return value

def _integer(raw: Any, key: str) -> int:
    # JSON has no integer type of its own, so 800.0 is accepted but 2.5 is not
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer, got {raw!r}.")
    if isinstance(raw, Integral):
        return int(raw)
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    raise ValueError(f"{key} must be an integer, got {raw!r}.")

def _coordinate(raw: Any, key: str) -> float:
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a finite number, got {raw!r}.")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be a finite number, got {raw!r}.") from None
    if not math.isfinite(value):
        raise ValueError(f"{key} must be a finite number, got {raw!r}.")
    return value

def normalise_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    required = ["width", "height", "center", "zoom"]
    for r in required:
        if r not in cfg:
            raise ValueError(f"Missing config field: {r}")

    width = _integer(cfg["width"], "width")
    height = _integer(cfg["height"], "height")
    if width <= 0 or height <= 0:
        raise ValueError("width/height must be positive.")

    center = cfg["center"]
    if not (isinstance(center, (list, tuple)) and len(center) == 2):
        raise ValueError("center must be [re, im].")

    base_iter = _integer(cfg.get("base_iter", DEFAULTS["base_iter"]), "base_iter")
    iter_per_zoom = _integer(cfg.get("iter_per_zoom", DEFAULTS["iter_per_zoom"]), "iter_per_zoom")
    max_iter_cap = _integer(cfg.get("max_iter_cap", DEFAULTS["max_iter_cap"]), "max_iter_cap")
    if base_iter < 1 or max_iter_cap < 1 or iter_per_zoom < 0:
        raise ValueError("base_iter/max_iter_cap must be >= 1 and iter_per_zoom >= 0.")

    progress = cfg.get("progress", False)
    if not isinstance(progress, bool):
        raise ValueError(f"progress must be true or false, got {progress!r}.")

    out = dict(cfg)
    out["width"] = width
    out["height"] = height
    out["center"] = [_coordinate(center[0], "center[0]"), _coordinate(center[1], "center[1]")]
    out["zoom"] = _positive_float(cfg["zoom"], "zoom")
    out["zoom_factor"] = _positive_float(cfg.get("zoom_factor", DEFAULTS["zoom_factor"]), "zoom_factor")
    out["base_span"] = _positive_float(cfg.get("base_span", DEFAULTS["base_span"]), "base_span")
    out["base_iter"] = base_iter
    out["iter_per_zoom"] = iter_per_zoom
    out["max_iter_cap"] = max_iter_cap
    out["progress"] = progress
    return out
