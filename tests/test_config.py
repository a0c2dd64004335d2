import json

import pytest

from mandelexplorer.config import DEFAULTS, apply_overrides, load_config, normalise_config


def test_defaults_without_path():
    cfg = normalise_config(load_config(None))
    assert cfg["width"] == 800 and cfg["height"] == 600
    assert cfg["center"] == [-0.5, 0.0]
    assert cfg["zoom"] == 1.0
    assert cfg["zoom_factor"] == 2.0
    assert cfg["base_span"] == 3.5
    assert (cfg["base_iter"], cfg["iter_per_zoom"], cfg["max_iter_cap"]) == (100, 20, 500)
    assert cfg["progress"] is False


def test_load_merges_json_over_defaults(tmp_path):
    path = tmp_path / "view.json"
    path.write_text(json.dumps({"center": [-0.75, 0.1], "zoom": 8, "max_iter_cap": 1000}))

    cfg = normalise_config(load_config(str(path)))

    assert cfg["center"] == [-0.75, 0.1]
    assert cfg["zoom"] == 8.0
    assert cfg["max_iter_cap"] == 1000
    assert cfg["width"] == DEFAULTS["width"]


def test_load_rejects_non_object(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("[1, 2, 3]")
    with pytest.raises(ValueError, match="object"):
        load_config(str(path))


def test_load_rejects_unknown_fields(tmp_path):
    path = tmp_path / "typo.json"
    path.write_text(json.dumps({"zom": 2}))
    with pytest.raises(ValueError, match="zom"):
        load_config(str(path))


def test_overrides_replace_only_given_values():
    cfg = apply_overrides(dict(DEFAULTS), center_y=0.3, zoom=4.0, width=None)
    assert cfg["center"] == [-0.5, 0.3]
    assert cfg["zoom"] == 4.0
    assert cfg["width"] == 800
    assert DEFAULTS["center"] == [-0.5, 0.0]


@pytest.mark.parametrize(
    "field, value, message",
    [
        ("width", 0, "width/height"),
        ("height", -10, "width/height"),
        ("zoom", 0, "zoom"),
        ("zoom", float("nan"), "zoom"),
        ("zoom_factor", -2, "zoom_factor"),
        ("base_span", 0, "base_span"),
        ("center", [1.0], "center"),
        ("base_iter", 0, "base_iter"),
        ("iter_per_zoom", -1, "iter_per_zoom"),
        ("width", 2.5, "width"),
        ("height", True, "height"),
        ("width", None, "width"),
        ("max_iter_cap", "500", "max_iter_cap"),
        ("zoom", None, "zoom"),
        ("zoom", "deep", "zoom"),
        ("center", [None, 0.0], "center"),
        ("progress", "false", "progress"),
        ("progress", 1, "progress"),
    ],
)
def test_normalise_rejects_bad_values(field, value, message):
    cfg = dict(DEFAULTS)
    cfg[field] = value
    with pytest.raises(ValueError, match=message):
        normalise_config(cfg)


def test_normalise_requires_core_fields():
    cfg = dict(DEFAULTS)
    del cfg["zoom"]
    with pytest.raises(ValueError, match="Missing config field: zoom"):
        normalise_config(cfg)


def test_whole_number_floats_are_accepted_as_sizes():
    cfg = dict(DEFAULTS)
    cfg.update(width=320.0, height=240.0, progress=True)
    out = normalise_config(cfg)
    assert (out["width"], out["height"]) == (320, 240)
    assert isinstance(out["width"], int)
    assert out["progress"] is True
