import json

import pytest

from mandelgrid.config import DEFAULT_MAX_ITERATIONS, PRESETS, RenderConfig, load_config, normalise_config
from mandelgrid.errors import ConfigurationError
from mandelgrid.numeric.complex_number import ComplexNumber


def test_default_preset_is_full_plane():
    config = normalise_config(load_config(None))
    assert config.region.top_left == ComplexNumber(-2.0, 2.0)
    assert config.region.bottom_right == ComplexNumber(2.0, -2.0)
    assert config.max_iterations == DEFAULT_MAX_ITERATIONS == 200


def test_seahorse_preset():
    config = normalise_config(load_config(None, preset="seahorses"))
    assert config.region.top_left == ComplexNumber(-0.9, 0.5)
    assert config.region.bottom_right == ComplexNumber(-0.3, -0.1)


def test_load_does_not_share_preset_dict():
    cfg = load_config(None)
    cfg["width"] = 3
    assert "width" not in PRESETS["full"]


def test_unknown_preset():
    with pytest.raises(ConfigurationError):
        load_config(None, preset="nowhere")


def test_load_json(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({
        "top_left": [-1, 1], "bottom_right": [1, -1], "width": "16", "height": 8.0, "max_iterations": 50,
    }))
    config = normalise_config(load_config(str(path)))
    assert (config.width, config.height, config.max_iterations) == (16, 8, 50)


def test_json_must_be_object(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text("[1, 2]")
    with pytest.raises(ConfigurationError):
        load_config(str(path))


def test_invalid_json(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text("{nope")
    with pytest.raises(ConfigurationError):
        load_config(str(path))


def test_missing_corner():
    with pytest.raises(ConfigurationError, match="bottom_right"):
        normalise_config({"top_left": [0, 0]})


@pytest.mark.parametrize(
    "override",
    [
        {"width": 0},
        {"height": -1},
        {"max_iterations": 0},
        {"width": 2.5},
        {"width": "wide"},
        {"max_iterations": True},
    ],
)
def test_bad_values_rejected(override):
    cfg = dict(PRESETS["full"], **override)
    with pytest.raises(ConfigurationError):
        normalise_config(cfg)


def test_render_config_validate(full_region):
    assert RenderConfig(region=full_region, width=1, height=1, max_iterations=1).validate()
    with pytest.raises(ConfigurationError):
        RenderConfig(region=full_region, width=1, height=0).validate()


@pytest.mark.parametrize(
    "text",
    [
        '{"top_left": [NaN, 2], "bottom_right": [2, -2]}',
        '{"top_left": [-2, 2], "bottom_right": [Infinity, -2]}',
        '{"top_left": [-1e308, 2], "bottom_right": [1e308, -2]}',
    ],
)
def test_non_finite_regions_rejected(tmp_path, text):
    path = tmp_path / "cfg.json"
    path.write_text(text)
    with pytest.raises(ConfigurationError, match="finite"):
        normalise_config(load_config(str(path)))


@pytest.mark.parametrize("field", ["width", "height", "max_iterations"])
def test_infinite_integers_rejected(tmp_path, field):
    path = tmp_path / "cfg.json"
    path.write_text('{"top_left": [-2, 2], "bottom_right": [2, -2], "%s": Infinity}' % field)
    with pytest.raises(ConfigurationError, match=field):
        normalise_config(load_config(str(path)))


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigurationError, match="Cannot read config"):
        load_config(str(tmp_path / "absent.json"))
