from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

from mandelgrid.errors import ConfigurationError
from mandelgrid.geometry import PlaneRegion
from mandelgrid.numeric.escape import validate_max_iterations

DEFAULT_MAX_ITERATIONS = 200

PRESETS: Dict[str, Dict[str, Any]] = {
    "full": {"top_left": [-2.0, 2.0], "bottom_right": [2.0, -2.0]},
    "seahorses": {"top_left": [-0.9, 0.5], "bottom_right": [-0.3, -0.1]},
}

@dataclass(frozen=True)
class RenderConfig:
    region: PlaneRegion
    width: int
    height: int
    max_iterations: int = DEFAULT_MAX_ITERATIONS

    def validate(self) -> "RenderConfig":
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
        validate_max_iterations(self.max_iterations)
        self.region.validate()
        return self

def load_config(config_path: Optional[str], preset: str = "full") -> Dict[str, Any]:
    if config_path:
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                cfg = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Config {config_path} is not valid JSON: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read config {config_path}: {e}") from e
        if not isinstance(cfg, dict):
            raise ConfigurationError("Config JSON must be an object.")
        return cfg

    if preset not in PRESETS:
        raise ConfigurationError(f"Unknown preset {preset!r}; expected one of: {', '.join(sorted(PRESETS))}")
    return dict(PRESETS[preset])

def _as_int(cfg: Dict[str, Any], key: str, default: int) -> int:
    value = cfg.get(key, default)
    if isinstance(value, bool):
        raise ConfigurationError(f"{key} must be an integer, got {value!r}")
    try:
        as_int = int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise ConfigurationError(f"{key} must be an integer, got {value!r}") from e
    if as_int != value and not isinstance(value, str):
        raise ConfigurationError(f"{key} must be an integer, got {value!r}")
    return as_int

def normalise_config(cfg: Dict[str, Any]) -> RenderConfig:
    for r in ("top_left", "bottom_right"):
        if r not in cfg:
            raise ConfigurationError(f"Missing config field: {r}")

    region = PlaneRegion.from_pairs(cfg["top_left"], cfg["bottom_right"])
    out = RenderConfig(
        region=region,
        width=_as_int(cfg, "width", 80),
        height=_as_int(cfg, "height", 40),
        max_iterations=_as_int(cfg, "max_iterations", DEFAULT_MAX_ITERATIONS),
    )
    return out.validate()
