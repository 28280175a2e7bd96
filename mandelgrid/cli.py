from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from tqdm import tqdm

from mandelgrid.color import COLOR_POLICIES, get_color_policy
from mandelgrid.config import PRESETS, load_config, normalise_config
from mandelgrid.diagnostics import PROBES, PROBE_MAX_ITERATIONS, iter_probe_boundary
from mandelgrid.errors import ConfigurationError
from mandelgrid.pipeline import FractalRenderer
from mandelgrid.surfaces import ImageSurface
from mandelgrid.util.logging_setup import configure_root_logging, get_logger

EXIT_CONFIG_ERROR = 2

def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="mandelgrid", description="Escape-time renderer for the Mandelbrot map.")
    p.add_argument("--log-level", type=str, default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Log level.")
    p.add_argument("--log-file", type=str, default="", help="Log file path (rotating). Empty disables file logging.")
    sub = p.add_subparsers(dest="cmd", required=True)

    r = sub.add_parser("render", help="Render a plane region to the terminal as ANSI half blocks.")
    r.add_argument("--config", type=str, default=None, help="Path to config JSON. If omitted, uses --preset.")
    r.add_argument("--preset", type=str, default="full", choices=sorted(PRESETS), help="Built-in plane region.")
    r.add_argument("--width", type=int, default=None, help="Grid width in pixels.")
    r.add_argument("--height", type=int, default=None, help="Grid height in pixels (two per text line).")
    r.add_argument("--max-iterations", type=int, default=None, help="Iteration cap per pixel.")
    r.add_argument("--color", type=str, default="hsl", choices=sorted(COLOR_POLICIES), help="Color policy.")
    r.add_argument("--workers", type=int, default=1, help="Worker processes; 1 renders in-process.")

    pr = sub.add_parser("probe", help="Sample escape times approaching a boundary point.")
    pr.add_argument("target", choices=sorted(PROBES), help="Boundary point to approach.")
    pr.add_argument("--steps", type=int, default=None, help="Number of shrinking step sizes (10^0 .. 10^-(steps-1)).")
    pr.add_argument("--max-iterations", type=int, default=PROBE_MAX_ITERATIONS, help="Iteration cap per sample.")

    return p

def _render(args: argparse.Namespace) -> int:
    cfg = load_config(args.config, preset=args.preset)
    for key in ("width", "height", "max_iterations"):
        value = getattr(args, key)
        if value is not None:
            cfg[key] = value
    config = normalise_config(cfg)
    policy = get_color_policy(args.color)

    surface = ImageSurface(config.width, config.height)
    FractalRenderer(config, policy).render(surface, workers=args.workers)
    print(surface.to_ansi())
    return 0

def _probe(args: argparse.Namespace) -> int:
    probe = PROBES[args.target]
    steps = args.steps if args.steps is not None else probe.default_steps
    samples = iter_probe_boundary(probe, steps, args.max_iterations)
    for sample in tqdm(samples, total=steps, desc=args.target, file=sys.stderr, disable=None):
        if sample.escape_time is None:
            print(f"{sample.epsilon:.0e}\tbounded\t-")
        else:
            print(f"{sample.epsilon:.0e}\t{sample.escape_time}\t{sample.scaled:.6f}")
    return 0

def main(argv: Optional[list] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    log_level = getattr(logging, args.log_level.upper(), logging.WARNING)
    log_file = args.log_file if args.log_file and args.log_file.strip() else None
    configure_root_logging(level=log_level, console=True, log_file=log_file)
    logger = get_logger()

    try:
        if args.cmd == "render":
            return _render(args)
        if args.cmd == "probe":
            return _probe(args)
        raise RuntimeError("Unknown command.")
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return EXIT_CONFIG_ERROR

if __name__ == "__main__":
    sys.exit(main())
