from __future__ import annotations

from concurrent.futures import Future, ProcessPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Tuple

from mandelgrid.color import Color, ColorPolicy, hsl_color
from mandelgrid.config import RenderConfig
from mandelgrid.errors import ConfigurationError
from mandelgrid.geometry import GridCoordinate, pixel_to_complex
from mandelgrid.numeric.escape import Escaped, classify_escape
from mandelgrid.numeric.series import IterationSeries
from mandelgrid.surfaces import DrawingSurface
from mandelgrid.util.logging_setup import (
    configure_worker_logging,
    create_log_queue,
    get_logger,
    start_queue_listener,
)

PROGRESS_EVERY_N_ROWS = 50

class CancelFlag(Protocol):
    def is_set(self) -> bool: ...

@dataclass(frozen=True)
class RenderSummary:
    width: int
    height: int
    pixels_written: int
    rows_completed: int
    escaped: int
    bounded: int
    cancelled: bool

def _render_row(config: RenderConfig, color_policy: ColorPolicy, row: int) -> Tuple[List[Color], int]:
    colors: List[Color] = []
    escaped = 0
    for col in range(config.width):
        c = pixel_to_complex(GridCoordinate(row, col), config.region, config.width, config.height)
        result = classify_escape(IterationSeries(c), config.max_iterations)
        if isinstance(result, Escaped):
            escaped += 1
        colors.append(color_policy(result, config.max_iterations))
    return colors, escaped

_G: Dict[str, Any] = {}

def _init_worker(config: RenderConfig, color_policy: ColorPolicy, log_queue, log_level: int) -> None:
    _G["config"] = config
    _G["color_policy"] = color_policy
    configure_worker_logging(log_queue, log_level)

def _render_band(y0_y1: Tuple[int, int]) -> Tuple[int, List[Tuple[List[Color], int]]]:
    y0, y1 = y0_y1
    logger = get_logger("worker")
    rows = [_render_row(_G["config"], _G["color_policy"], y) for y in range(y0, y1)]
    logger.debug("Band rows %s..%s done", y0, y1 - 1)
    return y0, rows

def _bands(height: int, band_height: int) -> List[Tuple[int, int]]:
    bands: List[Tuple[int, int]] = []
    y = 0
    while y < height:
        y1 = min(height, y + band_height)
        bands.append((y, y1))
        y = y1
    return bands

class FractalRenderer:
    """Draws the escape-time picture of ``config.region`` onto a surface.

    Every grid cell ``(row, col)`` is visited in row-major order and written
    exactly once at ``x=col, y=row``. With ``workers > 1`` rows are computed
    in a process pool, but the surface is still only written from the calling
    process, in the same order as a serial pass.
    """

    def __init__(self, config: RenderConfig, color_policy: ColorPolicy = hsl_color) -> None:
        self.config = config
        self.color_policy = color_policy

    def render(
        self,
        surface: DrawingSurface,
        *,
        cancel: Optional[CancelFlag] = None,
        workers: int = 1,
        band_height: int = 8,
    ) -> RenderSummary:
        config = self.config.validate()
        if surface.width != config.width or surface.height != config.height:
            raise ConfigurationError(
                f"Surface is {surface.width}x{surface.height} but config asks for {config.width}x{config.height}"
            )
        if workers < 1 or band_height < 1:
            raise ConfigurationError("workers and band_height must be >= 1")

        logger = get_logger()
        logger.info(
            "Render start size=%sx%s region=%s..%s max_iterations=%s workers=%s",
            config.width, config.height, config.region.top_left, config.region.bottom_right,
            config.max_iterations, workers,
        )

        state = {"rows": 0, "escaped": 0}

        def write_row(row: int, colors: List[Color], escaped: int) -> None:
            for col, color in enumerate(colors):
                surface.set_pixel(col, row, color)
            state["rows"] += 1
            state["escaped"] += escaped
            logger.debug("Row %s written", row)
            if row % PROGRESS_EVERY_N_ROWS == 0:
                logger.info("Rendered row %s/%s", row, config.height)

        if workers == 1:
            cancelled = self._render_serial(config, write_row, cancel)
        else:
            cancelled = self._render_parallel(config, write_row, cancel, workers, band_height)

        pixels = state["rows"] * config.width
        summary = RenderSummary(
            width=config.width,
            height=config.height,
            pixels_written=pixels,
            rows_completed=state["rows"],
            escaped=state["escaped"],
            bounded=pixels - state["escaped"],
            cancelled=cancelled,
        )
        if cancelled:
            logger.warning("Render cancelled after %s/%s rows", summary.rows_completed, config.height)
        else:
            logger.info("Render complete pixels=%s escaped=%s bounded=%s", pixels, summary.escaped, summary.bounded)
        return summary

    def _render_serial(self, config: RenderConfig, write_row, cancel: Optional[CancelFlag]) -> bool:
        for row in range(config.height):
            if cancel is not None and cancel.is_set():
                return True
            colors, escaped = _render_row(config, self.color_policy, row)
            write_row(row, colors, escaped)
        return False

    def _render_parallel(self, config: RenderConfig, write_row, cancel: Optional[CancelFlag], workers: int, band_height: int) -> bool:
        logger = get_logger()
        queue = create_log_queue()
        listener = start_queue_listener(queue)
        try:
            with ProcessPoolExecutor(
                max_workers=workers,
                initializer=_init_worker,
                initargs=(config, self.color_policy, queue, logger.getEffectiveLevel()),
            ) as pool:
                futures: List[Future] = [pool.submit(_render_band, band) for band in _bands(config.height, band_height)]
                for fut in futures:
                    y0, rows = fut.result()
                    for offset, (colors, escaped) in enumerate(rows):
                        if cancel is not None and cancel.is_set():
                            for pending in futures:
                                pending.cancel()
                            return True
                        write_row(y0 + offset, colors, escaped)
            return False
        finally:
            listener.stop()

def render(
    surface: DrawingSurface,
    config: RenderConfig,
    *,
    color_policy: ColorPolicy = hsl_color,
    cancel: Optional[CancelFlag] = None,
    workers: int = 1,
) -> RenderSummary:
    return FractalRenderer(config, color_policy).render(surface, cancel=cancel, workers=workers)
