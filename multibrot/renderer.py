"""Rendering entry points for Multibrot frames."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .collector import ProgressCallback, collect
from .palette import INTERIOR_COLOR, ONE_THIRD, PaletteConfig
from .view import View, make_view
from .workers import WorkerPool

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderConfig:
    """Parameters that describe a single render of the set."""

    max_iterations: int = 64
    pixel_width: int = 1920
    pixel_height: int = 1080
    exponent: float = 2.0
    center_real: float = -1.0
    center_imag: float = 0.0
    height: float = 2.0
    color_freq: float = 1.0
    hue_offset: float = 0.0
    alpha_decay: float = 1.0
    workers: int = 8

    @property
    def center(self) -> complex:
        return complex(self.center_real, self.center_imag)

    def view(self) -> View:
        return make_view((self.pixel_width, self.pixel_height), self.height, self.center)

    def palette(self) -> PaletteConfig:
        return PaletteConfig(
            phase_increment=ONE_THIRD,
            color_freq=self.color_freq,
            hue_offset=self.hue_offset,
            alpha_decay=self.alpha_decay,
        )


@dataclass(frozen=True)
class RenderResult:
    """Container for a finished frame."""

    pixels: np.ndarray
    view: View
    pixel_count: int


def new_buffer(view: View) -> np.ndarray:
    """Allocate an ``(height, width, 4)`` RGBA buffer filled with the interior colour."""

    x_res, y_res = view.resolution
    pixels = np.empty((y_res, x_res, 4), dtype=np.uint8)
    pixels[...] = INTERIOR_COLOR
    return pixels


def render_frame(
    config: RenderConfig,
    *,
    executor: str = "thread",
    progress: Optional[ProgressCallback] = None,
) -> RenderResult:
    """Render a frame given the supplied configuration."""

    view = config.view()
    palette = config.palette()
    pixels = new_buffer(view)

    pool = WorkerPool(view, config.max_iterations, config.exponent, config.workers, executor=executor)
    logger.debug(
        "rendering %dx%d with %d %s workers, %d iterations, exponent %g",
        view.resolution[0],
        view.resolution[1],
        len(pool),
        executor,
        config.max_iterations,
        config.exponent,
    )
    queues = pool.start()
    try:
        pixel_count = collect(queues, pixels, palette, progress=progress)
    except BaseException:
        pool.stop()
        raise
    # every queue is closed, so each worker has returned or is about to
    pool.join()

    logger.info("render complete: %d pixels", pixel_count)
    return RenderResult(pixels=pixels, view=view, pixel_count=pixel_count)


def render(config: RenderConfig, **kwargs) -> np.ndarray:
    return render_frame(config, **kwargs).pixels
