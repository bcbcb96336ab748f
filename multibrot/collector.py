"""Fan-in of worker results into the RGBA pixel buffer."""

from __future__ import annotations

import logging
import queue
from typing import Any, Callable, Optional, Sequence

import numpy as np

from .escape import EscapeResult

logger = logging.getLogger(__name__)

POLL_INTERVAL = 0.01

ProgressCallback = Callable[[float], None]


def collect(
    queues: Sequence[Any],
    pixels: np.ndarray,
    palette: Callable[[EscapeResult], Sequence[int]],
    progress: Optional[ProgressCallback] = None,
) -> int:
    """Drain every worker queue into ``pixels`` and return the number of pixels written.

    Queues are polled round-robin without blocking. A ``None`` item closes its
    queue. Results arrive in no particular order across queues; every
    ``PixelResult`` is written at ``pixels[y, x]`` through ``palette``.
    """

    height, width = pixels.shape[:2]
    total = width * height
    closed = [False] * len(queues)
    pixel_count = 0

    def receive(index: int, pix: Any) -> None:
        nonlocal pixel_count
        if pix is None:
            closed[index] = True
            return
        pixels[pix.y, pix.x] = palette(pix.escape)
        pixel_count += 1
        if progress is not None and pixel_count % width == 0:
            progress(100.0 * pixel_count / total)

    while not all(closed):
        received = False
        for i, results in enumerate(queues):
            if closed[i]:
                continue
            try:
                pix = results.get_nowait()
            except queue.Empty:
                continue
            received = True
            receive(i, pix)

        if not received:
            # nothing ready anywhere: block briefly on the first open queue
            index = closed.index(False)
            try:
                receive(index, queues[index].get(timeout=POLL_INTERVAL))
            except queue.Empty:
                pass

    logger.debug("collected %d of %d pixels from %d workers", pixel_count, total, len(queues))
    return pixel_count
