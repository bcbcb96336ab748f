"""Raster encoding of rendered buffers and the external viewer hand-off."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import BinaryIO, Union

import numpy as np
import PIL.Image

logger = logging.getLogger(__name__)

DEFAULT_VIEWER = "goiv"

Destination = Union[str, Path, BinaryIO]


def to_image(pixels: np.ndarray) -> PIL.Image.Image:
    return PIL.Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8))


def write_png(pixels: np.ndarray, destination: Destination) -> None:
    """Encode ``pixels`` as PNG to a file path or an open binary stream."""

    image = to_image(pixels)
    if isinstance(destination, (str, Path)):
        output_path = Path(destination)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        image.save(str(output_path), format="PNG")
    else:
        image.save(destination, format="PNG")
        destination.flush()


def read_png(path: Union[str, Path]) -> np.ndarray:
    """Decode an image file back into an ``(height, width, 4)`` RGBA array."""

    with PIL.Image.open(path) as image:
        return np.array(image.convert("RGBA"), copy=True)


def viewer_command(path: Union[str, Path], display_height: int, aspect: float, program: str = DEFAULT_VIEWER) -> list[str]:
    """Build the viewer invocation; a positive ``display_height`` also fixes the window size."""

    if display_height > 0:
        width = int(display_height * aspect)
        return [program, "-w", str(width), "-h", str(display_height), str(path)]
    return [program, str(path)]


def launch_viewer(path: Union[str, Path], display_height: int, aspect: float, program: str = DEFAULT_VIEWER) -> None:
    command = viewer_command(path, display_height, aspect, program)
    logger.debug("launching viewer: %s", " ".join(command))
    subprocess.run(command, check=True)
