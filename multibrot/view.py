"""Geometry that maps a pixel grid onto a rectangle of the complex plane."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, NamedTuple

import numpy as np


class InvalidGeometryError(ValueError):
    """Raised when a view cannot describe a non-empty region."""


class SideOffsets(NamedTuple):
    """Offsets from the view center to each edge, plus the half-sample shift."""

    top: complex
    right: complex
    bottom: complex
    left: complex
    sample: complex


@dataclass(frozen=True)
class RowRange:
    """Restartable row-major walk over ``(sample, (x, y))`` pairs of a band."""

    view: "View"
    start: int
    stop: int

    def __iter__(self) -> Iterator[tuple[complex, tuple[int, int]]]:
        x_res = self.view.resolution[0]
        for y in range(self.start, min(self.stop, self.view.resolution[1])):
            for x in range(x_res):
                yield self.view.sample_at(x, y), (x, y)

    def __len__(self) -> int:
        rows = min(self.stop, self.view.resolution[1]) - max(self.start, 0)
        return max(rows, 0) * self.view.resolution[0]


@dataclass(frozen=True)
class View:
    """Immutable mapping between a pixel grid and a region of the plane."""

    resolution: tuple[int, int]
    height: float
    center: complex
    aspect: float = field(init=False)
    width: float = field(init=False)
    offsets: SideOffsets = field(init=False)

    def __post_init__(self) -> None:
        x_res, y_res = self.resolution
        if x_res <= 0 or y_res <= 0:
            raise InvalidGeometryError(f"resolution must be positive, got {x_res}x{y_res}")
        if not self.height > 0:
            raise InvalidGeometryError(f"region height must be positive, got {self.height}")
        aspect = np.float64(x_res) / np.float64(y_res)
        width = aspect * np.float64(self.height)
        height = np.float64(self.height)
        object.__setattr__(self, "aspect", float(aspect))
        object.__setattr__(self, "width", float(width))
        object.__setattr__(
            self,
            "offsets",
            SideOffsets(
                top=complex(0.0, float(height / 2.0)),
                right=complex(float(width / 2.0), 0.0),
                bottom=complex(0.0, float(-height / 2.0)),
                left=complex(float(-width / 2.0), 0.0),
                sample=complex(float(width / (2 * x_res)), float(-height / (2 * y_res))),
            ),
        )

    @property
    def sample_count(self) -> int:
        return self.resolution[0] * self.resolution[1]

    @property
    def separation(self) -> complex:
        """Per-pixel step in the plane; the imaginary part is negative as rows grow downward."""

        return complex(self.width / self.resolution[0], -self.height / self.resolution[1])

    @property
    def origin(self) -> complex:
        """Sample of pixel ``(0, 0)``."""

        return self.center + self.offsets.top + self.offsets.left + self.offsets.sample

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """``(left, right, bottom, top)`` edges of the imaged rectangle."""

        return (
            (self.center + self.offsets.left).real,
            (self.center + self.offsets.right).real,
            (self.center + self.offsets.bottom).imag,
            (self.center + self.offsets.top).imag,
        )

    def sample_at(self, x: int, y: int) -> complex:
        sep = self.separation
        return complex(sep.real * x, sep.imag * y) + self.origin

    def row_range(self, start: int, stop: int) -> RowRange:
        return RowRange(self, start, stop)


def make_view(resolution: tuple[int, int], region_height: float, center: complex) -> View:
    """Build a :class:`View` from loosely typed resolution, height and center."""

    x_res, y_res = (int(v) for v in resolution)
    return View(resolution=(x_res, y_res), height=float(region_height), center=complex(center))
