"""Paired single-pass generators of samples and pixel coordinates for a row band."""

from __future__ import annotations

from typing import Iterator

from .view import View


def _rows(view: View, start: int, stop: int) -> range:
    return range(start, min(view.resolution[1], stop))


def samples(view: View, start: int, stop: int) -> Iterator[complex]:
    """Yield the complex sample of every pixel in rows ``[start, stop)``, x fastest."""

    for y in _rows(view, start, stop):
        for x in range(view.resolution[0]):
            yield view.sample_at(x, y)


def points(view: View, start: int, stop: int) -> Iterator[tuple[int, int]]:
    for y in _rows(view, start, stop):
        for x in range(view.resolution[0]):
            yield x, y


def sample_points(view: View, start: int, stop: int) -> tuple[Iterator[complex], Iterator[tuple[int, int]]]:
    """Return a fresh ``(samples, points)`` pair aligned by row-major position."""

    return samples(view, start, stop), points(view, start, stop)
