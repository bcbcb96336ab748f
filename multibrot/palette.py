"""Cosine colour palette keyed on escape time."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .escape import Bounded, EscapeResult

ONE_THIRD = 2.0 * math.pi / 3

INTERIOR_COLOR = (0, 0, 0, 255)

Color = tuple[int, int, int, int]


@dataclass(frozen=True)
class PaletteConfig:
    """Parameters of the three-phase cosine palette.

    ``color_freq`` scales how fast the hue cycles with escape time,
    ``hue_offset`` shifts every phase by that many full turns and
    ``alpha_decay`` fades the nth colour to ``alpha_decay ** n`` opacity.
    """

    phase_increment: float = ONE_THIRD
    color_freq: float = 1.0
    hue_offset: float = 0.0
    alpha_decay: float = 1.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.alpha_decay <= 1.0:
            raise ValueError(f"alpha_decay must lie in [0, 1], got {self.alpha_decay}")

    @property
    def angular_speed(self) -> float:
        return self.color_freq * 2.0 * math.pi / 18.0

    def phases(self) -> tuple[float, float, float]:
        base = self.hue_offset * 2.0 * math.pi
        return (base, base + self.phase_increment, base + 2 * self.phase_increment)

    def color(self, escape: EscapeResult) -> Color:
        if isinstance(escape, Bounded):
            return INTERIOR_COLOR
        n = escape.iteration
        t = self.angular_speed * n
        red, green, blue = (int(40 + 215 * math.cos(t + phase) ** 2) for phase in self.phases())
        return (red, green, blue, int(255.0 * self.alpha_decay ** n))

    def __call__(self, escape: EscapeResult) -> Color:
        return self.color(escape)
