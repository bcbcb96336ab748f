"""
test_escape.py
"""
import cmath
import math

import pytest

from multibrot import BOUNDED, Bounded, Diverged, diverges_within, escape_iteration, in_main_cardioid


def _cardioid_points():
    """
    Points pulled from the main cardioid boundary part of the way towards 0.25.
    """
    points = []
    for step in range(12):
        t = 2 * math.pi * step / 12
        boundary = cmath.exp(1j * t) / 2 - cmath.exp(2j * t) / 4
        for scale in (0.1, 0.5, 0.85):
            points.append(0.25 + scale * (boundary - 0.25))
    return points


def test_bounded_is_a_single_value():
    assert Bounded() == BOUNDED
    assert Diverged(3) != BOUNDED
    assert Diverged(3) == Diverged(3)


@pytest.mark.parametrize('sample, expected', [
    (0j, True),
    (0.25 + 0j, True),
    (-0.5 + 0j, True),
    (-0.25 + 0.25j, True),
    (0.3 + 0j, False),
    (-1 + 0j, False),
    (-0.8 + 0j, False),
    (2 + 2j, False),
])
def test_in_main_cardioid(sample, expected):
    assert in_main_cardioid(sample) is expected


def test_escape_steps_are_zero_based():
    """
    The first iterate is c itself, so a sample outside the radius escapes at step 0.
    """
    assert diverges_within(3 + 0j, 10) == Diverged(0)
    assert diverges_within(2 + 0j, 10) == Diverged(0)
    assert diverges_within(1 + 0j, 10) == Diverged(1)
    assert diverges_within(complex(-1.75, 0.75), 10) == Diverged(1)


def test_cap_limits_the_loop():
    assert diverges_within(1 + 0j, 1) == BOUNDED
    assert diverges_within(1 + 0j, 0) == BOUNDED
    assert escape_iteration(1 + 0j, 2) == Diverged(1)


def test_period_two_bulb_is_bounded():
    assert diverges_within(-1 + 0j, 500) == BOUNDED


@pytest.mark.parametrize('cap', [1, 2, 10, 200])
def test_cardioid_shortcut_agrees_with_full_loop(cap):
    """
    Anything the shortcut calls bounded is also bounded by the plain loop.
    """
    for sample in _cardioid_points():
        assert in_main_cardioid(sample)
        assert diverges_within(sample, cap) == BOUNDED
        assert escape_iteration(sample, cap, 2.0) == BOUNDED


def test_shortcut_only_applies_to_exponent_two():
    """
    -0.7 lies in the classical cardioid but escapes under z^3 + c.
    """
    sample = complex(-0.7, 0.0)
    assert in_main_cardioid(sample)
    assert diverges_within(sample, 100, 2.0) == BOUNDED
    assert diverges_within(sample, 100, 3.0) == Diverged(3)


@pytest.mark.parametrize('exponent', [3.0, 4.0, 2.5])
def test_general_exponent_matches_plain_power(exponent):
    sample = complex(0.4, 0.6)
    z = 0j
    expected = BOUNDED
    for n in range(50):
        z = z ** exponent + sample
        if abs(z) >= 2:
            expected = Diverged(n)
            break
    assert diverges_within(sample, 50, exponent) == expected


def test_negative_exponent_diverges_immediately():
    assert diverges_within(0.1 + 0.1j, 20, -2.0) == Diverged(0)


def test_zero_exponent_is_total():
    assert diverges_within(0.5 + 0j, 20, 0.0) == BOUNDED
    assert diverges_within(1.5 + 0j, 20, 0.0) == Diverged(0)


@pytest.mark.parametrize('sample', [0.3 + 0.5j, -1.2 + 0.1j, -0.1 + 0.9j, 0.2 - 0.55j])
def test_evaluation_is_deterministic(sample):
    assert diverges_within(sample, 256) == diverges_within(sample, 256)
    assert diverges_within(sample, 256, 3.0) == diverges_within(sample, 256, 3.0)
