# -*- coding: utf-8 -*-
"""Compass bearing arithmetic shared by the survey algorithms."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from cave_converter.constants import DEGREES_PER_CIRCLE


def adjust_bearing_within_range(
    bearing: float,
    minimum: float = 0.0,
    maximum: float = DEGREES_PER_CIRCLE,
) -> float:
    """Shift ``bearing`` by whole turns until ``minimum <= bearing < maximum``."""
    adjusted = bearing
    while adjusted < minimum:
        adjusted += DEGREES_PER_CIRCLE
    while adjusted >= maximum:
        adjusted -= DEGREES_PER_CIRCLE
    return adjusted


def average_compass_bearings(bearings: Sequence[float]) -> float:
    """Mean direction of a set of compass bearings.

    Each bearing is treated as a unit vector and the bearing of the vector
    sum is returned, so 350 and 10 average to 0 rather than 180. Readings
    all carry equal weight.

    Args:
        bearings: Compass bearings in degrees

    Returns:
        Mean bearing in the range 0-360 degrees
    """
    if len(bearings) == 0:
        raise ValueError("At least one bearing is required")
    radians = np.radians(np.asarray(bearings, dtype=float))
    mean = np.degrees(np.arctan2(np.sin(radians).sum(), np.cos(radians).sum()))
    return adjust_bearing_within_range(float(mean))


def bearing_difference_degrees(angle1: float, angle2: float) -> float:
    """Smallest angle between two compass bearings (0-180 degrees)."""
    diff = abs(angle1 - angle2) % DEGREES_PER_CIRCLE
    if diff > DEGREES_PER_CIRCLE / 2:
        diff = DEGREES_PER_CIRCLE - diff
    return diff


def reverse_bearing(bearing: float) -> float:
    """Back bearing of ``bearing`` in the range 0-360 degrees."""
    return adjust_bearing_within_range(bearing + DEGREES_PER_CIRCLE / 2)
