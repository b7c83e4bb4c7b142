# -*- coding: utf-8 -*-
"""Unit conversions for survey measurements.

All survey values are stored canonically (metres and degrees) and converted
at the edges. These functions are pure and apply no rounding, so a value
converted out and back again is preserved to floating point precision.
"""

from __future__ import annotations

import math

from cave_converter.constants import DEGREES_PER_CIRCLE
from cave_converter.constants import FEET_PER_METRE
from cave_converter.constants import GRADS_PER_CIRCLE
from cave_converter.constants import MINUTES_PER_DEGREE
from cave_converter.constants import YARDS_PER_METRE
from cave_converter.enums import BearingUnit
from cave_converter.enums import GradientUnit
from cave_converter.enums import LengthUnit

_GRADS_TO_DEGREES = DEGREES_PER_CIRCLE / GRADS_PER_CIRCLE

# -----------------------------------------------------------------------------
# Lengths
# -----------------------------------------------------------------------------


def length_to_metres(value: float, unit: LengthUnit) -> float:
    """Convert a length in ``unit`` to metres."""
    if unit == LengthUnit.METRES:
        return value
    if unit == LengthUnit.FEET:
        return value / FEET_PER_METRE
    if unit == LengthUnit.YARDS:
        return value / YARDS_PER_METRE
    raise ValueError(f"Unsupported length unit: {unit!r}")


def length_from_metres(value: float, unit: LengthUnit) -> float:
    """Convert a length in metres to ``unit``."""
    if unit == LengthUnit.METRES:
        return value
    if unit == LengthUnit.FEET:
        return value * FEET_PER_METRE
    if unit == LengthUnit.YARDS:
        return value * YARDS_PER_METRE
    raise ValueError(f"Unsupported length unit: {unit!r}")


# -----------------------------------------------------------------------------
# Bearings
# -----------------------------------------------------------------------------


def bearing_to_degrees(value: float, unit: BearingUnit) -> float:
    """Convert a compass bearing in ``unit`` to degrees."""
    if unit == BearingUnit.DEGREES:
        return value
    if unit == BearingUnit.GRADS:
        return value * _GRADS_TO_DEGREES
    if unit == BearingUnit.MINUTES:
        return value / MINUTES_PER_DEGREE
    raise ValueError(f"Unsupported bearing unit: {unit!r}")


def bearing_from_degrees(value: float, unit: BearingUnit) -> float:
    """Convert a compass bearing in degrees to ``unit``."""
    if unit == BearingUnit.DEGREES:
        return value
    if unit == BearingUnit.GRADS:
        return value / _GRADS_TO_DEGREES
    if unit == BearingUnit.MINUTES:
        return value * MINUTES_PER_DEGREE
    raise ValueError(f"Unsupported bearing unit: {unit!r}")


# -----------------------------------------------------------------------------
# Gradients
# -----------------------------------------------------------------------------


def gradient_to_degrees(value: float, unit: GradientUnit) -> float:
    """Convert a clino reading in ``unit`` to degrees.

    Percent grades are converted with ``atan(value / 100)``, so 100% maps to
    45 degrees.
    """
    if unit == GradientUnit.DEGREES:
        return value
    if unit == GradientUnit.GRADS:
        return value * _GRADS_TO_DEGREES
    if unit == GradientUnit.MINUTES:
        return value / MINUTES_PER_DEGREE
    if unit == GradientUnit.PERCENT:
        return math.degrees(math.atan(value / 100.0))
    raise ValueError(f"Unsupported gradient unit: {unit!r}")


def gradient_from_degrees(value: float, unit: GradientUnit) -> float:
    """Convert a clino reading in degrees to ``unit``.

    Percent is undefined for vertical readings; ``tan`` of 90 degrees gives a
    very large finite number rather than raising.
    """
    if unit == GradientUnit.DEGREES:
        return value
    if unit == GradientUnit.GRADS:
        return value / _GRADS_TO_DEGREES
    if unit == GradientUnit.MINUTES:
        return value * MINUTES_PER_DEGREE
    if unit == GradientUnit.PERCENT:
        return math.tan(math.radians(value)) * 100.0
    raise ValueError(f"Unsupported gradient unit: {unit!r}")
