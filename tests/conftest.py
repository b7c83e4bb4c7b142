# -*- coding: utf-8 -*-
"""Pytest configuration and fixtures.

This module provides builders for the legs and series shared across the
test modules.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import pytest

from cave_converter.survey.models import Leg
from cave_converter.survey.models import Series
from cave_converter.survey.models import Station

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


# =============================================================================
# Builders
# =============================================================================


def build_leg(
    from_name: str | int,
    to_name: str | int,
    length: float = 5.0,
    compass: float = 0.0,
    clino: float = 0.0,
) -> Leg:
    return Leg(
        from_station=Station(name=str(from_name)),
        to_station=Station(name=str(to_name)),
        length=length,
        compass=compass,
        clino=clino,
    )


def build_splay(
    from_name: str | int,
    length: float,
    compass: float,
    clino: float,
) -> Leg:
    return Leg(
        from_station=Station(name=str(from_name)),
        length=length,
        compass=compass,
        clino=clino,
        splay=True,
    )


def build_series(name: str, pairs: list[tuple[int, int]]) -> Series:
    """Series of default legs joining each ``(from, to)`` pair in order."""
    series = Series(name=name)
    for from_name, to_name in pairs:
        series.add_leg(build_leg(from_name, to_name))
    return series


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def make_leg() -> Callable[..., Leg]:
    return build_leg


@pytest.fixture
def make_splay() -> Callable[..., Leg]:
    return build_splay


@pytest.fixture
def make_series() -> Callable[[str, list[tuple[int, int]]], Series]:
    return build_series


@pytest.fixture
def figure_of_eight() -> Series:
    """Two loops of four legs meeting at station 1."""
    return build_series(
        "fig8",
        [(1, 2), (2, 3), (3, 4), (4, 1), (1, 5), (5, 6), (6, 7), (7, 1)],
    )


@pytest.fixture
def t_shape() -> Series:
    """Trunk 1-5 with a two leg branch from station 3, in survey order."""
    return build_series("tee", [(1, 2), (2, 3), (3, 4), (4, 5), (3, 6), (6, 7)])


@pytest.fixture
def t_shape_scrambled() -> Series:
    """The same T shape with legs supplied out of order."""
    return build_series("tee", [(3, 6), (4, 5), (1, 2), (6, 7), (3, 4), (2, 3)])


@pytest.fixture
def forward_series_with_splays() -> Series:
    """Three forward legs with three splays at each of the four stations."""
    series = Series(name="Test")
    series.add_leg(build_splay(1, 0.74, 236.15, -6.85))
    series.add_leg(build_splay(1, 0.87, 46.77, -82.61))
    series.add_leg(build_splay(1, 1.68, 227.27, 67.16))
    series.add_leg(build_leg(1, 2, 5.05, 279.35, -25.23))

    series.add_leg(build_splay(2, 0.58, 34.79, 1.49))
    series.add_leg(build_splay(2, 1.16, 111.26, -85.03))
    series.add_leg(build_splay(2, 2.83, 16.27, 74.62))
    series.add_leg(build_leg(2, 3, 5.02, 336.36, -13.85))

    series.add_leg(build_splay(3, 0.41, 231.77, -3.06))
    series.add_leg(build_splay(3, 3.73, 254.43, 80.33))
    series.add_leg(build_splay(3, 0.54, 182.41, -84.02))
    series.add_leg(build_leg(3, 4, 3.19, 303.08, -33.11))

    series.add_leg(build_splay(4, 0.53, 23.07, -5.56))
    series.add_leg(build_splay(4, 4.46, 353.35, 80.60))
    series.add_leg(build_splay(4, 1.45, 224.40, -78.95))
    return series


@pytest.fixture
def backward_series_with_splays() -> Series:
    """Three legs surveyed from the far end back to station 1."""
    series = Series(name="Test")
    series.add_leg(build_splay(1, 0.74, 236.15, -6.85))
    series.add_leg(build_splay(1, 0.87, 46.77, -82.61))
    series.add_leg(build_splay(1, 1.68, 227.27, 67.16))
    series.add_leg(build_leg(2, 1, 5.05, 99.35, 25.23))

    series.add_leg(build_splay(2, 0.58, 34.79, 1.49))
    series.add_leg(build_splay(2, 1.16, 111.26, -85.03))
    series.add_leg(build_splay(2, 2.83, 16.27, 74.62))
    series.add_leg(build_leg(3, 2, 5.02, 156.36, 13.85))

    series.add_leg(build_splay(3, 0.41, 231.77, -3.06))
    series.add_leg(build_splay(3, 3.73, 254.43, 80.33))
    series.add_leg(build_splay(3, 0.54, 182.41, -84.02))
    series.add_leg(build_leg(4, 3, 3.19, 123.08, 33.11))

    series.add_leg(build_splay(4, 0.53, 23.07, -5.56))
    series.add_leg(build_splay(4, 4.46, 353.35, 80.60))
    series.add_leg(build_splay(4, 1.45, 224.40, -78.95))
    return series


# Splays shared by the five leg forward and leap-frog surveys, keyed by
# station, as (length, compass, clino).
FIVE_LEG_SPLAYS = {
    1: [(0.07, 194.15, 2.0), (0.74, 16.15, -6.0), (1.28, 227.27, 87.0), (0.87, 46.77, -82.0)],
    2: [(0.15, 217.28, -3.0), (0.78, 34.79, 1.0), (0.83, 16.27, 84.0), (1.16, 111.26, -85.0)],
    3: [(1.21, 231.77, 2.0), (0.21, 45.17, -3.0), (1.23, 254.43, 80.0), (0.54, 182.41, -84.0)],
    4: [(0.53, 228.49, -2.0), (1.62, 60.07, -5.0), (1.46, 353.35, 80.0), (1.45, 224.40, -89.0)],
    5: [(1.21, 251.77, 2.0), (0.21, 45.17, -5.0), (1.25, 254.45, 80.0), (0.54, 182.41, -84.0)],
    6: [(0.53, 228.69, -2.0), (1.62, 60.07, -5.0), (1.66, 353.35, 80.0), (1.65, 226.60, -89.0)],
}


def build_splayed_series(name: str, legs: list[Leg]) -> Series:
    """Series where each station's splays come before the leg that follows it.

    Splays are taken from :data:`FIVE_LEG_SPLAYS` for the station at the
    same position in the survey, and the last station's splays close it.
    """
    series = Series(name=name)
    for station, leg in enumerate(legs, start=1):
        for length, compass, clino in FIVE_LEG_SPLAYS[station]:
            series.add_leg(build_splay(station, length, compass, clino))
        series.add_leg(leg)
    last = len(legs) + 1
    for length, compass, clino in FIVE_LEG_SPLAYS[last]:
        series.add_leg(build_splay(last, length, compass, clino))
    return series


@pytest.fixture
def forward_five_legs_with_four_splays() -> Series:
    """Five forward legs with four splays at each of the six stations."""
    return build_splayed_series(
        "Test",
        [
            build_leg(1, 2, 5.05, 279.15, -5.23),
            build_leg(2, 3, 5.02, 336.26, -3.85),
            build_leg(3, 4, 3.19, 303.38, -6.0),
            build_leg(4, 5, 5.02, 26.42, -5.85),
            build_leg(5, 6, 3.19, 297.57, -6.0),
        ],
    )


@pytest.fixture
def leapfrog_series_with_splays() -> Series:
    """The five leg survey shot from every other station in both directions."""
    return build_splayed_series(
        "Test",
        [
            build_leg(1, 2, 5.05, 279.15, -5.23),
            build_leg(3, 2, 5.02, 156.26, 3.85),
            build_leg(3, 4, 3.19, 303.38, -6.0),
            build_leg(5, 4, 5.02, 206.42, 5.85),
            build_leg(5, 6, 3.19, 297.57, -6.0),
        ],
    )


@pytest.fixture
def branched_222_series() -> Series:
    """Trunk 1-5 with a two leg branch from station 3."""
    series = Series(name="Test")
    series.add_leg(build_splay(1, 0.5, 330.0, 3.0))
    series.add_leg(build_splay(1, 1.5, 150.0, -6.0))
    series.add_leg(build_splay(1, 2.0, 60.0, 88.0))
    series.add_leg(build_splay(1, 0.4, 60.0, -89.0))
    series.add_leg(build_leg(1, 2, 1.43, 61.61, -13.25))

    series.add_leg(build_splay(2, 0.58, 327.33, -0.57))
    series.add_leg(build_splay(2, 0.94, 171.13, -6.41))
    series.add_leg(build_splay(2, 0.50, 258.56, -34.18))
    series.add_leg(build_leg(2, 3, 3.89, 73.29, -51.63))

    series.add_leg(build_splay(3, 0.91, 252.72, -4.04))
    series.add_leg(build_splay(3, 0.80, 250.31, -35.24))
    series.add_leg(build_splay(3, 2.44, 239.99, 47.81))
    series.add_leg(build_leg(3, 4, 4.50, 170.72, 19.68))

    series.add_leg(build_splay(4, 0.46, 71.39, -4.30))
    series.add_leg(build_splay(4, 1.54, 358.12, 82.08))
    series.add_leg(build_splay(4, 0.94, 170.44, -79.46))
    series.add_leg(build_splay(4, 0.45, 220.38, -6.59))
    series.add_leg(build_leg(4, 5, 1.63, 131.27, 20.13))

    series.add_leg(build_splay(5, 0.37, 242.14, -5.73))
    series.add_leg(build_splay(5, 0.36, 39.38, -82.79))
    series.add_leg(build_splay(5, 1.17, 258.11, 84.02))
    series.add_leg(build_splay(5, 0.5, 41.0, 2.0))
    series.add_leg(build_leg(3, 6, 5.02, 336.36, -13.85))

    series.add_leg(build_splay(6, 0.41, 231.77, -3.06))
    series.add_leg(build_splay(6, 3.73, 254.43, 80.33))
    series.add_leg(build_splay(6, 0.54, 182.41, -84.02))
    series.add_leg(build_leg(6, 7, 3.19, 303.08, -33.11))

    series.add_leg(build_splay(7, 0.53, 23.07, -5.56))
    series.add_leg(build_splay(7, 4.46, 353.35, 80.60))
    series.add_leg(build_splay(7, 1.45, 224.40, -78.95))
    return series


@pytest.fixture
def branched_122_series() -> Series:
    """Trunk 1-4 with a two leg branch from station 2."""
    series = Series(name="Test")
    series.add_leg(build_splay(1, 0.58, 327.33, -0.57))
    series.add_leg(build_splay(1, 0.94, 171.13, -6.41))
    series.add_leg(build_splay(1, 0.50, 258.56, -34.18))
    series.add_leg(build_leg(1, 2, 3.89, 73.29, -51.63))

    series.add_leg(build_splay(2, 0.91, 252.72, -4.04))
    series.add_leg(build_splay(2, 0.80, 250.31, -35.24))
    series.add_leg(build_splay(2, 2.44, 239.99, 47.81))
    series.add_leg(build_leg(2, 3, 4.50, 170.72, 19.68))

    series.add_leg(build_splay(3, 0.46, 71.39, -4.30))
    series.add_leg(build_splay(3, 1.54, 358.12, 82.08))
    series.add_leg(build_splay(3, 0.94, 170.44, -79.46))
    series.add_leg(build_splay(3, 0.45, 220.38, -6.59))
    series.add_leg(build_leg(3, 4, 1.63, 131.27, 20.13))

    series.add_leg(build_splay(4, 0.37, 242.14, -5.73))
    series.add_leg(build_splay(4, 0.36, 39.38, -82.79))
    series.add_leg(build_splay(4, 1.17, 258.11, 84.02))
    series.add_leg(build_splay(4, 0.5, 41.0, 2.0))
    series.add_leg(build_leg(2, 5, 5.02, 336.36, -13.85))

    series.add_leg(build_splay(5, 0.41, 231.77, -3.06))
    series.add_leg(build_splay(5, 3.73, 254.43, 80.33))
    series.add_leg(build_splay(5, 0.54, 182.41, -84.02))
    series.add_leg(build_leg(5, 6, 3.19, 303.08, -33.11))

    series.add_leg(build_splay(6, 0.53, 23.07, -5.56))
    series.add_leg(build_splay(6, 4.46, 353.35, 80.60))
    series.add_leg(build_splay(6, 1.45, 224.40, -78.95))
    return series
