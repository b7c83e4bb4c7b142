# -*- coding: utf-8 -*-
"""Split a flat series into nested series using full-path station names.

Some formats store every leg of a cave in one block and identify stations
by a dotted path such as ``entrance.12``. This module moves each leg into a
child series named after the first path segment of its from-station and
strips that segment from the station names.
"""

from __future__ import annotations

import logging

from cave_converter.constants import STATION_PATH_SEPARATOR
from cave_converter.errors import DiagnosticSink
from cave_converter.errors import UnresolvedCrossSeriesName
from cave_converter.survey.models import Leg
from cave_converter.survey.models import Series
from cave_converter.validation import split_series_prefix

logger = logging.getLogger(__name__)


def has_full_path_names(series: Series) -> bool:
    """True if any station in the series' legs has a dotted name."""
    for leg in series.legs:
        if STATION_PATH_SEPARATOR in leg.from_station.name:
            return True
        if leg.to_station is not None and STATION_PATH_SEPARATOR in leg.to_station.name:
            return True
    return False


def _child_for(series: Series, name: str) -> Series:
    child = series.find_inner_series_by_name(name)
    if child is None:
        child = Series(name=name)
        child.set_calibration_from(series)
        series.add_series(child)
        logger.debug("Created series %s inside %s", name, series.name)
    return child


def split_by_full_path_names(
    series: Series,
    diagnostics: DiagnosticSink | None = None,
) -> bool:
    """Move legs into child series named by their station name prefixes.

    Each leg whose from-station is named ``prefix.rest`` is moved into the
    child series ``prefix`` (created if needed) with the from-station renamed
    to ``rest``. The to-station prefix is removed only when it is the same
    prefix. A to-station in a different series keeps its full name, a child
    series is created for its prefix, and an :class:`UnresolvedCrossSeriesName`
    warning is reported because the join needs an equate. A to-station with
    no prefix is kept as it is and reported the same way. Legs whose
    from-station has no prefix stay in ``series``.

    Args:
        series: A leaf series
        diagnostics: Receives a warning for each cross-series leg

    Returns:
        True if the series was rearranged, False if it has inner series or
        no dotted station names
    """
    if series.inner_series or not has_full_path_names(series):
        return False

    kept: list[Leg] = []
    moved = 0
    for leg in series.legs:
        prefix, from_name = split_series_prefix(leg.from_station.name)
        if not prefix or not from_name:
            kept.append(leg)
            continue

        child = _child_for(series, prefix)
        leg.from_station = leg.from_station.renamed(from_name)

        if leg.to_station is not None:
            to_prefix, to_name = split_series_prefix(leg.to_station.name)
            if to_prefix and to_name and to_prefix.casefold() == prefix.casefold():
                leg.to_station = leg.to_station.renamed(to_name)
            else:
                if to_prefix and to_name:
                    _child_for(series, to_prefix)
                    target = f"series '{to_prefix}'"
                else:
                    target = f"station '{leg.to_station.name}' outside any series"
                error = UnresolvedCrossSeriesName(
                    f"Leg {leg} joins series '{child.name}' to {target} "
                    "and needs an equate",
                    series=series.name,
                )
                if diagnostics is not None:
                    diagnostics.report(error.to_error())
                else:
                    logger.warning("%s", error)

        child.add_leg(leg)
        moved += 1

    series.legs = kept
    logger.info(
        "Split series %s into %d series by station name (%d legs moved, %d kept)",
        series.name,
        series.inner_series_count(),
        moved,
        len(kept),
    )
    return True
