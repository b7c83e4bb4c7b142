# -*- coding: utf-8 -*-
"""Generate passage dimensions (LRUD) from splay shots.

Modern surveys record walls as radial splay shots rather than as left,
right, up and down estimates. Formats that only store LRUD need those
values derived from the splays:

* The passage direction at a station is the mean of the onward leg bearing
  and the bearing of the most in-line leg arriving at the station.
* Splays that repeat a leg at the station (back shots, or shots up a side
  passage that was then surveyed) are ignored.
* Up and down come from the steepest upward and downward splays steeper
  than 20 degrees, measured as vertical extent.
* Left and right come from splays shallower than 70 degrees, classified by
  which side of the passage they fall on. The splay reaching furthest along
  the perpendicular to the passage direction wins and that distance is used.

When every bucket had a single candidate the splays used are flagged so a
writer may drop them (see :meth:`Series.remove_splays_used_for_lrud`).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from dataclasses import field

from cave_converter.bearings import adjust_bearing_within_range
from cave_converter.bearings import average_compass_bearings
from cave_converter.bearings import bearing_difference_degrees
from cave_converter.constants import LRUD_BEARING_TOLERANCE
from cave_converter.constants import LRUD_LEFT_RIGHT_MAX_CLINO
from cave_converter.constants import LRUD_LENGTH_TOLERANCE
from cave_converter.constants import LRUD_SPECIAL_FLAG
from cave_converter.constants import LRUD_UP_DOWN_CLINO
from cave_converter.constants import UNSET_LENGTH
from cave_converter.enums import Severity
from cave_converter.errors import DiagnosticSink
from cave_converter.errors import report
from cave_converter.survey.models import Leg
from cave_converter.survey.models import Series
from cave_converter.survey.models import Station
from cave_converter.survey.models import Survey
from cave_converter.survey.models import ToStationLRUD

logger = logging.getLogger(__name__)


@dataclass
class _SplayBuckets:
    left: list[Leg] = field(default_factory=list)
    right: list[Leg] = field(default_factory=list)
    up: list[Leg] = field(default_factory=list)
    down: list[Leg] = field(default_factory=list)

    @property
    def ambiguous(self) -> bool:
        """True when any dimension had more than one candidate splay."""
        return any(
            len(bucket) > 1 for bucket in (self.left, self.right, self.up, self.down)
        )


# ---------------------------------------------------------------------------
# Geometry helpers
# ---------------------------------------------------------------------------


def extent_along_bearing(
    bearing: float, vector_length: float, vector_bearing: float
) -> float:
    """Distance a horizontal vector reaches along ``bearing``."""
    difference = bearing_difference_degrees(bearing, vector_bearing)
    return vector_length * math.cos(math.radians(difference))


def _relative_bearing(bearing: float, reference: float) -> float:
    """``bearing`` measured clockwise from ``reference`` (0-360)."""
    return adjust_bearing_within_range(bearing - reference)


def _best_horizontal_splay(
    splays: list[Leg], passage_bearing: float, left: bool
) -> Leg | None:
    """Splay with the greatest extent perpendicular to the passage."""
    orthogonal = 270.0 if left else 90.0
    best_value = 0.0
    best: Leg | None = None
    for splay in splays:
        corrected = _relative_bearing(splay.compass, passage_bearing)
        extent = extent_along_bearing(orthogonal, splay.horizontal_length, corrected)
        if extent > best_value:
            best_value = extent
            best = splay
    return best


def _is_back_shot(splay: Leg, master: Leg, other_legs: list[Leg]) -> bool:
    """True if ``splay`` matches a leg leaving the station."""
    candidates = [master]
    for other in other_legs:
        outward = other.clone()
        outward.reverse_direction()
        candidates.append(outward)

    for leg in candidates:
        if (
            bearing_difference_degrees(leg.compass, splay.compass)
            < LRUD_BEARING_TOLERANCE
            and bearing_difference_degrees(leg.clino, splay.clino)
            < LRUD_BEARING_TOLERANCE
            and abs(leg.length - splay.length) < LRUD_LENGTH_TOLERANCE
        ):
            return True
    return False


# ---------------------------------------------------------------------------
# Per leg
# ---------------------------------------------------------------------------


def generate_lrud_for_leg(
    master: Leg,
    splays: list[Leg],
    other_legs: list[Leg],
    series_name: str = "",
) -> None:
    """Set the LRUD of ``master`` from splays at its from-station.

    Args:
        master: Leg whose from-station the splays were shot from
        splays: Splays from that station
        other_legs: Other legs at the station, each directed towards it
        series_name: Used in log messages only
    """
    best_prev: Leg | None = None
    best_diff = 360.0
    for other in other_legs:
        diff = bearing_difference_degrees(other.compass, master.compass)
        if diff < best_diff:
            best_diff = diff
            best_prev = other

    passage_bearing = master.compass
    if best_prev is not None:
        passage_bearing = average_compass_bearings([master.compass, best_prev.compass])

    buckets = _SplayBuckets()
    for splay in splays:
        if _is_back_shot(splay, master, other_legs):
            logger.info(
                "Ignoring splay from %s.%s with length of %s as it matches a leg "
                "and is assumed to be a back-shot",
                series_name,
                splay.from_station,
                splay.length,
            )
            continue

        if splay.clino > LRUD_UP_DOWN_CLINO:
            buckets.up.append(splay)
        elif splay.clino < -LRUD_UP_DOWN_CLINO:
            buckets.down.append(splay)

        if abs(splay.clino) >= LRUD_LEFT_RIGHT_MAX_CLINO:
            continue

        corrected = _relative_bearing(splay.compass, master.compass)
        if best_prev is not None:
            prev_back = adjust_bearing_within_range(
                180 + best_prev.compass - master.compass
            )
            if corrected < prev_back:
                buckets.right.append(splay)
            else:
                buckets.left.append(splay)
        elif LRUD_BEARING_TOLERANCE < corrected < 180 - LRUD_BEARING_TOLERANCE:
            buckets.right.append(splay)
        elif 180 + LRUD_BEARING_TOLERANCE < corrected < 360 - LRUD_BEARING_TOLERANCE:
            buckets.left.append(splay)
        else:
            logger.info(
                "Ignoring splay from %s.%s with bearing of %s as it is within %s "
                "degrees of the leg direction",
                series_name,
                splay.from_station,
                splay.compass,
                LRUD_BEARING_TOLERANCE,
            )

    flag_used = not buckets.ambiguous
    used: list[Leg] = []

    up = max(buckets.up, key=lambda leg: leg.clino, default=None)
    if up is not None and up.clino > 0:
        master.up = up.vertical_length
        used.append(up)

    down = min(buckets.down, key=lambda leg: leg.clino, default=None)
    if down is not None and down.clino < 0:
        master.down = down.vertical_length
        used.append(down)

    left = _best_horizontal_splay(buckets.left, passage_bearing, left=True)
    if left is not None:
        master.left = extent_along_bearing(
            adjust_bearing_within_range(passage_bearing - 90),
            left.horizontal_length,
            left.compass,
        )
        used.append(left)

    right = _best_horizontal_splay(buckets.right, passage_bearing, left=False)
    if right is not None:
        master.right = extent_along_bearing(
            adjust_bearing_within_range(passage_bearing + 90),
            right.horizontal_length,
            right.compass,
        )
        used.append(right)

    if flag_used:
        for splay in used:
            splay.down = LRUD_SPECIAL_FLAG


# ---------------------------------------------------------------------------
# Per series
# ---------------------------------------------------------------------------


def _legs_at_station(station: Station, master: Leg, cave_legs: list[Leg]) -> list[Leg]:
    """Other legs touching ``station``, each directed towards it."""
    result: list[Leg] = []
    for leg in cave_legs:
        if leg is master:
            continue
        if leg.to_station == station:
            result.append(leg)
        elif leg.from_station == station and leg.to_station is not None:
            towards = leg.clone()
            towards.reverse_direction()
            result.append(towards)
    return result


def generate_series_lrud(
    series: Series,
    diagnostics: DiagnosticSink | None = None,
    remove_used_splays: bool = False,
) -> int:
    """Derive LRUD values for the legs of one series from its splays.

    Inner series are not visited; see :func:`generate_lrud`.

    Returns:
        Number of stations given LRUD values
    """
    cave_legs: list[Leg] = []
    splay_groups: dict[Station, list[Leg]] = {}
    for leg in series.legs:
        if leg.surface:
            continue
        if leg.splay:
            splay_groups.setdefault(leg.from_station, []).append(leg)
        else:
            cave_legs.append(leg)

    stations_done = 0
    unused: list[Station] = []
    for station, splays in splay_groups.items():
        masters = [leg for leg in cave_legs if leg.from_station == station]
        if not masters:
            unused.append(station)
            continue
        for master in masters:
            others = _legs_at_station(station, master, cave_legs)
            generate_lrud_for_leg(master, splays, others, series.name)
        stations_done += 1

    for station in unused:
        arriving = [
            leg
            for leg in series.legs
            if not leg.splay and leg.to_station is not None and leg.to_station == station
        ]
        if not arriving:
            report(
                diagnostics,
                Severity.WARNING,
                f"Splays from station '{station}' do not start at any leg",
                series=series.name,
            )
            continue

        first = arriving[0]
        temp_leg = Leg(
            from_station=first.to_station,
            length=UNSET_LENGTH,
            compass=first.compass,
            clino=first.clino,
        )
        others = []
        for leg in arriving[1:]:
            towards = leg.clone()
            towards.reverse_direction()
            others.append(towards)
        generate_lrud_for_leg(temp_leg, splay_groups[station], others, series.name)
        series.to_station_lruds.append(
            ToStationLRUD(
                station=temp_leg.from_station,
                left=temp_leg.left,
                right=temp_leg.right,
                up=temp_leg.up,
                down=temp_leg.down,
            )
        )
        stations_done += 1

    if remove_used_splays:
        removed = series.remove_splays_used_for_lrud()
        logger.debug("Removed %d splays used for LRUD from %s", removed, series.name)

    return stations_done


def generate_lrud(
    survey: Survey,
    diagnostics: DiagnosticSink | None = None,
    remove_used_splays: bool = False,
) -> int:
    """Derive LRUD values from splays for every series in a survey.

    Series are processed depth first: a series' own legs, then each of its
    inner series.

    Args:
        survey: Survey to update in place
        diagnostics: Receives warnings for splays that cannot be used
        remove_used_splays: Delete splays that were used for an LRUD value

    Returns:
        Number of stations given LRUD values
    """
    total = 0
    for series in survey.walk():
        total += generate_series_lrud(
            series,
            diagnostics=diagnostics,
            remove_used_splays=remove_used_splays,
        )
    logger.info("Generated LRUD data for %d stations", total)
    return total
