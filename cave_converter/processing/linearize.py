# -*- coding: utf-8 -*-
"""Decompose a series of connected legs into linked linear chains.

Formats such as Toporobot can only store series that are simple chains of
stations, joined to each other by links. Survey data as read from other
formats is an arbitrary graph: legs in any order, branches, loops and
disconnected sections. :func:`linearize` rebuilds such a series as a parent
holding one inner series per chain plus the links between them.

Algorithm
---------
1. Index every regular leg by its from-station and to-station.
2. Grow the first chain from the first leg in input order, forward from its
   end station and backward from its start station. At a junction the first
   unvisited leg in input order continues the chain.
3. A leg that would revisit a station of the chain being built is a loop and
   is left for later, unless it returns to the chain's start station, which
   closes a ring and ends the chain.
4. A leg that reaches a station already on another chain is added and ends
   the chain in that direction.
5. Remaining legs are grown into further chains rooted at stations already
   placed, in placement order. Legs unreachable from any placed station start
   a new disconnected section.
6. Each chain's end stations are linked to the first other chain containing
   the same station.

Legs are never reversed, so readings are kept exactly as surveyed.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from dataclasses import field

from cave_converter.enums import Severity
from cave_converter.errors import DiagnosticSink
from cave_converter.errors import LinearizationError
from cave_converter.errors import MalformedStationReference
from cave_converter.errors import report
from cave_converter.survey.models import Leg
from cave_converter.survey.models import Series
from cave_converter.survey.models import SeriesLink
from cave_converter.survey.models import Station
from cave_converter.validation import split_station_path

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Chain checks
# ---------------------------------------------------------------------------


def is_simple_chain(series: Series) -> bool:
    """True if the regular legs of a leaf series form one unbranched path.

    Each leg must start where the previous one ended and no station may be
    visited twice, except that the last station may be the first one when
    the chain closes a ring.
    """
    if series.inner_series:
        return False
    legs = [leg for leg in series.legs if not leg.splay]
    if not legs:
        return True

    stations = [legs[0].from_station]
    for prev, leg in zip([None, *legs[:-1]], legs, strict=True):
        if leg.to_station is None:
            return False
        if prev is not None and prev.to_station != leg.from_station:
            return False
        stations.append(leg.to_station)

    interior = stations[:-1]
    if len(set(interior)) != len(interior):
        return False
    return stations[-1] not in interior[1:]


def is_linearized(series: Series) -> bool:
    """True if ``series`` is already a parent of linked simple chains."""
    return (
        not series.legs
        and bool(series.inner_series)
        and all(is_simple_chain(inner) for inner in series.inner_series)
    )


def _is_open_chain(series: Series) -> bool:
    """A simple chain whose ends are different stations."""
    legs = [leg for leg in series.legs if not leg.splay]
    return (
        bool(legs)
        and is_simple_chain(series)
        and legs[0].from_station != legs[-1].to_station
    )



# ---------------------------------------------------------------------------
# Chain building
# ---------------------------------------------------------------------------


@dataclass
class _Chain:
    """A chain under construction: leg ids and the stations they visit."""

    legs: list[int] = field(default_factory=list)
    stations: list[Station] = field(default_factory=list)
    closed: bool = False

    @property
    def start(self) -> Station:
        return self.stations[0]

    @property
    def end(self) -> Station:
        return self.stations[-1]

    def contains(self, station: Station) -> bool:
        return station in self.stations


class _ChainBuilder:
    """Walks the leg graph of one series and groups legs into chains."""

    def __init__(self, legs: list[Leg]) -> None:
        self.legs = legs
        self.visited = [False] * len(legs)
        self.outgoing: dict[Station, list[int]] = defaultdict(list)
        self.incoming: dict[Station, list[int]] = defaultdict(list)
        for leg_id, leg in enumerate(legs):
            self.outgoing[leg.from_station].append(leg_id)
            self.incoming[leg.to_station].append(leg_id)

        self.chains: list[_Chain] = []
        # station -> index of the first chain it was placed on
        self.placed: dict[Station, int] = {}
        self.placement_order: list[Station] = []
        self.components = 0

    def build(self) -> list[_Chain]:
        while (next_start := self._next_start()) is not None:
            leg_id, forward, backward = next_start
            chain = self._start_chain(leg_id)
            if forward:
                self._extend_forward(chain)
            if backward and not chain.closed:
                self._extend_backward(chain)
            self._place(chain)
        return self.chains

    def _next_start(self) -> tuple[int, bool, bool] | None:
        """Pick the leg that starts the next chain and its growth directions."""
        for station in self.placement_order:
            for leg_id in self.outgoing.get(station, []):
                if not self.visited[leg_id]:
                    return leg_id, True, False
            for leg_id in self.incoming.get(station, []):
                if not self.visited[leg_id]:
                    return leg_id, False, True

        for leg_id, done in enumerate(self.visited):
            if not done:
                self.components += 1
                return leg_id, True, True
        return None

    def _start_chain(self, leg_id: int) -> _Chain:
        leg = self.legs[leg_id]
        self.visited[leg_id] = True
        chain = _Chain(legs=[leg_id], stations=[leg.from_station, leg.to_station])
        chain.closed = leg.from_station == leg.to_station
        return chain

    def _extend_forward(self, chain: _Chain) -> None:
        # A rooted chain may start with a leg that already reaches a placed
        # station, in which case it is complete.
        if len(chain.legs) == 1 and chain.end in self.placed and not chain.closed:
            return

        while not chain.closed:
            leg_id = self._pick(self.outgoing.get(chain.end, []), chain, forward=True)
            if leg_id is None:
                return
            far = self.legs[leg_id].to_station
            self.visited[leg_id] = True
            chain.legs.append(leg_id)
            chain.stations.append(far)
            if far == chain.start:
                chain.closed = True
                return
            if far in self.placed:
                return

    def _extend_backward(self, chain: _Chain) -> None:
        if len(chain.legs) == 1 and chain.start in self.placed:
            return

        while not chain.closed:
            leg_id = self._pick(self.incoming.get(chain.start, []), chain, forward=False)
            if leg_id is None:
                return
            far = self.legs[leg_id].from_station
            self.visited[leg_id] = True
            chain.legs.insert(0, leg_id)
            chain.stations.insert(0, far)
            if far == chain.end:
                chain.closed = True
                return
            if far in self.placed:
                return

    def _pick(self, candidates: list[int], chain: _Chain, forward: bool) -> int | None:
        """First unvisited candidate that does not loop back into ``chain``."""
        ring_station = chain.start if forward else chain.end
        for leg_id in candidates:
            if self.visited[leg_id]:
                continue
            leg = self.legs[leg_id]
            far = leg.to_station if forward else leg.from_station
            if chain.contains(far) and far != ring_station:
                logger.debug("Loop back to station %s left for a later chain", far)
                continue
            return leg_id
        return None

    def _place(self, chain: _Chain) -> None:
        index = len(self.chains)
        self.chains.append(chain)
        for station in chain.stations:
            if station not in self.placed:
                self.placed[station] = index
                self.placement_order.append(station)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def _chain_base_name(series: Series, first_leg: Leg) -> str:
    station_name = first_leg.to_station.name
    prefix, _ = split_station_path(station_name)
    if prefix:
        return prefix
    return f"{series.name}-{station_name}"


def _assemble_legs(
    chain: _Chain,
    legs: list[Leg],
    splays: dict[Station, list[Leg]],
) -> list[Leg]:
    """Chain legs in order, with each station's splays before its next leg."""
    result: list[Leg] = []
    emitted: set[Station] = set()
    for station, leg_id in zip(chain.stations, chain.legs, strict=False):
        if station not in emitted:
            result.extend(splay.clone() for splay in splays.pop(station, []))
            emitted.add(station)
        result.append(legs[leg_id].clone())
    if chain.end not in emitted:
        result.extend(splay.clone() for splay in splays.pop(chain.end, []))
    return result


def linearize(series: Series, diagnostics: DiagnosticSink | None = None) -> Series:
    """Rebuild a series as linked chains of legs without branches or loops.

    The input is not modified. A series that is already linearized, a leaf
    series whose legs already run as one unbranched line, or an empty leaf
    series is returned as is. A closed ring is still wrapped as one chain.

    Args:
        series: Leaf series whose regular legs form any graph
        diagnostics: Receives a warning for each disconnected section

    Returns:
        A new series with the same name holding one inner series per chain
        and the links that join them

    Raises:
        LinearizationError: If the series mixes inner series and legs, or
            holds inner series that are not simple chains
        MalformedStationReference: If a regular leg has no to-station, or a
            splay starts at a station no regular leg touches
    """
    if series.inner_series:
        if is_linearized(series):
            return series
        raise LinearizationError(
            "Nested series cannot be converted to linear chains",
            series=series.name,
        )
    if not series.legs:
        return series

    regular: list[Leg] = []
    splays: dict[Station, list[Leg]] = defaultdict(list)
    for leg in series.legs:
        if leg.splay:
            splays[leg.from_station].append(leg)
            continue
        if leg.to_station is None:
            raise MalformedStationReference(
                f"Leg from station '{leg.from_station}' has no to-station",
                series=series.name,
            )
        regular.append(leg)

    surveyed = {leg.from_station for leg in regular}
    surveyed.update(leg.to_station for leg in regular)
    for station in splays:
        if station not in surveyed:
            raise MalformedStationReference(
                f"Splay from station '{station}' is not connected to any leg",
                series=series.name,
            )

    if _is_open_chain(series):
        logger.debug("Series %s is already a linear chain", series.name)
        return series

    builder = _ChainBuilder(regular)
    chains = builder.build()

    output = Series(
        name=series.name,
        survey_date=series.survey_date,
        comment=series.comment,
        length_unit=series.length_unit,
        depth_unit=series.depth_unit,
        bearing_unit=series.bearing_unit,
        gradient_unit=series.gradient_unit,
    )
    output.set_calibration_from(series)

    for idx, chain in enumerate(chains, start=1):
        first_leg = regular[chain.legs[0]]
        inner = Series(
            name=f"{idx}-{_chain_base_name(series, first_leg)}",
            legs=_assemble_legs(chain, regular, splays),
            survey_date=series.survey_date,
            length_unit=series.length_unit,
            depth_unit=series.depth_unit,
            bearing_unit=series.bearing_unit,
            gradient_unit=series.gradient_unit,
        )
        inner.set_calibration_from(series)
        output.add_series(inner)

    for lrud in series.to_station_lruds:
        owner = builder.placed.get(lrud.station)
        target = output.inner_series[owner] if owner is not None else output
        target.to_station_lruds.append(lrud.model_copy())

    _link_chains(output, chains)

    if builder.components > 1:
        report(
            diagnostics,
            Severity.WARNING,
            f"Series contains {builder.components} unconnected sections",
            series=series.name,
        )

    logger.info(
        "Linearized series %s: %d legs into %d chains with %d links",
        series.name,
        len(series.legs),
        len(chains),
        len(output.links),
    )
    return output


def _link_chains(output: Series, chains: list[_Chain]) -> None:
    for idx, chain in enumerate(chains):
        ends = [chain.start]
        if chain.end != chain.start:
            ends.append(chain.end)

        for station in ends:
            other = next(
                (
                    other_idx
                    for other_idx, candidate in enumerate(chains)
                    if other_idx != idx and candidate.contains(station)
                ),
                None,
            )
            if other is None:
                continue

            this_name = output.inner_series[idx].name
            other_name = output.inner_series[other].name
            stn = _station_in(output.inner_series[idx], station)
            candidate_link = SeriesLink(
                series1=this_name, station1=stn, series2=other_name, station2=stn
            )
            if any(link.is_equivalent(candidate_link) for link in output.links):
                continue
            logger.debug(
                "Chain %s linked to %s at station %s", this_name, other_name, stn
            )
            output.links.append(candidate_link)


def _station_in(series: Series, station: Station) -> Station:
    """The station object as recorded on the legs of ``series``."""
    for leg in series.legs:
        if leg.from_station == station:
            return leg.from_station
        if leg.to_station == station:
            return leg.to_station
    return station

