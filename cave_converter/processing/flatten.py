# -*- coding: utf-8 -*-
"""Collapse a survey tree into one series of fully named legs.

Writers for formats without nested series need every leg in one place.
Station names are expanded to their full series path, and every group of
stations joined by links is renamed to the first name in the group, so the
joins are implied by shared names and no links are needed.
"""

from __future__ import annotations

import logging

from cave_converter.constants import STATION_PATH_SEPARATOR
from cave_converter.survey.models import Series
from cave_converter.survey.models import Station
from cave_converter.survey.models import Survey
from cave_converter.survey.models import ToStationLRUD

logger = logging.getLogger(__name__)

FLAT_SERIES_NAME = "root"


def _join(*parts: str) -> str:
    return STATION_PATH_SEPARATOR.join(part for part in parts if part)


class _LinkedNames:
    """Groups of equivalent full station names, keyed case-insensitively."""

    def __init__(self) -> None:
        self._canonical: dict[str, str] = {}

    def add(self, name1: str, name2: str) -> None:
        key1, key2 = name1.casefold(), name2.casefold()
        canon1 = self._canonical.get(key1)
        canon2 = self._canonical.get(key2)
        if canon1 is None and canon2 is None:
            self._canonical[key1] = name1
            self._canonical[key2] = name1
        elif canon2 is None:
            self._canonical[key2] = canon1
        elif canon1 is None:
            self._canonical[key1] = canon2
        elif canon1 != canon2:
            for key, canon in self._canonical.items():
                if canon == canon2:
                    self._canonical[key] = canon1

    def resolve(self, name: str) -> str:
        return self._canonical.get(name.casefold(), name)

    def groups(self) -> dict[str, list[str]]:
        result: dict[str, list[str]] = {}
        for key, canon in self._canonical.items():
            result.setdefault(canon, []).append(key)
        return result


def _collect_links(series: Series, parent_path: str, names: _LinkedNames) -> None:
    path = _join(parent_path, series.name)
    for link in series.links:
        names.add(
            _join(path, link.series1, link.station1.name),
            _join(path, link.series2, link.station2.name),
        )
    for inner in series.inner_series:
        _collect_links(inner, path, names)


def _collect_legs(
    series: Series,
    parent_path: str,
    names: _LinkedNames,
    flat: Series,
    include_splays: bool,
) -> None:
    path = _join(parent_path, series.name)
    for idx in range(series.leg_count()):
        leg = series.get_leg_corrected(idx)
        if leg.splay and not include_splays:
            continue
        leg.from_station = leg.from_station.renamed(
            names.resolve(_join(path, leg.from_station.name))
        )
        if leg.to_station is not None:
            leg.to_station = leg.to_station.renamed(
                names.resolve(_join(path, leg.to_station.name))
            )
        flat.add_leg(leg)

    for lrud in series.to_station_lruds:
        flat.to_station_lruds.append(
            ToStationLRUD(
                station=Station(name=names.resolve(_join(path, lrud.station.name))),
                left=lrud.left,
                right=lrud.right,
                up=lrud.up,
                down=lrud.down,
            )
        )

    for inner in series.inner_series:
        _collect_legs(inner, path, names, flat, include_splays)


def convert_to_single_series(survey: Survey, include_splays: bool = True) -> Series:
    """Build one series holding every leg of ``survey``.

    Legs are copied with calibration applied. The survey is not modified.

    Args:
        survey: Survey to flatten
        include_splays: Copy splay legs as well as regular legs

    Returns:
        A series named ``root`` with fully named stations and no links
    """
    logger.info("Flattening survey series hierarchy...")
    names = _LinkedNames()
    for series in survey.series:
        _collect_links(series, "", names)

    flat = Series(name=FLAT_SERIES_NAME)
    for series in survey.series:
        _collect_legs(series, "", names, flat, include_splays)

    for canonical, members in names.groups().items():
        logger.debug("Linked %s: %s", canonical, ", ".join(members))
    return flat
