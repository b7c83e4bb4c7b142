# -*- coding: utf-8 -*-
"""Turn equates read from survey files into series links.

An equate names two stations by their full series paths. The link is
stored in the innermost series containing both, with series names relative
to that holder, which is where writers expect to find it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from cave_converter.constants import STATION_PATH_SEPARATOR
from cave_converter.enums import Severity
from cave_converter.errors import DiagnosticSink
from cave_converter.errors import EquateResolutionError
from cave_converter.errors import report
from cave_converter.survey.models import Equate
from cave_converter.survey.models import SeriesLink
from cave_converter.survey.models import Station
from cave_converter.survey.models import Survey

logger = logging.getLogger(__name__)


def _split_common_path(
    outer: list[str], inner: list[str]
) -> tuple[list[str], list[str], list[str]]:
    """Split two series paths into their shared prefix and the remainders."""
    common: list[str] = []
    while outer and inner and outer[0].casefold() == inner[0].casefold():
        common.append(outer.pop(0))
        inner.pop(0)
    return common, outer, inner


def link_equate(
    equate: Equate,
    survey: Survey,
    diagnostics: DiagnosticSink | None = None,
) -> SeriesLink:
    """Add a link for one equate to the innermost series holding both ends.

    Raises:
        EquateResolutionError: If the two series share no parent in the
            survey, or the shared parent does not exist
    """
    if len(equate.series1) > len(equate.series2):
        outer_path, outer_stn = equate.series2, equate.station2
        inner_path, inner_stn = equate.series1, equate.station1
    else:
        outer_path, outer_stn = equate.series1, equate.station1
        inner_path, inner_stn = equate.series2, equate.station2

    common, outer_rest, inner_rest = _split_common_path(
        outer_path.split(STATION_PATH_SEPARATOR),
        inner_path.split(STATION_PATH_SEPARATOR),
    )
    if not common:
        raise EquateResolutionError(
            f"Series in equate did not match any series name. "
            f"Series1: '{equate.series1}'. Series2: '{equate.series2}'."
        )

    holder = survey.find_series_by_path(STATION_PATH_SEPARATOR.join(common))
    if holder is None:
        raise EquateResolutionError(
            f"Equate parent series '{'.'.join(common)}' is not in the survey"
        )

    part1 = STATION_PATH_SEPARATOR.join(outer_rest)
    part2 = STATION_PATH_SEPARATOR.join(inner_rest)
    for part in (part1, part2):
        if holder.find_series_by_path(part) is None:
            report(
                diagnostics,
                Severity.WARNING,
                f"Equate refers to series '{part}' which is not in the survey",
                series=holder.name,
            )

    link = holder.add_link(part1, Station(name=outer_stn), part2, Station(name=inner_stn))
    logger.debug(
        "Linked %s.%s to %s.%s in %s", part1, outer_stn, part2, inner_stn, holder.name
    )
    return link


def process_equates(
    equates: Iterable[Equate],
    survey: Survey,
    diagnostics: DiagnosticSink | None = None,
) -> list[SeriesLink]:
    """Convert every equate into a series link. See :func:`link_equate`."""
    links = [link_equate(equate, survey, diagnostics) for equate in equates]
    logger.info("Processed %d equates", len(links))
    return links

