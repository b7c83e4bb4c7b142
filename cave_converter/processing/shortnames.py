# -*- coding: utf-8 -*-
"""Unique four character series identifiers for fixed-width formats.

Compass survey files identify each survey with a short name. Long series
names are reduced to four characters, trying progressively more mangled
forms until one has not been used yet in the current conversion:

1. The first four characters of the last dotted segment of the name
2. The same with vowels removed
3. The first three characters of (2) followed by a digit 1-9
4. The first two characters of (2) followed by a number 01-99

Every candidate is left padded to four characters and names are compared
ignoring case.
"""

from __future__ import annotations

import logging

from cave_converter.constants import SHORT_NAME_LENGTH
from cave_converter.constants import SHORT_NAME_MAX_ATTEMPTS
from cave_converter.constants import SHORT_NAME_PAD
from cave_converter.constants import SHORT_NAME_VOWELS
from cave_converter.constants import STATION_PATH_SEPARATOR
from cave_converter.errors import ShortNameExhausted
from cave_converter.survey.models import Survey

logger = logging.getLogger(__name__)

_SINGLE_DIGIT_ATTEMPTS = 9


def _last_segment(name: str) -> str:
    idx = name.rfind(STATION_PATH_SEPARATOR)
    if -1 < idx < len(name) - 1:
        return name[idx + 1 :]
    return name


def _reduce(text: str, drop: str = "") -> str:
    """First characters of ``text`` that are not dots or in ``drop``."""
    kept = [c for c in text if c != STATION_PATH_SEPARATOR and c not in drop]
    return "".join(kept[:SHORT_NAME_LENGTH])


def candidate_names(name: str):
    """Yield the short name candidates for ``name`` in the order tried."""
    segment = _last_segment(name)
    yield _reduce(segment)

    reduced = _reduce(segment, drop=SHORT_NAME_VOWELS)
    yield reduced

    for n in range(1, _SINGLE_DIGIT_ATTEMPTS + 1):
        yield f"{reduced[:3]}{n}"

    for n in range(1, SHORT_NAME_MAX_ATTEMPTS - _SINGLE_DIGIT_ATTEMPTS - 1):
        yield f"{reduced[:2]}{n:02d}"


def _fit(candidate: str) -> str:
    return candidate.rjust(SHORT_NAME_LENGTH, SHORT_NAME_PAD)[-SHORT_NAME_LENGTH:]


class ShortNameGenerator:
    """Assigns short names, unique within one conversion run.

    Create one generator per output file so names from an earlier run do
    not block names in the next one.
    """

    def __init__(self) -> None:
        self._names: list[str] = []
        self._used: set[str] = set()

    def assign(self, name: str) -> str:
        """Generate, record and return the short name for ``name``.

        Raises:
            ShortNameExhausted: If every candidate is already taken
        """
        for attempt, candidate in enumerate(candidate_names(name), start=1):
            short = _fit(candidate)
            if short.isspace() or short.casefold() in self._used:
                continue
            self._used.add(short.casefold())
            self._names.append(short)
            logger.debug("Short name %r for %s (attempt %d)", short, name, attempt)
            return short

        raise ShortNameExhausted(
            f"Failed to generate unique short name for series name: {name}"
        )

    def assign_all(self, survey: Survey) -> list[str]:
        """Assign short names to every top-level series of ``survey``."""
        return [self.assign(series.name) for series in survey.series]

    def short_name(self, index: int) -> str:
        """Short name assigned at position ``index`` in this run."""
        return self._names[index]

    def __len__(self) -> int:
        return len(self._names)
