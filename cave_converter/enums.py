# -*- coding: utf-8 -*-
"""Enumerations for the cave survey data model.

This module contains the units a survey can be recorded in, the severity
levels used for diagnostics and the kinds of fixed station positions.
"""

from enum import Enum


class LengthUnit(str, Enum):
    """Unit for distance measurements (legs, LRUD, depths).

    Attributes:
        METRES: Metric metres (canonical storage unit)
        FEET: International feet
        YARDS: Yards (three feet)
    """

    METRES = "metres"
    FEET = "feet"
    YARDS = "yards"

    @classmethod
    def normalize(cls, value: str | None) -> "LengthUnit | None":
        """Match a unit name case-insensitively, accepting US spelling.

        Args:
            value: Unit name such as ``"Metres"``, ``"meters"`` or ``"FEET"``

        Returns:
            The corresponding LengthUnit, or None if value is None

        Raises:
            ValueError: If the unit name is not recognized
        """
        if value is None:
            return None
        normalized = value.strip().lower().replace("meters", "metres")
        for unit in cls:
            if unit.value == normalized:
                return unit
        raise ValueError(f"Unknown length unit: {value!r}")


class BearingUnit(str, Enum):
    """Unit for compass bearings.

    Attributes:
        DEGREES: 360 per full circle (canonical storage unit)
        GRADS: 400 per full circle
        MINUTES: Minutes of arc, 21600 per full circle
    """

    DEGREES = "degrees"
    GRADS = "grads"
    MINUTES = "minutes"


class GradientUnit(str, Enum):
    """Unit for clino (inclination) readings.

    Attributes:
        DEGREES: Degrees from horizontal (canonical storage unit)
        GRADS: Grads from horizontal
        MINUTES: Minutes of arc from horizontal
        PERCENT: Percent grade, ``tan(angle) * 100``
    """

    DEGREES = "degrees"
    GRADS = "grads"
    MINUTES = "minutes"
    PERCENT = "percent"


class Severity(str, Enum):
    """Severity level for diagnostics.

    Attributes:
        ERROR: Data could not be processed
        WARNING: Data was processed with a recoverable problem
        INFO: Informational note about processing
    """

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class FixType(str, Enum):
    """How the position of a fixed station was obtained.

    Attributes:
        NONE: Station is not fixed
        GPS: Position from a satellite receiver
        OTHER: Position from any other source (map, benchmark, ...)
    """

    NONE = "none"
    GPS = "gps"
    OTHER = "other"


class ChangeKind(str, Enum):
    """Kind of structural change announced by a Survey.

    Attributes:
        INSERTED: A series was added at an index
        REMOVED: A series was removed from an index
    """

    INSERTED = "inserted"
    REMOVED = "removed"
