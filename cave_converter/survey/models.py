# -*- coding: utf-8 -*-
"""Survey network data models.

This module contains Pydantic models for representing a cave survey:
- Station: A named survey point (immutable value object)
- Leg: A measured shot between two stations, or a splay from one
- SeriesLink: Declares that stations in two series are the same point
- ToStationLRUD: Passage dimensions for a station only reached as a to-station
- Series: An ordered set of legs plus nested series, links and calibration
- Survey: The ordered top-level series of a cave
- Equate: A pair of fully-qualified station references read from a file

All measurements are stored in canonical units:
- Length/LRUD/depths: metres
- Compass/clino/calibrations: degrees

Values in other units are read and written through the ``get_*`` and
``set_*`` methods.
"""

from __future__ import annotations

import datetime  # noqa: TC003
import logging
import math
from collections.abc import Iterator
from typing import Protocol

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import PrivateAttr
from pydantic import field_validator

from cave_converter.constants import LRUD_SPECIAL_FLAG
from cave_converter.constants import STATION_PATH_SEPARATOR
from cave_converter.constants import UNSET_CLINO
from cave_converter.constants import UNSET_COMPASS
from cave_converter.constants import UNSET_LENGTH
from cave_converter.enums import BearingUnit
from cave_converter.enums import ChangeKind
from cave_converter.enums import FixType
from cave_converter.enums import GradientUnit
from cave_converter.enums import LengthUnit
from cave_converter.errors import MalformedStationReference
from cave_converter.units import bearing_from_degrees
from cave_converter.units import bearing_to_degrees
from cave_converter.units import gradient_from_degrees
from cave_converter.units import gradient_to_degrees
from cave_converter.units import length_from_metres
from cave_converter.units import length_to_metres
from cave_converter.validation import split_station_path
from cave_converter.validation import validate_station_name

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Stations
# ---------------------------------------------------------------------------


class Station(BaseModel):
    """A named survey station.

    Stations are values: two stations with the same name (ignoring case) are
    equal and hash identically regardless of their other attributes. Use
    :meth:`renamed` to get a station with a different name.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    comment: str = ""
    entrance: bool = False
    fix_type: FixType = FixType.NONE
    easting: float = 0.0
    northing: float = 0.0
    altitude: float = 0.0

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return validate_station_name(value)

    @property
    def key(self) -> str:
        """Case-insensitive identity of the station."""
        return self.name.casefold()

    @property
    def is_fixed(self) -> bool:
        return self.fix_type != FixType.NONE

    def renamed(self, name: str) -> Station:
        return self.model_copy(update={"name": validate_station_name(name)})

    def with_fix(
        self,
        fix_type: FixType,
        easting: float,
        northing: float,
        altitude: float,
    ) -> Station:
        return self.model_copy(
            update={
                "fix_type": fix_type,
                "easting": easting,
                "northing": northing,
                "altitude": altitude,
            }
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Station):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return self.name


# ---------------------------------------------------------------------------
# Legs
# ---------------------------------------------------------------------------


class Leg(BaseModel):
    """A single survey leg.

    A regular leg joins ``from_station`` to ``to_station``. A splay is a
    radial shot from ``from_station`` to a wall or feature and may have no
    to-station. LRUD values describe the passage at the from-station.

    Diving legs record depths instead of a clino. When only the change in
    depth is known, ``from_depth`` is None and ``to_depth`` holds the change.
    """

    model_config = ConfigDict(validate_assignment=True)

    from_station: Station
    to_station: Station | None = None
    length: float = UNSET_LENGTH
    compass: float = UNSET_COMPASS
    clino: float = UNSET_CLINO
    left: float = 0.0
    right: float = 0.0
    up: float = 0.0
    down: float = 0.0
    from_depth: float | None = None
    to_depth: float | None = None
    comment: str = ""
    splay: bool = False
    duplicate: bool = False
    surface: bool = False
    diving: bool = False
    nosurvey: bool = False

    # -- Units ---------------------------------------------------------------

    def get_length(self, unit: LengthUnit = LengthUnit.METRES) -> float:
        return length_from_metres(self.length, unit)

    def set_length(self, value: float, unit: LengthUnit = LengthUnit.METRES) -> None:
        self.length = length_to_metres(value, unit)

    def get_compass(self, unit: BearingUnit = BearingUnit.DEGREES) -> float:
        return bearing_from_degrees(self.compass, unit)

    def set_compass(
        self, value: float, unit: BearingUnit = BearingUnit.DEGREES
    ) -> None:
        self.compass = bearing_to_degrees(value, unit)

    def get_clino(self, unit: GradientUnit = GradientUnit.DEGREES) -> float:
        return gradient_from_degrees(self.clino, unit)

    def set_clino(
        self, value: float, unit: GradientUnit = GradientUnit.DEGREES
    ) -> None:
        self.clino = gradient_to_degrees(value, unit)

    def get_lrud(
        self, unit: LengthUnit = LengthUnit.METRES
    ) -> tuple[float, float, float, float]:
        """Return ``(left, right, up, down)`` in ``unit``."""
        return (
            length_from_metres(self.left, unit),
            length_from_metres(self.right, unit),
            length_from_metres(self.up, unit),
            length_from_metres(self.down, unit),
        )

    def set_lrud(
        self,
        left: float,
        right: float,
        up: float,
        down: float,
        unit: LengthUnit = LengthUnit.METRES,
    ) -> None:
        self.left = length_to_metres(left, unit)
        self.right = length_to_metres(right, unit)
        self.up = length_to_metres(up, unit)
        self.down = length_to_metres(down, unit)

    # -- Diving --------------------------------------------------------------

    @property
    def is_depth_change_leg(self) -> bool:
        return self.diving and self.from_depth is None

    def set_depths(
        self,
        from_depth: float,
        to_depth: float,
        unit: LengthUnit = LengthUnit.METRES,
    ) -> None:
        """Record station depths, making this a diving leg."""
        self.from_depth = length_to_metres(from_depth, unit)
        self.to_depth = length_to_metres(to_depth, unit)
        self.diving = True
        self.nosurvey = False

    def set_depth_change(
        self, change: float, unit: LengthUnit = LengthUnit.METRES
    ) -> None:
        """Record only the change in depth, making this a diving leg."""
        self.from_depth = None
        self.to_depth = length_to_metres(change, unit)
        self.diving = True
        self.nosurvey = False

    def get_depth_change(
        self, unit: LengthUnit = LengthUnit.METRES
    ) -> float | None:
        if self.to_depth is None:
            return None
        if self.from_depth is None:
            return length_from_metres(self.to_depth, unit)
        return length_from_metres(self.to_depth - self.from_depth, unit)

    # -- Geometry ------------------------------------------------------------

    @property
    def is_zero_length(self) -> bool:
        """True for legs that only state two stations are the same point."""
        return self.length == 0

    @property
    def horizontal_length(self) -> float:
        return abs(self.length * math.cos(math.radians(self.clino)))

    @property
    def vertical_length(self) -> float:
        return abs(self.length * math.sin(math.radians(self.clino)))

    def reverse_direction(self) -> None:
        """Swap the stations and turn the measurements round to match."""
        if self.to_station is None:
            raise ValueError(f"Cannot reverse leg without a to-station: {self}")

        self.from_station, self.to_station = self.to_station, self.from_station
        if self.compass >= 0:
            if self.compass > 180:
                self.compass -= 180
            else:
                self.compass += 180

        if self.diving:
            if self.is_depth_change_leg:
                if self.to_depth is not None:
                    self.to_depth = -self.to_depth
            else:
                self.from_depth, self.to_depth = self.to_depth, self.from_depth
        else:
            self.from_depth = None
            self.to_depth = None

        if self.clino != UNSET_CLINO:
            self.clino = -self.clino

    def clone(self) -> Leg:
        return self.model_copy(deep=True)

    def __str__(self) -> str:
        if self.to_station is None:
            return self.from_station.name
        return f"{self.from_station.name} - {self.to_station.name}"


# ---------------------------------------------------------------------------
# Links and LRUD records
# ---------------------------------------------------------------------------


class SeriesLink(BaseModel):
    """Two stations in two series that are the same physical point.

    Series names are relative to the series holding the link; an empty
    name refers to the holding series itself.
    """

    model_config = ConfigDict(validate_assignment=True)

    series1: str
    station1: Station
    series2: str
    station2: Station

    def is_equivalent(self, other: SeriesLink) -> bool:
        """True if ``other`` joins the same two stations, in either order."""
        ends = {
            (self.series1.casefold(), self.station1),
            (self.series2.casefold(), self.station2),
        }
        other_ends = {
            (other.series1.casefold(), other.station1),
            (other.series2.casefold(), other.station2),
        }
        return ends == other_ends

    def rename_series(self, old_name: str, new_name: str) -> None:
        old = old_name.casefold()
        if self.series1.casefold() == old:
            self.series1 = new_name
        if self.series2.casefold() == old:
            self.series2 = new_name


class ToStationLRUD(BaseModel):
    """Passage dimensions (metres) at a station that starts no leg."""

    station: Station
    left: float = 0.0
    right: float = 0.0
    up: float = 0.0
    down: float = 0.0


# ---------------------------------------------------------------------------
# Series
# ---------------------------------------------------------------------------


class Series(BaseModel):
    """A survey series.

    Holds an ordered list of legs, nested series, links between stations of
    its nested series, the instrument calibration of the survey trip and the
    units the data was recorded in. Containment is a tree: a series may not
    be added inside itself or one of its own descendants.
    """

    name: str
    legs: list[Leg] = Field(default_factory=list)
    inner_series: list[Series] = Field(default_factory=list)
    links: list[SeriesLink] = Field(default_factory=list)
    to_station_lruds: list[ToStationLRUD] = Field(default_factory=list)
    tape_calibration: float = 0.0
    compass_calibration: float = 0.0
    clino_calibration: float = 0.0
    clino_scale_factor: float = 1.0
    declination: float = 0.0
    length_unit: LengthUnit = LengthUnit.METRES
    depth_unit: LengthUnit = LengthUnit.METRES
    bearing_unit: BearingUnit = BearingUnit.DEGREES
    gradient_unit: GradientUnit = GradientUnit.DEGREES
    survey_date: datetime.date | None = None
    comment: str = ""

    _station_name_cache: list[str] = PrivateAttr(default_factory=list)

    # -- Legs ----------------------------------------------------------------

    def add_leg(self, leg: Leg) -> None:
        self.legs.append(leg)

    def insert_leg(self, index: int, leg: Leg) -> None:
        self.legs.insert(index, leg)

    def remove_leg(self, index: int) -> Leg:
        return self.legs.pop(index)

    def leg_count(self) -> int:
        return len(self.legs)

    def get_leg_raw(self, index: int) -> Leg:
        return self.legs[index]

    def get_leg_corrected(self, index: int) -> Leg:
        """Return a copy of a leg with instrument calibration applied.

        Tape calibration is subtracted from the length. Compass calibration
        and declination are subtracted from valid bearings, and clino
        calibration is removed from valid clinos before scaling. LRUD values
        are estimates and are left alone.
        """
        original = self.legs[index]
        corrected = original.clone()
        corrected.length = original.length - self.tape_calibration
        if 0 <= original.compass <= 360:
            corrected.compass = original.compass - (
                self.compass_calibration + self.declination
            )
        if -90 <= original.clino <= 180:
            corrected.clino = (
                original.clino - self.clino_calibration
            ) * self.clino_scale_factor
        return corrected

    def remove_splays_used_for_lrud(self) -> int:
        """Delete splays flagged as consumed by LRUD generation.

        Returns:
            Number of legs removed
        """
        before = len(self.legs)
        self.legs = [
            leg
            for leg in self.legs
            if not (leg.splay and leg.down == LRUD_SPECIAL_FLAG)
        ]
        return before - len(self.legs)

    # -- Inner series --------------------------------------------------------

    def add_series(self, series: Series) -> None:
        self._check_can_contain(series)
        self.inner_series.append(series)

    def insert_series(self, index: int, series: Series) -> None:
        self._check_can_contain(series)
        self.inner_series.insert(index, series)

    def remove_series(self, index: int) -> Series:
        return self.inner_series.pop(index)

    def get_inner_series(self, index: int) -> Series:
        return self.inner_series[index]

    def inner_series_count(self) -> int:
        return len(self.inner_series)

    def find_inner_series_by_name(self, name: str) -> Series | None:
        wanted = name.casefold()
        for series in self.inner_series:
            if series.name.casefold() == wanted:
                return series
        return None

    def find_series_by_path(self, path: str) -> Series | None:
        """Find a descendant by a dotted path relative to this series."""
        if not path:
            return self
        current: Series | None = self
        for part in path.split(STATION_PATH_SEPARATOR):
            current = current.find_inner_series_by_name(part)
            if current is None:
                return None
        return current

    def get_index_of_child(self, child: Series | Leg) -> int:
        """Position of ``child`` in tree order: inner series first, then legs.

        Returns -1 when ``child`` is not a direct child of this series.
        """
        for idx, series in enumerate(self.inner_series):
            if series is child:
                return idx
        for idx, leg in enumerate(self.legs):
            if leg is child:
                return len(self.inner_series) + idx
        return -1

    def rename_inner_series(self, old_name: str, new_name: str) -> Series:
        """Rename a child series and the links that refer to it."""
        child = self.find_inner_series_by_name(old_name)
        if child is None:
            raise KeyError(f"No series named '{old_name}' in '{self.name}'")
        child.name = new_name
        for link in self.links:
            link.rename_series(old_name, new_name)
        logger.debug("Renamed series %s to %s in %s", old_name, new_name, self.name)
        return child

    def contains_series(self, series: Series) -> bool:
        """True if ``series`` is this series or nested anywhere inside it."""
        return any(node is series for node in self.walk())

    def walk(self) -> Iterator[Series]:
        """Yield this series and all nested series depth first."""
        yield self
        for series in self.inner_series:
            yield from series.walk()

    def _check_can_contain(self, series: Series) -> None:
        if series.contains_series(self):
            raise ValueError(
                f"Series '{series.name}' cannot be nested inside '{self.name}': "
                "it would contain itself"
            )

    # -- Links ---------------------------------------------------------------

    def add_link(
        self,
        series1: str,
        station1: Station,
        series2: str,
        station2: Station,
    ) -> SeriesLink:
        link = SeriesLink(
            series1=series1,
            station1=station1,
            series2=series2,
            station2=station2,
        )
        self.links.append(link)
        return link

    # -- Calibration ---------------------------------------------------------

    def get_tape_calibration(self, unit: LengthUnit = LengthUnit.METRES) -> float:
        return length_from_metres(self.tape_calibration, unit)

    def set_tape_calibration(
        self, value: float, unit: LengthUnit = LengthUnit.METRES
    ) -> None:
        self.tape_calibration = length_to_metres(value, unit)

    def get_compass_calibration(
        self, unit: BearingUnit = BearingUnit.DEGREES
    ) -> float:
        return bearing_from_degrees(self.compass_calibration, unit)

    def set_compass_calibration(
        self, value: float, unit: BearingUnit = BearingUnit.DEGREES
    ) -> None:
        self.compass_calibration = bearing_to_degrees(value, unit)

    def get_clino_calibration(
        self, unit: GradientUnit = GradientUnit.DEGREES
    ) -> float:
        return gradient_from_degrees(self.clino_calibration, unit)

    def set_clino_calibration(
        self,
        value: float,
        unit: GradientUnit = GradientUnit.DEGREES,
        scale_factor: float = 1.0,
    ) -> None:
        self.clino_calibration = gradient_to_degrees(value, unit)
        self.clino_scale_factor = scale_factor

    def set_calibration_from(self, other: Series) -> None:
        """Copy declination and instrument calibrations from ``other``."""
        self.declination = other.declination
        self.tape_calibration = other.tape_calibration
        self.compass_calibration = other.compass_calibration
        self.clino_calibration = other.clino_calibration
        self.clino_scale_factor = other.clino_scale_factor

    # -- Station numbering ---------------------------------------------------

    def station_number(self, name: str) -> int:
        """Number representing ``name`` for formats without text names.

        Names written as a plain non-negative integer map to their own value.
        Every other name, including negative numbers, maps to a negative
        number unique within this series, assigned on first use.
        """
        try:
            number = int(name)
        except ValueError:
            number = -1
        if number >= 0 and str(number) == name:
            return number

        wanted = name.casefold()
        for idx, cached in enumerate(self._station_name_cache):
            if cached.casefold() == wanted:
                return -(idx + 1)
        self._station_name_cache.append(name)
        return -len(self._station_name_cache)

    def station_name_for_number(self, number: int) -> str:
        """Reverse of :meth:`station_number`."""
        if number < 0:
            return self._station_name_cache[abs(number) - 1]
        return str(number)

    def __str__(self) -> str:
        return self.name


# ---------------------------------------------------------------------------
# Survey
# ---------------------------------------------------------------------------


class SurveyChangeListener(Protocol):
    """Protocol for structural change callbacks."""

    def __call__(self, survey: Survey, kind: ChangeKind, index: int) -> None: ...


class Survey(BaseModel):
    """A cave survey: an ordered list of top-level series.

    Adding or removing top-level series notifies subscribed listeners so a
    presentation layer can refresh. Changes deeper in the tree are not
    announced.
    """

    name: str = ""
    series: list[Series] = Field(default_factory=list)

    _listeners: list[SurveyChangeListener] = PrivateAttr(default_factory=list)

    def subscribe(self, listener: SurveyChangeListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: SurveyChangeListener) -> None:
        self._listeners.remove(listener)

    def _notify(self, kind: ChangeKind, index: int) -> None:
        for listener in list(self._listeners):
            listener(self, kind, index)

    def add_series(self, series: Series) -> None:
        self.series.append(series)
        self._notify(ChangeKind.INSERTED, len(self.series) - 1)

    def insert_series(self, index: int, series: Series) -> None:
        self.series.insert(index, series)
        position = next(i for i, s in enumerate(self.series) if s is series)
        self._notify(ChangeKind.INSERTED, position)

    def remove_series(self, index: int) -> Series:
        removed = self.series.pop(index)
        self._notify(ChangeKind.REMOVED, index)
        return removed

    def get_series(self, index: int) -> Series:
        return self.series[index]

    def series_count(self) -> int:
        return len(self.series)

    def is_empty(self) -> bool:
        return not self.series

    def find_series_by_name(self, name: str) -> Series | None:
        wanted = name.casefold()
        for series in self.series:
            if series.name.casefold() == wanted:
                return series
        return None

    def find_series_by_path(self, path: str) -> Series | None:
        """Find a series by its dotted path from the top level."""
        top, _, rest = path.partition(STATION_PATH_SEPARATOR)
        series = self.find_series_by_name(top)
        if series is None:
            return None
        return series.find_series_by_path(rest)

    def walk(self) -> Iterator[Series]:
        """Yield every series in the survey depth first."""
        for series in self.series:
            yield from series.walk()

    def leg_count(self) -> int:
        return sum(series.leg_count() for series in self.walk())


# ---------------------------------------------------------------------------
# Equates
# ---------------------------------------------------------------------------


class Equate(BaseModel):
    """Two fully-qualified station references that are the same point.

    Series paths are dotted paths from the top of the survey. Use
    :meth:`from_references` to build one from a series prefix and a station
    name that may itself contain further path segments.
    """

    model_config = ConfigDict(frozen=True)

    series1: str
    station1: str
    series2: str
    station2: str

    @classmethod
    def from_references(
        cls,
        prefix1: str,
        station1: str,
        prefix2: str,
        station2: str,
    ) -> Equate:
        series1, name1 = cls._resplit(prefix1, station1)
        series2, name2 = cls._resplit(prefix2, station2)
        return cls(series1=series1, station1=name1, series2=series2, station2=name2)

    @staticmethod
    def _resplit(prefix: str, station: str) -> tuple[str, str]:
        full = f"{prefix}{STATION_PATH_SEPARATOR}{station}" if prefix else station
        series, name = split_station_path(full)
        if not series or not name:
            raise MalformedStationReference(
                f"Equate reference '{full}' does not contain a series and station"
            )
        return series, name
