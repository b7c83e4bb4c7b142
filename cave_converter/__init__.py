# -*- coding: utf-8 -*-
"""Cave Converter core library.

The survey data model and the algorithms used when converting cave survey
data between formats: decomposing series into linear chains, splitting
series by full-path station names, generating LRUD data from splays and
assigning short series names.

Usage:
    from cave_converter import Leg, Series, Station, Survey, linearize

    series = Series(name="entrance")
    series.add_leg(
        Leg(
            from_station=Station(name="1"),
            to_station=Station(name="2"),
            length=5.0,
            compass=90.0,
            clino=-3.0,
        )
    )
    chains = linearize(series)
    for chain in chains.inner_series or [chains]:
        print(chain.name, chain.leg_count())
"""

__version__ = "0.1.0"

# Constants
from cave_converter.constants import FEET_PER_METRE
from cave_converter.constants import LRUD_SPECIAL_FLAG

# Enums
from cave_converter.enums import BearingUnit
from cave_converter.enums import ChangeKind
from cave_converter.enums import FixType
from cave_converter.enums import GradientUnit
from cave_converter.enums import LengthUnit
from cave_converter.enums import Severity
from cave_converter.errors import CaveSurveyError
from cave_converter.errors import Diagnostic
from cave_converter.errors import DiagnosticLog
from cave_converter.errors import DiagnosticSink
from cave_converter.errors import EquateResolutionError
from cave_converter.errors import LinearizationError
from cave_converter.errors import MalformedStationReference
from cave_converter.errors import ShortNameExhausted
from cave_converter.errors import UnresolvedCrossSeriesName
from cave_converter.processing import ShortNameGenerator
from cave_converter.processing import convert_to_single_series
from cave_converter.processing import generate_lrud
from cave_converter.processing import generate_series_lrud
from cave_converter.processing import linearize
from cave_converter.processing import log_survey_summary
from cave_converter.processing import process_equates
from cave_converter.processing import split_by_full_path_names
from cave_converter.survey import Equate
from cave_converter.survey import Leg
from cave_converter.survey import Series
from cave_converter.survey import SeriesLink
from cave_converter.survey import Station
from cave_converter.survey import Survey
from cave_converter.survey import SurveyTreeAdapter
from cave_converter.survey import ToStationLRUD
from cave_converter.units import bearing_from_degrees
from cave_converter.units import bearing_to_degrees
from cave_converter.units import gradient_from_degrees
from cave_converter.units import gradient_to_degrees
from cave_converter.units import length_from_metres
from cave_converter.units import length_to_metres

__all__ = [
    "FEET_PER_METRE",
    "LRUD_SPECIAL_FLAG",
    "BearingUnit",
    "CaveSurveyError",
    "ChangeKind",
    "Diagnostic",
    "DiagnosticLog",
    "DiagnosticSink",
    "Equate",
    "EquateResolutionError",
    "FixType",
    "GradientUnit",
    "Leg",
    "LengthUnit",
    "LinearizationError",
    "MalformedStationReference",
    "Series",
    "SeriesLink",
    "Severity",
    "ShortNameExhausted",
    "ShortNameGenerator",
    "Station",
    "Survey",
    "SurveyTreeAdapter",
    "ToStationLRUD",
    "UnresolvedCrossSeriesName",
    "__version__",
    "bearing_from_degrees",
    "bearing_to_degrees",
    "convert_to_single_series",
    "generate_lrud",
    "generate_series_lrud",
    "gradient_from_degrees",
    "gradient_to_degrees",
    "length_from_metres",
    "length_to_metres",
    "linearize",
    "log_survey_summary",
    "process_equates",
    "split_by_full_path_names",
]
