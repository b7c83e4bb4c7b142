# -*- coding: utf-8 -*-
"""Survey network model and its tree view."""

from cave_converter.survey.models import Equate
from cave_converter.survey.models import Leg
from cave_converter.survey.models import Series
from cave_converter.survey.models import SeriesLink
from cave_converter.survey.models import Station
from cave_converter.survey.models import Survey
from cave_converter.survey.models import SurveyChangeListener
from cave_converter.survey.models import ToStationLRUD
from cave_converter.survey.tree import SurveyTreeAdapter

__all__ = [
    "Equate",
    "Leg",
    "Series",
    "SeriesLink",
    "Station",
    "Survey",
    "SurveyChangeListener",
    "SurveyTreeAdapter",
    "ToStationLRUD",
]
