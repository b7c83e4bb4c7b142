# -*- coding: utf-8 -*-
"""Algorithms that restructure or enrich a survey."""

from cave_converter.processing.equates import link_equate
from cave_converter.processing.equates import process_equates
from cave_converter.processing.flatten import convert_to_single_series
from cave_converter.processing.fullpath import split_by_full_path_names
from cave_converter.processing.linearize import is_linearized
from cave_converter.processing.linearize import is_simple_chain
from cave_converter.processing.linearize import linearize
from cave_converter.processing.lrud import generate_lrud
from cave_converter.processing.lrud import generate_series_lrud
from cave_converter.processing.shortnames import ShortNameGenerator
from cave_converter.processing.summary import log_survey_summary

__all__ = [
    "ShortNameGenerator",
    "convert_to_single_series",
    "generate_lrud",
    "generate_series_lrud",
    "is_linearized",
    "is_simple_chain",
    "link_equate",
    "linearize",
    "log_survey_summary",
    "process_equates",
    "split_by_full_path_names",
]
