# -*- coding: utf-8 -*-
"""Log an outline of a survey's series tree."""

from __future__ import annotations

import logging

from cave_converter.survey.models import Series
from cave_converter.survey.models import Survey

logger = logging.getLogger(__name__)


def describe_series(series: Series, parent_path: str = "") -> list[str]:
    """One line per series: its path, leg count and child series count."""
    path = f"{parent_path}{series.name}"
    line = f"Series: {path}"
    if series.leg_count():
        line += f" ({series.leg_count()} legs)"
    if series.inner_series_count():
        line += f" (contains {series.inner_series_count()} child series)"

    lines = [line]
    for inner in series.inner_series:
        lines.extend(describe_series(inner, f"{path}/"))
    return lines


def log_survey_summary(survey: Survey, level: int = logging.DEBUG) -> list[str]:
    """Write the survey outline to the log and return its lines."""
    lines = [f"Survey contains {survey.series_count()} top level series."]
    for series in survey.series:
        lines.extend(describe_series(series))
    for line in lines:
        logger.log(level, "%s", line)
    return lines
