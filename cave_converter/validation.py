# -*- coding: utf-8 -*-
"""Validation utilities for survey station names."""

from cave_converter.constants import STATION_PATH_SEPARATOR


def is_valid_station_name(name: str) -> bool:
    """Check if a station name is valid.

    Valid station names contain at least one non-whitespace character.
    Formats disagree on everything else (length, allowed punctuation), so
    those limits are left to the writers.

    Args:
        name: Station name to validate

    Returns:
        True if valid, False otherwise
    """
    if not name:
        return False
    return not name.isspace()


def validate_station_name(name: str) -> str:
    """Validate a station name, raising an error if invalid.

    Args:
        name: Station name to validate

    Returns:
        The name unchanged, so this can be used as a pydantic validator

    Raises:
        ValueError: If the station name is invalid
    """
    if not is_valid_station_name(name):
        msg = f"Invalid station name: {name!r}"
        raise ValueError(msg)
    return name


def split_station_path(name: str) -> tuple[str, str]:
    """Split ``series.path.station`` at the last separator.

    Returns:
        ``(series_path, station)``; the series path is empty when the name
        has no separator.
    """
    prefix, sep, station = name.rpartition(STATION_PATH_SEPARATOR)
    if not sep:
        return "", name
    return prefix, station


def split_series_prefix(name: str) -> tuple[str, str]:
    """Split ``series.rest`` at the first separator.

    Returns:
        ``(series, rest)``; the series is empty when the name has no
        separator.
    """
    series, sep, rest = name.partition(STATION_PATH_SEPARATOR)
    if not sep:
        return "", name
    return series, rest
