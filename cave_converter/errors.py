# -*- coding: utf-8 -*-
"""Error handling for survey processing.

This module provides a diagnostic record for problems found while
restructuring survey data, a sink protocol the algorithms report through,
and the exception hierarchy raised for data that cannot be processed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field
from typing import Protocol

from cave_converter.enums import Severity

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    Severity.ERROR: logging.ERROR,
    Severity.WARNING: logging.WARNING,
    Severity.INFO: logging.INFO,
}


@dataclass(frozen=True)
class Diagnostic:
    """Represents a processing error, warning or note.

    This is a data record for storing diagnostic information, not an
    exception. Use the CaveSurveyError subclasses for raising errors.

    Attributes:
        severity: ERROR, WARNING or INFO
        message: Human-readable message
        series: Name of the series being processed (optional)
    """

    severity: Severity
    message: str
    series: str | None = None

    def __str__(self) -> str:
        """Format as human-readable diagnostic string."""
        base = f"{self.severity.value}: {self.message}"
        if self.series:
            base += f" (in series {self.series})"
        return base


class DiagnosticSink(Protocol):
    """Protocol for anything that accepts diagnostics."""

    def report(self, diagnostic: Diagnostic) -> None: ...


@dataclass
class DiagnosticLog:
    """Collects diagnostics and forwards each one to the logger."""

    diagnostics: list[Diagnostic] = field(default_factory=list)

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        logger.log(_LOG_LEVELS[diagnostic.severity], "%s", diagnostic)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.WARNING]

    def __len__(self) -> int:
        return len(self.diagnostics)


def report(
    sink: DiagnosticSink | None,
    severity: Severity,
    message: str,
    series: str | None = None,
) -> None:
    """Send a diagnostic to ``sink``, or only log it when there is no sink."""
    diagnostic = Diagnostic(severity=severity, message=message, series=series)
    if sink is None:
        logger.log(_LOG_LEVELS[severity], "%s", diagnostic)
        return
    sink.report(diagnostic)


class CaveSurveyError(Exception):
    """Base exception for survey data that cannot be processed.

    Attributes:
        message: Error message
        series: Name of the series being processed (optional)
    """

    severity: Severity = Severity.ERROR

    def __init__(self, message: str, series: str | None = None):
        self.message = message
        self.series = series
        super().__init__(str(self))

    def __str__(self) -> str:
        """Format as human-readable exception string."""
        if self.series:
            return f"{self.message} (in series {self.series})"
        return self.message

    def to_error(self) -> Diagnostic:
        """Convert exception to a Diagnostic record."""
        return Diagnostic(
            severity=self.severity,
            message=self.message,
            series=self.series,
        )


class MalformedStationReference(CaveSurveyError):  # noqa: N818
    """A leg refers to a station that is empty or not part of the network."""


class ShortNameExhausted(CaveSurveyError):  # noqa: N818
    """No unique short name could be generated for a long name."""


class UnresolvedCrossSeriesName(CaveSurveyError):  # noqa: N818
    """A leg joins two series by full-path name and needs an equate.

    Reported as a warning by the full-path splitter rather than raised.
    """

    severity = Severity.WARNING


class LinearizationError(CaveSurveyError):
    """A series has a shape the linearization engine does not accept."""


class EquateResolutionError(CaveSurveyError):
    """An equate names a series that does not exist in the survey."""
