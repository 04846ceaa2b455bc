"""Mapping from log levels to output severity codes."""

import logging
from collections.abc import Callable

from mozlog_json.core.models import Level

# MozLog follows syslog numbering
_MOZLOG_SEVERITY = {
    Level.CRITICAL: 2,
    Level.ERROR: 3,
    Level.WARNING: 4,
    Level.INFO: 6,
    Level.DEBUG: 7,
    Level.TRACE: 7,
}

# https://cloud.google.com/logging/docs/reference/v2/rest/v2/LogEntry#logseverity
_GCP_SEVERITY = {
    Level.CRITICAL: 600,
    Level.ERROR: 500,
    Level.WARNING: 400,
    Level.INFO: 200,
    Level.DEBUG: 100,
    Level.TRACE: 100,
}

_STDLIB_LEVELS = (
    (logging.CRITICAL, Level.CRITICAL),
    (logging.ERROR, Level.ERROR),
    (logging.WARNING, Level.WARNING),
    (logging.INFO, Level.INFO),
    (logging.DEBUG, Level.DEBUG),
)


def level_to_severity(level: Level) -> int:
    """Return the MozLog severity (0-7 scale) for a level."""
    return _MOZLOG_SEVERITY[level]


def level_to_gcp_severity(level: Level) -> int:
    """Return the Google Cloud Logging severity (0-800 scale) for a level."""
    return _GCP_SEVERITY[level]


def severity_mapper(gcp: bool) -> tuple[str, Callable[[Level], int]]:
    """Return the envelope key and mapping function for the output format.

    Args:
        gcp: True for the Google Cloud variant, False for MozLog.

    Returns:
        ``("severity", level_to_gcp_severity)`` in GCP mode, otherwise
        ``("Severity", level_to_severity)``.
    """
    if gcp:
        return "severity", level_to_gcp_severity
    return "Severity", level_to_severity


def level_from_stdlib(levelno: int) -> Level:
    """Map a standard library logging level number to a Level.

    Numbers between two named levels round down to the less severe one;
    anything below DEBUG is TRACE.
    """
    for threshold, level in _STDLIB_LEVELS:
        if levelno >= threshold:
            return level
    return Level.TRACE
