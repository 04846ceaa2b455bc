"""MozLog JSON encoder for structured log records."""

from mozlog_json.adapters.logging import MozLogHandler
from mozlog_json.core.config import EncoderConfig
from mozlog_json.core.drain import MozLogJson, MozLogJsonBuilder
from mozlog_json.core.errors import EncodeError, IoError, MozLogError
from mozlog_json.core.kv import FnValue, Formatted, KVList, Nested, OwnedKVList, kv
from mozlog_json.core.logger import Logger
from mozlog_json.core.models import Level, Record
from mozlog_json.core.severity import level_to_gcp_severity, level_to_severity

__all__ = [
    "EncodeError",
    "EncoderConfig",
    "FnValue",
    "Formatted",
    "IoError",
    "KVList",
    "Level",
    "Logger",
    "MozLogError",
    "MozLogHandler",
    "MozLogJson",
    "MozLogJsonBuilder",
    "Nested",
    "OwnedKVList",
    "Record",
    "kv",
    "level_to_gcp_severity",
    "level_to_severity",
]

__version__ = "0.1.0"
