"""Core domain models for log events."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from mozlog_json.core.kv import KVList


class Level(IntEnum):
    """Log level, most severe first."""

    CRITICAL = 1
    ERROR = 2
    WARNING = 3
    INFO = 4
    DEBUG = 5
    TRACE = 6


@dataclass(frozen=True)
class Record:
    """A single log event as handed to a drain.

    Attributes:
        level: Severity of the event.
        msg: The message, or a %-style template when ``args`` is non-empty.
        args: Arguments for the message template, rendered lazily.
        kv: Call-site key-value pairs.
    """

    level: Level
    msg: str
    args: tuple[Any, ...] = ()
    kv: KVList = field(default_factory=KVList)
