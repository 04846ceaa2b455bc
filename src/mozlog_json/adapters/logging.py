"""Python logging handler adapter for mozlog_json.

This adapter bridges Python's standard library logging module to a
DrainPort, so records logged through ``logging`` are written as MozLog JSON.
"""

import logging
import traceback
from typing import Any

from mozlog_json.core.kv import KVList, OwnedKVList
from mozlog_json.core.models import Record
from mozlog_json.core.ports import DrainPort
from mozlog_json.core.severity import level_from_stdlib

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)


class MozLogHandler(logging.Handler):
    """Logging handler that writes log records through a MozLog drain.

    Example:
        ```python
        import sys
        from mozlog_json import MozLogHandler, MozLogJson, kv

        drain = MozLogJson.new(sys.stdout).logger_name("svc").build()
        handler = MozLogHandler(drain, values=kv(version="1.2.0"))
        logging.getLogger().addHandler(handler)
        ```
    """

    def __init__(
        self,
        drain: DrainPort,
        values: KVList | OwnedKVList | None = None,
        include_attrs: list[str] | None = None,
    ) -> None:
        """Initialize the handler with a drain.

        Args:
            drain: Drain implementing DrainPort.
            values: Logger context written into every record's Fields.
            include_attrs: LogRecord attributes to add to Fields, any of
                "logger", "module", "funcName", "lineno", "pathname".
                Defaults to none.
        """
        super().__init__()
        self._drain = drain
        if isinstance(values, KVList):
            values = OwnedKVList(values)
        self._values = values if values is not None else OwnedKVList()
        self._include_attrs = include_attrs or []

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record through the drain.

        Encoding and sink errors propagate to the logging call.

        Args:
            record: The log record to emit.
        """
        # Map of attribute names to their values from LogRecord
        attr_mapping: dict[str, Any] = {
            "logger": record.name,
            "module": record.module,
            "funcName": record.funcName or "",
            "lineno": record.lineno,
            "pathname": record.pathname,
        }

        pairs: list[tuple[str, Any]] = [
            (key, attr_mapping[key])
            for key in self._include_attrs
            if key in attr_mapping
        ]

        # Add any extra attributes passed via logging call
        for key, value in record.__dict__.items():
            if key not in _STANDARD_LOGRECORD_ATTRS:
                pairs.append((key, value))

        # Extract exception info if present
        if record.exc_info:
            exc_type, exc_value, exc_tb = record.exc_info
            if exc_type is not None:
                pairs.append(("exc_type", exc_type.__name__))
            if exc_value is not None:
                pairs.append(("exc_message", str(exc_value)))
            if exc_tb is not None:
                formatted = traceback.format_exception(exc_type, exc_value, exc_tb)
                pairs.append(("exc_traceback", "".join(formatted)))

        entry = Record(
            level=level_from_stdlib(record.levelno),
            msg=record.getMessage(),
            kv=KVList(pairs),
        )
        self._drain.log(entry, self._values)
