"""Logger facade that owns attribute sources and dispatches records."""

from typing import Any

from mozlog_json.core.kv import KVList, OwnedKVList, kv
from mozlog_json.core.models import Level, Record
from mozlog_json.core.ports import DrainPort


class Logger:
    """Structured logger bound to a drain and a chain of attribute sources.

    Child loggers created with ``new`` share their parent's sources and add
    their own after them.

    Example:
        ```python
        root = Logger.root(drain, version="1.2.0")
        request_log = root.new(request_id="abc123")
        request_log.info("user %s logged in", "alice", user_id=42)
        ```
    """

    def __init__(self, drain: DrainPort, values: OwnedKVList) -> None:
        self._drain = drain
        self._values = values

    @classmethod
    def root(cls, drain: DrainPort, /, **values: Any) -> "Logger":
        """Create a root logger with optional key-values."""
        return cls(drain, OwnedKVList(kv(**values)))

    @property
    def values(self) -> OwnedKVList:
        return self._values

    def new(self, values: KVList | None = None, /, **kwargs: Any) -> "Logger":
        """Create a child logger with additional key-values."""
        if values is None:
            values = kv(**kwargs)
        elif kwargs:
            values = KVList([*values, *kwargs.items()])
        return Logger(self._drain, self._values.chain(values))

    def log(self, level: Level, msg: str, /, *args: Any, **kwargs: Any) -> None:
        """Log a message with call-site key-values.

        Args:
            level: Severity of the event.
            msg: Message, or a %-style template for ``args``.
            *args: Template arguments, rendered when the record is encoded.
            **kwargs: Call-site key-values.

        Raises:
            EncodeError: The record could not be encoded.
            IoError: The drain's sink failed.
        """
        record = Record(level=level, msg=msg, args=args, kv=kv(**kwargs))
        self._drain.log(record, self._values)

    def critical(self, msg: str, /, *args: Any, **kwargs: Any) -> None:
        self.log(Level.CRITICAL, msg, *args, **kwargs)

    def error(self, msg: str, /, *args: Any, **kwargs: Any) -> None:
        self.log(Level.ERROR, msg, *args, **kwargs)

    def warning(self, msg: str, /, *args: Any, **kwargs: Any) -> None:
        self.log(Level.WARNING, msg, *args, **kwargs)

    def info(self, msg: str, /, *args: Any, **kwargs: Any) -> None:
        self.log(Level.INFO, msg, *args, **kwargs)

    def debug(self, msg: str, /, *args: Any, **kwargs: Any) -> None:
        self.log(Level.DEBUG, msg, *args, **kwargs)

    def trace(self, msg: str, /, *args: Any, **kwargs: Any) -> None:
        self.log(Level.TRACE, msg, *args, **kwargs)
