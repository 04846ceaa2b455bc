"""Attribute serializer: writes key-value sources into a JSON map.

Adapts the key-value visitor used by attribute sources onto a
MapWriterPort. Lazy values (FnValue, Formatted, and any object that is not
a JSON scalar) are evaluated here, once per visit, and rendered through a
per-thread scratch buffer that is emptied after every use.
"""

import io
import threading
from collections.abc import Iterable
from typing import Any

from mozlog_json.core.errors import EncodeError
from mozlog_json.core.kv import FnValue, Formatted, Nested
from mozlog_json.core.models import Record
from mozlog_json.core.ports import MapWriterPort

_SCALARS = (bool, int, float, str)

_local = threading.local()


def _scratch_buffer() -> io.StringIO:
    """Return the calling thread's scratch buffer."""
    buf: io.StringIO | None = getattr(_local, "buf", None)
    if buf is None:
        buf = io.StringIO()
        _local.buf = buf
    return buf


class AttributeSerializer:
    """Serializes attribute sources for one record into one map writer.

    Args:
        writer: Map writer with an open map scope.
        record: The record being logged; passed to FnValue callables.
        nested_values: Write Nested values as JSON trees. When False they
            are rendered as strings.
    """

    def __init__(
        self,
        writer: MapWriterPort,
        record: Record,
        nested_values: bool = False,
    ) -> None:
        self._writer = writer
        self._record = record
        self._nested_values = nested_values

    def serialize(self, source: Iterable[tuple[str, Any]]) -> None:
        """Write every pair of ``source`` in order.

        Raises:
            EncodeError: A value could not be encoded. Remaining pairs are
                not written.
        """
        for key, value in source:
            self.emit(key, value)

    def emit(self, key: str, value: Any) -> None:
        """Write a single key-value pair."""
        if isinstance(value, FnValue):
            try:
                value = value(self._record)
            except Exception as exc:
                raise EncodeError(f"value for key {key!r} failed: {exc}") from exc
            if isinstance(value, FnValue):
                raise EncodeError(f"value for key {key!r} returned another FnValue")
            self.emit(key, value)
        elif value is None or isinstance(value, _SCALARS):
            self._writer.serialize_entry(key, value)
        elif isinstance(value, bytes):
            try:
                text = value.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise EncodeError(f"value for key {key!r} is not UTF-8") from exc
            self._writer.serialize_entry(key, text)
        elif isinstance(value, Nested) and self._nested_values:
            self._writer.serialize_nested(key, value.value)
        else:
            self._emit_rendered(key, value)

    def _emit_rendered(self, key: str, value: Any) -> None:
        buf = _scratch_buffer()
        try:
            try:
                text = value.render() if isinstance(value, Formatted) else str(value)
            except Exception as exc:
                raise EncodeError(
                    f"cannot render value for key {key!r}: {exc}"
                ) from exc
            buf.write(text)
            self._writer.serialize_entry(key, buf.getvalue())
        finally:
            buf.seek(0)
            buf.truncate()
