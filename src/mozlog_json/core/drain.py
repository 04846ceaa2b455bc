"""MozLog JSON drain.

Each record is written as one JSON object::

    {"Logger":"svc","Timestamp":1234567890000000000,"Pid":42,"Severity":6,
     "Fields":{"msg":"started","port":8080}}

If the environment variable ``MOZLOG_GCP`` is set to ``"true"`` when the
builder is created, the output uses Google Cloud Logging's ``severity`` key
and scale instead of ``Severity``.

Example:
    ```python
    import sys
    from mozlog_json import Logger, MozLogJson

    drain = MozLogJson.new(sys.stderr).logger_name("svc").build()
    log = Logger.root(drain, version="1.2.0")
    log.info("started", port=8080)
    ```
"""

import io
import os
import threading
import time
from typing import IO, Any

from mozlog_json.core.config import EncoderConfig, gcp_from_env
from mozlog_json.core.encoding.json_map import JsonMapWriter
from mozlog_json.core.errors import IoError
from mozlog_json.core.kv import FnValue, Formatted, KVList, OwnedKVList, kv
from mozlog_json.core.models import Record
from mozlog_json.core.serializer import AttributeSerializer
from mozlog_json.core.severity import severity_mapper


def _timestamp_ns(record: Record) -> int:
    return time.time_ns()


class MozLogJson:
    """Drain that writes each record as a MozLog JSON object.

    Implements DrainPort. Build one with ``MozLogJson.new(io)`` or
    ``MozLogJson.default(io)``. A single instance may be shared between
    threads; writes to the sink are serialized.
    """

    def __init__(self, sink: IO[Any], config: EncoderConfig) -> None:
        self._sink = sink
        self._config = config
        self._text = isinstance(sink, io.TextIOBase)
        self._lock = threading.Lock()

    @classmethod
    def default(cls, sink: IO[Any]) -> "MozLogJson":
        """Drain with the default settings."""
        return MozLogJsonBuilder(sink).build()

    @staticmethod
    def new(sink: IO[Any]) -> "MozLogJsonBuilder":
        """Start building a customized drain."""
        return MozLogJsonBuilder(sink)

    @property
    def config(self) -> EncoderConfig:
        return self._config

    def encode(self, record: Record, logger_values: OwnedKVList) -> bytes:
        """Encode a record to MozLog JSON without writing it.

        The envelope is written first with the ``Fields`` value held open;
        the fields map is written second and spliced into that slot.

        Raises:
            EncodeError: A value could not be encoded.
        """
        pretty = self._config.pretty
        nested = self._config.nested_values

        envelope = JsonMapWriter(pretty=pretty)
        envelope.begin_map()
        serializer = AttributeSerializer(envelope, record, nested)
        for source in self._config.values:
            serializer.serialize(source)
        envelope.reserve_slot("Fields")
        envelope.end_map()

        fields = JsonMapWriter(pretty=pretty)
        fields.begin_map()
        serializer = AttributeSerializer(fields, record, nested)
        if record.args:
            serializer.emit("msg", Formatted(record.msg, record.args))
        else:
            serializer.emit("msg", str(record.msg))
        serializer.serialize(logger_values)
        serializer.serialize(record.kv)
        fields.end_map()

        return envelope.splice(fields)

    def log(self, record: Record, logger_values: OwnedKVList) -> None:
        """Encode a record and write it to the sink.

        Raises:
            EncodeError: A value could not be encoded. Nothing was written.
            IoError: The sink failed the write. The record is lost.
        """
        payload = self.encode(record, logger_values)
        with self._lock:
            try:
                self._write(payload)
                if self._config.newlines:
                    self._write(b"\n")
            except (OSError, ValueError) as exc:
                raise IoError(f"failed to write log record: {exc}") from exc

    def flush(self) -> None:
        """Flush the sink if it supports flushing."""
        flush = getattr(self._sink, "flush", None)
        if flush is None:
            return
        with self._lock:
            try:
                flush()
            except (OSError, ValueError) as exc:
                raise IoError(f"failed to flush log sink: {exc}") from exc

    def _write(self, data: bytes) -> None:
        if self._text:
            self._sink.write(data.decode("utf-8"))
            return
        # raw sinks may accept only part of the buffer
        while data:
            written = self._sink.write(data)
            if written is None:
                if isinstance(self._sink, io.RawIOBase):
                    raise BlockingIOError("log sink would block")
                return
            if written <= 0:
                raise OSError("log sink accepted no bytes")
            data = data[written:]


class MozLogJsonBuilder:
    """Builder for MozLogJson.

    Create with ``MozLogJson.new(io)``. Every setter returns the builder so
    calls can be chained; ``build()`` produces the immutable drain.
    """

    def __init__(self, sink: IO[Any]) -> None:
        self._sink = sink
        self._newlines = True
        self._pretty = False
        self._nested_values = False
        self._values: list[KVList] = []
        self._logger_name: str | None = None
        self._msg_type: str | None = None
        self._hostname: str | None = None
        self._gcp = gcp_from_env()

    def build(self) -> MozLogJson:
        """Build the drain.

        Envelope order: custom key-values, Logger, Type, Hostname,
        Timestamp, Pid, then Severity (or severity in GCP mode).
        """
        values = list(self._values)
        if self._logger_name is not None:
            values.append(kv(Logger=self._logger_name))
        if self._msg_type is not None:
            values.append(kv(Type=self._msg_type))
        if self._hostname is not None:
            values.append(kv(Hostname=self._hostname))
        values.append(kv(Timestamp=FnValue(_timestamp_ns), Pid=os.getpid()))

        key, to_severity = severity_mapper(self._gcp)
        severity = FnValue(lambda record: to_severity(record.level))
        values.append(KVList([(key, severity)]))

        config = EncoderConfig(
            newlines=self._newlines,
            pretty=self._pretty,
            gcp=self._gcp,
            nested_values=self._nested_values,
            values=tuple(values),
        )
        return MozLogJson(self._sink, config)

    def enable_gcp(self) -> "MozLogJsonBuilder":
        """Turn on Google Cloud Logging output."""
        self._gcp = True
        return self

    def set_newlines(self, enabled: bool) -> "MozLogJsonBuilder":
        """Set writing a newline after every log record."""
        self._newlines = enabled
        return self

    def set_pretty(self, enabled: bool) -> "MozLogJsonBuilder":
        """Set whether pretty formatted output should be used."""
        self._pretty = enabled
        return self

    def set_nested_values(self, enabled: bool) -> "MozLogJsonBuilder":
        """Set whether Nested values are written as JSON trees."""
        self._nested_values = enabled
        return self

    def add_key_value(
        self, values: KVList | None = None, **kwargs: Any
    ) -> "MozLogJsonBuilder":
        """Add static key-values written into every envelope.

        Accepts a KVList, keyword arguments, or both (the KVList first).
        """
        if values is not None:
            self._values.append(values)
        if kwargs:
            self._values.append(kv(**kwargs))
        return self

    def logger_name(self, logger_name: str) -> "MozLogJsonBuilder":
        self._logger_name = logger_name
        return self

    def msg_type(self, msg_type: str) -> "MozLogJsonBuilder":
        self._msg_type = msg_type
        return self

    def hostname(self, hostname: str) -> "MozLogJsonBuilder":
        self._hostname = hostname
        return self
