"""Unit tests for MozLogHandler logging adapter."""

import io
import json
import logging
from collections.abc import Iterator
from typing import Any

import pytest

from mozlog_json import EncodeError, MozLogHandler, MozLogJson, kv


def _lines(sink: io.BytesIO) -> list[dict[str, Any]]:
    """Parse every line written to the sink."""
    return [json.loads(line) for line in sink.getvalue().splitlines()]


@pytest.fixture
def std_logger(fixed_process: None, sink: io.BytesIO) -> Iterator[logging.Logger]:
    """A stdlib logger wired to a MozLogHandler writing to ``sink``."""
    drain = MozLogJson.new(sink).logger_name("svc").build()
    logger = logging.getLogger("test_mozlog_handler")
    logger.handlers.clear()  # Remove any existing handlers
    logger.addHandler(MozLogHandler(drain))
    logger.setLevel(1)
    logger.propagate = False
    yield logger
    logger.handlers.clear()


@pytest.mark.adapter
class TestMozLogHandler:
    """Tests for MozLogHandler adapter."""

    def test_handler_is_logging_handler(self, fixed_process: None) -> None:
        """Handler extends logging.Handler."""
        handler = MozLogHandler(MozLogJson.default(io.BytesIO()))
        assert isinstance(handler, logging.Handler)

    def test_emit_writes_mozlog_line(
        self, std_logger: logging.Logger, sink: io.BytesIO
    ) -> None:
        """A stdlib log call writes one MozLog line."""
        std_logger.info("server started on %s", "0.0.0.0")

        entries = _lines(sink)
        assert len(entries) == 1
        assert entries[0]["Logger"] == "svc"
        assert entries[0]["Severity"] == 6
        assert entries[0]["Fields"] == {"msg": "server started on 0.0.0.0"}

    def test_includes_extra_attributes_in_order(
        self, std_logger: logging.Logger, sink: io.BytesIO
    ) -> None:
        """Handler includes extra dict from logging call, in order."""
        std_logger.info(
            "request processed", extra={"request_id": "abc123", "user_id": 42}
        )

        fields = json.loads(sink.getvalue(), object_pairs_hook=list)[-1][1]
        assert fields == [
            ("msg", "request processed"),
            ("request_id", "abc123"),
            ("user_id", 42),
        ]

    @pytest.mark.parametrize(
        ("levelno", "severity"),
        [
            (logging.CRITICAL, 2),
            (logging.ERROR, 3),
            (logging.WARNING, 4),
            (logging.INFO, 6),
            (logging.DEBUG, 7),
            (5, 7),
        ],
    )
    def test_maps_stdlib_levels(
        self,
        std_logger: logging.Logger,
        sink: io.BytesIO,
        levelno: int,
        severity: int,
    ) -> None:
        """Standard library levels map onto MozLog severities."""
        std_logger.log(levelno, "event")

        assert _lines(sink)[0]["Severity"] == severity

    def test_extracts_exception_info(
        self, std_logger: logging.Logger, sink: io.BytesIO
    ) -> None:
        """Handler extracts exception info when present."""
        try:
            raise ValueError("bad input")
        except ValueError:
            std_logger.exception("failed")

        fields = _lines(sink)[0]["Fields"]
        assert fields["exc_type"] == "ValueError"
        assert fields["exc_message"] == "bad input"
        assert "Traceback" in fields["exc_traceback"]

    def test_handler_values_are_logger_context(
        self, fixed_process: None, sink: io.BytesIO
    ) -> None:
        """Handler values are written before the call-site extras."""
        drain = MozLogJson.default(sink)
        handler = MozLogHandler(drain, values=kv(version="1.0"))
        record = logging.LogRecord(
            name="test",
            level=logging.INFO,
            pathname="",
            lineno=0,
            msg="test message",
            args=(),
            exc_info=None,
        )
        record.version = "2.0"
        handler.emit(record)

        fields = json.loads(sink.getvalue(), object_pairs_hook=list)[-1][1]
        assert fields == [
            ("msg", "test message"),
            ("version", "1.0"),
            ("version", "2.0"),
        ]

    def test_include_attrs(self, fixed_process: None, sink: io.BytesIO) -> None:
        """Selected LogRecord attributes are added ahead of extras."""
        drain = MozLogJson.default(sink)
        handler = MozLogHandler(drain, include_attrs=["logger", "funcName", "lineno"])
        record = logging.LogRecord(
            name="myapp.service",
            level=logging.ERROR,
            pathname="/app/service.py",
            lineno=42,
            msg="error occurred",
            args=(),
            exc_info=None,
            func="process_request",
        )
        handler.emit(record)

        assert _lines(sink)[0]["Fields"] == {
            "msg": "error occurred",
            "logger": "myapp.service",
            "funcName": "process_request",
            "lineno": 42,
        }

    def test_encode_errors_propagate(
        self, std_logger: logging.Logger, sink: io.BytesIO
    ) -> None:
        """Encoding failures reach the logging call."""
        with pytest.raises(EncodeError):
            std_logger.info("bad", extra={"text": "\ud800"})

        assert sink.getvalue() == b""
