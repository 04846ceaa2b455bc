"""Shared test fixtures for all test modules."""

import io
import os
import time
from collections.abc import Callable

import pytest

from mozlog_json import KVList, Level, MozLogJson, MozLogJsonBuilder, Record

FIXED_NS = 1234567890000000000
FIXED_PID = 42


class FailingSink(io.RawIOBase):
    """Binary sink whose Nth write raises OSError.

    Successful writes are recorded in ``writes``.
    """

    def __init__(self, fail_on: int = 1) -> None:
        self.fail_on = fail_on
        self.calls = 0
        self.writes: list[bytes] = []

    def writable(self) -> bool:
        return True

    def write(self, data: bytes) -> int:  # type: ignore[override]
        self.calls += 1
        if self.calls == self.fail_on:
            raise OSError(28, "No space left on device")
        self.writes.append(bytes(data))
        return len(data)


@pytest.fixture
def fixed_process(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin the clock and pid, and clear the GCP toggle."""
    monkeypatch.setattr(time, "time_ns", lambda: FIXED_NS)
    monkeypatch.setattr(os, "getpid", lambda: FIXED_PID)
    monkeypatch.delenv("MOZLOG_GCP", raising=False)


@pytest.fixture
def sink() -> io.BytesIO:
    """Empty binary sink."""
    return io.BytesIO()


@pytest.fixture
def drain_builder(
    fixed_process: None, sink: io.BytesIO
) -> Callable[[], MozLogJsonBuilder]:
    """Factory for builders writing to ``sink`` with a pinned clock and pid."""

    def _builder() -> MozLogJsonBuilder:
        return MozLogJson.new(sink)

    return _builder


@pytest.fixture
def make_record() -> Callable[..., Record]:
    """Factory fixture for records with call-site key-values."""

    def _record(
        msg: str = "started",
        level: Level = Level.INFO,
        args: tuple[object, ...] = (),
        **kwargs: object,
    ) -> Record:
        return Record(level=level, msg=msg, args=args, kv=KVList(kwargs.items()))

    return _record


@pytest.fixture
def failing_sink() -> type[FailingSink]:
    """The FailingSink class, for tests that need a sink that errors."""
    return FailingSink
