"""Forward-only JSON map writer.

Maps are written into an in-memory byte buffer, entry by entry, in the
compact or pretty layout. One entry per writer may be reserved as a *slot*:
its key is written immediately and its value is supplied later by splicing
in the bytes of another writer. This lets a nested map be computed after
the enclosing map has already been closed.

The spliced output is byte-identical to the placeholder technique used by
earlier MozLog encoders (write the slot as a placeholder string, render the
child map without its closing brace, replace the quoted placeholder and
append one ``}``). ``splice_placeholder`` implements that technique and is
kept for compatibility checks.
"""

import json
import math
from collections.abc import Callable
from typing import Any, NoReturn

from mozlog_json.core.errors import EncodeError

PLACEHOLDER = "00PLACEHOLDER00"

_INDENT = "  "


def _dumps_scalar(value: Any) -> str:
    """Encode a scalar value as JSON text. Non-finite floats become null."""
    if isinstance(value, float) and not math.isfinite(value):
        return "null"
    if isinstance(value, (dict, list, tuple)):
        raise TypeError(f"{type(value).__name__} is not a JSON scalar")
    return json.dumps(value, ensure_ascii=False)


class JsonMapWriter:
    """Writes JSON maps into a byte buffer without seeking backwards.

    Implements MapWriterPort. Once any write has failed, every further
    write raises EncodeError so a half-written map cannot be completed.

    Args:
        pretty: Use the indented layout (two spaces, ``": "`` separator).
    """

    def __init__(self, pretty: bool = False) -> None:
        self._pretty = pretty
        self._buf = bytearray()
        self._open: list[bool] = []  # has-entries flag per open map
        self._slot: int | None = None
        self._slot_depth = 0
        self._failed = False

    @property
    def depth(self) -> int:
        """Number of currently open maps."""
        return len(self._open)

    def begin_map(self) -> None:
        """Open the map. A writer holds exactly one top-level map."""
        if self._buf:
            self._fail("map already started in this writer")
        self._append("{")
        self._open.append(False)

    def serialize_entry(self, key: str, value: Any) -> None:
        """Write one entry whose value is a JSON scalar."""
        self._entry(key, value, _dumps_scalar)

    def serialize_nested(self, key: str, value: Any) -> None:
        """Write one entry whose value is a JSON-compatible tree."""
        self._entry(key, value, self._dumps_tree)

    def reserve_slot(self, key: str) -> None:
        """Write ``key`` and hold its value position for ``splice``."""
        if self._slot is not None:
            raise EncodeError("a slot is already reserved in this map writer")
        self._append(self._key_prefix(key))
        self._open[-1] = True
        self._slot = len(self._buf)
        self._slot_depth = self.depth

    def end_map(self) -> None:
        """Close the innermost map scope."""
        if not self._open:
            self._fail("end_map called with no open map")
        has_entries = self._open[-1]
        closes_on_slot = (
            self.depth == self._slot_depth and len(self._buf) == self._slot
        )
        indent = ""
        if self._pretty and has_entries and not closes_on_slot:
            indent = "\n" + _INDENT * (self.depth - 1)
        self._append(indent + "}")
        self._open.pop()

    def getvalue(self) -> bytes:
        """Return everything written so far, open scopes included."""
        return bytes(self._buf)

    def splice(self, child: "JsonMapWriter") -> bytes:
        """Return this writer's output with ``child`` filling the reserved slot.

        Raises:
            EncodeError: No slot was reserved, or either writer still has
                open maps.
        """
        if self._slot is None:
            raise EncodeError("no slot reserved")
        if self._open or child.depth:
            raise EncodeError("cannot splice while maps are still open")
        head = self._buf[: self._slot]
        tail = self._buf[self._slot :]
        return bytes(head) + child.getvalue() + bytes(tail)

    def _key_prefix(self, key: str) -> str:
        if not self._open:
            self._fail("entry written with no open map")
        if not isinstance(key, str):
            self._fail(f"map key must be a string, got {type(key).__name__}")
        first = not self._open[-1]
        if self._pretty:
            sep = "\n" if first else ",\n"
            return f"{sep}{_INDENT * self.depth}{json.dumps(key, ensure_ascii=False)}: "
        sep = "" if first else ","
        return f"{sep}{json.dumps(key, ensure_ascii=False)}:"

    def _dumps_tree(self, value: Any) -> str:
        if not self._pretty:
            return json.dumps(
                value, ensure_ascii=False, allow_nan=False, separators=(",", ":")
            )
        text = json.dumps(value, ensure_ascii=False, allow_nan=False, indent=2)
        return text.replace("\n", "\n" + _INDENT * self.depth)

    def _entry(self, key: str, value: Any, dumps: Callable[[Any], str]) -> None:
        prefix = self._key_prefix(key)
        try:
            text = dumps(value)
        except (TypeError, ValueError) as exc:
            self._failed = True
            raise EncodeError(f"cannot encode value for key {key!r}: {exc}") from exc
        self._append(prefix + text)
        self._open[-1] = True

    def _append(self, text: str) -> None:
        if self._failed:
            raise EncodeError("map writer is unusable after a failed write")
        try:
            data = text.encode("utf-8")
        except UnicodeEncodeError as exc:
            self._failed = True
            raise EncodeError(f"invalid UTF-8 in JSON output: {exc}") from exc
        self._buf += data

    def _fail(self, message: str) -> NoReturn:
        self._failed = True
        raise EncodeError(message)


def splice_placeholder(payload: str, fields: str) -> str:
    """Substitute rendered fields for the placeholder in an envelope.

    Args:
        payload: A closed envelope whose ``Fields`` value is ``PLACEHOLDER``.
        fields: The fields map rendered without its closing brace.

    Returns:
        The envelope with the fields map nested in place.
    """
    return payload.replace(json.dumps(PLACEHOLDER), fields) + "}"
