"""Key-value attribute sources and lazy values.

An attribute source is an immutable, ordered sequence of ``(key, value)``
pairs. Sources are shared by every log call made through the logger that
owns them, so nothing in this module ever mutates one after construction.
Keys are not deduplicated: a repeated key produces a repeated JSON key.
"""

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from mozlog_json.core.models import Record


@dataclass(frozen=True)
class FnValue:
    """A value computed from the record at serialization time."""

    fn: Callable[["Record"], Any]

    def __call__(self, record: "Record") -> Any:
        return self.fn(record)


@dataclass(frozen=True)
class Formatted:
    """A %-style template rendered only when the record is serialized."""

    template: str
    args: tuple[Any, ...] = ()

    def render(self) -> str:
        if not self.args:
            return self.template
        args: Any = self.args
        # a lone mapping argument supplies named fields, as in LogRecord
        if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
            args = args[0]
        return self.template % args


@dataclass(frozen=True)
class Nested:
    """A JSON-compatible tree (dicts, lists, scalars) to write as-is.

    Written as a nested JSON value only when the encoder has nested values
    enabled; otherwise it is rendered as a string.
    """

    value: Any

    def __str__(self) -> str:
        return str(self.value)


class KVList:
    """Ordered, immutable list of key-value pairs.

    Example:
        ```python
        KVList([("port", 8080), ("port", 8081)])  # duplicates are kept
        kv(version="1.2.0", region="us-east-1")
        ```
    """

    __slots__ = ("_pairs",)

    def __init__(self, pairs: Iterable[tuple[str, Any]] = ()) -> None:
        self._pairs: tuple[tuple[str, Any], ...] = tuple(pairs)

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KVList):
            return NotImplemented
        return self._pairs == other._pairs

    def __hash__(self) -> int:
        return hash(self._pairs)

    def __repr__(self) -> str:
        return f"KVList({list(self._pairs)!r})"


def kv(**values: Any) -> KVList:
    """Build a KVList from keyword arguments, preserving their order."""
    return KVList(values.items())


@dataclass(frozen=True)
class OwnedKVList:
    """Attribute sources attached along a logger hierarchy.

    Each child logger links to its parent's list. Iteration yields the
    root's pairs first and the most recently attached pairs last.
    """

    values: KVList = KVList()
    parent: "OwnedKVList | None" = None

    def chain(self, values: KVList) -> "OwnedKVList":
        """Return a child list that extends this one with ``values``."""
        return OwnedKVList(values=values, parent=self)

    def sources(self) -> list[KVList]:
        """Return the attached KVLists in attachment order."""
        nodes: list[KVList] = []
        node: OwnedKVList | None = self
        while node is not None:
            nodes.append(node.values)
            node = node.parent
        nodes.reverse()
        return nodes

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        for source in self.sources():
            yield from source

    def __len__(self) -> int:
        return sum(len(source) for source in self.sources())
