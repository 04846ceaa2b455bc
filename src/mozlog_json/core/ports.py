"""Port interfaces for the encoder.

These protocols define the contracts between the serializer, the JSON
backend, and the logging front end. The core depends only on these
interfaces, not on concrete implementations.
"""

from typing import Any, Protocol, runtime_checkable

from mozlog_json.core.kv import OwnedKVList
from mozlog_json.core.models import Record


@runtime_checkable
class MapWriterPort(Protocol):
    """Port for a forward-only JSON map writer.

    Examples: JsonMapWriter.
    """

    def begin_map(self) -> None:
        """Open a map scope."""
        ...

    def serialize_entry(self, key: str, value: Any) -> None:
        """Write one scalar entry into the open map."""
        ...

    def serialize_nested(self, key: str, value: Any) -> None:
        """Write one entry whose value is a JSON-compatible tree."""
        ...

    def end_map(self) -> None:
        """Close the innermost map scope."""
        ...


@runtime_checkable
class DrainPort(Protocol):
    """Port for the destination of log records.

    Examples: MozLogJson.
    """

    def log(self, record: Record, logger_values: OwnedKVList) -> None:
        """Encode and write one record.

        Args:
            record: The log event.
            logger_values: Attribute sources attached to the calling logger.

        Raises:
            EncodeError: A value could not be encoded.
            IoError: The sink failed the write.
        """
        ...
