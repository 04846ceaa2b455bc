"""JSON encoding backends."""

from mozlog_json.core.encoding.json_map import (
    PLACEHOLDER,
    JsonMapWriter,
    splice_placeholder,
)

__all__ = [
    "PLACEHOLDER",
    "JsonMapWriter",
    "splice_placeholder",
]
