"""Exceptions raised while encoding and writing log records."""


class MozLogError(Exception):
    """Base class for all encoder errors."""


class EncodeError(MozLogError, ValueError):
    """A value could not be represented as MozLog JSON.

    Raised for malformed UTF-8 in a string slot, values the JSON backend
    rejects, and lazy values whose rendering fails. The event that raised
    it must be abandoned; nothing has been written to the sink.
    """


class IoError(MozLogError, OSError):
    """The output sink rejected or failed a write.

    The event is lost. The encoder does not retry or buffer.
    """
