"""
Exception hierarchy for avrogeneric.

Stream errors come from the decoder and are never retried or swallowed by
readers. Shape mismatches of reuse objects are not errors at all; readers fall
back to a fresh allocation instead.
"""

from __future__ import annotations


class DecodeError(Exception):
    """Base class for every failure raised while decoding a value."""


class StreamError(DecodeError):
    """The decoder could not supply the requested primitive."""


class EndOfStreamError(StreamError, EOFError):
    """The stream ended before the requested primitive was complete."""

    def __init__(self, needed: int, available: int, position: int) -> None:
        self.needed = needed
        self.available = available
        self.position = position
        super().__init__(
            f"Unexpected end of stream at byte {position}: "
            f"needed {needed} byte(s), {available} available"
        )


class MalformedStreamError(StreamError):
    """The bytes at the current position do not form a valid encoding."""


class TimeOutOfRangeError(DecodeError, ValueError):
    """A time-of-day value is outside [0, one day) in microseconds."""

    def __init__(self, micros: int) -> None:
        self.micros = micros
        super().__init__(f"Time-of-day out of range: {micros} microseconds")


__all__ = [
    "DecodeError",
    "StreamError",
    "EndOfStreamError",
    "MalformedStreamError",
    "TimeOutOfRangeError",
]
