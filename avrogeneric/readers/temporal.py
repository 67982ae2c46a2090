"""
Temporal readers: interpret encoded ints and longs as dates, times and timestamps.

All four are computed by plain offset arithmetic from the UTC epoch
(1970-01-01T00:00:00Z):

- date: int, days since 1970-01-01
- time: long, microseconds since midnight
- timestamp: long, microseconds since the epoch, returned as a naive datetime
  holding the UTC calendar fields
- timestamptz: long, microseconds since the epoch, returned as an aware
  datetime in UTC

Negative values decode to values before the epoch. A value outside the range of
Python's `datetime` types raises `OverflowError` from the arithmetic. The
readers hold no state and are shared as module-level singletons; temporal values
are immutable, so `reuse` is accepted and ignored.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Optional

from avrogeneric.config import get_settings
from avrogeneric.errors import TimeOutOfRangeError
from avrogeneric.infrastructure.decoder import Decoder
from avrogeneric.readers.abstract import AbstractValueReader

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
EPOCH_DAY = EPOCH.date()
MICROS_PER_DAY = 86_400_000_000

_MICROS_PER_SECOND = 1_000_000


class DateReader(AbstractValueReader[date]):
    def read(self, decoder: Decoder, reuse: Optional[Any] = None) -> date:
        return EPOCH_DAY + timedelta(days=decoder.read_int())


class TimeReader(AbstractValueReader[time]):
    """
    Read a time-of-day stored as microseconds since midnight.

    Parameters
    ----------
    check_range : bool, optional
        Raise `TimeOutOfRangeError` for values outside one day. When False, such
        values wrap modulo one day. When None (the shared instance), the
        `AVRO_CHECK_TIME_RANGE` setting decides at read time.
    """

    def __init__(self, check_range: Optional[bool] = None) -> None:
        self._check_range = check_range

    def _checking(self) -> bool:
        if self._check_range is None:
            return get_settings().check_time_range
        return self._check_range

    def read(self, decoder: Decoder, reuse: Optional[Any] = None) -> time:
        micros = decoder.read_long()
        if not 0 <= micros < MICROS_PER_DAY:
            if self._checking():
                raise TimeOutOfRangeError(micros)
            micros %= MICROS_PER_DAY
        seconds, micro = divmod(micros, _MICROS_PER_SECOND)
        minutes, second = divmod(seconds, 60)
        hour, minute = divmod(minutes, 60)
        return time(hour, minute, second, micro)

    def __repr__(self) -> str:
        return f"TimeReader(check_range={self._check_range!r})"


class TimestampReader(AbstractValueReader[datetime]):
    def read(self, decoder: Decoder, reuse: Optional[Any] = None) -> datetime:
        # Drop the zone without converting: the fields stay in UTC.
        return (EPOCH + timedelta(microseconds=decoder.read_long())).replace(tzinfo=None)


class TimestamptzReader(AbstractValueReader[datetime]):
    def read(self, decoder: Decoder, reuse: Optional[Any] = None) -> datetime:
        return EPOCH + timedelta(microseconds=decoder.read_long())


_DATES = DateReader()
_TIMES = TimeReader()
_TIMESTAMPS = TimestampReader()
_TIMESTAMPTZ = TimestamptzReader()


def dates() -> DateReader:
    return _DATES


def times() -> TimeReader:
    return _TIMES


def timestamps() -> TimestampReader:
    return _TIMESTAMPS


def timestamptz() -> TimestamptzReader:
    return _TIMESTAMPTZ


__all__ = [
    "EPOCH",
    "EPOCH_DAY",
    "MICROS_PER_DAY",
    "DateReader",
    "TimeReader",
    "TimestampReader",
    "TimestamptzReader",
    "dates",
    "times",
    "timestamps",
    "timestamptz",
]
