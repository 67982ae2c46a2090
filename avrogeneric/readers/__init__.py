"""
Readers package for avrogeneric.

Re-exports the reader interfaces, the temporal and struct readers, and the
companion primitive readers so callers can import from `avrogeneric.readers`
directly.
"""

from avrogeneric.readers.abstract import AbstractValueReader, StructReader, ValueReader
from avrogeneric.readers.primitives import (
    array,
    booleans,
    byte_arrays,
    doubles,
    fixed,
    floats,
    ints,
    longs,
    nulls,
    option,
    strings,
    uuids,
)
from avrogeneric.readers.record import GenericRecordReader, struct
from avrogeneric.readers.temporal import dates, times, timestamps, timestamptz

__all__ = [
    # Abstracts
    "AbstractValueReader",
    "StructReader",
    "ValueReader",
    # Temporal
    "dates",
    "times",
    "timestamps",
    "timestamptz",
    # Struct
    "GenericRecordReader",
    "struct",
    # Primitives
    "array",
    "booleans",
    "byte_arrays",
    "doubles",
    "fixed",
    "floats",
    "ints",
    "longs",
    "nulls",
    "option",
    "strings",
    "uuids",
]
