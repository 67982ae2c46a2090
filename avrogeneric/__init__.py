"""
avrogeneric - Decode Avro binary data into generic, schema-shaped records.

This package provides:

- Temporal readers turning encoded ints/longs into dates, times and timestamps
- A struct reader assembling decoded field values into reusable generic records
- Companion readers for primitive, optional and list values
- An Avro binary decoder and a decode benchmark harness
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from avrogeneric.config import Settings, get_settings
from avrogeneric.domain import GenericRecord, ListType, NestedField, PrimitiveType, StructType
from avrogeneric.errors import (
    DecodeError,
    EndOfStreamError,
    MalformedStreamError,
    StreamError,
    TimeOutOfRangeError,
)
from avrogeneric.infrastructure import BinaryDecoder, Decoder
from avrogeneric.readers import (
    AbstractValueReader,
    GenericRecordReader,
    StructReader,
    ValueReader,
    dates,
    struct,
    times,
    timestamps,
    timestamptz,
)
from avrogeneric.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "GenericRecord",
    "ListType",
    "NestedField",
    "PrimitiveType",
    "StructType",
    # Errors
    "DecodeError",
    "EndOfStreamError",
    "MalformedStreamError",
    "StreamError",
    "TimeOutOfRangeError",
    # Decoding
    "BinaryDecoder",
    "Decoder",
    # Readers
    "AbstractValueReader",
    "GenericRecordReader",
    "StructReader",
    "ValueReader",
    "dates",
    "struct",
    "times",
    "timestamps",
    "timestamptz",
    # Logging
    "configure_logging",
    "get_logger",
]
