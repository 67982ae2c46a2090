"""
Struct reader producing `GenericRecord`s.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from avrogeneric.domain.record import GenericRecord
from avrogeneric.domain.schema import StructType
from avrogeneric.readers.abstract import StructReader, ValueReader
from avrogeneric.utils.logging import get_logger

log = get_logger(__name__)


class GenericRecordReader(StructReader[GenericRecord]):
    """
    Read one record by invoking one field reader per position, in order.

    The struct type is only used to create new records; the reader list alone
    decides how many values are read and in which order.
    """

    def __init__(self, readers: Sequence[ValueReader[Any]], struct: StructType) -> None:
        if len(readers) != len(struct):
            raise ValueError(
                f"Struct has {len(struct)} field(s) but {len(readers)} reader(s) were given"
            )
        super().__init__(readers)
        self._struct = struct

    @property
    def struct_type(self) -> StructType:
        return self._struct

    def reuse_or_create(self, reuse: Optional[Any]) -> GenericRecord:
        if GenericRecord.can_reuse(reuse, self._struct):
            return reuse
        if reuse is not None:
            log.debug(
                "Reuse object rejected, allocating a new record",
                extra={"reuse_type": type(reuse).__name__, "fields": len(self._struct)},
            )
        return GenericRecord.create(self._struct)

    def get(self, struct: GenericRecord, pos: int) -> Any:
        return struct.get(pos)

    def set(self, struct: GenericRecord, pos: int, value: Any) -> None:
        struct.set(pos, value)


def struct(struct_type: StructType, readers: Sequence[ValueReader[Any]]) -> GenericRecordReader:
    """Build a reader for `struct_type` from one reader per field, in field order."""
    return GenericRecordReader(readers, struct_type)


__all__ = ["GenericRecordReader", "struct"]
