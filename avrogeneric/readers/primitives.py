"""
Readers for non-temporal values.

These compose with the temporal and struct readers so records with numeric,
string, optional, nested and list fields can be decoded. Stateless readers are
shared singletons; `fixed`, `option` and `array` build a new reader per call.
"""

from __future__ import annotations

import uuid
from typing import Any, List, Optional

from avrogeneric.errors import MalformedStreamError
from avrogeneric.infrastructure.decoder import Decoder
from avrogeneric.readers.abstract import AbstractValueReader, ValueReader


class NullReader(AbstractValueReader[None]):
    def read(self, decoder: Decoder, reuse: Optional[Any] = None) -> None:
        return decoder.read_null()


class BooleanReader(AbstractValueReader[bool]):
    def read(self, decoder: Decoder, reuse: Optional[Any] = None) -> bool:
        return decoder.read_boolean()


class IntReader(AbstractValueReader[int]):
    def read(self, decoder: Decoder, reuse: Optional[Any] = None) -> int:
        return decoder.read_int()


class LongReader(AbstractValueReader[int]):
    def read(self, decoder: Decoder, reuse: Optional[Any] = None) -> int:
        return decoder.read_long()


class FloatReader(AbstractValueReader[float]):
    def read(self, decoder: Decoder, reuse: Optional[Any] = None) -> float:
        return decoder.read_float()


class DoubleReader(AbstractValueReader[float]):
    def read(self, decoder: Decoder, reuse: Optional[Any] = None) -> float:
        return decoder.read_double()


class StringReader(AbstractValueReader[str]):
    def read(self, decoder: Decoder, reuse: Optional[Any] = None) -> str:
        return decoder.read_string()


class BytesReader(AbstractValueReader[bytes]):
    def read(self, decoder: Decoder, reuse: Optional[Any] = None) -> bytes:
        return decoder.read_bytes()


class UUIDReader(AbstractValueReader[uuid.UUID]):
    def read(self, decoder: Decoder, reuse: Optional[Any] = None) -> uuid.UUID:
        return uuid.UUID(bytes=decoder.read_fixed(16))


class FixedReader(AbstractValueReader[bytes]):
    def __init__(self, length: int) -> None:
        if length < 0:
            raise ValueError(f"Fixed length must be non-negative, got {length}")
        self._length = length

    def read(self, decoder: Decoder, reuse: Optional[Any] = None) -> bytes:
        return decoder.read_fixed(self._length)

    def __repr__(self) -> str:
        return f"FixedReader({self._length})"


class OptionReader(AbstractValueReader[Any]):
    """
    Read a two-branch union of null and a value.

    Parameters
    ----------
    null_index : int
        Union branch (0 or 1) that holds null.
    reader : ValueReader
        Reader for the non-null branch.
    """

    def __init__(self, null_index: int, reader: ValueReader[Any]) -> None:
        if null_index not in (0, 1):
            raise ValueError(f"Null branch index must be 0 or 1, got {null_index}")
        self._null_index = null_index
        self._reader = reader

    def read(self, decoder: Decoder, reuse: Optional[Any] = None) -> Any:
        index = decoder.read_index()
        if index == self._null_index:
            return None
        if index != 1 - self._null_index:
            raise MalformedStreamError(f"Union branch {index} out of range for an optional value")
        return self._reader.read(decoder, reuse)

    def __repr__(self) -> str:
        return f"OptionReader({self._null_index}, {self._reader!r})"


class ArrayReader(AbstractValueReader[List[Any]]):
    """
    Read a block-encoded array into a list.

    A list passed as `reuse` is overwritten in place and its old elements are
    offered to the element reader as reuse hints.
    """

    def __init__(self, element: ValueReader[Any]) -> None:
        self._element = element

    def read(self, decoder: Decoder, reuse: Optional[Any] = None) -> List[Any]:
        result: List[Any] = reuse if isinstance(reuse, list) else []
        existing = len(result)
        count = 0
        chunk = decoder.read_array_start()
        while chunk > 0:
            for _ in range(chunk):
                if count < existing:
                    result[count] = self._element.read(decoder, result[count])
                else:
                    result.append(self._element.read(decoder, None))
                count += 1
            chunk = decoder.array_next()
        del result[count:]
        return result

    def __repr__(self) -> str:
        return f"ArrayReader({self._element!r})"


_NULLS = NullReader()
_BOOLEANS = BooleanReader()
_INTS = IntReader()
_LONGS = LongReader()
_FLOATS = FloatReader()
_DOUBLES = DoubleReader()
_STRINGS = StringReader()
_BYTES = BytesReader()
_UUIDS = UUIDReader()


def nulls() -> NullReader:
    return _NULLS


def booleans() -> BooleanReader:
    return _BOOLEANS


def ints() -> IntReader:
    return _INTS


def longs() -> LongReader:
    return _LONGS


def floats() -> FloatReader:
    return _FLOATS


def doubles() -> DoubleReader:
    return _DOUBLES


def strings() -> StringReader:
    return _STRINGS


def byte_arrays() -> BytesReader:
    return _BYTES


def uuids() -> UUIDReader:
    return _UUIDS


def fixed(length: int) -> FixedReader:
    return FixedReader(length)


def option(null_index: int, reader: ValueReader[Any]) -> OptionReader:
    return OptionReader(null_index, reader)


def array(element: ValueReader[Any]) -> ArrayReader:
    return ArrayReader(element)


__all__ = [
    "ArrayReader",
    "BooleanReader",
    "BytesReader",
    "DoubleReader",
    "FixedReader",
    "FloatReader",
    "IntReader",
    "LongReader",
    "NullReader",
    "OptionReader",
    "StringReader",
    "UUIDReader",
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
