"""
Avro binary decoder.

Reads primitive values from an Avro binary-encoded stream. Readers consume
this through the `Decoder` protocol only, so any object with the same
read-primitive methods can stand in (tests use the concrete `BinaryDecoder`).

Encoding summary:
- int/long: zig-zag encoded variable-length integers (at most 5 / 10 bytes)
- float/double: little-endian IEEE 754
- bytes/string: long length followed by that many bytes (strings are UTF-8)
- arrays/maps: blocks of items, each block prefixed with a long count; a
  negative count is followed by the block size in bytes; a zero count ends it
"""

from __future__ import annotations

import io
import struct
from typing import BinaryIO, Protocol, Union, runtime_checkable

from avrogeneric.errors import EndOfStreamError, MalformedStreamError

_INT_MIN = -(1 << 31)
_INT_MAX = (1 << 31) - 1
_LONG_MIN = -(1 << 63)
_LONG_MAX = (1 << 63) - 1

_MAX_INT_BYTES = 5
_MAX_LONG_BYTES = 10
_CHUNK_SIZE = 64 * 1024

_FLOAT = struct.Struct("<f")
_DOUBLE = struct.Struct("<d")


@runtime_checkable
class Decoder(Protocol):
    """
    Sequential reader of primitive values.

    Every method consumes bytes at the current position and advances it.
    Implementations raise `StreamError` subclasses on truncated or malformed input.
    """

    def read_null(self) -> None: ...

    def read_boolean(self) -> bool: ...

    def read_int(self) -> int: ...

    def read_long(self) -> int: ...

    def read_float(self) -> float: ...

    def read_double(self) -> float: ...

    def read_bytes(self) -> bytes: ...

    def read_string(self) -> str: ...

    def read_fixed(self, length: int) -> bytes: ...

    def read_index(self) -> int: ...

    def read_array_start(self) -> int: ...

    def array_next(self) -> int: ...


class BinaryDecoder:
    """
    Decoder over an in-memory buffer or a readable binary stream.

    Parameters
    ----------
    source : bytes | bytearray | memoryview | BinaryIO
        Encoded data. Byte buffers are wrapped in a `BytesIO`.
    """

    def __init__(self, source: Union[bytes, bytearray, memoryview, BinaryIO]) -> None:
        if isinstance(source, (bytes, bytearray, memoryview)):
            self._stream: BinaryIO = io.BytesIO(bytes(source))
        else:
            self._stream = source
        self._position = 0
        # Byte peeked by is_end(); streams need not be seekable.
        self._pending = b""

    @property
    def position(self) -> int:
        """Number of bytes consumed so far."""
        return self._position

    def is_end(self) -> bool:
        """Return True when no bytes remain."""
        if self._pending:
            return False
        self._pending = self._stream.read(1)
        return not self._pending

    def _read(self, length: int) -> bytes:
        if not self._pending and length <= _CHUNK_SIZE:
            data = self._stream.read(length)
            if len(data) == length:
                self._position += length
                return data
            parts = [data]
            got = len(data)
        else:
            parts = [self._pending[:length]]
            got = len(parts[0])
            self._pending = self._pending[got:]
        # Memory grows with the bytes present, not with the claimed length.
        while got < length:
            chunk = self._stream.read(min(length - got, _CHUNK_SIZE))
            if not chunk:
                raise EndOfStreamError(needed=length, available=got, position=self._position)
            parts.append(chunk)
            got += len(chunk)
        self._position += length
        return b"".join(parts)

    def _read_varint(self, max_bytes: int) -> int:
        result = 0
        shift = 0
        for _ in range(max_bytes):
            byte = self._read(1)[0]
            result |= (byte & 0x7F) << shift
            if not byte & 0x80:
                return (result >> 1) ^ -(result & 1)
            shift += 7
        raise MalformedStreamError(
            f"Variable-length integer longer than {max_bytes} bytes at byte {self._position}"
        )

    def read_null(self) -> None:
        return None

    def read_boolean(self) -> bool:
        byte = self._read(1)[0]
        if byte > 1:
            raise MalformedStreamError(f"Invalid boolean byte {byte:#x} at byte {self._position - 1}")
        return byte == 1

    def read_int(self) -> int:
        value = self._read_varint(_MAX_INT_BYTES)
        if not _INT_MIN <= value <= _INT_MAX:
            raise MalformedStreamError(f"Int value {value} out of 32-bit range")
        return value

    def read_long(self) -> int:
        value = self._read_varint(_MAX_LONG_BYTES)
        if not _LONG_MIN <= value <= _LONG_MAX:
            raise MalformedStreamError(f"Long value {value} out of 64-bit range")
        return value

    def read_float(self) -> float:
        return _FLOAT.unpack(self._read(4))[0]

    def read_double(self) -> float:
        return _DOUBLE.unpack(self._read(8))[0]

    def read_bytes(self) -> bytes:
        length = self.read_long()
        if length < 0:
            raise MalformedStreamError(f"Negative length {length} at byte {self._position}")
        return self._read(length)

    def read_string(self) -> str:
        data = self.read_bytes()
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedStreamError(f"Invalid UTF-8 string ending at byte {self._position}") from exc

    def read_fixed(self, length: int) -> bytes:
        return self._read(length)

    def read_index(self) -> int:
        return self.read_int()

    def _read_block_count(self) -> int:
        count = self.read_long()
        if count < 0:
            # Negative counts carry the block size in bytes, which is only
            # useful for skipping.
            self.read_long()
            count = -count
        return count

    def read_array_start(self) -> int:
        return self._read_block_count()

    def array_next(self) -> int:
        return self._read_block_count()


__all__ = ["Decoder", "BinaryDecoder"]
