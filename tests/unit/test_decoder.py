from __future__ import annotations

import io
import os

import pytest

from avrogeneric.errors import EndOfStreamError, MalformedStreamError, StreamError
from avrogeneric.infrastructure.decoder import BinaryDecoder, Decoder

INT_MIN = -(1 << 31)
INT_MAX = (1 << 31) - 1
LONG_MIN = -(1 << 63)
LONG_MAX = (1 << 63) - 1


def test_binary_decoder_satisfies_protocol():
    assert isinstance(BinaryDecoder(b""), Decoder)


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"\x00", 0),
        (b"\x01", -1),
        (b"\x02", 1),
        (b"\x7f", -64),
        (b"\x80\x01", 64),
    ],
)
def test_read_int_zigzag_varint(data: bytes, expected: int):
    assert BinaryDecoder(data).read_int() == expected


def test_read_int_and_long_extremes(encoder):
    encoder.int(INT_MIN).int(INT_MAX).long(LONG_MIN).long(LONG_MAX)
    decoder = encoder.decoder()
    assert decoder.read_int() == INT_MIN
    assert decoder.read_int() == INT_MAX
    assert decoder.read_long() == LONG_MIN
    assert decoder.read_long() == LONG_MAX
    assert decoder.is_end()


def test_read_int_rejects_value_beyond_32_bits(encoder):
    encoder.long(INT_MAX + 1)
    with pytest.raises(MalformedStreamError):
        encoder.decoder().read_int()


def test_read_long_rejects_overlong_varint():
    with pytest.raises(MalformedStreamError):
        BinaryDecoder(b"\xff" * 11).read_long()


def test_truncated_varint_raises_end_of_stream():
    decoder = BinaryDecoder(b"\x80\x80")
    with pytest.raises(EndOfStreamError) as excinfo:
        decoder.read_long()
    assert excinfo.value.position == 2
    assert isinstance(excinfo.value, StreamError)


def test_empty_stream_raises_end_of_stream():
    with pytest.raises(EndOfStreamError):
        BinaryDecoder(b"").read_int()


def test_read_strings_bytes_and_fixed(encoder):
    encoder.string("héllo").bytes(b"\x00\x01").raw(b"abcd")
    decoder = encoder.decoder()
    assert decoder.read_string() == "héllo"
    assert decoder.read_bytes() == b"\x00\x01"
    assert decoder.read_fixed(4) == b"abcd"
    assert decoder.position == len(encoder.getvalue())


def test_truncated_string_raises_end_of_stream(encoder):
    encoder.long(10).raw(b"abc")
    with pytest.raises(EndOfStreamError) as excinfo:
        encoder.decoder().read_string()
    assert excinfo.value.needed == 10
    assert excinfo.value.available == 3


def test_negative_length_is_malformed(encoder):
    encoder.long(-2)
    with pytest.raises(MalformedStreamError):
        encoder.decoder().read_bytes()


def test_invalid_utf8_is_malformed(encoder):
    encoder.bytes(b"\xff\xfe")
    with pytest.raises(MalformedStreamError):
        encoder.decoder().read_string()


def test_read_boolean_float_double(encoder):
    encoder.boolean(True).boolean(False).float(1.5).double(-2.25)
    decoder = encoder.decoder()
    assert decoder.read_boolean() is True
    assert decoder.read_boolean() is False
    assert decoder.read_float() == 1.5
    assert decoder.read_double() == -2.25


def test_invalid_boolean_byte_is_malformed():
    with pytest.raises(MalformedStreamError):
        BinaryDecoder(b"\x02").read_boolean()


def test_read_null_consumes_nothing():
    decoder = BinaryDecoder(b"\x02")
    assert decoder.read_null() is None
    assert decoder.position == 0
    assert decoder.read_int() == 1


def test_array_blocks_with_negative_count_skip_byte_size(encoder):
    # Block of 2 items announced as -2 followed by its byte size, then end.
    encoder.long(-2).long(2).long(7).long(8).long(0)
    decoder = encoder.decoder()
    assert decoder.read_array_start() == 2
    assert [decoder.read_long(), decoder.read_long()] == [7, 8]
    assert decoder.array_next() == 0


def test_reads_from_binary_stream():
    decoder = BinaryDecoder(io.BytesIO(b"\x04\x06"))
    assert decoder.read_int() == 2
    assert not decoder.is_end()
    assert decoder.read_long() == 3
    assert decoder.is_end()


def test_oversized_length_prefix_on_file_is_end_of_stream(encoder, tmp_path):
    path = tmp_path / "corrupt.avrobin"
    path.write_bytes(encoder.long(1 << 62).raw(b"ab").getvalue())

    with path.open("rb") as stream:
        with pytest.raises(EndOfStreamError) as excinfo:
            BinaryDecoder(stream).read_bytes()

    assert excinfo.value.needed == 1 << 62
    assert excinfo.value.available == 2


def test_long_value_spanning_chunks_from_file(encoder, tmp_path):
    value = bytes(range(256)) * 1024
    path = tmp_path / "large.avrobin"
    path.write_bytes(encoder.bytes(value).long(3).getvalue())

    with path.open("rb") as stream:
        decoder = BinaryDecoder(stream)
        assert decoder.read_bytes() == value
        assert decoder.read_long() == 3
        assert decoder.is_end()


def test_is_end_on_non_seekable_stream():
    read_fd, write_fd = os.pipe()
    os.write(write_fd, b"\x02\x04")
    os.close(write_fd)

    with os.fdopen(read_fd, "rb") as stream:
        decoder = BinaryDecoder(stream)
        assert not decoder.is_end()
        assert not decoder.is_end()
        assert decoder.position == 0
        assert decoder.read_int() == 1
        assert decoder.position == 1
        assert not decoder.is_end()
        assert decoder.read_long() == 2
        assert decoder.is_end()
        with pytest.raises(EndOfStreamError):
            decoder.read_int()
