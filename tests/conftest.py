"""
Pytest configuration for avrogeneric.

Provides fixtures for:
- Encoding test payloads in Avro binary form
- Sample struct types
- Settings isolation between tests
"""

from __future__ import annotations

import logging
import struct as pystruct
from typing import Callable, Iterable, Iterator

import pytest

from avrogeneric.config import get_settings
from avrogeneric.domain.schema import ListType, NestedField, PrimitiveType, StructType
from avrogeneric.infrastructure.decoder import BinaryDecoder
from avrogeneric.datagen import write_long, write_string


class Encoder:
    """
    Minimal Avro binary writer for building test payloads.
    """

    def __init__(self) -> None:
        self.buffer = bytearray()

    def int(self, value: int) -> "Encoder":
        write_long(self.buffer, value)
        return self

    long = int

    def boolean(self, value: bool) -> "Encoder":
        self.buffer.append(1 if value else 0)
        return self

    def double(self, value: float) -> "Encoder":
        self.buffer += pystruct.pack("<d", value)
        return self

    def float(self, value: float) -> "Encoder":
        self.buffer += pystruct.pack("<f", value)
        return self

    def string(self, value: str) -> "Encoder":
        write_string(self.buffer, value)
        return self

    def bytes(self, value: bytes) -> "Encoder":
        write_long(self.buffer, len(value))
        self.buffer += value
        return self

    def raw(self, value: bytes) -> "Encoder":
        self.buffer += value
        return self

    def longs_array(self, values: Iterable[int]) -> "Encoder":
        items = list(values)
        if items:
            write_long(self.buffer, len(items))
            for item in items:
                write_long(self.buffer, item)
        write_long(self.buffer, 0)
        return self

    def decoder(self) -> BinaryDecoder:
        return BinaryDecoder(bytes(self.buffer))

    def getvalue(self) -> bytes:
        return bytes(self.buffer)


@pytest.fixture
def encoder() -> Encoder:
    return Encoder()


@pytest.fixture
def decode() -> Callable[[Callable[[Encoder], object]], BinaryDecoder]:
    """
    Build a decoder from a function that writes into a fresh Encoder.
    """

    def _decode(build: Callable[[Encoder], object]) -> BinaryDecoder:
        enc = Encoder()
        build(enc)
        return enc.decoder()

    return _decode


@pytest.fixture
def temporal_struct() -> StructType:
    return StructType.of(
        NestedField.required(1, "day", PrimitiveType.DATE),
        NestedField.required(2, "at", PrimitiveType.TIME),
    )


@pytest.fixture
def event_struct() -> StructType:
    return StructType.of(
        NestedField.required(1, "id", PrimitiveType.LONG),
        NestedField.of(2, "name", PrimitiveType.STRING),
        NestedField.required(3, "created_at", PrimitiveType.TIMESTAMPTZ),
        NestedField.required(
            4, "scores", ListType(element_id=5, element_type=PrimitiveType.LONG, element_optional=False)
        ),
    )


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """
    Clear the cached Settings around each test so env overrides take effect.
    """
    monkeypatch.delenv("AVRO_CHECK_TIME_RANGE", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    """
    Undo handler changes made by CLI commands that call configure_logging.
    """
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
