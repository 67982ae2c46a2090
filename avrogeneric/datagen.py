"""
Synthetic event payloads for the decode benchmark.

Deterministic pseudo-random events encoded in Avro binary as records of
`avrogeneric.bench.EVENT_STRUCT`, written back to back.
"""

from __future__ import annotations

import io
import random
import struct
from typing import BinaryIO, List, Optional

_CATEGORIES = ["alpha", "beta", "gamma", "delta"]
_TAGS = ["view", "click", "purchase", "impression", "refund"]


def write_long(out: bytearray, value: int) -> None:
    """Append a zig-zag varint; also the encoding of an int."""
    n = (value << 1) ^ (value >> 63)
    while n & ~0x7F:
        out.append((n & 0x7F) | 0x80)
        n >>= 7
    out.append(n)


def write_string(out: bytearray, value: str) -> None:
    data = value.encode("utf-8")
    write_long(out, len(data))
    out += data


def _encode_event(out: bytearray, rng: random.Random, event_id: int) -> None:
    event_day = rng.randint(-3_650, 20_000)
    created = rng.randint(-(10**15), 4 * 10**15)
    updated = created + rng.randint(0, 86_400_000_000)
    tags: List[str] = rng.sample(_TAGS, rng.randint(0, 3))
    note: Optional[str] = rng.choice([None, "manual", "imported"])

    write_long(out, event_id)
    write_long(out, event_day)
    write_long(out, rng.randrange(86_400_000_000))
    write_long(out, created)
    write_long(out, updated)
    write_string(out, rng.choice(_CATEGORIES))
    out += struct.pack("<d", round(rng.uniform(1, 10_000), 2))
    out.append(1 if rng.random() < 0.5 else 0)
    if tags:
        write_long(out, len(tags))
        for tag in tags:
            write_string(out, tag)
    write_long(out, 0)
    if note is None:
        write_long(out, 0)
    else:
        write_long(out, 1)
        write_string(out, note)


def generate_records(out: BinaryIO, records: int, batch_size: int, seed: int) -> int:
    """Encode `records` events into `out`; returns the number of bytes written."""
    rng = random.Random(seed)
    buffer = bytearray()
    written = 0
    for event_id in range(records):
        _encode_event(buffer, rng, event_id)
        if (event_id + 1) % batch_size == 0:
            out.write(buffer)
            written += len(buffer)
            buffer.clear()
    if buffer:
        out.write(buffer)
        written += len(buffer)
    return written


def generate_payload(records: int, seed: int, batch_size: int = 10_000) -> bytes:
    """Encode `records` events in memory."""
    buffer = io.BytesIO()
    generate_records(buffer, records=records, batch_size=batch_size, seed=seed)
    return buffer.getvalue()


__all__ = ["generate_payload", "generate_records", "write_long", "write_string"]
