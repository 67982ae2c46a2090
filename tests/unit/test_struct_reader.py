from __future__ import annotations

import logging
from datetime import date, datetime, time, timezone

import pytest

from avrogeneric.domain.record import GenericRecord
from avrogeneric.domain.schema import NestedField, PrimitiveType, StructType
from avrogeneric.errors import EndOfStreamError
from avrogeneric.readers import primitives
from avrogeneric.readers.record import GenericRecordReader, struct
from avrogeneric.readers.temporal import dates, times, timestamptz


class RecordingReader:
    """Long reader that remembers the reuse hint it was given."""

    def __init__(self) -> None:
        self.hints: list = []

    def read(self, decoder, reuse=None):
        self.hints.append(reuse)
        return decoder.read_long()


def _event_reader(event_struct: StructType) -> GenericRecordReader:
    return struct(
        event_struct,
        [
            primitives.longs(),
            primitives.option(0, primitives.strings()),
            timestamptz(),
            primitives.array(primitives.longs()),
        ],
    )


def _encode_event(enc, event_id: int, name, micros: int, scores) -> None:
    enc.long(event_id)
    if name is None:
        enc.int(0)
    else:
        enc.int(1).string(name)
    enc.long(micros)
    enc.longs_array(scores)


def test_fields_decoded_in_declared_order(decode, temporal_struct):
    reader = struct(temporal_struct, [dates(), times()])
    record = reader.read(decode(lambda e: e.int(0).long(3_600_000_000)))

    assert isinstance(record, GenericRecord)
    assert record.get(0) == date(1970, 1, 1)
    assert record.get(1) == time(1, 0)
    assert record.get_field("at") == time(1, 0)


def test_sub_second_time_field(decode, temporal_struct):
    reader = struct(temporal_struct, [dates(), times()])
    record = reader.read(decode(lambda e: e.int(0).long(3_600_000)))
    assert record.get(1) == time(0, 0, 3, 600_000)


def test_creates_new_record_without_reuse(decode, event_struct):
    reader = _event_reader(event_struct)
    record = reader.read(decode(lambda e: _encode_event(e, 7, "alpha", 0, [1, 2])))

    assert record.struct() == event_struct
    assert record.to_dict() == {
        "id": 7,
        "name": "alpha",
        "created_at": datetime(1970, 1, 1, tzinfo=timezone.utc),
        "scores": [1, 2],
    }


def test_result_identical_with_and_without_reuse(encoder, event_struct):
    reader = _event_reader(event_struct)
    _encode_event(encoder, 1, "first", 10, [1, 2, 3])
    _encode_event(encoder, 2, None, -10, [4])
    _encode_event(encoder, 2, None, -10, [4])
    decoder = encoder.decoder()

    reused = reader.read(decoder)
    scores_list = reused.get(3)
    fresh_first = reused.copy()

    second = reader.read(decoder, reused)
    third = reader.read(decoder)

    assert second is reused
    assert second.get(3) is scores_list
    assert second == third
    assert second != fresh_first
    assert second.get(1) is None
    assert second.get(3) == [4]
    assert decoder.is_end()


def test_prior_values_passed_as_reuse_hints(encoder):
    recorder = RecordingReader()
    shape = StructType.of(NestedField.required(1, "n", PrimitiveType.LONG))
    reader = struct(shape, [recorder])
    decoder = encoder.long(5).long(6).decoder()

    record = reader.read(decoder)
    reader.read(decoder, record)

    assert recorder.hints == [None, 5]
    assert record.get(0) == 6


def test_incompatible_reuse_allocates_fresh(decode, temporal_struct, event_struct):
    reader = struct(temporal_struct, [dates(), times()])
    foreign = GenericRecord.create(event_struct)
    foreign.set(0, 99)

    record = reader.read(decode(lambda e: e.int(1).long(0)), foreign)

    assert record is not foreign
    assert record.struct() == temporal_struct
    assert record.get(0) == date(1970, 1, 2)
    assert foreign.get(0) == 99


@pytest.mark.parametrize("reuse", ["not a record", 42, [None, None], {"day": None}])
def test_non_record_reuse_allocates_fresh(decode, temporal_struct, reuse):
    reader = struct(temporal_struct, [dates(), times()])
    record = reader.read(decode(lambda e: e.int(0).long(0)), reuse)
    assert isinstance(record, GenericRecord)
    assert record.get(1) == time(0, 0)


def test_rejected_reuse_is_logged_at_debug(decode, temporal_struct, caplog):
    reader = struct(temporal_struct, [dates(), times()])
    with caplog.at_level(logging.DEBUG, logger="avrogeneric.readers.record"):
        reader.read(decode(lambda e: e.int(0).long(0)), "nope")
    assert any("Reuse object rejected" in r.getMessage() for r in caplog.records)


def test_equal_struct_from_other_instance_is_reused(decode, temporal_struct):
    reader = struct(temporal_struct, [dates(), times()])
    twin = StructType.of(*temporal_struct.fields)
    target = GenericRecord.create(twin)

    assert reader.read(decode(lambda e: e.int(0).long(0)), target) is target


def test_truncated_stream_fails_without_record(encoder, temporal_struct):
    reader = struct(temporal_struct, [dates(), times()])
    decoder = encoder.int(0).decoder()
    with pytest.raises(EndOfStreamError):
        reader.read(decoder)


def test_failure_leaves_earlier_fields_of_reused_record_overwritten(encoder, temporal_struct):
    reader = struct(temporal_struct, [dates(), times()])
    target = GenericRecord.create(temporal_struct)
    target.set(0, date(2000, 1, 1))
    target.set(1, time(12, 0))

    with pytest.raises(EndOfStreamError):
        reader.read(encoder.int(1).decoder(), target)

    assert target.get(0) == date(1970, 1, 2)
    assert target.get(1) == time(12, 0)


def test_failing_field_stops_decoding(encoder):
    after = RecordingReader()
    shape = StructType.of(
        NestedField.required(1, "s", PrimitiveType.STRING),
        NestedField.required(2, "n", PrimitiveType.LONG),
    )
    reader = struct(shape, [primitives.strings(), after])

    with pytest.raises(EndOfStreamError):
        reader.read(encoder.long(5).raw(b"ab").decoder())
    assert after.hints == []


def test_nested_struct_reuses_inner_record(encoder, temporal_struct):
    outer = StructType.of(
        NestedField.required(1, "id", PrimitiveType.LONG),
        NestedField.required(2, "when", temporal_struct),
    )
    inner_reader = struct(temporal_struct, [dates(), times()])
    reader = struct(outer, [primitives.longs(), inner_reader])
    decoder = encoder.long(1).int(0).long(0).long(2).int(1).long(1).decoder()

    first = reader.read(decoder)
    inner = first.get(1)
    second = reader.read(decoder, first)

    assert second.get(1) is inner
    assert second.to_dict() == {"id": 2, "when": {"day": date(1970, 1, 2), "at": time(0, 0, 0, 1)}}


def test_list_of_structs(encoder, temporal_struct):
    reader = primitives.array(struct(temporal_struct, [dates(), times()]))
    decoder = encoder.long(2).int(0).long(0).int(-1).long(1_000_000).long(0).decoder()

    records = reader.read(decoder)

    assert [r.get(0) for r in records] == [date(1970, 1, 1), date(1969, 12, 31)]
    assert records[1].get(1) == time(0, 0, 1)


def test_reader_count_must_match_struct(temporal_struct):
    with pytest.raises(ValueError, match="2 field"):
        struct(temporal_struct, [dates()])


def test_reader_exposes_struct_and_readers(temporal_struct):
    reader = struct(temporal_struct, [dates(), times()])
    assert reader.struct_type is temporal_struct
    assert reader.readers == (dates(), times())
    assert "DateReader" in repr(reader)
