"""
Decode benchmark harness.

Decodes a buffer of Avro-encoded event records with each decode mode, profiles
every run, and aggregates repeated runs.

Modes:
- fresh: every record is decoded into a newly allocated `GenericRecord`
- reuse: the previous record is passed back as the reuse target

Usage (example from CLI):
    from avrogeneric.bench import run_modes

    results = run_modes(payload, modes=["fresh", "reuse"], runs=3)

The payload comes from `avrogeneric.datagen` (in memory, or written to a file
by `scripts/generate_data.py`) and holds records of `EVENT_STRUCT`.
"""

from __future__ import annotations

import statistics
from typing import Dict, Iterable, List, Optional, TypedDict

from avrogeneric.config import get_settings
from avrogeneric.domain.record import GenericRecord
from avrogeneric.domain.schema import ListType, NestedField, PrimitiveType, StructType
from avrogeneric.errors import DecodeError
from avrogeneric.infrastructure.decoder import BinaryDecoder
from avrogeneric.readers import primitives, temporal
from avrogeneric.readers.record import GenericRecordReader, struct
from avrogeneric.utils.logging import get_logger
from avrogeneric.utils.profiler import ProfileStats, profile_block

log = get_logger(__name__)

EVENT_STRUCT = StructType.of(
    NestedField.required(1, "id", PrimitiveType.LONG),
    NestedField.required(2, "event_date", PrimitiveType.DATE),
    NestedField.required(3, "event_time", PrimitiveType.TIME),
    NestedField.required(4, "created_at", PrimitiveType.TIMESTAMP),
    NestedField.required(5, "updated_at", PrimitiveType.TIMESTAMPTZ),
    NestedField.required(6, "category", PrimitiveType.STRING),
    NestedField.required(7, "amount", PrimitiveType.DOUBLE),
    NestedField.required(8, "is_active", PrimitiveType.BOOLEAN),
    NestedField.required(
        9, "tags", ListType(element_id=11, element_type=PrimitiveType.STRING, element_optional=False)
    ),
    NestedField.of(10, "note", PrimitiveType.STRING),
)

MODES = ("fresh", "reuse")


class DecodeResult(TypedDict, total=False):
    """
    Metrics for one decode run.
    """

    mode: str
    run: int
    records: int
    duration_seconds: float
    throughput_records_per_sec: float
    peak_rss_bytes: Optional[int]
    peak_traced_bytes: Optional[int]
    cpu_percent: Optional[float]
    error: Optional[str]


def event_reader() -> GenericRecordReader:
    """Reader for `EVENT_STRUCT`, one field reader per position."""
    return struct(
        EVENT_STRUCT,
        [
            primitives.longs(),
            temporal.dates(),
            temporal.times(),
            temporal.timestamps(),
            temporal.timestamptz(),
            primitives.strings(),
            primitives.doubles(),
            primitives.booleans(),
            primitives.array(primitives.strings()),
            primitives.option(0, primitives.strings()),
        ],
    )


def decode_all(payload: bytes, reuse: bool) -> int:
    """
    Decode every record in `payload` and return how many were read.
    """
    decoder = BinaryDecoder(payload)
    reader = event_reader()
    target: Optional[GenericRecord] = None
    count = 0
    while not decoder.is_end():
        record = reader.read(decoder, target)
        if reuse:
            target = record
        count += 1
    return count


def available_modes() -> List[str]:
    return sorted(MODES)


def _round_float(value: float, decimals: int = 2) -> float:
    return round(value, decimals)


def _summary(values: List[float], decimals: int = 2) -> Dict[str, float]:
    return {
        "median": _round_float(statistics.median(values), decimals),
        "mean": _round_float(statistics.mean(values), decimals),
        "stddev": _round_float(statistics.stdev(values), decimals) if len(values) > 1 else 0.0,
        "min": _round_float(min(values), decimals),
        "max": _round_float(max(values), decimals),
    }


def _aggregate_runs(run_results: List[DecodeResult]) -> dict:
    """
    Aggregate multiple runs of one mode into median/mean/stddev/min/max.
    """
    ok = [r for r in run_results if not r.get("error")]
    if not ok:
        return {"records": 0, "error": run_results[-1].get("error")}

    aggregated: dict = {
        "records": ok[0]["records"],
        "duration_seconds": _summary([r["duration_seconds"] for r in ok]),
        "throughput_records_per_sec": _summary([r["throughput_records_per_sec"] for r in ok]),
    }
    cpu = [r["cpu_percent"] for r in ok if r.get("cpu_percent")]
    if cpu:
        aggregated["cpu_percent"] = _summary(cpu, decimals=1)
    rss = [r["peak_rss_bytes"] for r in ok if r.get("peak_rss_bytes")]
    if rss:
        aggregated["peak_rss_bytes"] = {k: int(v) for k, v in _summary(rss, decimals=0).items()}
    return aggregated


def _merge_result(mode: str, run: int, records: int, stats: ProfileStats) -> DecodeResult:
    duration = stats.duration_seconds
    return DecodeResult(
        mode=mode,
        run=run,
        records=records,
        duration_seconds=_round_float(duration, 4),
        throughput_records_per_sec=_round_float(records / duration) if duration > 0 else 0.0,
        peak_rss_bytes=stats.peak_rss_bytes,
        peak_traced_bytes=stats.peak_traced_bytes,
        cpu_percent=_round_float(stats.cpu_percent, 1) if stats.cpu_percent else None,
    )


def _profiled_decode(mode: str, run: int, payload: bytes, trace_allocations: bool) -> DecodeResult:
    log.info(f"[MODE START] {mode}", extra={"mode": mode, "run": run})
    with profile_block(mode, enable_tracemalloc=trace_allocations) as stats:
        try:
            records = decode_all(payload, reuse=(mode == "reuse"))
        except (DecodeError, OverflowError) as exc:
            log.exception(f"[MODE FAILED] {mode}", extra={"mode": mode, "run": run})
            return DecodeResult(mode=mode, run=run, records=0, duration_seconds=0.0, error=str(exc))
    result = _merge_result(mode, run, records, stats)
    log.info(
        f"[MODE SUCCESS] {mode}",
        extra={
            "mode": mode,
            "run": run,
            "records": records,
            "throughput_rps": result["throughput_records_per_sec"],
        },
    )
    return result


def run_modes(
    payload: bytes,
    modes: Optional[Iterable[str]] = None,
    runs: Optional[int] = None,
    trace_allocations: bool = False,
) -> List[dict]:
    """
    Decode `payload` with each mode and return per-mode results.

    Parameters
    ----------
    payload : bytes
        Concatenated encoded records of `EVENT_STRUCT`.
    modes : iterable[str] | None
        Modes to run. None or ["all"] runs every mode.
    runs : int | None
        Measurement runs per mode. Defaults to settings.benchmark_runs.
    trace_allocations : bool
        Record peak Python allocations with tracemalloc.

    Returns
    -------
    List[dict]
        One result per mode; aggregated statistics when runs > 1.
    """
    effective_runs = runs or get_settings().benchmark_runs
    names = list(modes) if modes is not None else ["all"]
    if names == ["all"]:
        names = available_modes()
    for name in names:
        if name not in MODES:
            raise ValueError(f"Unknown mode '{name}'. Available: {', '.join(available_modes())}")

    results: List[dict] = []
    for name in names:
        run_results = [
            _profiled_decode(name, run, payload, trace_allocations)
            for run in range(1, effective_runs + 1)
        ]
        if effective_runs > 1:
            aggregated = _aggregate_runs(run_results)
            aggregated["mode"] = name
            aggregated["runs"] = effective_runs
            aggregated["individual_runs"] = run_results
            results.append(aggregated)
        else:
            results.extend(run_results)

    log.info(
        f"[BENCH COMPLETE] {len(names)} mode(s) executed",
        extra={"modes": names, "runs": effective_runs},
    )
    return results


__all__ = [
    "EVENT_STRUCT",
    "MODES",
    "DecodeResult",
    "available_modes",
    "decode_all",
    "event_reader",
    "run_modes",
]
