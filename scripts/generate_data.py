"""
Synthetic data generation for the decode benchmark.

Writes deterministic, Avro-encoded event records to a file that
`avrogeneric bench` can load.
"""

from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import Optional

import typer

from avrogeneric.config import get_settings
from avrogeneric.datagen import generate_records

app = typer.Typer(help="Generate Avro-encoded synthetic event records.")


@app.command()
def main(
    output: Path = typer.Option(
        Path("data/events.avrobin"),
        "--output",
        "-o",
        help="Output path for the encoded records.",
    ),
    records: Optional[int] = typer.Option(
        None,
        "--records",
        "-r",
        help="Number of records to generate (default from settings).",
    ),
    batch_size: int = typer.Option(
        10_000,
        "--batch-size",
        "-b",
        help="Records encoded per buffered write.",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Deterministic RNG seed (default from settings).",
    ),
) -> None:
    """
    Generate synthetic event records and write them Avro-encoded to a file.
    """
    settings = get_settings()
    total = records or settings.benchmark_records
    rng_seed = settings.benchmark_seed if seed is None else seed

    start = time.perf_counter()
    output.parent.mkdir(parents=True, exist_ok=True)
    typer.echo(f"Generating {total:,} records -> {output} (batch={batch_size}, seed={rng_seed})")
    with output.open("wb") as f:
        size = generate_records(f, records=total, batch_size=batch_size, seed=rng_seed)
    duration = time.perf_counter() - start
    rate = total / duration if duration > 0 else 0.0
    typer.echo(f"Wrote {size:,} bytes in {duration:.2f}s ({rate:,.0f} records/s)")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
