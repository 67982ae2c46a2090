from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import typer

from avrogeneric.bench import available_modes, run_modes
from avrogeneric.config import get_settings
from avrogeneric.datagen import generate_payload
from avrogeneric.reporter import print_results
from avrogeneric.utils.logging import configure_logging, get_logger

log = get_logger(__name__)

app = typer.Typer(help="Generic record decoding tools.")


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"log_level={settings.log_level} json={settings.log_json} "
        f"check_time_range={settings.check_time_range} | "
        f"records={settings.benchmark_records} seed={settings.benchmark_seed} "
        f"runs={settings.benchmark_runs}"
    )


@app.command()
def bench(
    input_path: Optional[Path] = typer.Argument(
        None,
        exists=True,
        dir_okay=False,
        help="File of encoded event records (see scripts/generate_data.py)."
        " Generated in memory when omitted.",
    ),
    records: Optional[int] = typer.Option(
        None,
        "--records",
        "-r",
        help="Records to generate when no file is given (default from settings).",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="RNG seed for generated records (default from settings).",
    ),
    mode: str = typer.Option(
        "all",
        "--mode",
        "-m",
        help="Decode mode to run (fresh, reuse, all, list).",
    ),
    runs: Optional[int] = typer.Option(
        None,
        "--runs",
        "-n",
        help="Measurement runs per mode (default from settings).",
    ),
    trace_allocations: bool = typer.Option(
        False,
        "--trace-allocations",
        help="Record peak Python allocations with tracemalloc.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print results as JSON instead of a table.",
    ),
) -> None:
    """
    Decode event records, from a file or generated in memory, with each mode and
    report throughput.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    if mode == "list":
        typer.echo("Available modes: " + ", ".join(available_modes()))
        return

    if input_path is not None:
        payload = input_path.read_bytes()
    else:
        total = records or settings.benchmark_records
        rng_seed = settings.benchmark_seed if seed is None else seed
        log.info(
            f"Generating {total:,} records in memory",
            extra={"records": total, "seed": rng_seed},
        )
        payload = generate_payload(total, seed=rng_seed)
    try:
        results = run_modes(payload, modes=[mode], runs=runs, trace_allocations=trace_allocations)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2)

    if as_json:
        typer.echo(json.dumps(results, indent=2))
    else:
        print_results(results)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
