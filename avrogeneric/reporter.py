from __future__ import annotations

from typing import Any, Dict, List

from rich import box
from rich.console import Console
from rich.table import Table


def _mb(value: Any) -> str:
    if not value:
        return "N/A"
    return f"{value / (1024 * 1024):.2f}"


def print_results(results: List[Dict[str, Any]], console: Console | None = None) -> None:
    """
    Render decode benchmark results as a rich table.

    Handles both single-run results and aggregated multi-run results.
    """
    console = console or Console()

    if not results:
        console.print("[yellow]No results to display.[/yellow]")
        return

    is_aggregated = isinstance(results[0].get("runs"), int) and results[0]["runs"] > 1

    table = Table(
        title="Generic Record Decode Benchmark",
        box=box.ROUNDED,
        caption="Sorted by Throughput (descending)",
    )
    table.add_column("Mode", style="cyan", no_wrap=True)
    table.add_column("Records", justify="right", style="magenta")
    if is_aggregated:
        table.add_column("Runs", justify="right", style="blue")
        table.add_column(
            "Duration (s)\n[dim](Median ± StdDev)[/dim]", justify="right", style="green"
        )
        table.add_column(
            "Throughput (records/s)\n[dim](Median)[/dim]", justify="right", style="bold green"
        )
        table.add_column("Peak Memory (MB)\n[dim](Median)[/dim]", justify="right", style="yellow")
    else:
        table.add_column("Duration (s)", justify="right", style="green")
        table.add_column("Throughput (records/s)", justify="right", style="bold green")
        table.add_column("Peak Memory (MB)", justify="right", style="yellow")
        table.add_column("Peak Traced (MB)", justify="right", style="yellow")
    table.add_column("Error", style="red")

    def get_sort_key(r: Dict[str, Any]) -> float:
        throughput = r.get("throughput_records_per_sec")
        if isinstance(throughput, dict):
            return throughput["median"]
        return throughput or 0.0

    for res in sorted(results, key=get_sort_key, reverse=True):
        mode = res.get("mode", "Unknown")
        records = f"{res.get('records', 0):,}"
        error = res.get("error") or ""

        if is_aggregated and not error:
            duration = res["duration_seconds"]
            throughput = res["throughput_records_per_sec"]["median"]
            rss = res.get("peak_rss_bytes", {}).get("median")
            table.add_row(
                mode,
                records,
                str(res["runs"]),
                f"{duration['median']:.3f} ± {duration['stddev']:.3f}",
                f"{throughput:,.2f}",
                _mb(rss),
                error,
            )
        elif is_aggregated:
            table.add_row(mode, records, str(res.get("runs", 0)), "-", "-", "-", error)
        else:
            table.add_row(
                mode,
                records,
                f"{res.get('duration_seconds', 0.0):.3f}",
                f"{res.get('throughput_records_per_sec', 0.0):,.2f}",
                _mb(res.get("peak_rss_bytes")),
                _mb(res.get("peak_traced_bytes")),
                error,
            )

    console.print(table)


__all__ = ["print_results"]
