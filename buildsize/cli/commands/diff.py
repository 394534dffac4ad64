"""``buildsize diff PREVIOUS CURRENT`` — render a report for two local snapshots.

No network access; the markdown report is printed to stdout.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console

from buildsize.config import settings
from buildsize.core.diff_engine import InvalidRenameTarget, compute_diff
from buildsize.core.formatter import format_report
from buildsize.core.rename import load_rename_resolver
from buildsize.core.snapshot import PreviousSnapshotUnavailable, read_snapshot

console = Console()


def diff_cmd(
    previous: Path = typer.Argument(..., help="Snapshot of the previous build."),
    current: Path = typer.Argument(..., help="Snapshot of the current build."),
    find_renamed: str = typer.Option(
        None,
        "--find-renamed",
        "-r",
        help="Rename strategy: none, similarity[:cutoff], a [hash] pattern, or module:callable.",
    ),
    threshold: int = typer.Option(
        None,
        "--threshold",
        help="Byte delta separating major from minor changes.",
    ),
) -> None:
    """Compare two snapshot files and print the markdown report."""
    try:
        resolver = load_rename_resolver(find_renamed if find_renamed is not None else settings.find_renamed)
        previous_set = read_snapshot(previous)
        current_set = read_snapshot(current)
        diff = asyncio.run(compute_diff(previous_set, current_set, resolver))
    except (ValueError, PreviousSnapshotUnavailable, InvalidRenameTarget) as exc:
        console.print(f"[bold red]Diff failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    report = format_report(diff, threshold=threshold if threshold is not None else settings.threshold)
    console.print(report.render(), markup=False, highlight=False, emoji=False, soft_wrap=True)
