"""``buildsize snapshot PATTERN...`` — record the current build sizes.

Expands the glob patterns, measures every file (raw and gzip size), and
writes the snapshot JSON so a later run can use it as the previous build.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console

from buildsize.config import settings
from buildsize.core.descriptors import FileAccessError
from buildsize.core.pipeline import snapshot_build
from buildsize.display.renderer import SizeRenderer

console = Console()


def snapshot_cmd(
    patterns: list[str] = typer.Argument(
        ...,
        help="Glob patterns matching the build artifacts.",
    ),
    output_dir: Path = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory to write the snapshot to (defaults to BUILDSIZE_SNAPSHOT_DIR).",
    ),
) -> None:
    """Measure the build artifacts and write ``buildsize.json``."""
    target = (output_dir or settings.snapshot_dir) / settings.snapshot_filename

    try:
        artifacts = asyncio.run(snapshot_build(patterns, target))
    except FileAccessError as exc:
        console.print(f"[bold red]Cannot measure artifacts:[/bold red] {exc}")
        raise typer.Exit(code=1)

    SizeRenderer(console=console).print_artifacts(artifacts)
    console.print(f"[bold green]Snapshot written:[/bold green] {target}")
