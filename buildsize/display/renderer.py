"""Rich terminal renderer for build size traces.

Prints the intermediate state of a report run (current sizes, the computed
diff, and the final report) so a failed publish can be debugged from the CI
log alone.

Color scheme
------------
- red     : grew / added
- green   : shrank / removed
- yellow  : renamed
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from buildsize.core.formatter import pretty_bytes
from buildsize.models.artifacts import ArtifactSet
from buildsize.models.diff import DiffResult
from buildsize.models.reports import SizeReport


def _delta_markup(delta: int) -> str:
    text = pretty_bytes(delta, signed=True)
    if delta > 0:
        return f"[red]{text}[/red]"
    if delta < 0:
        return f"[green]{text}[/green]"
    return f"[yellow]{text}[/yellow]"


class SizeRenderer:
    """Renders artifact sets, diffs and reports as Rich terminal output.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_artifacts(self, artifacts: ArtifactSet, title: str = "Build Size") -> Table:
        table = Table(title=title, header_style="bold cyan", show_lines=False)
        table.add_column("Name", style="cyan")
        table.add_column("Path", style="dim")
        table.add_column("Size", justify="right")
        table.add_column("Gzip", justify="right", style="bold")

        for artifact in artifacts.artifacts:
            table.add_row(
                escape(artifact.name),
                escape(artifact.path),
                pretty_bytes(artifact.size),
                pretty_bytes(artifact.gzip_size),
            )
        return table

    def render_diff(self, diff: DiffResult) -> Table:
        table = Table(title="Changes", header_style="bold cyan")
        table.add_column("Status", justify="center")
        table.add_column("Previous", style="dim")
        table.add_column("Current")
        table.add_column("Delta", justify="right")

        for change in diff.changed_artifacts:
            status = "renamed" if change.renamed else "changed"
            table.add_row(status, escape(change.previous.path), escape(change.current.path), _delta_markup(change.delta))
        for artifact in diff.new_artifacts:
            table.add_row("[red]new[/red]", "-", escape(artifact.path), _delta_markup(artifact.gzip_size))
        for artifact in diff.removed_artifacts:
            table.add_row("[green]removed[/green]", escape(artifact.path), "-", _delta_markup(-artifact.gzip_size))
        return table

    # ------------------------------------------------------------------
    # Print helpers
    # ------------------------------------------------------------------

    def print_artifacts(self, artifacts: ArtifactSet, title: str = "Build Size") -> None:
        self.console.print(self.render_artifacts(artifacts, title))

    def print_diff(self, diff: DiffResult) -> None:
        if diff.is_empty:
            self.console.print("[dim]No changes.[/dim]")
            return
        self.console.print(self.render_diff(diff))

    def print_report(self, report: SizeReport) -> None:
        self.console.print(
            Panel(
                Text(report.render()),
                title="[bold]Size Report[/bold]",
                border_style="blue",
                padding=(1, 2),
            )
        )
