"""Main Typer application — imports and registers all CLI commands.

Entry point: ``buildsize`` (configured via pyproject.toml scripts).

Commands: snapshot, report, diff.
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from buildsize.cli.commands.diff import diff_cmd
from buildsize.cli.commands.report import report_cmd
from buildsize.cli.commands.snapshot import snapshot_cmd
from buildsize.config import settings

app = typer.Typer(
    name="buildsize",
    help="Buildsize: report gzip size changes between builds.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to BUILDSIZE_LOG_LEVEL or INFO).",
    ),
) -> None:
    """Configure logging for every command."""
    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


# Register subcommands
app.command(name="snapshot", help="Record the current build sizes to a JSON snapshot.")(snapshot_cmd)
app.command(name="report", help="Compare against the previous build and publish the report.")(report_cmd)
app.command(name="diff", help="Render the size report for two local snapshots.")(diff_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
