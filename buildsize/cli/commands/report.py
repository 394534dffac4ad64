"""``buildsize report PATTERN...`` — publish a build size report.

Measures the current build, writes its snapshot, fetches the previous
build's snapshot, and posts the change report as a comment on the pull
request (or prints it with ``--dry-run``).

A missing previous snapshot is not an error: the run stops after logging
it.  Publishing failures propagate.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import httpx
import typer
from rich.console import Console

from buildsize.config import settings
from buildsize.core.descriptors import FileAccessError
from buildsize.core.diff_engine import InvalidRenameTarget
from buildsize.core.pipeline import SizeReportPipeline
from buildsize.display.renderer import SizeRenderer
from buildsize.models.reports import SizeReport
from buildsize.publishing import ReportPublisher
from buildsize.publishing.console import ConsolePublisher
from buildsize.publishing.github import GitHubCommentPublisher

console = Console()


async def _run_report(
    patterns: list[str],
    *,
    owner: str,
    repo: str,
    issue: int | None,
    pipeline_kwargs: dict,
    snapshot_path: Path | None,
    dry_run: bool,
) -> SizeReport | None:
    # The snapshot host never sees the GitHub token.
    async with GitHubCommentPublisher.build_client(
        settings.github_token, settings.api_url, settings.request_timeout
    ) as client, httpx.AsyncClient(timeout=settings.request_timeout) as snapshot_client:
        pipeline = SizeReportPipeline(
            client=snapshot_client,
            renderer=SizeRenderer(console=console),
            **pipeline_kwargs,
        )
        publisher: ReportPublisher
        if dry_run:
            publisher = ConsolePublisher(console=console)
        else:
            publisher = GitHubCommentPublisher(
                client, owner, repo, issue, marker=settings.hidden_data_marker
            )
        return await pipeline.run(patterns, publisher, snapshot_path=snapshot_path)


def report_cmd(
    patterns: list[str] = typer.Argument(
        ...,
        help="Glob patterns matching the build artifacts.",
    ),
    repo: str = typer.Option(
        ...,
        "--repo",
        help="Repository as owner/name.",
    ),
    issue: int = typer.Option(
        None,
        "--issue",
        "--pr",
        help="Pull request / issue number (defaults to PR_NUMBER).",
    ),
    branch: str = typer.Option(
        None,
        "--branch",
        "-b",
        help="Target branch to compare against (defaults to BUILDSIZE_BRANCH or master).",
    ),
    previous: str = typer.Option(
        None,
        "--previous",
        "-p",
        help="URL or path of the previous snapshot; '{branch}' is substituted.",
    ),
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
    write_snapshot: bool = typer.Option(
        True,
        "--write-snapshot/--no-write-snapshot",
        help="Also write the current build snapshot to BUILDSIZE_SNAPSHOT_DIR.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print the report instead of posting it.",
    ),
) -> None:
    """Compare the current build against the previous one and publish the report."""
    owner, _, repo_name = repo.partition("/")
    if not owner or not repo_name:
        console.print(f"[bold red]--repo must be owner/name, got:[/bold red] {repo}")
        raise typer.Exit(code=1)

    issue = issue if issue is not None else settings.pr_number
    if issue is None and not dry_run:
        console.print("[bold red]No issue number:[/bold red] pass --issue or set PR_NUMBER.")
        raise typer.Exit(code=1)

    pipeline_kwargs = {
        "previous_source": previous or settings.previous_snapshot_url,
        "branch": branch or settings.branch,
        "rename_resolver": find_renamed if find_renamed is not None else settings.find_renamed,
        "threshold": threshold if threshold is not None else settings.threshold,
    }

    try:
        report = asyncio.run(
            _run_report(
                patterns,
                owner=owner,
                repo=repo_name,
                issue=issue,
                pipeline_kwargs=pipeline_kwargs,
                snapshot_path=settings.snapshot_path if write_snapshot else None,
                dry_run=dry_run,
            )
        )
    except (ValueError, FileAccessError, InvalidRenameTarget) as exc:
        console.print(f"[bold red]Size report failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    if report is None:
        console.print("[yellow]No previous build info; report skipped.[/yellow]")
