"""Size report pipeline — the central coordinator for a report run.

Wires together glob expansion, descriptor building, the previous snapshot
source, the diff engine, the formatter and a publisher:

    patterns -> current ArtifactSet -> (previous ArtifactSet) -> DiffResult
             -> SizeReport -> publisher

The intermediate state is traced to the console before any network write,
so a failed publish can still be diagnosed from the log.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import httpx

from buildsize.core.descriptors import build_descriptors, expand_globs
from buildsize.core.diff_engine import compute_diff
from buildsize.core.formatter import DEFAULT_THRESHOLD, format_report
from buildsize.core.rename import RenameResolver, load_rename_resolver
from buildsize.core.snapshot import (
    PreviousSnapshotUnavailable,
    fetch_previous_snapshot,
    write_snapshot,
)
from buildsize.display.renderer import SizeRenderer
from buildsize.models.artifacts import ArtifactSet
from buildsize.models.reports import SizeReport
from buildsize.publishing import ReportPublisher

logger = logging.getLogger(__name__)


class SizeReportPipeline:
    """Runs a complete build size report.

    Parameters
    ----------
    previous_source:
        URL or local path of the previous build's snapshot.  A ``{branch}``
        placeholder is replaced with *branch*.
    branch:
        Target branch the report compares against.
    rename_resolver:
        A resolver instance, or a strategy identifier understood by
        ``load_rename_resolver``.
    threshold:
        Byte delta separating major from minor changes.
    client:
        Shared HTTP client used to fetch the previous snapshot.
    renderer:
        Console trace renderer.  A default one is created if omitted.
    """

    def __init__(
        self,
        previous_source: str,
        *,
        branch: str = "master",
        rename_resolver: RenameResolver | str | None = None,
        threshold: int = DEFAULT_THRESHOLD,
        client: httpx.AsyncClient | None = None,
        renderer: SizeRenderer | None = None,
    ) -> None:
        if isinstance(rename_resolver, str):
            rename_resolver = load_rename_resolver(rename_resolver)
        self.branch = branch
        self.previous_source = previous_source.replace("{branch}", branch)
        self.rename_resolver = rename_resolver
        self.threshold = threshold
        self._client = client
        self.renderer = renderer or SizeRenderer()

    async def collect(self, patterns: str | Iterable[str]) -> ArtifactSet:
        """Expand *patterns* and measure the matching files."""
        paths = expand_globs(patterns)
        artifacts = await build_descriptors(paths)
        logger.info("Collected %d artifact(s)", len(artifacts))
        return artifacts

    async def build_report(self, current: ArtifactSet) -> SizeReport | None:
        """Diff *current* against the previous snapshot and format it.

        Returns ``None`` when the previous snapshot is unavailable; that is
        logged and treated as a normal early stop.
        """
        try:
            previous = await fetch_previous_snapshot(self.previous_source, self._client)
        except PreviousSnapshotUnavailable as exc:
            logger.warning("%s", exc)
            return None

        diff = await compute_diff(previous, current, self.rename_resolver)
        self.renderer.print_diff(diff)

        report = format_report(diff, threshold=self.threshold)
        self.renderer.print_report(report)
        return report

    async def run(
        self,
        patterns: str | Iterable[str],
        publisher: ReportPublisher,
        *,
        snapshot_path: Path | str | None = None,
    ) -> SizeReport | None:
        """Collect, diff, format and publish.

        When *snapshot_path* is given, the current build's snapshot is
        written there before the previous one is fetched.
        """
        current = await self.collect(patterns)
        self.renderer.print_artifacts(current)
        if snapshot_path is not None:
            write_snapshot(current, snapshot_path)

        report = await self.build_report(current)
        if report is None:
            return None

        logger.info("Publishing size report via %s", publisher.publisher_name)
        await publisher.publish(report)
        return report


async def snapshot_build(patterns: str | Iterable[str], output: Path | str) -> ArtifactSet:
    """Measure the current build and write its snapshot to *output*."""
    artifacts = await build_descriptors(expand_globs(patterns))
    write_snapshot(artifacts, output)
    return artifacts
