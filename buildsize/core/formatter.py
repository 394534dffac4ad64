"""Report formatter — renders a DiffResult as a GitHub markdown report.

Changed artifacts are bucketed by gzip byte delta:

- delta > threshold             : major increase
- 0 < delta <= threshold        : minor increase
- delta < -threshold            : major decrease
- -threshold <= delta < 0       : minor decrease
- delta == 0                    : renamed (always minor)

Major rows are listed in the main report, minor rows inside a collapsed
"Minor Changes" region.
"""

from __future__ import annotations

import math

from buildsize.models.diff import ArtifactChange, DiffResult
from buildsize.models.reports import ChangeStatus, ReportRow, SizeReport

DEFAULT_THRESHOLD = 100

NO_CHANGES = "#### :raised_hands:   No changes."

_UNITS = ("B", "kB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")

_CHANGE_HEADER = (
    "| Size Change | Current Size | Status | Chunk",
    "| --- | --- | :---: | :--- |",
)
_LIST_HEADER = (
    "Size | Status | Chunk",
    "| --- | :---: | :--- |",
)


def pretty_bytes(size: int, *, signed: bool = False) -> str:
    """Format a byte count with decimal units and three significant digits.

    >>> pretty_bytes(1200)
    '1.2 kB'
    >>> pretty_bytes(200, signed=True)
    '+200 B'
    >>> pretty_bytes(-1536)
    '-1.54 kB'
    """
    if signed and size == 0:
        return " 0 B"

    prefix = "-" if size < 0 else ("+" if signed else "")
    number = float(abs(size))
    if number < 1:
        return f"{prefix}{number:g} B"

    exponent = min(int(math.floor(math.log10(number) / 3)), len(_UNITS) - 1)
    number = float(f"{number / 1000 ** exponent:.3g}")
    text = str(int(number)) if number.is_integer() else str(number)
    return f"{prefix}{text} {_UNITS[exponent]}"


def _row(change: ArtifactChange) -> ReportRow:
    delta = change.delta
    if delta > 0:
        status = ChangeStatus.GREW
    elif delta < 0:
        status = ChangeStatus.SHRANK
    else:
        status = ChangeStatus.RENAMED
    return ReportRow(
        size_diff=pretty_bytes(delta, signed=True),
        size=pretty_bytes(change.current.gzip_size),
        bytes_diff=delta,
        status=status,
        name=change.current.name,
    )


def categorize(
    changes: tuple[ArtifactChange, ...] | list[ArtifactChange],
    threshold: int = DEFAULT_THRESHOLD,
) -> tuple[list[ReportRow], list[ReportRow]]:
    """Split changes into sorted ``(major, minor)`` row lists.

    Increases sort descending by delta, decreases ascending (largest
    shrinkage first).  Major is increases then decreases; minor is renamed
    rows (input order), then minor increases, then minor decreases.
    """
    increased: list[ReportRow] = []
    decreased: list[ReportRow] = []
    minor_inc: list[ReportRow] = []
    minor_dec: list[ReportRow] = []
    renamed: list[ReportRow] = []

    for change in changes:
        row = _row(change)
        delta = row.bytes_diff
        if delta > threshold:
            increased.append(row)
        elif delta > 0:
            minor_inc.append(row)
        elif delta < -threshold:
            decreased.append(row)
        elif delta < 0:
            minor_dec.append(row)
        else:
            renamed.append(row)

    increased.sort(key=lambda r: -r.bytes_diff)
    decreased.sort(key=lambda r: r.bytes_diff)
    minor_inc.sort(key=lambda r: -r.bytes_diff)
    minor_dec.sort(key=lambda r: r.bytes_diff)

    return increased + decreased, renamed + minor_inc + minor_dec


def format_report(diff: DiffResult, *, threshold: int = DEFAULT_THRESHOLD) -> SizeReport:
    """Render *diff* as a SizeReport.  Pure; no I/O."""
    if diff.is_empty:
        return SizeReport(major=NO_CHANGES)

    major_rows, minor_rows = categorize(diff.changed_artifacts, threshold)

    lines: list[str] = ["### Changes in existing chunks :pencil2:", *_CHANGE_HEADER]
    for row in major_rows:
        lines.append(f"| **{row.size_diff}** | {row.size} | {row.status.emoji} | {row.name}")

    lines.extend(["### New chunks :heavy_plus_sign:", *_LIST_HEADER])
    for artifact in diff.new_artifacts:
        lines.append(
            f"| **{pretty_bytes(artifact.gzip_size)}** | {ChangeStatus.ADDED.emoji} | {artifact.name}"
        )

    lines.extend(["### Removed chunks :heavy_minus_sign:", *_LIST_HEADER])
    for artifact in diff.removed_artifacts:
        lines.append(
            f"| **{pretty_bytes(artifact.gzip_size)}** | {ChangeStatus.REMOVED.emoji} | {artifact.name}"
        )

    minor_lines: list[str] = list(_CHANGE_HEADER)
    for row in minor_rows:
        minor_lines.append(f"| {row.size_diff} | {row.size} | {row.status.emoji} | {row.name}")

    return SizeReport(
        major="\n".join(lines),
        minor="\n".join(minor_lines),
        major_rows=tuple(major_rows),
        minor_rows=tuple(minor_rows),
        has_changes=True,
    )
