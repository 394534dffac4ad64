"""Buildsize: gzip size change reports for build artifacts.

Compares the current build output against a previously recorded snapshot
and reports new, removed, changed and renamed artifacts:
  - Concurrent raw + gzip measurement of globbed build files
  - Path matching with pluggable rename resolution (similarity, hash pattern, custom)
  - Markdown report with major changes up front and minor ones collapsed
  - GitHub PR comment publishing that replaces the previous report comment
"""

__version__ = "0.1.0"
__description__ = "Build artifact size change reports for pull requests"

from buildsize.core.diff_engine import compute_diff
from buildsize.core.formatter import format_report
from buildsize.core.pipeline import SizeReportPipeline
from buildsize.cli.app import app as cli
from buildsize.errors import (
    FileAccessError,
    InvalidRenameTarget,
    PreviousSnapshotUnavailable,
    PublishError,
)

__all__ = [
    "SizeReportPipeline",
    "compute_diff",
    "format_report",
    "cli",
    # errors
    "FileAccessError",
    "InvalidRenameTarget",
    "PreviousSnapshotUnavailable",
    "PublishError",
    "__version__",
]
