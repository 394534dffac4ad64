"""Error taxonomy, re-exported from the modules that raise each error."""

from buildsize.core.descriptors import FileAccessError
from buildsize.core.diff_engine import InvalidRenameTarget
from buildsize.core.snapshot import PreviousSnapshotUnavailable
from buildsize.publishing import PublishError

__all__ = [
    "FileAccessError",
    "InvalidRenameTarget",
    "PreviousSnapshotUnavailable",
    "PublishError",
]
