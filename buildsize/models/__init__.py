"""Buildsize data models — all Pydantic v2, all frozen (immutable)."""

from buildsize.models.artifacts import ArtifactDescriptor, ArtifactSet
from buildsize.models.diff import ArtifactChange, DiffResult
from buildsize.models.reports import ChangeStatus, ReportRow, SizeReport

__all__ = [
    # artifacts
    "ArtifactDescriptor",
    "ArtifactSet",
    # diff
    "ArtifactChange",
    "DiffResult",
    # reports
    "ChangeStatus",
    "ReportRow",
    "SizeReport",
]
