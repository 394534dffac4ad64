"""Build diff models — the classified difference between two artifact sets."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from buildsize.models.artifacts import ArtifactDescriptor


class ArtifactChange(BaseModel):
    """A previous -> current pairing of one logical artifact.

    Produced either by a path match with a different gzip size, or by
    rename resolution (in which case the sizes may be equal).
    """

    model_config = ConfigDict(frozen=True)

    previous: ArtifactDescriptor
    current: ArtifactDescriptor

    @property
    def delta(self) -> int:
        """Change in gzip size, in bytes (positive means growth)."""
        return self.current.gzip_size - self.previous.gzip_size

    @property
    def renamed(self) -> bool:
        return self.previous.path != self.current.path


class DiffResult(BaseModel):
    """Outcome of comparing a previous build against the current one.

    No descriptor appears in more than one of the three buckets.
    Recomputed on every run and never persisted.
    """

    model_config = ConfigDict(frozen=True)

    new_artifacts: tuple[ArtifactDescriptor, ...] = ()
    removed_artifacts: tuple[ArtifactDescriptor, ...] = ()
    changed_artifacts: tuple[ArtifactChange, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.new_artifacts or self.removed_artifacts or self.changed_artifacts)

    def as_mapping(self) -> dict[ArtifactDescriptor, ArtifactDescriptor]:
        """Return changed artifacts as a ``{previous: current}`` mapping."""
        return {c.previous: c.current for c in self.changed_artifacts}
