"""Artifact size models — one descriptor per build output file (immutable)."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt


class ArtifactDescriptor(BaseModel):
    """Size metadata for a single build artifact.

    ``path`` is the identity key used for matching builds.  ``name`` is a
    display label derived from the path and may collide across paths.

    The JSON form uses the snapshot wire names (``gzipSize``), so
    ``model_dump(by_alias=True)`` produces records a previous run can load.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    path: str
    size: NonNegativeInt = 0
    gzip_size: NonNegativeInt = Field(alias="gzipSize")


class ArtifactSet(BaseModel):
    """Ordered collection of descriptors for one build.

    Duplicate paths are collapsed on construction; the first occurrence wins.
    """

    model_config = ConfigDict(frozen=True)

    artifacts: tuple[ArtifactDescriptor, ...] = ()

    def __init__(self, artifacts: Iterable[ArtifactDescriptor] = (), **data: Any) -> None:
        seen: set[str] = set()
        unique: list[ArtifactDescriptor] = []
        for artifact in artifacts:
            if artifact.path in seen:
                continue
            seen.add(artifact.path)
            unique.append(artifact)
        super().__init__(artifacts=tuple(unique), **data)

    def __len__(self) -> int:
        return len(self.artifacts)

    @property
    def paths(self) -> list[str]:
        return [a.path for a in self.artifacts]

    def by_path(self) -> dict[str, ArtifactDescriptor]:
        """Return a path -> descriptor index for O(1) lookups."""
        return {a.path: a for a in self.artifacts}

    # ------------------------------------------------------------------
    # Snapshot wire format
    # ------------------------------------------------------------------

    def to_records(self) -> list[dict[str, Any]]:
        """Serialize to the flat ``[{name, path, size, gzipSize}]`` list."""
        return [a.model_dump(mode="json", by_alias=True) for a in self.artifacts]

    @classmethod
    def from_records(cls, records: list[dict[str, Any]]) -> ArtifactSet:
        """Load a snapshot record list.

        Only ``path`` and ``gzipSize`` are required.  A missing ``name`` is
        re-derived from the path; unknown keys are ignored.
        """
        from buildsize.core.descriptors import derive_display_name

        artifacts = []
        for record in records:
            data = dict(record)
            if "name" not in data and "path" in data:
                data["name"] = derive_display_name(str(data["path"]))
            artifacts.append(ArtifactDescriptor.model_validate(data))
        return cls(artifacts)
