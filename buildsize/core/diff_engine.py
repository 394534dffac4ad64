"""Build diff engine — classifies artifacts as new, removed, or changed.

Matching is by path.  Artifacts present in both builds with a different gzip
size are changes; unchanged artifacts are not reported.  An optional rename
resolver then pairs removed artifacts with new ones.

Rename resolution contract
--------------------------
Removed artifacts are resolved one at a time, in the order they appear in
the previous build.  Each resolver call sees only the new paths not yet
claimed by an earlier resolution in the same pass.  A resolver that returns
a path outside that list (including one claimed moments earlier) aborts the
diff with ``InvalidRenameTarget``.
"""

from __future__ import annotations

import inspect
import logging

from buildsize.core.rename import RenameResolver
from buildsize.models.artifacts import ArtifactDescriptor, ArtifactSet
from buildsize.models.diff import ArtifactChange, DiffResult

logger = logging.getLogger(__name__)


class InvalidRenameTarget(RuntimeError):
    """Raised when a rename resolver returns a path that is not an unclaimed new artifact."""

    def __init__(self, removed_path: str, target: str) -> None:
        self.removed_path = removed_path
        self.target = target
        super().__init__(f"File isn't part of the new build: {target}")


async def compute_diff(
    previous: ArtifactSet,
    current: ArtifactSet,
    rename_resolver: RenameResolver | None = None,
) -> DiffResult:
    """Compare *previous* against *current*.

    Parameters
    ----------
    previous:
        The recorded snapshot of the earlier build.
    current:
        The artifacts of the build being reported.
    rename_resolver:
        Optional strategy for pairing removed artifacts with new ones.
        Both sync and async callables are accepted.

    Raises
    ------
    InvalidRenameTarget
        If the resolver names a path that is not an unclaimed new artifact.
    """
    current_by_path = current.by_path()
    consumed: set[str] = set()
    removed: list[ArtifactDescriptor] = []
    changes: list[ArtifactChange] = []

    for old in previous.artifacts:
        match = current_by_path.get(old.path)
        if match is None:
            removed.append(old)
            continue
        consumed.add(match.path)
        if old.gzip_size != match.gzip_size:
            changes.append(ArtifactChange(previous=old, current=match))

    added = [a for a in current.artifacts if a.path not in consumed]

    if rename_resolver is not None and removed:
        removed, added, renames = await _resolve_renames(
            tuple(removed), tuple(added), rename_resolver
        )
        changes.extend(renames)

    logger.debug(
        "Diff: %d new, %d removed, %d changed",
        len(added),
        len(removed),
        len(changes),
    )
    return DiffResult(
        new_artifacts=tuple(added),
        removed_artifacts=tuple(removed),
        changed_artifacts=tuple(changes),
    )


async def _resolve_renames(
    removed: tuple[ArtifactDescriptor, ...],
    added: tuple[ArtifactDescriptor, ...],
    resolver: RenameResolver,
) -> tuple[list[ArtifactDescriptor], list[ArtifactDescriptor], list[ArtifactChange]]:
    """Pair removed artifacts with new ones using *resolver*.

    *removed* and *added* are snapshots; claims are tracked in explicit
    sets and the surviving buckets are rebuilt from the snapshots at the end.
    """
    added_by_path = {a.path: a for a in added}
    claimed_old: set[str] = set()
    claimed_new: set[str] = set()
    renames: list[ArtifactChange] = []

    for old in removed:
        candidates = tuple(a.path for a in added if a.path not in claimed_new)
        target = resolver(old.path, candidates)
        if inspect.isawaitable(target):
            target = await target
        if not target:
            continue
        if target not in candidates:
            raise InvalidRenameTarget(old.path, target)

        claimed_old.add(old.path)
        claimed_new.add(target)
        renames.append(ArtifactChange(previous=old, current=added_by_path[target]))
        logger.debug("Rename: %s -> %s", old.path, target)

    return (
        [a for a in removed if a.path not in claimed_old],
        [a for a in added if a.path not in claimed_new],
        renames,
    )
