"""Artifact descriptor builder — file paths to size metadata.

Raw sizes come from ``stat``; compressed sizes are a deterministic gzip
estimate.  Per-file work runs concurrently in worker threads, but results
are always returned in input order.
"""

from __future__ import annotations

import asyncio
import glob
import gzip
import logging
import os
from collections.abc import Iterable, Sequence
from pathlib import Path

from buildsize.models.artifacts import ArtifactDescriptor, ArtifactSet

logger = logging.getLogger(__name__)

# Directory separators stripped from display names; glob yields os.sep paths.
_SEPARATORS = tuple(dict.fromkeys(("/", os.sep)))


class FileAccessError(RuntimeError):
    """Raised when a build artifact cannot be read or is not a regular file."""


def escape_tilde(text: str) -> str:
    """Escape ``~`` so it does not render as strikethrough in markdown tables."""
    return text.replace("~", "\\~")


def derive_display_name(path: str) -> str:
    """Derive a display name by stripping the directory and the hash suffix.

    >>> derive_display_name("dist/app-abc123.js")
    'app'
    >>> derive_display_name("dist/vendor~main-9f8e.js")
    'vendor\\\\~main'
    >>> derive_display_name("dist/index.html")
    'index.html'
    """
    filename = path[max(path.rfind(sep) for sep in _SEPARATORS) + 1:]
    hyphen = filename.rfind("-")
    name = filename[:hyphen] if hyphen != -1 else filename
    return escape_tilde(name)


def gzip_size(data: bytes) -> int:
    """Return the gzip-compressed size of *data* in bytes.

    ``mtime`` is pinned so the same input always yields the same size.
    """
    return len(gzip.compress(data, compresslevel=9, mtime=0))


def _measure(path: str) -> tuple[int, int]:
    """Blocking stat + gzip measurement for one file."""
    target = Path(path)
    try:
        if not target.is_file():
            raise FileAccessError(f"Not a regular file: {path}")
        raw_size = target.stat().st_size
        compressed = gzip_size(target.read_bytes())
    except OSError as exc:
        raise FileAccessError(f"Cannot read artifact {path}: {exc}") from exc
    return raw_size, compressed


async def build_descriptor(path: str) -> ArtifactDescriptor:
    """Build the descriptor for a single artifact path."""
    raw_size, compressed = await asyncio.to_thread(_measure, path)
    return ArtifactDescriptor(
        name=derive_display_name(path),
        path=path,
        size=raw_size,
        gzip_size=compressed,
    )


async def build_descriptors(paths: Sequence[str]) -> ArtifactSet:
    """Measure every path concurrently and return them as an ArtifactSet.

    ``asyncio.gather`` preserves argument order, so the set follows the
    input order no matter which measurement finishes first.  Duplicate
    paths collapse to their first occurrence.

    Raises
    ------
    FileAccessError
        If any path is missing or unreadable.
    """
    unique = list(dict.fromkeys(paths))
    descriptors = await asyncio.gather(*(build_descriptor(p) for p in unique))
    logger.debug("Measured %d artifact(s)", len(descriptors))
    return ArtifactSet(descriptors)


def expand_globs(patterns: str | Iterable[str]) -> list[str]:
    """Expand one or more glob patterns into unique file paths.

    Directories are skipped.  Matches of each pattern are sorted, and the
    first occurrence of a path across patterns determines its position.
    """
    if isinstance(patterns, str):
        patterns = [patterns]

    paths: list[str] = []
    for pattern in patterns:
        matches = sorted(m for m in glob.glob(pattern, recursive=True) if Path(m).is_file())
        if not matches:
            logger.warning("Pattern matched no files: %s", pattern)
        paths.extend(matches)
    return list(dict.fromkeys(paths))
