"""Build snapshot source and sink.

The current build's ArtifactSet is written as a flat JSON record list to a
fixed local path, so a later run (typically on another branch) can fetch it
back as its "previous" build.

Layout: ``[{"name": ..., "path": ..., "size": ..., "gzipSize": ...}, ...]``
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import httpx
from pydantic import ValidationError

from buildsize.models.artifacts import ArtifactSet

logger = logging.getLogger(__name__)


class PreviousSnapshotUnavailable(RuntimeError):
    """Raised when the previous build snapshot cannot be fetched or parsed."""


def write_snapshot(artifacts: ArtifactSet, path: Path | str) -> Path:
    """Write *artifacts* to *path* as JSON, creating parent directories."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(artifacts.to_records()), encoding="utf-8")
    logger.info("Wrote snapshot of %d artifact(s) to %s", len(artifacts), target)
    return target


def parse_snapshot(payload: str | bytes, source: str = "<memory>") -> ArtifactSet:
    """Parse a JSON snapshot document.

    Raises
    ------
    PreviousSnapshotUnavailable
        If the document is not valid UTF-8 JSON, is ``null``, or does not
        hold a list of artifact records.
    """
    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise PreviousSnapshotUnavailable(f"Couldn't parse previous build info from {source}: {exc}") from exc

    if not data:
        raise PreviousSnapshotUnavailable(f"Couldn't find previous build info at {source}")
    if not isinstance(data, list):
        raise PreviousSnapshotUnavailable(
            f"Previous build info at {source} is a {type(data).__name__}, expected a list"
        )
    if not all(isinstance(record, dict) for record in data):
        raise PreviousSnapshotUnavailable(f"Previous build info at {source} holds non-object records")

    try:
        return ArtifactSet.from_records(data)
    except (ValidationError, TypeError, ValueError) as exc:
        raise PreviousSnapshotUnavailable(f"Invalid previous build info at {source}: {exc}") from exc


def read_snapshot(path: Path | str) -> ArtifactSet:
    """Load a snapshot from a local JSON file."""
    target = Path(path)
    try:
        payload = target.read_bytes()
    except OSError as exc:
        raise PreviousSnapshotUnavailable(f"Couldn't read previous build info {target}: {exc}") from exc
    return parse_snapshot(payload, source=str(target))


async def fetch_previous_snapshot(
    source: str,
    client: httpx.AsyncClient | None = None,
) -> ArtifactSet:
    """Fetch the previous build's snapshot from a URL or a local path.

    Parameters
    ----------
    source:
        An ``http(s)://`` URL or a filesystem path.
    client:
        HTTP client to use for URLs.  A short-lived one is created if omitted.

    Raises
    ------
    PreviousSnapshotUnavailable
        On any transport, HTTP status, or parse failure.
    """
    if not source:
        raise PreviousSnapshotUnavailable("No previous snapshot source configured")

    if not source.startswith(("http://", "https://")):
        return read_snapshot(source)

    logger.info("Fetching previous build info from %s", source)
    try:
        if client is None:
            async with httpx.AsyncClient() as own_client:
                response = await own_client.get(source, follow_redirects=True)
        else:
            response = await client.get(source, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        raise PreviousSnapshotUnavailable(f"Couldn't fetch previous build info: {exc}") from exc

    return parse_snapshot(response.content, source=source)
