"""Hidden data block helpers.

The issue body carries machine-readable state inside an HTML comment so it
survives between runs without being visible to readers::

    <!--botsData
    {"sizeReport": {"lastCommentId": 123}}
    -->
    <!-- WARNING: Don't delete the content inside botData -->
"""

from __future__ import annotations

import json
from typing import Any

DEFAULT_MARKER = "botsData"

_CLOSE = "-->"
_WARNING = "<!-- WARNING: Don't delete the content inside botData -->"


def extract_hidden_data(body: str | None, marker: str = DEFAULT_MARKER) -> dict[str, Any]:
    """Return the JSON object stored after *marker* in *body*.

    A body without the marker yields ``{"sizeReport": {}}``; a missing or
    non-object ``sizeReport`` entry is replaced with ``{}``.

    Raises
    ------
    ValueError
        If the block is present but is not valid JSON.
    """
    body = body or ""
    marker_index = body.find(marker)
    if marker_index == -1:
        return {"sizeReport": {}}

    start = marker_index + len(marker)
    end = body.find(_CLOSE, start)
    if end == -1:
        end = len(body)

    data = json.loads(body[start:end])
    if not isinstance(data, dict):
        raise ValueError(f"Hidden data block is not an object: {data!r}")
    if not isinstance(data.get("sizeReport"), dict):
        data["sizeReport"] = {}
    return data


def embed_comment_id(
    body: str | None,
    hidden_data: dict[str, Any],
    comment_id: int,
    marker: str = DEFAULT_MARKER,
) -> str:
    """Return *body* with the hidden data block rewritten to hold *comment_id*.

    Everything before the existing ``<!--marker`` is kept (trailing
    whitespace stripped); the old block and anything after it is replaced.
    """
    body = body or ""
    marker_index = body.find(f"<!--{marker}")
    text = body[: marker_index if marker_index != -1 else len(body)].rstrip()

    data = {**hidden_data, "sizeReport": {**hidden_data.get("sizeReport", {}), "lastCommentId": comment_id}}
    payload = json.dumps(data, separators=(",", ":"))
    return f"{text}\n\n<!--{marker}\n{payload}\n{_CLOSE}\n{_WARNING}"
