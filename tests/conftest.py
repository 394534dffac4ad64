"""Shared test fixtures for Buildsize."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from buildsize.models.artifacts import ArtifactDescriptor, ArtifactSet


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for test artifacts."""
    return tmp_path


# ---------------------------------------------------------------------------
# Descriptor factories shared across test modules
# ---------------------------------------------------------------------------


@pytest.fixture
def make_descriptor() -> Callable[..., ArtifactDescriptor]:
    """Factory fixture: build an ArtifactDescriptor with sensible defaults."""

    def _factory(path: str, gzip_size: int = 1000, **overrides: Any) -> ArtifactDescriptor:
        name = path.rsplit("/", 1)[-1]
        defaults: dict[str, Any] = {
            "name": name.rsplit("-", 1)[0] if "-" in name else name,
            "path": path,
            "size": gzip_size * 3,
            "gzip_size": gzip_size,
        }
        defaults.update(overrides)
        return ArtifactDescriptor(**defaults)

    return _factory


@pytest.fixture
def make_set(make_descriptor: Callable[..., ArtifactDescriptor]) -> Callable[..., ArtifactSet]:
    """Factory fixture: build an ArtifactSet from ``(path, gzip_size)`` pairs."""

    def _factory(*entries: tuple[str, int]) -> ArtifactSet:
        return ArtifactSet(make_descriptor(path, size) for path, size in entries)

    return _factory


@pytest.fixture
def build_dir(tmp_dir: Path) -> Path:
    """Provide a directory with a small fake build output."""
    dist = tmp_dir / "dist"
    dist.mkdir()
    (dist / "app-abc123.js").write_text("console.log('app');\n" * 50)
    (dist / "vendor-def456.js").write_text("var v = 1;\n" * 200)
    (dist / "styles-0a1b2c.css").write_text("body { margin: 0; }\n" * 20)
    (dist / "index.html").write_text("<html></html>\n")
    return dist
