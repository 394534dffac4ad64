"""Tests for the artifact descriptor builder: naming, sizing, ordering."""

from __future__ import annotations

import asyncio
import gzip
import os
import time
from pathlib import Path

import pytest

from buildsize.core import descriptors
from buildsize.core.descriptors import (
    FileAccessError,
    build_descriptor,
    build_descriptors,
    derive_display_name,
    expand_globs,
    gzip_size,
)


class TestDisplayName:
    def test_strips_directory_and_hash(self):
        assert derive_display_name("/d/app-abc123.js") == "app"

    def test_keeps_earlier_hyphens(self):
        assert derive_display_name("dist/my-lib-abc123.js") == "my-lib"

    def test_no_hyphen_keeps_filename(self):
        assert derive_display_name("dist/index.html") == "index.html"

    def test_hyphen_only_in_directory(self):
        assert derive_display_name("my-dist/index.html") == "index.html"

    def test_escapes_tilde(self):
        assert derive_display_name("dist/vendor~main-abc.js") == "vendor\\~main"

    def test_windows_separator(self, monkeypatch):
        monkeypatch.setattr(descriptors, "_SEPARATORS", ("/", "\\"))
        assert derive_display_name("dist\\app-abc123.js") == "app"
        assert derive_display_name("C:\\build\\my-dist\\index.html") == "index.html"
        assert derive_display_name("dist\\sub/vendor-1.js") == "vendor"

    def test_platform_separator_is_recognised(self):
        assert "/" in descriptors._SEPARATORS
        assert os.sep in descriptors._SEPARATORS


class TestGzipSize:
    def test_deterministic(self):
        data = b"hello world " * 100
        assert gzip_size(data) == gzip_size(data)

    def test_matches_gzip_length(self):
        data = b"abc" * 1000
        assert gzip_size(data) == len(gzip.compress(data, compresslevel=9, mtime=0))

    def test_compresses_repetitive_input(self):
        assert gzip_size(b"a" * 10_000) < 10_000


class TestBuildDescriptors:
    @pytest.mark.asyncio
    async def test_single_descriptor(self, build_dir: Path):
        path = str(build_dir / "app-abc123.js")
        artifact = await build_descriptor(path)
        assert artifact.name == "app"
        assert artifact.path == path
        assert artifact.size == Path(path).stat().st_size
        assert artifact.gzip_size == gzip_size(Path(path).read_bytes())

    @pytest.mark.asyncio
    async def test_missing_file_raises(self, tmp_dir: Path):
        with pytest.raises(FileAccessError):
            await build_descriptor(str(tmp_dir / "nope.js"))

    @pytest.mark.asyncio
    async def test_directory_raises(self, build_dir: Path):
        with pytest.raises(FileAccessError):
            await build_descriptor(str(build_dir))

    @pytest.mark.asyncio
    async def test_preserves_input_order(self, build_dir: Path):
        paths = [
            str(build_dir / "vendor-def456.js"),
            str(build_dir / "app-abc123.js"),
            str(build_dir / "index.html"),
        ]
        artifacts = await build_descriptors(paths)
        assert artifacts.paths == paths

    @pytest.mark.asyncio
    async def test_order_independent_of_completion(self, build_dir: Path, monkeypatch):
        """The first path finishes last, yet still comes first in the result."""
        real_measure = descriptors._measure
        slow = str(build_dir / "app-abc123.js")

        def _measure(path: str) -> tuple[int, int]:
            if path == slow:
                time.sleep(0.05)
            return real_measure(path)

        monkeypatch.setattr(descriptors, "_measure", _measure)
        paths = [slow, str(build_dir / "index.html")]
        artifacts = await build_descriptors(paths)
        assert artifacts.paths == paths

    @pytest.mark.asyncio
    async def test_duplicates_collapse(self, build_dir: Path):
        path = str(build_dir / "index.html")
        artifacts = await build_descriptors([path, path])
        assert len(artifacts) == 1

    def test_runs_without_running_loop(self, build_dir: Path):
        artifacts = asyncio.run(build_descriptors([str(build_dir / "index.html")]))
        assert artifacts.paths == [str(build_dir / "index.html")]


class TestExpandGlobs:
    def test_single_pattern(self, build_dir: Path):
        paths = expand_globs(str(build_dir / "*.js"))
        assert [Path(p).name for p in paths] == ["app-abc123.js", "vendor-def456.js"]

    def test_multiple_patterns_dedupe(self, build_dir: Path):
        paths = expand_globs([str(build_dir / "*.js"), str(build_dir / "app-*")])
        assert [Path(p).name for p in paths] == ["app-abc123.js", "vendor-def456.js"]

    def test_skips_directories(self, build_dir: Path):
        (build_dir / "nested").mkdir()
        paths = expand_globs(str(build_dir / "*"))
        assert all(Path(p).is_file() for p in paths)
        assert len(paths) == 4

    def test_recursive(self, build_dir: Path):
        nested = build_dir / "nested"
        nested.mkdir()
        (nested / "chunk-1a2b.js").write_text("x")
        paths = expand_globs(str(build_dir / "**" / "*.js"))
        assert str(nested / "chunk-1a2b.js") in paths

    def test_no_matches(self, tmp_dir: Path):
        assert expand_globs(str(tmp_dir / "*.js")) == []
