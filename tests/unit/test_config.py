"""Tests for report config: env-driven settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from buildsize.config import ReportSettings

_ENV_VARS = (
    "GITHUB_TOKEN",
    "PR_NUMBER",
    "BUILDSIZE_GITHUB_TOKEN",
    "BUILDSIZE_PR_NUMBER",
    "BUILDSIZE_THRESHOLD",
    "BUILDSIZE_FIND_RENAMED",
    "BUILDSIZE_BRANCH",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestReportSettings:
    def test_defaults(self):
        config = ReportSettings(_env_file=None)
        assert config.environment == "development"
        assert config.log_level == "INFO"
        assert config.github_token == ""
        assert config.pr_number is None
        assert config.branch == "master"
        assert config.threshold == 100
        assert config.hidden_data_marker == "botsData"

    def test_default_snapshot_path(self):
        config = ReportSettings(_env_file=None)
        assert config.snapshot_path == Path("buildsize.json")

    def test_snapshot_path_from_parts(self):
        config = ReportSettings(_env_file=None, snapshot_dir=Path("dist"), snapshot_filename="sizes.json")
        assert config.snapshot_path == Path("dist/sizes.json")

    def test_ci_variables(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_abc")
        monkeypatch.setenv("PR_NUMBER", "42")
        config = ReportSettings(_env_file=None)
        assert config.github_token == "ghp_abc"
        assert config.pr_number == 42

    def test_prefixed_variables(self, monkeypatch):
        monkeypatch.setenv("BUILDSIZE_THRESHOLD", "250")
        monkeypatch.setenv("BUILDSIZE_FIND_RENAMED", "[name]-[hash].js")
        monkeypatch.setenv("BUILDSIZE_BRANCH", "main")
        config = ReportSettings(_env_file=None)
        assert config.threshold == 250
        assert config.find_renamed == "[name]-[hash].js"
        assert config.branch == "main"

    def test_env_file(self, tmp_dir: Path):
        env_file = tmp_dir / ".env"
        env_file.write_text("BUILDSIZE_THRESHOLD=10\nGITHUB_TOKEN=from-file\n")
        config = ReportSettings(_env_file=env_file)
        assert config.threshold == 10
        assert config.github_token == "from-file"

    def test_keyword_override(self):
        config = ReportSettings(_env_file=None, github_token="direct", pr_number=7)
        assert config.github_token == "direct"
        assert config.pr_number == 7
