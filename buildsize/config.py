"""Report configuration — env-driven, CI-friendly.

Centralized settings using pydantic-settings.  Reads from a .env file and
BUILDSIZE_* environment variables.  The GitHub token and PR number are also
picked up from the plain ``GITHUB_TOKEN`` / ``PR_NUMBER`` variables that CI
providers export.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReportSettings(BaseSettings):
    """Size report configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export BUILDSIZE_LOG_LEVEL=DEBUG
        export BUILDSIZE_PREVIOUS_SNAPSHOT_URL=https://example.org/buildsize.json
        export GITHUB_TOKEN=ghp_xxx
        export PR_NUMBER=42

    Or via .env file::

        BUILDSIZE_FIND_RENAMED=[name]-[hash].js
        BUILDSIZE_THRESHOLD=250
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BUILDSIZE_",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "INFO"

    # GitHub publishing
    github_token: str = Field(
        default="",
        validation_alias=AliasChoices("BUILDSIZE_GITHUB_TOKEN", "GITHUB_TOKEN", "github_token"),
    )
    pr_number: int | None = Field(
        default=None,
        validation_alias=AliasChoices("BUILDSIZE_PR_NUMBER", "PR_NUMBER", "pr_number"),
    )
    api_url: str = "https://api.github.com"
    hidden_data_marker: str = "botsData"
    request_timeout: float = 30.0

    # Snapshots
    previous_snapshot_url: str = ""
    snapshot_dir: Path = Path(".")
    snapshot_filename: str = "buildsize.json"

    # Comparison
    branch: str = "master"
    find_renamed: str = ""
    threshold: int = 100

    @property
    def snapshot_path(self) -> Path:
        """Where the current build snapshot is written."""
        return self.snapshot_dir / self.snapshot_filename


# Module-level singleton, import as `from buildsize.config import settings`
settings = ReportSettings()
