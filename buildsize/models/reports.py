"""Size report models — the rendered output of the report formatter."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class ChangeStatus(str, Enum):
    """Row status shown in the report tables."""

    GREW = "grew"
    SHRANK = "shrank"
    RENAMED = "renamed"
    ADDED = "added"
    REMOVED = "removed"

    @property
    def emoji(self) -> str:
        return _STATUS_EMOJI[self]


_STATUS_EMOJI: dict[ChangeStatus, str] = {
    ChangeStatus.GREW: ":small_red_triangle:",
    ChangeStatus.SHRANK: ":arrow_down:",
    ChangeStatus.RENAMED: ":o:",
    ChangeStatus.ADDED: ":exclamation:",
    ChangeStatus.REMOVED: ":negative_squared_cross_mark:",
}


class ReportRow(BaseModel):
    """A single changed-artifact row."""

    model_config = ConfigDict(frozen=True)

    size_diff: str  # signed, human readable
    size: str  # current gzip size, human readable
    bytes_diff: int
    status: ChangeStatus
    name: str


class SizeReport(BaseModel):
    """A fully rendered build size report.

    ``major`` holds the main body (changed, new and removed tables, or the
    no-changes notice).  ``minor`` holds the table shown inside the
    collapsed "Minor Changes" region.
    """

    model_config = ConfigDict(frozen=True)

    major: str
    minor: str = ""
    major_rows: tuple[ReportRow, ...] = ()
    minor_rows: tuple[ReportRow, ...] = ()
    has_changes: bool = False

    def render(self) -> str:
        """Return the complete markdown comment body."""
        return (
            f"{self.major}\n"
            f"<details><summary>Minor Changes</summary>\n{self.minor}\n</details>"
        )
