"""Report publishing — delivers a rendered size report somewhere visible.

All publishers implement the ``ReportPublisher`` protocol: a
``publisher_name`` property and an async ``publish(report)`` method.  The
GitHub publisher posts the report as an issue comment; the console
publisher prints it for dry runs.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from buildsize.models.reports import SizeReport


class PublishError(RuntimeError):
    """Raised when any step of publishing a report fails."""


@runtime_checkable
class ReportPublisher(Protocol):
    """Protocol that every report publisher must implement.

    Attributes
    ----------
    publisher_name : str
        A short identifier for log output (e.g. ``"github"``).
    """

    @property
    def publisher_name(self) -> str:
        """Return the name of this publisher."""
        ...

    async def publish(self, report: SizeReport) -> int | None:
        """Publish *report*.

        Returns a publisher-specific id for the published report (the
        GitHub comment id), or ``None`` when there is none.

        Failures are not recovered locally; implementations raise
        ``PublishError`` and let it propagate.
        """
        ...


__all__ = ["PublishError", "ReportPublisher"]
