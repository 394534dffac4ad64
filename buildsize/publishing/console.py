"""Console publisher — prints the report instead of posting it (dry run)."""

from __future__ import annotations

from rich.console import Console
from rich.markdown import Markdown

from buildsize.models.reports import SizeReport


class ConsolePublisher:
    """Prints reports to a Rich console.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    raw:
        Print the markdown source instead of rendering it.
    """

    def __init__(self, console: Console | None = None, *, raw: bool = True) -> None:
        self.console = console or Console()
        self.raw = raw
        self.published: list[SizeReport] = []

    @property
    def publisher_name(self) -> str:
        return "console"

    async def publish(self, report: SizeReport) -> None:
        self.published.append(report)
        if self.raw:
            self.console.print(report.render(), markup=False, highlight=False, emoji=False, soft_wrap=True)
        else:
            self.console.print(Markdown(report.render()))
