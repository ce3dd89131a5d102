from typing import IO
from typing import Optional

from rich import print as rprint
from rich.markup import escape
from rich.table import Column
from rich.table import Table

from memreport._report import LeakCandidate
from memreport._report import MemoryReport
from memreport._utils import size_fmt


def _score_to_color(leak: LeakCandidate) -> str:
    if leak.is_suspect:
        return "red"
    elif leak.leak_score > 10:
        return "yellow"
    else:
        return "green"


class SummaryReporter:
    """Terminal rendering of the headline numbers of a report."""

    def __init__(self, report: MemoryReport) -> None:
        self.report = report

    def _overview_table(self) -> Table:
        report = self.report
        table = Table(
            Column("Metric", style="bold"),
            Column("Value", justify="right"),
            title="Memory analysis summary",
        )
        rows = (
            ("Session Name", escape(report.session_name)),
            ("Total Snapshots", str(report.total_snapshots)),
            ("Total Allocations", f"{report.total_allocations:,}"),
            ("Total Size", size_fmt(report.total_size)),
            ("Leak Count", f"{report.leak_count:,}"),
            ("Leak Size", size_fmt(report.leak_size)),
            ("Memory Fragmentation", f"{report.memory_fragmentation:.2f}%"),
            ("Call Tree Nodes", str(len(report.call_trees))),
            ("Functions Analyzed", str(len(report.functions))),
            ("Leaks Detected", str(len(report.leaks))),
            ("Page Views", str(len(report.page_views))),
            ("Types Analyzed", str(len(report.types))),
        )
        for name, value in rows:
            table.add_row(name, value)
        return table

    def _leaks_table(self) -> Table:
        table = Table(
            Column("Function", ratio=5),
            Column("Leak Size", ratio=1, justify="right"),
            Column("Leak Count", ratio=1, justify="right"),
            Column("Score", ratio=1, justify="right"),
            title="Leak candidates",
            expand=True,
        )
        for leak in self.report.leaks:
            color = _score_to_color(leak)
            table.add_row(
                f"[bold magenta]{escape(leak.function_name)}[/]",
                f"[{color}]{size_fmt(leak.leak_size)}[/{color}]",
                f"[{color}]{leak.leak_count:,}[/{color}]",
                f"[{color}]{leak.leak_score:.2f}[/{color}]",
            )
        return table

    def render(
        self, *, show_leaks: bool = False, file: Optional[IO[str]] = None
    ) -> None:
        rprint(self._overview_table(), file=file)
        if show_leaks and self.report.leaks:
            rprint(self._leaks_table(), file=file)
