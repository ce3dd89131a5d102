import argparse
import datetime
import os
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress
from rich.progress import TaskID

from memreport._capture import ReadResult
from memreport._capture import SessionFactory
from memreport._capture import Snapshot
from memreport._dump import DumpCaptureSession
from memreport._errors import MemreportCommandError
from memreport._utils import size_fmt
from memreport.analysis import run_analysis
from memreport.reporters import BaseReporter
from memreport.reporters.json_report import JsonReporter
from memreport.reporters.summary import SummaryReporter


class ConsoleNarrator:
    """Reports the progress of an analysis run on the terminal."""

    def __init__(self, console: Console, progress: Progress) -> None:
        self._console = console
        self._progress = progress
        self._task: Optional[TaskID] = None

    def symbols_loaded(self, warning: Optional[str]) -> None:
        if warning:
            self._console.print(
                f":warning: [bold yellow]Symbol loading warning:[/] {escape(warning)}"
            )
        else:
            self._console.print("Symbol files loaded successfully")

    def capture_read(self, status: ReadResult, snapshot_count: int) -> None:
        self._console.print(f"Read result: [bold]{status.value}[/]")
        if status is not ReadResult.OK:
            self._console.print(
                f":warning: [bold yellow]{status.value}[/], "
                "continuing with available data"
            )
        self._console.print(f"Total snapshots: {snapshot_count}")
        self._task = self._progress.add_task(
            "Analyzing snapshots", total=snapshot_count
        )

    def snapshot_processed(self, index: int, snapshot: Optional[Snapshot]) -> None:
        if snapshot is None:
            self._console.print(f"[yellow]Skipped snapshot {index}[/]")
        else:
            self._console.print(
                f"Snapshot {index}: [bold]{escape(snapshot.name)}[/]\n"
                f"  Allocated: {size_fmt(snapshot.allocated_bytes)}\n"
                f"  Reserved: {size_fmt(snapshot.reserved_bytes)}\n"
                f"  Committed: {size_fmt(snapshot.committed_bytes)}"
            )
        if self._task is not None:
            self._progress.advance(self._task)


class AnalyzeCommand:
    """Analyze a capture and write the memory analysis report as JSON"""

    def __init__(
        self,
        session_factory: SessionFactory = DumpCaptureSession,
        console: Optional[Console] = None,
    ) -> None:
        self.session_factory = session_factory
        self.console = console or Console()

    @staticmethod
    def determine_output_filename(capture_file: Path) -> Path:
        return capture_file.with_name(capture_file.stem + JsonReporter.SUFFIX)

    def prepare_parser(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "-o",
            "--output",
            help="Output file name (default: <capture>_memory_analysis.json "
            "next to the capture)",
            default=None,
        )
        parser.add_argument("capture", help="Capture file to analyze")

    def run(self, args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
        capture_path = Path(args.capture)
        if not capture_path.exists() or not capture_path.is_file():
            raise MemreportCommandError(f"No such file: {args.capture}", exit_code=1)
        output_file = (
            Path(args.output)
            if args.output is not None
            else self.determine_output_filename(capture_path)
        )

        console = self.console
        console.rule("[bold]memreport: memory analysis")
        stat = capture_path.stat()
        console.print(f"Reading file: {escape(str(capture_path))}")
        console.print(f"File size: {size_fmt(stat.st_size)}")
        modified = datetime.datetime.fromtimestamp(stat.st_mtime)
        console.print(f"Last modified: {modified:%Y-%m-%d %H:%M:%S}")

        with Progress(console=console, transient=True) as progress:
            narrator = ConsoleNarrator(console, progress)
            report = run_analysis(capture_path, self.session_factory, narrator)

        SummaryReporter(report).render(show_leaks=True, file=console.file)

        reporter: BaseReporter = JsonReporter(report)
        try:
            with open(os.fspath(output_file.expanduser()), "w") as f:
                reporter.render(f)
        except OSError as e:
            raise MemreportCommandError(
                f"Failed to write {output_file}\nReason: {e}", exit_code=1
            )
        console.print(f"Wrote {escape(str(output_file))}")
        console.rule("[bold]Analysis complete")
