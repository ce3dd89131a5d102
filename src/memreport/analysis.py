import logging
import os
import sys
from pathlib import Path
from typing import Optional
from typing import Union

if sys.version_info >= (3, 8):
    from typing import Protocol
else:
    from typing_extensions import Protocol

from memreport._capture import CaptureSession
from memreport._capture import ReadResult
from memreport._capture import SessionFactory
from memreport._capture import Snapshot
from memreport._capture import capture_session
from memreport._errors import CaptureReadError
from memreport._report import MemoryReport
from memreport.builders import build_call_trees
from memreport.builders import build_function_summaries
from memreport.builders import build_page_views
from memreport.builders import build_type_summaries
from memreport.builders import detect_leaks
from memreport.builders import iter_candidates
from memreport.ingest import SnapshotCallback
from memreport.ingest import SnapshotIngestor
from memreport.resolver import CallstackResolver

logger = logging.getLogger(__name__)


class AnalysisObserver(Protocol):
    def symbols_loaded(self, warning: Optional[str]) -> None:
        ...

    def capture_read(self, status: ReadResult, snapshot_count: int) -> None:
        ...

    def snapshot_processed(self, index: int, snapshot: Optional[Snapshot]) -> None:
        ...


def analyze(
    session: CaptureSession,
    session_name: str,
    *,
    on_snapshot: Optional[SnapshotCallback] = None,
) -> MemoryReport:
    """Build the full report from a session whose capture was already read."""
    resolver = CallstackResolver(session)
    ingestor = SnapshotIngestor(session, resolver)
    ingestor.ingest(on_snapshot)

    total_size = ingestor.total_bytes
    total_allocations = ingestor.total_allocations
    candidates = list(iter_candidates(ingestor.accounting, resolver))
    logger.info(
        "Merged %d callstacks (%d resolved) and %d pages",
        len(ingestor.accounting),
        len(candidates),
        len(ingestor.pages),
    )

    leaks = detect_leaks(candidates)
    leak_count = sum(leak.leak_count for leak in leaks)
    leak_size = sum(leak.leak_size for leak in leaks)
    fragmentation = leak_size / total_size * 100.0 if total_size > 0 else 0.0

    return MemoryReport(
        session_name=session_name,
        total_snapshots=session.snapshot_count,
        total_allocations=total_allocations,
        total_size=total_size,
        leak_count=leak_count,
        leak_size=leak_size,
        memory_fragmentation=fragmentation,
        call_trees=tuple(build_call_trees(candidates)),
        functions=tuple(build_function_summaries(candidates, total_size)),
        leaks=tuple(leaks),
        page_views=tuple(build_page_views(ingestor.pages, resolver)),
        types=tuple(build_type_summaries(candidates, total_size)),
    )


def run_analysis(
    path: Union[str, "os.PathLike[str]"],
    session_factory: SessionFactory,
    observer: Optional[AnalysisObserver] = None,
) -> MemoryReport:
    """Open a capture with a fresh decoder session and analyze it.

    Raises :class:`CaptureReadError` if the decoder can't read the capture at
    all. Partial failures (missing symbols, unpacking problems, broken
    snapshots) are logged and the analysis goes on with what is left.
    """
    capture_path = os.fspath(path)
    with capture_session(session_factory) as session:
        symbol_warning = session.load_symbol_files()
        if symbol_warning:
            logger.warning("Symbol loading warning: %s", symbol_warning)
        if observer is not None:
            observer.symbols_loaded(symbol_warning)

        status = session.read(capture_path)
        if status.is_fatal:
            raise CaptureReadError(capture_path, status)
        if status is not ReadResult.OK:
            logger.warning(
                "Capture read returned %s, continuing with available data",
                status.value,
            )
        if observer is not None:
            observer.capture_read(status, session.snapshot_count)

        return analyze(
            session,
            Path(capture_path).stem,
            on_snapshot=observer.snapshot_processed if observer else None,
        )
