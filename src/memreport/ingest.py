import logging
from dataclasses import dataclass
from typing import Callable
from typing import Dict
from typing import List
from typing import Optional

from memreport._capture import CaptureSession
from memreport._capture import Page
from memreport._capture import Snapshot
from memreport._utils import size_fmt
from memreport.resolver import CallstackResolver

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[int, Optional[Snapshot]], None]


@dataclass(frozen=True)
class AccountingRecord:
    callstack_id: int
    bytes: int
    alloc_count: int


class SnapshotIngestor:
    """Merge every snapshot of a capture into one accounting map and page list.

    A callstack reported by several snapshots keeps the record of the last
    snapshot that mentions it; records are replaced, not summed.
    """

    def __init__(self, session: CaptureSession, resolver: CallstackResolver) -> None:
        self._session = session
        self._resolver = resolver
        self.accounting: Dict[int, AccountingRecord] = {}
        self.pages: List[Page] = []

    def ingest(self, on_snapshot: Optional[SnapshotCallback] = None) -> None:
        for index in range(self._session.snapshot_count):
            snapshot: Optional[Snapshot] = None
            try:
                snapshot = self._session.get_snapshot(index)
                if snapshot is not None:
                    self._ingest_snapshot(index, snapshot)
            except Exception as e:
                logger.warning("Error processing snapshot %d: %s", index, e)
                snapshot = None
            if on_snapshot is not None:
                on_snapshot(index, snapshot)

    def _ingest_snapshot(self, index: int, snapshot: Snapshot) -> None:
        for data in snapshot.get_callstack_data() or ():
            self.accounting[data.callstack_id] = AccountingRecord(
                data.callstack_id, data.bytes, data.alloc_count
            )
            self._resolver.resolve(data.callstack_id)

        try:
            pages = list(snapshot.get_pages())
        except Exception as e:
            logger.warning("Could not get pages for snapshot %d: %s", index, e)
        else:
            self.pages.extend(pages)

        logger.info(
            "Snapshot %d: %s (allocated %s, reserved %s, committed %s)",
            index,
            snapshot.name,
            size_fmt(snapshot.allocated_bytes),
            size_fmt(snapshot.reserved_bytes),
            size_fmt(snapshot.committed_bytes),
        )

    @property
    def total_bytes(self) -> int:
        return sum(record.bytes for record in self.accounting.values())

    @property
    def total_allocations(self) -> int:
        return sum(record.alloc_count for record in self.accounting.values())
