"""Utilities / Helpers for writing tests."""
import json
from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Dict
from typing import List
from typing import Optional
from typing import Sequence
from typing import Tuple

from memreport import Callstack
from memreport import CallstackData
from memreport import Page
from memreport import PageAllocation
from memreport import ReadResult
from memreport.builders import Candidate
from memreport.ingest import AccountingRecord


@dataclass
class MockSnapshot:
    """Mimics a snapshot handed out by a capture decoder."""

    name: str = "snapshot"
    records: List[Tuple[int, int, int]] = field(default_factory=list)
    pages: List[Page] = field(default_factory=list)
    allocated_bytes: int = 0
    reserved_bytes: int = 0
    committed_bytes: int = 0
    pages_error: Optional[Exception] = None
    records_error: Optional[Exception] = None

    def get_callstack_data(self):
        if self.records_error is not None:
            raise self.records_error
        return [CallstackData(*record) for record in self.records]

    def get_pages(self):
        if self.pages_error is not None:
            raise self.pages_error
        return list(self.pages)


class MockCaptureSession:
    """An in-memory capture decoder that records how it is used."""

    def __init__(
        self,
        snapshots: Sequence[Any] = (),
        callstacks: Optional[Dict[int, Any]] = None,
        *,
        read_result: ReadResult = ReadResult.OK,
        symbol_warning: Optional[str] = None,
        create_error: Optional[Exception] = None,
        destroy_error: Optional[Exception] = None,
    ) -> None:
        self.snapshots = list(snapshots)
        self.callstacks = callstacks or {}
        self.read_result = read_result
        self.symbol_warning = symbol_warning
        self.create_error = create_error
        self.destroy_error = destroy_error
        self.created = False
        self.destroyed = False
        self.read_paths: List[str] = []
        self.callstack_queries: List[int] = []

    @property
    def snapshot_count(self):
        return len(self.snapshots)

    def create(self):
        if self.create_error is not None:
            raise self.create_error
        self.created = True

    def destroy(self):
        self.destroyed = True
        if self.destroy_error is not None:
            raise self.destroy_error

    def load_symbol_files(self):
        return self.symbol_warning

    def read(self, path):
        self.read_paths.append(path)
        return self.read_result

    def get_snapshot(self, index):
        snapshot = self.snapshots[index]
        if isinstance(snapshot, Exception):
            raise snapshot
        return snapshot

    def get_callstack(self, callstack_id):
        self.callstack_queries.append(callstack_id)
        callstack = self.callstacks.get(callstack_id)
        if isinstance(callstack, Exception):
            raise callstack
        return callstack


def make_callstack(*symbols: str, addresses: Sequence[int] = ()) -> Callstack:
    if not addresses:
        addresses = [0x1000 + 0x10 * i for i in range(len(symbols))]
    return Callstack(symbols=tuple(symbols), addresses=tuple(addresses))


def make_candidate(
    callstack_id: int, size: int, count: int, callstack: Callstack
) -> Candidate:
    return Candidate(
        callstack_id, callstack, AccountingRecord(callstack_id, size, count)
    )


def make_page(
    address: int,
    usage: int,
    allocations: Sequence[Tuple[int, int]] = (),
    **kwargs: Any,
) -> Page:
    kwargs.setdefault("state", "Committed")
    kwargs.setdefault("type", "Private")
    kwargs.setdefault("protection", 4)
    kwargs.setdefault("stack_id", 0)
    return Page(
        address=address,
        usage=usage,
        allocations=tuple(
            PageAllocation(size, stack_id) for size, stack_id in allocations
        ),
        **kwargs,
    )


def write_capture_dump(path, snapshots, callstacks=None, **extra):
    document = {"version": 1, "snapshots": snapshots, **extra}
    if callstacks is not None:
        document["callstacks"] = {
            str(callstack_id): value for callstack_id, value in callstacks.items()
        }
    path.write_text(json.dumps(document))
    return path
