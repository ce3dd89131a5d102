"""A capture session backed by a JSON export of a capture.

The export mirrors what a capture decoder reports::

    {
      "version": 1,
      "snapshots": [
        {
          "name": "...",
          "allocatedBytes": 0, "reservedBytes": 0, "committedBytes": 0,
          "callstacks": [{"id": 1, "bytes": 1024, "allocCount": 2}],
          "pages": [
            {"address": 4096, "state": "Committed", "type": "Private",
             "protection": 4, "stackId": 1, "usage": 4096,
             "allocs": [{"size": 64, "stackId": 1}]}
          ]
        }
      ],
      "callstacks": {"1": {"symbols": ["..."], "addresses": [4198400]}}
    }

Snapshots and pages are decoded lazily, so a malformed entry only fails the
snapshot it belongs to.
"""
import json
import logging
import os
from typing import Any
from typing import Dict
from typing import Iterable
from typing import List
from typing import Optional
from typing import Sequence

from memreport._capture import Callstack
from memreport._capture import CallstackData
from memreport._capture import Page
from memreport._capture import PageAllocation
from memreport._capture import ReadResult
from memreport._errors import MemreportError

logger = logging.getLogger(__name__)

SUPPORTED_VERSION = 1


def _as_int(value: Any) -> int:
    if isinstance(value, str):
        return int(value, 0)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"expected an integer, got {value!r}")
    return value


def _unsigned(value: Any) -> int:
    number = _as_int(value)
    if number < 0:
        raise ValueError(f"expected a non-negative integer, got {number}")
    return number


def _decode_page(raw: Dict[str, Any]) -> Page:
    return Page(
        address=_unsigned(raw["address"]),
        state=str(raw.get("state", "")),
        type=str(raw.get("type", "")),
        protection=_unsigned(raw.get("protection", 0)),
        stack_id=_as_int(raw.get("stackId", 0)),
        usage=_unsigned(raw.get("usage", 0)),
        allocations=tuple(
            PageAllocation(
                size=_unsigned(alloc["size"]), stack_id=_as_int(alloc["stackId"])
            )
            for alloc in raw.get("allocs", ())
        ),
    )


class DumpSnapshot:
    def __init__(self, raw: Dict[str, Any]) -> None:
        self._raw = raw
        self.name = str(raw.get("name", ""))
        self.allocated_bytes = _unsigned(raw.get("allocatedBytes", 0))
        self.reserved_bytes = _unsigned(raw.get("reservedBytes", 0))
        self.committed_bytes = _unsigned(raw.get("committedBytes", 0))

    def get_callstack_data(self) -> List[CallstackData]:
        return [
            CallstackData(
                callstack_id=_as_int(entry["id"]),
                bytes=_unsigned(entry["bytes"]),
                alloc_count=_as_int(entry["allocCount"]),
            )
            for entry in self._raw.get("callstacks", ())
        ]

    def get_pages(self) -> List[Page]:
        return [_decode_page(page) for page in self._raw.get("pages", ())]


class DumpCaptureSession:
    """Reads captures exported as JSON; see the module docstring for the layout."""

    def __init__(self, symbol_paths: Sequence[str] = ()) -> None:
        self._symbol_paths = tuple(symbol_paths)
        self._created = False
        self._snapshots: List[Any] = []
        self._callstacks: Dict[str, Any] = {}

    @property
    def snapshot_count(self) -> int:
        return len(self._snapshots)

    def create(self) -> None:
        self._created = True
        self._snapshots = []
        self._callstacks = {}

    def destroy(self) -> None:
        self._created = False
        self._snapshots = []
        self._callstacks = {}

    def _check_created(self) -> None:
        if not self._created:
            raise MemreportError("The capture session has not been created")

    def load_symbol_files(self) -> Optional[str]:
        self._check_created()
        missing = [path for path in self._symbol_paths if not os.path.exists(path)]
        if missing:
            return "Could not find symbol files: " + ", ".join(missing)
        return None

    def read(self, path: str) -> ReadResult:
        self._check_created()
        try:
            with open(path, encoding="utf-8") as f:
                document = json.load(f)
        except OSError as e:
            logger.debug("Could not open %s: %s", path, e)
            return ReadResult.FAILED_OPENING_FILE
        except ValueError as e:
            logger.debug("Could not decode %s: %s", path, e)
            return ReadResult.INVALID_FILE_FORMAT

        if not isinstance(document, dict) or not isinstance(
            document.get("snapshots"), list
        ):
            return ReadResult.INVALID_FILE_FORMAT
        version = document.get("version", SUPPORTED_VERSION)
        if not isinstance(version, int) or version > SUPPORTED_VERSION:
            return ReadResult.UNSUPPORTED_VERSION

        self._snapshots = document["snapshots"]
        callstacks = document.get("callstacks", {})
        if not isinstance(callstacks, dict):
            return ReadResult.FAILED_READING_SYMBOLS
        self._callstacks = callstacks
        return ReadResult.OK

    def get_snapshot(self, index: int) -> Optional[DumpSnapshot]:
        self._check_created()
        raw = self._snapshots[index]
        if raw is None:
            return None
        if not isinstance(raw, dict):
            raise ValueError(f"Snapshot {index} is not an object")
        return DumpSnapshot(raw)

    def get_callstack(self, callstack_id: int) -> Optional[Callstack]:
        self._check_created()
        raw = self._callstacks.get(str(callstack_id))
        if raw is None:
            return None
        symbols: Iterable[Any] = raw.get("symbols") or ()
        addresses: Iterable[Any] = raw.get("addresses") or ()
        return Callstack(
            symbols=tuple(str(symbol) for symbol in symbols),
            addresses=tuple(_unsigned(address) for address in addresses),
        )
