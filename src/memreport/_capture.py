"""Types exchanged with the capture decoder.

The decoder itself (binary layout parsing, symbol lookup) lives outside this
package. Anything that satisfies :class:`CaptureSession` can be analyzed.
"""
import contextlib
import enum
import logging
import sys
from dataclasses import dataclass
from typing import Callable
from typing import Iterable
from typing import Iterator
from typing import Optional
from typing import Tuple

if sys.version_info >= (3, 8):
    from typing import Protocol
else:
    from typing_extensions import Protocol

logger = logging.getLogger(__name__)


class ReadResult(enum.Enum):
    OK = "OK"
    FAILED_UNPACKING_ALLOCS_FILE = "FailedUnpackingAllocsFile"
    FAILED_READING_SYMBOLS = "FailedReadingSymbols"
    FAILED_OPENING_FILE = "FailedOpeningFile"
    INVALID_FILE_FORMAT = "InvalidFileFormat"
    UNSUPPORTED_VERSION = "UnsupportedVersion"

    @property
    def is_fatal(self) -> bool:
        return self not in _RECOVERABLE_RESULTS


_RECOVERABLE_RESULTS = frozenset(
    {
        ReadResult.OK,
        ReadResult.FAILED_UNPACKING_ALLOCS_FILE,
        ReadResult.FAILED_READING_SYMBOLS,
    }
)


@dataclass(frozen=True)
class CallstackData:
    """Bytes and allocation count attributed to one callstack in a snapshot."""

    callstack_id: int
    bytes: int
    alloc_count: int


@dataclass(frozen=True)
class Callstack:
    """A resolved stack, innermost frame first."""

    symbols: Tuple[str, ...] = ()
    addresses: Tuple[int, ...] = ()


@dataclass(frozen=True)
class PageAllocation:
    size: int
    stack_id: int


@dataclass(frozen=True)
class Page:
    address: int
    state: str
    type: str
    protection: int
    stack_id: int
    usage: int
    allocations: Tuple[PageAllocation, ...] = ()


class Snapshot(Protocol):
    name: str
    allocated_bytes: int
    reserved_bytes: int
    committed_bytes: int

    def get_callstack_data(self) -> Iterable[CallstackData]:
        ...

    def get_pages(self) -> Iterable[Page]:
        ...


class CaptureSession(Protocol):
    @property
    def snapshot_count(self) -> int:
        ...

    def create(self) -> None:
        ...

    def destroy(self) -> None:
        ...

    def load_symbol_files(self) -> Optional[str]:
        ...

    def read(self, path: str) -> ReadResult:
        ...

    def get_snapshot(self, index: int) -> Optional[Snapshot]:
        ...

    def get_callstack(self, callstack_id: int) -> Optional[Callstack]:
        ...


SessionFactory = Callable[[], CaptureSession]


@contextlib.contextmanager
def capture_session(factory: SessionFactory) -> Iterator[CaptureSession]:
    """Create a decoder session and make sure it is destroyed on every exit path.

    An error raised while destroying the session is logged, never propagated,
    so it cannot hide the outcome of the analysis.
    """
    session = factory()
    try:
        session.create()
        yield session
    finally:
        try:
            session.destroy()
        except Exception as e:
            logger.warning("Error during capture session cleanup: %s", e)
