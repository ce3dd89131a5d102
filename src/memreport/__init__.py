from ._capture import Callstack
from ._capture import CallstackData
from ._capture import CaptureSession
from ._capture import Page
from ._capture import PageAllocation
from ._capture import ReadResult
from ._capture import Snapshot
from ._capture import capture_session
from ._dump import DumpCaptureSession
from ._errors import CaptureReadError
from ._errors import MemreportCommandError
from ._errors import MemreportError
from ._report import CallTreeNode
from ._report import FunctionSummary
from ._report import LeakCandidate
from ._report import MemoryReport
from ._report import PageView
from ._report import TypeSummary
from ._utils import set_log_level
from ._utils import size_fmt
from ._version import __version__
from .analysis import analyze
from .analysis import run_analysis

__all__ = [
    "Callstack",
    "CallstackData",
    "CaptureSession",
    "Page",
    "PageAllocation",
    "ReadResult",
    "Snapshot",
    "capture_session",
    "DumpCaptureSession",
    "CaptureReadError",
    "MemreportCommandError",
    "MemreportError",
    "CallTreeNode",
    "FunctionSummary",
    "LeakCandidate",
    "MemoryReport",
    "PageView",
    "TypeSummary",
    "analyze",
    "run_analysis",
    "set_log_level",
    "size_fmt",
    "__version__",
]
