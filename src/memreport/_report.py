from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class CallTreeNode:
    function_name: str
    file_name: str
    line_number: int
    allocation_count: int
    total_size: int
    self_size: int
    inclusive_size: int
    children: Tuple["CallTreeNode", ...] = ()


@dataclass(frozen=True)
class FunctionSummary:
    function_name: str
    file_name: str
    line_number: int
    allocation_count: int
    total_size: int
    average_size: int
    min_size: int
    max_size: int
    percentage: float


@dataclass(frozen=True)
class LeakCandidate:
    function_name: str
    file_name: str
    line_number: int
    leak_size: int
    leak_count: int
    leak_score: float
    call_stack: str
    is_suspect: bool


@dataclass(frozen=True)
class PageView:
    address: int
    state: str
    type: str
    protection: int
    stack_id: int
    usage: int
    allocation_count: int
    total_size: int
    function_name: str
    call_stack: str


@dataclass(frozen=True)
class TypeSummary:
    type_name: str
    allocation_count: int
    total_size: int
    average_size: int
    min_size: int
    max_size: int
    percentage: float
    most_common_function: str
    most_common_file: str
    most_common_line: int


@dataclass(frozen=True)
class MemoryReport:
    session_name: str
    total_snapshots: int
    total_allocations: int
    total_size: int
    leak_count: int
    leak_size: int
    memory_fragmentation: float
    call_trees: Tuple[CallTreeNode, ...]
    functions: Tuple[FunctionSummary, ...]
    leaks: Tuple[LeakCandidate, ...]
    page_views: Tuple[PageView, ...]
    types: Tuple[TypeSummary, ...]
