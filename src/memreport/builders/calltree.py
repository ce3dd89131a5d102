from typing import Iterable
from typing import List

from memreport._report import CallTreeNode
from memreport.builders.common import Candidate
from memreport.builders.common import function_name
from memreport.builders.common import top
from memreport.builders.common import truncating_div
from memreport.symbols import parse_location

CALL_TREE_LIMIT = 10
MAX_CHILDREN = 4


def _child_nodes(candidate: Candidate) -> List[CallTreeNode]:
    # The accounting model has no per-frame cost, so the caller frames get an
    # even share of the stack's bytes and allocations.
    symbols = candidate.callstack.symbols
    n_symbols = len(symbols)
    child_size = truncating_div(candidate.record.bytes, max(1, n_symbols - 1))
    child_count = max(1, truncating_div(candidate.record.alloc_count, n_symbols))

    children = []
    for symbol in symbols[1 : MAX_CHILDREN + 1]:
        file, line = parse_location(symbol)
        children.append(
            CallTreeNode(
                function_name=symbol,
                file_name=file,
                line_number=line,
                allocation_count=child_count,
                total_size=child_size,
                self_size=child_size,
                inclusive_size=child_size,
            )
        )
    return children


def build_call_trees(candidates: Iterable[Candidate]) -> List[CallTreeNode]:
    """Build one tree per callstack for the stacks with the most allocations."""
    trees = []
    for candidate in top(
        candidates, key=lambda c: c.record.alloc_count, limit=CALL_TREE_LIMIT
    ):
        file, line = parse_location(candidate.innermost_symbol)
        size = candidate.record.bytes
        children = (
            _child_nodes(candidate) if len(candidate.callstack.symbols) > 1 else []
        )
        trees.append(
            CallTreeNode(
                function_name=function_name(candidate.callstack),
                file_name=file,
                line_number=line,
                allocation_count=candidate.record.alloc_count,
                total_size=size,
                self_size=size,
                inclusive_size=size,
                children=tuple(children),
            )
        )
    return trees
