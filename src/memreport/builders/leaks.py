import math
from typing import Iterable
from typing import List

from memreport._report import LeakCandidate
from memreport.builders.common import Candidate
from memreport.builders.common import function_name
from memreport.builders.common import top
from memreport.symbols import format_callstack
from memreport.symbols import parse_location

LEAK_LIMIT = 10
SUSPECT_ALLOC_COUNT = 100
SUSPECT_BYTES = 1024 * 1024


def leak_score(alloc_count: int, size: int) -> float:
    return math.log10(max(1, alloc_count)) * math.log10(max(1, size))


def is_suspect(alloc_count: int, size: int) -> bool:
    return alloc_count > SUSPECT_ALLOC_COUNT or size > SUSPECT_BYTES


def detect_leaks(candidates: Iterable[Candidate]) -> List[LeakCandidate]:
    """Report the callstacks with the most live allocations as leak candidates.

    Candidates are picked by allocation count alone. The score only grades how
    suspicious each pick looks.
    """
    leaks = []
    for candidate in top(
        candidates, key=lambda c: c.record.alloc_count, limit=LEAK_LIMIT
    ):
        record = candidate.record
        file, line = parse_location(candidate.innermost_symbol)
        leaks.append(
            LeakCandidate(
                function_name=function_name(candidate.callstack),
                file_name=file,
                line_number=line,
                leak_size=record.bytes,
                leak_count=record.alloc_count,
                leak_score=leak_score(record.alloc_count, record.bytes),
                call_stack=format_callstack(candidate.callstack.addresses),
                is_suspect=is_suspect(record.alloc_count, record.bytes),
            )
        )
    return leaks
