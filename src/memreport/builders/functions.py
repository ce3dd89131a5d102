from typing import Iterable
from typing import List

from memreport._report import FunctionSummary
from memreport.builders.common import Candidate
from memreport.builders.common import function_name
from memreport.builders.common import percentage
from memreport.builders.common import top
from memreport.builders.common import truncating_div
from memreport.symbols import parse_location

FUNCTION_LIMIT = 20


def build_function_summaries(
    candidates: Iterable[Candidate], total_bytes: int
) -> List[FunctionSummary]:
    summaries = []
    for candidate in top(
        candidates, key=lambda c: c.record.bytes, limit=FUNCTION_LIMIT
    ):
        record = candidate.record
        file, line = parse_location(candidate.innermost_symbol)
        average = (
            truncating_div(record.bytes, record.alloc_count)
            if record.alloc_count > 0
            else 0
        )
        summaries.append(
            FunctionSummary(
                function_name=function_name(candidate.callstack),
                file_name=file,
                line_number=line,
                allocation_count=record.alloc_count,
                total_size=record.bytes,
                average_size=average,
                # Only (bytes, count) survive per callstack, so the extremes
                # collapse onto the average.
                min_size=average,
                max_size=average,
                percentage=percentage(record.bytes, total_bytes),
            )
        )
    return summaries
