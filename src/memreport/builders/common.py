"""Helpers shared by the report builders."""
from dataclasses import dataclass
from typing import Callable
from typing import Iterable
from typing import Iterator
from typing import List
from typing import Mapping
from typing import TypeVar

from memreport._capture import Callstack
from memreport.ingest import AccountingRecord
from memreport.resolver import CallstackResolver
from memreport.symbols import format_address

T = TypeVar("T")

UNKNOWN_FUNCTION = "Unknown Function"


@dataclass(frozen=True)
class Candidate:
    """A resolved callstack together with its merged accounting record."""

    callstack_id: int
    callstack: Callstack
    record: AccountingRecord

    @property
    def innermost_symbol(self) -> str:
        return self.callstack.symbols[0] if self.callstack.symbols else ""


def iter_candidates(
    accounting: Mapping[int, AccountingRecord], resolver: CallstackResolver
) -> Iterator[Candidate]:
    """Yield every resolved callstack that has an accounting record.

    Candidates come out in the order their callstacks were first resolved.
    """
    for callstack_id, callstack in resolver.resolved():
        record = accounting.get(callstack_id)
        if record is not None:
            yield Candidate(callstack_id, callstack, record)


def top(items: Iterable[T], key: Callable[[T], float], limit: int) -> List[T]:
    # sorted() is stable with reverse=True, so ties keep their input order
    return sorted(items, key=key, reverse=True)[:limit]


def function_name(callstack: Callstack) -> str:
    if callstack.symbols:
        return callstack.symbols[0]
    if callstack.addresses and callstack.addresses[0] > 0:
        return format_address(callstack.addresses[0])
    return UNKNOWN_FUNCTION


def truncating_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero, as the accounting counters expect."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator < 0) == (denominator < 0) else -quotient


def percentage(part: int, total: int) -> float:
    return part / total * 100.0 if total > 0 else 0.0
