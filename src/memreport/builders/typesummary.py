from dataclasses import dataclass
from dataclasses import field
from typing import Dict
from typing import Iterable
from typing import List

from memreport._report import TypeSummary
from memreport.builders.common import Candidate
from memreport.builders.common import percentage
from memreport.builders.common import top
from memreport.builders.common import truncating_div
from memreport.symbols import extract_type_name
from memreport.symbols import parse_location

TYPE_LIMIT = 15


@dataclass
class _TypeGroup:
    type_name: str
    members: List[Candidate] = field(default_factory=list)

    @property
    def total_bytes(self) -> int:
        return sum(member.record.bytes for member in self.members)

    @property
    def total_allocations(self) -> int:
        return sum(member.record.alloc_count for member in self.members)

    @property
    def most_common_function(self) -> str:
        busiest = top(self.members, key=lambda c: c.record.alloc_count, limit=1)
        return busiest[0].innermost_symbol


def _group_by_type(candidates: Iterable[Candidate]) -> List[_TypeGroup]:
    groups: Dict[str, _TypeGroup] = {}
    for candidate in candidates:
        if not candidate.callstack.symbols:
            continue
        type_name = extract_type_name(candidate.innermost_symbol)
        if not type_name:
            continue
        groups.setdefault(type_name, _TypeGroup(type_name)).members.append(candidate)
    return list(groups.values())


def build_type_summaries(
    candidates: Iterable[Candidate], total_bytes: int
) -> List[TypeSummary]:
    """Aggregate callstacks by the type their innermost frame appears to allocate."""
    summaries = []
    for group in top(
        _group_by_type(candidates), key=lambda g: g.total_bytes, limit=TYPE_LIMIT
    ):
        size = group.total_bytes
        count = group.total_allocations
        average = truncating_div(size, count) if count > 0 else 0
        function = group.most_common_function
        file, line = parse_location(function)
        summaries.append(
            TypeSummary(
                type_name=group.type_name,
                allocation_count=count,
                total_size=size,
                average_size=average,
                min_size=average,
                max_size=average,
                percentage=percentage(size, total_bytes),
                most_common_function=function,
                most_common_file=file,
                most_common_line=line,
            )
        )
    return summaries
