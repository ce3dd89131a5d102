from typing import Iterable
from typing import List
from typing import Tuple

from memreport._capture import Page
from memreport._report import PageView
from memreport.builders.common import UNKNOWN_FUNCTION
from memreport.resolver import CallstackResolver
from memreport.symbols import format_address
from memreport.symbols import format_callstack

PAGE_LIMIT = 20
UNKNOWN_PAGE_OWNER = "Unknown"


def _page_owner(page: Page, resolver: CallstackResolver) -> Tuple[str, str]:
    """Name the function behind a page from its first sampled allocation."""
    if not page.allocations:
        return UNKNOWN_PAGE_OWNER, ""

    callstack = resolver.resolve(page.allocations[0].stack_id)
    if callstack is None:
        return format_address(page.address), ""

    if callstack.symbols:
        name = callstack.symbols[0]
    elif page.address > 0:
        name = format_address(page.address)
    else:
        name = UNKNOWN_FUNCTION
    return name, format_callstack(callstack.addresses)


def build_page_views(
    pages: Iterable[Page], resolver: CallstackResolver
) -> List[PageView]:
    views = []
    for page in sorted(pages, key=lambda p: p.usage, reverse=True)[:PAGE_LIMIT]:
        function_name, call_stack = _page_owner(page, resolver)
        views.append(
            PageView(
                address=page.address,
                state=page.state,
                type=page.type,
                protection=page.protection,
                stack_id=page.stack_id,
                usage=page.usage,
                allocation_count=len(page.allocations),
                total_size=sum(allocation.size for allocation in page.allocations),
                function_name=function_name,
                call_stack=call_stack,
            )
        )
    return views
