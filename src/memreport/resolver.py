import logging
from typing import Dict
from typing import Iterator
from typing import Optional
from typing import Set
from typing import Tuple

from memreport._capture import Callstack
from memreport._capture import CaptureSession

logger = logging.getLogger(__name__)


class CallstackResolver:
    """Memoizes callstack lookups against a capture session.

    Each id is looked up at most once. Ids the session can't resolve are
    remembered as failures and stay unresolved for the rest of the run.
    """

    def __init__(self, session: CaptureSession) -> None:
        self._session = session
        self._callstacks: Dict[int, Callstack] = {}
        self._failed: Set[int] = set()

    def resolve(self, callstack_id: int) -> Optional[Callstack]:
        if callstack_id in self._callstacks:
            return self._callstacks[callstack_id]
        if callstack_id in self._failed:
            return None

        try:
            callstack = self._session.get_callstack(callstack_id)
        except Exception as e:
            logger.debug("Could not resolve callstack %d: %s", callstack_id, e)
            callstack = None

        if callstack is None:
            self._failed.add(callstack_id)
            return None

        self._callstacks[callstack_id] = callstack
        return callstack

    def resolved(self) -> Iterator[Tuple[int, Callstack]]:
        yield from self._callstacks.items()

    def __contains__(self, callstack_id: object) -> bool:
        return callstack_id in self._callstacks

    def __len__(self) -> int:
        return len(self._callstacks)
