import sys
from typing import TextIO

if sys.version_info >= (3, 8):
    from typing import Protocol
else:
    from typing_extensions import Protocol


class BaseReporter(Protocol):
    def render(self, outfile: TextIO) -> None:
        ...
