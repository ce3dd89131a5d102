from typing import Any

from memreport._capture import ReadResult


class MemreportError(Exception):
    """Exceptions raised in this package."""


class MemreportCommandError(MemreportError):
    """Exceptions raised from this package's CLI commands."""

    def __init__(self, *args: Any, exit_code: int) -> None:
        super().__init__(*args)
        self.exit_code = exit_code


class CaptureReadError(MemreportError):
    """The capture decoder reported a status that leaves nothing to analyze."""

    def __init__(self, path: str, status: ReadResult) -> None:
        super().__init__(f"Failed to read capture file {path}: {status.name}")
        self.path = path
        self.status = status
