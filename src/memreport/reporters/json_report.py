import json
from dataclasses import asdict
from typing import Any
from typing import Dict
from typing import TextIO

from memreport._report import MemoryReport


def _camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(word.capitalize() for word in rest)


def _camelize(value: Any) -> Any:
    if isinstance(value, dict):
        return {_camel_case(key): _camelize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_camelize(item) for item in value]
    return value


class JsonReporter:
    """Serializes a :class:`MemoryReport` as the ``*_memory_analysis.json`` document."""

    SUFFIX = "_memory_analysis.json"

    def __init__(self, report: MemoryReport, *, indent: int = 2) -> None:
        self.report = report
        self.indent = indent

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = _camelize(asdict(self.report))
        return result

    def render(self, outfile: TextIO) -> None:
        json.dump(self.to_dict(), outfile, indent=self.indent)
        outfile.write("\n")
