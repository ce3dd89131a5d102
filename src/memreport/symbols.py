"""Heuristics for pulling locations and type names out of symbol strings."""
from typing import Iterable
from typing import Optional
from typing import Tuple

Location = Tuple[str, int]

_TYPE_PREFIXES = ("std::", "struct ", "class ")


def _parenthesized_payload(symbol: str) -> Optional[str]:
    start = symbol.find("(")
    while start != -1:
        end = symbol.find(")", start + 1)
        if end == -1:
            return None
        if end > start + 1:
            return symbol[start + 1 : end]
        start = symbol.find("(", start + 1)
    return None


def parse_location(symbol: Optional[str]) -> Location:
    """Split ``"name (file.cpp(42))"`` into ``("file.cpp", 42)``.

    Anything that doesn't follow that shape yields ``("", 0)``; a file without
    a parseable line number yields ``(file, 0)``.
    """
    if not symbol:
        return "", 0

    payload = _parenthesized_payload(symbol)
    if payload is None:
        return "", 0

    parts = payload.split("(")
    file = parts[0]
    if len(parts) < 2:
        return file, 0
    try:
        line = int(parts[1].replace(")", ""))
    except ValueError:
        line = 0
    return file, line


def _is_identifier_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def _identifier_after(symbol: str, prefix: str) -> Optional[str]:
    start = symbol.find(prefix)
    while start != -1:
        begin = end = start + len(prefix)
        while end < len(symbol) and _is_identifier_char(symbol[end]):
            end += 1
        if end > begin:
            return symbol[begin:end]
        start = symbol.find(prefix, start + 1)
    return None


def extract_type_name(symbol: Optional[str]) -> str:
    """Guess which type a symbol allocates for.

    ``std::``, ``struct`` and ``class`` qualified names are tried in that order;
    otherwise the function name (everything before the argument list) is used.
    """
    if not symbol:
        return ""

    for prefix in _TYPE_PREFIXES:
        identifier = _identifier_after(symbol, prefix)
        if identifier is not None:
            return f"{prefix}{identifier}"

    return symbol.split("(")[0].strip()


def format_address(address: int) -> str:
    return f"0x{address:X}"


def format_callstack(addresses: Iterable[int]) -> str:
    return " <- ".join(format_address(address) for address in addresses)
