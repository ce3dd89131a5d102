import logging
from typing import Optional

_SIZE_SUFFIXES = ("B", "KB", "MB", "GB", "TB")

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def size_fmt(num: int) -> str:
    """Render a byte count with a binary unit suffix, e.g. ``1536 -> "1.5 KB"``."""
    counter = 0
    number = float(num)
    while round(number / 1024) >= 1 and counter < len(_SIZE_SUFFIXES) - 1:
        number /= 1024
        counter += 1
    return f"{number:,.1f} {_SIZE_SUFFIXES[counter]}"


def set_log_level(level: int, handler: Optional[logging.Handler] = None) -> None:
    logger = logging.getLogger("memreport")
    logger.setLevel(level)
    if handler is None and logger.handlers:
        return
    if handler is None:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.handlers[:] = [handler]
