"""Process logging: console plus combined and error log files."""

import logging
from collections import deque
from pathlib import Path

from agentdock.errors import InvalidInput, NotFound


LOG_FORMAT = "[%(asctime)s] %(levelname)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"
COMBINED_LOG = "combined.log"
ERROR_LOG = "error.log"

# LOG_LEVEL values use the short "warn"
_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

_ROOT_LOGGERS = ("agentdock", "dockserver")


def configure_logging(level: str = "info", log_dir: Path | str = "logs") -> None:
    """Attach console and file handlers to the agentdock and dockserver loggers.

    Calling it again replaces the handlers it installed earlier, so the
    log directory can be changed (tests point it at a temp dir).
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)
    console = logging.StreamHandler()
    combined = logging.FileHandler(log_dir / COMBINED_LOG, encoding="utf-8")
    errors = logging.FileHandler(log_dir / ERROR_LOG, encoding="utf-8")
    errors.setLevel(logging.ERROR)

    for handler in (console, combined, errors):
        handler.setFormatter(formatter)
        handler._agentdock = True  # type: ignore[attr-defined]

    for name in _ROOT_LOGGERS:
        logger = logging.getLogger(name)
        for old in [h for h in logger.handlers if getattr(h, "_agentdock", False)]:
            logger.removeHandler(old)
            old.close()
        logger.setLevel(_LEVELS.get(level, logging.INFO))
        for handler in (console, combined, errors):
            logger.addHandler(handler)
        logger.propagate = False


def read_log_tail(path: Path, lines: int = 100) -> list[str]:
    """Return the last ``lines`` non-empty lines of a log file."""
    if lines < 1:
        raise InvalidInput("Invalid lines parameter", "Lines must be a positive integer")
    if not path.exists():
        raise NotFound(f"Log file '{path.name}' not found")
    with open(path, encoding="utf-8", errors="replace") as f:
        tail = deque((line.rstrip("\n") for line in f if line.strip()), maxlen=lines)
    return list(tail)
