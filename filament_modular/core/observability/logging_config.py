"""
Logging configuration — one setup call at CLI start.

Every module does ``logger = logging.getLogger(__name__)`` and inherits
this config. User-facing progress goes through click; logging carries
diagnostics only.

Levels are resolved in precedence order:
    --debug  >  --verbose  >  --quiet  >  FMOD_LOG_LEVEL  >  WARNING

Optional file output via FMOD_LOG_FILE / FMOD_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import sys

_CONSOLE_MINIMAL = ("%(levelname)s: %(message)s", None)
_CONSOLE_INFO = ("%(asctime)s %(name)s: %(message)s", "%H:%M:%S")
_CONSOLE_DEBUG = ("%(asctime)s %(levelname)s %(name)s:%(lineno)d: %(message)s", "%H:%M:%S")
_FILE_FORMAT = ("%(asctime)s %(levelname)s %(name)s:%(lineno)d: %(message)s", "%Y-%m-%d %H:%M:%S")


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env_level: str | None = None,
) -> str:
    """Pick the console level name from CLI flags and the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return env_level or "WARNING"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure Python logging for the entire process.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file.
        log_file_level: Optional separate level for the log file.
            Defaults to the same as ``level``.
    """
    console_level = _parse_level(level)
    if console_level <= logging.DEBUG:
        fmt, datefmt = _CONSOLE_DEBUG
    elif console_level <= logging.INFO:
        fmt, datefmt = _CONSOLE_INFO
    else:
        fmt, datefmt = _CONSOLE_MINIMAL

    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    root.addHandler(console)

    levels = [console_level]
    if log_file:
        file_level = _parse_level(log_file_level or level)
        levels.append(file_level)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(*_FILE_FORMAT))
        root.addHandler(fh)

    # the root passes everything any handler wants; handlers filter
    root.setLevel(min(levels))
    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
