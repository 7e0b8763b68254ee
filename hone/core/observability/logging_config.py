"""
Logging configuration — set up once by the CLI entrypoint.

Modules log through ``logging.getLogger(__name__)``; this module decides
where those records go and how they look.  User-facing output is echoed
by the CLI and never routed through logging.

Console level precedence:
    --debug  >  --verbose  >  --quiet  >  HONE_LOG_LEVEL  >  WARNING

A log file can be added with HONE_LOG_FILE (and HONE_LOG_FILE_LEVEL).
"""

from __future__ import annotations

import logging
import sys

# Console formats, picked by level.  Warnings are shown to end users,
# so the default format reads like regular tool output.
_CONSOLE_FORMATS: dict[int, tuple[str, str | None]] = {
    logging.DEBUG: ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    logging.INFO: ("%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
}
_CONSOLE_DEFAULT = ("%(levelname)s: %(message)s", None)

_FILE_FORMAT = ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%Y-%m-%d %H:%M:%S")

_NOISY_LOGGERS = ("urllib3", "charset_normalizer")


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env_level: str | None = None,
) -> str:
    """Pick the console level name from CLI flags, else the env var."""
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
    quiet_third_party: bool = True,
) -> None:
    """Replace the root logger's handlers with hone's console (and file) handlers.

    Args:
        level: Console level name. Unknown names fall back to WARNING.
        log_file: Optional path of a log file to append to.
        log_file_level: Level for the file handler; defaults to ``level``.
        quiet_third_party: Hold chatty library loggers at WARNING unless
            the console is at DEBUG.
    """
    console_level = _parse_level(level)

    fmt, datefmt = _CONSOLE_DEFAULT
    for threshold in sorted(_CONSOLE_FORMATS):
        if console_level <= threshold:
            fmt, datefmt = _CONSOLE_FORMATS[threshold]
            break

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(*_FILE_FORMAT))
        root.addHandler(file_handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)

    if quiet_third_party and console_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Level name → numeric level, WARNING when unknown."""
    numeric = getattr(logging, level.upper(), None) if level else None
    return numeric if isinstance(numeric, int) else logging.WARNING
