"""geomalg logging.

Every library module logs through :func:`get_logger`, which hands out
children of the ``geomalg`` logger. The root is configured lazily the first
time a logger is requested.

Environment variables:
    GEOMALG_LOG_LEVEL: DEBUG / INFO (default) / WARNING / ERROR
    GEOMALG_LOG_FILE: optional path; appends plain-text log lines

The level can also be changed at runtime with :func:`set_level`, which is
what ``ScalarConfig(log_level=...)`` does when it is installed.
"""

import logging
import os
import sys

ROOT = "geomalg"

_CONFIGURED = False

# Level name colours, applied only when stderr is a TTY.
_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[35m",
}
_RESET = "\033[0m"


class _LevelColorFormatter(logging.Formatter):
    def __init__(self, fmt: str, use_color: bool):
        super().__init__(fmt)
        self.use_color = use_color

    def formatMessage(self, record: logging.LogRecord) -> str:
        if not self.use_color:
            return super().formatMessage(record)
        plain = record.levelname
        record.levelname = f"{_COLORS.get(record.levelno, '')}{plain}{_RESET}"
        try:
            return super().formatMessage(record)
        finally:
            record.levelname = plain


def parse_level(level) -> int:
    """Numeric level for a level name or number; ValueError if unknown."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level '{level}'")
    return value


def _configure_once() -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return
    _CONFIGURED = True

    root = logging.getLogger(ROOT)
    try:
        root.setLevel(parse_level(os.environ.get("GEOMALG_LOG_LEVEL", "INFO")))
    except ValueError:
        root.setLevel(logging.INFO)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(_LevelColorFormatter(
        "%(levelname)s %(name)s: %(message)s",
        use_color=hasattr(sys.stderr, "isatty") and sys.stderr.isatty(),
    ))
    root.addHandler(console)

    log_file = os.environ.get("GEOMALG_LOG_FILE")
    if log_file:
        fh = logging.FileHandler(log_file, mode="a")
        fh.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s"
        ))
        root.addHandler(fh)


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``geomalg`` hierarchy.

    Args:
        name: Typically ``__name__`` of the calling module. Names already
            inside the hierarchy are used as they are.
    """
    _configure_once()
    if name == ROOT or name.startswith(ROOT + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT}.{name}")


def set_level(level) -> int:
    """Set the level of the ``geomalg`` root logger.

    Args:
        level: A level name (``'debug'``, ``'WARNING'`` ...) or number.

    Returns:
        The previous numeric level.
    """
    _configure_once()
    root = logging.getLogger(ROOT)
    previous = root.level
    root.setLevel(parse_level(level))
    return previous
