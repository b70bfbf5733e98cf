"""Logging utilities -- verbosity levels, timestamps, ANSI terminal colors.

Configures the standard ``logging`` tree for the CLI and provides
color-coded output helpers that degrade to plain text when stdout is
piped.
"""

import logging
import sys

# Finer than DEBUG: one line per decoded directory entry
TRACE = 5
logging.addLevelName(TRACE, 'TRACE')

# -v repeat count -> level; anything beyond the table is TRACE
_VERBOSITY_LEVELS = [
    logging.ERROR,
    logging.WARNING,
    logging.INFO,
    logging.DEBUG,
]

LOG_FORMAT = '[%(asctime)s.%(msecs)03d] [%(levelname)s] %(name)s: %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# ---------------------------------------------------------------------------
# ANSI color codes
# ---------------------------------------------------------------------------

_RESET = '\033[0m'
_YELLOW = '\033[33m'
_BOLD_RED = '\033[1;31m'


def _is_tty():
    """Check if stdout is a terminal (not piped)."""
    try:
        return sys.stdout.isatty()
    except AttributeError:
        return False


# Module-level flag -- set once at import time
_USE_COLOR = _is_tty()


def set_color_enabled(enabled: bool):
    """Override automatic color detection."""
    global _USE_COLOR
    _USE_COLOR = enabled


def _c(code: str, text: str) -> str:
    """Apply ANSI code if color is enabled."""
    if _USE_COLOR:
        return f'{code}{text}{_RESET}'
    return text


def verbosity_to_level(verbosity: int) -> int:
    """Map a ``-v`` repeat count to a logging level."""
    if verbosity < 0:
        verbosity = 0
    if verbosity >= len(_VERBOSITY_LEVELS):
        return TRACE
    return _VERBOSITY_LEVELS[verbosity]


def configure_logging(verbosity: int = 0, stream=None) -> int:
    """Install a timestamped stderr handler at the level ``verbosity`` selects.

    Returns the level that was applied.
    """
    level = verbosity_to_level(verbosity)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=stream if stream is not None else sys.stderr,
        force=True,
    )
    return level


# ---------------------------------------------------------------------------
# CLI formatting helpers
# ---------------------------------------------------------------------------

def cli_error(text: str) -> str:
    """Red text for errors."""
    return _c(_BOLD_RED, text)


def cli_warning(text: str) -> str:
    """Yellow text for unsupported-input notices."""
    return _c(_YELLOW, text)
