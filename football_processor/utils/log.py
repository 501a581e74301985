"""
Logging utilities for console output.

Provides consistent logging with support for:
- Log levels (DEBUG, INFO, WARN, ERROR)
- Optional emoji stripping
- Verbose mode for debug output
- Tracebacks for unexpected failures
"""

import re
import sys
import traceback
from enum import IntEnum
from typing import Optional


class LogLevel(IntEnum):
    """Log levels for filtering output."""
    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    SILENT = 4


# Module-level configuration
_log_level = LogLevel.INFO
_use_emoji = True
_use_color = True

# ANSI color codes
_COLORS = {
    'reset': '\033[0m',
    'red': '\033[91m',
    'yellow': '\033[93m',
    'green': '\033[92m',
    'gray': '\033[90m',
}

_EMOJI_PATTERN = re.compile(
    "["
    "\U0001F600-\U0001F64F"  # emoticons
    "\U0001F300-\U0001F5FF"  # symbols & pictographs
    "\U0001F680-\U0001F6FF"  # transport & map symbols
    "\U00002702-\U000027B0"
    "]+",
    flags=re.UNICODE
)


def set_verbosity(verbose: bool) -> None:
    """Show DEBUG messages when verbose, otherwise INFO and above."""
    global _log_level
    _log_level = LogLevel.DEBUG if verbose else LogLevel.INFO


def set_use_emoji(use_emoji: bool) -> None:
    """Enable or disable emoji in output."""
    global _use_emoji
    _use_emoji = use_emoji


def set_use_color(use_color: bool) -> None:
    """Enable or disable ANSI colors on terminals."""
    global _use_color
    _use_color = use_color


def _supports_color(stream) -> bool:
    """Check if the stream is a color-capable terminal."""
    if not _use_color:
        return False
    if not hasattr(stream, 'isatty') or not stream.isatty():
        return False
    return sys.platform != 'win32'


def _format_message(msg: str, level: str, stream, color: Optional[str] = None) -> str:
    """Format a log message with an optional level prefix."""
    if not _use_emoji:
        msg = _EMOJI_PATTERN.sub('', msg).strip()

    parts = []

    if level:
        level_str = f"[{level}]"
        if color and _supports_color(stream):
            level_str = f"{_COLORS[color]}{level_str}{_COLORS['reset']}"
        parts.append(level_str)

    parts.append(msg)

    return ' '.join(parts)


def debug(msg: str) -> None:
    """Print debug message (only if verbose/debug mode enabled)."""
    if _log_level <= LogLevel.DEBUG:
        print(_format_message(msg, 'DEBUG', sys.stdout, 'gray'))


def info(msg: str) -> None:
    if _log_level <= LogLevel.INFO:
        print(_format_message(msg, '', sys.stdout))


def warn(msg: str) -> None:
    """Print warning message to stderr."""
    if _log_level <= LogLevel.WARN:
        print(_format_message(msg, 'WARN', sys.stderr, 'yellow'), file=sys.stderr)


def error(msg: str) -> None:
    """Print error message to stderr."""
    if _log_level <= LogLevel.ERROR:
        print(_format_message(msg, 'ERROR', sys.stderr, 'red'), file=sys.stderr)


def exception(msg: str, exc: BaseException) -> None:
    """Print an error message followed by the exception's traceback."""
    if _log_level <= LogLevel.ERROR:
        error(f"{msg}: {exc}")
        traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)


def success(msg: str) -> None:
    """Print success message (always shown unless silenced)."""
    if _log_level < LogLevel.SILENT:
        text = _format_message(msg, '', sys.stdout)
        if _supports_color(sys.stdout):
            text = f"{_COLORS['green']}{text}{_COLORS['reset']}"
        print(text)
