"""Utility modules for constants, helpers, and console logging."""

from .constants import *
from .helpers import *
from .log import info, warn, error, debug, set_verbosity, set_use_emoji

__all__ = [
    'info',
    'warn',
    'error',
    'debug',
    'set_verbosity',
    'set_use_emoji',
]
