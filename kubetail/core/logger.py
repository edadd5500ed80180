"""Logging utilities

Diagnostics always go to stderr; stdout carries the preview and the merged
log feed.
"""

import sys
from typing import Optional, TextIO
from .colors import Colors


class Logger:
    verbose = False
    stream: Optional[TextIO] = None

    @classmethod
    def emit(cls, color: str, tag: str, msg: str):
        stream = cls.stream or sys.stderr
        try:
            print(f"{color}{tag}{Colors.RESET} {msg}", file=stream, flush=True)
        except (BrokenPipeError, ValueError):
            # stderr already gone while shutting down
            pass

    @classmethod
    def info(cls, msg: str):
        cls.emit(Colors.BLUE, "ℹ", msg)

    @classmethod
    def warn(cls, msg: str):
        cls.emit(Colors.YELLOW, "⚠", msg)

    @classmethod
    def error(cls, msg: str):
        cls.emit(Colors.RED, "✗", msg)

    @classmethod
    def verbose_log(cls, msg: str):
        if cls.verbose:
            cls.emit(Colors.CYAN, "[VERBOSE]", msg)

    @classmethod
    def debug(cls, msg: str):
        if cls.verbose:
            cls.emit(Colors.MAGENTA, "[DEBUG]", msg)
