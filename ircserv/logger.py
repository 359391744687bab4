"""Buffered server log that is drained to standard error by the event loop."""

from __future__ import annotations

import atexit
import functools
import sys

STDERR_FILENO = 2

_DEBUG_OPEN = "\033[30mDEBUG: "
_DEBUG_CLOSE = "\033[0m"
_INFO_TAG = "\033[36mINFO\033[0m: "
_ERROR_TAG = "\033[31mERROR\033[0m: "


class IRCLogger:
    """Accumulates log text until it is written out and consumed."""

    def __init__(self, debug: bool = True, fd: int = STDERR_FILENO) -> None:
        self._log = ""
        self.fd = fd
        self.debug_enabled = debug

    @property
    def log(self) -> str:
        """Text waiting to be written."""
        return self._log

    def write(self, text: object) -> "IRCLogger":
        """Append ``text`` to the pending log."""
        self._log += str(text)
        return self

    def debug(self, message: object) -> None:
        """Record a debug line, if debug output is enabled."""
        if self.debug_enabled:
            self.write(f"{_DEBUG_OPEN}{message}{_DEBUG_CLOSE}\n")

    def info(self, message: object) -> None:
        """Record an informational line."""
        self.write(f"{_INFO_TAG}{message}\n")

    def error(self, message: object) -> None:
        """Record an error line."""
        self.write(f"{_ERROR_TAG}{message}\n")

    def consume(self, size: int) -> int:
        """Drop ``size`` characters already written; return how many remain."""
        if size > len(self._log):
            self._log = ""
            return 0
        self._log = self._log[size:]
        return len(self._log)


def _flush_at_exit(logger: IRCLogger) -> None:
    if logger.log:
        sys.stderr.write(logger.log)
        sys.stderr.flush()
        logger.consume(len(logger.log))


@functools.lru_cache(maxsize=None)
def get_logger() -> IRCLogger:
    """Return the process-wide logger."""
    logger = IRCLogger()
    atexit.register(_flush_at_exit, logger)
    return logger