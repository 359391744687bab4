"""Readiness monitoring and buffered, non-blocking writes."""

from __future__ import annotations

import contextlib
import errno
import selectors
import sys
from typing import IO, Any

from .client import Client
from .logger import IRCLogger, get_logger

READ = selectors.EVENT_READ
WRITE = selectors.EVENT_WRITE
MAX_EVENTS = 10000


class SendBufferOverflow(OSError):
    """Raised when a client's queued output grows past its limit."""


class Poller:
    """Watches file objects for readiness and drains pending output."""

    def __init__(self) -> None:
        self._selector = selectors.DefaultSelector()
        self._pending_write: set[int] = set()

    def __enter__(self) -> "Poller":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def pending_write(self) -> frozenset[int]:
        """Descriptors that still have output waiting for writability."""
        return frozenset(self._pending_write)

    def add(self, fileobj: Any, events: int) -> None:
        """Start watching ``fileobj`` for ``events``."""
        try:
            self._selector.register(fileobj, events)
        except (KeyError, ValueError, OSError) as exc:
            get_logger().error(f"add monitoring failed. fd: {_fd_of(fileobj)}")
            raise OSError(f"cannot watch {_fd_of(fileobj)}: {exc}") from exc

    def modify(self, fileobj: Any, events: int) -> None:
        """Change the events watched for ``fileobj``."""
        try:
            self._selector.modify(fileobj, events)
        except (KeyError, ValueError, OSError) as exc:
            get_logger().error(f"modify monitoring failed. fd: {_fd_of(fileobj)}")
            raise OSError(f"cannot modify {_fd_of(fileobj)}: {exc}") from exc

    def remove(self, fileobj: Any) -> None:
        """Stop watching ``fileobj``."""
        try:
            self._selector.unregister(fileobj)
        except (KeyError, ValueError, OSError) as exc:
            get_logger().error(f"remove monitoring failed. fd: {_fd_of(fileobj)}")
            raise OSError(f"cannot unwatch {_fd_of(fileobj)}: {exc}") from exc

    def wait(self, timeout: float | None = None) -> list[tuple[int, int]]:
        """Block until something is ready; return ``(fd, events)`` pairs."""
        ready = self._selector.select(timeout)
        return [(key.fd, mask) for key, mask in ready[:MAX_EVENTS]]

    def send_message(self, client: Client, data: str | bytes) -> bool:
        """Queue ``data`` for ``client`` and send as much as possible.

        Returns True when everything queued went out. Raises
        SendBufferOverflow when the queue grows past the client's limit,
        and OSError when sending fails.
        """
        client.push_sending(data)
        size = len(client.sending)
        if size > Client.MAX_SENDING_SIZE:
            get_logger().error(f"Sending message size exceeds limit: {size}")
            raise SendBufferOverflow(
                errno.ENOBUFS, f"send queue of fd {client.fd} holds {size} bytes"
            )
        return self.flush_client(client)

    def flush_client(self, client: Client) -> bool:
        """Send queued output to ``client`` until done or the socket would block.

        Returns True when the queue is empty, False when output remains and
        the client is now watched for writability. Raises OSError on failure.
        """
        if not client.sending:
            return True
        sock = client.sock
        if sock is None:
            get_logger().error(f"send failed. fd: {client.fd}")
            raise OSError(errno.EBADF, f"fd {client.fd} has no open socket")
        while client.sending:
            try:
                sent = sock.send(client.sending)
            except BlockingIOError:
                self._watch(client.fd, READ | WRITE)
                self._pending_write.add(client.fd)
                return False
            except OSError:
                get_logger().error(f"send failed. fd: {client.fd}")
                raise
            client.consume_sending(sent)
        self._settle(client.fd)
        return True

    def write_log(self, logger: IRCLogger, stream: IO[str] | None = None) -> bool:
        """Write ``logger``'s pending text to ``stream`` (standard error by default).

        Returns True when the log is drained, False when the stream would
        block. Raises OSError on failure.
        """
        if stream is None:
            stream = sys.stderr
        while logger.log:
            text = logger.log
            try:
                written = stream.write(text)
                stream.flush()
            except BlockingIOError as exc:
                logger.consume(exc.characters_written)
                self._watch(logger.fd, READ | WRITE)
                self._pending_write.add(logger.fd)
                return False
            except OSError:
                logger.error("write failed")
                raise
            logger.consume(len(text) if written is None else written)
        self._settle(logger.fd)
        return True

    def close(self) -> None:
        """Release the underlying selector."""
        self._selector.close()

    def _watch(self, fd: int, events: int) -> None:
        with contextlib.suppress(OSError):
            self.modify(fd, events)

    def _settle(self, fd: int) -> None:
        if fd in self._pending_write:
            self._watch(fd, READ)
            self._pending_write.discard(fd)


def _fd_of(fileobj: Any) -> Any:
    if isinstance(fileobj, int):
        return fileobj
    try:
        return fileobj.fileno()
    except (AttributeError, OSError, ValueError):
        return fileobj