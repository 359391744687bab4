"""A connected client: its socket, identity and pending I/O buffers."""

from __future__ import annotations

import socket

from .logger import get_logger


class Client:
    """One client connection and the data queued to and from it."""

    MAX_SENDING_SIZE = 512 * 100

    def __init__(self, fd: int, sock: socket.socket | None = None) -> None:
        self.fd = fd
        self._sock = sock
        self.nickname = ""
        self.username = ""
        self.realname = ""
        self.password = ""
        self._receiving = ""
        self._sending = bytearray()
        if sock is not None:
            try:
                sock.setblocking(False)
            except OSError:
                get_logger().error(f"fcntl: set non-blocking flag failed: fd{fd}")
                sock.close()
        get_logger().debug(f"Socket created fd: {fd}")

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def sock(self) -> socket.socket | None:
        """The underlying socket, or None once closed or if there is none."""
        return self._sock

    @property
    def receiving(self) -> str:
        """A partly received line that still lacks its terminator."""
        return self._receiving

    @property
    def sending(self) -> bytes:
        """Bytes queued for sending."""
        return bytes(self._sending)

    def pop_receiving(self) -> str:
        """Return the partly received text and clear it."""
        data, self._receiving = self._receiving, ""
        return data

    def push_receiving(self, data: str) -> None:
        """Append to the partly received text."""
        self._receiving += data

    def push_sending(self, data: str | bytes) -> None:
        """Queue ``data`` for sending."""
        if isinstance(data, str):
            data = data.encode("utf-8", "surrogateescape")
        self._sending.extend(data)

    def consume_sending(self, size: int) -> int:
        """Drop ``size`` bytes already sent; return how many remain queued."""
        if size > len(self._sending):
            self._sending.clear()
        else:
            del self._sending[:size]
        return len(self._sending)

    def close(self) -> None:
        """Close the socket, if any."""
        if self._sock is None:
            return
        try:
            self._sock.close()
        except OSError:
            get_logger().error("close failed")
        get_logger().debug(f"Socket closed fd: {self.fd}")
        self._sock = None