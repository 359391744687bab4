"""The IRC server: listening sockets, client sessions and the event loop."""

from __future__ import annotations

import socket
from typing import Any

from .channel import Channel
from .client import Client
from .commands import CommandHandler
from .logger import get_logger
from .message import IRCMessage
from .poller import READ, WRITE, Poller
from .utils import ends_with, split

BUFFER_SIZE = 1024
MAX_MSG_SIZE = 510  # 512 including the CRLF terminator
MAX_BACKLOG = 100
MAX_PORT_DIGITS = 6
MAX_PASSWORD_LENGTH = 100
LINE_END = "\r\n"

_DIGITS = frozenset("0123456789")
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def is_valid_port(port: str | None) -> bool:
    """Return True for a decimal port number between 1 and 65535."""
    if port is None:
        return False
    if not set(port) <= _DIGITS:
        return False
    if len(port) > MAX_PORT_DIGITS:
        return False
    number = int(port) if port else 0
    return 1 <= number <= 65535


def is_valid_password(password: str | None) -> bool:
    """Return True for a password of 1 to 100 characters."""
    if password is None:
        return False
    return 1 <= len(password) <= MAX_PASSWORD_LENGTH


def _byte_length(text: str) -> int:
    return len(text.encode(_ENCODING, _ERRORS))


class IRCServer:
    """Accepts connections and relays IRC traffic between clients."""

    def __init__(self, port: str, password: str) -> None:
        if not is_valid_port(port):
            raise ValueError("invalid port number")
        if not is_valid_password(password):
            raise ValueError("invalid password")
        self.port = port
        self.password = password
        self.clients: dict[int, Client] = {}
        self.channels: dict[str, Channel] = {}
        self._listeners: dict[int, socket.socket] = {}
        self._poller = Poller()
        self._closed = False
        get_logger().debug(f"Port: {self.port}, Password: {self.password}")

    def __enter__(self) -> "IRCServer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def listening_fds(self) -> frozenset[int]:
        """Descriptors of the listening sockets."""
        return frozenset(self._listeners)

    def add_client(self, client: Client) -> bool:
        """Register ``client``; return False if its descriptor is already taken."""
        if client.fd in self.clients:
            return False
        self.clients[client.fd] = client
        get_logger().debug(
            f"New client connected: {client.fd}, client num: {len(self.clients)}"
        )
        return True

    def add_channel(self, name: str, client: Any) -> bool:
        """Create channel ``name`` owned by ``client``; False if it exists."""
        if name in self.channels:
            return False
        self.channels[name] = Channel(name, client)
        return True

    def channel_exists(self, name: str) -> bool:
        """Return True if a channel called ``name`` exists."""
        return name in self.channels

    def get_channel(self, name: str) -> Channel | None:
        """Return the channel called ``name``, or None."""
        return self.channels.get(name)

    def receive(self, client: Client, data: bytes | str) -> bool:
        """Process data read from ``client``.

        Complete lines are handled as commands and their replies sent; an
        unterminated tail is kept for the next read. Empty data means the
        peer closed the connection. Returns False if ``client`` was
        disconnected.
        """
        if not data:
            self.disconnect(client)
            return False
        if isinstance(data, bytes):
            data = data.decode(_ENCODING, _ERRORS)
        text = client.pop_receiving() + data
        lines = split(text, LINE_END)
        if not ends_with(text, LINE_END):
            client.push_receiving(lines.pop())

        logger = get_logger()
        handler = CommandHandler(self)
        for line in lines:
            size = _byte_length(line)
            if size > MAX_MSG_SIZE:
                logger.debug(f"Message too long: {size}")
                self.disconnect(client)
                return False
            responses = handler.handle_command(IRCMessage(client, line))
            self._send_responses(responses)
            if not self._is_connected(client):
                return False

        pending = _byte_length(client.receiving)
        if pending > MAX_MSG_SIZE:
            logger.debug(f"Message too long: {pending}")
            self.disconnect(client)
            return False
        return True

    def disconnect(self, client: Client) -> None:
        """Stop watching ``client``, forget it and close its socket."""
        fd = client.fd
        try:
            self._poller.remove(fd)
        except OSError:
            pass
        if self.clients.get(fd) is client:
            del self.clients[fd]
        client.close()
        get_logger().debug(
            f"Client disconnected: {fd}, client num: {len(self.clients)}"
        )

    def start_listen(self) -> None:
        """Bind and listen on every passive IPv6 (dual-stack) address for the port.

        Raises OSError if no socket could be set up.
        """
        logger = get_logger()
        try:
            infos = socket.getaddrinfo(
                None,
                self.port,
                socket.AF_INET6,
                socket.SOCK_STREAM,
                0,
                socket.AI_PASSIVE,
            )
        except socket.gaierror as exc:
            logger.error(f"getaddrinfo: {exc}")
            raise
        for family, socktype, proto, _, address in infos:
            try:
                sock = socket.socket(family, socktype, proto)
            except OSError:
                logger.error("socket failed")
                continue
            try:
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
                if family == socket.AF_INET6:
                    sock.setsockopt(socket.IPPROTO_IPV6, socket.IPV6_V6ONLY, 0)
                sock.bind(address)
                sock.listen(MAX_BACKLOG)
                sock.setblocking(False)
                self._poller.add(sock, READ)
            except OSError:
                sock.close()
                continue
            self._listeners[sock.fileno()] = sock
            logger.debug(
                f"Listening on port: {self.port}, fd: {sock.fileno()} ({family})..."
            )
        if not self._listeners:
            logger.error("socket/bind/listen failed")
            raise OSError("socket/bind/listen failed")

    def run(self) -> None:
        """Serve connections until the server is closed."""
        logger = get_logger()
        while not self._closed:
            self._write_log()
            for fd, events in self._poller.wait():
                if self._closed:
                    return
                if events & READ:
                    if fd in self._listeners:
                        self._accept(fd)
                    else:
                        self._handle_readable(fd)
                elif events & WRITE:
                    self._resend(fd)
                    if fd == logger.fd:
                        self._write_log()

    def close(self) -> None:
        """Close every listening socket and client connection."""
        if self._closed:
            return
        self._closed = True
        logger = get_logger()
        for fd, sock in self._listeners.items():
            logger.debug(f"Shutdown IRC Server: socket fd: {fd}")
            sock.close()
        self._listeners.clear()
        for client in list(self.clients.values()):
            client.close()
        self.clients.clear()
        self._poller.close()
        logger.debug("Server stopped.")

    def _is_connected(self, client: Client) -> bool:
        return self.clients.get(client.fd) is client

    def _send_responses(self, responses: dict[Any, str]) -> None:
        for recipient, text in list(responses.items()):
            try:
                self._poller.send_message(recipient, text)
            except OSError:
                self.disconnect(recipient)

    def _accept(self, listen_fd: int) -> None:
        listener = self._listeners[listen_fd]
        try:
            sock, _ = listener.accept()
        except OSError:
            get_logger().error("accept failed")
            return
        client = Client(sock.fileno(), sock)
        self.add_client(client)
        try:
            self._poller.add(sock, READ)
        except OSError:
            if self._is_connected(client):
                del self.clients[client.fd]
            client.close()

    def _handle_readable(self, fd: int) -> None:
        client = self.clients.get(fd)
        if client is None or client.sock is None:
            return
        try:
            data = client.sock.recv(BUFFER_SIZE)
        except BlockingIOError:
            return
        except OSError:
            self.disconnect(client)
            get_logger().error(f"recv failed. fd: {fd}")
            return
        self.receive(client, data)

    def _resend(self, fd: int) -> None:
        client = self.clients.get(fd)
        if client is None:
            return
        try:
            self._poller.flush_client(client)
        except OSError:
            self.disconnect(client)

    def _write_log(self) -> None:
        try:
            self._poller.write_log(get_logger())
        except OSError:
            pass