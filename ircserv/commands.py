"""Dispatch of parsed IRC commands to their handlers."""

from __future__ import annotations

from typing import Any, Callable

from .logger import get_logger
from .message import IRCMessage
from .parser import IRCParseError, parse_raw


class CommandHandler:
    """Runs commands received by ``server`` and collects the replies."""

    def __init__(self, server: Any) -> None:
        self.server = server
        self._handlers: dict[str, Callable[[IRCMessage], None]] = {
            "NICK": self._nick,
            "USER": self._user,
            "PING": self._ping,
        }

    def handle_command(self, msg: IRCMessage) -> dict[Any, str]:
        """Parse ``msg``, run its command and return the replies by recipient.

        Commands without a handler are relayed unchanged to every other client.
        """
        logger = get_logger()
        try:
            parse_raw(msg)
        except IRCParseError as exc:
            logger.debug(f"parse failed: {exc}")
        sender_fd = getattr(msg.sender, "fd", None)
        logger.debug(
            f"CommandHandler::handle_command from: {sender_fd}\n"
            "----------------------\n"
            f"{msg.raw}\n"
            f"prefix: {msg.prefix}\n"
            f"command: {msg.command}\n"
            f"param[0]: {msg.param(0)}\n"
            f"param[1]: {msg.param(1)}\n"
            "----------------------"
        )
        handler = self._handlers.get(msg.command, self.broadcast_raw)
        handler(msg)
        return msg.responses

    def broadcast_raw(self, msg: IRCMessage) -> dict[Any, str]:
        """Queue ``msg``'s raw line for every client except its sender."""
        for _, client in sorted(self.server.clients.items()):
            if not msg.is_from(client):
                msg.add_response(client, msg.raw + "\r\n")
        return msg.responses

    def _pass(self, msg: IRCMessage) -> None:
        if msg.sender.password == "":
            msg.sender.password = msg.param(0)

    def _nick(self, msg: IRCMessage) -> None:
        msg.sender.nickname = msg.param(0)

    def _user(self, msg: IRCMessage) -> None:
        # The hostname and servername parameters are ignored.
        msg.sender.nickname = msg.param(0)
        msg.sender.realname = msg.param(4)

    def _join(self, msg: IRCMessage) -> None:
        name = msg.param(0)
        if not self.server.channel_exists(name):
            self.server.add_channel(name, msg.sender)
        else:
            self.server.get_channel(name).add_member(msg.sender)

    def _ping(self, msg: IRCMessage) -> None:
        msg.add_response(msg.sender, "PONG" + msg.param(0) + "\r\n")