"""Parsing of raw IRC lines into prefix, command and parameters."""

from __future__ import annotations

import string

from .message import IRCMessage

MAX_PARAMS = 15

_UPPER = frozenset(string.ascii_uppercase)
_DIGITS = frozenset(string.digits)


class IRCParseError(ValueError):
    """Raised when a raw line is not a valid IRC message."""


def valid_prefix(prefix: str) -> bool:
    """Return True if ``prefix`` is acceptable as a message prefix."""
    return bool(prefix)


def valid_command(command: str) -> bool:
    """Return True for an upper-case word or a three-digit numeric reply."""
    if not command:
        return False
    if set(command) <= _UPPER:
        return True
    return len(command) == 3 and set(command) <= _DIGITS


def _find_space(raw: str, pos: int | None) -> int | None:
    if pos is None:
        return None
    index = raw.find(" ", pos)
    return None if index == -1 else index


def _skip_spaces(raw: str, pos: int | None) -> int | None:
    if pos is None:
        return None
    rest = raw[pos:].lstrip(" ")
    return len(raw) - len(rest) if rest else None


def _extract_prefix(msg: IRCMessage, raw: str) -> int | None:
    if not raw.startswith(":"):
        return 0
    end = _find_space(raw, 0)
    prefix = raw[1:end]
    if not valid_prefix(prefix):
        raise IRCParseError(f"invalid prefix in {raw!r}")
    msg.prefix = prefix
    return _skip_spaces(raw, end)


def _extract_command(msg: IRCMessage, raw: str, pos: int | None) -> int | None:
    if pos is None:
        return None
    pos = _skip_spaces(raw, pos)
    if pos is None:
        raise IRCParseError(f"missing command in {raw!r}")
    end = _find_space(raw, pos)
    command = raw[pos:end]
    if not valid_command(command):
        raise IRCParseError(f"invalid command {command!r}")
    msg.command = command
    return _skip_spaces(raw, end)


def _extract_params(msg: IRCMessage, raw: str, pos: int | None) -> None:
    count = 0
    while pos is not None and count < MAX_PARAMS:
        if raw[pos] == ":":
            msg.add_param(raw[pos + 1:])
            return
        end = _find_space(raw, pos)
        msg.add_param(raw[pos:end])
        pos = _skip_spaces(raw, end)
        count += 1


def parse_raw(msg: IRCMessage) -> IRCMessage:
    """Fill ``msg``'s prefix, command and params from its raw text.

    Raises IRCParseError on a malformed line; parts parsed before the
    error stay set on ``msg``.
    """
    raw = msg.raw
    pos = _extract_prefix(msg, raw)
    pos = _extract_command(msg, raw, pos)
    _extract_params(msg, raw, pos)
    return msg