"""Command-line entry point: ircserv <port> <password>."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from .logger import get_logger
from .server import IRCServer


def main(argv: Sequence[str] | None = None) -> int:
    """Start the server on the given port with the given password."""
    if argv is None:
        argv = sys.argv[1:]
    args = list(argv)
    if len(args) != 2:
        get_logger().info("Usage: ircserv <port> <password>")
        return 1
    port, password = args
    try:
        with IRCServer(port, password) as server:
            server.start_listen()
            server.run()
    except Exception as exc:
        print(f"Exception: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())