# ircserv

A small IRC server that runs in a single process. It listens on one port for
both IPv4 and IPv6 connections and handles every client through non-blocking
sockets in one event loop.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Running the server

```
ircserv <port> <password>
```

- `port` is a decimal number from 1 to 65535.
- `password` is between 1 and 100 characters long.

With the wrong number of arguments the command logs a usage line and exits
with status 1. An invalid port or password, or a failure to listen, is
reported as `Exception: <reason>` on standard error, again with status 1.

Example:

```
ircserv 6677 secret
```

You can then connect with an IRC client, or by hand with a line-oriented tool
that sends CRLF line endings, on port 6677 of the local machine.

## Behaviour

- Incoming data is split on CRLF; empty lines are dropped. An unterminated
  tail is held until the rest of it arrives. A client is disconnected if a
  line, or a held tail, is longer than 510 bytes.
- Each line is split into an optional `:prefix`, a command (upper-case
  letters, or exactly three digits) and up to 15 parameters. A parameter that
  begins with `:` takes the rest of the line.
- `NICK <name>` sets the sender's nickname.
- `USER` sets the sender's nickname from its first parameter and its real name
  from its fifth.
- `PING <token>` is answered to the sender with `PONG` followed directly by
  the token, then CRLF.
- Any other line, including one that does not parse, is passed unchanged
  (with CRLF added) to every other connected client.
- Output to a client is buffered and sent as the socket allows. A client whose
  unsent output grows past 51,200 bytes is disconnected.
- Log messages, debug messages included, are collected in memory and written
  to standard error between rounds of the event loop; anything left is written
  when the process exits.

## What it does not do

- The password given on the command line is checked for length only; clients
  are never asked for it and `PASS` is not handled.
- There is no registration handshake: no welcome replies and no numeric error
  replies are sent.
- `JOIN`, `PART`, `PRIVMSG`, `QUIT`, `KICK`, `INVITE`, `TOPIC` and `MODE`
  have no handlers; like every other unknown command they are relayed to the
  other clients as they are. Channels can be created through the library
  (`IRCServer.add_channel`) but not by clients.
- Nicknames are not checked for validity or uniqueness.

## Using it as a library

- `ircserv.parser.parse_raw(msg)` fills an `ircserv.message.IRCMessage` from
  its raw line and raises `ircserv.parser.IRCParseError` on a malformed one.
  `valid_command` and `valid_prefix` are the checks it uses.
- `ircserv.message.IRCMessage(sender, raw)` holds `prefix`, `command`,
  `params` and the `responses` to send, keyed by recipient. `param(index)`
  returns `""` when there are no parameters and the first parameter when the
  index is out of range.
- `ircserv.commands.CommandHandler(server)` runs a message through
  `handle_command(msg)` and returns its replies; `broadcast_raw(msg)` queues
  the raw line for every client of the server except the sender.
- `ircserv.server.IRCServer(port, password)` keeps `clients` (by descriptor)
  and `channels` (by name). `receive(client, data)` processes data read from a
  client exactly as the event loop does; `start_listen()`, `run()` and
  `close()` drive the network side, and the server is a context manager.
  `is_valid_port` and `is_valid_password` are the argument checks.
- `ircserv.client.Client(fd, sock)` holds a connection's identity and its
  receive and send buffers; `ircserv.channel.Channel(name, client)` holds a
  channel's members, operators and invitations.
- `ircserv.poller.Poller` watches sockets with `selectors` and drains queued
  output; it raises `SendBufferOverflow` when a client's queue is too large.
- `ircserv.logger.get_logger()` returns the shared `IRCLogger`.
- `ircserv.utils.split` and `ircserv.utils.ends_with` are the helpers used to
  frame incoming data.