"""A single IRC message together with the replies it produces."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(eq=False)
class IRCMessage:
    """A raw line received from ``sender`` and its parsed parts."""

    sender: Any
    raw: str
    prefix: str = ""
    command: str = ""
    params: list[str] = field(default_factory=list)
    responses: dict[Any, str] = field(default_factory=dict)

    def param(self, index: int) -> str:
        """Return parameter ``index``.

        An empty string when there are no parameters; the first parameter
        when ``index`` is out of range.
        """
        if not self.params:
            return ""
        if index < 0 or index >= len(self.params):
            return self.params[0]
        return self.params[index]

    def add_param(self, param: str) -> None:
        """Append a parameter."""
        self.params.append(param)

    def is_from(self, client: Any) -> bool:
        """Return True if ``client`` sent this message."""
        return self.sender is client

    def add_response(self, client: Any, response: str) -> None:
        """Set the text to send to ``client``, replacing any earlier one."""
        self.responses[client] = response