"""An IRC channel and its member, operator and invitation lists."""

from __future__ import annotations

from typing import Any


class Channel:
    """A channel created by ``client``, who becomes its first member and operator."""

    def __init__(self, name: str, client: Any) -> None:
        self._name = name
        self.topic = ""
        self.password = ""
        self.invite_only = False
        self._members: set[Any] = {client}
        self._chanops: set[Any] = {client}
        self._invited: set[Any] = set()

    @property
    def name(self) -> str:
        """The channel name."""
        return self._name

    @property
    def members(self) -> frozenset:
        return frozenset(self._members)

    @property
    def chanops(self) -> frozenset:
        return frozenset(self._chanops)

    @property
    def invited(self) -> frozenset:
        return frozenset(self._invited)

    def is_member(self, client: Any) -> bool:
        return client in self._members

    def is_chanop(self, client: Any) -> bool:
        return client in self._chanops

    def is_invited(self, client: Any) -> bool:
        return client in self._invited

    def add_member(self, client: Any) -> bool:
        """Admit ``client`` if already a member, or invited to an open channel."""
        if client in self._members:
            return True
        if not self.invite_only and client in self._invited:
            self._members.add(client)
            return True
        return False

    def add_chanop(self, client: Any) -> bool:
        """Report whether ``client`` is a member who already holds operator status."""
        if client not in self._members:
            return False
        return client in self._chanops

    def add_invited(self, client: Any) -> bool:
        """Put ``client`` on the invitation list."""
        self._invited.add(client)
        return True

    def remove_member(self, client: Any) -> bool:
        """Return True only when ``client`` was not a member; members are kept."""
        return client not in self._members

    def remove_chanop(self, client: Any) -> bool:
        """Return True only when ``client`` was not an operator; operators are kept."""
        return client not in self._chanops

    def remove_invited(self, client: Any) -> bool:
        """Return True only when ``client`` was not invited; invitations are kept."""
        return client not in self._invited