from ircserv.channel import Channel
from ircserv.client import Client


def _channel():
    owner = Client(10)
    return Channel("#room", owner), owner


def test_creator_is_member_and_chanop():
    channel, owner = _channel()
    assert channel.name == "#room"
    assert channel.members == {owner}
    assert channel.chanops == {owner}
    assert channel.invited == frozenset()
    assert channel.is_member(owner) is True
    assert channel.is_chanop(owner) is True
    assert channel.is_invited(owner) is False


def test_defaults():
    channel, _ = _channel()
    assert channel.topic == ""
    assert channel.password == ""
    assert channel.invite_only is False


def test_add_member_without_invitation_refused():
    channel, _ = _channel()
    guest = Client(11)
    assert channel.add_member(guest) is False
    assert channel.is_member(guest) is False


def test_add_member_existing_member_accepted():
    channel, owner = _channel()
    assert channel.add_member(owner) is True
    assert channel.members == {owner}


def test_add_member_invited_to_open_channel():
    channel, owner = _channel()
    guest = Client(11)
    assert channel.add_invited(guest) is True
    assert channel.is_invited(guest) is True
    assert channel.add_member(guest) is True
    assert channel.members == {owner, guest}


def test_add_member_invited_to_invite_only_channel_refused():
    channel, _ = _channel()
    guest = Client(11)
    channel.invite_only = True
    channel.add_invited(guest)
    assert channel.add_member(guest) is False
    assert channel.is_member(guest) is False


def test_add_chanop_non_member_refused():
    channel, _ = _channel()
    assert channel.add_chanop(Client(11)) is False


def test_add_chanop_reports_existing_operator():
    channel, owner = _channel()
    assert channel.add_chanop(owner) is True


def test_add_chanop_member_without_status_not_promoted():
    channel, _ = _channel()
    guest = Client(11)
    channel.add_invited(guest)
    channel.add_member(guest)
    assert channel.add_chanop(guest) is False
    assert channel.is_chanop(guest) is False


def test_remove_member_keeps_member():
    channel, owner = _channel()
    assert channel.remove_member(owner) is False
    assert channel.is_member(owner) is True
    assert channel.remove_member(Client(11)) is True


def test_remove_chanop_keeps_operator():
    channel, owner = _channel()
    assert channel.remove_chanop(owner) is False
    assert channel.is_chanop(owner) is True
    assert channel.remove_chanop(Client(11)) is True


def test_remove_invited_keeps_invitation():
    channel, _ = _channel()
    guest = Client(11)
    channel.add_invited(guest)
    assert channel.remove_invited(guest) is False
    assert channel.is_invited(guest) is True
    assert channel.remove_invited(Client(12)) is True


def test_topic_and_password_are_settable():
    channel, _ = _channel()
    channel.topic = "hello"
    channel.password = "secret"
    assert channel.topic == "hello"
    assert channel.password == "secret"


def test_member_view_is_a_snapshot():
    channel, owner = _channel()
    view = channel.members
    guest = Client(11)
    channel.add_invited(guest)
    channel.add_member(guest)
    assert view == {owner}
    assert channel.members == {owner, guest}